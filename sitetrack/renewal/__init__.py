"""
Customer Success Renewal Module
===============================

Bounded context for contract renewal tracking:
- Effective end date (termination date, else activation + contract term)
- Exclusive renewal buckets (default 3 / 6 / 12 months)
- Per-contract renewal status and renewal recording
"""

__version__ = "1.0.0"
