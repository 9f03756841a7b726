"""
Shared Kernel Module
====================

Shared infrastructure and generic domain helpers used across all bounded
contexts (tickets, implementation, timeline, renewal).

Architecture Pattern: Modular Monolith
- Each module is a bounded context
- Shared kernel contains only generic infrastructure and time arithmetic
- Business rules live within each module

DO NOT add ticket, stage or contract rules to the shared kernel.
"""

__version__ = "1.0.0"
