"""
Pendencias Module
=================

Bounded context for cross-department and client follow-up tickets.

Responsibilities:
- Open tickets with sector and SLA taken from the origin table
- Enforce the lifecycle state machine (terminal CLOSED / CANCELLED)
- Classify deadlines (on track, due soon, due today, overdue)
- Dashboard metrics: critical count, average resolution time
"""

__version__ = "1.0.0"
