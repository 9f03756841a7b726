"""
Ticket Domain Layer
===================

Domain layer for the pendencias (ticket) module.

Contains:
- Entities: Ticket, TicketComment
- Value Objects: OriginRule, OriginTable, OriginTableConfig
- Domain Services: DeadlineCalculator

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from sitetrack.tickets.domain.entities import Ticket, TicketComment
from sitetrack.tickets.domain.value_objects import (
    DeadlineCalculator,
    OriginRule,
    OriginTable,
    OriginTableConfig,
    DEFAULT_ORIGIN_RULES,
)

__all__ = [
    # Entities
    "Ticket",
    "TicketComment",
    # Value Objects & Services
    "DeadlineCalculator",
    "OriginRule",
    "OriginTable",
    "OriginTableConfig",
    "DEFAULT_ORIGIN_RULES",
]
