"""
Ticket Application Layer
========================

Contains:
- Services: lifecycle transitions and deadline metrics
- DTOs: record conversion for the host application

This layer depends on the domain layer only.
"""

from sitetrack.tickets.application.dto import (
    TicketOpenRequest,
    TicketRecord,
    TicketCommentRecord,
    TicketDashboardSummary,
)
from sitetrack.tickets.application.services import (
    IOriginTableProvider,
    StaticOriginTableProvider,
    TicketService,
)

__all__ = [
    # DTOs
    "TicketOpenRequest",
    "TicketRecord",
    "TicketCommentRecord",
    "TicketDashboardSummary",
    # Services
    "IOriginTableProvider",
    "StaticOriginTableProvider",
    "TicketService",
]
