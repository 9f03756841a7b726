"""
Ticket Domain Entities
======================

Pure Python domain entities for cross-department and client pendencias.

Snapshots are immutable: every mutation in the application layer returns a
new Ticket built with ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from sitetrack.config import TicketOrigin, TicketStatus


@dataclass(frozen=True)
class TicketComment:
    """A note appended to a ticket. Never edited or removed."""
    id: str
    author: str
    text: str
    created_at: datetime


@dataclass(frozen=True)
class Ticket:
    """
    Ticket entity representing a pendencia.

    ``due_at`` is computed once when the ticket is opened and never
    recomputed; ``closed_at`` is present exactly when the status is CLOSED.
    """

    # Identity
    id: str
    origin: TicketOrigin
    service_order: str
    contract: str
    company_name: str

    # Routing and SLA
    sector: str
    status: TicketStatus
    sla_days: int

    # Timestamps
    opened_at: datetime
    due_at: datetime
    closed_at: Optional[datetime] = None

    # Optional identification
    customer_id: Optional[str] = None
    ticket_number: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None

    comments: Tuple[TicketComment, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate ticket on initialization."""
        if self.due_at < self.opened_at:
            raise ValueError("due_at cannot be before opened_at")

        if (self.closed_at is not None) != (self.status == TicketStatus.CLOSED):
            raise ValueError("closed_at must be set if and only if status is CLOSED")

        if self.closed_at is not None and self.closed_at < self.opened_at:
            raise ValueError("closed_at cannot be before opened_at")

    @property
    def is_terminal(self) -> bool:
        """Closed and cancelled tickets accept no further changes."""
        return self.status.is_terminal

    @property
    def is_client_origin(self) -> bool:
        return self.origin.is_client

    @property
    def kind_label(self) -> str:
        """Human label for the origin family."""
        return "Pendência de Cliente" if self.is_client_origin else "Pendência de Departamento"
