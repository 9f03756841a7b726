"""
Ticket Application DTOs
=======================

Data Transfer Objects between the ticket engine and the host application.

These Pydantic models parse persisted rows into domain snapshots and back.
Business validation (required identification, known origin) happens in the
service so that it raises the domain ``ValidationError``.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from sitetrack.config import TicketOrigin, TicketStatus
from sitetrack.tickets.domain import Ticket, TicketComment


# ========== Type Aliases for Literals ==========
TicketStatusStr = Literal["ABERTO", "EM_ANDAMENTO", "CONCLUIDO", "CANCELADO"]
DeadlineStateStr = Literal["on_track", "due_soon", "due_today", "overdue"]


# ========== Request DTOs ==========

class TicketOpenRequest(BaseModel):
    """Fields supplied by the caller when opening a ticket."""
    origin: Optional[str] = Field(None, description="Origin code, e.g. DEPT_COMPRAS")
    service_order: Optional[str] = Field(None, description="Service order (OS) number")
    contract: Optional[str] = Field(None, description="Contract reference")
    company_name: Optional[str] = Field(None, description="Customer company name")
    customer_id: Optional[str] = None
    ticket_number: Optional[str] = None
    description: Optional[str] = Field(None, description="Free text describing the pendencia")
    created_by: Optional[str] = None
    id: Optional[str] = Field(None, description="Preassigned id, generated when absent")


# ========== Record DTOs ==========

class TicketCommentRecord(BaseModel):
    id: str
    author: str
    text: str
    created_at: datetime


class TicketRecord(BaseModel):
    """
    DTO representing a persisted ticket row.

    Bridges the storage schema and the domain entity.
    """
    id: str
    origin: TicketOrigin
    service_order: str
    contract: str
    company_name: str
    sector: str
    status: TicketStatusStr = "ABERTO"
    sla_days: int = Field(..., ge=0)
    opened_at: datetime
    due_at: datetime
    closed_at: Optional[datetime] = None
    customer_id: Optional[str] = None
    ticket_number: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
    comments: List[TicketCommentRecord] = Field(default_factory=list)

    def to_domain(self) -> Ticket:
        """Convert to domain entity."""
        return Ticket(
            id=self.id,
            origin=self.origin,
            service_order=self.service_order,
            contract=self.contract,
            company_name=self.company_name,
            sector=self.sector,
            status=TicketStatus(self.status),
            sla_days=self.sla_days,
            opened_at=self.opened_at,
            due_at=self.due_at,
            closed_at=self.closed_at,
            customer_id=self.customer_id,
            ticket_number=self.ticket_number,
            description=self.description,
            created_by=self.created_by,
            comments=tuple(
                TicketComment(id=c.id, author=c.author, text=c.text, created_at=c.created_at)
                for c in self.comments
            ),
        )

    @classmethod
    def from_domain(cls, ticket: Ticket) -> "TicketRecord":
        """Create from domain entity."""
        return cls(
            id=ticket.id,
            origin=ticket.origin,
            service_order=ticket.service_order,
            contract=ticket.contract,
            company_name=ticket.company_name,
            sector=ticket.sector,
            status=ticket.status.value,
            sla_days=ticket.sla_days,
            opened_at=ticket.opened_at,
            due_at=ticket.due_at,
            closed_at=ticket.closed_at,
            customer_id=ticket.customer_id,
            ticket_number=ticket.ticket_number,
            description=ticket.description,
            created_by=ticket.created_by,
            comments=[
                TicketCommentRecord(id=c.id, author=c.author, text=c.text, created_at=c.created_at)
                for c in ticket.comments
            ],
        )


# ========== Response DTOs ==========

class TicketDashboardSummary(BaseModel):
    """Summary statistics for the pendencias dashboard."""
    total: int
    open: int
    in_progress: int
    closed: int
    cancelled: int
    overdue: int
    critical: int = Field(..., description="Non-terminal tickets due within the critical window or late")
    average_resolution_days: Optional[float] = Field(
        None, description="Mean whole days from opening to closing, None without closed tickets"
    )
