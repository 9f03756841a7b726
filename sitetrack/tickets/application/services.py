"""
Ticket Application Services
===========================

Application services orchestrate ticket lifecycle rules over immutable
snapshots.

Each mutation takes a Ticket and returns a new Ticket; persisting the
result is the caller's job. ``now`` is always supplied by the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Union
from uuid import uuid4

from sitetrack.config import DeadlineState, Settings, TicketStatus, get_settings
from sitetrack.core.exceptions import InvalidStateError, ValidationError
from sitetrack.shared.domain.time_windows import WindowPosition, classify_window, whole_days
from sitetrack.shared.infrastructure.logging import get_logger
from sitetrack.tickets.application.dto import TicketDashboardSummary, TicketOpenRequest
from sitetrack.tickets.domain import DeadlineCalculator, OriginTable, Ticket, TicketComment

logger = get_logger(__name__)

REQUIRED_IDENTIFICATION = ("service_order", "contract", "company_name")


# ========== Interfaces ==========

class IOriginTableProvider(ABC):
    """Interface for origin table access."""

    @abstractmethod
    def get_table(self) -> OriginTable:
        """Get the current origin table."""


class StaticOriginTableProvider(IOriginTableProvider):
    """Provider serving one fixed table."""

    def __init__(self, table: Optional[OriginTable] = None):
        self._table = table if table is not None else OriginTable.default()

    def get_table(self) -> OriginTable:
        return self._table


# ========== Application Services ==========

class TicketService:
    """
    Service for the pendencia lifecycle and deadline tracking.

    State machine (CLOSED and CANCELLED are terminal):
        OPEN -> IN_PROGRESS -> CLOSED
        OPEN -> CLOSED
        OPEN | IN_PROGRESS -> CANCELLED

    The origin table is read from the provider on every ``open``, so a
    reloaded table applies to the next ticket opened.
    """

    def __init__(
        self,
        table_provider: Optional[IOriginTableProvider] = None,
        settings: Optional[Settings] = None
    ):
        self._table_provider = table_provider or StaticOriginTableProvider()
        self._settings = settings or get_settings()

    @property
    def origin_table(self) -> OriginTable:
        return self._table_provider.get_table()

    # ========== Mutations ==========

    def open(self, request: TicketOpenRequest, now: datetime) -> Ticket:
        """
        Open a new ticket.

        Sector and SLA come from the origin table; ``due_at`` is fixed here
        and never recomputed.

        Raises:
            ValidationError: Missing identification or unknown origin
        """
        origin, rule = self._table_provider.get_table().resolve(request.origin)

        missing = [
            name for name in REQUIRED_IDENTIFICATION
            if not (getattr(request, name) or "").strip()
        ]
        if missing:
            logger.warning("Ticket rejected", extra={"missing_fields": missing})
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}",
                {"missing_fields": missing}
            )

        due_at = DeadlineCalculator.calculate_due_at(
            now, rule.sla_days, self._settings.default_due_days
        )

        ticket = Ticket(
            id=request.id or str(uuid4()),
            origin=origin,
            service_order=request.service_order.strip(),
            contract=request.contract.strip(),
            company_name=request.company_name.strip(),
            sector=rule.sector,
            status=TicketStatus.OPEN,
            sla_days=rule.sla_days,
            opened_at=now,
            due_at=due_at,
            customer_id=request.customer_id or None,
            ticket_number=request.ticket_number or None,
            description=request.description or None,
            created_by=request.created_by,
        )

        logger.info(
            "Ticket opened",
            extra={
                "ticket_id": ticket.id,
                "origin": origin.value,
                "sla_days": rule.sla_days,
                "due_at": due_at.isoformat(),
            }
        )
        return ticket

    def transition(
        self,
        ticket: Ticket,
        new_status: Union[TicketStatus, str],
        now: datetime
    ) -> Ticket:
        """
        Move a ticket to ``new_status``.

        Entering CLOSED stamps ``closed_at``. Any move out of a terminal
        state is refused.

        Raises:
            InvalidStateError: If the ticket is CLOSED or CANCELLED
            ValidationError: If ``new_status`` is not a known status
        """
        try:
            target = TicketStatus(new_status)
        except ValueError:
            raise ValidationError(f"Unknown ticket status '{new_status}'") from None

        if ticket.is_terminal:
            logger.warning(
                "Transition refused on terminal ticket",
                extra={"ticket_id": ticket.id, "status": ticket.status.value, "target": target.value}
            )
            raise InvalidStateError(f"move ticket to {target.value}", ticket.status.value)

        closed_at = now if target == TicketStatus.CLOSED else None
        updated = replace(ticket, status=target, closed_at=closed_at)

        logger.info(
            "Ticket status changed",
            extra={"ticket_id": ticket.id, "from": ticket.status.value, "to": target.value}
        )
        return updated

    def start(self, ticket: Ticket, now: datetime) -> Ticket:
        return self.transition(ticket, TicketStatus.IN_PROGRESS, now)

    def complete(self, ticket: Ticket, now: datetime) -> Ticket:
        return self.transition(ticket, TicketStatus.CLOSED, now)

    def cancel(self, ticket: Ticket, now: datetime) -> Ticket:
        return self.transition(ticket, TicketStatus.CANCELLED, now)

    def reassign_sector(self, ticket: Ticket, sector: str) -> Ticket:
        """
        Move an open ticket to another sector.

        Raises:
            InvalidStateError: If the ticket is terminal
            ValidationError: If ``sector`` is blank
        """
        if ticket.is_terminal:
            raise InvalidStateError("reassign sector", ticket.status.value)

        sector = (sector or "").strip()
        if not sector:
            raise ValidationError("Sector cannot be empty")

        logger.info(
            "Ticket sector reassigned",
            extra={"ticket_id": ticket.id, "from": ticket.sector, "to": sector}
        )
        return replace(ticket, sector=sector)

    def add_comment(self, ticket: Ticket, author: str, text: str, now: datetime) -> Ticket:
        """
        Append a comment to a ticket.

        Raises:
            ValidationError: If ``text`` is blank
        """
        if not (text or "").strip():
            raise ValidationError("Comment text cannot be empty")

        comment = TicketComment(
            id=str(uuid4()),
            author=author or "Usuário",
            text=text.strip(),
            created_at=now,
        )
        return replace(ticket, comments=ticket.comments + (comment,))

    # ========== Derived values ==========

    def classify(self, ticket: Ticket, now: datetime) -> Optional[DeadlineState]:
        """Deadline state of a ticket, None for terminal tickets."""
        if ticket.is_terminal:
            return None
        return DeadlineCalculator.classify(ticket.due_at, now, self._settings.due_soon_days)

    def days_remaining(self, ticket: Ticket, now: datetime) -> Optional[int]:
        """Whole days until the deadline, negative when late."""
        if ticket.is_terminal:
            return None
        return whole_days(ticket.due_at - now)

    def is_overdue(self, ticket: Ticket, now: datetime) -> bool:
        return not ticket.is_terminal and now > ticket.due_at

    def is_critical(self, ticket: Ticket, now: datetime) -> bool:
        """Non-terminal and due within the critical window, or already late."""
        if ticket.is_terminal:
            return False
        window = timedelta(hours=self._settings.critical_window_hours)
        position = classify_window(now, ticket.due_at, [window]).position
        return position in (WindowPosition.BEFORE_NOW, WindowPosition.IN_BUCKET)

    def critical_count(self, tickets: Iterable[Ticket], now: datetime) -> int:
        return sum(1 for t in tickets if self.is_critical(t, now))

    def overdue_count(self, tickets: Iterable[Ticket], now: datetime) -> int:
        return sum(1 for t in tickets if self.is_overdue(t, now))

    @staticmethod
    def average_resolution_days(tickets: Iterable[Ticket]) -> Optional[float]:
        """
        Mean whole days from opening to closing over CLOSED tickets.

        Returns:
            None when no ticket is closed
        """
        durations = [
            whole_days(t.closed_at - t.opened_at)
            for t in tickets
            if t.status == TicketStatus.CLOSED and t.closed_at is not None
        ]
        if not durations:
            return None
        return sum(durations) / len(durations)

    def summarize(self, tickets: Iterable[Ticket], now: datetime) -> TicketDashboardSummary:
        """Dashboard counters for a set of tickets."""
        tickets = list(tickets)
        by_status = {status: 0 for status in TicketStatus}
        for ticket in tickets:
            by_status[ticket.status] += 1

        return TicketDashboardSummary(
            total=len(tickets),
            open=by_status[TicketStatus.OPEN],
            in_progress=by_status[TicketStatus.IN_PROGRESS],
            closed=by_status[TicketStatus.CLOSED],
            cancelled=by_status[TicketStatus.CANCELLED],
            overdue=self.overdue_count(tickets, now),
            critical=self.critical_count(tickets, now),
            average_resolution_days=self.average_resolution_days(tickets),
        )

    # ========== Listing helpers ==========

    @staticmethod
    def filter_tickets(
        tickets: Iterable[Ticket],
        search: Optional[str] = None,
        status: Optional[Union[TicketStatus, str]] = None,
        sector: Optional[str] = None
    ) -> List[Ticket]:
        """
        Filter tickets the way the pendencias list does.

        ``search`` matches service order, company name, contract and ticket
        number case-insensitively.
        """
        term = (search or "").strip().lower()
        wanted_status = TicketStatus(status) if status else None

        result = []
        for ticket in tickets:
            if term:
                haystack = (
                    ticket.service_order,
                    ticket.company_name,
                    ticket.contract,
                    ticket.ticket_number or "",
                )
                if not any(term in value.lower() for value in haystack):
                    continue
            if wanted_status is not None and ticket.status != wanted_status:
                continue
            if sector and ticket.sector != sector:
                continue
            result.append(ticket)
        return result

    @staticmethod
    def sectors(tickets: Iterable[Ticket]) -> List[str]:
        """Distinct sectors in first-seen order."""
        return list(dict.fromkeys(t.sector for t in tickets))
