"""Shared fixtures for the engine tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest

from sitetrack.config import Settings, TicketOrigin, TicketStatus
from sitetrack.implementation.application import StageService
from sitetrack.implementation.domain import StageSet
from sitetrack.renewal.application import RenewalService
from sitetrack.tickets.application import TicketOpenRequest, TicketService
from sitetrack.tickets.domain import Ticket
from sitetrack.timeline.application import TimelineScheduler


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_ticket(
    opened_at: datetime,
    due_at: datetime,
    status: TicketStatus = TicketStatus.OPEN,
    closed_at: Optional[datetime] = None,
    **overrides,
) -> Ticket:
    """Build a ticket snapshot directly, bypassing the service."""
    fields = dict(
        id="t-1",
        origin=TicketOrigin.DEPT_COMPRAS,
        service_order="OS-100",
        contract="CT-001",
        company_name="Condomínio Jardim das Flores",
        sector="Compras",
        status=status,
        sla_days=10,
        opened_at=opened_at,
        due_at=due_at,
        closed_at=closed_at,
    )
    fields.update(overrides)
    return Ticket(**fields)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def ticket_service(settings) -> TicketService:
    return TicketService(settings=settings)


@pytest.fixture
def stage_service(settings) -> StageService:
    return StageService(settings)


@pytest.fixture
def scheduler(settings) -> TimelineScheduler:
    return TimelineScheduler(settings)


@pytest.fixture
def renewal_service(settings) -> RenewalService:
    return RenewalService(settings)


@pytest.fixture
def open_request() -> TicketOpenRequest:
    return TicketOpenRequest(
        origin="DEPT_COMPRAS",
        service_order="OS-100",
        contract="CT-001",
        company_name="Condomínio Jardim das Flores",
        description="Comprar 4 fechaduras eletromagnéticas",
        created_by="Ana",
    )


@pytest.fixture
def empty_stage_set() -> StageSet:
    return StageSet(project_id="p-1")
