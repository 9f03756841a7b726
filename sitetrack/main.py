"""
Sitetrack - Engine Bootstrap
============================

Composition root for the host application.

Modules:
- Tickets: pendencia lifecycle and SLA deadlines
- Implementation: 10-stage checklist progression
- Timeline: implementation schedule status
- Renewal: contract expiry windows

STARTUP:
1. Setup structured logging
2. Load the origin table (and optionally watch it)
3. Build the engines; the ticket engine reads the live table on every open

SHUTDOWN:
1. Stop watching the origin table
"""

from dataclasses import dataclass
from typing import Optional

from sitetrack.config import Settings, get_settings
from sitetrack.implementation.application import StageService
from sitetrack.renewal.application import RenewalService
from sitetrack.shared.infrastructure.logging import get_logger, setup_logging
from sitetrack.tickets.application import TicketService
from sitetrack.tickets.infrastructure import OriginTableManager
from sitetrack.timeline.application import TimelineScheduler

logger = get_logger(__name__)


@dataclass
class Engines:
    """The engines a host application works with."""
    settings: Settings
    origin_tables: OriginTableManager
    tickets: TicketService
    stages: StageService
    timeline: TimelineScheduler
    renewal: RenewalService

    def shutdown(self) -> None:
        self.origin_tables.stop_watching()
        logger.info("Engines stopped")


def create_engines(
    settings: Optional[Settings] = None,
    configure_logging: bool = True
) -> Engines:
    """
    Build every engine from settings.

    Args:
        settings: Settings to use, defaults to the cached environment settings
        configure_logging: Install the JSON log handler on the root logger
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(level=settings.log_level, environment=settings.environment)

    manager = OriginTableManager()
    table = manager.load(settings.origin_table_path)
    if settings.watch_origin_table:
        manager.start_watching()

    engines = Engines(
        settings=settings,
        origin_tables=manager,
        tickets=TicketService(manager, settings),
        stages=StageService(settings),
        timeline=TimelineScheduler(settings),
        renewal=RenewalService(settings),
    )

    logger.info(
        "Engines started",
        extra={
            "app_name": settings.app_name,
            "environment": settings.environment,
            "origins": len(table),
        }
    )
    return engines
