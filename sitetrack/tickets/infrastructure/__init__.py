"""
Ticket Infrastructure Layer
===========================

- External: origin table loading and hot reload
"""

from sitetrack.tickets.infrastructure.external import (
    OriginTableManager,
    OriginTableFileHandler,
)

__all__ = [
    "OriginTableManager",
    "OriginTableFileHandler",
]
