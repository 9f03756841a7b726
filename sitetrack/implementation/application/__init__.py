"""
Implementation Application Layer
================================

Contains:
- Services: StageService (sub-item updates, interactions, progress)
- DTOs: StageSetRecord and report read models
"""

from sitetrack.implementation.application.dto import (
    ChecklistItem,
    InteractionRecord,
    StageProgress,
    StageSetRecord,
)
from sitetrack.implementation.application.services import StageService

__all__ = [
    "ChecklistItem",
    "InteractionRecord",
    "StageProgress",
    "StageSetRecord",
    "StageService",
]
