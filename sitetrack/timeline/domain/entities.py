"""
Timeline Domain Entities
========================

A project's implementation window and the derived schedule status.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Project:
    """
    Fields of a project record that drive its implementation window.

    ``contract_signed_at`` comes from the project's stage set (stage 1).
    """
    id: str
    created_at: datetime
    implantation_started_at: Optional[datetime] = None
    contract_signed_at: Optional[datetime] = None
    delivery_deadline: Optional[datetime] = None


@dataclass(frozen=True)
class ProjectWindow:
    """Resolved start and deadline of an implementation."""
    start: datetime
    deadline: datetime


@dataclass(frozen=True)
class TimelineStatus:
    """Elapsed and remaining time against a project window."""
    start: datetime
    deadline: datetime
    elapsed_days: int
    total_days: int
    remaining_days: int
    progress_ratio: float
    overdue: bool

    @property
    def progress_percentage(self) -> float:
        return self.progress_ratio * 100
