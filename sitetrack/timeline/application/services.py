"""
Timeline Scheduler
==================

Derives elapsed/remaining time of a project from whatever window it is
given. Editing the window is an operator action outside this engine.
"""

from datetime import datetime, timedelta
from typing import Optional

from sitetrack.config import Settings, get_settings
from sitetrack.shared.domain.time_windows import whole_days
from sitetrack.timeline.domain import Project, ProjectWindow, TimelineStatus


class TimelineScheduler:
    """Service computing schedule status for project windows."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def resolve_window(self, project: Project) -> ProjectWindow:
        """
        Resolve the start and deadline of a project.

        Start: implantation start, else contract signature, else creation.
        Deadline: explicit delivery date, else start + default delivery days.
        """
        start = (
            project.implantation_started_at
            or project.contract_signed_at
            or project.created_at
        )
        deadline = project.delivery_deadline or start + timedelta(
            days=self._settings.default_delivery_days
        )
        return ProjectWindow(start=start, deadline=deadline)

    def status(self, project: Project, now: datetime) -> TimelineStatus:
        """Schedule status at ``now``."""
        return self.status_for_window(self.resolve_window(project), now)

    @staticmethod
    def status_for_window(window: ProjectWindow, now: datetime) -> TimelineStatus:
        """
        Schedule status for an explicit window.

        ``progress_ratio`` is clamped to [0, 1]; a window shorter than one
        whole day reports a ratio of 1.
        """
        start, deadline = window.start, window.deadline
        total_days = whole_days(deadline - start)

        if total_days == 0:
            ratio = 1.0
        else:
            ratio = (now - start) / (deadline - start)
            ratio = min(max(ratio, 0.0), 1.0)

        return TimelineStatus(
            start=start,
            deadline=deadline,
            elapsed_days=whole_days(now - start),
            total_days=total_days,
            remaining_days=whole_days(deadline - now),
            progress_ratio=ratio,
            overdue=now > deadline,
        )
