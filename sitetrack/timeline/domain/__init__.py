"""
Timeline Domain Layer
=====================

Entities: Project, ProjectWindow, TimelineStatus
"""

from sitetrack.timeline.domain.entities import Project, ProjectWindow, TimelineStatus

__all__ = ["Project", "ProjectWindow", "TimelineStatus"]
