"""
Timeline Application Layer
==========================
"""

from sitetrack.timeline.application.dto import ProjectRecord
from sitetrack.timeline.application.services import TimelineScheduler

__all__ = ["ProjectRecord", "TimelineScheduler"]
