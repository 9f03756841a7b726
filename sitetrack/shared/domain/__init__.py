"""
Shared Domain Helpers
=====================

Generic time arithmetic reused by the ticket and renewal contexts.
"""

from sitetrack.shared.domain.time_windows import (
    WindowPosition,
    WindowClassification,
    classify_window,
    bucket_items,
    boundary_instants,
    whole_days,
    same_calendar_day,
)

__all__ = [
    "WindowPosition",
    "WindowClassification",
    "classify_window",
    "bucket_items",
    "boundary_instants",
    "whole_days",
    "same_calendar_day",
]
