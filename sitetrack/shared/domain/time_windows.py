"""
Time Window Classifier
======================

Buckets a target date into ordered, mutually exclusive ranges relative to
``now``.

Given boundaries ``b1 < b2 < ... < bn`` (with an implicit ``b0 = 0``), a
target falls into bucket ``i`` when ``now + b(i-1) <= target < now + b(i)``.
Targets before ``now`` and at or past ``now + bn`` are excluded. Boundaries
may be ``timedelta`` (fixed length) or ``relativedelta`` (calendar months),
and are always applied to ``now`` so month lengths are honoured.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar, Union

from dateutil.relativedelta import relativedelta

from sitetrack.core.exceptions import ValidationError

Offset = Union[timedelta, relativedelta]
T = TypeVar("T")

ONE_DAY = timedelta(days=1)


class WindowPosition(str, Enum):
    """Where a target sits relative to the bucket boundaries."""
    BEFORE_NOW = "before_now"
    IN_BUCKET = "in_bucket"
    BEYOND_LAST = "beyond_last"


@dataclass(frozen=True)
class WindowClassification:
    """Result of classifying one target date."""
    position: WindowPosition
    bucket: Optional[int] = None  # 0-based, set only when IN_BUCKET

    @property
    def is_excluded(self) -> bool:
        return self.position != WindowPosition.IN_BUCKET


BEFORE_NOW = WindowClassification(WindowPosition.BEFORE_NOW)
BEYOND_LAST = WindowClassification(WindowPosition.BEYOND_LAST)


def boundary_instants(now: datetime, boundaries: Sequence[Offset]) -> List[datetime]:
    """
    Resolve boundary offsets to absolute instants.

    Raises:
        ValidationError: If boundaries are empty or not strictly increasing
    """
    if not boundaries:
        raise ValidationError("At least one window boundary is required")

    instants = []
    previous = now
    for offset in boundaries:
        instant = now + offset
        if instant <= previous:
            raise ValidationError(
                "Window boundaries must be positive and strictly increasing",
                {"boundaries": [str(b) for b in boundaries]}
            )
        instants.append(instant)
        previous = instant
    return instants


def classify_window(
    now: datetime,
    target: datetime,
    boundaries: Sequence[Offset]
) -> WindowClassification:
    """
    Classify ``target`` into exactly one window.

    Args:
        now: Reference instant supplied by the caller
        target: Date to classify
        boundaries: Strictly increasing offsets from ``now``

    Returns:
        WindowClassification: BEFORE_NOW, IN_BUCKET with its index, or BEYOND_LAST
    """
    instants = boundary_instants(now, boundaries)

    if target < now:
        return BEFORE_NOW

    for index, upper in enumerate(instants):
        if target < upper:
            return WindowClassification(WindowPosition.IN_BUCKET, index)

    return BEYOND_LAST


def bucket_items(
    now: datetime,
    items: Iterable[T],
    key: Callable[[T], Optional[datetime]],
    boundaries: Sequence[Offset]
) -> List[List[T]]:
    """
    Group items into one list per bucket, preserving input order.

    Items whose key is None or that fall outside every bucket are dropped.
    """
    buckets: List[List[T]] = [[] for _ in boundaries]
    for item in items:
        target = key(item)
        if target is None:
            continue
        result = classify_window(now, target, boundaries)
        if not result.is_excluded:
            buckets[result.bucket].append(item)
    return buckets


def whole_days(delta: timedelta) -> int:
    """Number of complete days in ``delta``, truncated toward zero."""
    return int(delta / ONE_DAY)


def same_calendar_day(a: datetime, b: datetime) -> bool:
    """True when both instants fall on the same calendar day in ``a``'s timezone."""
    if a.tzinfo is not None and b.tzinfo is not None:
        b = b.astimezone(a.tzinfo)
    return a.date() == b.date()
