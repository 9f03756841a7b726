"""
Renewal Domain Entities
=======================

Customer contracts and their renewal buckets.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from sitetrack.config import RenewalState


@dataclass(frozen=True)
class CustomerContract:
    """Customer portfolio entry with the dates renewal tracking needs."""
    id: str
    contract: str
    company_name: str
    activation_date: Optional[date] = None
    termination_date: Optional[date] = None
    branch: Optional[str] = None
    units: Optional[int] = None


@dataclass(frozen=True)
class RenewalBucket:
    """Contracts ending in ``[lower_months, upper_months)`` from now."""
    lower_months: int
    upper_months: int
    contracts: Tuple[CustomerContract, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.contracts)


@dataclass(frozen=True)
class RenewalStatus:
    """Renewal badge data for one contract."""
    end_date: Optional[date]
    days_remaining: Optional[int]
    state: RenewalState
