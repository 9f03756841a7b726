"""
Timeline Application DTOs
=========================
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from sitetrack.timeline.domain import Project


class ProjectRecord(BaseModel):
    """Persisted project row, reduced to the timeline fields."""
    id: str
    created_at: datetime
    implantation_started_at: Optional[datetime] = None
    contract_signed_at: Optional[datetime] = Field(
        None, description="Stage 1 timestamp from the project's stage set"
    )
    delivery_deadline: Optional[datetime] = None

    def to_domain(self) -> Project:
        """Convert to domain entity."""
        return Project(**self.model_dump())
