"""
Implementation Application DTOs
===============================

Pydantic models converting persisted stage rows to StageSet snapshots and
back, plus the read models the engine hands to reports.
"""

from dataclasses import asdict
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from sitetrack.implementation.domain import Interaction, StageSet


class InteractionRecord(BaseModel):
    id: str
    created_at: datetime
    author: str
    text: str


class StageSetRecord(BaseModel):
    """Persisted stage row. Field names match StageSet one to one."""
    project_id: str

    contract_signed: bool = False
    contract_signed_at: Optional[datetime] = None
    contract_registered: bool = False
    contract_registered_at: Optional[datetime] = None

    welcome_call: bool = False
    welcome_call_at: Optional[datetime] = None
    system_registration: bool = False
    system_registration_at: Optional[datetime] = None
    resident_app_install: bool = False
    resident_app_install_at: Optional[datetime] = None
    tag_audit: bool = False
    tag_audit_at: Optional[datetime] = None

    project_check: bool = False
    project_check_at: Optional[datetime] = None
    visit_scheduled: bool = False
    visit_scheduled_at: Optional[datetime] = None
    visit_scheduled_for: Optional[date] = None
    visit_report: bool = False
    visit_report_at: Optional[datetime] = None

    installer_report: bool = False
    installer_report_at: Optional[datetime] = None
    glazier_report: bool = False
    glazier_report_at: Optional[datetime] = None
    locksmith_report: bool = False
    locksmith_report_at: Optional[datetime] = None
    supervisor_report: bool = False
    supervisor_report_at: Optional[datetime] = None

    programming_check: bool = False
    programming_check_at: Optional[datetime] = None
    financial_activation_confirmed: bool = False
    financial_activation_confirmed_at: Optional[datetime] = None

    commercial_visit_scheduled: bool = False
    commercial_visit_scheduled_at: Optional[datetime] = None
    commercial_visit_scheduled_for: Optional[date] = None
    commercial_visit_report: bool = False
    commercial_visit_report_at: Optional[datetime] = None
    commercial_visit_notes: Optional[str] = None

    assisted_op_start: Optional[datetime] = None
    assisted_op_end: Optional[datetime] = None
    interactions: List[InteractionRecord] = Field(default_factory=list)

    completed: bool = False
    completed_at: Optional[datetime] = None
    maintenance_notes: Optional[str] = None

    satisfaction_survey_done: bool = False
    satisfaction_survey_done_at: Optional[datetime] = None
    satisfaction_score: Optional[int] = Field(None, ge=1, le=10)
    would_recommend: Optional[bool] = None
    survey_comment: Optional[str] = None
    survey_positives: Optional[str] = None
    survey_negatives: Optional[str] = None

    def to_domain(self) -> StageSet:
        """Convert to domain entity."""
        data = self.model_dump(exclude={"interactions"})
        return StageSet(
            **data,
            interactions=tuple(Interaction(**i.model_dump()) for i in self.interactions),
        )

    @classmethod
    def from_domain(cls, stage_set: StageSet) -> "StageSetRecord":
        """Create from domain entity."""
        return cls(**asdict(stage_set))


class ChecklistItem(BaseModel):
    """One row of the implementation report."""
    code: str
    field_name: str
    stage: int
    title: str
    done: bool
    done_at: Optional[datetime] = None


class StageProgress(BaseModel):
    """Progress summary of a stage set."""
    completed_stages: int = Field(..., description="Completed stages among 1-9")
    total_stages: int = 9
    progress_ratio: float = Field(..., ge=0.0, le=1.0)
    current_stage: int
    survey_done: bool
