"""
Implementation Domain Entities
==============================

The per-project stage set of the field implementation workflow.

Every boolean sub-item has a paired ``<name>_at`` timestamp recording when
it first became true. Timestamps are evidence, not live state: unchecking
an item keeps its stamp.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Interaction:
    """An assisted-operation contact with the customer. Append-only."""
    id: str
    created_at: datetime
    author: str
    text: str


@dataclass(frozen=True)
class StageSet:
    """
    Implementation checklist of one project.

    Mutate only through StageService so a sub-item and its timestamp are
    always written together.
    """

    project_id: str

    # Stage 1-2
    contract_signed: bool = False
    contract_signed_at: Optional[datetime] = None
    contract_registered: bool = False
    contract_registered_at: Optional[datetime] = None

    # Stage 3: onboarding
    welcome_call: bool = False
    welcome_call_at: Optional[datetime] = None
    system_registration: bool = False
    system_registration_at: Optional[datetime] = None
    resident_app_install: bool = False
    resident_app_install_at: Optional[datetime] = None
    tag_audit: bool = False
    tag_audit_at: Optional[datetime] = None

    # Stage 4: implementation visit
    project_check: bool = False
    project_check_at: Optional[datetime] = None
    visit_scheduled: bool = False
    visit_scheduled_at: Optional[datetime] = None
    visit_scheduled_for: Optional[date] = None
    visit_report: bool = False
    visit_report_at: Optional[datetime] = None

    # Stage 5: field reports
    installer_report: bool = False
    installer_report_at: Optional[datetime] = None
    glazier_report: bool = False
    glazier_report_at: Optional[datetime] = None
    locksmith_report: bool = False
    locksmith_report_at: Optional[datetime] = None
    supervisor_report: bool = False
    supervisor_report_at: Optional[datetime] = None

    # Stage 6: programming and financial activation
    programming_check: bool = False
    programming_check_at: Optional[datetime] = None
    financial_activation_confirmed: bool = False
    financial_activation_confirmed_at: Optional[datetime] = None

    # Stage 7: commercial visit
    commercial_visit_scheduled: bool = False
    commercial_visit_scheduled_at: Optional[datetime] = None
    commercial_visit_scheduled_for: Optional[date] = None
    commercial_visit_report: bool = False
    commercial_visit_report_at: Optional[datetime] = None
    commercial_visit_notes: Optional[str] = None

    # Stage 8: assisted operation
    assisted_op_start: Optional[datetime] = None
    assisted_op_end: Optional[datetime] = None
    interactions: Tuple[Interaction, ...] = field(default_factory=tuple)

    # Stage 9
    completed: bool = False
    completed_at: Optional[datetime] = None
    maintenance_notes: Optional[str] = None

    # Stage 10: satisfaction survey
    satisfaction_survey_done: bool = False
    satisfaction_survey_done_at: Optional[datetime] = None
    satisfaction_score: Optional[int] = None
    would_recommend: Optional[bool] = None
    survey_comment: Optional[str] = None
    survey_positives: Optional[str] = None
    survey_negatives: Optional[str] = None

    def __post_init__(self):
        if self.satisfaction_score is not None and not 1 <= self.satisfaction_score <= 10:
            raise ValueError("satisfaction_score must be between 1 and 10")

    @property
    def last_interaction(self) -> Optional[Interaction]:
        return self.interactions[-1] if self.interactions else None
