"""
Implementation Stage Catalogue
==============================

Static description of the 10-stage implementation checklist and the pure
rules deriving stage completion from it.

Stages 1-7, 9 and 10 are conjunctions over boolean sub-items; stage 8
(assisted operation) is complete once at least one interaction is logged.
Only stages 1-9 count towards the progress ratio.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from sitetrack.core.exceptions import ValidationError

STAGE_COUNT = 10
PROGRESS_STAGES = tuple(range(1, 10))  # stage 10 is tracked but not summed
ASSISTED_OPERATION_STAGE = 8


@dataclass(frozen=True)
class SubItem:
    """One checklist entry: boolean field, its stage and display title."""
    code: str
    field: str
    stage: int
    title: str

    @property
    def stamp_field(self) -> str:
        return f"{self.field}_at"


SUB_ITEMS: Tuple[SubItem, ...] = (
    SubItem("1", "contract_signed", 1, "Contract signed"),
    SubItem("2", "contract_registered", 2, "Contract registered"),
    SubItem("3.1", "welcome_call", 3, "Welcome call"),
    SubItem("3.2", "system_registration", 3, "Registered in the access system"),
    SubItem("3.3", "resident_app_install", 3, "Building manager installed the app"),
    SubItem("3.4", "tag_audit", 3, "Tag audit"),
    SubItem("4.1", "project_check", 4, "Project check"),
    SubItem("4.2", "visit_scheduled", 4, "Implementation visit scheduled"),
    SubItem("4.3", "visit_report", 4, "Implementation visit report"),
    SubItem("5.1", "installer_report", 5, "Installer report"),
    SubItem("5.2", "glazier_report", 5, "Glazier report"),
    SubItem("5.3", "locksmith_report", 5, "Locksmith report"),
    SubItem("5.4", "supervisor_report", 5, "Supervisor completion report"),
    SubItem("6.1", "programming_check", 6, "Programming check"),
    SubItem("6.2", "financial_activation_confirmed", 6, "Financial activation confirmed"),
    SubItem("7.1", "commercial_visit_scheduled", 7, "Commercial visit scheduled"),
    SubItem("7.2", "commercial_visit_report", 7, "Commercial visit report"),
    SubItem("9", "completed", 9, "Implementation completed"),
    SubItem("10", "satisfaction_survey_done", 10, "Satisfaction survey done"),
)

SUB_ITEMS_BY_FIELD: Dict[str, SubItem] = {item.field: item for item in SUB_ITEMS}

STAGE_REQUIREMENTS: Dict[int, Tuple[str, ...]] = {
    stage: tuple(item.field for item in SUB_ITEMS if item.stage == stage)
    for stage in range(1, STAGE_COUNT + 1)
}

STAGE_TITLES: Dict[int, str] = {
    1: "Contract signed",
    2: "Contract registered",
    3: "Onboarding",
    4: "Implementation visit",
    5: "Field reports",
    6: "Programming and activation",
    7: "Commercial visit",
    8: "Assisted operation",
    9: "Completion",
    10: "Satisfaction survey",
}


class StageRules:
    """
    Pure functions over a stage set.

    Each predicate reads only the sub-items named for its stage, so
    toggling any other field never changes it.
    """

    @staticmethod
    def check_stage(stage: int) -> None:
        if not isinstance(stage, int) or not 1 <= stage <= STAGE_COUNT:
            raise ValidationError(
                f"Stage must be between 1 and {STAGE_COUNT}",
                {"stage": stage}
            )

    @staticmethod
    def is_complete(stage_set, stage: int) -> bool:
        StageRules.check_stage(stage)
        if stage == ASSISTED_OPERATION_STAGE:
            return len(stage_set.interactions) > 0
        return all(getattr(stage_set, name) for name in STAGE_REQUIREMENTS[stage])

    @staticmethod
    def completed_count(stage_set) -> int:
        """Completed stages among 1-9."""
        return sum(1 for stage in PROGRESS_STAGES if StageRules.is_complete(stage_set, stage))

    @staticmethod
    def progress_ratio(stage_set) -> float:
        return StageRules.completed_count(stage_set) / len(PROGRESS_STAGES)

    @staticmethod
    def current_stage(stage_set) -> int:
        """First incomplete stage, or the last stage when all are done."""
        for stage in range(1, STAGE_COUNT + 1):
            if not StageRules.is_complete(stage_set, stage):
                return stage
        return STAGE_COUNT

    @staticmethod
    def incomplete_stages(stage_set, stages) -> List[int]:
        return [stage for stage in stages if not StageRules.is_complete(stage_set, stage)]
