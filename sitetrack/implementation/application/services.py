"""
Implementation Application Services
===================================

Stage progression over immutable StageSet snapshots.

The boolean/timestamp pairing is enforced here: ``set_sub_item`` is the
only way to write a sub-item, and it stamps ``<name>_at`` on a false->true
transition in the same update.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import uuid4

from sitetrack.config import Settings, get_settings
from sitetrack.core.exceptions import UnknownFieldError, ValidationError
from sitetrack.implementation.application.dto import ChecklistItem, StageProgress
from sitetrack.implementation.domain import (
    ASSISTED_OPERATION_STAGE,
    PROGRESS_STAGES,
    SUB_ITEMS,
    SUB_ITEMS_BY_FIELD,
    Interaction,
    StageRules,
    StageSet,
)
from sitetrack.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class StageService:
    """
    Service for the 10-stage implementation checklist.

    Stage 10 (satisfaction survey) is tracked like the others but left out
    of the 9-stage progress ratio shown on dashboards.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    # ========== Mutations ==========

    def set_sub_item(
        self,
        stage_set: StageSet,
        field_name: str,
        value: bool,
        now: datetime
    ) -> StageSet:
        """
        Set a checklist sub-item.

        Raises:
            UnknownFieldError: If ``field_name`` is not a sub-item
            ValidationError: If ``value`` is not a bool
        """
        item = SUB_ITEMS_BY_FIELD.get(field_name)
        if item is None:
            logger.warning("Unknown stage sub-item", extra={"field_name": field_name})
            raise UnknownFieldError(field_name)

        if not isinstance(value, bool):
            raise ValidationError(
                f"Sub-item '{field_name}' takes a boolean",
                {"field_name": field_name, "value": repr(value)}
            )

        changes = {field_name: value}
        if value and not getattr(stage_set, field_name):
            changes[item.stamp_field] = now

        logger.info(
            "Stage sub-item updated",
            extra={"project_id": stage_set.project_id, "field_name": field_name, "value": value}
        )
        return replace(stage_set, **changes)

    def append_interaction(
        self,
        stage_set: StageSet,
        author: str,
        text: str,
        now: datetime
    ) -> StageSet:
        """
        Log an assisted-operation interaction.

        The window start is set on the first interaction only, while the
        window end is re-based to ``now + assisted_operation_days`` on every
        append.

        Raises:
            ValidationError: If ``text`` is blank
        """
        if not (text or "").strip():
            raise ValidationError("Interaction text cannot be empty")

        interaction = Interaction(
            id=str(uuid4()),
            created_at=now,
            author=author or "Usuário",
            text=text.strip(),
        )

        logger.info(
            "Assisted operation interaction logged",
            extra={"project_id": stage_set.project_id, "interactions": len(stage_set.interactions) + 1}
        )
        return replace(
            stage_set,
            interactions=stage_set.interactions + (interaction,),
            assisted_op_start=stage_set.assisted_op_start or now,
            assisted_op_end=now + timedelta(days=self._settings.assisted_operation_days),
        )

    def mark_complete(self, stage_set: StageSet, now: datetime) -> StageSet:
        """
        Flag the implementation as completed.

        Earlier stages are not required; see ``pending_before_completion``
        for the advisory list.
        """
        pending = self.pending_before_completion(stage_set)
        if pending:
            logger.info(
                "Implementation completed with pending stages",
                extra={"project_id": stage_set.project_id, "pending_stages": pending}
            )
        return self.set_sub_item(stage_set, "completed", True, now)

    def record_survey(
        self,
        stage_set: StageSet,
        score: Optional[int],
        would_recommend: Optional[bool],
        now: datetime,
        comment: Optional[str] = None,
        positives: Optional[str] = None,
        negatives: Optional[str] = None
    ) -> StageSet:
        """
        Store the satisfaction survey and mark stage 10 done.

        Raises:
            ValidationError: If ``score`` is outside 1-10
        """
        if score is not None and (isinstance(score, bool) or not isinstance(score, int) or not 1 <= score <= 10):
            raise ValidationError("Satisfaction score must be an integer between 1 and 10", {"score": score})

        answered = replace(
            stage_set,
            satisfaction_score=score,
            would_recommend=would_recommend,
            survey_comment=comment or None,
            survey_positives=positives or None,
            survey_negatives=negatives or None,
        )
        return self.set_sub_item(answered, "satisfaction_survey_done", True, now)

    # ========== Derived values ==========

    @staticmethod
    def stage_complete(stage_set: StageSet, stage: int) -> bool:
        """
        Completion predicate of ``stage`` (1-10).

        Raises:
            ValidationError: If ``stage`` is out of range
        """
        return StageRules.is_complete(stage_set, stage)

    @staticmethod
    def progress_ratio(stage_set: StageSet) -> float:
        """Completed stages among 1-9, divided by 9."""
        return StageRules.progress_ratio(stage_set)

    @staticmethod
    def completed_stage_count(stage_set: StageSet) -> int:
        return StageRules.completed_count(stage_set)

    @staticmethod
    def current_stage(stage_set: StageSet) -> int:
        return StageRules.current_stage(stage_set)

    @staticmethod
    def pending_before_completion(stage_set: StageSet) -> List[int]:
        """Incomplete stages among 1-8."""
        return StageRules.incomplete_stages(stage_set, range(1, ASSISTED_OPERATION_STAGE + 1))

    def progress(self, stage_set: StageSet) -> StageProgress:
        return StageProgress(
            completed_stages=self.completed_stage_count(stage_set),
            total_stages=len(PROGRESS_STAGES),
            progress_ratio=self.progress_ratio(stage_set),
            current_stage=self.current_stage(stage_set),
            survey_done=self.stage_complete(stage_set, 10),
        )

    @staticmethod
    def checklist(stage_set: StageSet) -> List[ChecklistItem]:
        """Ordered checklist rows for reports."""
        return [
            ChecklistItem(
                code=item.code,
                field_name=item.field,
                stage=item.stage,
                title=item.title,
                done=getattr(stage_set, item.field),
                done_at=getattr(stage_set, item.stamp_field),
            )
            for item in SUB_ITEMS
        ]
