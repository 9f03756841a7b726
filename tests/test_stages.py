"""Tests for the implementation stage progression engine."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta

import pytest

from sitetrack.core.exceptions import UnknownFieldError, ValidationError
from sitetrack.implementation.application import StageSetRecord
from sitetrack.implementation.domain import STAGE_REQUIREMENTS, SUB_ITEMS, StageSet

from tests.conftest import utc

ALL_FIELDS = [item.field for item in SUB_ITEMS]


def _with(stage_set: StageSet, *fields: str) -> StageSet:
    return replace(stage_set, **{name: True for name in fields})


class TestSetSubItem:
    def test_false_to_true_stamps_timestamp(self, stage_service, empty_stage_set):
        updated = stage_service.set_sub_item(empty_stage_set, "welcome_call", True, utc(2024, 2, 1, 9))

        assert updated.welcome_call is True
        assert updated.welcome_call_at == utc(2024, 2, 1, 9)
        assert empty_stage_set.welcome_call is False

    def test_true_to_true_keeps_first_stamp(self, stage_service, empty_stage_set):
        once = stage_service.set_sub_item(empty_stage_set, "tag_audit", True, utc(2024, 2, 1))
        twice = stage_service.set_sub_item(once, "tag_audit", True, utc(2024, 2, 5))
        assert twice.tag_audit_at == utc(2024, 2, 1)

    def test_unchecking_keeps_timestamp(self, stage_service, empty_stage_set):
        checked = stage_service.set_sub_item(empty_stage_set, "project_check", True, utc(2024, 2, 1))
        unchecked = stage_service.set_sub_item(checked, "project_check", False, utc(2024, 2, 2))

        assert unchecked.project_check is False
        assert unchecked.project_check_at == utc(2024, 2, 1)

    def test_recheck_restamps(self, stage_service, empty_stage_set):
        checked = stage_service.set_sub_item(empty_stage_set, "project_check", True, utc(2024, 2, 1))
        unchecked = stage_service.set_sub_item(checked, "project_check", False, utc(2024, 2, 2))
        rechecked = stage_service.set_sub_item(unchecked, "project_check", True, utc(2024, 2, 3))
        assert rechecked.project_check_at == utc(2024, 2, 3)

    @pytest.mark.parametrize("field_name", ["contract_signed_at", "interactions", "satisfaction_score", "nope"])
    def test_unknown_field_rejected(self, stage_service, empty_stage_set, field_name):
        with pytest.raises(UnknownFieldError) as exc_info:
            stage_service.set_sub_item(empty_stage_set, field_name, True, utc(2024, 2, 1))
        assert exc_info.value.field_name == field_name
        assert isinstance(exc_info.value, ValidationError)

    def test_non_boolean_value_rejected(self, stage_service, empty_stage_set):
        with pytest.raises(ValidationError):
            stage_service.set_sub_item(empty_stage_set, "welcome_call", "yes", utc(2024, 2, 1))


class TestStageComplete:
    def test_stage_three_needs_all_four_items(self, stage_service, empty_stage_set):
        partial = _with(empty_stage_set, "welcome_call", "system_registration", "resident_app_install")
        assert not stage_service.stage_complete(partial, 3)
        assert stage_service.stage_complete(_with(partial, "tag_audit"), 3)

    def test_stage_eight_follows_interactions(self, stage_service, empty_stage_set):
        assert not stage_service.stage_complete(empty_stage_set, 8)
        logged = stage_service.append_interaction(empty_stage_set, "Carla", "Visita de acompanhamento", utc(2024, 3, 1))
        assert stage_service.stage_complete(logged, 8)

    @pytest.mark.parametrize("stage", [0, 11, -1])
    def test_out_of_range_stage(self, stage_service, empty_stage_set, stage):
        with pytest.raises(ValidationError):
            stage_service.stage_complete(empty_stage_set, stage)

    @pytest.mark.parametrize("stage", [s for s in range(1, 11)])
    def test_predicate_ignores_unrelated_fields(self, stage_service, empty_stage_set, stage):
        required = set(STAGE_REQUIREMENTS[stage])
        for base in (empty_stage_set, _with(empty_stage_set, *ALL_FIELDS)):
            expected = stage_service.stage_complete(base, stage)
            for name in ALL_FIELDS:
                if name in required:
                    continue
                toggled = replace(base, **{name: not getattr(base, name)})
                assert stage_service.stage_complete(toggled, stage) == expected


class TestProgress:
    def test_two_of_nine(self, stage_service, empty_stage_set):
        stage_set = _with(empty_stage_set, "contract_signed", "contract_registered")
        assert stage_service.progress_ratio(stage_set) == pytest.approx(2 / 9)
        assert stage_service.completed_stage_count(stage_set) == 2

    def test_survey_does_not_count(self, stage_service, empty_stage_set):
        stage_set = _with(empty_stage_set, "satisfaction_survey_done")
        assert stage_service.stage_complete(stage_set, 10)
        assert stage_service.progress_ratio(stage_set) == 0.0

    def test_everything_done_is_one(self, stage_service, empty_stage_set):
        stage_set = stage_service.append_interaction(
            _with(empty_stage_set, *ALL_FIELDS), "Carla", "Tudo ok", utc(2024, 3, 1)
        )
        assert stage_service.progress_ratio(stage_set) == 1.0
        assert stage_service.current_stage(stage_set) == 10

    def test_ratio_is_k_over_nine(self, stage_service, empty_stage_set):
        stage_set = empty_stage_set
        now = utc(2024, 1, 1)
        for item in SUB_ITEMS:
            stage_set = stage_service.set_sub_item(stage_set, item.field, True, now)
            k = sum(1 for s in range(1, 10) if stage_service.stage_complete(stage_set, s))
            assert stage_service.progress_ratio(stage_set) == k / 9
            assert 0.0 <= stage_service.progress_ratio(stage_set) <= 1.0

    def test_current_stage_is_first_incomplete(self, stage_service, empty_stage_set):
        assert stage_service.current_stage(empty_stage_set) == 1
        stage_set = _with(empty_stage_set, "contract_signed", "contract_registered", "completed")
        assert stage_service.current_stage(stage_set) == 3

    def test_progress_summary(self, stage_service, empty_stage_set):
        progress = stage_service.progress(_with(empty_stage_set, "contract_signed", "satisfaction_survey_done"))
        assert progress.completed_stages == 1
        assert progress.total_stages == 9
        assert progress.current_stage == 2
        assert progress.survey_done is True


class TestAssistedOperation:
    def test_window_rebases_on_every_append(self, stage_service, empty_stage_set):
        first_at = utc(2024, 4, 1, 10)
        second_at = first_at + timedelta(days=5)

        first = stage_service.append_interaction(empty_stage_set, "Carla", "Primeiro contato", first_at)
        assert first.assisted_op_start == first_at
        assert first.assisted_op_end == first_at + timedelta(days=30)

        second = stage_service.append_interaction(first, "Diego", "Ajuste de tags", second_at)
        assert second.assisted_op_start == first_at
        assert second.assisted_op_end == second_at + timedelta(days=30)
        assert [i.author for i in second.interactions] == ["Carla", "Diego"]
        assert len(first.interactions) == 1

    def test_blank_text_rejected(self, stage_service, empty_stage_set):
        with pytest.raises(ValidationError):
            stage_service.append_interaction(empty_stage_set, "Carla", "   ", utc(2024, 4, 1))


class TestCompletionAndSurvey:
    def test_mark_complete_has_no_precondition(self, stage_service, empty_stage_set):
        done = stage_service.mark_complete(empty_stage_set, utc(2024, 6, 1))

        assert done.completed is True
        assert done.completed_at == utc(2024, 6, 1)
        assert stage_service.stage_complete(done, 9)
        assert stage_service.pending_before_completion(done) == [1, 2, 3, 4, 5, 6, 7, 8]

    def test_record_survey(self, stage_service, empty_stage_set):
        surveyed = stage_service.record_survey(
            empty_stage_set, 9, True, utc(2024, 7, 1), comment="Equipe atenciosa"
        )
        assert surveyed.satisfaction_score == 9
        assert surveyed.would_recommend is True
        assert surveyed.satisfaction_survey_done_at == utc(2024, 7, 1)
        assert stage_service.progress_ratio(surveyed) == 0.0

    @pytest.mark.parametrize("score", [0, 11, 7.5, True])
    def test_invalid_score_rejected(self, stage_service, empty_stage_set, score):
        with pytest.raises(ValidationError):
            stage_service.record_survey(empty_stage_set, score, None, utc(2024, 7, 1))


def test_checklist_rows(stage_service, empty_stage_set):
    stage_set = stage_service.set_sub_item(empty_stage_set, "glazier_report", True, utc(2024, 5, 2))
    rows = stage_service.checklist(stage_set)

    assert [row.code for row in rows][:4] == ["1", "2", "3.1", "3.2"]
    glazier = next(row for row in rows if row.field_name == "glazier_report")
    assert glazier.code == "5.2"
    assert glazier.done is True
    assert glazier.done_at == utc(2024, 5, 2)


def test_record_conversion(stage_service, empty_stage_set):
    stage_set = stage_service.set_sub_item(empty_stage_set, "contract_signed", True, utc(2024, 1, 2))
    stage_set = stage_service.append_interaction(stage_set, "Carla", "Primeiro contato", utc(2024, 1, 3))

    record = StageSetRecord.from_domain(stage_set)
    assert record.contract_signed_at == utc(2024, 1, 2)
    assert record.interactions[0].text == "Primeiro contato"
    assert record.to_domain() == stage_set
