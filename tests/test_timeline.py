"""Tests for update-schedule timeline validation and row mapping."""

import copy

import pytest

from app.core.timeline import (
    PHASE_TYPES,
    create_default_timeline,
    has_validation_errors,
    parse_date,
    row_to_timeline,
    timeline_to_row,
    validate_milestone,
    validate_phase,
    validate_timeline,
)


@pytest.fixture
def timeline():
    return create_default_timeline()


class TestDefaultTimeline:
    def test_default_is_valid(self, timeline):
        assert validate_timeline(timeline) == {}
        assert has_validation_errors(validate_timeline(timeline)) is False

    def test_phase_types_cover_colors(self, timeline):
        assert set(timeline["colors"]) == set(PHASE_TYPES)
        assert {phase["type"] for phase in timeline["phases"]} == set(PHASE_TYPES)

    def test_fresh_copy_each_call(self, timeline):
        timeline["phases"].clear()
        assert create_default_timeline()["phases"]


class TestParseDate:
    def test_date_only(self):
        assert parse_date("2026-03-01").year == 2026

    def test_naive_datetime_treated_as_utc(self):
        assert parse_date("2026-03-01T10:00:00").utcoffset().total_seconds() == 0

    @pytest.mark.parametrize("value", [None, "", "  ", "not-a-date", 20260301])
    def test_invalid(self, value):
        assert parse_date(value) is None


class TestValidatePhase:
    def test_valid_phase(self, timeline):
        assert validate_phase(timeline["phases"][0]) == []

    def test_required_text_fields(self):
        errors = validate_phase({"label": " ", "startPercent": 0, "widthPercent": 10})

        assert "Phase label is required" in errors
        assert "Phase timing is required" in errors
        assert "Phase focus is required" in errors

    @pytest.mark.parametrize("start", [-1, 101, None, "10"])
    def test_start_out_of_range(self, timeline, start):
        phase = {**timeline["phases"][0], "startPercent": start}
        assert "Start position must be between 0-100%" in validate_phase(phase)

    @pytest.mark.parametrize("width", [0, 101, None, True])
    def test_width_out_of_range(self, timeline, width):
        phase = {**timeline["phases"][0], "widthPercent": width}
        assert "Width must be between 1-100%" in validate_phase(phase)

    def test_phase_beyond_timeline_end(self, timeline):
        phase = {**timeline["phases"][0], "startPercent": 80, "widthPercent": 30}
        assert validate_phase(phase) == ["Phase extends beyond 100% of timeline"]

    def test_phase_ending_exactly_at_end(self, timeline):
        phase = {**timeline["phases"][0], "startPercent": 80, "widthPercent": 20}
        assert validate_phase(phase) == []


class TestValidateMilestone:
    def test_valid(self):
        assert validate_milestone({"title": "Launch", "date": "2026-05-10"}) == []

    def test_missing_fields(self):
        assert validate_milestone({}) == ["Milestone title is required", "Milestone date is required"]

    def test_invalid_date(self):
        assert validate_milestone({"title": "Launch", "date": "soon"}) == ["Invalid milestone date"]


class TestValidateTimeline:
    def test_end_before_start(self, timeline):
        timeline["timelineEnd"] = "2025-01-01"

        assert validate_timeline(timeline) == {"timeline": ["End date must be after start date"]}

    def test_equal_dates_rejected(self, timeline):
        timeline["timelineEnd"] = timeline["timelineStart"]

        assert "End date must be after start date" in validate_timeline(timeline)["timeline"]

    def test_invalid_dates(self, timeline):
        timeline["timelineStart"] = "nope"
        timeline["timelineEnd"] = None

        assert validate_timeline(timeline)["timeline"] == ["Invalid start date", "Invalid end date"]

    def test_missing_title(self, timeline):
        timeline["title"] = ""

        assert validate_timeline(timeline) == {"title": ["Title is required"]}

    def test_errors_keyed_by_index(self, timeline):
        timeline["phases"][2]["label"] = ""
        timeline["milestones"][4]["date"] = "bad"

        errors = validate_timeline(timeline)

        assert set(errors) == {"phase-2", "milestone-4"}
        assert errors["phase-2"] == ["Phase label is required"]
        assert errors["milestone-4"] == ["Invalid milestone date"]

    def test_non_dict_entries_are_invalid(self, timeline):
        timeline["phases"] = ["oops"]

        assert "phase-0" in validate_timeline(timeline)

    def test_phases_not_a_list(self, timeline):
        timeline["phases"] = 5

        assert validate_timeline(timeline) == {"phases": ["Phases must be a list"]}

    def test_milestones_not_a_list(self, timeline):
        timeline["milestones"] = {"date": "2026-01-01"}

        errors = validate_timeline(timeline)

        assert errors == {"milestones": ["Milestones must be a list"]}


class TestRowMapping:
    def test_to_row_uses_snake_case_columns(self, timeline):
        row = timeline_to_row(timeline)

        assert row["timeline_start"] == timeline["timelineStart"]
        assert row["timeline_months"] == timeline["timelineMonths"]
        assert row["footer_text"] == timeline["footerText"]
        assert "timelineStart" not in row

    def test_round_trip(self, timeline):
        assert row_to_timeline(timeline_to_row(timeline)) == timeline

    def test_gaps_filled_from_default(self):
        default = create_default_timeline()

        timeline = row_to_timeline({"title": "Custom", "phases": "corrupt", "subtitle": None})

        assert timeline["title"] == "Custom"
        assert timeline["phases"] == default["phases"]
        assert timeline["milestones"] == default["milestones"]
        assert timeline["timelineStart"] == default["timelineStart"]
        assert timeline["subtitle"] == ""
        assert timeline["footerText"] == ""

    def test_metadata_columns_are_not_part_of_timeline(self, timeline):
        row = {**timeline_to_row(timeline), "id": 3, "version": 9, "updated_by": "x"}

        assert set(row_to_timeline(row)) == set(copy.deepcopy(timeline))
