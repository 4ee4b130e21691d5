"""
Unit tests for the data models.
Tests dictionary round trips, validation and timestamp helpers.
"""

import pytest
from datetime import date, datetime, timezone

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from adhd_planner.core.errors import InvalidRecord
from adhd_planner.core.models import (
    Task,
    TaskStep,
    MoodEntry,
    FocusSession,
    RoutineBlock,
    EmergencyPlan,
    RECORD_TYPES,
    mood_value,
    parse_datetime,
    start_of_day,
)


class TestMoodValue:
    """Tests for the ordinal mood mapping."""

    def test_maps_all_five_moods(self):
        assert [mood_value(m) for m in ("very-sad", "sad", "neutral", "happy", "very-happy")] == [1, 2, 3, 4, 5]

    def test_unknown_mood_raises(self):
        """Unknown labels fail fast instead of defaulting."""
        with pytest.raises(InvalidRecord) as exc_info:
            mood_value("ecstatic")
        assert exc_info.value.field == "mood"

    def test_none_mood_raises(self):
        with pytest.raises(InvalidRecord):
            mood_value(None)


class TestDatetimeHelpers:

    def test_parse_iso_string(self):
        assert parse_datetime("2024-03-11T14:30:00") == datetime(2024, 3, 11, 14, 30)

    def test_parse_date_becomes_midnight(self):
        assert parse_datetime(date(2024, 3, 11)) == datetime(2024, 3, 11)

    def test_parse_empty_is_none(self):
        assert parse_datetime(None) is None
        assert parse_datetime("") is None

    def test_parse_garbage_raises(self):
        with pytest.raises(InvalidRecord):
            parse_datetime("next tuesday-ish")

    def test_start_of_day_truncates_time(self):
        assert start_of_day(datetime(2024, 3, 11, 23, 59, 59)) == datetime(2024, 3, 11)

    def test_utc_string_becomes_local_naive(self):
        """Browser ISO strings ("...Z") are stored as naive local time."""
        expected = datetime(2024, 3, 11, 12, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        parsed = parse_datetime("2024-03-11T12:00:00.000Z")
        assert parsed.tzinfo is None
        assert parsed == expected

    def test_aware_datetime_becomes_local_naive(self):
        aware = datetime(2024, 3, 11, 12, 0, tzinfo=timezone.utc)
        assert parse_datetime(aware) == aware.astimezone().replace(tzinfo=None)
        assert start_of_day(aware).tzinfo is None


class TestTask:
    """Tests for the Task model."""

    def test_round_trip_through_dict(self):
        task = Task(
            id=3,
            title="Write report",
            priority="urgent-important",
            estimated_minutes=30,
            steps=[TaskStep(id="1", title="Outline")],
            created_at=datetime(2024, 3, 11, 9, 0),
        )
        restored = Task.from_dict(task.to_dict())
        assert restored == task

    def test_defaults(self):
        task = Task.from_dict({"title": "Something"})
        assert task.status == "pending"
        assert task.priority == "not-urgent-important"
        assert task.steps == []
        assert task.current_step_index == 0

    def test_current_step(self):
        task = Task(title="t", steps=[TaskStep(id="1", title="a"), TaskStep(id="2", title="b")],
                    current_step_index=1)
        assert task.current_step().title == "b"

    def test_current_step_none_when_all_done(self):
        task = Task(title="t", steps=[TaskStep(id="1", title="a")], current_step_index=1)
        assert task.current_step() is None

    def test_validate_rejects_missing_title(self):
        with pytest.raises(InvalidRecord) as exc_info:
            Task(title="").validate()
        assert exc_info.value.field == "title"

    def test_validate_rejects_unknown_priority(self):
        with pytest.raises(InvalidRecord):
            Task(title="t", priority="whenever").validate()

    def test_validate_rejects_step_index_past_end(self):
        """current_step_index may equal the step count but not exceed it."""
        Task(title="t", steps=[TaskStep(id="1", title="a")], current_step_index=1).validate()
        with pytest.raises(InvalidRecord):
            Task(title="t", steps=[TaskStep(id="1", title="a")], current_step_index=2).validate()

    @pytest.mark.parametrize("field,value", [
        ("estimated_minutes", "5"),
        ("actual_minutes", 2.5),
        ("current_step_index", None),
        ("estimated_minutes", True),
    ])
    def test_validate_rejects_non_integer_counts(self, field, value):
        with pytest.raises(InvalidRecord) as exc_info:
            Task(title="t", **{field: value}).validate()
        assert exc_info.value.field == field


class TestOtherModels:

    def test_mood_entry_value(self):
        assert MoodEntry(mood="happy").value == 4

    def test_mood_entry_uses_timestamp_for_windowing(self):
        moment = datetime(2024, 3, 12, 8, 0)
        assert MoodEntry(mood="sad", timestamp=moment).recorded_at() == moment

    def test_focus_session_rejects_non_positive_duration(self):
        with pytest.raises(InvalidRecord):
            FocusSession(duration=0).validate()

    def test_focus_session_rejects_unknown_type(self):
        with pytest.raises(InvalidRecord):
            FocusSession(type="nap").validate()

    def test_routine_block_hours_must_be_ordered(self):
        block = RoutineBlock(day_of_week=1, start_hour=10, end_hour=10, activity="Gym",
                             week_of=datetime(2024, 3, 11))
        with pytest.raises(InvalidRecord):
            block.validate()

    @pytest.mark.parametrize("field,value", [
        ("day_of_week", None),
        ("start_hour", "9"),
        ("end_hour", 10.5),
    ])
    def test_routine_block_rejects_non_integer_slots(self, field, value):
        block = RoutineBlock(activity="Gym", week_of=datetime(2024, 3, 11), **{field: value})
        with pytest.raises(InvalidRecord) as exc_info:
            block.validate()
        assert exc_info.value.field == field

    def test_focus_session_rejects_missing_duration(self):
        with pytest.raises(InvalidRecord) as exc_info:
            FocusSession(duration=None).validate()
        assert exc_info.value.field == "duration"

    def test_routine_block_requires_week_of(self):
        with pytest.raises(InvalidRecord):
            RoutineBlock(activity="Gym").validate()

    def test_emergency_plan_effectiveness_range(self):
        with pytest.raises(InvalidRecord):
            EmergencyPlan(trigger="x", strategy="y", effectiveness=6).validate()

    def test_record_types_cover_every_kind(self):
        assert set(RECORD_TYPES) == {
            "task", "mood_entry", "focus_session", "routine_block",
            "cognitive_reframe", "emergency_plan",
        }
