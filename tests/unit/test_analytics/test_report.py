"""
Unit tests for ReportBuilder and ReportFormatter.
Records are written through a memory-backed RecordStore with a settable clock.
"""

import io
import pytest
from datetime import datetime, timedelta

from rich.console import Console

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from adhd_planner.core.store import MemoryAdapter, RecordStore
from adhd_planner.analytics.report import ReportBuilder
from adhd_planner.analytics.formatter import ReportFormatter

from analytics_records import WEDNESDAY


class SettableClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return SettableClock(WEDNESDAY)


@pytest.fixture
def store(clock):
    return RecordStore(MemoryAdapter(), clock=clock, seed_defaults=False)


@pytest.fixture
def builder(store, clock):
    return ReportBuilder(store, clock=clock)


@pytest.fixture
def populated(store, clock):
    """Two completed tasks and a good mood this week, one task last week."""
    clock.now = WEDNESDAY - timedelta(days=7)
    store.create("task", {"title": "Old", "status": "completed"})

    clock.now = WEDNESDAY
    store.create("task", {"title": "Write report", "status": "completed"})
    store.create("task", {"title": "Email", "status": "completed"})
    store.create("mood_entry", {"mood": "very-happy"})
    store.create("focus_session", {"duration": 50, "completed": True})
    return store


class TestWeeklyReport:

    def test_windows(self, builder):
        report = builder.weekly()
        assert report.window.start == datetime(2024, 3, 11)
        assert report.previous_window.start == datetime(2024, 3, 4)
        assert report.generated_at == WEDNESDAY

    def test_reference_date(self, builder):
        report = builder.weekly(datetime(2024, 1, 3))
        assert report.window.start == datetime(2024, 1, 1)

    def test_empty_store(self, builder):
        report = builder.weekly()
        assert report.recommendations == []
        assert report.highlights == []
        assert report.insights.weekly_score == 18

    def test_populated_week(self, builder, populated):
        report = builder.weekly()
        assert report.metrics.total_tasks == 2
        assert report.previous_metrics.total_tasks == 1
        assert report.trends["total_tasks"].direction == "up"
        assert report.metrics.focus_minutes == 50
        assert "More positive emotional state this week" in report.highlights
        assert report.insights is not None

    def test_to_dict(self, builder, populated):
        data = builder.weekly().to_dict()
        assert data["window"]["start"].startswith("2024-03-11")
        assert data["metrics"]["tasks"]["total"] == 2
        assert isinstance(data["recommendations"], list)
        assert data["insights"]["performance_level"]


class TestDailyReport:

    def test_daily_has_no_insights(self, builder, populated):
        report = builder.daily()
        assert report.window.start == datetime(2024, 3, 13)
        assert report.previous_window.start == datetime(2024, 3, 12)
        assert report.metrics.completed_tasks == 2
        assert report.insights is None
        assert report.recommendations == []


class TestReportFormatter:

    def render(self, report):
        buffer = io.StringIO()
        ReportFormatter(Console(file=buffer, width=120, force_terminal=False)).render(report)
        return buffer.getvalue()

    def test_renders_weekly_report(self, builder, populated):
        output = self.render(builder.weekly())
        assert "Weekly score" in output
        assert "Recommendations" in output
        assert "Insights" in output

    def test_empty_week_says_no_action(self, builder):
        output = self.render(builder.weekly())
        assert "No action needed" in output

    def test_daily_report_renders_without_insights(self, builder, populated):
        output = self.render(builder.daily())
        assert "Insights" not in output
