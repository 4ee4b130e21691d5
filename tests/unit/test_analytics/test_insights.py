"""
Unit tests for insight synthesis and the weekly score.
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from adhd_planner.analytics.metrics import MetricsAggregator
from adhd_planner.analytics.insights import (
    FALLBACK_CHALLENGE,
    FALLBACK_POSITIVE,
    KEEP_LOGGING_ADVICE,
    InsightSynthesizer,
    round_half_up,
    weekly_score,
)

from analytics_records import make_task, make_mood, make_session


@pytest.fixture
def aggregate(week):
    aggregator = MetricsAggregator()

    def _aggregate(**records):
        return aggregator.aggregate(week, **records)
    return _aggregate


@pytest.fixture
def synthesizer():
    return InsightSynthesizer()


@pytest.fixture
def good_week(aggregate):
    tasks = [make_task(i, "completed") for i in range(5)] + [make_task(i, "pending") for i in range(5, 10)]
    moods = [make_mood(i, "happy") for i in range(3)]
    return aggregate(tasks=tasks, moods=moods, sessions=[make_session(1, 180)])


class TestWeeklyScore:

    def test_worked_example(self, good_week):
        # 50% * 0.4 + 4.0 / 5 * 30 + 180 / 300 * 30
        assert weekly_score(good_week) == 62

    def test_empty_week_scores_neutral_mood_only(self, aggregate):
        assert weekly_score(aggregate()) == 18

    def test_focus_contribution_capped(self, aggregate):
        five_hours = aggregate(sessions=[make_session(1, 300)])
        ten_hours = aggregate(sessions=[make_session(1, 600)])
        assert weekly_score(five_hours) == weekly_score(ten_hours)

    def test_maximum(self, aggregate):
        metrics = aggregate(
            tasks=[make_task(1, "completed")],
            moods=[make_mood(1, "very-happy")],
            sessions=[make_session(1, 400)],
        )
        assert weekly_score(metrics) == 100

    def test_halves_round_up(self, aggregate):
        # 18 from the neutral mood plus 0.5 from five focus minutes
        assert weekly_score(aggregate(sessions=[make_session(1, 5)])) == 19

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(18.49) == 18
        assert round_half_up(0.0) == 0


class TestSynthesize:

    def test_good_week(self, synthesizer, good_week):
        insights = synthesizer.synthesize(good_week)
        assert insights.weekly_score == 62
        assert insights.performance_level == "good"
        assert len(insights.positives) == 3
        assert insights.challenges == [FALLBACK_CHALLENGE]

    def test_empty_week_uses_fallbacks(self, synthesizer, aggregate):
        """No data means no mood claims, just the fallback lines."""
        insights = synthesizer.synthesize(aggregate())
        assert insights.positives == [FALLBACK_POSITIVE]
        assert insights.challenges == [FALLBACK_CHALLENGE]
        assert insights.performance_level == "needs-improvement"

    def test_challenges(self, synthesizer, aggregate):
        metrics = aggregate(
            tasks=[make_task(1, "completed"), make_task(2), make_task(3)],
            moods=[make_mood(1, "very-sad"), make_mood(2, "sad")],
            sessions=[make_session(1), make_session(2, completed=False)],
        )
        challenges = synthesizer.challenges(metrics)
        assert len(challenges) == 3
        assert challenges[0].startswith("High proportion of incomplete tasks")
        assert challenges[1].startswith("Low emotional state")
        assert challenges[2].startswith("Difficulty completing focus sessions")

    def test_summary(self, synthesizer, good_week):
        summary = synthesizer.summary(good_week)
        assert "completed 5 of 10 tasks" in summary
        assert "(50% completion rate)" in summary
        assert "4.0/5.0" in summary
        assert "3 hours" in summary

    def test_summary_hours_round_half_up(self, synthesizer, aggregate):
        summary = synthesizer.summary(aggregate(sessions=[make_session(1, 150)]))
        assert "2.5" not in summary
        assert "3 hours" in summary

    def test_to_dict(self, synthesizer, good_week):
        data = synthesizer.synthesize(good_week).to_dict()
        assert set(data) == {
            "summary", "positives", "challenges", "weekly_score", "performance_level", "advice",
        }


class TestAdvice:

    def test_empty_week_only_keeps_logging(self, synthesizer, aggregate):
        assert synthesizer.advice(aggregate()) == [KEEP_LOGGING_ADVICE]

    def test_struggling_week(self, synthesizer, aggregate):
        metrics = aggregate(
            tasks=[make_task(i, priority="urgent-important") for i in range(4)],
            moods=[make_mood(1, "sad"), make_mood(2, "sad")],
            sessions=[make_session(1, 30)],
        )
        advice = synthesizer.advice(metrics)
        assert len(advice) == 4
        assert advice[0].startswith("Gradually increase focus sessions")
        assert advice[1].startswith("Prioritize emotional regulation")
        assert advice[2].startswith("Too many urgent tasks")
        assert advice[-1] == KEEP_LOGGING_ADVICE

    def test_three_urgent_tasks_is_not_too_many(self, synthesizer, aggregate):
        metrics = aggregate(
            tasks=[make_task(i, priority="urgent-important") for i in range(3)],
            sessions=[make_session(1, 120)],
        )
        assert synthesizer.advice(metrics) == [KEEP_LOGGING_ADVICE]

    def test_synthesize_includes_advice(self, synthesizer, good_week):
        insights = synthesizer.synthesize(good_week)
        assert insights.advice == [KEEP_LOGGING_ADVICE]
