"""
Insight synthesis: weekly score, summary, positives and challenges.

    weekly_score = clamp(0, 100, task_score + mood_score + focus_score)
        task_score  = completion_rate * 0.4
        mood_score  = average_mood / 5 * 30
        focus_score = min(30, focus_minutes / 300 * 30)

Five hours of focus caps the focus contribution. The score and the summary
hours are rounded half up to whole numbers.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List

from adhd_planner.analytics.metrics import WindowMetrics, clamp_percent, performance_level


FOCUS_CAP_MINUTES = 300

# Positive thresholds
MANY_COMPLETED = 5
GOOD_MOOD = 3.5
GOOD_FOCUS_MINUTES = 180

# Challenge thresholds
INCOMPLETE_TASK_RATIO = 0.5
LOW_MOOD = 2.5
INCOMPLETE_SESSION_RATIO = 0.3

# Advice thresholds
LOW_FOCUS_MINUTES = 60
ADVICE_LOW_MOOD = 3.0
MANY_URGENT = 3

KEEP_LOGGING_ADVICE = "Keep logging consistently to identify more precise patterns"

FALLBACK_POSITIVE = "You have shown perseverance by keeping up your tracking routine"
FALLBACK_CHALLENGE = "The patterns show opportunities to optimize time management"


@dataclass
class Insights:
    summary: str
    positives: List[str] = field(default_factory=list)
    challenges: List[str] = field(default_factory=list)
    weekly_score: int = 0
    performance_level: str = "needs-improvement"
    advice: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "summary": self.summary,
            "positives": list(self.positives),
            "challenges": list(self.challenges),
            "weekly_score": self.weekly_score,
            "performance_level": self.performance_level,
            "advice": list(self.advice),
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weekly_score(metrics: WindowMetrics) -> int:
    """Composite 0-100 score, rounded half up to a whole number."""
    task_score = metrics.completion_rate * 0.4
    mood_score = metrics.average_mood * 30 / 5
    focus_score = min(30, metrics.focus_minutes * 30 / FOCUS_CAP_MINUTES)
    return round_half_up(clamp_percent(task_score + mood_score + focus_score))


class InsightSynthesizer:

    def synthesize(self, metrics: WindowMetrics) -> Insights:
        score = weekly_score(metrics)
        return Insights(
            summary=self.summary(metrics),
            positives=self.positives(metrics),
            challenges=self.challenges(metrics),
            weekly_score=score,
            performance_level=performance_level(score),
            advice=self.advice(metrics),
        )

    def summary(self, metrics: WindowMetrics) -> str:
        return (
            f"This week you completed {metrics.completed_tasks} of {metrics.total_tasks} tasks "
            f"({round_half_up(metrics.completion_rate)}% completion rate). "
            f"Your average emotional state was {metrics.average_mood:.1f}/5.0, "
            f"and you spent {round_half_up(metrics.focus_hours)} hours on structured focus sessions."
        )

    def positives(self, metrics: WindowMetrics) -> List[str]:
        positives = []
        if metrics.completed_tasks >= MANY_COMPLETED:
            positives.append("Excellent productivity - you completed multiple tasks this week")
        if metrics.mood_entry_count > 0 and metrics.average_mood >= GOOD_MOOD:
            positives.append("You maintained a positive emotional state during the week")
        if metrics.focus_minutes >= GOOD_FOCUS_MINUTES:
            positives.append("You dedicated significant time to structured focus sessions")
        return positives or [FALLBACK_POSITIVE]

    def challenges(self, metrics: WindowMetrics) -> List[str]:
        challenges = []
        if metrics.total_tasks and metrics.incomplete_tasks > metrics.total_tasks * INCOMPLETE_TASK_RATIO:
            challenges.append(
                "High proportion of incomplete tasks - consider using the decomposition technique more"
            )
        if metrics.mood_entry_count > 0 and metrics.average_mood < LOW_MOOD:
            challenges.append(
                "Low emotional state - remember to use the emotional regulation techniques"
            )
        if (metrics.total_sessions
                and metrics.incomplete_sessions > metrics.total_sessions * INCOMPLETE_SESSION_RATIO):
            challenges.append("Difficulty completing focus sessions - try shorter intervals")
        return challenges or [FALLBACK_CHALLENGE]

    def advice(self, metrics: WindowMetrics) -> List[str]:
        """Next-step suggestions; the last entry is always the logging reminder."""
        advice = []
        if metrics.has_activity() and metrics.focus_minutes < LOW_FOCUS_MINUTES:
            advice.append("Gradually increase focus sessions - start with 15 minutes a day")
        if metrics.mood_entry_count > 0 and metrics.average_mood < ADVICE_LOW_MOOD:
            advice.append(
                "Prioritize emotional regulation techniques and consider taking more breaks"
            )
        if metrics.urgent_important_count > MANY_URGENT:
            advice.append("Too many urgent tasks - practice planning ahead")
        advice.append(KEEP_LOGGING_ADVICE)
        return advice
