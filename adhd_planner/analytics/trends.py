"""
Period-over-period trend comparison.

percent_change is anti-symmetric for non-zero values:
    percent_change(a, b) == -percent_change(b, a)  (up to float rounding)

When the previous value is 0 the change is reported as +100% if the current
value is positive, else 0%. This case is asymmetric: going
from 0 to 5 reports +100%, while 5 to 0 reports -100%.
"""

from dataclasses import dataclass
from typing import Dict, List

from adhd_planner.analytics.metrics import WindowMetrics


# Metrics compared week over week, in display order
TRACKED_METRICS = [
    "completion_rate",
    "average_mood",
    "focus_minutes",
    "total_tasks",
    "mood_entry_count",
    "completed_sessions",
]

UP = "up"
DOWN = "down"
FLAT = "flat"


def direction(current: float, previous: float) -> str:
    if current > previous:
        return UP
    if current < previous:
        return DOWN
    return FLAT


def percent_change(current: float, previous: float) -> float:
    """Relative change from ``previous`` to ``current`` in percent."""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


@dataclass
class Trend:
    """One metric compared across two windows."""
    metric: str
    current: float
    previous: float
    direction: str
    percent_change: float

    @classmethod
    def between(cls, metric: str, current: float, previous: float) -> 'Trend':
        return cls(
            metric=metric,
            current=current,
            previous=previous,
            direction=direction(current, previous),
            percent_change=percent_change(current, previous),
        )

    @property
    def delta(self) -> float:
        return self.current - self.previous

    def to_dict(self) -> Dict:
        return {
            "metric": self.metric,
            "current": round(self.current, 2),
            "previous": round(self.previous, 2),
            "direction": self.direction,
            "percent_change": round(self.percent_change, 1),
        }


class TrendComparator:
    """Diffs current-window metrics against previous-window metrics."""

    def __init__(self, metrics: List[str] = None):
        self.metrics = list(metrics or TRACKED_METRICS)

    def compare(self, current: WindowMetrics, previous: WindowMetrics) -> Dict[str, Trend]:
        return {
            name: Trend.between(name, getattr(current, name), getattr(previous, name))
            for name in self.metrics
        }

    def highlights(self, trends: Dict[str, Trend]) -> List[str]:
        """
        Short sentences for the metrics that improved.

        Only completion rate, mood, focus time and mood logging produce
        highlights; declines are left to the challenges list. The mood
        highlight needs mood entries in the current window.
        """
        messages = []

        completion = trends.get("completion_rate")
        if completion and completion.direction == UP:
            messages.append(
                f"Productivity improvement: +{completion.delta:.0f}% more tasks completed"
            )

        mood = trends.get("average_mood")
        entries = trends.get("mood_entry_count")
        if mood and mood.direction == UP and entries and entries.current > 0:
            messages.append("More positive emotional state this week")

        focus = trends.get("focus_minutes")
        if focus and focus.direction == UP:
            messages.append(f"Increase in focus time: {focus.delta / 60:.1f}h more")

        if entries and entries.direction == UP:
            messages.append("Greater consistency in emotional tracking")

        return messages
