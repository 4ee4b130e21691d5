"""
Rule-based recommendation engine.

RULES is an ordered table of (predicate, effect) pairs. Every rule is
evaluated against the window's metrics and all matching rules fire; order
only affects the order of the output list.

Rules that measure a domain (tasks, moods, sessions) only fire when the
window holds records for that domain, so a week with no activity produces
no recommendations.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Sequence

from adhd_planner.analytics.metrics import WindowMetrics

logger = logging.getLogger(__name__)


CATEGORIES = ("productivity", "emotional", "focus", "planning", "routine")
PRIORITIES = ("high", "medium", "low")

# Thresholds
LOW_COMPLETION_RATE = 50
MAX_URGENT_IMPORTANT = 3
LOW_MOOD = 2.5
MIN_MOOD_ENTRIES = 3
LOW_SESSION_COMPLETION = 60
MIN_FOCUS_MINUTES = 120


@dataclass
class Recommendation:
    title: str
    description: str
    category: str
    priority: str
    suggested_action: str

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class Rule:
    """A named guard over WindowMetrics and the recommendation it yields."""
    name: str
    predicate: Callable[[WindowMetrics], bool]
    effect: Recommendation

    def applies(self, metrics: WindowMetrics) -> bool:
        return bool(self.predicate(metrics))


RULES = [
    Rule(
        name="low_completion",
        predicate=lambda m: m.total_tasks > 0 and m.completion_rate < LOW_COMPLETION_RATE,
        effect=Recommendation(
            title="Improve task decomposition",
            description=(
                "Your completion rate is below 50%. Try splitting large tasks "
                "into smaller steps using the minimal viable task technique."
            ),
            category="productivity",
            priority="high",
            suggested_action="Create steps of 5-15 minutes max",
        ),
    ),
    Rule(
        name="too_many_urgent",
        predicate=lambda m: m.urgent_important_count > MAX_URGENT_IMPORTANT,
        effect=Recommendation(
            title="Reduce urgent tasks",
            description=(
                "You have many urgent and important tasks. This may point to "
                "a lack of advance planning."
            ),
            category="planning",
            priority="medium",
            suggested_action="Plan activities 2-3 days ahead",
        ),
    ),
    Rule(
        name="low_mood",
        predicate=lambda m: m.mood_entry_count > 0 and m.average_mood < LOW_MOOD,
        effect=Recommendation(
            title="Prioritize emotional wellbeing",
            description=(
                "Your average emotional state is low. Emotional regulation "
                "techniques can help before tackling demanding work."
            ),
            category="emotional",
            priority="high",
            suggested_action="Practice the traffic light technique 3 times a day",
        ),
    ),
    Rule(
        name="sparse_mood_tracking",
        predicate=lambda m: m.has_activity() and m.mood_entry_count < MIN_MOOD_ENTRIES,
        effect=Recommendation(
            title="Increase emotional tracking",
            description=(
                "Logging your mood more often makes it easier to spot the "
                "patterns that affect your productivity."
            ),
            category="emotional",
            priority="medium",
            suggested_action="Log your state at least twice a day",
        ),
    ),
    Rule(
        name="incomplete_sessions",
        predicate=lambda m: (
            m.total_sessions > 0 and m.session_completion_rate < LOW_SESSION_COMPLETION
        ),
        effect=Recommendation(
            title="Shorten session length",
            description=(
                "Many focus sessions were left incomplete. They may be too "
                "long for your current attention span."
            ),
            category="focus",
            priority="medium",
            suggested_action="Use 15-20 minute intervals at first",
        ),
    ),
    Rule(
        name="low_focus_time",
        predicate=lambda m: m.has_activity() and m.focus_minutes < MIN_FOCUS_MINUTES,
        effect=Recommendation(
            title="Increase focus time",
            description=(
                "You spent less than 2 hours in structured focus sessions "
                "this week. Gradually increasing it will strengthen your "
                "concentration."
            ),
            category="focus",
            priority="low",
            suggested_action="Goal: 30 minutes of focus daily",
        ),
    ),
    Rule(
        name="transition_routines",
        predicate=lambda m: m.total_tasks > 0 and m.mood_entry_count > 0,
        effect=Recommendation(
            title="Implement transition routines",
            description=(
                "Establishing routines between activities reduces the "
                "cognitive load of switching tasks."
            ),
            category="routine",
            priority="low",
            suggested_action="Create 5-minute routines between activities",
        ),
    ),
]


class RecommendationEngine:
    """Evaluates every rule in order without short-circuiting."""

    def __init__(self, rules: Sequence[Rule] = None):
        self.rules = list(RULES if rules is None else rules)

    def evaluate(self, metrics: WindowMetrics) -> List[Recommendation]:
        fired = []
        for rule in self.rules:
            if rule.applies(metrics):
                logger.debug("Recommendation rule fired: %s", rule.name)
                # Copy so callers cannot mutate the rule table
                fired.append(Recommendation(**asdict(rule.effect)))
        return fired

