"""
Metrics aggregation for weekly and daily analysis.

Reduces the tasks, mood entries and focus sessions of a time window into
scalar metrics. Every function here is a pure function of its input.

Empty-input defaults:
    - completion rates are 0 when there is nothing to complete
    - average mood is NEUTRAL_MOOD (3.0) when no moods were logged
    - estimation accuracy is None when no completed task has both an
      estimate and an actual time (excluded, not counted as 0%)

All percentages are clamped to [0, 100].
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from adhd_planner.core.models import (
    TASK_PRIORITIES,
    Task,
    MoodEntry,
    FocusSession,
    RoutineBlock,
    CognitiveReframe,
    mood_value,
)
from adhd_planner.analytics.windows import TimeWindow, days, select


# Mood reported for a window with no mood entries (midpoint of the 1-5 scale)
NEUTRAL_MOOD = 3.0

# Score buckets for performance labels
PERFORMANCE_LEVELS = [
    (80, "excellent"),
    (60, "good"),
    (40, "fair"),
]


def clamp_percent(value: float) -> float:
    """Clamp a percentage to [0, 100]."""
    return max(0.0, min(100.0, value))


def _rate(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return clamp_percent(part / whole * 100)


def task_completion_rate(tasks: Sequence[Task]) -> float:
    """Percentage of tasks with status 'completed' (0 for no tasks)."""
    completed = sum(1 for t in tasks if t.is_completed())
    return _rate(completed, len(tasks))


def average_mood(moods: Sequence[MoodEntry]) -> float:
    """
    Mean ordinal mood value.

    Returns NEUTRAL_MOOD for an empty list. Raises InvalidRecord on an
    unknown mood label rather than skipping it.
    """
    if not moods:
        return NEUTRAL_MOOD
    return sum(mood_value(m.mood) for m in moods) / len(moods)


def focus_minutes(sessions: Iterable[FocusSession]) -> int:
    """Minutes spent in completed work sessions."""
    return sum(s.duration for s in sessions if s.completed and s.type == "work")


def break_minutes(sessions: Iterable[FocusSession]) -> int:
    """Minutes spent in completed breaks (short and long)."""
    return sum(s.duration for s in sessions if s.completed and s.type != "work")


def session_completion_rate(sessions: Sequence[FocusSession]) -> float:
    """Percentage of sessions marked completed (0 for no sessions)."""
    completed = sum(1 for s in sessions if s.completed)
    return _rate(completed, len(sessions))


def average_session_length(sessions: Iterable[FocusSession]) -> float:
    """Mean duration of completed work sessions (0 when there are none)."""
    work = [s.duration for s in sessions if s.completed and s.type == "work"]
    return sum(work) / len(work) if work else 0.0


def estimation_accuracy(task: Task) -> Optional[float]:
    """
    How close the actual time came to the estimate, as a percentage.

    accuracy = max(0, 100 - |estimated - actual| / estimated * 100)

    Returns None when the task lacks a positive estimate or an actual time.
    """
    if not task.estimated_minutes or task.actual_minutes is None:
        return None
    difference = abs(task.estimated_minutes - task.actual_minutes)
    return clamp_percent(100 - difference / task.estimated_minutes * 100)


def average_estimation_accuracy(tasks: Iterable[Task]) -> Optional[float]:
    """Mean accuracy over completed tasks that have both times recorded."""
    scores = [
        score for score in (estimation_accuracy(t) for t in tasks if t.is_completed())
        if score is not None
    ]
    if not scores:
        return None
    return sum(scores) / len(scores)


def priority_distribution(tasks: Iterable[Task]) -> Dict[str, int]:
    """Task count per Eisenhower quadrant (every quadrant present)."""
    distribution = {priority: 0 for priority in TASK_PRIORITIES}
    for task in tasks:
        if task.priority in distribution:
            distribution[task.priority] += 1
    return distribution


def urgent_important_count(tasks: Iterable[Task]) -> int:
    return sum(1 for t in tasks if t.priority == "urgent-important")


def performance_level(score: float) -> str:
    """Label a 0-100 score: excellent, good, fair or needs-improvement."""
    for threshold, label in PERFORMANCE_LEVELS:
        if score >= threshold:
            return label
    return "needs-improvement"


@dataclass
class DayStats:
    """Activity for one calendar day."""
    window: TimeWindow
    tasks_created: int = 0
    tasks_completed: int = 0
    completion_rate: float = 0.0
    focus_minutes: int = 0
    sessions_completed: int = 0
    mood_entries: int = 0
    average_mood: Optional[float] = None

    def to_dict(self) -> Dict:
        return {
            "date": self.window.start.date().isoformat(),
            "tasks_created": self.tasks_created,
            "tasks_completed": self.tasks_completed,
            "completion_rate": round(self.completion_rate, 1),
            "focus_minutes": self.focus_minutes,
            "sessions_completed": self.sessions_completed,
            "mood_entries": self.mood_entries,
            "average_mood": round(self.average_mood, 2) if self.average_mood is not None else None,
        }


@dataclass
class WindowMetrics:
    """Metrics for the records of one time window."""
    window: TimeWindow

    # Tasks
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    pending_tasks: int = 0
    completion_rate: float = 0.0
    urgent_important_count: int = 0
    priority_distribution: Dict[str, int] = field(default_factory=dict)
    estimated_minutes_total: int = 0
    actual_minutes_total: int = 0
    estimation_accuracy: Optional[float] = None

    # Mood
    mood_entry_count: int = 0
    average_mood: float = NEUTRAL_MOOD

    # Focus
    total_sessions: int = 0
    completed_sessions: int = 0
    session_completion_rate: float = 0.0
    focus_minutes: int = 0
    break_minutes: int = 0
    average_session_length: float = 0.0

    # Routine and reframing
    reframe_count: int = 0
    routine_blocks_total: int = 0
    routine_blocks_completed: int = 0

    daily: List[DayStats] = field(default_factory=list)

    @property
    def incomplete_tasks(self) -> int:
        return self.total_tasks - self.completed_tasks

    @property
    def incomplete_sessions(self) -> int:
        return self.total_sessions - self.completed_sessions

    @property
    def focus_hours(self) -> float:
        return self.focus_minutes / 60

    @property
    def routine_completion_rate(self) -> float:
        return _rate(self.routine_blocks_completed, self.routine_blocks_total)

    def has_activity(self) -> bool:
        """True when the window holds any task, mood entry or session."""
        return bool(self.total_tasks or self.mood_entry_count or self.total_sessions)

    def best_focus_day(self) -> Optional[DayStats]:
        """Day with the most focus minutes (earliest on ties, None if no focus)."""
        best = None
        for day in self.daily:
            if day.focus_minutes > 0 and (best is None or day.focus_minutes > best.focus_minutes):
                best = day
        return best

    def to_dict(self) -> Dict:
        best_day = self.best_focus_day()
        return {
            "window": self.window.to_dict(),
            "tasks": {
                "total": self.total_tasks,
                "completed": self.completed_tasks,
                "in_progress": self.in_progress_tasks,
                "pending": self.pending_tasks,
                "completion_rate": round(self.completion_rate, 1),
                "urgent_important": self.urgent_important_count,
                "priority_distribution": dict(self.priority_distribution),
                "estimated_minutes": self.estimated_minutes_total,
                "actual_minutes": self.actual_minutes_total,
                "estimation_accuracy": (
                    round(self.estimation_accuracy, 1)
                    if self.estimation_accuracy is not None else None
                ),
            },
            "mood": {
                "entries": self.mood_entry_count,
                "average": round(self.average_mood, 2),
            },
            "focus": {
                "sessions": self.total_sessions,
                "completed_sessions": self.completed_sessions,
                "session_completion_rate": round(self.session_completion_rate, 1),
                "focus_minutes": self.focus_minutes,
                "break_minutes": self.break_minutes,
                "average_session_length": round(self.average_session_length, 1),
                "best_day": best_day.to_dict() if best_day else None,
            },
            "routine": {
                "blocks": self.routine_blocks_total,
                "completed": self.routine_blocks_completed,
                "completion_rate": round(self.routine_completion_rate, 1),
            },
            "reframes": self.reframe_count,
            "daily": [d.to_dict() for d in self.daily],
        }


class MetricsAggregator:
    """
    Windows raw records and reduces them to WindowMetrics.

    Inputs are already-materialized record lists; records outside the
    window are ignored, so callers can pass the full history.
    """

    def aggregate(
        self,
        window: TimeWindow,
        tasks: Iterable[Task] = (),
        moods: Iterable[MoodEntry] = (),
        sessions: Iterable[FocusSession] = (),
        reframes: Iterable[CognitiveReframe] = (),
        routine_blocks: Iterable[RoutineBlock] = (),
    ) -> WindowMetrics:
        """
        Compute metrics for a window.

        Args:
            window: Time window to aggregate
            tasks: Tasks (windowed by created_at)
            moods: Mood entries (windowed by timestamp)
            sessions: Focus sessions (windowed by started_at)
            reframes: Cognitive reframes (windowed by created_at)
            routine_blocks: Routine blocks (windowed by week_of)

        Returns:
            WindowMetrics for the records inside the window
        """
        window_tasks = select(tasks, window)
        window_moods = select(moods, window)
        window_sessions = select(sessions, window)
        window_reframes = select(reframes, window)
        window_blocks = select(routine_blocks, window)

        completed = [t for t in window_tasks if t.is_completed()]

        return WindowMetrics(
            window=window,
            total_tasks=len(window_tasks),
            completed_tasks=len(completed),
            in_progress_tasks=sum(1 for t in window_tasks if t.status == "in-progress"),
            pending_tasks=sum(1 for t in window_tasks if t.status == "pending"),
            completion_rate=task_completion_rate(window_tasks),
            urgent_important_count=urgent_important_count(window_tasks),
            priority_distribution=priority_distribution(window_tasks),
            estimated_minutes_total=sum(t.estimated_minutes or 0 for t in window_tasks),
            actual_minutes_total=sum(t.actual_minutes or 0 for t in completed),
            estimation_accuracy=average_estimation_accuracy(window_tasks),
            mood_entry_count=len(window_moods),
            average_mood=average_mood(window_moods),
            total_sessions=len(window_sessions),
            completed_sessions=sum(1 for s in window_sessions if s.completed),
            session_completion_rate=session_completion_rate(window_sessions),
            focus_minutes=focus_minutes(window_sessions),
            break_minutes=break_minutes(window_sessions),
            average_session_length=average_session_length(window_sessions),
            reframe_count=len(window_reframes),
            routine_blocks_total=len(window_blocks),
            routine_blocks_completed=sum(1 for b in window_blocks if b.completed),
            daily=self.daily_breakdown(window, window_tasks, window_moods, window_sessions),
        )

    def daily_breakdown(
        self,
        window: TimeWindow,
        tasks: Sequence[Task],
        moods: Sequence[MoodEntry],
        sessions: Sequence[FocusSession],
    ) -> List[DayStats]:
        """Per-day statistics for each calendar day in the window."""
        breakdown = []
        for day in days(window):
            day_tasks = select(tasks, day)
            day_moods = select(moods, day)
            day_sessions = select(sessions, day)
            breakdown.append(DayStats(
                window=day,
                tasks_created=len(day_tasks),
                tasks_completed=sum(1 for t in day_tasks if t.is_completed()),
                completion_rate=task_completion_rate(day_tasks),
                focus_minutes=focus_minutes(day_sessions),
                sessions_completed=sum(1 for s in day_sessions if s.completed),
                mood_entries=len(day_moods),
                average_mood=average_mood(day_moods) if day_moods else None,
            ))
        return breakdown
