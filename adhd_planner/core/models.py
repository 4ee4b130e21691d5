"""
Data models for ADHD Planner
Defines the record kinds held by the record store: tasks, mood entries,
focus sessions, routine blocks, cognitive reframes and emergency plans.

Every model round-trips through plain dictionaries (``to_dict`` /
``from_dict``) so the same payload can live in memory, in SQLite as JSON,
or travel over the API.
"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Optional, List, Dict, Any, Tuple

from .errors import InvalidRecord


# Eisenhower quadrants (urgency x importance)
TASK_PRIORITIES = (
    "urgent-important",
    "urgent-not-important",
    "not-urgent-important",
    "not-urgent-not-important",
)

TASK_STATUSES = ("pending", "in-progress", "completed")

# Ordinal mood scale
MOOD_VALUES = {
    "very-sad": 1,
    "sad": 2,
    "neutral": 3,
    "happy": 4,
    "very-happy": 5,
}

SESSION_TYPES = ("work", "break", "long-break")


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time (naive values pass through)"""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a datetime from an ISO string.

    All stored datetimes are naive local time: aware values, such as the
    web client's "...Z" strings, are converted on the way in.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return to_local_naive(datetime.fromisoformat(text))
    except ValueError:
        raise InvalidRecord(f"Invalid datetime: {value!r}")


def start_of_day(value) -> datetime:
    """Truncate a date or datetime to local midnight (naive)"""
    if isinstance(value, datetime):
        return to_local_naive(value).replace(hour=0, minute=0, second=0, microsecond=0)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format datetime as ISO string for storage"""
    return value.isoformat() if value else None


def require_int(value: Any, field: str, optional: bool = False) -> None:
    """Raise InvalidRecord unless value is an int (bool excluded)"""
    if value is None and optional:
        return
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidRecord(f"{field} must be an integer, got {value!r}", field=field)


def mood_value(mood: str) -> int:
    """
    Map a mood label to its 1-5 ordinal value.

    Raises:
        InvalidRecord: if the label is not one of the five moods
    """
    try:
        return MOOD_VALUES[mood]
    except (KeyError, TypeError):
        raise InvalidRecord(f"Unknown mood: {mood!r}", field="mood")


class RecordMixin:
    """Shared helpers for store-managed records"""

    KIND: str = ""
    # Field stamped with the creation time (used for recency and windowing)
    TIMESTAMP_FIELD: str = "created_at"
    # Fields only the store may set
    READ_ONLY_FIELDS: Tuple[str, ...] = ("id",)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def recorded_at(self) -> Optional[datetime]:
        """Return the datetime used to place this record in a time window"""
        return getattr(self, self.TIMESTAMP_FIELD)

    def validate(self) -> None:
        """Override to enforce model invariants"""
        pass


@dataclass
class TaskStep:
    """One step of a decomposed task"""
    id: str = ""
    title: str = ""
    estimated_minutes: int = 5
    completed: bool = False
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaskStep':
        return cls(
            id=str(data.get('id', '')),
            title=data.get('title', ''),
            estimated_minutes=data.get('estimated_minutes', 5),
            completed=bool(data.get('completed', False)),
            completed_at=parse_datetime(data.get('completed_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'estimated_minutes': self.estimated_minutes,
            'completed': self.completed,
            'completed_at': format_datetime(self.completed_at),
        }


@dataclass
class Task(RecordMixin):
    """Task data model"""
    KIND = "task"
    READ_ONLY_FIELDS = ("id", "created_at", "completed_at")

    id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    priority: str = "not-urgent-important"
    status: str = "pending"  # 'pending', 'in-progress', 'completed'
    estimated_minutes: Optional[int] = None
    actual_minutes: Optional[int] = None
    steps: List[TaskStep] = field(default_factory=list)
    current_step_index: int = 0
    minimal_viable_task: Optional[str] = None
    emotional_state: Optional[str] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create Task from a stored dictionary"""
        return cls(
            id=data.get('id'),
            title=data.get('title', ''),
            description=data.get('description'),
            priority=data.get('priority', 'not-urgent-important'),
            status=data.get('status', 'pending'),
            estimated_minutes=data.get('estimated_minutes'),
            actual_minutes=data.get('actual_minutes'),
            steps=[
                s if isinstance(s, TaskStep) else TaskStep.from_dict(s)
                for s in (data.get('steps') or [])
            ],
            current_step_index=data.get('current_step_index') or 0,
            minimal_viable_task=data.get('minimal_viable_task'),
            emotional_state=data.get('emotional_state'),
            created_at=parse_datetime(data.get('created_at')),
            completed_at=parse_datetime(data.get('completed_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'status': self.status,
            'estimated_minutes': self.estimated_minutes,
            'actual_minutes': self.actual_minutes,
            'steps': [s.to_dict() for s in self.steps],
            'current_step_index': self.current_step_index,
            'minimal_viable_task': self.minimal_viable_task,
            'emotional_state': self.emotional_state,
            'created_at': format_datetime(self.created_at),
            'completed_at': format_datetime(self.completed_at),
        }

    def is_completed(self) -> bool:
        return self.status == "completed"

    def current_step(self) -> Optional[TaskStep]:
        """Return the step the user is working on, if any remain"""
        if self.current_step_index < len(self.steps):
            return self.steps[self.current_step_index]
        return None

    def validate(self) -> None:
        if not self.title:
            raise InvalidRecord("Task title is required", field="title")
        if self.priority not in TASK_PRIORITIES:
            raise InvalidRecord(f"Invalid priority: {self.priority!r}", field="priority")
        if self.status not in TASK_STATUSES:
            raise InvalidRecord(f"Invalid status: {self.status!r}", field="status")
        for name in ("estimated_minutes", "actual_minutes"):
            value = getattr(self, name)
            require_int(value, name, optional=True)
            if value is not None and value < 0:
                raise InvalidRecord(f"{name} cannot be negative", field=name)
        require_int(self.current_step_index, "current_step_index")
        if not 0 <= self.current_step_index <= len(self.steps):
            raise InvalidRecord(
                "current_step_index must be between 0 and the number of steps",
                field="current_step_index",
            )


@dataclass
class MoodEntry(RecordMixin):
    """Mood check-in"""
    KIND = "mood_entry"
    TIMESTAMP_FIELD = "timestamp"
    READ_ONLY_FIELDS = ("id", "timestamp")

    id: Optional[int] = None
    mood: str = "neutral"  # 'very-sad', 'sad', 'neutral', 'happy', 'very-happy'
    emotional_state: Optional[str] = None
    triggers: List[str] = field(default_factory=list)
    notes: Optional[str] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoodEntry':
        return cls(
            id=data.get('id'),
            mood=data.get('mood', 'neutral'),
            emotional_state=data.get('emotional_state'),
            triggers=list(data.get('triggers') or []),
            notes=data.get('notes'),
            timestamp=parse_datetime(data.get('timestamp')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'mood': self.mood,
            'emotional_state': self.emotional_state,
            'triggers': list(self.triggers),
            'notes': self.notes,
            'timestamp': format_datetime(self.timestamp),
        }

    @property
    def value(self) -> int:
        return mood_value(self.mood)

    def validate(self) -> None:
        mood_value(self.mood)


@dataclass
class FocusSession(RecordMixin):
    """Pomodoro-style focus or break session"""
    KIND = "focus_session"
    TIMESTAMP_FIELD = "started_at"
    READ_ONLY_FIELDS = ("id", "started_at", "completed_at")

    id: Optional[int] = None
    task_id: Optional[int] = None
    duration: int = 25  # minutes
    type: str = "work"  # 'work', 'break', 'long-break'
    completed: bool = False
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FocusSession':
        return cls(
            id=data.get('id'),
            task_id=data.get('task_id'),
            duration=data.get('duration', 25),
            type=data.get('type', 'work'),
            completed=bool(data.get('completed', False)),
            started_at=parse_datetime(data.get('started_at')),
            completed_at=parse_datetime(data.get('completed_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'task_id': self.task_id,
            'duration': self.duration,
            'type': self.type,
            'completed': self.completed,
            'started_at': format_datetime(self.started_at),
            'completed_at': format_datetime(self.completed_at),
        }

    def validate(self) -> None:
        require_int(self.duration, "duration")
        if self.duration <= 0:
            raise InvalidRecord("Session duration must be positive", field="duration")
        if self.type not in SESSION_TYPES:
            raise InvalidRecord(f"Invalid session type: {self.type!r}", field="type")


@dataclass
class RoutineBlock(RecordMixin):
    """Block on the weekly routine board"""
    KIND = "routine_block"
    TIMESTAMP_FIELD = "week_of"

    id: Optional[int] = None
    day_of_week: int = 0  # 0-6 (Sunday-Saturday)
    start_hour: int = 9
    end_hour: int = 10
    activity: str = ""
    color: str = "blue"
    completed: bool = False
    week_of: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RoutineBlock':
        return cls(
            id=data.get('id'),
            day_of_week=data.get('day_of_week', 0),
            start_hour=data.get('start_hour', 9),
            end_hour=data.get('end_hour', 10),
            activity=data.get('activity', ''),
            color=data.get('color', 'blue'),
            completed=bool(data.get('completed', False)),
            week_of=parse_datetime(data.get('week_of')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'day_of_week': self.day_of_week,
            'start_hour': self.start_hour,
            'end_hour': self.end_hour,
            'activity': self.activity,
            'color': self.color,
            'completed': self.completed,
            'week_of': format_datetime(self.week_of),
        }

    def validate(self) -> None:
        for name in ("day_of_week", "start_hour", "end_hour"):
            require_int(getattr(self, name), name)
        if not 0 <= self.day_of_week <= 6:
            raise InvalidRecord("day_of_week must be 0-6", field="day_of_week")
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise InvalidRecord(
                "start_hour must be before end_hour (0-24)", field="start_hour"
            )
        if not self.activity:
            raise InvalidRecord("Routine activity is required", field="activity")
        if self.week_of is None:
            raise InvalidRecord("week_of is required", field="week_of")


@dataclass
class CognitiveReframe(RecordMixin):
    """Negative thought rewritten as a balanced one"""
    KIND = "cognitive_reframe"
    READ_ONLY_FIELDS = ("id", "created_at")

    id: Optional[int] = None
    negative_thought: str = ""
    balanced_thought: str = ""
    situation: Optional[str] = None
    emotion_before: Optional[str] = None
    emotion_after: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CognitiveReframe':
        return cls(
            id=data.get('id'),
            negative_thought=data.get('negative_thought', ''),
            balanced_thought=data.get('balanced_thought', ''),
            situation=data.get('situation'),
            emotion_before=data.get('emotion_before'),
            emotion_after=data.get('emotion_after'),
            created_at=parse_datetime(data.get('created_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'negative_thought': self.negative_thought,
            'balanced_thought': self.balanced_thought,
            'situation': self.situation,
            'emotion_before': self.emotion_before,
            'emotion_after': self.emotion_after,
            'created_at': format_datetime(self.created_at),
        }

    def validate(self) -> None:
        if not self.negative_thought or not self.balanced_thought:
            raise InvalidRecord("Both negative and balanced thoughts are required")


@dataclass
class EmergencyPlan(RecordMixin):
    """Coping strategy for a known trigger"""
    KIND = "emergency_plan"
    READ_ONLY_FIELDS = ("id", "created_at")

    id: Optional[int] = None
    trigger: str = ""
    strategy: str = ""
    is_active: bool = True
    effectiveness: Optional[int] = None  # 1-5 rating
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EmergencyPlan':
        return cls(
            id=data.get('id'),
            trigger=data.get('trigger', ''),
            strategy=data.get('strategy', ''),
            is_active=bool(data.get('is_active', True)),
            effectiveness=data.get('effectiveness'),
            created_at=parse_datetime(data.get('created_at')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'trigger': self.trigger,
            'strategy': self.strategy,
            'is_active': self.is_active,
            'effectiveness': self.effectiveness,
            'created_at': format_datetime(self.created_at),
        }

    def validate(self) -> None:
        if not self.trigger or not self.strategy:
            raise InvalidRecord("Emergency plans need a trigger and a strategy")
        require_int(self.effectiveness, "effectiveness", optional=True)
        if self.effectiveness is not None and not 1 <= self.effectiveness <= 5:
            raise InvalidRecord("effectiveness must be 1-5", field="effectiveness")


# Plans seeded the first time a store is initialized
DEFAULT_EMERGENCY_PLANS = [
    {
        "trigger": "Feeling overwhelmed",
        "strategy": "Take 3 deep breaths, write down one small task, start with the 5-minute rule",
    },
    {
        "trigger": "Procrastination spiral",
        "strategy": "Use the traffic light technique: STOP, think about the minimal viable task, ACT on the smallest step",
    },
]

RECORD_TYPES = {
    cls.KIND: cls
    for cls in (Task, MoodEntry, FocusSession, RoutineBlock, CognitiveReframe, EmergencyPlan)
}
