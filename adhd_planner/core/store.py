"""
Record store for ADHD Planner

Holds every record kind behind a generic Repository backed by an
injectable StorageAdapter:

- MemoryAdapter: dict-per-kind, used by tests and the default API app
- SQLiteAdapter: JSON payloads in SQLite, ids survive restarts

Records are stored as plain dictionaries keyed by id and rebuilt into
model instances on every read, so callers never share mutable state with
the store. Ids come from per-kind monotonic counters and are never reused
after deletion.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from .database import SQLiteDatabase, get_database
from .errors import InvalidRecord, NotFound
from .models import (
    RECORD_TYPES,
    DEFAULT_EMERGENCY_PLANS,
    Task,
    MoodEntry,
    FocusSession,
    RoutineBlock,
    CognitiveReframe,
    EmergencyPlan,
    parse_datetime,
    start_of_day,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Id allocation
# =============================================================================

class IdAllocator:
    """Per-kind monotonic id counters"""

    def __init__(self, start: Optional[Dict[str, int]] = None):
        self._counters: Dict[str, int] = dict(start or {})

    def allocate(self, kind: str) -> int:
        """Return the next id for a kind"""
        self._counters[kind] = self._counters.get(kind, 0) + 1
        return self._counters[kind]

    def last_id(self, kind: str) -> int:
        """Return the most recently allocated id (0 if none)"""
        return self._counters.get(kind, 0)


# =============================================================================
# Storage adapters
# =============================================================================

class StorageAdapter(ABC):
    """Persistence interface used by Repository"""

    @abstractmethod
    def allocate_id(self, kind: str) -> int:
        """Allocate a fresh id for a kind"""
        pass

    @abstractmethod
    def last_id(self, kind: str) -> int:
        """Most recently allocated id for a kind (0 if none)"""
        pass

    @abstractmethod
    def load(self, kind: str, record_id: int) -> Optional[Dict[str, Any]]:
        """Return the stored payload or None"""
        pass

    @abstractmethod
    def save(self, kind: str, record_id: int, payload: Dict[str, Any]) -> None:
        """Insert or replace a payload"""
        pass

    @abstractmethod
    def remove(self, kind: str, record_id: int) -> bool:
        """Delete a payload; returns False if it was absent"""
        pass

    @abstractmethod
    def scan(self, kind: str) -> List[Dict[str, Any]]:
        """Return every payload of a kind"""
        pass


class MemoryAdapter(StorageAdapter):
    """In-memory adapter (one dict per kind)"""

    def __init__(self, id_allocator: Optional[IdAllocator] = None):
        self.id_allocator = id_allocator or IdAllocator()
        self._records: Dict[str, Dict[int, Dict[str, Any]]] = {}

    def allocate_id(self, kind: str) -> int:
        return self.id_allocator.allocate(kind)

    def last_id(self, kind: str) -> int:
        return self.id_allocator.last_id(kind)

    def load(self, kind: str, record_id: int) -> Optional[Dict[str, Any]]:
        payload = self._records.get(kind, {}).get(record_id)
        return copy.deepcopy(payload) if payload is not None else None

    def save(self, kind: str, record_id: int, payload: Dict[str, Any]) -> None:
        self._records.setdefault(kind, {})[record_id] = copy.deepcopy(payload)

    def remove(self, kind: str, record_id: int) -> bool:
        return self._records.get(kind, {}).pop(record_id, None) is not None

    def scan(self, kind: str) -> List[Dict[str, Any]]:
        return [copy.deepcopy(p) for p in self._records.get(kind, {}).values()]


class SQLiteAdapter(StorageAdapter):
    """SQLite adapter storing JSON payloads in a single records table"""

    def __init__(self, db: SQLiteDatabase):
        self.db = db
        self.db.initialize_schema()

    def allocate_id(self, kind: str) -> int:
        with self.db.transaction() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO id_counters (kind, last_id) VALUES (?, 0)",
                (kind,),
            )
            conn.execute(
                "UPDATE id_counters SET last_id = last_id + 1 WHERE kind = ?",
                (kind,),
            )
            row = conn.execute(
                "SELECT last_id FROM id_counters WHERE kind = ?", (kind,)
            ).fetchone()
            return row["last_id"]

    def last_id(self, kind: str) -> int:
        row = self.db.execute_one(
            "SELECT last_id FROM id_counters WHERE kind = ?", (kind,)
        )
        return row["last_id"] if row else 0

    def load(self, kind: str, record_id: int) -> Optional[Dict[str, Any]]:
        row = self.db.execute_one(
            "SELECT payload FROM records WHERE kind = ? AND id = ?",
            (kind, record_id),
        )
        return json.loads(row["payload"]) if row else None

    def save(self, kind: str, record_id: int, payload: Dict[str, Any]) -> None:
        model = RECORD_TYPES[kind]
        self.db.execute_write(
            """INSERT OR REPLACE INTO records (kind, id, payload, recorded_at)
               VALUES (?, ?, ?, ?)""",
            (kind, record_id, json.dumps(payload), payload.get(model.TIMESTAMP_FIELD)),
        )

    def remove(self, kind: str, record_id: int) -> bool:
        deleted = self.db.execute_write(
            "DELETE FROM records WHERE kind = ? AND id = ?", (kind, record_id)
        )
        return deleted > 0

    def scan(self, kind: str) -> List[Dict[str, Any]]:
        rows = self.db.execute(
            "SELECT payload FROM records WHERE kind = ? ORDER BY id", (kind,)
        )
        return [json.loads(row["payload"]) for row in rows]


# =============================================================================
# Repository
# =============================================================================

class Repository(Generic[T]):
    """
    CRUD access to one record kind.

    Stamps ids and creation timestamps on create, merges partial updates,
    and sets completed_at the first time a task or session is completed.
    """

    def __init__(self, model: Type[T], adapter: StorageAdapter,
                 clock: Callable[[], datetime] = datetime.now):
        self.model = model
        self.kind = model.KIND
        self.adapter = adapter
        self.clock = clock

    def _check_fields(self, payload: Dict[str, Any]) -> None:
        known = set(self.model.field_names())
        unknown = sorted(set(payload) - known)
        if unknown:
            raise InvalidRecord(f"Unknown {self.kind} field(s): {', '.join(unknown)}")
        read_only = sorted(set(payload) & set(self.model.READ_ONLY_FIELDS))
        if read_only:
            raise InvalidRecord(
                f"Read-only {self.kind} field(s): {', '.join(read_only)}",
                field=read_only[0],
            )

    def create(self, payload: Dict[str, Any]) -> T:
        """Create a record from a payload, stamping id and creation time"""
        self._check_fields(payload)
        record = self.model.from_dict(payload)
        record.validate()

        record.id = self.adapter.allocate_id(self.kind)
        if self.model.TIMESTAMP_FIELD in self.model.READ_ONLY_FIELDS:
            setattr(record, self.model.TIMESTAMP_FIELD, self.clock())
        self._stamp_completion(record, previous=None)

        self.adapter.save(self.kind, record.id, record.to_dict())
        logger.debug("Created %s %s", self.kind, record.id)
        return self.model.from_dict(record.to_dict())

    def find(self, record_id: int) -> Optional[T]:
        """Return the record or None"""
        payload = self.adapter.load(self.kind, record_id)
        return self.model.from_dict(payload) if payload is not None else None

    def get(self, record_id: int) -> T:
        """Return the record or raise NotFound"""
        record = self.find(record_id)
        if record is None:
            raise NotFound(self.kind, record_id)
        return record

    def all(self) -> List[T]:
        return [self.model.from_dict(p) for p in self.adapter.scan(self.kind)]

    def update(self, record_id: int, partial: Dict[str, Any]) -> T:
        """Merge a partial payload over an existing record"""
        self._check_fields(partial)
        existing = self.get(record_id)

        merged = existing.to_dict()
        merged.update(partial)
        record = self.model.from_dict(merged)
        record.validate()
        self._stamp_completion(record, previous=existing)

        self.adapter.save(self.kind, record_id, record.to_dict())
        logger.debug("Updated %s %s (%s)", self.kind, record_id, ", ".join(sorted(partial)))
        return self.model.from_dict(record.to_dict())

    def delete(self, record_id: int) -> None:
        """Delete a record or raise NotFound"""
        if not self.adapter.remove(self.kind, record_id):
            raise NotFound(self.kind, record_id)
        logger.debug("Deleted %s %s", self.kind, record_id)

    def _stamp_completion(self, record: Any, previous: Optional[Any]) -> None:
        # completed_at is set once, on the first transition to completed
        already_stamped = previous is not None and previous.completed_at is not None
        if isinstance(record, Task):
            if record.status == "completed" and not already_stamped:
                record.completed_at = self.clock()
            elif previous is not None:
                record.completed_at = previous.completed_at
        elif isinstance(record, FocusSession):
            if record.completed and not already_stamped:
                record.completed_at = self.clock()
            elif previous is not None:
                record.completed_at = previous.completed_at


def _by_recency(records: List[Any]) -> List[Any]:
    """Newest first; ties broken by id"""
    return sorted(
        records,
        key=lambda r: (r.recorded_at() or datetime.min, r.id or 0),
        reverse=True,
    )


# =============================================================================
# Record store
# =============================================================================

class RecordStore:
    """
    Facade over the six repositories.

    Generic entry points take a kind name ('task', 'mood_entry',
    'focus_session', 'routine_block', 'cognitive_reframe',
    'emergency_plan'); the typed list_* methods carry the filters.
    """

    def __init__(self, adapter: Optional[StorageAdapter] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 seed_defaults: bool = True):
        self.adapter = adapter or MemoryAdapter()
        self.clock = clock

        self.tasks: Repository[Task] = Repository(Task, self.adapter, clock)
        self.mood_entries: Repository[MoodEntry] = Repository(MoodEntry, self.adapter, clock)
        self.focus_sessions: Repository[FocusSession] = Repository(FocusSession, self.adapter, clock)
        self.routine_blocks: Repository[RoutineBlock] = Repository(RoutineBlock, self.adapter, clock)
        self.cognitive_reframes: Repository[CognitiveReframe] = Repository(
            CognitiveReframe, self.adapter, clock
        )
        self.emergency_plans: Repository[EmergencyPlan] = Repository(
            EmergencyPlan, self.adapter, clock
        )

        self._repositories = {
            Task.KIND: self.tasks,
            MoodEntry.KIND: self.mood_entries,
            FocusSession.KIND: self.focus_sessions,
            RoutineBlock.KIND: self.routine_blocks,
            CognitiveReframe.KIND: self.cognitive_reframes,
            EmergencyPlan.KIND: self.emergency_plans,
        }
        self._listers = {
            Task.KIND: self.list_tasks,
            MoodEntry.KIND: self.list_mood_entries,
            FocusSession.KIND: self.list_focus_sessions,
            RoutineBlock.KIND: self.list_routine_blocks,
            CognitiveReframe.KIND: self.list_cognitive_reframes,
            EmergencyPlan.KIND: self.list_emergency_plans,
        }

        if seed_defaults:
            self._seed_emergency_plans()

    def _seed_emergency_plans(self) -> None:
        # Only on a store that has never held a plan
        if self.adapter.last_id(EmergencyPlan.KIND) > 0:
            return
        for plan in DEFAULT_EMERGENCY_PLANS:
            self.emergency_plans.create(dict(plan))
        logger.info("Seeded %d default emergency plans", len(DEFAULT_EMERGENCY_PLANS))

    def repository(self, kind: str) -> Repository:
        try:
            return self._repositories[kind]
        except KeyError:
            raise ValueError(f"Unknown record kind: {kind}")

    # -------------------------------------------------------------------------
    # Generic CRUD
    # -------------------------------------------------------------------------

    def create(self, kind: str, payload: Dict[str, Any]):
        return self.repository(kind).create(payload)

    def get(self, kind: str, record_id: int):
        return self.repository(kind).get(record_id)

    def update(self, kind: str, record_id: int, partial: Dict[str, Any]):
        return self.repository(kind).update(record_id, partial)

    def delete(self, kind: str, record_id: int) -> None:
        self.repository(kind).delete(record_id)

    def list(self, kind: str, **filters) -> List[Any]:
        self.repository(kind)
        return self._listers[kind](**filters)

    # -------------------------------------------------------------------------
    # Filtered reads
    # -------------------------------------------------------------------------

    def list_tasks(self, status: Optional[str] = None,
                   limit: Optional[int] = None) -> List[Task]:
        tasks = self.tasks.all()
        if status:
            tasks = [t for t in tasks if t.status == status]
        return _by_recency(tasks)[:limit]

    def list_mood_entries(self, limit: Optional[int] = None) -> List[MoodEntry]:
        return _by_recency(self.mood_entries.all())[:limit]

    def list_focus_sessions(self, task_id: Optional[int] = None) -> List[FocusSession]:
        sessions = self.focus_sessions.all()
        if task_id is not None:
            sessions = [s for s in sessions if s.task_id == task_id]
        return _by_recency(sessions)

    def list_routine_blocks(self, week_of=None) -> List[RoutineBlock]:
        """
        Routine blocks, optionally for one week.

        A block matches when its week_of and the query anchor fall on the
        same calendar day; time of day is ignored on both sides.
        """
        blocks = self.routine_blocks.all()
        if week_of is None:
            return sorted(
                blocks,
                key=lambda b: (-start_of_day(b.week_of).toordinal(), b.day_of_week, b.start_hour),
            )
        anchor = start_of_day(parse_datetime(week_of))
        blocks = [b for b in blocks if start_of_day(b.week_of) == anchor]
        return sorted(blocks, key=lambda b: (b.day_of_week, b.start_hour))

    def list_cognitive_reframes(self, limit: Optional[int] = None) -> List[CognitiveReframe]:
        return _by_recency(self.cognitive_reframes.all())[:limit]

    def list_emergency_plans(self, include_inactive: bool = False) -> List[EmergencyPlan]:
        plans = self.emergency_plans.all()
        if not include_inactive:
            plans = [p for p in plans if p.is_active]
        return _by_recency(plans)


def create_store(config=None, clock: Callable[[], datetime] = datetime.now) -> RecordStore:
    """
    Build a RecordStore for the configured backend.

    Args:
        config: Config instance; memory backend when omitted
        clock: Timestamp source for created records
    """
    backend = config.get_storage_backend() if config is not None else "memory"
    if backend == "sqlite":
        adapter: StorageAdapter = SQLiteAdapter(get_database(config))
    elif backend == "memory":
        adapter = MemoryAdapter()
    else:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info("Record store using %s backend", backend)
    return RecordStore(adapter, clock=clock)
