"""
Core module for ADHD Planner
Contains configuration, database, models and the record store
"""

from .config import Config
from .database import Database, get_database
from .errors import PlannerError, NotFound, InvalidWindow, InvalidRecord
from .models import (
    Task,
    TaskStep,
    MoodEntry,
    FocusSession,
    RoutineBlock,
    CognitiveReframe,
    EmergencyPlan,
)
from .store import RecordStore, Repository, MemoryAdapter, SQLiteAdapter, IdAllocator, create_store

__all__ = [
    'Config', 'Database', 'get_database',
    'PlannerError', 'NotFound', 'InvalidWindow', 'InvalidRecord',
    'Task', 'TaskStep', 'MoodEntry', 'FocusSession', 'RoutineBlock',
    'CognitiveReframe', 'EmergencyPlan',
    'RecordStore', 'Repository', 'MemoryAdapter', 'SQLiteAdapter', 'IdAllocator',
    'create_store',
]
