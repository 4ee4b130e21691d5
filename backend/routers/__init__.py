"""
API routers for the ADHD Planner backend.

Each router handles a specific domain:
- tasks: Task CRUD
- mood_entries: Mood logging
- focus_sessions: Pomodoro sessions
- routine_blocks: Weekly routine board
- reframes: Cognitive reframes
- emergency_plans: Coping plans
- analysis: Weekly/daily analysis reports
"""

from .tasks import router as tasks_router
from .mood_entries import router as mood_entries_router
from .focus_sessions import router as focus_sessions_router
from .routine_blocks import router as routine_blocks_router
from .reframes import router as reframes_router
from .emergency_plans import router as emergency_plans_router
from .analysis import router as analysis_router

__all__ = [
    'tasks_router',
    'mood_entries_router',
    'focus_sessions_router',
    'routine_blocks_router',
    'reframes_router',
    'emergency_plans_router',
    'analysis_router',
]
