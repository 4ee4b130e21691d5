"""
Focus (pomodoro) session API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store
from backend.errors import http_errors
from backend.schemas import FocusSessionCreate, FocusSessionUpdate, FocusSessionResponse

router = APIRouter(prefix="/api/pomodoro-sessions", tags=["focus"])


@router.get("", response_model=List[FocusSessionResponse])
async def list_focus_sessions(
    task_id: Optional[int] = Query(None, alias="taskId", description="Only sessions for this task"),
    store: RecordStore = Depends(get_store),
):
    return [s.to_dict() for s in store.list_focus_sessions(task_id=task_id)]


@router.post("", response_model=FocusSessionResponse, status_code=201)
async def create_focus_session(
    session: FocusSessionCreate,
    store: RecordStore = Depends(get_store),
):
    """
    Start (or log) a focus session.

    The referenced task is not required to exist; sessions keep a plain
    task id.
    """
    with http_errors():
        return store.focus_sessions.create(session.model_dump(exclude_unset=True)).to_dict()


@router.patch("/{session_id}", response_model=FocusSessionResponse)
async def update_focus_session(
    session_id: int,
    session: FocusSessionUpdate,
    store: RecordStore = Depends(get_store),
):
    """Update a session; marking it completed stamps completed_at once."""
    with http_errors():
        return store.focus_sessions.update(
            session_id, session.model_dump(exclude_unset=True)
        ).to_dict()
