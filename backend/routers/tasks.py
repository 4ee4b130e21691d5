"""
Task management API endpoints.

CRUD over the task repository. Completing a task through PATCH stamps
completed_at the first time only.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store
from backend.errors import http_errors
from backend.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskStatus

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filter by status"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of tasks"),
    store: RecordStore = Depends(get_store),
):
    """List tasks, newest first."""
    return [t.to_dict() for t in store.list_tasks(status=status, limit=limit)]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, store: RecordStore = Depends(get_store)):
    """Get a single task by ID."""
    with http_errors():
        return store.tasks.get(task_id).to_dict()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(task: TaskCreate, store: RecordStore = Depends(get_store)):
    """Create a new task; id and created_at are assigned by the store."""
    with http_errors():
        return store.tasks.create(task.model_dump(exclude_unset=True)).to_dict()


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task: TaskUpdate,
    store: RecordStore = Depends(get_store),
):
    """Partially update a task (only fields present in the body change)."""
    with http_errors():
        return store.tasks.update(task_id, task.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: int, store: RecordStore = Depends(get_store)):
    """Delete a task. Its id is never reused."""
    with http_errors():
        store.tasks.delete(task_id)
    return Response(status_code=204)
