"""
Weekly routine board API endpoints.
"""

from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store
from backend.errors import http_errors
from backend.schemas import RoutineBlockCreate, RoutineBlockUpdate, RoutineBlockResponse

router = APIRouter(prefix="/api/routine-blocks", tags=["routine"])


@router.get("", response_model=List[RoutineBlockResponse])
async def list_routine_blocks(
    week_of: Optional[datetime] = Query(None, alias="weekOf", description="Week anchor date"),
    store: RecordStore = Depends(get_store),
):
    """
    Routine blocks, optionally for one week.

    weekOf is compared by calendar day, so any time of day on the anchor
    date matches.
    """
    return [b.to_dict() for b in store.list_routine_blocks(week_of=week_of)]


@router.post("", response_model=RoutineBlockResponse, status_code=201)
async def create_routine_block(
    block: RoutineBlockCreate,
    store: RecordStore = Depends(get_store),
):
    with http_errors():
        return store.routine_blocks.create(block.model_dump(exclude_unset=True)).to_dict()


@router.patch("/{block_id}", response_model=RoutineBlockResponse)
async def update_routine_block(
    block_id: int,
    block: RoutineBlockUpdate,
    store: RecordStore = Depends(get_store),
):
    with http_errors():
        return store.routine_blocks.update(block_id, block.model_dump(exclude_unset=True)).to_dict()
