"""
Mood tracking API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store, get_list_limit
from backend.errors import http_errors
from backend.schemas import MoodEntryCreate, MoodEntryResponse

router = APIRouter(prefix="/api/mood-entries", tags=["mood"])


@router.get("", response_model=List[MoodEntryResponse])
async def list_mood_entries(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of entries"),
    default_limit: int = Depends(get_list_limit),
    store: RecordStore = Depends(get_store),
):
    """Most recent mood entries first."""
    return [m.to_dict() for m in store.list_mood_entries(limit=limit or default_limit)]


@router.post("", response_model=MoodEntryResponse, status_code=201)
async def create_mood_entry(entry: MoodEntryCreate, store: RecordStore = Depends(get_store)):
    """Log a mood; the timestamp is the creation time."""
    with http_errors():
        return store.mood_entries.create(entry.model_dump(exclude_unset=True)).to_dict()
