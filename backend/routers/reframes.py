"""
Cognitive reframe API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store, get_list_limit
from backend.errors import http_errors
from backend.schemas import CognitiveReframeCreate, CognitiveReframeResponse

router = APIRouter(prefix="/api/cognitive-reframes", tags=["reframes"])


@router.get("", response_model=List[CognitiveReframeResponse])
async def list_cognitive_reframes(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of reframes"),
    default_limit: int = Depends(get_list_limit),
    store: RecordStore = Depends(get_store),
):
    return [r.to_dict() for r in store.list_cognitive_reframes(limit=limit or default_limit)]


@router.post("", response_model=CognitiveReframeResponse, status_code=201)
async def create_cognitive_reframe(
    reframe: CognitiveReframeCreate,
    store: RecordStore = Depends(get_store),
):
    with http_errors():
        return store.cognitive_reframes.create(reframe.model_dump(exclude_unset=True)).to_dict()
