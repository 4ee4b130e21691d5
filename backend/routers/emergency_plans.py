"""
Emergency plan API endpoints.

Two default plans are seeded when the store is first created.
"""

from typing import List
from fastapi import APIRouter, Depends, Query

from adhd_planner.core.store import RecordStore
from backend.dependencies import get_store
from backend.errors import http_errors
from backend.schemas import EmergencyPlanCreate, EmergencyPlanUpdate, EmergencyPlanResponse

router = APIRouter(prefix="/api/emergency-plans", tags=["emergency"])


@router.get("", response_model=List[EmergencyPlanResponse])
async def list_emergency_plans(
    include_inactive: bool = Query(False, alias="includeInactive"),
    store: RecordStore = Depends(get_store),
):
    """Active plans by default."""
    return [p.to_dict() for p in store.list_emergency_plans(include_inactive=include_inactive)]


@router.post("", response_model=EmergencyPlanResponse, status_code=201)
async def create_emergency_plan(
    plan: EmergencyPlanCreate,
    store: RecordStore = Depends(get_store),
):
    with http_errors():
        return store.emergency_plans.create(plan.model_dump(exclude_unset=True)).to_dict()


@router.patch("/{plan_id}", response_model=EmergencyPlanResponse)
async def update_emergency_plan(
    plan_id: int,
    plan: EmergencyPlanUpdate,
    store: RecordStore = Depends(get_store),
):
    """Update a plan, e.g. to rate its effectiveness or deactivate it."""
    with http_errors():
        return store.emergency_plans.update(plan_id, plan.model_dump(exclude_unset=True)).to_dict()
