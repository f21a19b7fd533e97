from fastapi import APIRouter, Depends, HTTPException, Query, status
from coachsync.deps.auth import STAFF_ROLES, ensure_client_access, get_current_user, require_role
from coachsync.deps.store import get_store
from coachsync.models import Profile, UserRole
from coachsync.schemas.workout import WorkoutPlan
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/plans", tags=["plans"])

PLAN_WRITERS = (UserRole.trainer, UserRole.admin)

@router.get("", response_model=list[WorkoutPlan])
async def list_plans(
    client_id: str | None = None,
    store: LocalEntityStore = Depends(get_store),
    current: Profile = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    # Clients only ever see their own plans
    if current.role == UserRole.client:
        client_id = current.id
    plans = await store.get_client_plans(client_id) if client_id else await store.get_plans()
    page = await store.plans.page(plans, limit=limit, offset=offset)
    return page.items

@router.get("/{plan_id}", response_model=WorkoutPlan)
async def get_plan(plan_id: str, store: LocalEntityStore = Depends(get_store),
                   current: Profile = Depends(get_current_user)):
    plan = await store.get_plan(plan_id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    ensure_client_access(plan.client_id, current, *STAFF_ROLES)
    return plan

@router.put("/{plan_id}", response_model=WorkoutPlan, dependencies=[Depends(require_role(*PLAN_WRITERS))])
async def save_plan(plan_id: str, payload: WorkoutPlan, store: LocalEntityStore = Depends(get_store)):
    if payload.id != plan_id:
        raise HTTPException(status_code=400, detail="id does not match path")
    await store.save_plan(payload)
    return payload

@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_role(*PLAN_WRITERS))])
async def delete_plan(plan_id: str, store: LocalEntityStore = Depends(get_store)):
    await store.delete_plan(plan_id)
