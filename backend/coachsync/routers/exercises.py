from fastapi import APIRouter, Depends
from coachsync.deps.auth import get_current_user, require_role
from coachsync.deps.store import get_store
from coachsync.models import UserRole
from coachsync.schemas.workout import Exercise
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[Exercise], dependencies=[Depends(get_current_user)])
async def list_exercises(store: LocalEntityStore = Depends(get_store)):
    return await store.get_exercises()

@router.put("", response_model=list[Exercise], dependencies=[Depends(require_role(UserRole.admin))])
async def replace_exercises(payload: list[Exercise], store: LocalEntityStore = Depends(get_store)):
    """Replace the whole exercise catalog (reference data, never queued for sync)."""
    await store.save_exercises(payload)
    return payload
