from fastapi import APIRouter, Depends, status
from coachsync.deps.auth import require_role
from coachsync.deps.store import get_store
from coachsync.models import UserRole
from coachsync.schemas.sync import SyncEntityType, SyncLedgerEntry
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/sync", tags=["sync"], dependencies=[Depends(require_role(UserRole.admin))])

@router.get("/pending", response_model=list[SyncLedgerEntry])
async def pending(store: LocalEntityStore = Depends(get_store)):
    return await store.get_pending_sync()

@router.delete("/pending", status_code=status.HTTP_204_NO_CONTENT)
async def clear_pending(store: LocalEntityStore = Depends(get_store)):
    """Call after a successful full sync round-trip."""
    await store.clear_pending_sync()

@router.delete("/pending/{entity_type}/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def acknowledge(entity_type: SyncEntityType, entity_id: str, store: LocalEntityStore = Depends(get_store)):
    await store.remove_sync_item(entity_type, entity_id)
