from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, status
from coachsync.deps.auth import STAFF_ROLES, ensure_client_access, get_current_user, require_role
from coachsync.deps.store import get_store
from coachsync.models import Profile, UserRole
from coachsync.schedule import todays_workout, weekly_schedule
from coachsync.schemas.workout import Client, ScheduledDay, WorkoutTemplate
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/clients", tags=["clients"])

CLIENT_READERS = (UserRole.trainer, UserRole.nutritionist, UserRole.admin, UserRole.hr)
CLIENT_WRITERS = (UserRole.trainer, UserRole.admin)

@router.get("", response_model=list[Client], dependencies=[Depends(require_role(*CLIENT_READERS))])
async def list_clients(
    trainer_id: str | None = None,
    store: LocalEntityStore = Depends(get_store),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    clients = await store.get_trainer_clients(trainer_id) if trainer_id else await store.get_clients()
    page = await store.clients.page(clients, limit=limit, offset=offset)
    return page.items

@router.get("/{client_id}", response_model=Client, dependencies=[Depends(require_role(*CLIENT_READERS))])
async def get_client(client_id: str, store: LocalEntityStore = Depends(get_store)):
    client = await store.get_client(client_id)
    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client

@router.put("/{client_id}", response_model=Client, dependencies=[Depends(require_role(*CLIENT_WRITERS))])
async def save_client(client_id: str, payload: Client, store: LocalEntityStore = Depends(get_store)):
    if payload.id != client_id:
        raise HTTPException(status_code=400, detail="id does not match path")
    await store.save_client(payload)
    return payload

@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_role(*CLIENT_WRITERS))])
async def delete_client(client_id: str, store: LocalEntityStore = Depends(get_store)):
    await store.delete_client(client_id)

@router.get("/{client_id}/today", response_model=WorkoutTemplate | None)
async def client_today(
    client_id: str,
    on: date | None = None,
    store: LocalEntityStore = Depends(get_store),
    current: Profile = Depends(get_current_user),
):
    """Today's workout, or null on a rest day or without an active plan."""
    ensure_client_access(client_id, current, *STAFF_ROLES)
    return await todays_workout(store, client_id, on or date.today())

@router.get("/{client_id}/week", response_model=list[ScheduledDay])
async def client_week(
    client_id: str,
    on: date | None = None,
    store: LocalEntityStore = Depends(get_store),
    current: Profile = Depends(get_current_user),
):
    ensure_client_access(client_id, current, *STAFF_ROLES)
    return await weekly_schedule(store, client_id, on or date.today())
