from fastapi import APIRouter, Depends, HTTPException, Query, status
from coachsync.deps.auth import STAFF_ROLES, ensure_client_access, get_current_user
from coachsync.deps.store import get_store
from coachsync.models import Profile, UserRole
from coachsync.schemas.workout import WorkoutSession
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/sessions", tags=["sessions"])

# Who may log or remove a session on a client's behalf
SESSION_WRITERS = (UserRole.trainer, UserRole.admin)

@router.get("", response_model=list[WorkoutSession])
async def list_sessions(
    client_id: str | None = None,
    store: LocalEntityStore = Depends(get_store),
    current: Profile = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    if current.role == UserRole.client:
        client_id = current.id
    sessions = await store.get_client_sessions(client_id) if client_id else await store.get_sessions()
    page = await store.sessions.page(sessions, limit=limit, offset=offset)
    return page.items

@router.get("/{session_id}", response_model=WorkoutSession)
async def get_session(session_id: str, store: LocalEntityStore = Depends(get_store),
                      current: Profile = Depends(get_current_user)):
    sess = await store.get_session(session_id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    ensure_client_access(sess.client_id, current, *STAFF_ROLES)
    return sess

@router.put("/{session_id}", response_model=WorkoutSession)
async def save_session(session_id: str, payload: WorkoutSession,
                       store: LocalEntityStore = Depends(get_store),
                       current: Profile = Depends(get_current_user)):
    if payload.id != session_id:
        raise HTTPException(status_code=400, detail="id does not match path")
    ensure_client_access(payload.client_id, current, *SESSION_WRITERS)
    # Replacing someone else's session would move it to another client
    existing = await store.get_session(session_id)
    if existing:
        ensure_client_access(existing.client_id, current, *SESSION_WRITERS)
    await store.save_session(payload)
    return payload

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, store: LocalEntityStore = Depends(get_store),
                         current: Profile = Depends(get_current_user)):
    existing = await store.get_session(session_id)
    if existing:
        ensure_client_access(existing.client_id, current, *SESSION_WRITERS)
    elif current.role not in SESSION_WRITERS:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    await store.delete_session(session_id)
