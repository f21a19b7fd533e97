from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from coachsync.auth import AuthProvider
from coachsync.db import get_db
from coachsync.deps.auth import get_current_user, get_optional_user
from coachsync.models import Profile, UserRole
from coachsync.schemas.profile import ProfileRead, SignIn, SignUp

router = APIRouter(prefix="/auth", tags=["auth"])

def get_auth(db: AsyncSession = Depends(get_db)) -> AuthProvider:
    return AuthProvider(db)

@router.post("/sign-up", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUp,
    auth: AuthProvider = Depends(get_auth),
    current: Profile | None = Depends(get_optional_user),
):
    # Anyone may register as a client; staff accounts are created by an admin
    if payload.role != UserRole.client and (current is None or current.role != UserRole.admin):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
    result = await auth.sign_up(payload.email, payload.password, payload.full_name, payload.role)
    if result.error:
        raise HTTPException(status_code=400, detail=result.error)
    return result.profile

@router.post("/sign-in")
async def sign_in(payload: SignIn, auth: AuthProvider = Depends(get_auth)):
    result = await auth.sign_in(payload.email, payload.password)
    if result.error:
        raise HTTPException(status_code=401, detail=result.error)
    return {"access_token": result.access_token, "token_type": "bearer"}

@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(auth: AuthProvider = Depends(get_auth), _current: Profile = Depends(get_current_user)):
    await auth.sign_out()

@router.get("/me", response_model=ProfileRead)
async def me(current_user: Profile = Depends(get_current_user)):
    return current_user
