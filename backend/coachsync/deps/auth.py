# coachsync/deps/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from jose.exceptions import ExpiredSignatureError, JWTError

from coachsync.db import get_db
from coachsync.models import Profile, UserRole
from coachsync.security import decode_token

# Exposes Bearer auth in Swagger; sign-in issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/sign-in", auto_error=False)

STAFF_ROLES = (UserRole.trainer, UserRole.nutritionist, UserRole.admin)

async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> Profile:
    unauth = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        sub = payload.get("sub")
        if sub is None:
            raise unauth
        user = await db.get(Profile, str(sub))
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        raise unauth

    if not user:
        raise unauth
    return user

async def get_optional_user(
    db: AsyncSession = Depends(get_db),
    token: str | None = Depends(optional_oauth2_scheme),
) -> Profile | None:
    """Anonymous callers get None; a bad or expired token is still a 401."""
    if token is None:
        return None
    return await get_current_user(db=db, token=token)

def require_role(*allowed_roles: UserRole):
    """
    Usage: dependencies=[Depends(require_role(UserRole.trainer, UserRole.admin))]
    """
    def dependency(current_user: Profile = Depends(get_current_user)) -> Profile:
        if current_user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return current_user
    return dependency

def ensure_client_access(client_id: str, current_user: Profile, *allowed_roles: UserRole) -> None:
    """Owner-or-role guard: a client sees only their own data, listed roles see anyone's."""
    if current_user.id == client_id or current_user.role in allowed_roles:
        return
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
