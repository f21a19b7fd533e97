"""Local auth provider: sign-up, sign-in and sign-out against the profiles table.

The signed-in profile lives on the provider instance only; nothing about the
current user is written to shared storage.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coachsync.models import Profile, UserRole
from coachsync.repositories.profile_repo import ProfileRepository
from coachsync.security import create_access_token, hash_password, verify_password

log = logging.getLogger(__name__)

@dataclass(slots=True)
class AuthResult:
    error: Optional[str] = None
    access_token: Optional[str] = None
    profile: Optional[Profile] = None

class AuthProvider:
    def __init__(self, db: AsyncSession):
        self.profiles = ProfileRepository(db)
        self.profile: Optional[Profile] = None

    async def sign_up(self, email: str, password: str, full_name: str,
                      role: UserRole = UserRole.client) -> AuthResult:
        if await self.profiles.get_by_email(email):
            return AuthResult(error="email already registered")
        try:
            profile = await self.profiles.create(
                email=email,
                full_name=full_name,
                password_hash=hash_password(password),
                role=role,
            )
        except ValueError as e:
            if str(e) == "email_already_exists":
                return AuthResult(error="email already registered")
            raise
        log.info("Registered %s profile %s", profile.role.value, profile.id)
        return AuthResult(profile=profile)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        profile = await self.profiles.get_by_email(email)
        if not profile or not verify_password(password, profile.password_hash):
            return AuthResult(error="invalid credentials")
        self.profile = profile
        return AuthResult(access_token=create_access_token(sub=profile.id), profile=profile)

    async def sign_out(self) -> None:
        self.profile = None

    async def ensure_admin(self, email: str, password: str) -> Profile:
        """Create the bootstrap admin once; later calls return the existing profile."""
        existing = await self.profiles.get_by_email(email)
        if existing:
            return existing
        result = await self.sign_up(email, password, "Administrator", UserRole.admin)
        if result.error:
            raise RuntimeError(f"could not create bootstrap admin: {result.error}")
        return result.profile
