# coachsync/repositories/profile_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from coachsync.models import Profile, UserRole

class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # READS
    async def get(self, profile_id: str) -> Optional[Profile]:
        return await self.db.get(Profile, profile_id)

    async def get_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(Profile).where(func.lower(Profile.email) == email.lower())
        return (await self.db.execute(stmt)).scalar_one_or_none()

    # WRITES
    async def create(self, *, email: str, full_name: str | None, password_hash: str,
                     role: UserRole = UserRole.client) -> Profile:
        profile = Profile(email=email, full_name=full_name, password_hash=password_hash, role=role)
        try:
            self.db.add(profile)
            await self.db.commit()
            await self.db.refresh(profile)
            return profile
        except IntegrityError:
            await self.db.rollback()
            # Clean marker the auth provider maps to a sign-up error
            raise ValueError("email_already_exists")
