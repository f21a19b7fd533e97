from __future__ import annotations
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from coachsync.models import KVEntry

class KeyValueRepository:
    """Raw string-keyed medium; one row per key, values are opaque text."""
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_item(self, key: str) -> Optional[str]:
        entry = await self.db.get(KVEntry, key)
        return entry.value if entry else None

    async def set_item(self, key: str, value: str) -> None:
        entry = await self.db.get(KVEntry, key)
        if entry is None:
            self.db.add(KVEntry(key=key, value=value))
        else:
            entry.value = value
        await self.db.commit()

    async def remove_item(self, key: str) -> None:
        entry = await self.db.get(KVEntry, key)
        if entry is not None:
            await self.db.delete(entry)
            await self.db.commit()
