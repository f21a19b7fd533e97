from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from pydantic import TypeAdapter, ValidationError

from coachsync.schemas.sync import SyncAction, SyncEntityType, SyncLedgerEntry

if TYPE_CHECKING:
    from coachsync.store import LocalEntityStore

log = logging.getLogger(__name__)

_entries = TypeAdapter(list[SyncLedgerEntry])

class SyncLedger:
    """Outstanding mutations, at most one entry per (type, id).

    A new mutation replaces the pending entry for the same entity, so the
    ledger holds the latest intended change, not a history.
    """
    def __init__(self, store: LocalEntityStore, name: str):
        self.store = store
        self.key = store.key(name)

    async def pending(self) -> list[SyncLedgerEntry]:
        raw = await self.store.get_data(self.key)
        if raw is None:
            return []
        try:
            return _entries.validate_python(raw)
        except ValidationError as exc:
            log.warning("Discarding unreadable sync ledger %s: %d validation errors",
                        self.key, exc.error_count())
            return []

    async def find(self, entity_type: SyncEntityType | str, entity_id: str) -> Optional[SyncLedgerEntry]:
        return next((e for e in await self.pending() if e.matches(entity_type, entity_id)), None)

    async def enqueue(self, entity_type: SyncEntityType | str, entity_id: str, action: SyncAction | str) -> SyncLedgerEntry:
        entry = SyncLedgerEntry(
            type=SyncEntityType(entity_type),
            id=entity_id,
            action=SyncAction(action),
            timestamp=datetime.now(timezone.utc),
        )
        async with self.store.lock(self.key):
            entries = [e for e in await self.pending() if not e.matches(entity_type, entity_id)]
            entries.append(entry)
            await self._write(entries)
        log.debug("Pending sync %s %s:%s", entry.action.value, entry.type.value, entity_id)
        return entry

    async def clear(self) -> None:
        async with self.store.lock(self.key):
            await self._write([])

    async def remove(self, entity_type: SyncEntityType | str, entity_id: str) -> None:
        async with self.store.lock(self.key):
            entries = [e for e in await self.pending() if not e.matches(entity_type, entity_id)]
            await self._write(entries)

    async def _write(self, entries: list[SyncLedgerEntry]) -> None:
        await self.store.store_data(self.key, _entries.dump_python(entries, mode="json", by_alias=True))
