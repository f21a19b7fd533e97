# coachsync/repositories/base.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from coachsync.schemas.sync import SyncAction, SyncEntityType

if TYPE_CHECKING:
    from coachsync.store import LocalEntityStore

T = TypeVar("T", bound=BaseModel)  # entity schema with an ``id`` field

log = logging.getLogger(__name__)

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int

class CollectionRepository(Generic[T]):
    """A whole collection stored as one JSON array under a single key.

    Every mutation reads the full snapshot, changes it in memory and writes the
    full snapshot back while holding the key's lock.
    """
    def __init__(self, store: LocalEntityStore, name: str, model: type[T]):
        self.store = store
        self.key = store.key(name)
        self.model = model
        self._adapter = TypeAdapter(list[model])

    # READS
    async def all(self) -> list[T]:
        raw = await self.store.get_data(self.key)
        if raw is None:
            return []
        try:
            return self._adapter.validate_python(raw)
        except ValidationError as exc:
            log.warning("Discarding unreadable collection %s: %d validation errors",
                        self.key, exc.error_count())
            return []

    async def get(self, entity_id: str) -> Optional[T]:
        return next((e for e in await self.all() if e.id == entity_id), None)

    async def filter_by(self, field: str, value: Any) -> list[T]:
        return [e for e in await self.all() if getattr(e, field) == value]

    async def page(self, items: Optional[list[T]] = None, *, limit: int = 50, offset: int = 0) -> Page[T]:
        items = await self.all() if items is None else items
        return Page(items=items[offset:offset + limit], total=len(items), limit=limit, offset=offset)

    # WRITES
    async def replace_all(self, entities: Iterable[T]) -> None:
        async with self.store.lock(self.key):
            await self._write(list(entities))

    async def _write(self, entities: list[T]) -> None:
        await self.store.store_data(self.key, self._adapter.dump_python(entities, mode="json", by_alias=True))

class SyncedCollectionRepository(CollectionRepository[T]):
    """Collection whose upserts and deletes are recorded in the pending-sync ledger.

    The ledger entry is written while the collection lock is held, so the
    ledger never disagrees with the snapshot about the latest mutation.
    Locks are always taken collection first, then ledger.
    """
    def __init__(self, store: LocalEntityStore, name: str, model: type[T], sync_type: SyncEntityType):
        super().__init__(store, name, model)
        self.sync_type = sync_type

    async def save(self, entity: T) -> None:
        async with self.store.lock(self.key):
            entities = await self.all()
            existed = any(e.id == entity.id for e in entities)
            entities = [e for e in entities if e.id != entity.id]
            entities.append(entity)
            await self._write(entities)
            action = await self._save_action(entity.id, existed)
            await self.store.ledger.enqueue(self.sync_type, entity.id, action)

    async def delete(self, entity_id: str) -> None:
        async with self.store.lock(self.key):
            entities = [e for e in await self.all() if e.id != entity_id]
            await self._write(entities)
            await self.store.ledger.enqueue(self.sync_type, entity_id, SyncAction.delete)

    async def _save_action(self, entity_id: str, existed: bool) -> SyncAction:
        if not (existed and self.store.track_updates):
            return SyncAction.create
        # The backend has never seen an entity whose create is still pending
        pending = await self.store.ledger.find(self.sync_type, entity_id)
        if pending is not None and pending.action == SyncAction.create:
            return SyncAction.create
        return SyncAction.update
