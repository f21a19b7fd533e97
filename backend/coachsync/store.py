"""Offline-first local entity store.

Typed collections (templates, plans, sessions, clients, exercises) live as
JSON arrays under namespaced keys of an async key-value medium. Every
mutation of a synced collection is recorded in the pending-sync ledger so a
later sync round-trip can replay it against the remote backend.

Reads are forgiving: a missing, unreadable or malformed value is treated as
absent. Writes are not: a rejected write raises ``PersistenceWriteError``.
"""
from __future__ import annotations

import asyncio
import json
import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coachsync.errors import PersistenceWriteError
from coachsync.repositories.base import CollectionRepository, SyncedCollectionRepository
from coachsync.repositories.kv_repo import KeyValueRepository
from coachsync.repositories.sync_ledger import SyncLedger
from coachsync.schemas.sync import SyncAction, SyncEntityType, SyncLedgerEntry
from coachsync.schemas.workout import Client, Exercise, WorkoutPlan, WorkoutSession, WorkoutTemplate

log = logging.getLogger(__name__)


class StorageKey(str, Enum):
    TEMPLATES = "workout_templates"
    PLANS = "workout_plans"
    SESSIONS = "workout_sessions"
    CLIENTS = "clients"
    EXERCISES = "exercises"
    PENDING_SYNC = "pending_sync"
    USER_ROLE = "user_role"
    USER_ID = "user_id"


class LocalEntityStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        namespace: str = "@",
        track_updates: bool = False,
    ):
        self._session_factory = session_factory
        self.namespace = namespace
        self.track_updates = track_updates
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

        self.ledger = SyncLedger(self, StorageKey.PENDING_SYNC.value)
        self.templates = SyncedCollectionRepository(
            self, StorageKey.TEMPLATES.value, WorkoutTemplate, SyncEntityType.template)
        self.plans = SyncedCollectionRepository(
            self, StorageKey.PLANS.value, WorkoutPlan, SyncEntityType.plan)
        self.sessions = SyncedCollectionRepository(
            self, StorageKey.SESSIONS.value, WorkoutSession, SyncEntityType.session)
        self.clients = SyncedCollectionRepository(
            self, StorageKey.CLIENTS.value, Client, SyncEntityType.client)
        self.exercises = CollectionRepository(self, StorageKey.EXERCISES.value, Exercise)

    def key(self, name: StorageKey | str) -> str:
        name = name.value if isinstance(name, StorageKey) else name
        return f"{self.namespace}{name}"

    def lock(self, key: str) -> asyncio.Lock:
        """Single-writer lock guarding read-modify-write of ``key``."""
        return self._locks[key]

    # Primitives

    async def store_data(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)
        try:
            async with self._session_factory() as db:
                await KeyValueRepository(db).set_item(key, payload)
        except SQLAlchemyError as exc:
            log.error("Error storing data under %s: %s", key, exc)
            raise PersistenceWriteError(key, "could not store data") from exc

    async def get_data(self, key: str) -> Optional[Any]:
        try:
            async with self._session_factory() as db:
                raw = await KeyValueRepository(db).get_item(key)
        except SQLAlchemyError as exc:
            log.warning("Error reading %s, treating as absent: %s", key, exc)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            log.warning("Malformed data under %s, treating as absent: %s", key, exc)
            return None

    async def remove_data(self, key: str) -> None:
        try:
            async with self._session_factory() as db:
                await KeyValueRepository(db).remove_item(key)
        except SQLAlchemyError as exc:
            log.error("Error removing data under %s: %s", key, exc)
            raise PersistenceWriteError(key, "could not remove data") from exc

    # Templates

    async def save_template(self, template: WorkoutTemplate) -> None:
        await self.templates.save(template)

    async def get_templates(self) -> list[WorkoutTemplate]:
        return await self.templates.all()

    async def get_template(self, template_id: str) -> Optional[WorkoutTemplate]:
        return await self.templates.get(template_id)

    async def delete_template(self, template_id: str) -> None:
        await self.templates.delete(template_id)

    # Plans

    async def save_plan(self, plan: WorkoutPlan) -> None:
        await self.plans.save(plan)

    async def get_plans(self) -> list[WorkoutPlan]:
        return await self.plans.all()

    async def get_plan(self, plan_id: str) -> Optional[WorkoutPlan]:
        return await self.plans.get(plan_id)

    async def get_client_plans(self, client_id: str) -> list[WorkoutPlan]:
        return await self.plans.filter_by("client_id", client_id)

    async def delete_plan(self, plan_id: str) -> None:
        await self.plans.delete(plan_id)

    # Sessions

    async def save_session(self, session: WorkoutSession) -> None:
        await self.sessions.save(session)

    async def get_sessions(self) -> list[WorkoutSession]:
        return await self.sessions.all()

    async def get_session(self, session_id: str) -> Optional[WorkoutSession]:
        return await self.sessions.get(session_id)

    async def get_client_sessions(self, client_id: str) -> list[WorkoutSession]:
        return await self.sessions.filter_by("client_id", client_id)

    async def delete_session(self, session_id: str) -> None:
        await self.sessions.delete(session_id)

    # Clients

    async def save_client(self, client: Client) -> None:
        await self.clients.save(client)

    async def get_clients(self) -> list[Client]:
        return await self.clients.all()

    async def get_client(self, client_id: str) -> Optional[Client]:
        return await self.clients.get(client_id)

    async def get_trainer_clients(self, trainer_id: str) -> list[Client]:
        return await self.clients.filter_by("trainer_id", trainer_id)

    async def delete_client(self, client_id: str) -> None:
        await self.clients.delete(client_id)

    # Exercises (reference data, replaced as a whole and never synced)

    async def get_exercises(self) -> list[Exercise]:
        return await self.exercises.all()

    async def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return await self.exercises.get(exercise_id)

    async def save_exercises(self, exercises: Iterable[Exercise]) -> None:
        await self.exercises.replace_all(exercises)

    # Pending sync

    async def enqueue_sync(self, entity_type: SyncEntityType | str, entity_id: str,
                           action: SyncAction | str) -> SyncLedgerEntry:
        return await self.ledger.enqueue(entity_type, entity_id, action)

    async def get_pending_sync(self) -> list[SyncLedgerEntry]:
        return await self.ledger.pending()

    async def clear_pending_sync(self) -> None:
        await self.ledger.clear()

    async def remove_sync_item(self, entity_type: SyncEntityType | str, entity_id: str) -> None:
        await self.ledger.remove(entity_type, entity_id)
