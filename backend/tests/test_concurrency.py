import asyncio

import pytest

import factories as f

pytestmark = pytest.mark.asyncio


async def test_concurrent_saves_do_not_lose_writes(store):
    await asyncio.gather(*(store.save_session(f.session(id=f"s{i}")) for i in range(20)))
    assert {s.id for s in await store.get_sessions()} == {f"s{i}" for i in range(20)}
    assert len(await store.get_pending_sync()) == 20


async def test_concurrent_saves_and_deletes(store):
    for i in range(10):
        await store.save_client(f.client(id=f"c{i}"))
    await asyncio.gather(
        *(store.delete_client(f"c{i}") for i in range(0, 10, 2)),
        *(store.save_client(f.client(id=f"n{i}")) for i in range(5)),
    )
    ids = {c.id for c in await store.get_clients()}
    assert ids == {"c1", "c3", "c5", "c7", "c9"} | {f"n{i}" for i in range(5)}
    deletes = [e for e in await store.get_pending_sync() if e.action.value == "delete"]
    assert len(deletes) == 5
