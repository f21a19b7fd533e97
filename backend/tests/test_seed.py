import pytest

import factories as f
from coachsync.seed import DEFAULT_CLIENTS, DEFAULT_EXERCISES, initialize_default_data

pytestmark = pytest.mark.asyncio


async def test_seeds_empty_store(store):
    await initialize_default_data(store)
    assert [e.id for e in await store.get_exercises()] == [str(i) for i in range(1, 9)]
    assert [c.id for c in await store.get_clients()] == ["client-1", "client-2", "client-3"]
    templates = await store.get_templates()
    assert [t.id for t in templates] == ["template-1"]
    assert [te.exercise_id for te in templates[0].exercises] == ["3", "4", "2"]
    assert templates[0].exercises[1].sets[2].rest_time == 180
    # seeding is not a user mutation
    assert await store.get_pending_sync() == []


async def test_seed_twice_matches_seed_once(store):
    await initialize_default_data(store)
    once = (await store.get_exercises(), await store.get_clients(), await store.get_templates())
    await initialize_default_data(store)
    twice = (await store.get_exercises(), await store.get_clients(), await store.get_templates())
    assert once == twice
    assert len(twice[0]) == len(DEFAULT_EXERCISES)
    assert len(twice[1]) == len(DEFAULT_CLIENTS)


async def test_seed_never_overwrites_user_data(store):
    await store.save_client(f.client(id="mine"))
    await initialize_default_data(store)
    assert [c.id for c in await store.get_clients()] == ["mine"]
    assert len(await store.get_exercises()) == 8


async def test_template_lifecycle_scenario(store):
    await initialize_default_data(store)
    assert [t.id for t in await store.get_templates()] == ["template-1"]

    await store.save_template(f.template(id="template-2"))
    assert len(await store.get_templates()) == 2

    await store.delete_template("template-1")
    assert [t.id for t in await store.get_templates()] == ["template-2"]

    pending = {(e.type.value, e.id, e.action.value) for e in await store.get_pending_sync()}
    assert pending == {("template", "template-1", "delete"), ("template", "template-2", "create")}


async def test_seeded_avatars_survive_roundtrip(store):
    await initialize_default_data(store)
    sarah = await store.get_client("client-1")
    assert sarah.avatar == DEFAULT_CLIENTS[0].avatar
