"""
Point the app at a throwaway SQLite file before anything imports
coachsync.settings (settings and the engine are built at import time).
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="coachsync-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/api.db"
os.environ["SEED_DEFAULT_DATA"] = "true"
os.environ["ADMIN_EMAIL"] = "root@ex.com"
os.environ["ADMIN_PASSWORD"] = "RootPassw0rd!!"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from coachsync.db import create_tables, make_engine, make_session_factory
from coachsync.store import LocalEntityStore


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await create_tables(engine)
    yield make_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def store(session_factory):
    return LocalEntityStore(session_factory)


@pytest.fixture(scope="session")
def client():
    from coachsync.main import app
    with TestClient(app) as c:
        yield c


PWD = "StrongPassw0rd!"


@pytest.fixture
def admin_headers(client):
    r = client.post("/auth/sign-in", json={"email": os.environ["ADMIN_EMAIL"], "password": os.environ["ADMIN_PASSWORD"]})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def make_user(client, admin_headers):
    """Sign up a fresh profile with ``role`` and return (auth headers, profile id).

    Staff profiles are created with the bootstrap admin's token.
    """
    import uuid

    def _make(role="client"):
        email = f"{role}-{uuid.uuid4().hex[:8]}@ex.com"
        headers = {} if role == "client" else admin_headers
        r = client.post("/auth/sign-up", headers=headers,
                        json={"email": email, "full_name": "Test", "password": PWD, "role": role})
        assert r.status_code == 201, r.text
        r2 = client.post("/auth/sign-in", json={"email": email, "password": PWD})
        assert r2.status_code == 200, r2.text
        return {"Authorization": f"Bearer {r2.json()['access_token']}"}, r.json()["id"]
    return _make
