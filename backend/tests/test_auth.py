import uuid

import pytest

from coachsync.auth import AuthProvider
from coachsync.models import UserRole
from coachsync.security import create_access_token

PWD = "StrongPassw0rd!"
def uniq_email(): return f"{uuid.uuid4().hex[:10]}@ex.com"

def sign_up(client, email, pwd=PWD, role="client", headers=None):
    return client.post("/auth/sign-up", headers=headers or {},
                       json={"email": email, "full_name": "T", "password": pwd, "role": role})

def sign_in(client, email, pwd=PWD):
    return client.post("/auth/sign-in", json={"email": email, "password": pwd})


def test_sign_up_duplicate_email_400(client):
    e = uniq_email()
    assert sign_up(client, e).status_code == 201
    r = sign_up(client, e)
    assert r.status_code == 400
    assert "already" in r.json()["detail"]

def test_sign_up_weak_password_422(client):
    assert sign_up(client, uniq_email(), pwd="short").status_code == 422
    assert sign_up(client, uniq_email(), pwd="alllowercase123!").status_code == 422

def test_sign_up_unknown_role_422(client):
    assert sign_up(client, uniq_email(), role="coach").status_code == 422

@pytest.mark.parametrize("role", ["admin", "trainer", "nutritionist", "hr"])
def test_anonymous_staff_sign_up_forbidden(client, role):
    e = uniq_email()
    r = sign_up(client, e, role=role)
    assert r.status_code == 403
    assert r.json()["detail"] == "Insufficient role"
    # nothing was created
    assert sign_in(client, e).status_code == 401

def test_non_admin_cannot_create_staff(client, make_user):
    trainer, _ = make_user("trainer")
    me, _ = make_user("client")
    assert sign_up(client, uniq_email(), role="admin", headers=trainer).status_code == 403
    assert sign_up(client, uniq_email(), role="trainer", headers=me).status_code == 403

def test_admin_creates_staff(client, admin_headers):
    e = uniq_email()
    r = sign_up(client, e, role="nutritionist", headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["role"] == "nutritionist"

def test_self_registered_client_cannot_touch_ledger(client):
    e = uniq_email()
    sign_up(client, e)
    tok = sign_in(client, e).json()["access_token"]
    r = client.delete("/sync/pending", headers={"Authorization": f"Bearer {tok}"})
    assert r.status_code == 403

def test_sign_in_unknown_email_401(client):
    assert sign_in(client, uniq_email()).status_code == 401

def test_sign_in_wrong_password_401(client):
    e = uniq_email()
    sign_up(client, e)
    assert sign_in(client, e, "WrongPass123!").status_code == 401

def test_me_roundtrip(client, admin_headers):
    e = uniq_email()
    sign_up(client, e, role="trainer", headers=admin_headers)
    tok = sign_in(client, e).json()["access_token"]
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {tok}"})
    assert me.status_code == 200
    body = me.json()
    assert body["email"].lower() == e.lower()
    assert body["role"] == "trainer"
    assert body["full_name"] == "T"

def test_expired_token_rejected(client, make_user):
    _, user_id = make_user()
    expired = create_access_token(user_id, expires_minutes=-1)
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"

def test_garbage_token_rejected(client):
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    # a bad token on sign-up is rejected, not treated as anonymous
    r = sign_up(client, uniq_email(), headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

def test_sign_out_requires_auth(client, make_user):
    assert client.post("/auth/sign-out").status_code == 401
    headers, _ = make_user()
    assert client.post("/auth/sign-out", headers=headers).status_code == 204


@pytest.mark.asyncio
async def test_provider_sign_up_in_out(session_factory):
    async with session_factory() as db:
        auth = AuthProvider(db)
        e = uniq_email()
        assert (await auth.sign_up(e, PWD, "Sam", UserRole.nutritionist)).error is None
        assert (await auth.sign_up(e, PWD, "Sam", UserRole.nutritionist)).error == "email already registered"

        result = await auth.sign_in(e, PWD)
        assert result.error is None and result.access_token
        assert auth.profile.role == UserRole.nutritionist

        await auth.sign_out()
        assert auth.profile is None
        assert (await auth.sign_in(e, "nope")).error == "invalid credentials"


@pytest.mark.asyncio
async def test_sign_out_only_affects_own_provider(session_factory, store):
    async with session_factory() as db:
        first, second = AuthProvider(db), AuthProvider(db)
        a, b = uniq_email(), uniq_email()
        await first.sign_up(a, PWD, "A")
        await second.sign_up(b, PWD, "B")
        await first.sign_in(a, PWD)
        await second.sign_in(b, PWD)

        await first.sign_out()
        assert first.profile is None
        assert second.profile.email == b
        # the signed-in user is never written to the shared store
        assert await store.get_data("@user_id") is None
        assert await store.get_data("@user_role") is None


@pytest.mark.asyncio
async def test_ensure_admin_is_idempotent(session_factory):
    async with session_factory() as db:
        auth = AuthProvider(db)
        first = await auth.ensure_admin("boot@ex.com", "RootPassw0rd!!")
        again = await auth.ensure_admin("boot@ex.com", "RootPassw0rd!!")
        assert first.id == again.id
        assert first.role == UserRole.admin
