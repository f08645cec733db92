"""User Routes: register, login, /me and the authorization gate.

Invariants:
    - register → login → token resolves to the same user id
    - unknown identifier and wrong password get the identical 401 body
    - password/hash never echoed back
    - /me: no token, garbage token, expired token → 401
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from app.core.domain_types import UserId
from app.infrastructure.security import TokenSigner
from app.config import get_settings


async def test_register_returns_201_without_password(client):
    res = await client.post("/api/v1/users/register", json={
        "username": "carol", "email": "Carol@Example.com", "password": "hunter22",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["username"] == "carol"
    assert body["email"] == "carol@example.com"
    assert "password" not in body
    assert "password_hash" not in body


async def test_login_token_resolves_to_registered_user(client, alice):
    res = await client.get("/api/v1/users/me", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json() == {"id": alice["id"], "username": "alice"}


async def test_login_by_email(client, alice):
    res = await client.post("/api/v1/users/login", json={
        "identifier": "alice@example.com", "password": alice["password"],
    })
    assert res.status_code == 200
    assert res.json()["user"]["id"] == alice["id"]


async def test_duplicate_username_rejected(client, alice):
    res = await client.post("/api/v1/users/register", json={
        "username": "alice", "email": "other@example.com", "password": "hunter22",
    })
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "username"


async def test_duplicate_email_rejected(client, alice):
    res = await client.post("/api/v1/users/register", json={
        "username": "alice2", "email": "alice@example.com", "password": "hunter22",
    })
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "email"


async def test_register_shape_errors_are_400(client):
    res = await client.post("/api/v1/users/register", json={
        "username": "dave", "email": "not-an-email", "password": "hunter22",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_register_missing_fields_is_400(client):
    res = await client.post("/api/v1/users/register", json={"username": "x"})
    assert res.status_code == 400


async def test_wrong_password_and_unknown_user_look_identical(client, alice):
    wrong = await client.post("/api/v1/users/login", json={
        "identifier": "alice", "password": "not-her-password",
    })
    unknown = await client.post("/api/v1/users/login", json={
        "identifier": "nobody", "password": "not-her-password",
    })
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["error"]["message"] == unknown.json()["error"]["message"]
    assert wrong.json()["error"]["code"] == unknown.json()["error"]["code"]


async def test_me_without_token(client):
    res = await client.get("/api/v1/users/me")
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "No token supplied"


async def test_me_with_garbage_token(client):
    res = await client.get(
        "/api/v1/users/me", headers={"Authorization": "Bearer garbage"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_me_with_expired_token(client, alice):
    settings = get_settings()
    past = datetime.now(timezone.utc) - timedelta(days=30)
    signer = TokenSigner(
        settings.jwt_secret, expire_minutes=1, now=lambda: past,
    )
    token = signer.issue(UserId(uuid4()))
    res = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Token expired"


async def test_me_with_token_for_unknown_user(client):
    settings = get_settings()
    token = TokenSigner(settings.jwt_secret).issue(UserId(uuid4()))
    res = await client.get(
        "/api/v1/users/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert res.status_code == 401
