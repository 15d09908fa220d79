import uuid
import pytest
from walletapi.security import decode_token


@pytest.mark.asyncio
async def test_signup_login_and_use_token(user_client):
    email = f"test-{uuid.uuid4()}@example.com"
    r = await user_client.post("/users", json={"email": email, "password": "pw"})
    assert r.status_code == 200
    created = r.json()
    assert created["email"] == email
    assert "id" in created
    assert "password" not in created and "password_hash" not in created

    r = await user_client.post("/auth", json={"user": {"email": email, "password": "pw"}})
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["id"] == created["id"]
    claims = decode_token(body["access_token"])
    assert claims["sub"] == created["id"]
    assert claims["email"] == email

    me = await user_client.get(f"/users/{created['id']}", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == email


@pytest.mark.asyncio
async def test_login_wrong_password(user_client, register_login):
    user, _ = await register_login(password="right")
    r = await user_client.post("/auth", json={"user": {"email": user["email"], "password": "wrong"}})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_email(user_client):
    r = await user_client.post("/auth", json={"user": {"email": "nobody@example.com", "password": "pw"}})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_requires_nested_user(user_client):
    r = await user_client.post("/auth", json={"email": "a@b.com", "password": "pw"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_protected_routes_need_bearer(user_client):
    r = await user_client.get("/users")
    assert r.status_code == 401
    r = await user_client.get("/users", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"
