import os

# Must be set before walletapi.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-wallet-suite-0123456789")
os.environ.setdefault("USERS_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("WALLET_DATABASE_URL", "sqlite+aiosqlite://")

import uuid
import httpx
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from walletapi.db import UsersBase, WalletBase, get_users_session, get_wallet_session
from walletapi.main import user_app, wallet_app
from walletapi.services.user_client import UserServiceClient, get_user_client
import walletapi.models.user  # noqa: F401
import walletapi.models.transaction  # noqa: F401


async def _memory_sessionmaker(base):
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(base.metadata.create_all)
    return engine, async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def users_sessionmaker():
    engine, maker = await _memory_sessionmaker(UsersBase)
    yield maker
    await engine.dispose()


@pytest_asyncio.fixture
async def wallet_sessionmaker():
    engine, maker = await _memory_sessionmaker(WalletBase)
    yield maker
    await engine.dispose()


@pytest_asyncio.fixture
async def user_client(users_sessionmaker):
    async def _session():
        async with users_sessionmaker() as session:
            yield session

    user_app.dependency_overrides[get_users_session] = _session
    async with AsyncClient(transport=httpx.ASGITransport(app=user_app), base_url="http://users") as ac:
        yield ac
    user_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def wallet_client(user_client, wallet_sessionmaker):
    """Wallet app whose user validator talks to the in-process user app."""
    async def _session():
        async with wallet_sessionmaker() as session:
            yield session

    wallet_app.dependency_overrides[get_wallet_session] = _session
    wallet_app.dependency_overrides[get_user_client] = lambda: UserServiceClient(
        "http://users", transport=httpx.ASGITransport(app=user_app)
    )
    async with AsyncClient(transport=httpx.ASGITransport(app=wallet_app), base_url="http://wallet") as ac:
        yield ac
    wallet_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def register_login(user_client):
    """Create a user and log in; returns (user json, access token)."""
    async def _register_login(email: str | None = None, password: str = "pw"):
        email = email or f"user-{uuid.uuid4().hex[:12]}@example.com"
        r = await user_client.post("/users", json={"email": email, "password": password, "first_name": "Ada", "last_name": "Lovelace"})
        assert r.status_code == 200, r.text
        r = await user_client.post("/auth", json={"user": {"email": email, "password": password}})
        assert r.status_code == 200, r.text
        body = r.json()
        return body["user"], body["access_token"]
    return _register_login
