from __future__ import annotations
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from walletapi.config import settings

class UsersBase(DeclarativeBase):
    """Tables owned by the user service."""

class WalletBase(DeclarativeBase):
    """Tables owned by the wallet service."""

users_engine = create_async_engine(settings.users_database_url, future=True, echo=False)
UsersSessionLocal = async_sessionmaker(users_engine, expire_on_commit=False)

wallet_engine = create_async_engine(settings.wallet_database_url, future=True, echo=False)
WalletSessionLocal = async_sessionmaker(wallet_engine, expire_on_commit=False)

async def get_users_session() -> AsyncGenerator[AsyncSession, None]:
    async with UsersSessionLocal() as session:
        yield session

async def get_wallet_session() -> AsyncGenerator[AsyncSession, None]:
    async with WalletSessionLocal() as session:
        yield session
