from __future__ import annotations
from uuid import UUID
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from walletapi.errors import Conflict, NotFound, Unauthorized
from walletapi.models.user import User
from walletapi.schemas.user import CreateUserRequest, UpdateUserRequest
from walletapi.security import hash_password, verify_password, make_access_token

log = structlog.get_logger()

EMAIL_ALREADY_EXISTS = "Email already registered"
USER_NOT_FOUND = "User not found"
INVALID_CREDENTIALS = "Invalid credentials"


async def _by_email(session: AsyncSession, email: str) -> User | None:
    return await session.scalar(select(User).where(User.email == email))


async def _commit_unique_email(session: AsyncSession) -> None:
    # The unique index on users.email catches a concurrent request that passed the SELECT check
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise Conflict(EMAIL_ALREADY_EXISTS)


async def create_user(session: AsyncSession, payload: CreateUserRequest) -> User:
    if await _by_email(session, payload.email):
        raise Conflict(EMAIL_ALREADY_EXISTS)
    user = User(
        email=payload.email,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    session.add(user)
    await _commit_unique_email(session)
    await session.refresh(user)
    log.info("user_created", user_id=str(user.id))
    return user


async def list_users(session: AsyncSession) -> list[User]:
    return list((await session.execute(select(User))).scalars().all())


async def get_user(session: AsyncSession, user_id: UUID) -> User:
    user = await session.get(User, user_id)
    if not user:
        raise NotFound(USER_NOT_FOUND)
    return user


async def update_user(session: AsyncSession, user_id: UUID, payload: UpdateUserRequest) -> User:
    user = await get_user(session, user_id)
    changes = payload.model_dump(exclude_unset=True)
    # Names may be cleared with null; email and password may not
    for field in ("email", "password"):
        if changes.get(field) is None:
            changes.pop(field, None)

    # Uniqueness is only re-checked when the email actually changes
    new_email = changes.get("email")
    if new_email and new_email != user.email and await _by_email(session, new_email):
        raise Conflict(EMAIL_ALREADY_EXISTS)

    password = changes.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    for field, value in changes.items():
        setattr(user, field, value)

    await _commit_unique_email(session)
    await session.refresh(user)
    log.info("user_updated", user_id=str(user.id), fields=sorted(changes) + (["password"] if password else []))
    return user


async def delete_user(session: AsyncSession, user_id: UUID) -> None:
    result = await session.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        await session.rollback()
        raise NotFound(USER_NOT_FOUND)
    await session.commit()
    log.info("user_deleted", user_id=str(user_id))


async def login(session: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """Exchange email/password for a signed access token carrying {sub, email}."""
    user = await _by_email(session, email)
    if not user or not verify_password(password, user.password_hash):
        log.info("login_failed", known_email=user is not None)
        raise Unauthorized(INVALID_CREDENTIALS)
    return user, make_access_token(str(user.id), user.email)
