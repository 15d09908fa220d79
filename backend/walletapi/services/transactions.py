from __future__ import annotations
from decimal import Decimal
from uuid import UUID
from sqlalchemy import select, delete, func, case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from walletapi.errors import BadRequest, NotFound
from walletapi.models.transaction import Transaction, TransactionType
from walletapi.schemas.transaction import CreateTransactionRequest
from walletapi.services.user_client import UserServiceClient

log = structlog.get_logger()

TRANSACTION_NOT_FOUND = "Transaction not found"
CENTS = Decimal("0.01")


async def create_transaction(
    session: AsyncSession,
    users: UserServiceClient,
    payload: CreateTransactionRequest,
    auth_token: str,
) -> Transaction:
    """
    PENDING_VALIDATION -> PERSISTED.

    The user must be confirmed by the user service before the row is written.
    Validation and storage failures are not told apart: both become one
    BadRequest. Nothing is compensated on the user service side.
    """
    try:
        await users.validate_user(payload.user_id, auth_token)
        tx = Transaction(user_id=payload.user_id, amount=payload.amount, type=payload.type)
        session.add(tx)
        await session.commit()
    except Exception as e:
        await session.rollback()
        log.warning("transaction_create_failed", user_id=str(payload.user_id), reason=type(e).__name__)
        raise BadRequest("Failed to create transaction") from e
    log.info("transaction_created", transaction_id=str(tx.id), user_id=str(tx.user_id), type=tx.type.value, amount=str(tx.amount))
    return tx


async def list_transactions(session: AsyncSession, type_: TransactionType | None = None) -> list[Transaction]:
    # No explicit ordering: rows come back in storage order
    stmt = select(Transaction)
    if type_ is not None:
        stmt = stmt.where(Transaction.type == type_)
    try:
        return list((await session.execute(stmt)).scalars().all())
    except SQLAlchemyError as e:
        log.error("transaction_list_failed", error=str(e))
        raise BadRequest("Failed to retrieve transactions") from e


async def get_transaction(session: AsyncSession, transaction_id: UUID) -> Transaction:
    tx = await session.get(Transaction, transaction_id)
    if not tx:
        raise NotFound(TRANSACTION_NOT_FOUND)
    return tx


async def delete_transaction(session: AsyncSession, transaction_id: UUID) -> None:
    result = await session.execute(delete(Transaction).where(Transaction.id == transaction_id))
    if result.rowcount == 0:
        await session.rollback()
        raise NotFound(TRANSACTION_NOT_FOUND)
    await session.commit()
    log.info("transaction_deleted", transaction_id=str(transaction_id))


async def balance_for_user(session: AsyncSession, user_id: UUID) -> Decimal:
    """SUM(CREDIT) - SUM(DEBIT) for one user in a single aggregate query; 0 when there are no rows."""
    credit = func.coalesce(func.sum(case((Transaction.type == TransactionType.CREDIT, Transaction.amount), else_=0)), 0)
    debit = func.coalesce(func.sum(case((Transaction.type == TransactionType.DEBIT, Transaction.amount), else_=0)), 0)
    try:
        total = await session.scalar(select(credit - debit).where(Transaction.user_id == user_id))
    except SQLAlchemyError as e:
        log.error("balance_failed", user_id=str(user_id), error=str(e))
        raise BadRequest("Failed to calculate balance") from e
    return Decimal(str(total or 0)).quantize(CENTS)
