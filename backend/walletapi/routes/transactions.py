from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from walletapi.auth_deps import CurrentUser, get_current_user
from walletapi.db import get_wallet_session
from walletapi.models.transaction import Transaction, TransactionType
from walletapi.schemas.transaction import CreateTransactionRequest, TransactionPublic, BalanceResponse
from walletapi.services import transactions as tx_service
from walletapi.services.user_client import UserServiceClient, get_user_client

router = APIRouter(tags=["transactions"])

def _public(tx: Transaction) -> TransactionPublic:
    return TransactionPublic(id=tx.id, user_id=tx.user_id, amount=float(tx.amount), type=tx.type)

@router.post("/transactions", status_code=status.HTTP_201_CREATED, response_model=TransactionPublic)
async def create_transaction(
    payload: CreateTransactionRequest,
    session: AsyncSession = Depends(get_wallet_session),
    users: UserServiceClient = Depends(get_user_client),
    user: CurrentUser = Depends(get_current_user),
):
    tx = await tx_service.create_transaction(session, users, payload, user.token)
    return _public(tx)

@router.get("/transactions", response_model=list[TransactionPublic])
async def list_transactions(
    type_: TransactionType | None = Query(default=None, alias="type"),
    session: AsyncSession = Depends(get_wallet_session),
    user: CurrentUser = Depends(get_current_user),
):
    return [_public(tx) for tx in await tx_service.list_transactions(session, type_)]

@router.get("/transactions/{transaction_id}", response_model=TransactionPublic)
async def get_transaction(
    transaction_id: UUID,
    session: AsyncSession = Depends(get_wallet_session),
    user: CurrentUser = Depends(get_current_user),
):
    return _public(await tx_service.get_transaction(session, transaction_id))

@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: UUID,
    session: AsyncSession = Depends(get_wallet_session),
    user: CurrentUser = Depends(get_current_user),
):
    await tx_service.delete_transaction(session, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    session: AsyncSession = Depends(get_wallet_session),
    user: CurrentUser = Depends(get_current_user),
):
    """Balance of the authenticated caller."""
    amount = await tx_service.balance_for_user(session, user.user_id)
    return BalanceResponse(amount=float(amount))
