from __future__ import annotations
from decimal import Decimal
from pydantic import BaseModel, Field
from uuid import UUID
from walletapi.models.transaction import TransactionType

class CreateTransactionRequest(BaseModel):
    user_id: UUID
    amount: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    type: TransactionType

class TransactionPublic(BaseModel):
    id: UUID
    user_id: UUID
    amount: float
    type: TransactionType

class BalanceResponse(BaseModel):
    amount: float

class UserProfile(BaseModel):
    """What the user service answers for GET /users/{id}."""
    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
