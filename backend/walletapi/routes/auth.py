from __future__ import annotations
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from walletapi.db import get_users_session
from walletapi.schemas.auth import LoginRequest, AuthResponse
from walletapi.schemas.user import UserPublic
from walletapi.services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("", response_model=AuthResponse)
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_users_session)):
    user, token = await users_service.login(session, payload.user.email, payload.user.password)
    return AuthResponse(user=UserPublic.model_validate(user), access_token=token)
