from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from walletapi.auth_deps import get_current_user
from walletapi.db import get_users_session
from walletapi.schemas.user import CreateUserRequest, UpdateUserRequest, UserPublic
from walletapi.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserPublic)
async def create_user(payload: CreateUserRequest, session: AsyncSession = Depends(get_users_session)):
    """Public signup."""
    return UserPublic.model_validate(await users_service.create_user(session, payload))

@router.get("", response_model=list[UserPublic])
async def list_users(session: AsyncSession = Depends(get_users_session), user=Depends(get_current_user)):
    return [UserPublic.model_validate(u) for u in await users_service.list_users(session)]

@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: UUID, session: AsyncSession = Depends(get_users_session), user=Depends(get_current_user)):
    return UserPublic.model_validate(await users_service.get_user(session, user_id))

@router.patch("/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: UUID,
    payload: UpdateUserRequest,
    session: AsyncSession = Depends(get_users_session),
    user=Depends(get_current_user),
):
    return UserPublic.model_validate(await users_service.update_user(session, user_id, payload))

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, session: AsyncSession = Depends(get_users_session), user=Depends(get_current_user)):
    await users_service.delete_user(session, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
