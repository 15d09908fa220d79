from __future__ import annotations
from pydantic import BaseModel, EmailStr, Field
from walletapi.schemas.user import UserPublic

class UserCredentials(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class LoginRequest(BaseModel):
    user: UserCredentials

class AuthResponse(BaseModel):
    user: UserPublic
    access_token: str
