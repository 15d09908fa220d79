from __future__ import annotations
from dataclasses import dataclass
from uuid import UUID
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from walletapi.errors import Unauthorized
from walletapi.security import decode_token

# auto_error off so a missing header is a 401 like every other auth failure
security = HTTPBearer(auto_error=False)

@dataclass(frozen=True)
class CurrentUser:
    user_id: UUID
    email: str | None
    token: str

async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing access token")
    token = credentials.credentials
    try:
        data = decode_token(token)
    except Exception:
        raise Unauthorized("Invalid token")
    if data.get("type") != "access":
        raise Unauthorized("Wrong token type")
    try:
        user_id = UUID(str(data.get("sub")))
    except ValueError:
        raise Unauthorized("Invalid token payload")
    user = CurrentUser(user_id=user_id, email=data.get("email"), token=token)
    request.state.user = user
    return user
