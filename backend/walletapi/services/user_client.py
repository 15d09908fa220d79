from __future__ import annotations
from uuid import UUID
import httpx
import structlog

from walletapi.config import settings
from walletapi.errors import UserValidationFailed
from walletapi.schemas.transaction import UserProfile

log = structlog.get_logger()


class UserServiceClient:
    """
    HTTP client for the user service.

    Every call is a fresh, authenticated GET /users/{id}: the caller's bearer
    token is forwarded as-is. No caching, no retries. Any failure (missing
    user, non-2xx, network error, timeout) surfaces as UserValidationFailed.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        max_redirects: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_redirects = max_redirects
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "UserServiceClient":
        return cls(
            settings.user_service_url,
            timeout=settings.user_service_timeout_seconds,
            max_redirects=settings.user_service_max_redirects,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self._transport,
        )

    async def validate_user(self, user_id: UUID, auth_token: str) -> UserProfile:
        if not auth_token:
            log.warning("user_validation_failed", user_id=str(user_id), reason="missing_token")
            raise UserValidationFailed()

        log.info("user_validation_started", user_id=str(user_id))
        try:
            async with self._client() as client:
                r = await client.get(f"/users/{user_id}", headers={"Authorization": f"Bearer {auth_token}"})
                r.raise_for_status()
                profile = UserProfile.model_validate(r.json())
                if profile.id != user_id:
                    raise ValueError(f"user service answered for {profile.id}")
                return profile
        except Exception as e:
            log.warning("user_validation_failed", user_id=str(user_id), reason=type(e).__name__, error=str(e))
            raise UserValidationFailed() from e


def get_user_client() -> UserServiceClient:
    return UserServiceClient.from_settings()
