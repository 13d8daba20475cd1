"""
Login Session Store.

Keeps the LoginUser for each issued token in Redis under
<login_token_prefix><token uuid>, expiring together with the JWT.
"""

import redis.asyncio as redis

from admin_shell.core.config import get_app_config
from admin_shell.core.logging import get_logger
from admin_shell.schemas.auth import LoginUser

logger = get_logger(__name__)


class LoginSessionStore:
    def __init__(self, client: redis.Redis, prefix: str | None = None) -> None:
        self._client = client
        self._prefix = prefix if prefix is not None else get_app_config().security.login_token_prefix

    def key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def save(self, session_id: str, user: LoginUser, ttl_seconds: int) -> None:
        await self._client.set(self.key(session_id), user.model_dump_json(), ex=ttl_seconds)

    async def load(self, session_id: str, refresh_ttl: int | None = None) -> LoginUser | None:
        """Return the cached user, sliding its expiry when refresh_ttl is given."""
        raw = await self._client.get(self.key(session_id))
        if raw is None:
            return None
        if refresh_ttl:
            await self._client.expire(self.key(session_id), refresh_ttl)
        return LoginUser.model_validate_json(raw)

    async def delete(self, session_id: str) -> None:
        await self._client.delete(self.key(session_id))
        logger.debug("Login session removed", extra={"session_id": session_id})
