"""
JWT Authentication Guard.

Every route requires a bearer token unless marked @public. The token's
uuid claim points at the cached LoginUser, which is placed on
request.state.user for the guards and handlers that follow.
"""

import structlog

from admin_shell.core.cache import get_redis
from admin_shell.core.exceptions import AuthenticationError
from admin_shell.core.logging import get_logger
from admin_shell.core.security import decode_token, extract_bearer_token, token_ttl_seconds
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext
from admin_shell.services.token import LoginSessionStore

logger = get_logger(__name__)


class JwtAuthGuard(Guard):
    async def can_activate(self, context: ExecutionContext) -> None:
        if context.meta.is_public:
            return

        request = context.request
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            raise AuthenticationError("Authentication required")

        payload = decode_token(token)
        session_id = payload.get("uuid")
        if not session_id:
            raise AuthenticationError("Invalid or expired token")

        store = LoginSessionStore(get_redis())
        user = await store.load(session_id, refresh_ttl=token_ttl_seconds())
        if user is None:
            logger.info("Login session expired", extra={"sub": payload.get("sub")})
            raise AuthenticationError("Login session expired")

        request.state.user = user
        request.state.session_id = session_id
        structlog.contextvars.bind_contextvars(user_id=user.user_id)
