"""Role guard: routes marked @require_roles need one of the listed role keys."""

from admin_shell.core.exceptions import AuthenticationError, AuthorizationError
from admin_shell.core.logging import get_logger
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext

logger = get_logger(__name__)


class RoleAuthGuard(Guard):
    async def can_activate(self, context: ExecutionContext) -> None:
        required = context.meta.roles
        if not required:
            return

        user = context.user
        if user is None:
            raise AuthenticationError("Authentication required")
        if user.has_any_role(*required):
            return

        logger.warning(
            "Role check failed",
            extra={"user_id": user.user_id, "required": list(required)},
        )
        raise AuthorizationError("Insufficient role")
