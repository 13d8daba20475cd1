"""Permission guard: routes marked @require_permissions need every listed permission."""

from admin_shell.core.exceptions import AuthenticationError, AuthorizationError
from admin_shell.core.logging import get_logger
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext

logger = get_logger(__name__)


class PermissionAuthGuard(Guard):
    async def can_activate(self, context: ExecutionContext) -> None:
        required = context.meta.permissions
        if not required:
            return

        user = context.user
        if user is None:
            raise AuthenticationError("Authentication required")
        if user.has_permissions(*required):
            return

        logger.warning(
            "Permission check failed",
            extra={"user_id": user.user_id, "required": list(required)},
        )
        raise AuthorizationError("Permission denied")
