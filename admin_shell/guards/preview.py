"""
Demo Environment Guard.

When isDemoEnvironment=DemoEnvironment the deployment is read-only: only
safe methods and the whitelisted login/logout paths get through.
"""

from admin_shell.core.config import get_app_config, get_settings
from admin_shell.core.exceptions import DemoEnvironmentError
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


class PreviewGuard(Guard):
    async def can_activate(self, context: ExecutionContext) -> None:
        if not get_settings().is_demo_environment:
            return
        request = context.request
        if request.method.upper() in SAFE_METHODS:
            return
        if request.url.path in get_app_config().security.demo_allowed_paths:
            return
        raise DemoEnvironmentError()
