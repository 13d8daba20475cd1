"""
Repeat Submit Guard.

For routes marked @prevent_repeat_submit, the first request claims a Redis
key built from the caller, the path, and a digest of query and body. The
key lives for the route's interval; an identical request arriving while it
exists is rejected.
"""

from admin_shell.core.cache import get_redis
from admin_shell.core.config import get_app_config
from admin_shell.core.exceptions import RepeatSubmitError
from admin_shell.core.logging import get_logger
from admin_shell.core.utils import digest
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext

logger = get_logger(__name__)


class RepeatSubmitGuard(Guard):
    async def can_activate(self, context: ExecutionContext) -> None:
        if not context.meta.repeat_submit:
            return

        config = get_app_config().security.repeat_submit
        interval_ms = context.meta.repeat_submit_interval_ms or config.interval_ms
        key = config.key_prefix + await self.fingerprint(context)

        claimed = await get_redis().set(key, "1", nx=True, px=interval_ms)
        if not claimed:
            logger.warning("Repeat submission rejected", extra={"key": key})
            raise RepeatSubmitError()

    async def fingerprint(self, context: ExecutionContext) -> str:
        request = context.request
        user = context.user
        identity = str(user.user_id) if user is not None else context.client_ip

        content_type = request.headers.get("content-type", "")
        if content_type.startswith("multipart/"):
            body = ""
        else:
            body = (await request.body()).decode("utf-8", errors="replace")

        payload = digest(f"{request.url.query}|{body}")
        return f"{identity}:{request.url.path}:{payload}"
