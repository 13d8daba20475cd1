"""
Throttler Guard.

Sliding-window limit per client IP and route: at most `limit` requests in
any `ttl` seconds. Counts are kept in process memory; keys whose window
has emptied are dropped, and a sweep at most once per `ttl` removes keys
that stopped sending requests.
"""

import time
from collections.abc import Callable

from admin_shell.core.exceptions import RateLimitError
from admin_shell.core.logging import get_logger
from admin_shell.guards.base import Guard
from admin_shell.pipeline.context import ExecutionContext

logger = get_logger(__name__)


class ThrottlerGuard(Guard):
    def __init__(
        self,
        ttl: int,
        limit: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.limit = limit
        self._clock = clock
        self._hits: dict[str, list[float]] = {}
        self._last_sweep = clock()

    async def can_activate(self, context: ExecutionContext) -> None:
        route = context.request.scope.get("route")
        route_path = getattr(route, "path", context.request.url.path)
        key = f"{context.client_ip}:{route_path}"

        retry_after = self.hit(key)
        if retry_after:
            logger.warning(
                "Rate limit exceeded",
                extra={"key": key, "limit": self.limit, "ttl": self.ttl},
            )
            raise RateLimitError(retry_after_seconds=retry_after)

    def hit(self, key: str) -> int:
        """Record a hit; return 0 if allowed, else seconds until a slot frees."""
        now = self._clock()
        cutoff = now - self.ttl
        self._sweep(now, cutoff)

        window = [ts for ts in self._hits.get(key, ()) if ts > cutoff]
        if len(window) >= self.limit:
            self._hits[key] = window
            oldest = min(window)
            return int(self.ttl - (now - oldest)) + 1

        window.append(now)
        self._hits[key] = window
        return 0

    def _sweep(self, now: float, cutoff: float) -> None:
        if now - self._last_sweep < self.ttl:
            return
        self._last_sweep = now
        stale = [
            key for key, window in self._hits.items() if not window or window[-1] <= cutoff
        ]
        for key in stale:
            del self._hits[key]

    @property
    def tracked_keys(self) -> int:
        return len(self._hits)
