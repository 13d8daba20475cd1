"""Request log interceptor: one structured record per handler call."""

import time
from typing import Any

from admin_shell.core.logging import get_logger
from admin_shell.interceptors.base import CallNext, Interceptor
from admin_shell.pipeline.context import ExecutionContext

logger = get_logger(__name__)


class RequestLogInterceptor(Interceptor):
    async def intercept(self, context: ExecutionContext, call_next: CallNext) -> Any:
        user = context.user
        log_extra = {
            "handler": context.handler_name,
            "user_id": user.user_id if user else None,
        }
        start = time.perf_counter()
        try:
            result = await call_next()
        except Exception as exc:
            log_extra["duration_ms"] = int((time.perf_counter() - start) * 1000)
            log_extra["error_type"] = type(exc).__name__
            logger.warning("Handler failed", extra=log_extra)
            raise
        log_extra["duration_ms"] = int((time.perf_counter() - start) * 1000)
        logger.info("Handler completed", extra=log_extra)
        return result
