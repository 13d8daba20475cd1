"""
Operation Log Interceptor.

For routes marked @operation_log, writes a sys_oper_log row describing the
call: who, what, parameters, result or error, and duration. The row is
written in its own session so failed requests are audited too. The
request session is committed (or rolled back on failure) first, so the
audit insert never waits on locks the request still holds. A failure to
write the row is logged and never changes the response.
"""

import json
import time
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel

from admin_shell.core.database import settle_request_session
from admin_shell.core.exceptions import ApplicationError
from admin_shell.core.logging import get_logger
from admin_shell.core.utils import to_json
from admin_shell.interceptors.base import CallNext, Interceptor
from admin_shell.models.oper_log import OperStatus
from admin_shell.pipeline.context import ExecutionContext
from admin_shell.services.oper_log import record_operation_log

logger = get_logger(__name__)

MAX_FIELD_LENGTH = 2000

Recorder = Callable[[dict[str, Any]], Awaitable[None]]


def _serialize_result(result: Any) -> str:
    if isinstance(result, BaseModel):
        text = result.model_dump_json()
        return text[:MAX_FIELD_LENGTH]
    return to_json(result, limit=MAX_FIELD_LENGTH)


async def _collect_params(context: ExecutionContext) -> str:
    request = context.request
    params: dict[str, Any] = {}
    if request.query_params:
        params["query"] = dict(request.query_params)
    if request.path_params:
        params["path"] = dict(request.path_params)

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/"):
        params["body"] = "[multipart]"
    else:
        raw = await request.body()
        if raw:
            try:
                params["body"] = json.loads(raw)
            except ValueError:
                params["body"] = raw.decode("utf-8", errors="replace")
    return to_json(params, limit=MAX_FIELD_LENGTH)


class OperationLogInterceptor(Interceptor):
    def __init__(self, recorder: Recorder = record_operation_log) -> None:
        self._recorder = recorder

    async def intercept(self, context: ExecutionContext, call_next: CallNext) -> Any:
        meta = context.meta.operation_log
        if meta is None:
            return await call_next()

        request = context.request
        user = context.user
        entry: dict[str, Any] = {
            "title": meta.title,
            "business_type": int(meta.business_type),
            "method": context.handler_name,
            "request_method": request.method,
            "oper_name": user.user_name if user else "",
            "oper_url": request.url.path,
            "oper_ip": context.client_ip,
            "oper_param": await _collect_params(context),
        }

        start = time.perf_counter()
        try:
            result = await call_next()
            await settle_request_session(request, success=True)
        except Exception as exc:
            await settle_request_session(request, success=False)
            message = exc.message if isinstance(exc, ApplicationError) else str(exc)
            entry.update(
                status=int(OperStatus.FAIL),
                error_msg=message[:MAX_FIELD_LENGTH],
                cost_time=int((time.perf_counter() - start) * 1000),
            )
            await self._write(entry)
            raise

        entry.update(
            status=int(OperStatus.SUCCESS),
            json_result=_serialize_result(result),
            cost_time=int((time.perf_counter() - start) * 1000),
        )
        await self._write(entry)
        return result

    async def _write(self, entry: dict[str, Any]) -> None:
        try:
            await self._recorder(entry)
        except Exception:
            logger.exception(
                "Failed to write operation log",
                extra={"title": entry.get("title"), "url": entry.get("oper_url")},
            )
