"""
Response Transform Interceptor.

Wraps plain handler results in the ApiResponse envelope. Responses,
ready-made envelopes and @raw_response routes pass through untouched.
"""

from typing import Any

from starlette.responses import Response

from admin_shell.interceptors.base import CallNext, Interceptor
from admin_shell.pipeline.context import ExecutionContext
from admin_shell.schemas.base import ApiResponse, ErrorResponse, ResponseMetadata


class ResponseTransformInterceptor(Interceptor):
    async def intercept(self, context: ExecutionContext, call_next: CallNext) -> Any:
        result = await call_next()
        if context.meta.raw_response:
            return result
        if isinstance(result, (Response, ApiResponse, ErrorResponse)):
            return result
        request_id = getattr(context.request.state, "request_id", None)
        return ApiResponse(data=result, metadata=ResponseMetadata(request_id=request_id))
