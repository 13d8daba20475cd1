"""Data scope interceptor: places the caller's DataScope on request.state."""

from typing import Any

from admin_shell.interceptors.base import CallNext, Interceptor
from admin_shell.pipeline.context import ExecutionContext
from admin_shell.services.data_scope import build_data_scope


class DataScopeInterceptor(Interceptor):
    async def intercept(self, context: ExecutionContext, call_next: CallNext) -> Any:
        user = context.user
        if context.meta.data_scope and user is not None:
            context.request.state.data_scope = build_data_scope(user)
        return await call_next()
