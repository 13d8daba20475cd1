"""Request pipeline: route metadata, execution context and the guarded route."""

from admin_shell.pipeline.context import ExecutionContext, get_execution_context
from admin_shell.pipeline.metadata import (
    OperationLogMeta,
    RouteMeta,
    data_scope,
    get_route_meta,
    operation_log,
    prevent_repeat_submit,
    public,
    raw_response,
    require_permissions,
    require_roles,
)

__all__ = [
    "ExecutionContext",
    "OperationLogMeta",
    "RouteMeta",
    "data_scope",
    "get_execution_context",
    "get_route_meta",
    "operation_log",
    "prevent_repeat_submit",
    "public",
    "raw_response",
    "require_permissions",
    "require_roles",
]
