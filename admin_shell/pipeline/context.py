"""
Execution Context.

Per-request view shared by guards and interceptors: the request, the
matched endpoint and its metadata.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request

from admin_shell.pipeline.metadata import RouteMeta, get_route_meta
from admin_shell.schemas.auth import LoginUser

_CONTEXT_ATTR = "execution_context"


@dataclass
class ExecutionContext:
    request: Request
    endpoint: Callable[..., Any] | None
    meta: RouteMeta

    @property
    def handler_name(self) -> str:
        if self.endpoint is None:
            return ""
        return f"{self.endpoint.__module__}.{self.endpoint.__qualname__}"

    @property
    def user(self) -> LoginUser | None:
        return getattr(self.request.state, "user", None)

    @property
    def client_ip(self) -> str:
        client_ip = getattr(self.request.state, "client_ip", None)
        if client_ip:
            return client_ip
        return self.request.client.host if self.request.client else "unknown"


def _resolve_endpoint(request: Request) -> Callable[..., Any] | None:
    route = request.scope.get("route")
    endpoint = getattr(route, "original_endpoint", None)
    if endpoint is not None:
        return endpoint
    return request.scope.get("endpoint")


def get_execution_context(request: Request) -> ExecutionContext:
    """Build the context once per request and cache it on request.state."""
    context = getattr(request.state, _CONTEXT_ATTR, None)
    if context is None:
        endpoint = _resolve_endpoint(request)
        context = ExecutionContext(
            request=request,
            endpoint=endpoint,
            meta=get_route_meta(endpoint),
        )
        setattr(request.state, _CONTEXT_ATTR, context)
    return context
