"""
Route Metadata.

Decorators that attach guard and interceptor settings to endpoint
functions. Apply them beneath the router decorator:

    @router.post("/users")
    @require_permissions("system:user:add")
    @prevent_repeat_submit()
    @operation_log("User", BusinessType.INSERT)
    async def create_user(...): ...
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from admin_shell.models.oper_log import BusinessType

F = TypeVar("F", bound=Callable[..., Any])

ROUTE_META_ATTR = "__route_meta__"


@dataclass(frozen=True)
class OperationLogMeta:
    title: str
    business_type: BusinessType = BusinessType.OTHER


@dataclass(frozen=True)
class RouteMeta:
    """Everything the global guards and interceptors need to know about a route."""

    is_public: bool = False
    roles: tuple[str, ...] = ()
    permissions: tuple[str, ...] = ()
    repeat_submit: bool = False
    repeat_submit_interval_ms: int | None = None
    operation_log: OperationLogMeta | None = None
    data_scope: bool = False
    raw_response: bool = False


DEFAULT_META = RouteMeta()


def get_route_meta(endpoint: Callable[..., Any] | None) -> RouteMeta:
    """Metadata attached to an endpoint, or the defaults."""
    if endpoint is None:
        return DEFAULT_META
    return getattr(endpoint, ROUTE_META_ATTR, DEFAULT_META)


def _update_meta(func: F, **changes: Any) -> F:
    setattr(func, ROUTE_META_ATTR, replace(get_route_meta(func), **changes))
    return func


def public(func: F) -> F:
    """Skip JWT authentication for this route."""
    return _update_meta(func, is_public=True)


def raw_response(func: F) -> F:
    """Return the handler result without the ApiResponse envelope."""
    return _update_meta(func, raw_response=True)


def data_scope(func: F) -> F:
    """Compute the caller's data scope into request.state.data_scope."""
    return _update_meta(func, data_scope=True)


def require_roles(*roles: str) -> Callable[[F], F]:
    """Caller must hold at least one of the role keys."""

    def decorator(func: F) -> F:
        return _update_meta(func, roles=tuple(roles))

    return decorator


def require_permissions(*permissions: str) -> Callable[[F], F]:
    """Caller must hold every listed permission."""

    def decorator(func: F) -> F:
        return _update_meta(func, permissions=tuple(permissions))

    return decorator


def prevent_repeat_submit(interval_ms: int | None = None) -> Callable[[F], F]:
    """Reject an identical request repeated inside interval_ms (config default)."""

    def decorator(func: F) -> F:
        return _update_meta(
            func, repeat_submit=True, repeat_submit_interval_ms=interval_ms,
        )

    return decorator


def operation_log(
    title: str,
    business_type: BusinessType = BusinessType.OTHER,
) -> Callable[[F], F]:
    """Persist an operation log row for every call."""

    def decorator(func: F) -> F:
        return _update_meta(
            func, operation_log=OperationLogMeta(title=title, business_type=business_type),
        )

    return decorator
