"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from admin_shell.models.system import DataScopeType
from admin_shell.pipeline.context import ExecutionContext
from admin_shell.pipeline.metadata import RouteMeta
from admin_shell.schemas.auth import LoginRole, LoginUser


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_repository(mock_db_session: AsyncMock):
            repo = UserRepository(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# =============================================================================
# Redis Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_redis() -> MagicMock:
    """
    Mock Redis client for unit tests.

    Provides a mocked Redis client with the methods the guards and the
    login session store call.
    """
    redis = MagicMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.expire = AsyncMock(return_value=True)
    redis.ping = AsyncMock(return_value=True)
    return redis


# =============================================================================
# Request / Context Builders
# =============================================================================


def build_request(
    method: str = "GET",
    path: str = "/api/v1/system/users",
    headers: dict[str, str] | None = None,
    body: Any = None,
    query_string: str = "",
    client: tuple[str, int] = ("10.0.0.1", 50000),
) -> Request:
    """Starlette Request over a synthetic ASGI scope with an optional JSON body."""
    raw_headers = {k.lower(): v for k, v in (headers or {}).items()}
    payload = b""
    if body is not None:
        payload = body if isinstance(body, bytes) else json.dumps(body).encode()
        raw_headers.setdefault("content-type", "application/json")

    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": query_string.encode(),
        "headers": [(k.encode(), v.encode()) for k, v in raw_headers.items()],
        "client": client,
    }
    sent = False

    async def receive() -> dict[str, Any]:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": payload, "more_body": False}

    return Request(scope, receive)


def build_context(
    meta: RouteMeta | None = None,
    user: LoginUser | None = None,
    endpoint: Callable[..., Any] | None = None,
    **request_kwargs: Any,
) -> ExecutionContext:
    """ExecutionContext with the user already placed on request.state."""
    request = build_request(**request_kwargs)
    if user is not None:
        request.state.user = user
    return ExecutionContext(request=request, endpoint=endpoint, meta=meta or RouteMeta())


@pytest.fixture
def make_context() -> Callable[..., ExecutionContext]:
    """Factory fixture around build_context()."""
    return build_context


# =============================================================================
# Login User Fixtures
# =============================================================================


def make_login_user(
    user_id: int = 2,
    user_name: str = "operator",
    dept_id: int | None = 101,
    roles: list[LoginRole] | None = None,
    permissions: list[str] | None = None,
) -> LoginUser:
    return LoginUser(
        user_id=user_id,
        user_name=user_name,
        nick_name=user_name.title(),
        dept_id=dept_id,
        roles=roles or [],
        permissions=permissions or [],
    )


@pytest.fixture
def make_user() -> Callable[..., LoginUser]:
    """Factory fixture around make_login_user()."""
    return make_login_user


@pytest.fixture
def admin_user() -> LoginUser:
    return make_login_user(
        user_id=1,
        user_name="admin",
        dept_id=100,
        roles=[LoginRole(role_id=1, role_key="admin", data_scope=DataScopeType.ALL.value)],
    )


@pytest.fixture
def operator_user() -> LoginUser:
    """Non-admin editor with a department-only data scope."""
    return make_login_user(
        roles=[LoginRole(role_id=2, role_key="editor", data_scope=DataScopeType.DEPT.value)],
        permissions=["system:user:list", "system:user:query"],
    )


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                ...
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
