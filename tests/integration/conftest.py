"""
Integration Test Fixtures.

Fixtures for integration tests - the real application, database
(in-memory SQLite) and an in-memory Redis double.

Seeded organisation:

    100 HQ
    ├── 101 Sales
    │   └── 102 Sales East
    └── 103 R&D

    admin     dept 100  role admin    (scope 1, all)
    manager   dept 101  role manager  (scope 4, dept and children)
    clerk     dept 102  role clerk    (scope 5, self)
    east      dept 102  role clerk
    engineer  dept 103  role viewer   (scope 2, custom: 103)
    guest     dept 103  no roles
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from admin_shell.core.database import set_session_factory
from admin_shell.core.security import hash_password
from admin_shell.models.system import DataScopeType, SysDept, SysMenu, SysRole, SysUser

TEST_PASSWORD = "admin123"

USER_LIST = "system:user:list"
USER_ADD = "system:user:add"
OPERLOG_LIST = "monitor:operlog:list"


# =============================================================================
# Seed Data
# =============================================================================


@pytest.fixture
async def seeded(
    db_session_factory: async_sessionmaker[AsyncSession],
) -> dict[str, Any]:
    """Departments, menus, roles and users described in the module docstring."""
    password = hash_password(TEST_PASSWORD)

    async with db_session_factory() as session:
        hq = SysDept(dept_id=100, parent_id=0, ancestors="0", dept_name="HQ")
        sales = SysDept(dept_id=101, parent_id=100, ancestors="0,100", dept_name="Sales")
        east = SysDept(dept_id=102, parent_id=101, ancestors="0,100,101", dept_name="Sales East")
        rnd = SysDept(dept_id=103, parent_id=100, ancestors="0,100", dept_name="R&D")
        session.add_all([hq, sales, east, rnd])

        list_menu = SysMenu(menu_name="User list", perms=USER_LIST)
        add_menu = SysMenu(menu_name="User add", perms=USER_ADD)
        log_menu = SysMenu(menu_name="Operation log", perms=OPERLOG_LIST)
        disabled_menu = SysMenu(menu_name="Disabled", perms="system:user:remove", status="1")

        admin_role = SysRole(role_name="Administrator", role_key="admin", data_scope=DataScopeType.ALL.value)
        manager_role = SysRole(
            role_name="Manager",
            role_key="manager",
            data_scope=DataScopeType.DEPT_AND_CHILDREN.value,
        )
        manager_role.menus = [list_menu, add_menu, disabled_menu]
        clerk_role = SysRole(role_name="Clerk", role_key="clerk", data_scope=DataScopeType.SELF.value)
        clerk_role.menus = [list_menu]
        viewer_role = SysRole(role_name="Viewer", role_key="viewer", data_scope=DataScopeType.CUSTOM.value)
        viewer_role.menus = [list_menu, log_menu]
        viewer_role.depts = [rnd]

        def user(name: str, dept: SysDept, roles: list[SysRole]) -> SysUser:
            account = SysUser(user_name=name, nick_name=name.title(), password=password, dept_id=dept.dept_id)
            account.roles = roles
            return account

        users = {
            "admin": user("admin", hq, [admin_role]),
            "manager": user("manager", sales, [manager_role]),
            "clerk": user("clerk", east, [clerk_role]),
            "east": user("east", east, [clerk_role]),
            "engineer": user("engineer", rnd, [viewer_role]),
            "guest": user("guest", rnd, []),
        }
        session.add_all(users.values())
        await session.commit()

        return {
            "users": {name: account.user_id for name, account in users.items()},
            "roles": {
                "admin": admin_role.role_id,
                "manager": manager_role.role_id,
                "clerk": clerk_role.role_id,
                "viewer": viewer_role.role_id,
            },
        }


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def app(
    db_session_factory: async_sessionmaker[AsyncSession],
    fake_redis,
) -> FastAPI:
    """
    The real application wired to the test database and Redis double.

    Create it after any environment changes the test needs (for example
    isDemoEnvironment) so the guards read the patched settings.
    """
    from admin_shell.main import create_app

    set_session_factory(db_session_factory)
    return create_app(use_lifespan=False)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for the application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as test_client:
        yield test_client


@pytest.fixture
def login(client: AsyncClient, seeded) -> Callable[..., Awaitable[dict[str, str]]]:
    """
    Log in as a seeded user and return the Authorization header.

    Usage:
        async def test_profile(client, login):
            headers = await login("admin")
    """

    async def _login(user_name: str, password: str = TEST_PASSWORD) -> dict[str, str]:
        response = await client.post(
            "/api/v1/auth/login",
            json={"user_name": user_name, "password": password},
        )
        assert response.status_code == 200, response.text
        token = response.json()["data"]["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _login


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """Assert the response is a successful envelope and return its JSON."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """Assert the response is an error envelope with the given status and code."""
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )
        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
