"""Integration Tests for the shared repository queries."""

import pytest

from admin_shell.models.system import SysRole, SysUser
from admin_shell.repositories.user import RoleRepository, UserRepository
from admin_shell.services.data_scope import DataScope


@pytest.fixture
async def roles(db_session):
    db_session.add_all([
        SysRole(role_name=f"Role {n}", role_key=f"role{n}", data_scope="5") for n in range(1, 6)
    ])
    await db_session.flush()


@pytest.mark.usefixtures("roles")
class TestBaseRepository:
    @pytest.mark.asyncio
    async def test_get_by_ids_skips_unknown_ids(self, db_session):
        found = await RoleRepository(db_session).get_by_ids([2, 4, 99])
        assert sorted(role.role_key for role in found) == ["role2", "role4"]

    @pytest.mark.asyncio
    async def test_get_by_ids_with_no_ids(self, db_session):
        assert await RoleRepository(db_session).get_by_ids([]) == []

    @pytest.mark.asyncio
    async def test_page_orders_by_primary_key_and_counts_all(self, db_session):
        rows, total = await RoleRepository(db_session).page(limit=2, offset=2)

        assert total == 5
        assert [role.role_key for role in rows] == ["role3", "role4"]

    @pytest.mark.asyncio
    async def test_page_applies_criteria(self, db_session):
        repo = RoleRepository(db_session)
        rows, total = await repo.page(SysRole.role_key.in_(["role1", "role5"]), limit=10, offset=0)

        assert total == 2
        assert [role.role_key for role in rows] == ["role1", "role5"]


@pytest.mark.asyncio
async def test_empty_user_scope_returns_nothing(db_session):
    users, total = await UserRepository(db_session).list_page(
        DataScope().to_filter(SysUser.dept_id, SysUser.user_id), limit=10, offset=0,
    )
    assert (users, total) == ([], 0)
