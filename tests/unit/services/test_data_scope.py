"""
Unit Tests for data scope resolution.

build_data_scope() turns role grants into a DataScope; to_filter() is
checked by compiling the SQL it produces.
"""

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql.elements import False_, True_

from admin_shell.models.system import DataScopeType, SysUser
from admin_shell.schemas.auth import LoginRole
from admin_shell.services.data_scope import DataScope, build_data_scope


def _role(role_id: int, scope: DataScopeType, dept_ids: list[int] | None = None) -> LoginRole:
    return LoginRole(
        role_id=role_id,
        role_key=f"role{role_id}",
        data_scope=scope.value,
        dept_ids=dept_ids or [],
    )


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))


class TestBuildDataScope:
    def test_admin_sees_everything(self, admin_user):
        assert build_data_scope(admin_user) == DataScope.everything()

    def test_all_scope_wins_over_others(self, make_user):
        user = make_user(roles=[_role(1, DataScopeType.SELF), _role(2, DataScopeType.ALL)])
        assert build_data_scope(user).unrestricted is True

    def test_custom_scope_uses_role_departments(self, make_user):
        user = make_user(roles=[_role(1, DataScopeType.CUSTOM, [103, 105])])
        scope = build_data_scope(user)
        assert scope.dept_ids == frozenset({103, 105})
        assert scope.owner_id is None

    def test_dept_scope_uses_own_department(self, make_user):
        scope = build_data_scope(make_user(dept_id=101, roles=[_role(1, DataScopeType.DEPT)]))
        assert scope.dept_ids == frozenset({101})

    def test_dept_and_children_records_subtree_root(self, make_user):
        user = make_user(dept_id=101, roles=[_role(1, DataScopeType.DEPT_AND_CHILDREN)])
        scope = build_data_scope(user)
        assert scope.subtree_roots == frozenset({101})
        assert scope.dept_ids == frozenset()

    def test_self_scope_sets_owner(self, make_user):
        scope = build_data_scope(make_user(user_id=7, roles=[_role(1, DataScopeType.SELF)]))
        assert scope.owner_id == 7

    def test_scopes_combine(self, make_user):
        user = make_user(
            user_id=7,
            dept_id=101,
            roles=[
                _role(1, DataScopeType.CUSTOM, [200]),
                _role(2, DataScopeType.DEPT),
                _role(3, DataScopeType.SELF),
            ],
        )
        scope = build_data_scope(user)
        assert scope.dept_ids == frozenset({101, 200})
        assert scope.owner_id == 7

    def test_department_scopes_ignored_without_department(self, make_user):
        user = make_user(dept_id=None, roles=[_role(1, DataScopeType.DEPT)])
        assert build_data_scope(user) == DataScope()

    def test_no_roles_sees_nothing(self, make_user):
        assert build_data_scope(make_user(roles=[])) == DataScope()


class TestToFilter:
    def test_unrestricted_is_true(self):
        assert isinstance(DataScope.everything().to_filter(SysUser.dept_id), True_)

    def test_empty_scope_is_false(self):
        assert isinstance(DataScope().to_filter(SysUser.dept_id, SysUser.user_id), False_)

    def test_department_list(self):
        sql = _sql(DataScope(dept_ids=frozenset({3, 1})).to_filter(SysUser.dept_id))
        assert sql == "sys_user.dept_id IN (1, 3)"

    def test_owner_ignored_without_owner_column(self):
        assert isinstance(DataScope(owner_id=5).to_filter(SysUser.dept_id), False_)

    def test_owner_and_departments_are_ored(self):
        scope = DataScope(dept_ids=frozenset({1}), owner_id=5)
        sql = _sql(scope.to_filter(SysUser.dept_id, SysUser.user_id))
        assert sql == "sys_user.dept_id IN (1) OR sys_user.user_id = 5"

    @pytest.mark.parametrize("root", [100, 7])
    def test_subtree_matches_ancestor_path(self, root):
        sql = _sql(DataScope(subtree_roots=frozenset({root})).to_filter(SysUser.dept_id))
        assert "sys_dept.ancestors" in sql
        assert f"'%,{root},%'" in sql
