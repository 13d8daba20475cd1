"""
Data Scope.

Turns a LoginUser's roles into the set of rows it may see, then into a
SQLAlchemy filter over a department column and an owner column.

Role data scopes combine by union:
    1 all rows
    2 custom departments (sys_role_dept)
    3 the user's own department
    4 the user's department and its descendants
    5 rows owned by the user
A user with no granting role sees nothing.
"""

from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, false, literal, or_, select, true

from admin_shell.models.system import DataScopeType, SysDept
from admin_shell.schemas.auth import LoginUser


@dataclass(frozen=True)
class DataScope:
    unrestricted: bool = False
    dept_ids: frozenset[int] = field(default_factory=frozenset)
    subtree_roots: frozenset[int] = field(default_factory=frozenset)
    owner_id: int | None = None

    @classmethod
    def everything(cls) -> "DataScope":
        return cls(unrestricted=True)

    def to_filter(
        self,
        dept_column: ColumnElement,
        owner_column: ColumnElement | None = None,
    ) -> ColumnElement[bool]:
        if self.unrestricted:
            return true()

        clauses: list[ColumnElement[bool]] = []
        if self.dept_ids:
            clauses.append(dept_column.in_(sorted(self.dept_ids)))
        for root in sorted(self.subtree_roots):
            clauses.append(dept_column.in_(descendant_dept_ids(root)))
        if self.owner_id is not None and owner_column is not None:
            clauses.append(owner_column == self.owner_id)

        if not clauses:
            return false()
        return or_(*clauses)


def descendant_dept_ids(root_id: int):
    """Select the department itself and every department below it."""
    ancestors = literal(",") + SysDept.ancestors + literal(",")
    return select(SysDept.dept_id).where(
        or_(
            SysDept.dept_id == root_id,
            ancestors.like(f"%,{root_id},%"),
        )
    )


def build_data_scope(user: LoginUser) -> DataScope:
    """Union of the data scopes granted by the user's roles."""
    if user.is_admin:
        return DataScope.everything()

    dept_ids: set[int] = set()
    subtree_roots: set[int] = set()
    owner_id: int | None = None

    for role in user.roles:
        scope = role.data_scope
        if scope == DataScopeType.ALL.value:
            return DataScope.everything()
        if scope == DataScopeType.CUSTOM.value:
            dept_ids.update(role.dept_ids)
        elif scope == DataScopeType.DEPT.value and user.dept_id is not None:
            dept_ids.add(user.dept_id)
        elif scope == DataScopeType.DEPT_AND_CHILDREN.value and user.dept_id is not None:
            subtree_roots.add(user.dept_id)
        elif scope == DataScopeType.SELF.value:
            owner_id = user.user_id

    return DataScope(
        dept_ids=frozenset(dept_ids),
        subtree_roots=frozenset(subtree_roots),
        owner_id=owner_id,
    )
