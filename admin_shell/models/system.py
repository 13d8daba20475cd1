"""
System Models.

Users, roles, departments and menus. Roles grant permissions through menus
and restrict visible rows through their data scope.
"""

from enum import Enum

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admin_shell.models.base import AuditMixin, Base


class DataScopeType(str, Enum):
    """Row visibility granted by a role."""

    ALL = "1"
    CUSTOM = "2"
    DEPT = "3"
    DEPT_AND_CHILDREN = "4"
    SELF = "5"


ADMIN_ROLE_KEY = "admin"
ALL_PERMISSION = "*:*:*"
STATUS_NORMAL = "0"
STATUS_DISABLED = "1"


sys_user_role = Table(
    "sys_user_role",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("sys_user.user_id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("sys_role.role_id", ondelete="CASCADE"), primary_key=True),
)

sys_role_menu = Table(
    "sys_role_menu",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("sys_role.role_id", ondelete="CASCADE"), primary_key=True),
    Column("menu_id", Integer, ForeignKey("sys_menu.menu_id", ondelete="CASCADE"), primary_key=True),
)

sys_role_dept = Table(
    "sys_role_dept",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("sys_role.role_id", ondelete="CASCADE"), primary_key=True),
    Column("dept_id", Integer, ForeignKey("sys_dept.dept_id", ondelete="CASCADE"), primary_key=True),
)


class SysDept(AuditMixin, Base):
    """
    Department tree node.

    ancestors holds the comma separated ids from the root down to the
    parent, e.g. "0,100,101", so descendants can be matched by prefix.
    """

    __tablename__ = "sys_dept"

    dept_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    parent_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ancestors: Mapped[str] = mapped_column(String(255), default="0", nullable=False)
    dept_name: Mapped[str] = mapped_column(String(64), nullable=False)
    order_num: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(1), default=STATUS_NORMAL, nullable=False)

    def __repr__(self) -> str:
        return f"<SysDept(dept_id={self.dept_id}, dept_name={self.dept_name!r})>"


class SysMenu(AuditMixin, Base):
    """Menu or button entry; perms is the permission string it grants."""

    __tablename__ = "sys_menu"

    menu_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    menu_name: Mapped[str] = mapped_column(String(64), nullable=False)
    perms: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    status: Mapped[str] = mapped_column(String(1), default=STATUS_NORMAL, nullable=False)


class SysRole(AuditMixin, Base):
    """Role with a key used by role guards and a data scope."""

    __tablename__ = "sys_role"

    role_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_name: Mapped[str] = mapped_column(String(64), nullable=False)
    role_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    data_scope: Mapped[str] = mapped_column(
        String(1), default=DataScopeType.ALL.value, nullable=False,
    )
    status: Mapped[str] = mapped_column(String(1), default=STATUS_NORMAL, nullable=False)

    menus: Mapped[list[SysMenu]] = relationship(secondary=sys_role_menu, lazy="selectin")
    depts: Mapped[list[SysDept]] = relationship(secondary=sys_role_dept, lazy="selectin")

    def __repr__(self) -> str:
        return f"<SysRole(role_id={self.role_id}, role_key={self.role_key!r})>"


class SysUser(AuditMixin, Base):
    """Back-office account."""

    __tablename__ = "sys_user"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dept_id: Mapped[int | None] = mapped_column(
        ForeignKey("sys_dept.dept_id", ondelete="SET NULL"), nullable=True, index=True,
    )
    user_name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    nick_name: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    email: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    status: Mapped[str] = mapped_column(String(1), default=STATUS_NORMAL, nullable=False)

    dept: Mapped[SysDept | None] = relationship(lazy="selectin")
    roles: Mapped[list[SysRole]] = relationship(secondary=sys_user_role, lazy="selectin")

    def __repr__(self) -> str:
        return f"<SysUser(user_id={self.user_id}, user_name={self.user_name!r})>"
