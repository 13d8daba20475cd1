"""
Database models.

Importing this package registers every table on Base.metadata, which is
what schema synchronization and the test fixtures rely on.
"""

from admin_shell.models.base import Base
from admin_shell.models.oper_log import BusinessType, OperStatus, SysOperLog
from admin_shell.models.system import (
    ADMIN_ROLE_KEY,
    ALL_PERMISSION,
    DataScopeType,
    SysDept,
    SysMenu,
    SysRole,
    SysUser,
)

__all__ = [
    "ADMIN_ROLE_KEY",
    "ALL_PERMISSION",
    "Base",
    "BusinessType",
    "DataScopeType",
    "OperStatus",
    "SysDept",
    "SysMenu",
    "SysOperLog",
    "SysRole",
    "SysUser",
]
