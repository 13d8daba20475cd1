"""
Global guards, in execution order.

    JwtAuthGuard → PreviewGuard → RoleAuthGuard → PermissionAuthGuard
    → RepeatSubmitGuard → ThrottlerGuard
"""

from admin_shell.core.config import get_app_config
from admin_shell.guards.base import Guard
from admin_shell.guards.jwt_auth import JwtAuthGuard
from admin_shell.guards.permission import PermissionAuthGuard
from admin_shell.guards.preview import PreviewGuard
from admin_shell.guards.repeat_submit import RepeatSubmitGuard
from admin_shell.guards.role import RoleAuthGuard
from admin_shell.guards.throttler import ThrottlerGuard


def build_global_guards() -> list[Guard]:
    throttle = get_app_config().security.throttle
    return [
        JwtAuthGuard(),
        PreviewGuard(),
        RoleAuthGuard(),
        PermissionAuthGuard(),
        RepeatSubmitGuard(),
        ThrottlerGuard(ttl=throttle.ttl, limit=throttle.limit),
    ]


__all__ = [
    "Guard",
    "JwtAuthGuard",
    "PermissionAuthGuard",
    "PreviewGuard",
    "RepeatSubmitGuard",
    "RoleAuthGuard",
    "ThrottlerGuard",
    "build_global_guards",
]
