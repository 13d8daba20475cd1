"""
Auth Schemas.

The login request and the cached LoginUser that guards authorize against.
"""

from pydantic import BaseModel, Field

from admin_shell.models.system import ADMIN_ROLE_KEY, ALL_PERMISSION
from admin_shell.schemas.base import RequestSchema


class LoginRequest(RequestSchema):
    """Credentials posted to /auth/login."""

    user_name: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class LoginRole(BaseModel):
    """Role snapshot taken at login."""

    role_id: int
    role_key: str
    data_scope: str
    dept_ids: list[int] = Field(default_factory=list)


class LoginUser(BaseModel):
    """
    Authenticated principal cached in Redis for the token lifetime.

    Guards and the data scope interceptor read this instead of hitting the
    database on every request.
    """

    user_id: int
    user_name: str
    nick_name: str = ""
    dept_id: int | None = None
    roles: list[LoginRole] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)

    @property
    def role_keys(self) -> set[str]:
        return {role.role_key for role in self.roles}

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE_KEY in self.role_keys

    def has_any_role(self, *role_keys: str) -> bool:
        if self.is_admin:
            return True
        return bool(self.role_keys.intersection(role_keys))

    def has_permissions(self, *permissions: str) -> bool:
        granted = set(self.permissions)
        if self.is_admin or ALL_PERMISSION in granted:
            return True
        return all(permission in granted for permission in permissions)
