"""
Auth Service.

Password login and login-user snapshots.
"""

import uuid

import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncSession

from admin_shell.core.exceptions import AuthenticationError
from admin_shell.core.security import create_access_token, token_ttl_seconds, verify_password
from admin_shell.models.system import STATUS_NORMAL, SysUser
from admin_shell.repositories.user import UserRepository
from admin_shell.schemas.auth import LoginRole, LoginUser, TokenResponse
from admin_shell.services.base import BaseService
from admin_shell.services.token import LoginSessionStore


def build_login_user(user: SysUser) -> LoginUser:
    """Snapshot of the user's active roles, their departments and permissions."""
    roles = [role for role in user.roles if role.status == STATUS_NORMAL]
    permissions = sorted({
        menu.perms
        for role in roles
        for menu in role.menus
        if menu.perms and menu.status == STATUS_NORMAL
    })
    return LoginUser(
        user_id=user.user_id,
        user_name=user.user_name,
        nick_name=user.nick_name,
        dept_id=user.dept_id,
        roles=[
            LoginRole(
                role_id=role.role_id,
                role_key=role.role_key,
                data_scope=role.data_scope,
                dept_ids=[dept.dept_id for dept in role.depts],
            )
            for role in roles
        ],
        permissions=permissions,
    )


class AuthService(BaseService):
    def __init__(self, session: AsyncSession, cache: redis.Redis) -> None:
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.sessions = LoginSessionStore(cache)

    async def login(self, user_name: str, password: str) -> TokenResponse:
        """
        Verify credentials and open a login session.

        Raises:
            AuthenticationError: Unknown user, wrong password or disabled account
        """
        user = await self.user_repo.get_by_user_name(user_name)
        if user is None or not verify_password(password, user.password):
            self._log_operation("Login rejected", user_name=user_name)
            raise AuthenticationError("Invalid user name or password")
        if user.status != STATUS_NORMAL:
            raise AuthenticationError("Account is disabled")

        session_id = uuid.uuid4().hex
        ttl = token_ttl_seconds()
        await self.sessions.save(session_id, build_login_user(user), ttl)

        token = create_access_token({"sub": str(user.user_id), "uuid": session_id})
        self._log_operation("Login succeeded", user_id=user.user_id)
        return TokenResponse(access_token=token, expires_in=ttl)

