"""
User Service.

Listing users within the caller's data scope and creating users.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from admin_shell.core.exceptions import ConflictError, ValidationError
from admin_shell.core.security import hash_password
from admin_shell.models.system import SysUser
from admin_shell.repositories.user import RoleRepository, UserRepository
from admin_shell.schemas.auth import LoginUser
from admin_shell.schemas.base import Page
from admin_shell.schemas.system import UserCreate, UserQuery, UserResponse
from admin_shell.services.base import BaseService
from admin_shell.services.data_scope import DataScope


class UserService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)

    async def list_users(self, query: UserQuery, scope: DataScope) -> Page[UserResponse]:
        users, total = await self.user_repo.list_page(
            scope.to_filter(SysUser.dept_id, SysUser.user_id),
            limit=query.page_size,
            offset=query.offset,
            user_name=query.user_name,
            status=query.status,
            dept_id=query.dept_id,
        )
        return Page(rows=[UserResponse.model_validate(u) for u in users], total=total)

    async def create_user(self, data: UserCreate, operator: LoginUser) -> UserResponse:
        """
        Create a user with the given roles.

        Raises:
            ConflictError: If the user name is taken
            ValidationError: If a role id does not exist
        """
        if await self.user_repo.exists_by_user_name(data.user_name):
            raise ConflictError(f"User name '{data.user_name}' already exists")

        roles = await self.role_repo.get_by_ids(data.role_ids)
        missing = set(data.role_ids) - {role.role_id for role in roles}
        if missing:
            raise ValidationError("Unknown roles", details={"role_ids": sorted(missing)})

        user = SysUser(
            user_name=data.user_name,
            nick_name=data.nick_name or data.user_name,
            email=data.email,
            password=hash_password(data.password),
            dept_id=data.dept_id,
            create_by=operator.user_name,
            update_by=operator.user_name,
        )
        user.roles = roles
        self.session.add(user)
        await self._execute_db_operation("create user", self.session.flush())

        self._log_operation("User created", user_id=user.user_id, operator=operator.user_name)
        return UserResponse.model_validate(user)
