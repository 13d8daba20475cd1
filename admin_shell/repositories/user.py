"""
User Repository.

Data access for back-office users and their roles.
"""

from sqlalchemy import ColumnElement, select

from admin_shell.models.system import SysRole, SysUser
from admin_shell.repositories.base import BaseRepository


class UserRepository(BaseRepository[SysUser]):
    model = SysUser

    async def get_by_user_name(self, user_name: str) -> SysUser | None:
        result = await self.session.execute(
            select(SysUser).where(SysUser.user_name == user_name)
        )
        return result.scalar_one_or_none()

    async def exists_by_user_name(self, user_name: str) -> bool:
        result = await self.session.execute(
            select(SysUser.user_id).where(SysUser.user_name == user_name)
        )
        return result.scalar_one_or_none() is not None

    async def list_page(
        self,
        scope_filter: ColumnElement[bool],
        limit: int,
        offset: int,
        user_name: str | None = None,
        status: str | None = None,
        dept_id: int | None = None,
    ) -> tuple[list[SysUser], int]:
        criteria = [scope_filter]
        if user_name:
            criteria.append(SysUser.user_name.contains(user_name))
        if status:
            criteria.append(SysUser.status == status)
        if dept_id is not None:
            criteria.append(SysUser.dept_id == dept_id)
        return await self.page(*criteria, limit=limit, offset=offset)


class RoleRepository(BaseRepository[SysRole]):
    model = SysRole
