"""
Operation Log Repository.

Data access for audited operations.
"""

from datetime import datetime

from sqlalchemy import delete

from admin_shell.models.oper_log import SysOperLog
from admin_shell.repositories.base import BaseRepository


class OperLogRepository(BaseRepository[SysOperLog]):
    model = SysOperLog

    async def list_page(
        self,
        limit: int,
        offset: int,
        title: str | None = None,
        oper_name: str | None = None,
        business_type: int | None = None,
        status: int | None = None,
    ) -> tuple[list[SysOperLog], int]:
        criteria = []
        if title:
            criteria.append(SysOperLog.title.contains(title))
        if oper_name:
            criteria.append(SysOperLog.oper_name.contains(oper_name))
        if business_type is not None:
            criteria.append(SysOperLog.business_type == business_type)
        if status is not None:
            criteria.append(SysOperLog.status == status)
        return await self.page(
            *criteria, limit=limit, offset=offset, order_by=SysOperLog.oper_id.desc(),
        )

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(SysOperLog))
        return result.rowcount or 0

    async def delete_before(self, cutoff: datetime) -> int:
        result = await self.session.execute(
            delete(SysOperLog).where(SysOperLog.oper_time < cutoff)
        )
        return result.rowcount or 0
