"""
Operation Log Service.

Querying and cleaning the audit trail. record_operation_log() is the
writer used by the operation log interceptor.
"""

from datetime import timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from admin_shell.core.database import get_session_factory
from admin_shell.core.utils import utc_now
from admin_shell.models.oper_log import SysOperLog
from admin_shell.repositories.oper_log import OperLogRepository
from admin_shell.schemas.base import Page
from admin_shell.schemas.system import OperLogQuery, OperLogResponse
from admin_shell.services.base import BaseService


class OperationLogService(BaseService):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = OperLogRepository(session)

    async def list_logs(self, query: OperLogQuery) -> Page[OperLogResponse]:
        rows, total = await self.repo.list_page(
            limit=query.page_size,
            offset=query.offset,
            title=query.title,
            oper_name=query.oper_name,
            business_type=query.business_type,
            status=query.status,
        )
        return Page(rows=[OperLogResponse.model_validate(r) for r in rows], total=total)

    async def clean(self) -> int:
        deleted = await self.repo.delete_all()
        self._log_operation("Operation log cleaned", deleted=deleted)
        return deleted

    async def purge_older_than(self, days: int) -> int:
        deleted = await self.repo.delete_before(utc_now() - timedelta(days=days))
        self._log_operation("Operation log purged", days=days, deleted=deleted)
        return deleted


async def record_operation_log(entry: dict[str, Any]) -> None:
    """Persist one operation log row in a dedicated, committed session."""
    async with get_session_factory()() as session:
        session.add(SysOperLog(**entry))
        await session.commit()
