"""
Operation Log API Endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from admin_shell.core.dependencies import DbSession
from admin_shell.models.oper_log import BusinessType
from admin_shell.models.system import ADMIN_ROLE_KEY
from admin_shell.pipeline import operation_log, require_permissions, require_roles
from admin_shell.pipeline.route import PipelineRoute
from admin_shell.schemas.base import Page
from admin_shell.schemas.system import OperLogQuery, OperLogResponse
from admin_shell.services.oper_log import OperationLogService

router = APIRouter(route_class=PipelineRoute)


@router.get("", summary="List operation logs")
@require_permissions("monitor:operlog:list")
async def list_oper_logs(
    db: DbSession,
    query: Annotated[OperLogQuery, Query()],
) -> Page[OperLogResponse]:
    return await OperationLogService(db).list_logs(query)


@router.delete("", summary="Clear all operation logs")
@require_roles(ADMIN_ROLE_KEY)
@operation_log("Operation log", BusinessType.CLEAN)
async def clean_oper_logs(db: DbSession) -> dict[str, int]:
    deleted = await OperationLogService(db).clean()
    return {"deleted": deleted}
