"""
User API Endpoints.

Listing is restricted by the caller's data scope; creation is audited and
protected against double submission.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from admin_shell.core.dependencies import CurrentUser, DbSession, current_data_scope
from admin_shell.models.oper_log import BusinessType
from admin_shell.pipeline import (
    data_scope,
    operation_log,
    prevent_repeat_submit,
    require_permissions,
)
from admin_shell.pipeline.route import PipelineRoute
from admin_shell.schemas.base import Page
from admin_shell.schemas.system import UserCreate, UserQuery, UserResponse
from admin_shell.services.user import UserService

router = APIRouter(route_class=PipelineRoute)


@router.get("", summary="List users visible to the caller")
@require_permissions("system:user:list")
@data_scope
async def list_users(
    request: Request,
    db: DbSession,
    query: Annotated[UserQuery, Query()],
) -> Page[UserResponse]:
    return await UserService(db).list_users(query, current_data_scope(request))


@router.post("", status_code=201, summary="Create a user")
@require_permissions("system:user:add")
@prevent_repeat_submit()
@operation_log("User", BusinessType.INSERT)
async def create_user(data: UserCreate, db: DbSession, user: CurrentUser) -> UserResponse:
    return await UserService(db).create_user(data, operator=user)
