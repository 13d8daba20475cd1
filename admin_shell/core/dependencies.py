"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from admin_shell.core.cache import get_redis
from admin_shell.core.database import get_db_session
from admin_shell.core.exceptions import AuthenticationError
from admin_shell.schemas.auth import LoginUser
from admin_shell.services.data_scope import DataScope

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_cache() -> redis.Redis:
    return get_redis()


Cache = Annotated[redis.Redis, Depends(get_cache)]


def get_current_user(request: Request) -> LoginUser:
    """The LoginUser placed on the request by the JWT guard."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise AuthenticationError("Authentication required")
    return user


CurrentUser = Annotated[LoginUser, Depends(get_current_user)]


def current_data_scope(request: Request) -> DataScope:
    """
    Data scope stored by the data scope interceptor.

    Call inside the handler body: dependencies resolve before the
    interceptor chain runs.
    """
    scope = getattr(request.state, "data_scope", None)
    if scope is None:
        raise RuntimeError("Route is not marked with @data_scope")
    return scope
