"""
Auth API Endpoints.

Login, logout and the current user's profile.
"""

from fastapi import APIRouter, Request

from admin_shell.core.dependencies import Cache, CurrentUser, DbSession
from admin_shell.pipeline import public
from admin_shell.pipeline.route import PipelineRoute
from admin_shell.schemas.auth import LoginRequest, LoginUser, TokenResponse
from admin_shell.services.auth import AuthService
from admin_shell.services.token import LoginSessionStore

router = APIRouter(route_class=PipelineRoute)


@router.post("/login", summary="Log in with user name and password")
@public
async def login(data: LoginRequest, db: DbSession, cache: Cache) -> TokenResponse:
    """Exchange credentials for a bearer token."""
    return await AuthService(db, cache).login(data.user_name, data.password)


@router.post("/logout", summary="End the current login session")
async def logout(request: Request, cache: Cache) -> dict[str, bool]:
    await LoginSessionStore(cache).delete(request.state.session_id)
    return {"logged_out": True}


@router.get("/profile", summary="Current login user")
async def profile(user: CurrentUser) -> LoginUser:
    return user
