"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from admin_shell.api.v1.endpoints import auth, oper_logs, upload, users

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/system/users", tags=["system"])
router.include_router(oper_logs.router, prefix="/monitor/operlog", tags=["monitor"])
router.include_router(upload.router, prefix="/common", tags=["common"])
