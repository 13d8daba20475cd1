"""
Upload API Endpoints.

Files land in the upload directory and are served under the static prefix.
"""

from fastapi import APIRouter, File, UploadFile

from admin_shell.models.oper_log import BusinessType
from admin_shell.pipeline import operation_log
from admin_shell.pipeline.route import PipelineRoute
from admin_shell.schemas.system import UploadResponse
from admin_shell.services.upload import store_upload

router = APIRouter(route_class=PipelineRoute)


@router.post("/upload", summary="Upload a file")
@operation_log("Upload", BusinessType.IMPORT)
async def upload_file(file: UploadFile = File(...)) -> UploadResponse:
    return await store_upload(file)
