"""
Upload Service.

Stores uploaded files below the configured upload directory, sharded by
date, and returns the public URL under the static prefix.
"""

import uuid
from pathlib import Path, PurePosixPath

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from admin_shell.core.config import get_app_config, get_settings, get_upload_dir
from admin_shell.core.exceptions import ValidationError
from admin_shell.core.logging import get_logger
from admin_shell.core.utils import utc_now
from admin_shell.schemas.system import UploadResponse

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def public_url(relative_path: str) -> str:
    """URL for a stored file: <staticPrefix>/<relative path>."""
    prefix = get_settings().static_prefix.rstrip("/")
    return f"{prefix}/{relative_path}"


async def store_upload(file: UploadFile, upload_dir: Path | None = None) -> UploadResponse:
    """
    Save an uploaded file.

    Raises:
        ValidationError: Disallowed extension or file too large
    """
    limits = get_app_config().upload
    original_name = file.filename or "file"
    extension = Path(original_name).suffix.lower()
    if extension not in limits.allowed_extensions:
        raise ValidationError(
            "File type not allowed",
            details={"extension": extension, "allowed": limits.allowed_extensions},
        )

    relative = PurePosixPath(utc_now().strftime("%Y/%m/%d")) / f"{uuid.uuid4().hex}{extension}"
    target = (upload_dir or get_upload_dir()) / relative
    target.parent.mkdir(parents=True, exist_ok=True)

    size = 0
    try:
        with await run_in_threadpool(open, target, "wb") as out:
            while chunk := await file.read(CHUNK_SIZE):
                size += len(chunk)
                if size > limits.max_size_bytes:
                    raise ValidationError(
                        "File too large",
                        details={"max_size_bytes": limits.max_size_bytes},
                    )
                await run_in_threadpool(out.write, chunk)
    except BaseException:
        # Includes cancellation when the client disconnects mid-upload
        target.unlink(missing_ok=True)
        raise

    logger.info("File uploaded", extra={"path": str(relative), "size": size})
    return UploadResponse(
        file_name=str(relative),
        original_name=original_name,
        size=size,
        url=public_url(str(relative)),
    )
