# Pydantic schemas package
from admin_shell.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    Page,
    PageQuery,
    RequestSchema,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "Page",
    "PageQuery",
    "RequestSchema",
    "ResponseMetadata",
]
