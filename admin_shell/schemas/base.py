"""
Base Schemas.

Standard API response envelopes and the request schema base that acts as
the global validation pipe.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from admin_shell.core.utils import utc_now

DataT = TypeVar("DataT")


class RequestSchema(BaseModel):
    """
    Base for every request body and query model.

    Unknown properties are dropped rather than rejected, surrounding
    whitespace is stripped, and pydantic's lax mode converts strings such
    as "123" or "true" into the declared types.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
    )


class ResponseMetadata(BaseModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    The response transform interceptor wraps every handler result in this
    structure.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class PageQuery(RequestSchema):
    """Offset pagination parameters."""

    page_num: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page_num - 1) * self.page_size


class Page(BaseModel, Generic[DataT]):
    """A page of rows with the total match count."""

    rows: list[DataT]
    total: int
