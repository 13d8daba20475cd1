"""
System Schemas.

Request and response models for users and operation logs.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from admin_shell.schemas.base import PageQuery, RequestSchema


class UserCreate(RequestSchema):
    """Schema for creating a back-office user."""

    user_name: str = Field(..., min_length=2, max_length=64)
    nick_name: str = Field(default="", max_length=64)
    email: str = Field(default="", max_length=128)
    password: str = Field(..., min_length=6, max_length=64)
    dept_id: int | None = None
    role_ids: list[int] = Field(default_factory=list)


class UserQuery(PageQuery):
    user_name: str | None = None
    status: str | None = None
    dept_id: int | None = None


class UserResponse(BaseModel):
    user_id: int
    user_name: str
    nick_name: str
    email: str
    dept_id: int | None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OperLogQuery(PageQuery):
    title: str | None = None
    oper_name: str | None = None
    business_type: int | None = None
    status: int | None = None


class OperLogResponse(BaseModel):
    oper_id: int
    title: str
    business_type: int
    method: str
    request_method: str
    oper_name: str
    oper_url: str
    oper_ip: str
    oper_param: str
    json_result: str
    status: int
    error_msg: str
    oper_time: datetime
    cost_time: int

    model_config = ConfigDict(from_attributes=True)


class UploadResponse(BaseModel):
    file_name: str
    original_name: str
    size: int
    url: str
