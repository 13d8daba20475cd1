"""
Operation Log Model.

One row per audited request, written by the operation log interceptor.
"""

from datetime import datetime
from enum import IntEnum

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from admin_shell.core.utils import utc_now
from admin_shell.models.base import Base


class BusinessType(IntEnum):
    OTHER = 0
    INSERT = 1
    UPDATE = 2
    DELETE = 3
    GRANT = 4
    EXPORT = 5
    IMPORT = 6
    FORCE = 7
    CLEAN = 9


class OperStatus(IntEnum):
    SUCCESS = 0
    FAIL = 1


class SysOperLog(Base):
    """Audited operation."""

    __tablename__ = "sys_oper_log"

    oper_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    business_type: Mapped[int] = mapped_column(Integer, default=BusinessType.OTHER, nullable=False)
    method: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    request_method: Mapped[str] = mapped_column(String(10), default="", nullable=False)
    oper_name: Mapped[str] = mapped_column(String(64), default="", nullable=False, index=True)
    oper_url: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    oper_ip: Mapped[str] = mapped_column(String(128), default="", nullable=False)
    oper_param: Mapped[str] = mapped_column(Text, default="", nullable=False)
    json_result: Mapped[str] = mapped_column(Text, default="", nullable=False)
    status: Mapped[int] = mapped_column(Integer, default=OperStatus.SUCCESS, nullable=False)
    error_msg: Mapped[str] = mapped_column(Text, default="", nullable=False)
    oper_time: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False, index=True)
    cost_time: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<SysOperLog(oper_id={self.oper_id}, title={self.title!r})>"
