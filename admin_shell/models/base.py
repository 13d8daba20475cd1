"""
SQLAlchemy Base Model.

Base class for all database models with common fields.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from admin_shell.core.utils import utc_now


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )


class AuditMixin(TimestampMixin):
    """Timestamps plus the operator names that touched the row."""

    create_by: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    update_by: Mapped[str] = mapped_column(String(64), default="", nullable=False)
