"""
Database Configuration.

SQLAlchemy async engine and session management.
Uses lazy initialization to prevent import-time failures when the
environment is not configured.
"""

from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from admin_shell.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _create_engine() -> AsyncEngine:
    """Create async SQLAlchemy engine from the database config."""
    from admin_shell.core.config import get_app_config, get_database_url

    db_config = get_app_config().database
    url = get_database_url()

    options: dict[str, Any] = {"echo": db_config.logging}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
        )

    engine = create_async_engine(url, **options)
    logger.debug("Database engine created", extra={"dialect": engine.dialect.name})
    return engine


def get_engine() -> AsyncEngine:
    """Get the database engine, creating it on first use."""
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating it on first use."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


def set_session_factory(factory: async_sessionmaker[AsyncSession] | None) -> None:
    """Replace the session factory (tests bind it to their own engine)."""
    global _async_session_factory
    _async_session_factory = factory


async def synchronize_schema() -> None:
    """
    Create missing tables for every registered model.

    Runs at startup when database.yaml sets synchronize: true.
    """
    import admin_shell.models  # noqa: F401  registers all tables on Base.metadata
    from admin_shell.models.base import Base

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronized", extra={"tables": len(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Close pooled connections at shutdown."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    The session is also kept on request.state so the operation log
    interceptor can settle it before writing its own row.

    Usage in endpoints:
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = get_session_factory()
    async with session_factory() as session:
        request.state.db_session = session
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def settle_request_session(request: Request, success: bool) -> None:
    """
    Commit or roll back the request's session ahead of dependency teardown.

    Locks held by its open transaction are released, so a second session can
    write without waiting on them.
    """
    session: AsyncSession | None = getattr(request.state, "db_session", None)
    if session is None:
        return
    if success:
        await session.commit()
    else:
        await session.rollback()
