"""
FastAPI Application Entry Point.

The composition root: configuration, logging, ORM and cache wiring, and
the global request pipeline.

    RequestContextMiddleware
      → guards (JWT, demo, role, permission, repeat submit, throttle)
      → validation
      → interceptors (operation log, request log, response transform, data scope)
      → handler
"""

from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from admin_shell.api import health
from admin_shell.api.v1 import router as api_v1_router
from admin_shell.core.cache import close_redis
from admin_shell.core.config import get_app_config, get_settings, get_upload_dir
from admin_shell.core.database import dispose_engine, synchronize_schema
from admin_shell.core.exception_handlers import register_exception_handlers
from admin_shell.core.logging import get_logger, setup_logging
from admin_shell.core.middleware import RequestContextMiddleware
from admin_shell.guards import Guard, build_global_guards
from admin_shell.interceptors import Interceptor, build_global_interceptors
from admin_shell.pipeline.route import enforce_guards
from admin_shell.tasks.broker import shutdown_broker

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    app_config = get_app_config()
    setup_logging()

    if app_config.database.synchronize:
        await synchronize_schema()

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
            "demo": get_settings().is_demo_environment,
        },
    )
    yield
    logger.info("Application shutting down")
    await shutdown_broker()
    await close_redis()
    await dispose_engine()


def create_app(
    guards: Sequence[Guard] | None = None,
    interceptors: Sequence[Interceptor] | None = None,
    use_lifespan: bool = True,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        guards: Global guards in execution order (defaults to build_global_guards())
        interceptors: Global interceptors, outermost first
            (defaults to build_global_interceptors())
        use_lifespan: Disable to skip logging setup and schema sync (tests)
    """
    app_config = get_app_config()
    app_settings = app_config.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan if use_lifespan else None,
        dependencies=[Depends(enforce_guards)],
    )

    app.state.guards = list(guards) if guards is not None else build_global_guards()
    app.state.interceptors = (
        list(interceptors) if interceptors is not None else build_global_interceptors()
    )

    app.add_middleware(RequestContextMiddleware)

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)

    _mount_static(app)

    return app


def _mount_static(app: FastAPI) -> None:
    """Serve uploaded files under the configured static prefix."""
    upload_dir = get_upload_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    prefix = "/" + get_settings().static_prefix.strip("/")
    app.mount(prefix, StaticFiles(directory=upload_dir), name="static")
    logger.debug("Static files mounted", extra={"prefix": prefix, "directory": str(upload_dir)})


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn admin_shell.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
