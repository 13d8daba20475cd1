"""
Configuration Management.

Loads environment values from config/.env (or config/.env.development when
NODE_ENV=development) and settings from config/settings/*.yaml.

Environment (.env or process environment):
    JWT_SECRET, MYSQL_HOST, MYSQL_PORT, MYSQL_USERNAME, MYSQL_PASSWORD,
    MYSQL_DATABASE, REDIS_PASSWORD, BULL_REDIS_PASSWORD, UPLOAD_PATH,
    staticPrefix, isDemoEnvironment, DATABASE_URL (optional override)

Settings (YAML):
    application.yaml - App identity, server, cors
    database.yaml    - ORM options, Redis and queue Redis descriptors
    logging.yaml     - Logging configuration
    security.yaml    - JWT, throttling, repeat-submit, demo whitelist
    upload.yaml      - Upload size and extension limits

The merged view exposed by get_config_value() mirrors the dotted keys the
providers read: "jwt.secret", "database.host", "redis.port",
"bull_redis.host", "upload_path", "static_prefix", "is_demo_environment".
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any
from urllib.parse import quote

import yaml
from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from admin_shell.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
    SecuritySchema,
    UploadSchema,
)

DEMO_ENVIRONMENT_MARKER = "DemoEnvironment"

_MISSING = object()


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def validate_project_root() -> Path:
    """
    Validate that the project root can be found.

    Raises SystemExit with a clear message if .project_root is not found.
    Use this in entry scripts before any configuration loading.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def resolve_env_file(node_env: str | None = None) -> Path:
    """
    Pick the env file for the current NODE_ENV.

    development reads config/.env.development, anything else config/.env.
    """
    if node_env is None:
        node_env = os.environ.get("NODE_ENV")
    filename = ".env.development" if node_env == "development" else ".env"
    return find_project_root() / "config" / filename


class Settings(BaseSettings):
    """Environment-driven values: connection parameters, secrets and flags."""

    jwt_secret: str = "123456"

    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_username: str = ""
    mysql_password: str = ""
    mysql_database: str = ""

    redis_password: str = "123456"
    bull_redis_password: str = "123456"

    upload_path: str = ""
    static_prefix: str = Field(
        default="/static",
        validation_alias=AliasChoices("staticPrefix", "static_prefix"),
    )
    demo_environment: str = Field(
        default="",
        validation_alias=AliasChoices("isDemoEnvironment", "demo_environment"),
    )

    database_url: str | None = None

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_demo_environment(self) -> bool:
        """True only when isDemoEnvironment is exactly 'DemoEnvironment'."""
        return self.demo_environment == DEMO_ENVIRONMENT_MARKER


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of causing cryptic KeyErrors later.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._database = _load_validated(DatabaseSchema, "database.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")
        self._security = _load_validated(SecuritySchema, "security.yaml")
        self._upload = _load_validated(UploadSchema, "upload.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def database(self) -> DatabaseSchema:
        """Database, cache and queue settings."""
        return self._database

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging

    @property
    def security(self) -> SecuritySchema:
        """JWT, throttling and guard settings."""
        return self._security

    @property
    def upload(self) -> UploadSchema:
        """Upload limits."""
        return self._upload


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance. Resolves the env file from NODE_ENV."""
    return Settings(_env_file=str(resolve_env_file()))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def compose_config(settings: Settings, app_config: AppConfig) -> dict[str, Any]:
    """
    Merge environment values over the YAML settings.

    Returns the nested dictionary that get_config_value() walks.
    """
    database = app_config.database
    security = app_config.security
    return {
        "application": app_config.application.model_dump(),
        "jwt": {
            "secret": settings.jwt_secret,
            **security.jwt.model_dump(),
        },
        "database": {
            **database.model_dump(exclude={"redis", "queue_redis"}),
            "host": settings.mysql_host,
            "port": settings.mysql_port,
            "username": settings.mysql_username,
            "password": settings.mysql_password,
            "database": settings.mysql_database,
        },
        "redis": {
            **database.redis.model_dump(),
            "password": settings.redis_password,
        },
        "bull_redis": {
            **database.queue_redis.model_dump(),
            "password": settings.bull_redis_password,
        },
        "throttle": security.throttle.model_dump(),
        "repeat_submit": security.repeat_submit.model_dump(),
        "upload": app_config.upload.model_dump(),
        "upload_path": str(get_upload_dir(settings)),
        "static_prefix": settings.static_prefix,
        "is_demo_environment": settings.is_demo_environment,
    }


def get_config_value(path: str, default: Any = _MISSING) -> Any:
    """
    Look up a dotted configuration key, e.g. "database.host".

    Raises:
        KeyError: If the path does not exist and no default was given
    """
    node: Any = compose_config(get_settings(), get_app_config())
    for part in path.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        elif default is not _MISSING:
            return default
        else:
            raise KeyError(f"Unknown configuration key: {path}")
    return node


def get_upload_dir(settings: Settings | None = None) -> Path:
    """Absolute upload directory; defaults to <project root>/upload."""
    settings = settings or get_settings()
    if settings.upload_path:
        return Path(settings.upload_path)
    return find_project_root() / "upload"


def get_database_url(async_driver: bool = True) -> str:
    """
    Construct database URL from YAML config and environment.

    DATABASE_URL, when set, wins over the MySQL parameters.

    Args:
        async_driver: Use aiomysql driver if True, pymysql if False.

    Returns:
        Database connection URL string.
    """
    settings = get_settings()
    if settings.database_url:
        return settings.database_url

    db_type = get_app_config().database.type
    if db_type != "mysql":
        raise ValueError(f"Unsupported database type: {db_type}")

    driver = "mysql+aiomysql" if async_driver else "mysql+pymysql"
    url = URL.create(
        drivername=driver,
        username=settings.mysql_username or None,
        password=settings.mysql_password or None,
        host=settings.mysql_host,
        port=settings.mysql_port,
        database=settings.mysql_database or None,
    )
    return url.render_as_string(hide_password=False)


def get_redis_url() -> str:
    """Construct the cache Redis URL from YAML config and environment."""
    redis = get_app_config().database.redis
    password = get_settings().redis_password
    return f"redis://:{quote(password, safe='')}@{redis.host}:{redis.port}/{redis.db}"


def get_queue_redis_url() -> str:
    """Construct the job-queue Redis URL from YAML config and environment."""
    queue = get_app_config().database.queue_redis
    password = get_settings().bull_redis_password
    return f"redis://:{quote(password, safe='')}@{queue.host}:{queue.port}/{queue.db}"


def get_server_base_url() -> str:
    """Get the backend server base URL from application.yaml."""
    server = get_app_config().application.server
    return f"http://{server.host}:{server.port}"
