"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    SecuritySchema     → security.yaml
    UploadSchema       → upload.yaml
"""

from pydantic import BaseModel, ConfigDict, IPvAnyNetwork


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema


# =============================================================================
# database.yaml
# =============================================================================


class RedisSchema(_StrictBase):
    host: str
    port: int
    db: int


class QueueRedisSchema(_StrictBase):
    host: str
    port: int
    db: int
    queue_name: str
    result_expiry_seconds: int


class DatabaseSchema(_StrictBase):
    type: str
    synchronize: bool
    logging: bool
    pool_size: int
    max_overflow: int
    pool_timeout: int
    pool_recycle: int
    redis: RedisSchema
    queue_redis: QueueRedisSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# security.yaml
# =============================================================================


class JwtSchema(_StrictBase):
    algorithm: str
    expire_minutes: int


class ThrottleSchema(_StrictBase):
    ttl: int
    limit: int


class RepeatSubmitSchema(_StrictBase):
    interval_ms: int
    key_prefix: str


class SecuritySchema(_StrictBase):
    jwt: JwtSchema
    login_token_prefix: str
    throttle: ThrottleSchema
    repeat_submit: RepeatSubmitSchema
    demo_allowed_paths: list[str]
    trusted_proxies: list[IPvAnyNetwork] = []


# =============================================================================
# upload.yaml
# =============================================================================


class UploadSchema(_StrictBase):
    max_size_bytes: int
    allowed_extensions: list[str]
