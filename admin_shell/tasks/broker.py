"""
Taskiq Broker Configuration.

Background jobs run on the job-queue Redis (the queue_redis descriptor in
database.yaml, password from BULL_REDIS_PASSWORD).

Usage:
    taskiq worker admin_shell.tasks.broker:broker
"""

from typing import TYPE_CHECKING

from admin_shell.core.config import get_app_config, get_queue_redis_url
from admin_shell.core.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from taskiq_redis import ListQueueBroker


def create_broker() -> "ListQueueBroker":
    """Create the Taskiq broker with a Redis result backend."""
    from taskiq_redis import ListQueueBroker, RedisAsyncResultBackend

    queue = get_app_config().database.queue_redis
    redis_url = get_queue_redis_url()

    result_backend = RedisAsyncResultBackend(
        redis_url=redis_url,
        result_ex_time=queue.result_expiry_seconds,
    )
    broker = ListQueueBroker(
        url=redis_url,
        queue_name=queue.queue_name,
    ).with_result_backend(result_backend)

    logger.debug(
        "Taskiq broker configured",
        extra={"queue_name": queue.queue_name, "result_expiry": queue.result_expiry_seconds},
    )
    return broker


_broker: "ListQueueBroker | None" = None


def get_broker() -> "ListQueueBroker":
    """Get the broker instance, creating it if necessary."""
    global _broker
    if _broker is None:
        _broker = create_broker()

        @_broker.on_event("startup")
        async def on_startup() -> None:
            logger.info("Taskiq worker starting up")

        @_broker.on_event("shutdown")
        async def on_shutdown() -> None:
            logger.info("Taskiq worker shutting down")

    return _broker


async def shutdown_broker() -> None:
    """Close the client-side broker if it was started."""
    global _broker
    if _broker is not None:
        await _broker.shutdown()
    _broker = None


def __getattr__(name: str):
    """Lazy attribute access for `taskiq worker admin_shell.tasks.broker:broker`."""
    if name == "broker":
        return get_broker()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
