"""
Maintenance Tasks.

Task functions can be called directly without Redis; register_tasks()
wraps them for the broker.

    tasks = register_tasks()
    await tasks["clean_operation_logs"].kiq(days=90)
"""

from typing import Any

from admin_shell.core.database import get_session_factory
from admin_shell.core.logging import get_logger
from admin_shell.core.utils import utc_now
from admin_shell.services.oper_log import OperationLogService

logger = get_logger(__name__)

DEFAULT_RETENTION_DAYS = 90


async def clean_operation_logs(days: int = DEFAULT_RETENTION_DAYS) -> dict[str, Any]:
    """Delete operation log rows older than `days`."""
    if days < 1:
        raise ValueError("days must be at least 1")

    async with get_session_factory()() as session:
        deleted = await OperationLogService(session).purge_older_than(days)
        await session.commit()

    logger.info("Operation logs purged", extra={"days": days, "deleted": deleted})
    return {"deleted": deleted, "days": days, "completed_at": utc_now().isoformat()}


def register_tasks() -> dict[str, Any]:
    """Register task functions with the Taskiq broker."""
    from admin_shell.tasks.broker import get_broker

    broker = get_broker()
    registered = {
        "clean_operation_logs": broker.task(
            task_name="clean_operation_logs",
            retry_on_error=False,
        )(clean_operation_logs),
    }

    logger.info(
        "Tasks registered with broker",
        extra={"task_count": len(registered), "tasks": list(registered)},
    )
    return registered
