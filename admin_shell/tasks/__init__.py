"""
Background Tasks Package.

Taskiq broker on the job-queue Redis plus maintenance tasks.

    taskiq worker admin_shell.tasks.broker:broker
"""

from admin_shell.tasks.broker import get_broker, shutdown_broker
from admin_shell.tasks.maintenance import clean_operation_logs, register_tasks

__all__ = [
    "clean_operation_logs",
    "get_broker",
    "register_tasks",
    "shutdown_broker",
]
