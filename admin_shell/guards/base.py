"""
Guard Base.

A guard inspects the execution context before the handler runs and raises
an ApplicationError to reject the request. Returning normally lets the
next guard run.
"""

from abc import ABC, abstractmethod

from admin_shell.pipeline.context import ExecutionContext


class Guard(ABC):
    @abstractmethod
    async def can_activate(self, context: ExecutionContext) -> None:
        """Raise to deny the request."""
