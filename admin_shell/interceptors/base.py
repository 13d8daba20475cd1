"""
Interceptor Base.

An interceptor wraps the handler: it may act before calling call_next(),
transform the value it returns, or observe the exception it raises.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from admin_shell.pipeline.context import ExecutionContext

CallNext = Callable[[], Awaitable[Any]]


class Interceptor(ABC):
    @abstractmethod
    async def intercept(self, context: ExecutionContext, call_next: CallNext) -> Any:
        """Return the (possibly transformed) result of call_next()."""


async def run_interceptors(
    interceptors: list[Interceptor],
    context: ExecutionContext,
    handler: CallNext,
) -> Any:
    """Run the chain outermost-first; the last link calls the handler."""

    async def dispatch(index: int) -> Any:
        if index == len(interceptors):
            return await handler()
        return await interceptors[index].intercept(context, lambda: dispatch(index + 1))

    return await dispatch(0)
