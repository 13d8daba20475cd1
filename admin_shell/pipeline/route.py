"""
Guarded Route Pipeline.

enforce_guards is installed as an application-wide dependency, so every
route runs the global guards (in registration order) before parameters
are validated. PipelineRoute wraps each endpoint so the global
interceptors surround the handler call:

    guards → interceptors → handler → interceptors → response

Guards and interceptors are read from app.state.guards and
app.state.interceptors, populated by create_app().
"""

import functools
import inspect
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.requests import Request as StarletteRequest
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from admin_shell.interceptors.base import run_interceptors
from admin_shell.pipeline.context import get_execution_context

PIPELINE_REQUEST_PARAM = "pipeline_request__"


async def enforce_guards(request: Request) -> None:
    """Run every global guard; the first rejection aborts the request."""
    context = get_execution_context(request)
    for guard in getattr(request.app.state, "guards", ()):
        await guard.can_activate(context)


def _find_request_param(parameters: list[inspect.Parameter]) -> str | None:
    for param in parameters:
        annotation = param.annotation
        if isinstance(annotation, type) and issubclass(annotation, StarletteRequest):
            return param.name
    return None


def wrap_endpoint(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """
    Return an async endpoint that runs the interceptor chain around the original.

    FastAPI injects a single Request per endpoint. When the original already
    declares one, the wrapper reads it from there and passes it on;
    otherwise a keyword-only Request parameter is added and stripped before
    the call. The return annotation is dropped so the enveloped result is
    not validated against it.
    """
    signature = inspect.signature(endpoint)
    parameters = list(signature.parameters.values())
    existing = _find_request_param(parameters)
    request_name = existing or PIPELINE_REQUEST_PARAM

    if existing is None:
        var_keyword = [p for p in parameters if p.kind is inspect.Parameter.VAR_KEYWORD]
        positional = [p for p in parameters if p.kind is not inspect.Parameter.VAR_KEYWORD]
        request_param = inspect.Parameter(
            PIPELINE_REQUEST_PARAM,
            inspect.Parameter.KEYWORD_ONLY,
            annotation=Request,
        )
        parameters = positional + [request_param] + var_keyword

    is_async = inspect.iscoroutinefunction(endpoint)

    @functools.wraps(endpoint)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        if existing is None:
            request: Request = kwargs.pop(PIPELINE_REQUEST_PARAM)
        else:
            request = kwargs[request_name]
        context = get_execution_context(request)

        async def handler() -> Any:
            if is_async:
                return await endpoint(*args, **kwargs)
            return await run_in_threadpool(endpoint, *args, **kwargs)

        interceptors = getattr(request.app.state, "interceptors", [])
        return await run_interceptors(interceptors, context, handler)

    wrapper.__signature__ = signature.replace(
        parameters=parameters,
        return_annotation=inspect.Signature.empty,
    )
    wrapper.__pipeline_original__ = endpoint
    return wrapper


class PipelineRoute(APIRoute):
    """APIRoute whose endpoint runs inside the global interceptor chain."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        # include_router re-creates routes from the already wrapped endpoint
        endpoint = getattr(endpoint, "__pipeline_original__", endpoint)
        self.original_endpoint = endpoint
        super().__init__(path, wrap_endpoint(endpoint), **kwargs)
