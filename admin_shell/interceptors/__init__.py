"""
Global interceptors, outermost first.

    OperationLogInterceptor → RequestLogInterceptor
    → ResponseTransformInterceptor → DataScopeInterceptor → handler

Results flow back in reverse, so the operation log records the enveloped
response.
"""

from admin_shell.interceptors.base import Interceptor, run_interceptors
from admin_shell.interceptors.data_scope import DataScopeInterceptor
from admin_shell.interceptors.operation_log import OperationLogInterceptor
from admin_shell.interceptors.request_log import RequestLogInterceptor
from admin_shell.interceptors.response_transform import ResponseTransformInterceptor


def build_global_interceptors() -> list[Interceptor]:
    return [
        OperationLogInterceptor(),
        RequestLogInterceptor(),
        ResponseTransformInterceptor(),
        DataScopeInterceptor(),
    ]


__all__ = [
    "DataScopeInterceptor",
    "Interceptor",
    "OperationLogInterceptor",
    "RequestLogInterceptor",
    "ResponseTransformInterceptor",
    "build_global_interceptors",
    "run_interceptors",
]
