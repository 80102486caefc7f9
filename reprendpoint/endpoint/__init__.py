"""Endpoint classes: one class per HTTP operation.

- ReprEndpoint: no request, generic result
- ReprRequestEndpoint[TRequest]: request, generic result
- ReprResponseEndpoint[TResponse]: no request, typed response
- ReprRequestResponseEndpoint[TRequest, TResponse]: request, typed response
"""

from .base import ReprEndpointBase
from .endpoint import ReprEndpoint
from .request import ReprRequestEndpoint
from .request_response import ReprRequestResponseEndpoint
from .response import ReprResponseEndpoint

__all__ = [
    "ReprEndpoint",
    "ReprEndpointBase",
    "ReprRequestEndpoint",
    "ReprRequestResponseEndpoint",
    "ReprResponseEndpoint",
]
