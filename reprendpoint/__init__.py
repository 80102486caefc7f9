"""
reprendpoint - class-based endpoints for FastAPI.

One class per HTTP operation (Request, Endpoint, Response), with the request
and response types bound through FastAPI's own binding machinery. Endpoint
classes are registered in a small dependency-injection container, either by
scanning modules or from an explicit list, and then mapped onto the
application, optionally inside a path-prefixed route group.

Main Exports:
    Endpoints:
        - ReprEndpointBase: Base class for all endpoints
        - ReprEndpoint: No request, generic result
        - ReprRequestEndpoint: Request, generic result
        - ReprResponseEndpoint: No request, typed response
        - ReprRequestResponseEndpoint: Request and typed response

    Registration:
        - add_repr_endpoints: Register endpoints found by module scan
        - add_repr_endpoint_types: Register an explicit list of endpoints
        - map_repr_endpoints: Map registered endpoints onto an application
        - AppBuilder: Services -> FastAPI app -> mapped endpoints -> uvicorn

    Services:
        - ServiceCollection, ServiceProvider, ServiceLifetime

Example:
    >>> from pydantic import BaseModel
    >>> from reprendpoint import AppBuilder, ReprResponseEndpoint
    >>>
    >>> class Health(BaseModel):
    ...     status: str
    >>>
    >>> class HealthEndpoint(ReprResponseEndpoint[Health]):
    ...     def map_endpoint(self, routes):
    ...         self.map_get(routes, "/health")
    ...
    ...     async def handle(self, ct=None):
    ...         return Health(status="ok")
    >>>
    >>> app = AppBuilder().add_endpoint_types(HealthEndpoint).build()
"""

from reprendpoint.app_builder import AppBuilder
from reprendpoint.cancellation import CancellationToken, RequestCancellation
from reprendpoint.config import ReprEndpointsConfig
from reprendpoint.endpoint import (
    ReprEndpoint,
    ReprEndpointBase,
    ReprRequestEndpoint,
    ReprRequestResponseEndpoint,
    ReprResponseEndpoint,
)
from reprendpoint.exceptions import (
    AbstractEndpointTypeError,
    EndpointConfigurationError,
    InvalidEndpointTypeError,
    OperationCancelledError,
    ReprEndpointError,
    ServiceResolutionError,
)
from reprendpoint.registration import (
    add_repr_endpoint_types,
    add_repr_endpoints,
    map_repr_endpoints,
)
from reprendpoint.routing import RouteBuilder, RouteGroup
from reprendpoint.services import (
    FromServices,
    ServiceCollection,
    ServiceLifetime,
    ServiceProvider,
    attach_service_provider,
    get_service_provider,
)

__version__ = "0.1.0"

__all__ = [
    "AbstractEndpointTypeError",
    "AppBuilder",
    "CancellationToken",
    "EndpointConfigurationError",
    "FromServices",
    "InvalidEndpointTypeError",
    "OperationCancelledError",
    "ReprEndpoint",
    "ReprEndpointBase",
    "ReprEndpointError",
    "ReprEndpointsConfig",
    "ReprRequestEndpoint",
    "ReprRequestResponseEndpoint",
    "ReprResponseEndpoint",
    "RequestCancellation",
    "RouteBuilder",
    "RouteGroup",
    "ServiceCollection",
    "ServiceLifetime",
    "ServiceProvider",
    "ServiceResolutionError",
    "add_repr_endpoint_types",
    "add_repr_endpoints",
    "attach_service_provider",
    "get_service_provider",
    "map_repr_endpoints",
]
