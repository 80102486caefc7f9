"""Route handler construction shared by the endpoint variants.

FastAPI reads a handler's signature to decide how to bind it, so the handler
for an endpoint instance is built with an explicit ``__signature__``:

- body binding:      ``request: Annotated[TRequest, Body()]``
- parameter binding: ``request: Annotated[TRequest, Depends(TRequest)]``,
  which flattens the request type's constructor parameters into path, query
  and form values
- every handler:     ``ct: Annotated[CancellationToken, Depends(request_cancellation)]``

Typed responses become the return annotation, which FastAPI uses as the
response model.
"""

import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from fastapi import Body, Depends
from fastapi.routing import APIRoute
from typing_extensions import Annotated

from reprendpoint.cancellation import CancellationToken, RequestCancellation

if TYPE_CHECKING:
    from reprendpoint.protocols import EndpointRouteBuilder

# Module-level default to avoid B008 flake8 warning
NO_CANCELLATION = CancellationToken.none()


def build_route_handler(
    handle: Callable[..., Awaitable[Any]],
    *,
    name: str,
    request_type: Optional[Any] = None,
    request_as_parameters: bool = False,
    response_type: Optional[Any] = None,
    description: Optional[str] = None,
) -> Callable[..., Awaitable[Any]]:
    """Wrap ``handle`` in a function FastAPI can bind.

    Args:
        handle: The endpoint's bound ``handle`` method
        name: Handler name, used by FastAPI for the route name and operation id
        request_type: Request type, or None for request-less endpoints
        request_as_parameters: Bind the request from path, query and form values
        response_type: Response model, or None to return results as-is
        description: OpenAPI description

    Returns:
        Coroutine function with a FastAPI-readable signature
    """
    parameters = []

    if request_type is not None:
        marker = Depends(request_type) if request_as_parameters else Body()
        parameters.append(
            inspect.Parameter(
                "request",
                inspect.Parameter.KEYWORD_ONLY,
                annotation=Annotated[request_type, marker],
            )
        )

        async def route_handler(*, request: Any, ct: CancellationToken) -> Any:
            return await handle(request, ct)

    else:

        async def route_handler(*, ct: CancellationToken) -> Any:  # type: ignore[misc]
            return await handle(ct)

    parameters.append(
        inspect.Parameter("ct", inspect.Parameter.KEYWORD_ONLY, annotation=RequestCancellation)
    )

    return_annotation = response_type if response_type is not None else inspect.Signature.empty
    route_handler.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        parameters, return_annotation=return_annotation
    )
    route_handler.__name__ = name
    route_handler.__qualname__ = name
    route_handler.__doc__ = description
    return route_handler


class RouteMappingMixin(ABC):
    """HTTP-method helpers binding the endpoint's handler to a pattern.

    Keyword arguments are passed through to FastAPI (name, summary,
    status_code, tags, dependencies, responses, ...).
    """

    @abstractmethod
    def create_route_handler(self) -> Callable[..., Awaitable[Any]]:
        """Build the FastAPI handler for the endpoint's current settings."""

    def map_get(self, routes: "EndpointRouteBuilder", pattern: str, **kwargs: Any) -> APIRoute:
        return routes.map_get(pattern, self.create_route_handler(), **kwargs)

    def map_post(self, routes: "EndpointRouteBuilder", pattern: str, **kwargs: Any) -> APIRoute:
        return routes.map_post(pattern, self.create_route_handler(), **kwargs)

    def map_put(self, routes: "EndpointRouteBuilder", pattern: str, **kwargs: Any) -> APIRoute:
        return routes.map_put(pattern, self.create_route_handler(), **kwargs)

    def map_delete(self, routes: "EndpointRouteBuilder", pattern: str, **kwargs: Any) -> APIRoute:
        return routes.map_delete(pattern, self.create_route_handler(), **kwargs)

    def map_patch(self, routes: "EndpointRouteBuilder", pattern: str, **kwargs: Any) -> APIRoute:
        return routes.map_patch(pattern, self.create_route_handler(), **kwargs)


def endpoint_description(endpoint: object) -> Optional[str]:
    doc = type(endpoint).__doc__
    return inspect.cleandoc(doc) if doc else None
