"""Endpoint with no request and a typed response."""

from abc import abstractmethod
from typing import Any, Awaitable, Callable, ClassVar, Generic, Optional, TypeVar

from reprendpoint.cancellation import CancellationToken
from reprendpoint.endpoint.base import ReprEndpointBase
from reprendpoint.endpoint.generics import resolved_argument
from reprendpoint.endpoint.mapping import (
    NO_CANCELLATION,
    RouteMappingMixin,
    build_route_handler,
    endpoint_description,
)

TResponse = TypeVar("TResponse")


class ReprResponseEndpoint(RouteMappingMixin, ReprEndpointBase, Generic[TResponse]):
    """Base class for endpoints that return a typed response without a request.

    Useful for endpoints that take no input or get everything they need from
    injected services. The response type is declared to FastAPI as the
    route's response model.
    """

    response_type: ClassVar[Optional[Any]] = None

    @abstractmethod
    async def handle(self, ct: CancellationToken = NO_CANCELLATION) -> TResponse:
        """Handle the request and return the response object.

        Args:
            ct: Cancellation token tied to the client connection

        Returns:
            The response object
        """

    def resolve_response_type(self) -> Optional[Any]:
        return self.response_type or resolved_argument(type(self), ReprResponseEndpoint, 0)

    def create_route_handler(self) -> Callable[..., Awaitable[Any]]:
        return build_route_handler(
            self.handle,
            name=type(self).__name__,
            response_type=self.resolve_response_type(),
            description=endpoint_description(self),
        )
