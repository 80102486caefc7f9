"""Endpoint with a typed request and no typed response."""

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

TRequest = TypeVar("TRequest")


class ReprRequestEndpoint(RouteMappingMixin, ReprEndpointBase, Generic[TRequest]):
    """Represents an endpoint with a request and no typed response.

    Attributes:
        request_as_parameters: Bind the request from path, query and form values
            instead of the JSON body. Read each time a route is mapped.
        request_type: Overrides the request type taken from the generic argument
    """

    request_as_parameters: ClassVar[bool] = False
    request_type: ClassVar[Optional[Any]] = None

    @abstractmethod
    async def handle(self, request: TRequest, ct: CancellationToken = NO_CANCELLATION) -> Any:
        """Handle the request and return a response object or plain value."""

    def resolve_request_type(self) -> Any:
        request_type = self.request_type or resolved_argument(
            type(self), ReprRequestEndpoint, 0
        )
        if request_type is None:
            raise TypeError(
                f"{type(self).__name__} must parameterise ReprRequestEndpoint[...] "
                "or set request_type"
            )
        return request_type

    def create_route_handler(self) -> Callable[..., Awaitable[Any]]:
        return build_route_handler(
            self.handle,
            name=type(self).__name__,
            request_type=self.resolve_request_type(),
            request_as_parameters=self.request_as_parameters,
            description=endpoint_description(self),
        )
