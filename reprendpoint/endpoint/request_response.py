"""Endpoint with a typed request and a typed response."""

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
TResponse = TypeVar("TResponse")


class ReprRequestResponseEndpoint(
    RouteMappingMixin, ReprEndpointBase, Generic[TRequest, TResponse]
):
    """Represents an endpoint with a request and a response.

    Attributes:
        request_as_parameters: Bind the request from path, query and form values
            instead of the JSON body. Read each time a route is mapped.
        request_type: Overrides the request type taken from the generic argument
        response_type: Overrides the response type taken from the generic argument
    """

    request_as_parameters: ClassVar[bool] = False
    request_type: ClassVar[Optional[Any]] = None
    response_type: ClassVar[Optional[Any]] = None

    @abstractmethod
    async def handle(
        self, request: TRequest, ct: CancellationToken = NO_CANCELLATION
    ) -> TResponse:
        """Handle the incoming request and return a response.

        Args:
            request: The bound request object
            ct: Cancellation token tied to the client connection

        Returns:
            The response object
        """

    def resolve_request_type(self) -> Any:
        request_type = self.request_type or resolved_argument(
            type(self), ReprRequestResponseEndpoint, 0
        )
        if request_type is None:
            raise TypeError(
                f"{type(self).__name__} must parameterise "
                "ReprRequestResponseEndpoint[...] or set request_type"
            )
        return request_type

    def resolve_response_type(self) -> Optional[Any]:
        return self.response_type or resolved_argument(
            type(self), ReprRequestResponseEndpoint, 1
        )

    def create_route_handler(self) -> Callable[..., Awaitable[Any]]:
        return build_route_handler(
            self.handle,
            name=type(self).__name__,
            request_type=self.resolve_request_type(),
            request_as_parameters=self.request_as_parameters,
            response_type=self.resolve_response_type(),
            description=endpoint_description(self),
        )
