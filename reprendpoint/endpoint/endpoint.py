"""Endpoint with no request and no typed response."""

from abc import abstractmethod
from typing import Any, Awaitable, Callable

from reprendpoint.cancellation import CancellationToken
from reprendpoint.endpoint.base import ReprEndpointBase
from reprendpoint.endpoint.mapping import (
    NO_CANCELLATION,
    RouteMappingMixin,
    build_route_handler,
    endpoint_description,
)


class ReprEndpoint(RouteMappingMixin, ReprEndpointBase):
    """Base class for an endpoint with no request or response body.

    ``handle`` returns any value FastAPI can turn into a response, typically a
    ``starlette.responses.Response``.
    """

    @abstractmethod
    async def handle(self, ct: CancellationToken = NO_CANCELLATION) -> Any:
        """Handle the incoming HTTP request.

        Args:
            ct: Cancellation token tied to the client connection

        Returns:
            A response object or a JSON-serialisable value
        """

    def create_route_handler(self) -> Callable[..., Awaitable[Any]]:
        return build_route_handler(
            self.handle,
            name=type(self).__name__,
            description=endpoint_description(self),
        )
