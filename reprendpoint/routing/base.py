"""Route builder over a FastAPI application or APIRouter."""

import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Union

from fastapi import APIRouter, FastAPI
from fastapi.routing import APIRoute

if TYPE_CHECKING:
    from reprendpoint.routing.group import RouteGroup

logger = logging.getLogger(__name__)


class RouteBuilder:
    """Binds handlers to HTTP methods on a FastAPI app or APIRouter.

    Attributes:
        target: The FastAPI application or APIRouter routes are added to
    """

    def __init__(self, target: Union[FastAPI, APIRouter]) -> None:
        self.target = target

    def add_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        methods: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> APIRoute:
        """Add a route to the target.

        Args:
            path: URL path for the endpoint
            endpoint: Endpoint handler function
            methods: HTTP methods (defaults to ["GET"])
            **kwargs: Additional FastAPI route parameters

        Returns:
            The APIRoute FastAPI created
        """
        if methods is None:
            methods = ["GET"]

        self.target.add_api_route(path=path, endpoint=endpoint, methods=methods, **kwargs)
        route = self.target.routes[-1]
        logger.debug(f"Mapped {','.join(methods)} {path}")
        return route  # type: ignore[return-value]

    def map_methods(
        self, pattern: str, methods: List[str], handler: Callable[..., Any], **kwargs: Any
    ) -> APIRoute:
        return self.add_route(pattern, handler, methods=methods, **kwargs)

    def map_get(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> APIRoute:
        return self.add_route(pattern, handler, methods=["GET"], **kwargs)

    def map_post(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> APIRoute:
        return self.add_route(pattern, handler, methods=["POST"], **kwargs)

    def map_put(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> APIRoute:
        return self.add_route(pattern, handler, methods=["PUT"], **kwargs)

    def map_delete(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> APIRoute:
        return self.add_route(pattern, handler, methods=["DELETE"], **kwargs)

    def map_patch(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> APIRoute:
        return self.add_route(pattern, handler, methods=["PATCH"], **kwargs)

    def map_group(self, prefix: str) -> "RouteGroup":
        """Create a route group nested under this builder.

        Every call creates a new group, even for a prefix used before.
        """
        from reprendpoint.routing.group import RouteGroup

        return RouteGroup(self, prefix)
