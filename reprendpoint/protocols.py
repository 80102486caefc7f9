"""Type protocols for the collaborators endpoints are mapped and resolved with.

These describe the narrow surface the registrar relies on, so tests and
alternative hosts can supply their own router or container.
"""

from typing import Any, Callable, List, Optional, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class EndpointRouteBuilder(Protocol):
    """Protocol for routers endpoints map themselves onto.

    Implemented by RouteBuilder and, for nesting, by RouteGroup.
    """

    def add_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        methods: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> Any:
        """Add a route for the given methods.

        Returns:
            The created route handle
        """
        ...

    def map_get(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> Any:
        ...

    def map_post(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> Any:
        ...

    def map_put(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> Any:
        ...

    def map_delete(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> Any:
        ...

    def map_patch(self, pattern: str, handler: Callable[..., Any], **kwargs: Any) -> Any:
        ...

    def map_group(self, prefix: str) -> "EndpointRouteBuilder":
        """Create a nested group rooted at ``prefix``.

        Returns:
            A builder that itself satisfies this protocol
        """
        ...


@runtime_checkable
class ServiceResolver(Protocol):
    """Protocol for containers endpoints are resolved from."""

    def get_service(self, service_type: Type[T]) -> Optional[T]:
        """Resolve the last registration for a type, or None."""
        ...

    def get_services(self, service_type: Type[T]) -> List[T]:
        """Resolve every registration for a type."""
        ...


__all__ = [
    "EndpointRouteBuilder",
    "ServiceResolver",
]
