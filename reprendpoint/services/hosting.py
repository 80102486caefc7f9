"""Glue between a ServiceProvider and a FastAPI application."""

from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Request

from reprendpoint.exceptions import EndpointConfigurationError
from reprendpoint.services.provider import ServiceProvider


def attach_service_provider(app: FastAPI, provider: ServiceProvider) -> FastAPI:
    """Store ``provider`` as the application's root service provider."""
    app.state.services = provider
    return app


def get_service_provider(app: FastAPI) -> ServiceProvider:
    """Return the root service provider attached to ``app``.

    Raises:
        EndpointConfigurationError: If no provider has been attached
    """
    provider = getattr(app.state, "services", None)
    if not isinstance(provider, ServiceProvider):
        raise EndpointConfigurationError(
            "No service provider is attached to the application; "
            "call attach_service_provider() or use AppBuilder"
        )
    return provider


async def request_services(request: Request) -> AsyncIterator[ServiceProvider]:
    """FastAPI dependency yielding a service scope for the current request."""
    with get_service_provider(request.app).create_scope() as scope:
        yield scope


def FromServices(service_type: Any) -> Any:  # noqa: N802
    """Declare a handler parameter resolved from the request's service scope.

    Example:
        >>> async def handler(clock: Clock = FromServices(Clock)): ...
    """

    async def resolve(
        services: ServiceProvider = Depends(request_services),
    ) -> Any:
        return services.get_required_service(service_type)

    resolve.__name__ = f"resolve_{getattr(service_type, '__name__', 'service')}"
    return Depends(resolve)


__all__ = [
    "FromServices",
    "attach_service_provider",
    "get_service_provider",
    "request_services",
]
