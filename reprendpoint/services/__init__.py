"""Dependency injection for endpoint classes and their collaborators."""

from reprendpoint.services.collection import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
)
from reprendpoint.services.hosting import (
    FromServices,
    attach_service_provider,
    get_service_provider,
    request_services,
)
from reprendpoint.services.provider import ServiceProvider, ServiceScope

__all__ = [
    "FromServices",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceLifetime",
    "ServiceProvider",
    "ServiceScope",
    "attach_service_provider",
    "get_service_provider",
    "request_services",
]
