"""Registration of endpoint classes in the service collection and the router.

Typical startup::

    services = ServiceCollection()
    add_repr_endpoints(services, "myapp.endpoints")
    app = FastAPI()
    attach_service_provider(app, services.build_service_provider())
    map_repr_endpoints(app)

Every endpoint type is registered twice, once under its own type and once
under ReprEndpointBase, so it can be resolved directly or together with all
other endpoints when routes are mapped.
"""

import inspect
import logging
from typing import Any, List, Sequence

from fastapi import FastAPI

from reprendpoint.discovery import ModuleRef, discover_endpoint_types
from reprendpoint.endpoint.base import ReprEndpointBase
from reprendpoint.exceptions import AbstractEndpointTypeError, InvalidEndpointTypeError
from reprendpoint.routing.base import RouteBuilder
from reprendpoint.services.collection import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
)
from reprendpoint.services.hosting import get_service_provider

logger = logging.getLogger(__name__)


def add_repr_endpoints(
    services: ServiceCollection,
    *modules: ModuleRef,
    lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT,
) -> ServiceCollection:
    """Register every concrete endpoint class found in ``modules``.

    Finding no endpoints is not an error.

    Args:
        services: The service collection
        *modules: Modules or dotted names to scan. If none are given, every
            module currently loaded is scanned.
        lifetime: The service lifetime for each endpoint

    Returns:
        The updated service collection
    """
    endpoint_types = discover_endpoint_types(modules)
    _register(services, endpoint_types, lifetime)
    logger.info(f"Registered {len(endpoint_types)} endpoint(s) by module scan")
    return services


def add_repr_endpoint_types(
    services: ServiceCollection,
    *endpoint_types: Any,
    lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT,
) -> ServiceCollection:
    """Register specific endpoint classes.

    All types are validated before anything is registered, so a bad entry
    leaves the collection untouched.

    Args:
        services: The service collection
        *endpoint_types: The endpoint classes to register
        lifetime: The lifetime to use when registering the endpoints

    Returns:
        The updated service collection

    Raises:
        InvalidEndpointTypeError: If a type does not inherit from ReprEndpointBase
        AbstractEndpointTypeError: If a type is abstract
    """
    if not endpoint_types:
        return services

    for endpoint_type in endpoint_types:
        if not (inspect.isclass(endpoint_type) and issubclass(endpoint_type, ReprEndpointBase)):
            raise InvalidEndpointTypeError(endpoint_type)
        if endpoint_type is ReprEndpointBase or inspect.isabstract(endpoint_type):
            raise AbstractEndpointTypeError(endpoint_type)

    _register(services, endpoint_types, lifetime)
    return services


def _register(
    services: ServiceCollection, endpoint_types: Sequence[type], lifetime: ServiceLifetime
) -> None:
    for endpoint_type in endpoint_types:
        services.add(ServiceDescriptor(endpoint_type, endpoint_type, lifetime))
        services.add(ServiceDescriptor(ReprEndpointBase, endpoint_type, lifetime))
        logger.debug(f"Registered endpoint {endpoint_type.__qualname__} ({lifetime.value})")


def map_repr_endpoints(app: FastAPI) -> FastAPI:
    """Map all registered endpoints onto ``app``.

    Endpoints with a group prefix get a new route group each, configured by
    their ``configure_group`` callback before their routes are mapped.
    Calling this twice maps every endpoint twice.

    Args:
        app: Application with a service provider attached

    Returns:
        The same application
    """
    endpoints: List[ReprEndpointBase] = get_service_provider(app).get_services(
        ReprEndpointBase
    )
    root = RouteBuilder(app)

    for endpoint in endpoints:
        prefix = endpoint.group_prefix
        if prefix and prefix.strip():
            group = root.map_group(prefix)
            if endpoint.configure_group is not None:
                endpoint.configure_group(group)
            endpoint.map_endpoint(group)
        else:
            endpoint.map_endpoint(root)

    logger.info(f"Mapped {len(endpoints)} endpoint(s)")
    return app

