"""Service registrations: lifetimes, descriptors and the service collection."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional

from reprendpoint.exceptions import EndpointConfigurationError

if TYPE_CHECKING:
    from reprendpoint.services.provider import ServiceProvider

logger = logging.getLogger(__name__)


class ServiceLifetime(str, Enum):
    """How often a new instance is created when a service is resolved."""

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"


@dataclass(frozen=True, eq=False)
class ServiceDescriptor:
    """A single registration in a ServiceCollection.

    Exactly one of ``implementation_type``, ``instance`` or ``factory`` is set.
    Descriptors compare by identity: two registrations of the same pair are
    two distinct registrations.

    Attributes:
        service_type: Key the service is resolved by
        implementation_type: Class constructed with constructor injection
        lifetime: Instantiation policy
        instance: Pre-built singleton instance
        factory: Callable receiving the resolving provider
    """

    service_type: Any
    implementation_type: Optional[type] = None
    lifetime: ServiceLifetime = ServiceLifetime.TRANSIENT
    instance: Any = None
    factory: Optional[Callable[["ServiceProvider"], Any]] = None

    def __post_init__(self) -> None:
        sources = [
            self.implementation_type is not None,
            self.instance is not None,
            self.factory is not None,
        ]
        if sum(sources) != 1:
            raise EndpointConfigurationError(
                f"Registration for {self.service_type!r} needs exactly one of "
                "implementation_type, instance or factory"
            )
        if self.instance is not None and self.lifetime is not ServiceLifetime.SINGLETON:
            raise EndpointConfigurationError(
                f"Instance registration for {self.service_type!r} must be a singleton"
            )


class ServiceCollection:
    """Ordered list of service descriptors used to build a ServiceProvider."""

    def __init__(self) -> None:
        self._descriptors: List[ServiceDescriptor] = []

    def add(self, descriptor: ServiceDescriptor) -> "ServiceCollection":
        self._descriptors.append(descriptor)
        logger.debug(
            f"Registered {_describe(descriptor.service_type)} -> "
            f"{_describe(descriptor.implementation_type or descriptor.factory or descriptor.instance)} "
            f"({descriptor.lifetime.value})"
        )
        return self

    def add_transient(
        self,
        service_type: Any,
        implementation_type: Optional[type] = None,
        *,
        factory: Optional[Callable[["ServiceProvider"], Any]] = None,
    ) -> "ServiceCollection":
        return self._add(service_type, implementation_type, factory, ServiceLifetime.TRANSIENT)

    def add_scoped(
        self,
        service_type: Any,
        implementation_type: Optional[type] = None,
        *,
        factory: Optional[Callable[["ServiceProvider"], Any]] = None,
    ) -> "ServiceCollection":
        return self._add(service_type, implementation_type, factory, ServiceLifetime.SCOPED)

    def add_singleton(
        self,
        service_type: Any,
        implementation_type: Optional[type] = None,
        *,
        instance: Any = None,
        factory: Optional[Callable[["ServiceProvider"], Any]] = None,
    ) -> "ServiceCollection":
        if instance is not None:
            return self.add(
                ServiceDescriptor(
                    service_type, instance=instance, lifetime=ServiceLifetime.SINGLETON
                )
            )
        return self._add(service_type, implementation_type, factory, ServiceLifetime.SINGLETON)

    def _add(
        self,
        service_type: Any,
        implementation_type: Optional[type],
        factory: Optional[Callable[["ServiceProvider"], Any]],
        lifetime: ServiceLifetime,
    ) -> "ServiceCollection":
        if implementation_type is None and factory is None:
            implementation_type = service_type
        return self.add(
            ServiceDescriptor(
                service_type,
                implementation_type=implementation_type,
                factory=factory,
                lifetime=lifetime,
            )
        )

    def build_service_provider(self) -> "ServiceProvider":
        """Create a root ServiceProvider over a snapshot of the registrations."""
        from reprendpoint.services.provider import ServiceProvider

        return ServiceProvider(list(self._descriptors))

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, service_type: object) -> bool:
        return any(d.service_type is service_type for d in self._descriptors)


def _describe(value: Any) -> str:
    return getattr(value, "__qualname__", None) or type(value).__qualname__


__all__ = ["ServiceCollection", "ServiceDescriptor", "ServiceLifetime"]
