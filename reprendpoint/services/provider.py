"""Service provider with constructor injection and lifetime handling.

The root provider owns singletons and acts as its own scope, so scoped
services resolved from it live as long as the provider. ``create_scope``
returns a child scope that shares the root singletons and keeps its own
scoped instances.
"""

import inspect
import logging
import threading
import types
import typing
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar, Union, cast

from reprendpoint.exceptions import ServiceResolutionError
from reprendpoint.services.collection import ServiceDescriptor, ServiceLifetime

T = TypeVar("T")

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_UNION_TYPES = (Union, getattr(types, "UnionType", Union))


class ServiceProvider:
    """Resolves services registered in a ServiceCollection.

    Attributes:
        descriptors: Registrations in registration order
        is_root: Whether this provider is the root (singleton-owning) scope
    """

    def __init__(
        self,
        descriptors: Sequence[ServiceDescriptor],
        root: Optional["ServiceProvider"] = None,
    ) -> None:
        self.descriptors: List[ServiceDescriptor] = list(descriptors)
        self._root = root or self
        self._scoped: Dict[int, Any] = {}
        self._closed = False
        if root is None:
            self._singletons: Dict[int, Any] = {}
            self._lock = threading.RLock()
            self._by_type: Dict[Any, List[ServiceDescriptor]] = {}
            for descriptor in self.descriptors:
                self._by_type.setdefault(descriptor.service_type, []).append(descriptor)

    @property
    def is_root(self) -> bool:
        return self._root is self

    def is_registered(self, service_type: Any) -> bool:
        return service_type is ServiceProvider or service_type in self._root._by_type

    def get_service(self, service_type: Type[T]) -> Optional[T]:
        """Resolve the last registration for ``service_type``.

        Returns:
            The service instance, or None if nothing is registered
        """
        if service_type is ServiceProvider:
            return cast(T, self)
        descriptors = self._root._by_type.get(service_type)
        if not descriptors:
            return None
        return cast(T, self._resolve(descriptors[-1], ()))

    def get_required_service(self, service_type: Type[T]) -> T:
        """Resolve ``service_type`` or raise ServiceResolutionError."""
        service = self.get_service(service_type)
        if service is None:
            raise ServiceResolutionError(
                f"No service for type '{_name(service_type)}' has been registered",
                service_type,
            )
        return service

    def get_services(self, service_type: Type[T]) -> List[T]:
        """Resolve every registration for ``service_type`` in registration order."""
        descriptors = self._root._by_type.get(service_type, [])
        return [cast(T, self._resolve(d, ())) for d in descriptors]

    def create_scope(self) -> "ServiceScope":
        """Create a child scope sharing this provider's singletons."""
        return ServiceScope(ServiceProvider(self._root.descriptors, root=self._root))

    def close(self) -> None:
        """Drop the instances cached by this scope."""
        self._scoped.clear()
        self._closed = True

    def _resolve(self, descriptor: ServiceDescriptor, chain: Tuple[Any, ...]) -> Any:
        if self._closed:
            raise ServiceResolutionError(
                "Cannot resolve services from a closed scope", descriptor.service_type
            )

        if descriptor.lifetime is ServiceLifetime.SINGLETON:
            root = self._root
            key = id(descriptor)
            with root._lock:
                if key not in root._singletons:
                    root._singletons[key] = root._create(descriptor, chain)
                return root._singletons[key]

        if descriptor.lifetime is ServiceLifetime.SCOPED:
            key = id(descriptor)
            if key not in self._scoped:
                self._scoped[key] = self._create(descriptor, chain)
            return self._scoped[key]

        return self._create(descriptor, chain)

    def _create(self, descriptor: ServiceDescriptor, chain: Tuple[Any, ...]) -> Any:
        if descriptor.instance is not None:
            return descriptor.instance
        if descriptor.factory is not None:
            return descriptor.factory(self)

        implementation = cast(type, descriptor.implementation_type)
        if implementation in chain:
            path = " -> ".join(_name(t) for t in chain + (implementation,))
            raise ServiceResolutionError(
                f"Circular dependency detected: {path}", descriptor.service_type
            )
        chain = chain + (implementation,)

        kwargs = self._constructor_arguments(implementation, chain)
        instance = implementation(**kwargs)
        logger.debug(f"Created {_name(implementation)} ({descriptor.lifetime.value})")
        return instance

    def _constructor_arguments(
        self, implementation: type, chain: Tuple[Any, ...]
    ) -> Dict[str, Any]:
        if implementation.__init__ is object.__init__:  # type: ignore[misc]
            return {}

        try:
            hints = typing.get_type_hints(implementation.__init__)  # type: ignore[misc]
        except NameError as e:
            raise ServiceResolutionError(
                f"Cannot evaluate constructor annotations of '{_name(implementation)}': {e}",
                implementation,
            ) from e

        kwargs: Dict[str, Any] = {}
        parameters = list(inspect.signature(implementation.__init__).parameters.values())  # type: ignore[misc]
        for parameter in parameters[1:]:
            if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
                continue

            annotation = hints.get(parameter.name, parameter.annotation)
            optional = False
            if _is_optional(annotation):
                annotation = _strip_optional(annotation)
                optional = True

            if annotation is not inspect.Parameter.empty and self.is_registered(annotation):
                if annotation is ServiceProvider:
                    kwargs[parameter.name] = self
                else:
                    descriptor = self._root._by_type[annotation][-1]
                    kwargs[parameter.name] = self._resolve(descriptor, chain)
            elif parameter.default is not inspect.Parameter.empty:
                continue
            elif optional:
                kwargs[parameter.name] = None
            else:
                raise ServiceResolutionError(
                    f"Unable to resolve parameter '{parameter.name}' of "
                    f"'{_name(implementation)}': no service registered for "
                    f"'{_name(annotation)}'",
                    annotation,
                )
        return kwargs


class ServiceScope:
    """Context manager around a scoped ServiceProvider."""

    def __init__(self, service_provider: ServiceProvider) -> None:
        self.service_provider = service_provider

    def __enter__(self) -> ServiceProvider:
        return self.service_provider

    def __exit__(self, *exc_info: Any) -> None:
        self.service_provider.close()


def _is_optional(annotation: Any) -> bool:
    return (
        typing.get_origin(annotation) in _UNION_TYPES
        and _NONE_TYPE in typing.get_args(annotation)
    )


def _strip_optional(annotation: Any) -> Any:
    args = [a for a in typing.get_args(annotation) if a is not _NONE_TYPE]
    return args[0] if len(args) == 1 else annotation


def _name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


__all__ = ["ServiceProvider", "ServiceScope"]
