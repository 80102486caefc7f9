"""Exception classes for reprendpoint.

Configuration errors are raised synchronously during startup and are meant to
stop the process before it begins serving. Everything raised by FastAPI while
routes are attached, and everything raised inside handlers, propagates
unchanged.
"""

from typing import Any, Optional


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or repr(value)


class ReprEndpointError(Exception):
    """Base class for all reprendpoint errors."""


class EndpointConfigurationError(ReprEndpointError, ValueError):
    """Raised when endpoints or services are configured incorrectly."""


class InvalidEndpointTypeError(EndpointConfigurationError):
    """Raised when a listed type does not inherit from ReprEndpointBase.

    Attributes:
        endpoint_type: The offending type (or object)
    """

    def __init__(self, endpoint_type: Any) -> None:
        self.endpoint_type = endpoint_type
        super().__init__(
            f"Type {_type_name(endpoint_type)} must inherit from ReprEndpointBase"
        )


class AbstractEndpointTypeError(EndpointConfigurationError):
    """Raised when a listed endpoint type is abstract.

    Attributes:
        endpoint_type: The offending type
    """

    def __init__(self, endpoint_type: type) -> None:
        self.endpoint_type = endpoint_type
        super().__init__(f"Type {_type_name(endpoint_type)} cannot be abstract")


class ServiceResolutionError(ReprEndpointError, LookupError):
    """Raised when the service provider cannot build a requested service.

    Attributes:
        service_type: The type that was being resolved
    """

    def __init__(self, message: str, service_type: Optional[Any] = None) -> None:
        self.service_type = service_type
        super().__init__(message)


class OperationCancelledError(ReprEndpointError):
    """Raised when work is abandoned because its cancellation token fired."""

    def __init__(self, message: str = "The operation was cancelled.") -> None:
        super().__init__(message)


__all__ = [
    "ReprEndpointError",
    "EndpointConfigurationError",
    "InvalidEndpointTypeError",
    "AbstractEndpointTypeError",
    "ServiceResolutionError",
    "OperationCancelledError",
]
