"""Base class for all endpoint types."""

import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional

if TYPE_CHECKING:
    from reprendpoint.protocols import EndpointRouteBuilder
    from reprendpoint.routing.group import RouteGroup


class ReprEndpointBase(ABC):
    """Base class for all endpoint types with route mapping and optional grouping.

    Subclasses override the class attributes (or define properties) to opt into
    a route group:

    - ``group_prefix``: path the endpoint's routes are nested under. None,
      empty or whitespace-only keeps the endpoint ungrouped.
    - ``configure_group``: callable applied once to the new group before
      ``map_endpoint`` runs. Either a ``configure_group(self, group)`` method
      or a class attribute holding a one-argument callable such as
      ``configure_group = lambda group: group.with_tags("users")``.
    """

    group_prefix: ClassVar[Optional[str]] = None
    configure_group: ClassVar[Optional[Callable[["RouteGroup"], None]]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # A one-argument function stored on the class takes only the group.
        callback = cls.__dict__.get("configure_group")
        if inspect.isfunction(callback) and _positional_count(callback) == 1:
            cls.configure_group = staticmethod(callback)  # type: ignore[assignment]

    @abstractmethod
    def map_endpoint(self, routes: "EndpointRouteBuilder") -> None:
        """Map the endpoint to the route builder.

        Args:
            routes: The root builder or the endpoint's route group
        """


def _positional_count(function: Callable[..., Any]) -> int:
    return sum(
        1
        for p in inspect.signature(function).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    )
