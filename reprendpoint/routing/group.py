"""Route groups: a shared path prefix plus shared route configuration."""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import Depends
from fastapi.params import Depends as DependsParam
from fastapi.routing import APIRoute

from reprendpoint.auth.requirements import AuthorizationRequirement
from reprendpoint.routing.base import RouteBuilder

logger = logging.getLogger(__name__)


def normalize_prefix(prefix: str) -> str:
    """Return ``prefix`` with a leading slash and no trailing slash."""
    prefix = prefix.strip()
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix.rstrip("/")


def join_paths(prefix: str, pattern: str) -> str:
    if not pattern or pattern == "/":
        return prefix or "/"
    if not pattern.startswith("/"):
        pattern = "/" + pattern
    return prefix + pattern


class RouteGroup(RouteBuilder):
    """A router sub-scope sharing a path prefix and route configuration.

    Routes added through the group are registered on the root target with the
    full path and the group's tags, dependencies and route options merged in.
    Configuration applies to routes mapped after it was added.

    Attributes:
        parent: Builder the group was created from
        prefix: Normalised path prefix relative to ``parent``
        tags: OpenAPI tags added to every route
        dependencies: FastAPI dependencies run before every handler
        route_options: Default FastAPI route parameters
    """

    def __init__(self, parent: RouteBuilder, prefix: str) -> None:
        super().__init__(parent.target)
        self.parent = parent
        self.prefix = normalize_prefix(prefix)
        self.tags: List[str] = []
        self.dependencies: List[DependsParam] = []
        self.route_options: Dict[str, Any] = {}

    @property
    def full_prefix(self) -> str:
        if isinstance(self.parent, RouteGroup):
            return self.parent.full_prefix + self.prefix
        return self.prefix

    def with_tags(self, *tags: str) -> "RouteGroup":
        self.tags.extend(tags)
        return self

    def add_dependency(self, dependency: Any) -> "RouteGroup":
        """Run ``dependency`` before every handler in the group.

        Accepts either a callable or an existing ``Depends(...)`` marker.
        """
        if not isinstance(dependency, DependsParam):
            dependency = Depends(dependency)
        self.dependencies.append(dependency)
        return self

    def require_authorization(
        self, *scopes: str, roles: Optional[Sequence[str]] = None
    ) -> "RouteGroup":
        """Reject unauthenticated or unauthorized requests before the handler runs."""
        return self.add_dependency(AuthorizationRequirement(scopes, roles or ()))

    def with_options(self, **options: Any) -> "RouteGroup":
        """Set default FastAPI route parameters (summary, deprecated, responses, ...)."""
        self.route_options.update(options)
        return self

    def add_route(
        self,
        path: str,
        endpoint: Callable[..., Any],
        methods: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> APIRoute:
        options = {**self.route_options, **kwargs}
        options["tags"] = self.tags + list(options.get("tags") or [])
        options["dependencies"] = self.dependencies + list(options.get("dependencies") or [])
        return self.parent.add_route(
            join_paths(self.prefix, path), endpoint, methods=methods, **options
        )

    def __repr__(self) -> str:
        return f"RouteGroup(prefix={self.full_prefix!r})"
