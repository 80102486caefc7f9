"""Routing for endpoint classes.

- RouteBuilder binds handlers to HTTP methods on a FastAPI app or APIRouter
- RouteGroup nests routes under a path prefix with shared configuration
"""

from .base import RouteBuilder
from .group import RouteGroup

__all__ = [
    "RouteBuilder",
    "RouteGroup",
]
