"""Authorization hooks for route groups."""

from reprendpoint.auth.rbac import WILDCARD_SCOPE, has_any_role, missing_scopes
from reprendpoint.auth.requirements import AuthorizationRequirement

__all__ = [
    "AuthorizationRequirement",
    "WILDCARD_SCOPE",
    "has_any_role",
    "missing_scopes",
]
