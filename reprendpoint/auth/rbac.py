"""Scope and role checks used by group authorization requirements."""

from typing import Iterable, List, Sequence

WILDCARD_SCOPE = "*"


def missing_scopes(granted_scopes: Iterable[str], required_scopes: Sequence[str]) -> List[str]:
    """Return the required scopes the caller was not granted.

    A granted ``*`` scope grants every scope.

    Args:
        granted_scopes: Scopes from the authentication backend
        required_scopes: Scopes every request to the group needs

    Returns:
        Missing scopes in the order they were required
    """
    granted = set(granted_scopes)
    if WILDCARD_SCOPE in granted:
        return []
    return [scope for scope in required_scopes if scope not in granted]


def has_any_role(user_roles: Iterable[str], required_roles: Sequence[str]) -> bool:
    """True when no role is required or the user holds one of them."""
    return not required_roles or not set(required_roles).isdisjoint(user_roles)


__all__ = ["WILDCARD_SCOPE", "has_any_role", "missing_scopes"]
