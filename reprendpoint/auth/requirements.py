"""Authorization requirement applied to route groups.

Authentication itself belongs to Starlette's ``AuthenticationMiddleware``;
the requirement only inspects ``request.user`` and ``request.auth`` that the
middleware populated.
"""

import logging
from typing import Sequence, Tuple

from fastapi import HTTPException, Request, status

from reprendpoint.auth.rbac import has_any_role, missing_scopes

logger = logging.getLogger(__name__)


class AuthorizationRequirement:
    """FastAPI dependency rejecting requests that lack authentication or rights.

    Attributes:
        scopes: Scopes that must all be granted
        roles: Roles of which the user needs at least one
    """

    def __init__(self, scopes: Sequence[str] = (), roles: Sequence[str] = ()) -> None:
        self.scopes: Tuple[str, ...] = tuple(scopes)
        self.roles: Tuple[str, ...] = tuple(roles)

    async def __call__(self, request: Request) -> None:
        # No AuthenticationMiddleware means nobody is authenticated.
        user = request.scope.get("user")
        if user is None or not getattr(user, "is_authenticated", False):
            logger.debug(f"Rejected unauthenticated request to {request.url.path}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
            )

        credentials = request.scope.get("auth")
        granted = getattr(credentials, "scopes", None) or []
        missing = missing_scopes(granted, self.scopes)
        if missing:
            logger.debug(f"Rejected request to {request.url.path}: missing scopes {missing}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient scopes",
            )

        if not has_any_role(getattr(user, "roles", None) or [], self.roles):
            logger.debug(f"Rejected request to {request.url.path}: none of roles {self.roles}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )

    def __repr__(self) -> str:
        return f"AuthorizationRequirement(scopes={self.scopes!r}, roles={self.roles!r})"
