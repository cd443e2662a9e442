"""Request dependencies: the authorization gate, the current user and the image store."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookstore.api.policy import ROUTE_POLICY, Decision, Public, authorize
from bookstore.core.config import get_settings
from bookstore.core.errors import AuthenticationError, AuthorizationError
from bookstore.core.security import authenticate
from bookstore.schemas.auth import CurrentUser
from bookstore.services.assets import AssetStore

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def _relative_path(path: str) -> str:
    prefix = get_settings().API_PREFIX
    if prefix and path.startswith(prefix):
        return path[len(prefix):] or "/"
    return path


def enforce_route_policy(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser | None:
    """
    Router-level dependency: look up the route's requirement and enforce it.

    Raises 401 when a token is needed but missing or invalid, 403 when the
    token lacks the required role. Runs before the route handler, so a
    denied request never reaches it. The user is kept on request.state.
    """
    requirement = ROUTE_POLICY.requirement_for(request.method, _relative_path(request.url.path))
    request.state.user = None
    if isinstance(requirement, Public):
        return None
    if credentials is None:
        raise AuthenticationError("Not authenticated")
    user = authenticate(credentials.credentials)
    if authorize(requirement, user) is Decision.DENY:
        logger.warning(
            "Access denied: %s %s requires %s, user %s has roles %s",
            request.method,
            request.url.path,
            requirement,
            user.email,
            user.roles,
        )
        raise AuthorizationError("Insufficient role for this operation")
    request.state.user = user
    return user


def get_current_user(request: Request) -> CurrentUser | None:
    """The user authenticated by the gate, or None on public routes."""
    return getattr(request.state, "user", None)


def get_asset_store() -> AssetStore:
    return AssetStore(get_settings().UPLOAD_DIR)
