"""Request authentication dependencies."""

from fastapi import Depends, Header

from identity.auth import Principal, get_auth_provider
from shared.errors import AuthenticationError, AuthorizationError


def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    """Resolve the ``Authorization: Bearer <token>`` header to a verified principal."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Not authorized, no token.")
    return get_auth_provider().verify(token.strip())


def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise AuthorizationError(principal.role.value)
    return principal
