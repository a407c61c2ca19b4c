"""Caller resolution shared by the authenticated routes."""

from pickme.domain.service import JWTService
from pickme.interface.error import unauthorized


def require_caller(
    jwt_service: JWTService, auth_token: str | None, action: str
) -> str:
    """Return the authenticated user's ID or raise a 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from the ``auth_token`` cookie
        action: What the caller is trying to do, used in the error detail

    Raises:
        HTTPException: 401 if the cookie is missing, invalid or expired
    """
    user_id = jwt_service.resolve_caller(auth_token)
    if not user_id:
        raise unauthorized(f"Authentication required to {action}")
    return user_id
