"""
Authentication dependencies for FastAPI route protection.

The session token travels in an HTTP-only cookie; these dependencies turn it
into a ``UserInfo`` identity or reject the request.
"""


from fastapi import Depends, HTTPException, Request, status

from app.config import settings
from app.exceptions import UnauthenticatedError
from app.schemas import UserInfo
from app.services.credential_service import CredentialService


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


async def get_current_identity(
    token: str | None = Depends(get_session_token),
) -> UserInfo:
    """
    Dependency to get the identity of the caller from the session cookie.
    """
    try:
        return CredentialService.validate_session(token)
    except UnauthenticatedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.reason,
        ) from e


async def get_current_identity_optional(
    token: str | None = Depends(get_session_token),
) -> UserInfo | None:
    """
    Optional dependency to get the caller's identity.
    Returns None if no valid token is provided instead of raising an exception.
    """
    try:
        return CredentialService.validate_session(token)
    except UnauthenticatedError:
        return None
