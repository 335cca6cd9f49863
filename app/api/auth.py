# Authentication API routes: registration, login, logout and session lookup

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.config import settings
from app.dependencies.auth import get_current_identity_optional
from app.dependencies.services import get_credential_service
from app.exceptions import DuplicateIdentityError, InvalidCredentialsError
from app.schemas import SuccessResponse, UserInfo, UserLogin, UserRegister
from app.services.credential_service import CredentialService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )


@router.post("/register", response_model=UserInfo)
async def register_user(
    user_data: UserRegister,
    response: Response,
    credential_service: CredentialService = Depends(get_credential_service),
):
    """Register a new user and start a session for it."""
    try:
        identity, token = await credential_service.register(
            user_data.username, user_data.password
        )
    except DuplicateIdentityError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    set_session_cookie(response, token)
    return identity


@router.post("/login", response_model=UserInfo)
async def login_user(
    user_data: UserLogin,
    response: Response,
    credential_service: CredentialService = Depends(get_credential_service),
):
    """Check credentials and start a session."""
    try:
        identity, token = await credential_service.authenticate(
            user_data.username, user_data.password
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e

    set_session_cookie(response, token)
    return identity


@router.post("/logout", response_model=SuccessResponse)
async def logout_user(response: Response):
    """Drop the session cookie. Tokens stay valid until they expire."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
    )
    return SuccessResponse()


@router.get("/me", response_model=UserInfo | None)
async def get_current_user_info(
    identity: UserInfo | None = Depends(get_current_identity_optional),
):
    """Identity of the current session, or null when there is none."""
    return identity
