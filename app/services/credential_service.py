"""
Credential Service - account registration, login and session token validation.

Sessions are stateless signed tokens: validating one never touches the
database, and logging out only drops the client's cookie. Operations that need
the user to still exist re-check that separately (see ``GalleryService``).
"""

from app.config import settings
from app.db_handlers import UserDBHandler
from app.exceptions import InvalidCredentialsError, UnauthenticatedError
from app.schemas import UserInfo
from app.utils.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from app.utils.logger import setup_logger

logger = setup_logger("credential_service")


class CredentialService:
    def __init__(self, user_db_handler: UserDBHandler | None = None):
        self.user_db_handler = user_db_handler or UserDBHandler()

    async def register(self, username: str, password: str) -> tuple[UserInfo, str]:
        """
        Create an account with default preferences and open a session for it.

        Raises:
            DuplicateIdentityError: The username is already taken.
        """
        hashed_password = get_password_hash(password)
        user = await self.user_db_handler.create_with_preferences(
            username, hashed_password, settings.default_style
        )
        identity = UserInfo(id=user.id, username=user.username)
        logger.info(f"Registered user id={identity.id} username='{identity.username}'")
        return identity, create_access_token(identity.id, identity.username)

    async def authenticate(self, username: str, password: str) -> tuple[UserInfo, str]:
        """
        Check a username/password pair and open a session.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
        """
        user = await self.user_db_handler.get_user_by_username(username)
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Rejected login attempt for username '{username}'")
            raise InvalidCredentialsError()

        identity = UserInfo(id=user.id, username=user.username)
        return identity, create_access_token(identity.id, identity.username)

    @staticmethod
    def validate_session(token: str | None) -> UserInfo:
        """
        Recover the identity carried by a session token.

        Raises:
            UnauthenticatedError: Missing, malformed, tampered or expired token.
        """
        if not token:
            raise UnauthenticatedError("Unauthorized")
        payload = decode_access_token(token)
        if payload is None:
            raise UnauthenticatedError("Invalid token")
        return UserInfo(id=payload["id"], username=payload["username"])
