"""
Authentication utilities with JWT session tokens and bcrypt password hashing.

- bcrypt with a per-password salt
- HS256 signed tokens carrying ``{id, username}``
- 7 day expiry by default (``ACCESS_TOKEN_EXPIRE_MINUTES``)
- UTC timezone consistency
"""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from app import config

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    pwd_bytes = plain_password.encode("utf-8")
    if len(pwd_bytes) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(pwd_bytes, hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def create_access_token(
    user_id: int, username: str, expires_delta: timedelta | None = None
) -> str:
    """Create a signed session token for the given user."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.settings.access_token_expire_minutes)
    to_encode = {
        "id": user_id,
        "username": username,
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(to_encode, config.settings.secret_key, algorithm=config.settings.token_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a session token. Returns None when it is unusable."""
    try:
        payload = jwt.decode(
            token, config.settings.secret_key, algorithms=[config.settings.token_algorithm]
        )
    except JWTError:
        return None

    # Signed by us but not shaped like one of our tokens
    if not isinstance(payload.get("id"), int) or not isinstance(
        payload.get("username"), str
    ):
        return None
    return payload
