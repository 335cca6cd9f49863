"""
Common utilities package for the Persona Morph application.

Password hashing and session tokens, plus logging setup.
"""

from app.utils.auth import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from app.utils.logger import setup_logger

__all__ = [
    # Authentication utilities
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
    # Logging utilities
    "setup_logger",
]
