"""
Database models for Persona Morph accounts and galleries.

Architecture: User → Preferences, User → SavedImage.
"""

from app.models.preferences import Preferences
from app.models.saved_image import SavedImage
from app.models.user import User

__all__ = [
    "User",
    "Preferences",
    "SavedImage",
]
