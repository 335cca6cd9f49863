"""
User model for authentication and gallery ownership.

Architecture:
    User → Preferences (exactly one)
    User → SavedImage (zero or more)

A user and its preferences row are always written in the same transaction;
see ``UserDBHandler.create_with_preferences``.
"""

from sqlalchemy import Column, Index, String
from sqlalchemy.orm import relationship

from app.models.base import Base, CreatedAtMixin, IntegerIDMixin


class User(Base, IntegerIDMixin, CreatedAtMixin):
    """
    Registered account. Owns one preferences row and any number of saved images.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_username", "username", unique=True),)

    username = Column(
        String(50),
        nullable=False,
        comment="Unique username for user identification and login",
    )

    hashed_password = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    preferences = relationship(
        "Preferences",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        doc="Generation preferences of this user",
    )

    images = relationship(
        "SavedImage",
        back_populates="owner",
        cascade="all, delete-orphan",
        doc="Images saved to this user's gallery",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
