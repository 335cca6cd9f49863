from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class Preferences(Base):
    """
    Per-user generation preferences. The primary key is the owning user's id,
    so a user can never have more than one row.
    """

    __tablename__ = "preferences"

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Owning user",
    )

    default_style = Column(
        String(64),
        nullable=False,
        default="cinematic-hero",
        server_default="cinematic-hero",
        comment="Catalog style id selected by default",
    )

    auto_save = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
        comment="Persist every successful generation automatically",
    )

    user = relationship("User", back_populates="preferences")

    def __repr__(self):
        return (
            f"<Preferences(user_id={self.user_id}, default_style='{self.default_style}', "
            f"auto_save={self.auto_save})>"
        )
