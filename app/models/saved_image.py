from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, CreatedAtMixin, IntegerIDMixin


class SavedImage(Base, IntegerIDMixin, CreatedAtMixin):
    """
    A generation result kept in a user's gallery.

    ``url`` holds either a ``data:`` URL with the encoded image or a remote
    URL. The same style may be saved any number of times.
    """

    __tablename__ = "images"
    __table_args__ = (Index("ix_images_user_id_created_at", "user_id", "created_at"),)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user",
    )

    url = Column(Text, nullable=False, comment="Image data URL or remote URL")

    style_id = Column(
        String(64), nullable=False, comment="Catalog style used to generate the image"
    )

    owner = relationship("User", back_populates="images")

    def __repr__(self):
        return f"<SavedImage(id={self.id}, user_id={self.user_id}, style_id='{self.style_id}')>"
