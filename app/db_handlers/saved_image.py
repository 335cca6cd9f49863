from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.user import UserDBHandler
from app.exceptions import UnauthenticatedError
from app.models import SavedImage
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.saved_image")


class SavedImageDBHandler(BaseDBHandler[SavedImage]):
    def __init__(self):
        super().__init__(SavedImage)
        self.user_handler = UserDBHandler()

    async def list_for_user(self, user_id: int) -> list[SavedImage]:
        """Images owned by ``user_id``, newest first."""
        # id breaks ties between rows inserted within the same clock tick
        return await self.get_multi_by_attributes(
            user_id=user_id,
            order_by=[SavedImage.created_at.desc(), SavedImage.id.desc()],
        )

    @check_local_db
    async def create_for_user(
        self, user_id: int, url: str, style_id: str, *, db: AsyncSession = None
    ) -> SavedImage:
        """Insert an image row owned by ``user_id``; the owner must still exist."""
        if not await self.user_handler.exists(user_id, db=db):
            raise UnauthenticatedError("User no longer exists")
        return await self.create(
            {"user_id": user_id, "url": url, "style_id": style_id}, db=db
        )

    @check_local_db
    async def delete_for_user(
        self, image_id: int, user_id: int, *, db: AsyncSession = None
    ) -> bool:
        """
        Delete ``image_id`` only if ``user_id`` owns it.

        Returns whether a row was removed; callers treat both outcomes as success.
        """
        stmt = delete(SavedImage).where(
            SavedImage.id == image_id, SavedImage.user_id == user_id
        )
        result = await db.execute(stmt)
        deleted = result.rowcount > 0
        if not deleted:
            logger.debug(
                f"Image id={image_id} not found for user id={user_id}; nothing deleted"
            )
        return deleted
