from __future__ import annotations

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import Preferences
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.preferences")


class PreferencesDBHandler(BaseDBHandler[Preferences]):
    def __init__(self):
        super().__init__(Preferences)

    @check_local_db
    async def get_for_user(
        self, user_id: int, *, db: AsyncSession = None
    ) -> Preferences | None:
        """Get the preferences row owned by ``user_id``."""
        return await db.get(Preferences, user_id)

    @check_local_db
    async def replace_for_user(
        self,
        user_id: int,
        default_style: str,
        auto_save: bool,
        *,
        db: AsyncSession = None,
    ) -> bool:
        """
        Overwrite both preference fields of ``user_id``.

        Returns False when the user has no preferences row, which only happens
        once the user itself is gone.
        """
        stmt = (
            update(Preferences)
            .where(Preferences.user_id == user_id)
            .values(default_style=default_style, auto_save=auto_save)
        )
        result = await db.execute(stmt)
        if result.rowcount == 0:
            logger.warning(f"No preferences row for user id={user_id}")
            return False
        return True
