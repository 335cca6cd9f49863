from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.exceptions import DuplicateIdentityError
from app.models import Preferences, User
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by username."""
        try:
            stmt = select(User).filter(User.username == username)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by username '{username}': {e}")
            raise

    @check_local_db
    async def exists(self, user_id: int, *, db: AsyncSession = None) -> bool:
        """Whether a user with this id is still present."""
        result = await db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    @check_local_db
    async def create_with_preferences(
        self,
        username: str,
        hashed_password: str,
        default_style: str,
        *,
        db: AsyncSession = None,
    ) -> User:
        """
        Insert a user and its default preferences row in one transaction.

        Raises DuplicateIdentityError when the username is taken; in that case
        nothing is written.
        """
        user = User(username=username, hashed_password=hashed_password)
        db.add(user)
        try:
            await db.flush()
        except IntegrityError as e:
            logger.info(f"Username '{username}' already registered: {e.orig}")
            raise DuplicateIdentityError(username) from e

        db.add(Preferences(user_id=user.id, default_style=default_style, auto_save=False))
        await db.flush()
        await db.refresh(user)
        logger.info(f"Created user id={user.id} username='{username}' with default preferences")
        return user
