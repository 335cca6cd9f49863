"""
Session-scoped access to preferences and saved images.

Every operation takes the identity established by the Credential Service and
uses its id as the owner filter. Ids supplied by the client are only ever used
to pick a row among the caller's own rows, never to choose whose rows to touch.
"""

from app.db_handlers import (
    PreferencesDBHandler,
    SavedImageDBHandler,
)
from app.exceptions import UnauthenticatedError
from app.models import Preferences, SavedImage
from app.schemas import UserInfo
from app.utils.logger import setup_logger

logger = setup_logger("gallery_service")


class GalleryService:
    def __init__(
        self,
        preferences_db_handler: PreferencesDBHandler | None = None,
        saved_image_db_handler: SavedImageDBHandler | None = None,
    ):
        self.preferences_db_handler = preferences_db_handler or PreferencesDBHandler()
        self.saved_image_db_handler = saved_image_db_handler or SavedImageDBHandler()

    async def get_preferences(self, identity: UserInfo) -> Preferences:
        preferences = await self.preferences_db_handler.get_for_user(identity.id)
        if preferences is None:
            # Preferences live and die with their user
            logger.warning(
                f"Session for user id={identity.id} refers to a user that no longer exists"
            )
            raise UnauthenticatedError("User no longer exists")
        return preferences

    async def set_preferences(
        self, identity: UserInfo, default_style: str, auto_save: bool
    ) -> None:
        """Replace both preference fields of the caller."""
        replaced = await self.preferences_db_handler.replace_for_user(
            identity.id, default_style, auto_save
        )
        if not replaced:
            raise UnauthenticatedError("User no longer exists")
        logger.info(
            f"User id={identity.id} preferences set: default_style='{default_style}', auto_save={auto_save}"
        )

    async def list_images(self, identity: UserInfo) -> list[SavedImage]:
        return await self.saved_image_db_handler.list_for_user(identity.id)

    async def save_image(self, identity: UserInfo, url: str, style_id: str) -> SavedImage:
        image = await self.saved_image_db_handler.create_for_user(
            identity.id, url, style_id
        )
        logger.info(
            f"User id={identity.id} saved image id={image.id} (style '{style_id}')"
        )
        return image

    async def delete_image(self, identity: UserInfo, image_id: int) -> None:
        """Delete one of the caller's images. Unknown or foreign ids are ignored."""
        await self.saved_image_db_handler.delete_for_user(image_id, identity.id)
