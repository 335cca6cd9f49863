"""
Account view-state and the save side effects of a generation run.

The coordinator mirrors what the signed-in user sees: who they are, their
preferences and their gallery. After any save it reloads the whole gallery
from the server instead of appending locally, so the list always matches the
store even when other sessions of the same user save concurrently. When two
refreshes race, the last one to finish wins, which is fine because both are
authoritative snapshots.
"""

import asyncio

from app.exceptions import UnauthenticatedError
from app.schemas import PreferencesPayload, SavedImageInfo, UserInfo
from app.services.generation.api_client import GalleryAPI
from app.utils.logger import setup_logger

logger = setup_logger("generation.auto_save")


class AutoSaveCoordinator:
    def __init__(self, gallery_api: GalleryAPI):
        self.gallery_api = gallery_api
        self.user: UserInfo | None = None
        self.preferences: PreferencesPayload | None = None
        self.saved_images: list[SavedImageInfo] = []

    @property
    def is_signed_in(self) -> bool:
        return self.user is not None

    @property
    def auto_save_enabled(self) -> bool:
        return self.is_signed_in and bool(self.preferences and self.preferences.auto_save)

    async def load(self) -> UserInfo | None:
        """Restore an existing session and its preferences and gallery."""
        self.user = await self.gallery_api.get_me()
        if self.user:
            await self._load_account()
        return self.user

    async def sign_in(self, username: str, password: str) -> UserInfo:
        self.user = await self.gallery_api.login(username, password)
        await self._load_account()
        return self.user

    async def sign_up(self, username: str, password: str) -> UserInfo:
        self.user = await self.gallery_api.register(username, password)
        await self._load_account()
        return self.user

    async def sign_out(self) -> None:
        await self.gallery_api.logout()
        self.user = None
        self.preferences = None
        self.saved_images = []

    async def _load_account(self) -> None:
        self.preferences, self.saved_images = await asyncio.gather(
            self.gallery_api.get_preferences(),
            self.gallery_api.get_images(),
        )

    async def update_preferences(self, **changes) -> PreferencesPayload:
        """
        Change some preference fields and send the complete record.

        The server only accepts full replacement, so the changed fields are
        merged onto the current preferences first.
        """
        if self.preferences is None:
            raise UnauthenticatedError("Sign in to change preferences")
        updated = self.preferences.model_copy(update=changes)
        updated = PreferencesPayload.model_validate(updated.model_dump())
        self.preferences = updated
        await self.gallery_api.update_preferences(updated)
        return updated

    async def refresh_gallery(self) -> list[SavedImageInfo]:
        self.saved_images = await self.gallery_api.get_images()
        return self.saved_images

    async def save(self, result: str, style_id: str) -> bool:
        """
        Persist a result on explicit request, then reload the gallery.

        Raises:
            UnauthenticatedError: Nobody is signed in.
        """
        if not self.is_signed_in:
            raise UnauthenticatedError("Sign in to save images")
        await self.gallery_api.save_image(result, style_id)
        await self.refresh_gallery()
        return True

    async def on_task_success(self, style_id: str, result: str) -> bool:
        """
        React to a task reaching success. Returns whether the result was saved.

        Saves only for a signed-in user with auto-save on. Failures are logged
        and reported as not saved; they never affect the task's success.
        """
        if not self.auto_save_enabled:
            return False
        try:
            await self.gallery_api.save_image(result, style_id)
            await self.refresh_gallery()
        except Exception as e:
            logger.error(f"Auto-save failed for style '{style_id}': {e}", exc_info=False)
            return False
        logger.info(f"Auto-saved result for style '{style_id}'")
        return True

    async def delete_saved(self, image_id: int) -> None:
        await self.gallery_api.delete_image(image_id)
        self.saved_images = [image for image in self.saved_images if image.id != image_id]
