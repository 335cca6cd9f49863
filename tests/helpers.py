"""Test doubles and helpers shared across test modules."""

import asyncio
from datetime import UTC, datetime

from fastapi.testclient import TestClient

from app.schemas import PreferencesPayload, SavedImageInfo, UserInfo
from app.services.generation.api_client import GalleryAPI
from app.services.generation.catalog import STYLES
from app.services.generation.image_generator import ImageGenerator

SOURCE_IMAGE = "data:image/jpeg;base64,c291cmNl"

_STYLE_BY_PROMPT = {style.prompt: style.id for style in STYLES}


def result_for(style_id: str) -> str:
    return f"data:image/png;base64,{style_id.encode().hex()}"


def register(client: TestClient, username: str, password: str = "secret123") -> dict:
    response = client.post(
        "/api/auth/register", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


class FakeImageGenerator(ImageGenerator):
    """Records call order and concurrency; fails for the configured styles."""

    def __init__(self, failing_styles: set[str] | None = None, delay: float = 0.01):
        self.failing_styles = failing_styles or set()
        self.delay = delay
        self.events: list[tuple[str, str]] = []
        self.active = 0
        self.max_active = 0

    async def generate_variation(self, source_image: str, prompt: str) -> str:
        style_id = _STYLE_BY_PROMPT[prompt]
        self.events.append(("start", style_id))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.active -= 1
            self.events.append(("end", style_id))
        if style_id in self.failing_styles:
            raise RuntimeError(f"simulated failure for {style_id}")
        return result_for(style_id)


class FakeGalleryAPI(GalleryAPI):
    """In-memory stand-in for the HTTP API of a single signed-in user."""

    def __init__(
        self,
        user: UserInfo | None = None,
        auto_save: bool = False,
        fail_saves: bool = False,
    ):
        self.user = user
        self.preferences = PreferencesPayload(
            default_style="cinematic-hero", auto_save=auto_save
        )
        self.fail_saves = fail_saves
        self.images: list[SavedImageInfo] = []
        self.get_images_calls = 0
        self._next_id = 1

    async def get_me(self) -> UserInfo | None:
        return self.user

    async def register(self, username: str, password: str) -> UserInfo:
        self.user = UserInfo(id=1, username=username)
        return self.user

    async def login(self, username: str, password: str) -> UserInfo:
        self.user = UserInfo(id=1, username=username)
        return self.user

    async def logout(self) -> None:
        self.user = None

    async def get_preferences(self) -> PreferencesPayload:
        return self.preferences

    async def update_preferences(self, preferences: PreferencesPayload) -> None:
        self.preferences = preferences

    async def get_images(self) -> list[SavedImageInfo]:
        self.get_images_calls += 1
        await asyncio.sleep(0)
        return list(reversed(self.images))

    async def save_image(self, url: str, style_id: str) -> None:
        await asyncio.sleep(0)
        if self.fail_saves:
            raise RuntimeError("store unavailable")
        self.images.append(
            SavedImageInfo(
                id=self._next_id,
                url=url,
                style_id=style_id,
                created_at=datetime.now(UTC),
            )
        )
        self._next_id += 1

    async def delete_image(self, image_id: int) -> None:
        self.images = [image for image in self.images if image.id != image_id]
