"""
Client side of the account and gallery HTTP API.

``GalleryAPI`` is what the auto-save coordinator depends on;
``PersonaMorphAPIClient`` implements it over HTTP with ``httpx``. The session
cookie set by login/registration is kept in the client's cookie jar and sent
back on every call.
"""

from abc import ABC, abstractmethod

import httpx

from app.exceptions import (
    DuplicateIdentityError,
    InvalidCredentialsError,
    StorageFailure,
    UnauthenticatedError,
)
from app.schemas import PreferencesPayload, SavedImageInfo, UserInfo
from app.utils.logger import setup_logger

logger = setup_logger("api_client")


class GalleryAPI(ABC):
    """Account, preference and gallery operations used by the generation client."""

    @abstractmethod
    async def get_me(self) -> UserInfo | None:
        """Identity of the current session, None when signed out."""

    @abstractmethod
    async def register(self, username: str, password: str) -> UserInfo:
        """Create an account and sign in."""

    @abstractmethod
    async def login(self, username: str, password: str) -> UserInfo:
        """Sign in."""

    @abstractmethod
    async def logout(self) -> None:
        """Sign out."""

    @abstractmethod
    async def get_preferences(self) -> PreferencesPayload:
        """Preferences of the signed-in user."""

    @abstractmethod
    async def update_preferences(self, preferences: PreferencesPayload) -> None:
        """Replace the preferences of the signed-in user."""

    @abstractmethod
    async def get_images(self) -> list[SavedImageInfo]:
        """Saved images of the signed-in user, newest first."""

    @abstractmethod
    async def save_image(self, url: str, style_id: str) -> None:
        """Add an image to the signed-in user's gallery."""

    @abstractmethod
    async def delete_image(self, image_id: int) -> None:
        """Remove an image from the signed-in user's gallery."""


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


class PersonaMorphAPIClient(GalleryAPI):
    def __init__(
        self,
        base_url: str = "https://localhost:3000",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        require_https: bool = True,
    ):
        server_url = http_client.base_url if http_client else httpx.URL(base_url)
        # The cookie jar never sends a Secure session cookie over plain http
        if require_https and server_url.scheme != "https":
            raise ValueError(
                f"Server URL {server_url} is not https; the session "
                "cookie is Secure and would never be sent back. Use an https URL, "
                "or pass require_https=False against a server running with "
                "SESSION_COOKIE_SECURE=false."
            )
        self.http_client = (
            http_client
            if http_client
            else httpx.AsyncClient(base_url=base_url, timeout=timeout)
        )

    async def __aenter__(self) -> "PersonaMorphAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self.http_client.request(method, path, **kwargs)
        if response.is_success:
            return response

        detail = _error_detail(response)
        logger.debug(f"{method} {path} failed with {response.status_code}: {detail}")
        if response.status_code == 401:
            raise UnauthenticatedError(detail)
        if response.status_code >= 500:
            raise StorageFailure(detail)
        response.raise_for_status()
        return response

    async def get_me(self) -> UserInfo | None:
        response = await self._request("GET", "/api/auth/me")
        body = response.json()
        return UserInfo.model_validate(body) if body else None

    async def register(self, username: str, password: str) -> UserInfo:
        try:
            response = await self._request(
                "POST",
                "/api/auth/register",
                json={"username": username, "password": password},
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 400:
                raise DuplicateIdentityError(username) from e
            raise
        return UserInfo.model_validate(response.json())

    async def login(self, username: str, password: str) -> UserInfo:
        try:
            response = await self._request(
                "POST",
                "/api/auth/login",
                json={"username": username, "password": password},
            )
        except UnauthenticatedError as e:
            raise InvalidCredentialsError() from e
        return UserInfo.model_validate(response.json())

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
        # Some transports ignore the expiring Set-Cookie; forget it locally too
        self.http_client.cookies.clear()

    async def get_preferences(self) -> PreferencesPayload:
        response = await self._request("GET", "/api/user/preferences")
        return PreferencesPayload.model_validate(response.json())

    async def update_preferences(self, preferences: PreferencesPayload) -> None:
        await self._request(
            "POST", "/api/user/preferences", json=preferences.model_dump()
        )

    async def get_images(self) -> list[SavedImageInfo]:
        response = await self._request("GET", "/api/images")
        return [SavedImageInfo.model_validate(item) for item in response.json()]

    async def save_image(self, url: str, style_id: str) -> None:
        await self._request(
            "POST", "/api/images/save", json={"url": url, "style_id": style_id}
        )

    async def delete_image(self, image_id: int) -> None:
        await self._request("DELETE", f"/api/images/{image_id}")
