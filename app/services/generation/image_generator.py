"""
Abstract interface for image generation services.

The generation capability is opaque to the rest of the application: it takes a
source image and a style prompt and either returns a new image or raises.
Images travel as ``data:`` URLs on both sides.
"""

import base64
import binascii
from abc import ABC, abstractmethod


class ImageGenerator(ABC):
    """
    Abstract Base Class for image-to-image generation providers.
    """

    @abstractmethod
    async def generate_variation(self, source_image: str, prompt: str) -> str:
        """
        Transform ``source_image`` according to ``prompt``.

        Args:
            source_image: Reference photo as a ``data:<mime>;base64,<payload>`` URL.
            prompt: Style prompt text.

        Returns:
            The generated image as a data URL.

        Raises:
            Exception: Any failure. Callers do not classify it further.
        """


def parse_data_url(data_url: str) -> tuple[str, bytes]:
    """Split a base64 data URL into ``(mime_type, raw_bytes)``."""
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Expected a base64 data URL")
    mime_type = header[len("data:") : -len(";base64")] or "application/octet-stream"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in data URL: {e}") from e


def to_data_url(data: bytes, mime_type: str = "image/png") -> str:
    """Encode raw image bytes as a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"
