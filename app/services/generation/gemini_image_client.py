import time

from google import genai
from google.genai import types

from app.config import settings
from app.exceptions import GenerationFailure
from app.services.generation.image_generator import (
    ImageGenerator,
    parse_data_url,
    to_data_url,
)
from app.utils.logger import setup_logger

logger = setup_logger("gemini_image_client")


class GeminiImageClient(ImageGenerator):
    """
    Image generator backed by a Gemini image model.
    """

    def __init__(
        self, api_key: str | None = None, model: str = settings.gemini_image_model
    ):
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            logger.error("Gemini API key is required but not provided")
            raise ValueError("Gemini API key is required.")

        self.model = model

        try:
            self._client = genai.Client(api_key=api_key)
            logger.info(
                f"Gemini image client initialized with api_key: {api_key[:5]}..., model: {self.model}"
            )
        except Exception as e:
            logger.error(f"Failed to configure Gemini SDK: {e}", exc_info=True)
            raise

    async def generate_variation(self, source_image: str, prompt: str) -> str:
        mime_type, image_bytes = parse_data_url(source_image)

        start_time = time.perf_counter()
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    prompt,
                ],
            )
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Gemini API error during image generation for model {self.model} after {duration:.4f}s: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - start_time

        for candidate in response.candidates or []:
            if not candidate.content or not candidate.content.parts:
                logger.debug(
                    f"Skipping empty candidate, finish_reason: {getattr(candidate, 'finish_reason', None)}"
                )
                continue
            for part in candidate.content.parts:
                if part.inline_data and part.inline_data.data:
                    logger.info(
                        f"Gemini image generated with model {self.model} in {duration:.4f}s, "
                        f"input: {len(image_bytes)} bytes, output: {len(part.inline_data.data)} bytes"
                    )
                    return to_data_url(
                        part.inline_data.data, part.inline_data.mime_type or "image/png"
                    )

        if getattr(response, "prompt_feedback", None):
            logger.warning(f"Gemini prompt_feedback: {response.prompt_feedback}")
        logger.error(f"Gemini returned no image part after {duration:.4f}s")
        raise GenerationFailure("No image generated")
