"""Outfit preview image generation service."""

from __future__ import annotations

import base64
import logging
from typing import Sequence

from stylist.imggen.prompt_builder import ImagePromptBuilder
from stylist.providers.base import ProviderPart, ProviderRequestError, StylistProvider

logger = logging.getLogger(__name__)

PREVIEW_MIME_TYPE = "image/png"


class ImageGenerationError(RuntimeError):
    """Raised when the provider call for the preview image fails."""


class NoImageGeneratedError(ImageGenerationError):
    """Raised when the provider answered but returned no inline image."""


def first_inline_image(parts: Sequence[ProviderPart]) -> bytes | None:
    """Return the payload of the first part carrying inline image data."""

    for part in parts:
        if part.inline_data:
            return part.inline_data
    return None


def to_data_uri(data: bytes, mime_type: str = PREVIEW_MIME_TYPE) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class ImageGenerationService:
    """Turns an outfit description into a preview image data URI."""

    def __init__(self, provider: StylistProvider, prompt_builder: ImagePromptBuilder | None = None) -> None:
        self._provider = provider
        self._prompt_builder = prompt_builder or ImagePromptBuilder()

    async def generate(self, description: str) -> str:
        """
        Generate a preview for ``description``.

        Returns a ``data:image/png;base64,...`` URI built from the first inline
        image part of the reply.
        """

        prompt = self._prompt_builder.build(description)
        try:
            reply = await self._provider.generate_image(prompt)
        except ProviderRequestError as exc:
            logger.error("Failed to generate preview image: %s", exc)
            raise ImageGenerationError("Failed to generate image") from exc
        except Exception as exc:
            logger.exception("Unexpected error from image provider.")
            raise ImageGenerationError("Failed to generate image") from exc

        image = first_inline_image(reply.parts)
        if image is None:
            logger.warning("Image model replied without inline image data (%d parts).", len(reply.parts))
            raise NoImageGeneratedError("No image generated")
        return to_data_uri(image)
