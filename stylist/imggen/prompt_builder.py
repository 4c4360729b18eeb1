"""Prompt construction for the outfit preview image."""

from __future__ import annotations

IMAGE_PROMPT_PREFIX = "Generate a high-quality, aesthetic fashion photography style image of: "


class ImagePromptBuilder:
    """Wraps an outfit description in the fixed photography instruction."""

    def build(self, description: str) -> str:
        return f"{IMAGE_PROMPT_PREFIX}{description.strip()}"
