"""Prompt building and image generation utilities."""

from .image_gen import ImageGenerationError, ImageGenerationService, NoImageGeneratedError
from .prompt_builder import ImagePromptBuilder

__all__ = [
    "ImageGenerationError",
    "ImageGenerationService",
    "ImagePromptBuilder",
    "NoImageGeneratedError",
]
