"""Outfit recommendation pipeline: prompt, single provider call, JSON repair."""

from __future__ import annotations

import logging
from typing import Any

from stylist.api.schemas import OutfitRequest
from stylist.nlp.json_repair import ParseStatus, parse_model_json
from stylist.nlp.prompt_builder import InvalidReferenceImageError, PromptBuilder
from stylist.providers.base import ProviderRequestError, StylistProvider

logger = logging.getLogger(__name__)


class OutfitGenerationError(RuntimeError):
    """Raised when no usable recommendation could be produced."""


class OutfitRecommendationService:
    """Coordinates prompt construction with the recommendation model."""

    def __init__(self, provider: StylistProvider, prompt_builder: PromptBuilder | None = None) -> None:
        self._provider = provider
        self._prompt_builder = prompt_builder or PromptBuilder()

    async def recommend(self, request: OutfitRequest) -> dict[str, Any]:
        """Return the model's outfit JSON exactly as parsed."""

        image = self._prompt_builder.reference_image(request)
        prompt = self._prompt_builder.build(request, with_image=image is not None)

        try:
            reply = await self._provider.generate_outfit(prompt, image)
        except ProviderRequestError as exc:
            logger.error("Outfit provider call failed: %s", exc)
            raise OutfitGenerationError("Failed to generate outfit") from exc
        except InvalidReferenceImageError as exc:
            logger.error("Rejected reference image: %s", exc)
            raise OutfitGenerationError("Failed to generate outfit") from exc
        except Exception as exc:
            logger.exception("Unexpected error from outfit provider.")
            raise OutfitGenerationError("Failed to generate outfit") from exc

        outcome = parse_model_json(reply.text)
        if outcome.status is ParseStatus.EMPTY:
            logger.error("Outfit model returned no text.")
            raise OutfitGenerationError("Failed to generate outfit")
        if outcome.status is ParseStatus.MALFORMED:
            logger.error("Failed to parse outfit JSON: %.500s", reply.text)
            raise OutfitGenerationError("Failed to generate outfit")

        if outcome.recovered_from_fence:
            logger.info("Recovered outfit JSON from a fenced code block.")
        return outcome.payload  # type: ignore[return-value]
