"""Async wrapper around the Gemini API via google-genai."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from stylist.config.settings import Settings
from stylist.nlp.prompt_builder import InlineImage
from stylist.providers.base import ProviderPart, ProviderReply, ProviderRequestError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Calls Gemini for outfit recommendations and preview images."""

    def __init__(self, settings: Settings, client: genai.Client | None = None) -> None:
        self._settings = settings
        if client is None:
            http_options = None
            if settings.request_timeout is not None:
                http_options = types.HttpOptions(timeout=int(settings.request_timeout * 1000))
            client = genai.Client(api_key=settings.gemini_api_key, http_options=http_options)
        self._client = client

    def build_outfit_contents(self, prompt: str, image: InlineImage | None = None) -> list[types.Content]:
        """Return the user turn: instruction text followed by the optional inline image."""

        parts = [types.Part.from_text(text=prompt)]
        if image is not None:
            parts.append(
                types.Part(inline_data=types.Blob(data=image.to_bytes(), mime_type=image.mime_type)),
            )
        return [types.Content(role="user", parts=parts)]

    def build_outfit_config(self) -> types.GenerateContentConfig:
        tools = None
        if self._settings.search_grounding:
            tools = [types.Tool(google_search=types.GoogleSearch())]
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            tools=tools,
        )

    async def generate_outfit(self, prompt: str, image: InlineImage | None = None) -> ProviderReply:
        """Request a JSON outfit recommendation."""

        contents = self.build_outfit_contents(prompt, image)
        response = await self._generate(
            self._settings.gemini_outfit_model,
            contents,
            self.build_outfit_config(),
        )
        return self.to_reply(response)

    async def generate_image(self, prompt: str) -> ProviderReply:
        """Request an image; the reply may mix text and inline image parts."""

        config = types.GenerateContentConfig(
            response_modalities=[types.Modality.TEXT, types.Modality.IMAGE],
        )
        contents = [types.Content(role="user", parts=[types.Part.from_text(text=prompt)])]
        response = await self._generate(self._settings.gemini_image_model, contents, config)
        return self.to_reply(response)

    async def _generate(
        self,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> types.GenerateContentResponse:
        try:
            return await self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise ProviderRequestError(
                f"Gemini returned error {exc.code}: {exc.message}",
                status_code=exc.code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderRequestError(f"Gemini request failed: {exc}") from exc

    @staticmethod
    def to_reply(response: Any) -> ProviderReply:
        """Flatten the first candidate's content parts in order."""

        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            logger.warning("Gemini response has no candidates.")
            return ProviderReply()

        content = getattr(candidates[0], "content", None)
        raw_parts = getattr(content, "parts", None) or []

        parts: list[ProviderPart] = []
        texts: list[str] = []
        for raw in raw_parts:
            inline = getattr(raw, "inline_data", None)
            if inline is not None and getattr(inline, "data", None):
                parts.append(ProviderPart(inline_data=inline.data, mime_type=inline.mime_type))
                continue
            text = getattr(raw, "text", None)
            if text is None:
                continue
            parts.append(ProviderPart(text=text))
            if not getattr(raw, "thought", False):
                texts.append(text)

        return ProviderReply(text="".join(texts) if texts else None, parts=parts)

    async def ping(self) -> bool:
        """Return ``True`` when the model listing call yields at least one model."""

        pager = await self._client.aio.models.list(config={"page_size": 1})
        async for _ in pager:
            return True
        return False

    async def close(self) -> None:
        await self._client.aio.aclose()
