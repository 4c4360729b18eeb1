"""Async wrapper around the AITunnel OpenAI-compatible API."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Mapping

import openai
from openai import AsyncOpenAI

from stylist.config.settings import Settings
from stylist.nlp.prompt_builder import InlineImage
from stylist.providers.base import ProviderPart, ProviderReply, ProviderRequestError

logger = logging.getLogger(__name__)


class AITunnelClient:
    """Reaches Gemini models through the AITunnel chat completions proxy."""

    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        self._settings = settings
        if client is None:
            kwargs: dict[str, Any] = {
                "api_key": settings.aitunnel_api_key,
                "base_url": settings.aitunnel_base_url.rstrip("/"),
            }
            if settings.request_timeout is not None:
                kwargs["timeout"] = settings.request_timeout
            client = AsyncOpenAI(**kwargs)
        self._client = client

    @staticmethod
    def build_outfit_messages(prompt: str, image: InlineImage | None = None) -> list[dict[str, Any]]:
        if image is None:
            return [{"role": "user", "content": prompt}]
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image.as_data_uri()}},
                ],
            },
        ]

    async def generate_outfit(self, prompt: str, image: InlineImage | None = None) -> ProviderReply:
        """Request a JSON outfit recommendation through the chat completions endpoint."""

        if self._settings.search_grounding:
            logger.debug("Search grounding is not available through AITunnel; skipping.")
        payload = await self._chat(
            model=self._settings.aitunnel_chat_model,
            messages=self.build_outfit_messages(prompt, image),
            response_format={"type": "json_object"},
        )
        return self.payload_to_reply(payload)

    async def generate_image(self, prompt: str) -> ProviderReply:
        payload = await self._chat(
            model=self._settings.aitunnel_image_model,
            messages=[{"role": "user", "content": prompt}],
            extra_body={"modalities": ["image", "text"]},
        )
        return self.payload_to_reply(payload)

    async def _chat(self, **kwargs: Any) -> dict[str, Any]:
        try:
            completion = await self._client.chat.completions.create(**kwargs)
        except openai.APIStatusError as exc:
            raise ProviderRequestError(
                f"AITunnel returned error {exc.status_code}: {exc.message}",
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise ProviderRequestError(f"AITunnel request failed: {exc}") from exc
        return completion.model_dump()

    @staticmethod
    def payload_to_reply(payload: Mapping[str, Any]) -> ProviderReply:
        """Normalise a chat completions payload into ordered text and image parts."""

        choices = payload.get("choices") or []
        if not choices:
            logger.warning("AITunnel response has no choices.")
            return ProviderReply()
        message = choices[0].get("message") or {}

        parts: list[ProviderPart] = []
        content = message.get("content")
        if isinstance(content, str) and content:
            image_part = _data_url_to_part(content) if content.startswith("data:") else None
            parts.append(image_part or ProviderPart(text=content))
        elif isinstance(content, list):
            for entry in content:
                if not isinstance(entry, Mapping):
                    continue
                if entry.get("type") == "text" and entry.get("text"):
                    parts.append(ProviderPart(text=entry["text"]))
                elif entry.get("type") == "image_url":
                    image_part = _image_entry_to_part(entry)
                    if image_part is not None:
                        parts.append(image_part)

        for entry in message.get("images") or []:
            if isinstance(entry, Mapping):
                image_part = _image_entry_to_part(entry)
                if image_part is not None:
                    parts.append(image_part)

        texts = [part.text for part in parts if part.text]
        return ProviderReply(text="".join(texts) if texts else None, parts=parts)

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._client.models.list()
        return bool(models.data)

    async def close(self) -> None:
        await self._client.close()


def _image_entry_to_part(entry: Mapping[str, Any]) -> ProviderPart | None:
    image_info = entry.get("image_url") or {}
    url = image_info.get("url") if isinstance(image_info, Mapping) else None
    if not url:
        return None
    return _data_url_to_part(url)


def _data_url_to_part(url: str) -> ProviderPart | None:
    if not url.startswith("data:") or "," not in url:
        logger.warning("AITunnel returned a non-inline image reference; ignoring it.")
        return None
    header, encoded = url.split(",", 1)
    mime_type = header[len("data:"):].split(";", 1)[0] or None
    try:
        data = base64.b64decode(encoded)
    except (ValueError, binascii.Error):
        logger.warning("AITunnel returned an image with invalid base64 payload.")
        return None
    return ProviderPart(inline_data=data, mime_type=mime_type)
