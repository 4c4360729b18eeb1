"""Shared fixtures: settings and an in-memory model provider."""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi.testclient import TestClient

from stylist.api.main import create_app
from stylist.config.settings import Settings
from stylist.nlp.prompt_builder import InlineImage
from stylist.providers.base import ProviderPart, ProviderReply

SAMPLE_OUTFIT: dict[str, Any] = {
    "outfitName": "Midnight Chrome",
    "description": "A glossy silver slip dress under a cropped baby tee for a Y2K party look.",
    "items": [
        {
            "name": "Silver slip dress",
            "description": "Satin, bias cut, midi length",
            "priceRange": "$60 - $90",
            "searchQuery": "silver satin slip dress midi",
        },
    ],
    "stylingTips": ["Layer a baby tee over the dress", "Add tinted sunglasses"],
    "colorPalette": ["#C0C0C0", "#FF69B4"],
}


class FakeProvider:
    """Records calls and replays canned replies."""

    def __init__(self) -> None:
        self.outfit_reply = ProviderReply(text=json.dumps(SAMPLE_OUTFIT))
        self.image_reply = ProviderReply(
            parts=[ProviderPart(text="Here you go"), ProviderPart(inline_data=b"png-bytes", mime_type="image/png")],
        )
        self.outfit_error: Exception | None = None
        self.image_error: Exception | None = None
        self.outfit_calls: list[tuple[str, InlineImage | None]] = []
        self.image_calls: list[str] = []
        self.closed = False

    async def generate_outfit(self, prompt: str, image: InlineImage | None = None) -> ProviderReply:
        self.outfit_calls.append((prompt, image))
        if self.outfit_error is not None:
            raise self.outfit_error
        return self.outfit_reply

    async def generate_image(self, prompt: str) -> ProviderReply:
        self.image_calls.append(prompt)
        if self.image_error is not None:
            raise self.image_error
        return self.image_reply

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-gemini", log_level="WARNING")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(settings: Settings, provider: FakeProvider) -> TestClient:
    return TestClient(create_app(settings, provider))


@pytest.fixture
def sample_outfit() -> dict[str, Any]:
    return json.loads(json.dumps(SAMPLE_OUTFIT))
