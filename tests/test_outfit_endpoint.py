"""Tests for POST /api/generate-outfit."""

import json

from fastapi.testclient import TestClient

from stylist.api.main import create_app
from stylist.config.settings import Settings
from stylist.nlp.prompt_builder import REFERENCE_IMAGE_INSTRUCTION
from stylist.providers.base import ProviderReply, ProviderRequestError


def test_occasion_only_request_returns_outfit(client: TestClient, provider, sample_outfit: dict) -> None:
    response = client.post("/api/generate-outfit", json={"occasion": "Party"})

    assert response.status_code == 200
    assert response.json() == sample_outfit
    prompt, image = provider.outfit_calls[0]
    assert "- Location: Unknown" in prompt
    assert "- Fabric/Texture: Any" in prompt
    assert image is None


def test_provider_json_is_passed_through_unchanged(client: TestClient, provider) -> None:
    payload = {"outfitName": "Odd", "extraField": {"nested": [1, 2]}, "items": []}
    provider.outfit_reply = ProviderReply(text=json.dumps(payload))

    response = client.post("/api/generate-outfit", json={"occasion": "Casual"})

    assert response.json() == payload


def test_fenced_json_is_recovered(client: TestClient, provider, sample_outfit: dict) -> None:
    provider.outfit_reply = ProviderReply(text=f"```json\n{json.dumps(sample_outfit)}\n```")

    response = client.post("/api/generate-outfit", json={"occasion": "Office", "style": "Classic"})

    assert response.status_code == 200
    assert response.json() == sample_outfit


def test_unparseable_output_returns_500(client: TestClient, provider) -> None:
    provider.outfit_reply = ProviderReply(text="I think you should wear a hat.")

    response = client.post("/api/generate-outfit", json={"occasion": "Vacation"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate outfit"}


def test_empty_output_returns_500(client: TestClient, provider) -> None:
    provider.outfit_reply = ProviderReply(text=None)

    response = client.post("/api/generate-outfit", json={"occasion": "Vacation"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate outfit"}


def test_provider_failure_returns_500(client: TestClient, provider) -> None:
    provider.outfit_error = ProviderRequestError("quota exceeded", status_code=429)

    response = client.post("/api/generate-outfit", json={"occasion": "Active"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate outfit"}
    assert len(provider.outfit_calls) == 1


def test_data_uri_prefix_is_stripped_before_forwarding(client: TestClient, provider) -> None:
    response = client.post(
        "/api/generate-outfit",
        json={"occasion": "Party", "image": "data:image/jpeg;base64,AAAA"},
    )

    assert response.status_code == 200
    prompt, image = provider.outfit_calls[0]
    assert image is not None
    assert image.data == "AAAA"
    assert image.mime_type == "image/jpeg"
    assert prompt.endswith(REFERENCE_IMAGE_INSTRUCTION)


def test_camel_case_fields_reach_prompt(client: TestClient, provider) -> None:
    client.post("/api/generate-outfit", json={"occasion": "Party", "bodyType": "Curvy", "image": None})

    prompt, _ = provider.outfit_calls[0]
    assert "- Body Type: Curvy" in prompt


def test_oversized_body_is_rejected(provider) -> None:
    settings = Settings(gemini_api_key="k", log_level="WARNING", max_body_bytes=128)
    client = TestClient(create_app(settings, provider))

    response = client.post("/api/generate-outfit", json={"occasion": "Party", "image": "A" * 512})

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}
    assert provider.outfit_calls == []


def test_unexpected_provider_exception_returns_json_500(client: TestClient, provider) -> None:
    provider.outfit_error = TimeoutError()

    response = client.post("/api/generate-outfit", json={"occasion": "Active"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate outfit"}


def test_null_optional_fields_fall_back_to_defaults(client: TestClient, provider) -> None:
    response = client.post(
        "/api/generate-outfit",
        json={"occasion": "Party", "fabric": None, "location": None, "image": None},
    )

    assert response.status_code == 200
    prompt, image = provider.outfit_calls[0]
    assert "- Fabric/Texture: Any" in prompt
    assert "- Location: Unknown" in prompt
    assert image is None
