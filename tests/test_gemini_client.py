"""Tests for the google-genai backed provider."""

from __future__ import annotations

import pytest
import pytest_mock
from google.genai import errors as genai_errors
from google.genai import types

from stylist.config.settings import Settings
from stylist.nlp.prompt_builder import InlineImage
from stylist.providers.base import ProviderRequestError
from stylist.providers.gemini_client import GeminiClient


def _response(*parts: types.Part) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))],
    )


@pytest.fixture
def genai_client(mocker: pytest_mock.MockerFixture):
    client = mocker.MagicMock()
    client.aio.models.generate_content = mocker.AsyncMock(
        return_value=_response(types.Part(text='{"outfitName": "Look"}')),
    )
    return client


def test_outfit_contents_carry_stripped_inline_image(settings: Settings, genai_client) -> None:
    gemini = GeminiClient(settings, client=genai_client)
    image = InlineImage.from_data_uri("data:image/jpeg;base64,AAAA")

    contents = gemini.build_outfit_contents("prompt", image)

    parts = contents[0].parts
    assert parts[0].text == "prompt"
    assert parts[1].inline_data.mime_type == "image/jpeg"
    assert parts[1].inline_data.data == b"\x00\x00\x00"


def test_outfit_config_requests_json_with_search(settings: Settings, genai_client) -> None:
    config = GeminiClient(settings, client=genai_client).build_outfit_config()

    assert config.response_mime_type == "application/json"
    assert config.tools[0].google_search is not None


def test_search_can_be_disabled(genai_client) -> None:
    settings = Settings(gemini_api_key="k", search_grounding=False)

    config = GeminiClient(settings, client=genai_client).build_outfit_config()

    assert not config.tools


@pytest.mark.asyncio
async def test_generate_outfit_returns_text(settings: Settings, genai_client) -> None:
    gemini = GeminiClient(settings, client=genai_client)

    reply = await gemini.generate_outfit("prompt")

    assert reply.text == '{"outfitName": "Look"}'
    genai_client.aio.models.generate_content.assert_awaited_once()
    kwargs = genai_client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == settings.gemini_outfit_model


@pytest.mark.asyncio
async def test_generate_image_keeps_part_order(settings: Settings, genai_client) -> None:
    genai_client.aio.models.generate_content.return_value = _response(
        types.Part(text="Here it is"),
        types.Part(inline_data=types.Blob(data=b"png", mime_type="image/png")),
    )
    gemini = GeminiClient(settings, client=genai_client)

    reply = await gemini.generate_image("draw")

    assert [part.text for part in reply.parts] == ["Here it is", None]
    assert reply.parts[1].inline_data == b"png"
    kwargs = genai_client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == settings.gemini_image_model
    assert types.Modality.IMAGE in kwargs["config"].response_modalities


@pytest.mark.asyncio
async def test_api_errors_become_provider_errors(settings: Settings, genai_client) -> None:
    genai_client.aio.models.generate_content.side_effect = genai_errors.ServerError(
        503,
        {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}},
    )
    gemini = GeminiClient(settings, client=genai_client)

    with pytest.raises(ProviderRequestError) as excinfo:
        await gemini.generate_outfit("prompt")

    assert excinfo.value.status_code == 503


def test_response_without_candidates_is_empty() -> None:
    reply = GeminiClient.to_reply(types.GenerateContentResponse(candidates=[]))

    assert reply.text is None
    assert list(reply.parts) == []
