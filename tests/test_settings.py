"""Tests for settings loading and the startup check."""

from __future__ import annotations

import pytest

from stylist.api.main import create_app
from stylist.config.settings import ConfigurationError, Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    monkeypatch.setenv("STYLIST_PROVIDER", "Gemini")
    monkeypatch.setenv("STYLIST_SEARCH_GROUNDING", "false")
    monkeypatch.setenv("STYLIST_REQUEST_TIMEOUT", "30")
    monkeypatch.setenv("PORT", "8080")

    settings = get_settings()

    assert settings.gemini_api_key == "from-env"
    assert settings.provider == "gemini"
    assert settings.search_grounding is False
    assert settings.request_timeout == 30.0
    assert settings.port == 8080
    assert settings.max_body_bytes == 50 * 1024 * 1024


def test_missing_key_fails_validation() -> None:
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        Settings().validate()


def test_aitunnel_requires_its_own_key() -> None:
    with pytest.raises(ConfigurationError, match="AITUNNEL_API_KEY"):
        Settings(provider="aitunnel", gemini_api_key="unused").validate()


def test_unknown_provider_fails_validation() -> None:
    with pytest.raises(ConfigurationError, match="Unknown provider"):
        Settings(provider="mystery", gemini_api_key="k").validate()


def test_gateway_refuses_to_start_without_key(provider) -> None:
    with pytest.raises(ConfigurationError):
        create_app(Settings(), provider)
