"""Generative model providers."""

from __future__ import annotations

from stylist.config.settings import ConfigurationError, Settings

from .aitunnel_client import AITunnelClient
from .base import ProviderPart, ProviderReply, ProviderRequestError, StylistProvider
from .gemini_client import GeminiClient


def build_provider(settings: Settings) -> StylistProvider:
    """Instantiate the provider selected in ``settings``."""

    if settings.provider == "gemini":
        return GeminiClient(settings)
    if settings.provider == "aitunnel":
        return AITunnelClient(settings)
    raise ConfigurationError(f"Unknown provider {settings.provider!r}.")


__all__ = [
    "AITunnelClient",
    "GeminiClient",
    "ProviderPart",
    "ProviderReply",
    "ProviderRequestError",
    "StylistProvider",
    "build_provider",
]
