"""Provider-neutral types for talking to a generative model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from stylist.nlp.prompt_builder import InlineImage


class ProviderRequestError(RuntimeError):
    """Raised when the model provider fails (network, auth, quota, server error)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


@dataclass(slots=True)
class ProviderPart:
    """One content part of a model reply."""

    text: str | None = None
    inline_data: bytes | None = None
    mime_type: str | None = None


@dataclass(slots=True)
class ProviderReply:
    """Normalised model reply: concatenated text plus the ordered parts."""

    text: str | None = None
    parts: Sequence[ProviderPart] = field(default_factory=list)


class StylistProvider(Protocol):
    """Operations the gateway needs from a generative model backend."""

    async def generate_outfit(self, prompt: str, image: InlineImage | None = None) -> ProviderReply:
        """Request a JSON outfit recommendation, optionally grounded on a reference image."""

    async def generate_image(self, prompt: str) -> ProviderReply:
        """Request an image rendering of ``prompt``."""

    async def ping(self) -> bool:
        """Return ``True`` when the provider answers a lightweight call."""

    async def close(self) -> None:
        """Release HTTP resources."""
