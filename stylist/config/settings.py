"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

SUPPORTED_PROVIDERS = ("gemini", "aitunnel")


class ConfigurationError(RuntimeError):
    """Raised at startup when the settings cannot serve requests."""


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    provider: str = "gemini"

    gemini_api_key: str = ""
    gemini_outfit_model: str = "gemini-3-pro-image-preview"
    gemini_image_model: str = "gemini-2.5-flash-image"

    aitunnel_api_key: str = ""
    aitunnel_base_url: str = "https://api.aitunnel.ru/v1"
    aitunnel_chat_model: str = "gemini-2.5-flash"
    aitunnel_image_model: str = "gemini-2.5-flash-image"

    search_grounding: bool = True
    request_timeout: float | None = None

    host: str = "0.0.0.0"
    port: int = 3000
    max_body_bytes: int = 50 * 1024 * 1024

    gateway_url: str = "http://localhost:3000"

    @property
    def api_key(self) -> str:
        """Key of the currently selected provider."""

        if self.provider == "aitunnel":
            return self.aitunnel_api_key
        return self.gemini_api_key

    def validate(self) -> None:
        """Fail fast when the selected provider cannot be reached with these settings."""

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unknown provider {self.provider!r}; expected one of {', '.join(SUPPORTED_PROVIDERS)}.",
            )
        if not self.api_key:
            variable = "AITUNNEL_API_KEY" if self.provider == "aitunnel" else "GEMINI_API_KEY"
            raise ConfigurationError(f"{variable} is not configured.")


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        provider=os.getenv("STYLIST_PROVIDER", "gemini").strip().lower(),
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_outfit_model=os.getenv("GEMINI_OUTFIT_MODEL", "gemini-3-pro-image-preview"),
        gemini_image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        aitunnel_api_key=os.getenv("AITUNNEL_API_KEY", ""),
        aitunnel_base_url=os.getenv("AITUNNEL_BASE_URL", "https://api.aitunnel.ru/v1"),
        aitunnel_chat_model=os.getenv("AITUNNEL_CHAT_MODEL", "gemini-2.5-flash"),
        aitunnel_image_model=os.getenv("AITUNNEL_IMAGE_MODEL", "gemini-2.5-flash-image"),
        search_grounding=_as_bool(os.getenv("STYLIST_SEARCH_GROUNDING", "true")),
        request_timeout=_as_optional_float(os.getenv("STYLIST_REQUEST_TIMEOUT")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        max_body_bytes=int(os.getenv("STYLIST_MAX_BODY_BYTES", str(50 * 1024 * 1024))),
        gateway_url=os.getenv("STYLIST_GATEWAY_URL", "http://localhost:3000"),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
