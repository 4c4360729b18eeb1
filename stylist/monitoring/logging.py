"""Logging configuration module."""

from __future__ import annotations

import logging

from stylist.config.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logger according to project conventions."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # httpx emits one INFO line per outbound request.
    logging.getLogger("httpx").setLevel(logging.WARNING)
