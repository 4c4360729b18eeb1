"""Best-effort parsing of JSON emitted by a language model."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

FENCED_JSON_PATTERN = re.compile(r"```json([\s\S]*?)```")


class ParseStatus(str, Enum):
    """Distinguishes a usable payload from missing or malformed output."""

    OK = "ok"
    EMPTY = "empty"
    MALFORMED = "malformed"


@dataclass(slots=True, frozen=True)
class ParseOutcome:
    status: ParseStatus
    payload: dict[str, Any] | None = None
    recovered_from_fence: bool = False

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK


def _load_object(text: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def parse_model_json(text: str | None) -> ParseOutcome:
    """
    Parse ``text`` as a JSON object.

    Direct parsing is tried first; if it fails, the first ```` ```json ```` fenced
    block is extracted and parsed instead. Never raises.
    """

    if text is None or not text.strip():
        return ParseOutcome(ParseStatus.EMPTY)

    payload = _load_object(text)
    if payload is not None:
        return ParseOutcome(ParseStatus.OK, payload)

    match = FENCED_JSON_PATTERN.search(text)
    if match:
        payload = _load_object(match.group(1))
        if payload is not None:
            return ParseOutcome(ParseStatus.OK, payload, recovered_from_fence=True)

    return ParseOutcome(ParseStatus.MALFORMED)
