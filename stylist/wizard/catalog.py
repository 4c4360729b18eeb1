"""Choices offered on the occasion and style steps."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Occasion:
    id: str
    label: str
    emoji: str
    tagline: str


OCCASIONS: tuple[Occasion, ...] = (
    Occasion("casual", "Casual", "☕", "Coffee runs & hangouts"),
    Occasion("office", "Office", "💼", "Professional & sharp"),
    Occasion("party", "Party", "🎉", "Night out & events"),
    Occasion("date", "Date Night", "🌹", "Romantic & stylish"),
    Occasion("vacation", "Vacation", "🌴", "Relaxed & breezy"),
    Occasion("gym", "Active", "💪", "Workout & sport"),
)

STYLES: tuple[str, ...] = (
    "Minimalist",
    "Streetwear",
    "Bohemian",
    "Classic",
    "Edgy",
    "Preppy",
    "Y2K",
    "Old Money",
    "Avant-Garde",
)


def find_occasion(value: str) -> Occasion | None:
    """Look up an occasion by id or label, case-insensitively."""

    needle = value.strip().lower()
    for occasion in OCCASIONS:
        if needle in (occasion.id, occasion.label.lower()):
            return occasion
    return None
