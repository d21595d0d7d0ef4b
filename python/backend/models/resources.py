"""Catalog of decorative tile backgrounds."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

BACKGROUND_FILES: tuple[str, ...] = (
    "cars.png",
    "cup.png",
    "ferris wheel.jpg",
    "gear.png",
    "queue.png",
    "roller.jpg",
    "roller_right.png",
)


@dataclass(frozen=True)
class TileBackground:
    id: str
    label: str


def _format_label(filename: str) -> str:
    """Turn ``"roller_right.png"`` into ``"Roller Right"``."""
    stem = re.sub(r"\.[^.]+$", "", filename)
    cleaned = re.sub(r"[_-]+", " ", stem)
    return " ".join(part[0].upper() + part[1:] for part in cleaned.split(" ") if part)


TILE_BACKGROUNDS: tuple[TileBackground, ...] = tuple(
    TileBackground(id=name, label=_format_label(name)) for name in BACKGROUND_FILES
)

_IDS = frozenset(BACKGROUND_FILES)


def list_backgrounds() -> tuple[TileBackground, ...]:
    return TILE_BACKGROUNDS


def background_label(identifier: str) -> str:
    for entry in TILE_BACKGROUNDS:
        if entry.id == identifier:
            return entry.label
    return ""


def normalize_background(value: Any) -> str:
    """Return *value* if it is a known background id, ``""`` otherwise."""
    if isinstance(value, str) and value in _IDS:
        return value
    return ""


def sanitize_backgrounds(values: Any, expected_length: int) -> list[str]:
    """Coerce *values* into exactly *expected_length* valid entries.

    A wrong type or a length mismatch discards the input entirely.
    """
    if not isinstance(values, (list, tuple)) or len(values) != expected_length:
        return ["" for _ in range(expected_length)]
    return [normalize_background(v) for v in values]


def has_any(values: Sequence[str] | None) -> bool:
    return bool(values) and any(bool(v) for v in values)
