from backend.models.board import Direction, PuzzleConfig
from backend.models.resources import (
    TileBackground,
    has_any,
    list_backgrounds,
    normalize_background,
    sanitize_backgrounds,
)

__all__ = [
    "Direction",
    "PuzzleConfig",
    "TileBackground",
    "has_any",
    "list_backgrounds",
    "normalize_background",
    "sanitize_backgrounds",
]
