"""Puzzle configuration model for the sliding puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

MIN_SIZE = 2
MAX_SIZE = 8
DEFAULT_WIDTH = 4
DEFAULT_HEIGHT = 4


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class PuzzleConfig:
    """A rectangular board as it travels through a shared link.

    Tiles are stored as a flat row-major list of ints. 0 represents the
    blank space. ``backgrounds`` is either ``None`` or one entry per cell.
    """

    width: int
    height: int
    tiles: list[int]
    backgrounds: list[str] | None = field(default=None)

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_rows(
        cls, rows: list[list[int]], backgrounds: list[str] | None = None
    ) -> PuzzleConfig:
        """Create a config from a list of rows.

        Example::

            PuzzleConfig.from_rows([[1, 2, 3], [4, 5, 0]])
        """
        height = len(rows)
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length.")
        flat = [v for row in rows for v in row]
        return cls(width=width, height=height, tiles=flat, backgrounds=backgrounds)

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def blank_index(self) -> int:
        return self.tiles.index(0)

    def rows(self) -> list[list[int]]:
        return [
            self.tiles[r * self.width : (r + 1) * self.width]
            for r in range(self.height)
        ]

    def background_at(self, index: int) -> str:
        if self.backgrounds is None:
            return ""
        return self.backgrounds[index]

    def is_tile_correct(self, index: int) -> bool:
        """Check if the tile at *index* sits in its goal position."""
        val = self.tiles[index]
        if val == 0:
            return index == self.size - 1
        return val == index + 1

    def copy(self) -> PuzzleConfig:
        return PuzzleConfig(
            width=self.width,
            height=self.height,
            tiles=self.tiles[:],
            backgrounds=self.backgrounds[:] if self.backgrounds is not None else None,
        )
