"""Core gameplay rules — adjacency, moves, and the win condition."""

from __future__ import annotations

import time
from typing import Callable, NamedTuple, Sequence

from backend.engine.gamestate import GameState
from backend.models.board import Direction, PuzzleConfig


class MoveResult(NamedTuple):
    tiles: list[int]
    moved: bool


def is_adjacent(index_a: int, index_b: int, width: int) -> bool:
    """True if the two cells share an edge (no wrapping between rows)."""
    row_a, col_a = divmod(index_a, width)
    row_b, col_b = divmod(index_b, width)
    return abs(row_a - row_b) + abs(col_a - col_b) == 1


def apply_move(tiles: Sequence[int], target_index: int, width: int) -> MoveResult:
    """Slide the tile at *target_index* into the blank.

    Never mutates *tiles*. An off-board index or a tile that does not touch
    the blank leaves the board unchanged and reports ``moved=False``.
    """
    new_tiles = list(tiles)
    if not 0 <= target_index < len(new_tiles):
        return MoveResult(new_tiles, False)
    blank = new_tiles.index(0)
    if not is_adjacent(target_index, blank, width):
        return MoveResult(new_tiles, False)
    new_tiles[blank], new_tiles[target_index] = new_tiles[target_index], new_tiles[blank]
    return MoveResult(new_tiles, True)


def is_solved(tiles: Sequence[int]) -> bool:
    last = len(tiles) - 1
    for i in range(last):
        if tiles[i] != i + 1:
            return False
    return tiles[last] == 0


def target_for_direction(
    tiles: Sequence[int], width: int, height: int, direction: Direction
) -> int | None:
    """Index of the tile that slides in *direction*, or None at an edge.

    E.g. ``Direction.UP`` picks the tile **below** the blank.
    """
    br, bc = divmod(list(tiles).index(0), width)

    # The offset points to the tile that will slide into the blank.
    offsets = {
        Direction.UP: (1, 0),
        Direction.DOWN: (-1, 0),
        Direction.LEFT: (0, 1),
        Direction.RIGHT: (0, -1),
    }
    dr, dc = offsets[direction]
    tr, tc = br + dr, bc + dc

    if not (0 <= tr < height and 0 <= tc < width):
        return None
    return tr * width + tc


class GamePlay:
    """Orchestrates a single game session.

    ``state`` is replaced, never mutated, on every transition.
    """

    def __init__(
        self, puzzle: PuzzleConfig, clock: Callable[[], float] = time.time
    ) -> None:
        self.puzzle = puzzle.copy()
        self._clock = clock
        self.state = GameState.initial(self.puzzle.tiles)

    @property
    def width(self) -> int:
        return self.puzzle.width

    @property
    def height(self) -> int:
        return self.puzzle.height

    # -- movement -------------------------------------------------------------

    def move_tile(self, index: int) -> bool:
        """Move the tile at *index* into the adjacent blank.

        Returns True if the move was applied. Once the board has been
        solved by a move, further moves are ignored until ``restart``.
        """
        if self.state.stopped_at is not None:
            return False
        result = apply_move(self.state.tiles, index, self.width)
        if not result.moved:
            return False

        self.state = self.state.after_move(
            result.tiles, finished=is_solved(result.tiles), now=self._clock()
        )
        return True

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the blank."""
        target = target_for_direction(
            self.state.tiles, self.width, self.height, direction
        )
        if target is None:
            return False
        return self.move_tile(target)

    def restart(self) -> None:
        self.state = self.state.reset(self.puzzle.tiles)

    # -- queries --------------------------------------------------------------

    @property
    def is_solved(self) -> bool:
        return is_solved(self.state.tiles)

    @property
    def is_won(self) -> bool:
        """True once a move has brought the board to the goal state."""
        return self.state.stopped_at is not None

    @property
    def elapsed_time(self) -> float:
        return self.state.elapsed_time(self._clock())

    def board(self) -> PuzzleConfig:
        """Current tiles together with the puzzle's decorations."""
        return PuzzleConfig(
            width=self.width,
            height=self.height,
            tiles=list(self.state.tiles),
            backgrounds=self.puzzle.backgrounds[:] if self.puzzle.backgrounds else None,
        )
