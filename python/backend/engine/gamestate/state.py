"""Immutable snapshot of a game in progress."""

from __future__ import annotations

import time
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class GameState:
    """Holds the current tiles, move counter, and timer stamps.

    The clock starts with the first move and stops on the move that
    finishes the board. Every transition returns a new ``GameState``.
    """

    tiles: tuple[int, ...]
    moves: int = 0
    started_at: float | None = None
    stopped_at: float | None = None

    @classmethod
    def initial(cls, tiles: list[int] | tuple[int, ...]) -> GameState:
        return cls(tiles=tuple(tiles))

    # -- time tracking --------------------------------------------------------

    def elapsed_time(self, now: float | None = None) -> float:
        if self.started_at is None:
            return 0.0
        end = self.stopped_at
        if end is None:
            end = time.time() if now is None else now
        return max(0.0, end - self.started_at)

    # -- transitions ----------------------------------------------------------

    def after_move(
        self,
        tiles: list[int] | tuple[int, ...],
        *,
        finished: bool = False,
        now: float | None = None,
    ) -> GameState:
        stamp = time.time() if now is None else now
        started_at = self.started_at if self.started_at is not None else stamp
        return replace(
            self,
            tiles=tuple(tiles),
            moves=self.moves + 1,
            started_at=started_at,
            stopped_at=stamp if finished else None,
        )

    def reset(self, tiles: list[int] | tuple[int, ...]) -> GameState:
        """Back to *tiles* with the counter and timer cleared."""
        return replace(
            self, tiles=tuple(tiles), moves=0, started_at=None, stopped_at=None
        )
