"""Solvability of sliding puzzle layouts."""

from __future__ import annotations

from typing import Sequence


class Parity:
    """Stateless parity checks — all methods are static."""

    @staticmethod
    def count_inversions(tiles: Sequence[int]) -> int:
        """Count out-of-order pairs among the non-blank tiles."""
        flat = [v for v in tiles if v != 0]
        inversions = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    inversions += 1
        return inversions

    @staticmethod
    def is_solvable(tiles: Sequence[int], width: int, height: int) -> bool:
        """Return True if *tiles* can reach the goal state.

        With an odd width the inversion count alone decides. With an even
        width the blank's row, counted from the bottom starting at 1, flips
        the required parity.
        """
        inversions = Parity.count_inversions(tiles)
        if width % 2 == 1:
            return inversions % 2 == 0

        row_from_bottom = height - list(tiles).index(0) // width
        if row_from_bottom % 2 == 0:
            return inversions % 2 == 1
        return inversions % 2 == 0
