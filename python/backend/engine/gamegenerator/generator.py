"""Builds and validates sliding puzzle layouts."""

from __future__ import annotations

import random
import re
from typing import Sequence

from backend.engine.gameparity import Parity
from backend.errors import GenerationExhausted, PermutationError, ValidationFailure
from backend.models.board import PuzzleConfig

DEFAULT_MAX_ATTEMPTS = 10_000

_INTEGER = re.compile(r"-?[0-9]+")


class GameGenerator:
    """Creates layouts for the generator surface."""

    @staticmethod
    def sequence_layout(width: int, height: int) -> list[int]:
        """Return the goal layout (tiles in order, blank bottom-right)."""
        total = width * height
        return list(range(1, total)) + [0]

    @staticmethod
    def solved(width: int, height: int) -> PuzzleConfig:
        return PuzzleConfig(
            width=width,
            height=height,
            tiles=GameGenerator.sequence_layout(width, height),
        )

    @staticmethod
    def shuffle(values: Sequence[int], rng: random.Random | None = None) -> list[int]:
        """Return a Fisher–Yates shuffled copy of *values*."""
        rng = rng or random.Random()
        result = list(values)
        for i in range(len(result) - 1, 0, -1):
            j = rng.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    @staticmethod
    def random_solvable_layout(
        width: int,
        height: int,
        rng: random.Random | None = None,
        max_attempts: int | None = DEFAULT_MAX_ATTEMPTS,
    ) -> list[int]:
        """Return a uniformly shuffled layout that passes the parity test.

        About half of all permutations are solvable, so a handful of
        attempts is normal. Pass ``max_attempts=None`` to retry forever.
        """
        rng = rng or random.Random()
        total = width * height
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            candidate = GameGenerator.shuffle(range(total), rng)
            if Parity.is_solvable(candidate, width, height):
                return candidate
        raise GenerationExhausted(width, height, attempts)

    @staticmethod
    def generate(width: int, height: int, rng: random.Random | None = None) -> PuzzleConfig:
        """Return a random *solvable* board of the given size."""
        return PuzzleConfig(
            width=width,
            height=height,
            tiles=GameGenerator.random_solvable_layout(width, height, rng),
        )

    # -- validation -----------------------------------------------------------

    @staticmethod
    def validate_permutation(
        values: Sequence[int | str], width: int, height: int
    ) -> list[int]:
        """Check an author-entered grid and return it as ints.

        Empty strings stand for the blank. Raises ``PermutationError`` with
        the first problem found.
        """
        total = width * height
        if len(values) != total:
            raise PermutationError(ValidationFailure.NOT_READY)

        tiles = [GameGenerator._parse_cell(v) for v in values]

        if tiles.count(0) != 1:
            raise PermutationError(ValidationFailure.BLANK_COUNT)

        provided = sorted(v for v in tiles if v != 0)
        if provided != list(range(1, total)):
            raise PermutationError(ValidationFailure.INCOMPLETE_RANGE)

        return tiles

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _parse_cell(value: int | str) -> int:
        if isinstance(value, bool):
            raise PermutationError(ValidationFailure.NON_NUMERIC)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            trimmed = value.strip()
            if trimmed == "":
                return 0
            if _INTEGER.fullmatch(trimmed):
                return int(trimmed)
        raise PermutationError(ValidationFailure.NON_NUMERIC)
