"""Generator and parity test suite.

Random layouts are checked over every supported grid size; the parity rule
is checked against hand-built boards and an exhaustive 2×3 reachability
search.
"""

from __future__ import annotations

import itertools
import random
from collections import deque

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameparity import Parity
from backend.engine.gameplay import apply_move, is_solved
from backend.errors import GenerationExhausted, PermutationError, ValidationFailure
from backend.models.board import MAX_SIZE, MIN_SIZE

SIZES = list(itertools.product(range(MIN_SIZE, MAX_SIZE + 1), repeat=2))


def _ids(size: tuple[int, int]) -> str:
    return f"{size[0]}x{size[1]}"


def _reachable(width: int, height: int) -> set[tuple[int, ...]]:
    """Every layout reachable from the goal by sliding tiles."""
    start = tuple(GameGenerator.sequence_layout(width, height))
    seen = {start}
    queue = deque([start])
    while queue:
        tiles = queue.popleft()
        for target in range(len(tiles)):
            result = apply_move(tiles, target, width)
            nxt = tuple(result.tiles)
            if result.moved and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return seen


# -- sequence layout ----------------------------------------------------------


@pytest.mark.parametrize("size", SIZES, ids=_ids)
def test_sequence_layout_is_valid_and_solved(size: tuple[int, int]) -> None:
    width, height = size
    tiles = GameGenerator.sequence_layout(width, height)

    assert GameGenerator.validate_permutation(tiles, width, height) == tiles
    assert tiles[-1] == 0
    assert is_solved(tiles)
    assert Parity.is_solvable(tiles, width, height)


def test_solved_board() -> None:
    board = GameGenerator.solved(3, 2)
    assert board.tiles == [1, 2, 3, 4, 5, 0]
    assert (board.width, board.height) == (3, 2)


# -- validation ---------------------------------------------------------------


def test_validate_accepts_user_strings() -> None:
    values = ["3", " 1 ", "", "2"]
    assert GameGenerator.validate_permutation(values, 2, 2) == [3, 1, 0, 2]


@pytest.mark.parametrize(
    "values,reason",
    [
        ([1, 2, 3], ValidationFailure.NOT_READY),
        ([1, 2, 3, 0, 4], ValidationFailure.NOT_READY),
        (["1", "two", "3", ""], ValidationFailure.NON_NUMERIC),
        (["1", "2.0", "3", ""], ValidationFailure.NON_NUMERIC),
        (["1", "2", "1_0", ""], ValidationFailure.NON_NUMERIC),
        (["\uff11", "2", "3", ""], ValidationFailure.NON_NUMERIC),
        ([1, True, 3, 0], ValidationFailure.NON_NUMERIC),
        ([1, 2, 3, 4], ValidationFailure.BLANK_COUNT),
        (["", "", 1, 2], ValidationFailure.BLANK_COUNT),
        ([1, 1, 3, 0], ValidationFailure.INCOMPLETE_RANGE),
        ([1, 2, 4, 0], ValidationFailure.INCOMPLETE_RANGE),
        ([-1, 2, 3, 0], ValidationFailure.INCOMPLETE_RANGE),
    ],
)
def test_validate_rejects(values: list, reason: ValidationFailure) -> None:
    with pytest.raises(PermutationError) as info:
        GameGenerator.validate_permutation(values, 2, 2)
    assert info.value.reason is reason
    assert info.value.message


# -- random layouts -----------------------------------------------------------


@pytest.mark.parametrize("size", SIZES, ids=_ids)
def test_random_layout_is_solvable(size: tuple[int, int]) -> None:
    width, height = size
    rng = random.Random(width * 10 + height)
    for _ in range(20):
        tiles = GameGenerator.random_solvable_layout(width, height, rng)
        assert GameGenerator.validate_permutation(tiles, width, height) == tiles
        assert Parity.is_solvable(tiles, width, height)


def test_random_layout_is_reproducible_with_seed() -> None:
    first = GameGenerator.random_solvable_layout(4, 4, random.Random(7))
    second = GameGenerator.random_solvable_layout(4, 4, random.Random(7))
    assert first == second


def test_random_layout_gives_up_after_max_attempts(monkeypatch) -> None:
    monkeypatch.setattr(Parity, "is_solvable", staticmethod(lambda *_: False))
    with pytest.raises(GenerationExhausted) as info:
        GameGenerator.random_solvable_layout(3, 3, max_attempts=5)
    assert info.value.attempts == 5


def test_shuffle_keeps_values() -> None:
    values = list(range(16))
    shuffled = GameGenerator.shuffle(values, random.Random(1))
    assert sorted(shuffled) == values
    assert values == list(range(16))


# -- parity -------------------------------------------------------------------


def test_count_inversions_ignores_blank() -> None:
    assert Parity.count_inversions([1, 2, 3, 0]) == 0
    assert Parity.count_inversions([2, 1, 3, 0]) == 1
    assert Parity.count_inversions([3, 0, 2, 1]) == 3


def test_single_swap_on_four_by_four_is_unsolvable() -> None:
    tiles = GameGenerator.sequence_layout(4, 4)
    tiles[0], tiles[1] = tiles[1], tiles[0]

    assert Parity.count_inversions(tiles) == 1
    assert not Parity.is_solvable(tiles, 4, 4)


def test_even_width_counts_rows_from_bottom() -> None:
    # One move up from the goal: blank in row 2 from the bottom, 3 inversions.
    tiles = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 13, 14, 15, 12]
    assert Parity.count_inversions(tiles) == 3
    assert Parity.is_solvable(tiles, 4, 4)

    # Same blank row with an even inversion count.
    tiles = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0, 12, 13, 14, 15]
    assert Parity.count_inversions(tiles) == 0
    assert not Parity.is_solvable(tiles, 4, 4)


@pytest.mark.parametrize("width,height", [(2, 2), (2, 3), (3, 2)])
def test_parity_matches_reachability(width: int, height: int) -> None:
    reachable = _reachable(width, height)
    for perm in itertools.permutations(range(width * height)):
        assert Parity.is_solvable(perm, width, height) == (perm in reachable)
