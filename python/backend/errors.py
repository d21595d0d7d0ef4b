"""Failure taxonomy for decoding links and validating boards."""

from __future__ import annotations

from enum import StrEnum


class DecodeFailure(StrEnum):
    MALFORMED_PAYLOAD = "malformed_payload"
    INVALID_DIMENSIONS = "invalid_dimensions"
    TILE_COUNT_MISMATCH = "tile_count_mismatch"
    INVALID_PERMUTATION = "invalid_permutation"
    BACKGROUND_COUNT_MISMATCH = "background_count_mismatch"


class ValidationFailure(StrEnum):
    NOT_READY = "not_ready"
    NON_NUMERIC = "non_numeric"
    BLANK_COUNT = "blank_count"
    INCOMPLETE_RANGE = "incomplete_range"


_VALIDATION_MESSAGES: dict[ValidationFailure, str] = {
    ValidationFailure.NOT_READY: "The grid is not ready.",
    ValidationFailure.NON_NUMERIC: "Use only numbers or leave a cell empty.",
    ValidationFailure.BLANK_COUNT: "There must be exactly one empty cell.",
    ValidationFailure.INCOMPLETE_RANGE: "Use every number from 1 to N-1 exactly once.",
}


class PuzzleError(Exception):
    """Base class for every error raised by the puzzle core."""


class DecodeError(PuzzleError, ValueError):
    """A shared payload could not be turned back into a puzzle."""

    def __init__(self, reason: DecodeFailure, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)


class PermutationError(PuzzleError, ValueError):
    """A user-entered grid is not a legal arrangement.

    ``message`` is meant to be shown to the author as-is.
    """

    def __init__(self, reason: ValidationFailure) -> None:
        self.reason = reason
        self.message = _VALIDATION_MESSAGES[reason]
        super().__init__(self.message)


class GenerationExhausted(PuzzleError, RuntimeError):
    """No solvable shuffle was found within the attempt budget."""

    def __init__(self, width: int, height: int, attempts: int) -> None:
        self.width = width
        self.height = height
        self.attempts = attempts
        super().__init__(
            f"No solvable {width}×{height} layout after {attempts} attempts."
        )
