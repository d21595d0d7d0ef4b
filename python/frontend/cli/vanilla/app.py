"""Vanilla terminal player — no third-party dependencies.

Uses only print, ANSI codes and tty/termios for rendering and input.
"""

from __future__ import annotations

import logging
import sys

from backend.engine.gameplay import GamePlay
from backend.models.board import PuzzleConfig
from backend.models.resources import background_label
from frontend.cli.controls import Outcome, format_time, handle_key
from frontend.cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_M = "\033[35;1m"    # bold magenta (decorated tile)
_DIM = "\033[2m"     # dim
_R = "\033[0m"       # reset


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time string (no newline)."""
    return (
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{format_time(game.elapsed_time)}{_R}"
    )


# -- board rendering ----------------------------------------------------------


def _render_board(board: PuzzleConfig) -> str:
    """Return an ANSI-coloured text representation of the board.

    Decorated tiles are marked with ``*`` after the number.
    """
    width = len(str(board.size - 1))
    cell_w = width + 3
    sep = "+" + (("-" * cell_w + "+") * board.width)

    lines: list[str] = [sep]
    for r, row in enumerate(board.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            index = r * board.width + c
            mark = "*" if board.background_at(index) else " "
            if val == 0:
                cells.append(f"{_DIM} {'·':>{width}}  {_R}")
            elif mark == "*":
                cells.append(f"{_M} {val:>{width}}{mark} {_R}")
            elif board.is_tile_correct(index):
                cells.append(f"{_G} {val:>{width}}  {_R}")
            else:
                cells.append(f" {val:>{width}}  ")
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _legend(board: PuzzleConfig) -> str:
    labels = sorted({background_label(b) for b in board.backgrounds or [] if b})
    return f"  {_M}*{_R} {_DIM}{', '.join(labels)}{_R}" if labels else ""


# -- screens ------------------------------------------------------------------


def _show_game(game: GamePlay, outcome: Outcome, link: str) -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can overwrite it in place using ``\\r\\033[K``.
    """
    _clear()
    board = game.board()
    print(f"  {_C}=== Sliding Puzzle ({game.width}×{game.height}) ==={_R}")
    print()
    print(_render_board(board))
    legend = _legend(board)
    if legend:
        print(legend)
    print()
    print(
        f"  {_C}WASD{_R}/{_C}Arrows{_R}: move  |  "
        f"{_C}0-9 Enter{_R}: tile  |  "
        f"{_C}R{_R}: restart  |  "
        f"{_C}L{_R}: link  |  "
        f"{_C}Q{_R}: quit"
    )
    if outcome.pending:
        print(f"  Tile: {_C}{outcome.pending}_{_R}")
    if outcome.status:
        print(f"  {_Y}{outcome.status}{_R}")
    if outcome.show_link and link:
        print(f"  {_DIM}{link}{_R}")
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_win(game: GamePlay) -> None:
    _clear()
    print(f"  {_G}=== Sliding Puzzle ({game.width}×{game.height}) ==={_R}")
    print()
    print(_render_board(game.board()))
    print()
    print(f"  {_G}★ CONGRATULATIONS! You solved it! ★{_R}")
    print()
    print(
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{format_time(game.elapsed_time)}{_R}"
    )
    print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to quit.")


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, link: str) -> None:
    outcome = Outcome()
    while True:
        while not game.is_won:
            _show_game(game, outcome, link)

            # Wait for input; update the time display every 0.5 s.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            outcome = handle_key(game, key, outcome.pending)
            if outcome.quit:
                return

        logger.info(
            "Solved %dx%d in %d moves", game.width, game.height, game.state.moves
        )
        _show_win(game)

        while True:
            key = get_key()
            if key == "restart":
                game.restart()
                outcome = Outcome()
                break
            if key == "quit":
                return


# -- public entry point -------------------------------------------------------


def run(puzzle: PuzzleConfig, link: str = "") -> None:
    """Launch the vanilla player on *puzzle*."""
    _play(GamePlay(puzzle), link)
    _clear()
    print("  Goodbye!\n")
