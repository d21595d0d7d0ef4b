"""Key handling shared by the terminal players."""

from __future__ import annotations

from dataclasses import dataclass

from backend.engine.gameplay import GamePlay
from backend.models.board import Direction

DIRECTION_KEYS: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


@dataclass(frozen=True)
class Outcome:
    """What the screen should show after one keypress."""

    pending: str = ""
    status: str = ""
    quit: bool = False
    show_link: bool = False


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def handle_key(game: GamePlay, key: str, pending: str = "") -> Outcome:
    """Apply *key* to *game*.

    *pending* holds the tile number typed so far; digits extend it and
    Enter slides that tile if it touches the blank.
    """
    if key in DIRECTION_KEYS:
        game.move(DIRECTION_KEYS[key])
        return Outcome()
    if key.isdigit():
        return Outcome(pending=(pending + key)[-3:])
    if key == "backspace":
        return Outcome(pending=pending[:-1])
    if key == "enter" and pending:
        return Outcome(status=_move_by_number(game, int(pending)))
    if key == "restart":
        game.restart()
        return Outcome(status="Restarted.")
    if key == "link":
        return Outcome(show_link=True)
    if key == "quit":
        return Outcome(quit=True)
    return Outcome(pending=pending)


def _move_by_number(game: GamePlay, value: int) -> str:
    tiles = game.state.tiles
    if value == 0 or value not in tiles:
        return f"No tile {value} on this board."
    if not game.move_tile(tiles.index(value)):
        return f"Tile {value} is not next to the empty cell."
    return ""
