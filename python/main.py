#!/usr/bin/env python3
"""Sliding Puzzle — link generator and terminal player.

Usage::

    python main.py generate -W 4 -H 3 --fill random   # print a shareable link
    python main.py generate --tiles "1,2,3,,4,5" -W 3 -H 2
    python main.py play "http://localhost:8000/?p=eyJ3Ijo..."
    python main.py play -f vanilla                    # default 4×4 board
    python main.py backgrounds                        # list tile decorations
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamecodec import PuzzleCodec  # noqa: E402
from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.errors import DecodeError, PermutationError  # noqa: E402
from backend.models.board import (  # noqa: E402
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MAX_SIZE,
    MIN_SIZE,
    PuzzleConfig,
)
from backend.models.resources import (  # noqa: E402
    background_label,
    list_backgrounds,
    normalize_background,
    sanitize_backgrounds,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/"

console = Console()


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Fill(StrEnum):
    sequence = "sequence"
    random = "random"
    clear = "clear"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _in_range(puzzle: PuzzleConfig) -> bool:
    return MIN_SIZE <= puzzle.width <= MAX_SIZE and MIN_SIZE <= puzzle.height <= MAX_SIZE


def _read_link(link: Optional[str]) -> Optional[PuzzleConfig]:
    """Decode *link*, logging and discarding anything unusable."""
    try:
        puzzle = PuzzleCodec.read_link(link)
    except DecodeError as exc:
        logger.warning("Could not read the puzzle from the link (%s)", exc)
        return None
    if puzzle is not None and not _in_range(puzzle):
        logger.warning(
            "Ignoring %d×%d puzzle from the link: sizes must be %d-%d",
            puzzle.width, puzzle.height, MIN_SIZE, MAX_SIZE,
        )
        return None
    return puzzle


def _parse_tiles(raw: str) -> list[str]:
    """Split ``"1,2,,3"`` into cells; an empty cell is the blank."""
    return [cell.strip() for cell in raw.split(",")]


def _apply_backgrounds(
    backgrounds: list[str], assignments: list[str]
) -> list[str]:
    result = backgrounds[:]
    for item in assignments:
        index_text, sep, identifier = item.partition("=")
        try:
            index = int(index_text)
        except ValueError:
            index = -1
        if not sep or not 0 <= index < len(result):
            raise typer.BadParameter(
                f"{item!r}: expected INDEX=ID with INDEX in 0..{len(result) - 1}",
                param_hint="--background",
            )
        normalized = normalize_background(identifier)
        if identifier and not normalized:
            logger.warning("Unknown background %r ignored", identifier)
        result[index] = normalized
    return result


def _print_result(puzzle: PuzzleConfig, payload: str, link: str) -> None:
    from frontend.cli.rich.app import render_board

    console.print(render_board(puzzle))
    for index, identifier in enumerate(puzzle.backgrounds or []):
        if identifier:
            console.print(f"  [dim]cell {index}:[/dim] {background_label(identifier)}")
    console.print(f"[bold]Payload:[/bold] {payload}", soft_wrap=True)
    console.print(f"[bold]Link:[/bold]    {link}", soft_wrap=True)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False, help="Sliding Puzzle.")


@app.callback()
def configure(
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING, "--log-level", case_sensitive=False,
        help="Logging level.",
    ),
) -> None:
    """Sliding Puzzle — share boards as links and play them."""
    logging.basicConfig(
        level=log_level.value,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@app.command()
def generate(
    width: Optional[int] = typer.Option(
        None, "-W", "--width", min=MIN_SIZE, max=MAX_SIZE, clamp=True,
        help=f"Columns ({MIN_SIZE}-{MAX_SIZE}, default 4).",
    ),
    height: Optional[int] = typer.Option(
        None, "-H", "--height", min=MIN_SIZE, max=MAX_SIZE, clamp=True,
        help=f"Rows ({MIN_SIZE}-{MAX_SIZE}, default 4).",
    ),
    fill: Optional[Fill] = typer.Option(
        None, "--fill",
        help="Start from the ordered board, a random solvable one, or nothing.",
    ),
    tiles: Optional[str] = typer.Option(
        None, "--tiles",
        help="Comma-separated row-major tiles; leave one cell empty for the blank.",
    ),
    background: list[str] = typer.Option(
        [], "--background", "-b",
        help="Decorate a cell: INDEX=ID (repeatable, see `backgrounds`).",
    ),
    from_link: Optional[str] = typer.Option(
        None, "--from",
        help="Start from the puzzle in an existing link.",
    ),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--base-url",
        help="Address of the player page the link points at.",
    ),
) -> None:
    """Build a puzzle and print its shareable link."""
    base = _read_link(from_link)

    w = width or (base.width if base else DEFAULT_WIDTH)
    h = height or (base.height if base else DEFAULT_HEIGHT)
    same_shape = base is not None and (base.width, base.height) == (w, h)

    if tiles is not None:
        values: list = _parse_tiles(tiles)
    elif fill is Fill.random:
        values = GameGenerator.random_solvable_layout(w, h)
    elif fill is Fill.clear:
        values = ["" for _ in range(w * h)]
    elif fill is None and same_shape:
        values = list(base.tiles)
    else:
        values = GameGenerator.sequence_layout(w, h)

    try:
        layout = GameGenerator.validate_permutation(values, w, h)
    except PermutationError as exc:
        console.print(f"[bold red]{exc.message}[/bold red]")
        raise typer.Exit(code=1) from exc

    backgrounds = sanitize_backgrounds(base.backgrounds if same_shape else None, w * h)
    backgrounds = _apply_backgrounds(backgrounds, background)

    puzzle = PuzzleConfig(width=w, height=h, tiles=layout, backgrounds=backgrounds)
    payload = PuzzleCodec.encode(puzzle)
    link = PuzzleCodec.build_link(base_url, payload)
    logger.info("Encoded %d×%d puzzle into %d characters", w, h, len(payload))

    _print_result(PuzzleCodec.decode(payload), payload, link)


@app.command()
def play(
    link: Optional[str] = typer.Argument(
        None, help="Link (or bare payload) produced by `generate`.",
    ),
    frontend: Frontend = typer.Option(
        Frontend.rich, "-f", "--frontend",
        help="Terminal renderer to use.",
    ),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--base-url",
        help="Used to show a link for the default board.",
    ),
) -> None:
    """Play the puzzle carried by LINK (default: the ordered 4×4 board)."""
    puzzle = _read_link(link)
    if puzzle is None:
        puzzle = PuzzleCodec.default_puzzle()
        link = PuzzleCodec.build_link(base_url, PuzzleCodec.encode(puzzle))

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(puzzle, link=link)


@app.command()
def backgrounds() -> None:
    """List the tile decorations a link may reference."""
    table = Table(title="Tile backgrounds")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    for entry in list_backgrounds():
        table.add_row(entry.id, entry.label)
    console.print(table)


if __name__ == "__main__":
    app()
