"""Rich terminal player — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the input
handler and key controls with the vanilla player.
"""

from __future__ import annotations

import logging

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.models.board import PuzzleConfig
from backend.models.resources import background_label, list_backgrounds
from frontend.cli.controls import Outcome, format_time, handle_key
from frontend.cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

console = Console()

# One tint per catalog entry, in catalog order.
_PALETTE = ("red", "yellow", "magenta", "cyan", "blue", "green", "bright_red")
_BACKGROUND_STYLES: dict[str, str] = {
    entry.id: _PALETTE[i % len(_PALETTE)] for i, entry in enumerate(list_backgrounds())
}


# -- board rendering ----------------------------------------------------------


def render_board(board: PuzzleConfig) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        show_lines=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.width):
        table.add_column(width=width + 1, justify="center")

    for r in range(board.height):
        cells: list[str] = []
        for c in range(board.width):
            index = r * board.width + c
            val = board.tiles[index]
            tint = _BACKGROUND_STYLES.get(board.background_at(index))
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif tint:
                cells.append(f"[bold white on {tint}]{val:>{width}}[/]")
            elif board.is_tile_correct(index):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _render_legend(board: PuzzleConfig) -> Text | None:
    used = sorted({b for b in board.backgrounds or [] if b})
    if not used:
        return None
    legend = Text()
    for identifier in used:
        legend.append("  ■ ", style=_BACKGROUND_STYLES[identifier])
        legend.append(background_label(identifier), style="dim")
    return legend


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(game.elapsed_time), style="bold yellow")
    return stats


# -- screens ------------------------------------------------------------------


def _draw_game(game: GamePlay, pending: str, status: str, link: str) -> None:
    console.clear()

    board = game.board()
    parts: list = [Align.center(render_board(board))]
    legend = _render_legend(board)
    if legend is not None:
        parts.append(Align.center(legend))

    panel = Panel(
        Group(*parts),
        title=(
            f"[bold cyan]Sliding Puzzle  {game.width}×{game.height}[/bold cyan]"
        ),
        border_style="bright_blue",
        padding=(1, 2),
    )

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("0-9 ⏎", style="bold cyan")
    controls.append("  tile   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("L", style="bold cyan")
    controls.append("  link   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game)))
    if pending:
        console.print(Align.center(Text(f"Tile: {pending}_", style="bold cyan")))
    if status:
        console.print(Align.center(Text(status, style="yellow")))
    if link:
        console.print(Align.center(Text(link, style="dim")))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append(
        f"  Solved in {game.state.moves} moves and "
        f"{format_time(game.elapsed_time)}.  ",
        style="green",
    )
    congrats.append("★\n", style="bold yellow")

    panel = Panel(
        Group(Align.center(render_board(game.board())), Align.center(congrats)),
        title=(
            f"[bold green]Sliding Puzzle  {game.width}×{game.height}[/bold green]"
        ),
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to quit.\n", style="dim"))
    )


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay, link: str) -> None:
    outcome = Outcome()
    while True:
        while not game.is_won:
            shown_link = link if outcome.show_link else ""
            _draw_game(game, outcome.pending, outcome.status, shown_link)

            # Redraw whenever the visible clock ticks over.
            shown = int(game.elapsed_time)
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                if int(game.elapsed_time) != shown:
                    _draw_game(game, outcome.pending, outcome.status, shown_link)
                    shown = int(game.elapsed_time)

            outcome = handle_key(game, key, outcome.pending)
            if outcome.quit:
                return

        logger.info(
            "Solved %dx%d in %d moves", game.width, game.height, game.state.moves
        )
        _draw_win(game)

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
    """Launch the Rich player on *puzzle*."""
    _play(GamePlay(puzzle), link)
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
