"""CLI tests — the generator command, the catalog listing, and link fallback."""

from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

import main
from backend.engine.gamecodec import PuzzleCodec
from backend.engine.gameplay import GamePlay
from backend.models.board import PuzzleConfig
from frontend.cli.controls import format_time, handle_key
from frontend.cli.input_handler import _resolve

runner = CliRunner()


def _payload_from_output(output: str) -> str:
    for line in output.splitlines():
        if line.startswith("Payload:"):
            return line.split(":", 1)[1].strip()
    raise AssertionError(f"no payload in output:\n{output}")


# -- generate -----------------------------------------------------------------


def test_generate_sequence_board() -> None:
    result = runner.invoke(main.app, ["generate", "-W", "3", "-H", "2"])

    assert result.exit_code == 0, result.output
    puzzle = PuzzleCodec.decode(_payload_from_output(result.output))
    assert puzzle == PuzzleConfig(width=3, height=2, tiles=[1, 2, 3, 4, 5, 0])
    assert "?p=" in result.output


def test_generate_manual_tiles_with_background() -> None:
    result = runner.invoke(
        main.app,
        ["generate", "-W", "2", "-H", "2", "--tiles", "3,1,,2", "-b", "1=gear.png"],
    )

    assert result.exit_code == 0, result.output
    puzzle = PuzzleCodec.decode(_payload_from_output(result.output))
    assert puzzle.tiles == [3, 1, 0, 2]
    assert puzzle.backgrounds == ["", "gear.png", "", ""]


def test_generate_random_board_is_valid() -> None:
    result = runner.invoke(main.app, ["generate", "-W", "4", "-H", "3", "--fill", "random"])

    assert result.exit_code == 0, result.output
    puzzle = PuzzleCodec.decode(_payload_from_output(result.output))
    assert sorted(puzzle.tiles) == list(range(12))


@pytest.mark.parametrize(
    "tiles,message",
    [
        ("1,2,3", "not ready"),
        ("1,x,3,", "Use only numbers"),
        ("1,2,3,4", "exactly one empty cell"),
        ("1,1,3,", "from 1 to N-1"),
    ],
)
def test_generate_reports_invalid_grid(tiles: str, message: str) -> None:
    result = runner.invoke(main.app, ["generate", "-W", "2", "-H", "2", "--tiles", tiles])

    assert result.exit_code == 1
    assert message in result.output


def test_generate_clear_requires_tiles() -> None:
    result = runner.invoke(main.app, ["generate", "--fill", "clear"])
    assert result.exit_code == 1


def test_generate_clamps_out_of_range_size() -> None:
    result = runner.invoke(main.app, ["generate", "-W", "9", "-H", "1"])

    assert result.exit_code == 0, result.output
    puzzle = PuzzleCodec.decode(_payload_from_output(result.output))
    assert (puzzle.width, puzzle.height) == (8, 2)


def test_generate_from_existing_link() -> None:
    source = PuzzleConfig(
        width=2, height=3, tiles=[2, 1, 3, 4, 5, 0], backgrounds=["cup.png"] + [""] * 5
    )
    link = PuzzleCodec.build_link("https://example.com/", PuzzleCodec.encode(source))
    result = runner.invoke(main.app, ["generate", "--from", link])

    assert result.exit_code == 0, result.output
    assert PuzzleCodec.decode(_payload_from_output(result.output)) == source


def test_generate_bad_background_assignment() -> None:
    result = runner.invoke(main.app, ["generate", "-b", "99=cup.png"])
    assert result.exit_code != 0


def test_backgrounds_lists_catalog() -> None:
    result = runner.invoke(main.app, ["backgrounds"])

    assert result.exit_code == 0
    assert "roller_right.png" in result.output
    assert "Ferris Wheel" in result.output


# -- link fallback ------------------------------------------------------------


def test_read_link_logs_and_discards_garbage(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert main._read_link("https://example.com/?p=@@@@") is None
    assert "Could not read the puzzle" in caplog.text


def test_read_link_discards_oversized_board(caplog) -> None:
    tiles = list(range(1, 20)) + [0]
    payload = PuzzleCodec.encode(PuzzleConfig(width=10, height=2, tiles=tiles))
    with caplog.at_level(logging.WARNING):
        assert main._read_link(payload) is None
    assert "Ignoring" in caplog.text


# -- key controls -------------------------------------------------------------


def test_handle_key_digits_then_enter_moves_tile() -> None:
    game = GamePlay(PuzzleConfig(2, 2, [1, 2, 0, 3]))

    outcome = handle_key(game, "3")
    assert outcome.pending == "3"
    outcome = handle_key(game, "enter", outcome.pending)

    assert outcome.pending == ""
    assert game.state.tiles == (1, 2, 3, 0)


def test_handle_key_reports_stuck_tile() -> None:
    game = GamePlay(PuzzleConfig(2, 2, [1, 2, 0, 3]))
    outcome = handle_key(game, "enter", "2")
    assert "not next to" in outcome.status
    assert handle_key(game, "enter", "7").status == "No tile 7 on this board."


def test_handle_key_arrows_and_restart() -> None:
    game = GamePlay(PuzzleConfig(2, 2, [1, 2, 0, 3]))

    handle_key(game, "left")
    assert game.state.moves == 1
    handle_key(game, "restart")
    assert game.state.moves == 0
    assert handle_key(game, "quit").quit
    assert handle_key(game, "link").show_link
    assert handle_key(game, "backspace", "12").pending == "1"


def test_format_time() -> None:
    assert format_time(0) == "00:00"
    assert format_time(125.7) == "02:05"


@pytest.mark.parametrize(
    "ch,action",
    [("W", "up"), ("r", "restart"), ("l", "link"), ("7", "7"), ("h", ""), ("?", "")],
)
def test_resolve_maps_only_handled_keys(ch: str, action: str) -> None:
    assert _resolve(ch) == action
