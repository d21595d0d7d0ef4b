"""Single-keypress reader for the terminal players.

Arrow keys and WASD slide tiles, digits pick a tile by number (confirmed
with Enter), and a few letters drive the session. Works on macOS / Linux
(tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "\x1b": "quit",  # Escape (Windows; Unix goes through _resolve_escape)
    "r": "restart",
    "l": "link",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isdigit() else ""


def _resolve_escape(read_next) -> str:
    """Finish an ESC sequence; *read_next* returns "" when nothing follows."""
    if read_next() != "[":
        return "quit"  # bare Escape
    return _ARROW_MAP.get(read_next(), "")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return a normalised action string.

    Possible return values:
        "up", "down", "left", "right"  — slide a neighbour of the blank
        "0".."9"                       — tile number digit
        "enter", "backspace"           — confirm / edit the tile number
        "restart", "link"              — r / l
        "quit"                         — q / Ctrl-C / Escape
        ""                             — unrecognised key
    """
    return get_key_timeout(None) or ""


def get_key_timeout(timeout: float | None) -> str | None:
    """Read a single keypress, waiting at most *timeout* seconds.

    Returns ``None`` if nothing was pressed in time; ``timeout=None``
    waits forever.
    """
    if os.name == "nt":
        return _get_key_windows(timeout)

    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        # os.read is unbuffered, so select() still sees the rest of an
        # arrow-key escape sequence.
        def read_next() -> str:
            more, _, _ = select.select([fd], [], [], 0.1)
            return os.read(fd, 1).decode("utf-8", errors="ignore") if more else ""

        ch = os.read(fd, 1).decode("utf-8", errors="ignore")
        if ch == "\x1b":
            return _resolve_escape(read_next)
        return _resolve(ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _get_key_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    end = None if timeout is None else time.monotonic() + timeout
    while not msvcrt.kbhit():
        if end is not None and time.monotonic() >= end:
            return None
        time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(msvcrt.getwch(), "")
    return _resolve(ch)
