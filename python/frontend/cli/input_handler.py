"""Single-keypress reader for the terminal frontends.

Arrow keys, WASD and the command letters are mapped to action strings
without waiting for Enter.  macOS / Linux use tty+termios, Windows msvcrt.
"""

from __future__ import annotations

import os
import sys
import time

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "n": "new",
    "v": "solve",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string.

    Digits pass through unchanged so a frontend can slide a numbered tile.
    """
    if not ch:
        return ""
    action = _KEY_MAP.get(ch.lower())
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- Windows -------------------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):  # arrow prefix
        return {"H": "up", "P": "down", "K": "left", "M": "right"}.get(
            msvcrt.getwch(), ""
        )
    if ch == "\x1b":
        return "quit"
    return resolve(ch)


# -- Unix ----------------------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def pending(wait: float | None) -> bool:
        ready, _, _ = select.select([fd], [], [], wait)
        return bool(ready)

    def read1() -> str:
        # os.read is unbuffered, so select() still sees the rest of an
        # escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        if not pending(timeout):
            return None
        ch = read1()
        if ch != "\x1b":
            return resolve(ch)
        # ESC [ A/B/C/D, or a bare Escape
        if not pending(0.1) or read1() != "[":
            return "quit"
        if not pending(0.1):
            return ""
        return _ARROW_MAP.get(read1(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key_timeout(timeout: float) -> str | None:
    """Wait up to *timeout* seconds for a key and return its action string.

    Possible return values:
        "up", "down", "left", "right"  - slide a tile
        "new"                          - n (new game)
        "solve"                        - v (auto-solve)
        "quit"                         - q / Ctrl-C / Escape
        "<char>"                       - unmapped printable char (digits)
        ""                             - unrecognised key
        None                           - nothing pressed in time
    """
    return _read(timeout)
