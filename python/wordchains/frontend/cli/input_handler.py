"""Raw keypress input and a small line editor for the terminal frontends.

The play loop reads one key at a time, with a timeout, so the per-word
countdown keeps running while a word is being typed.  Unix terminals are put
in raw mode with ``tty``/``termios``; Windows uses ``msvcrt``.
"""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

_WINDOWS = os.name == "nt"

# Keys reported by name rather than by character.
_NAMED: dict[str, str] = {
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x03": "interrupt",  # Ctrl-C
    "\t": "tab",
}

# Final byte of ``ESC [ x`` on Unix, and the byte after ``\xe0``/``\x00`` on Windows.
_ANSI_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_WIN_ARROWS = {"H": "up", "P": "down", "M": "right", "K": "left"}

# Wait for the rest of an escape sequence before treating ESC as a key.
_ESC_WAIT = 0.1


def _name(ch: str) -> str:
    if ch in _NAMED:
        return _NAMED[ch]
    return ch if ch.isprintable() else ""


def _decode_escape(read_more: Callable[[], str | None]) -> str:
    """Finish an ``ESC`` read: an arrow name, ``"escape"``, or ``""``.

    *read_more* returns the next pending character, or None when nothing
    follows within the escape wait.
    """
    second = read_more()
    if second != "[":
        return "escape"
    third = read_more()
    return _ANSI_ARROWS.get(third or "", "")


# -- unix ---------------------------------------------------------------------


@contextmanager
def _raw_stdin() -> Iterator[int]:
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield fd
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_unix(timeout: float | None) -> str | None:
    import select

    with _raw_stdin() as fd:

        def pending(wait: float | None) -> str | None:
            ready, _, _ = select.select([fd], [], [], wait)
            if not ready:
                return None
            # os.read is unbuffered, so select keeps seeing the rest of a sequence.
            return os.read(fd, 1).decode("utf-8", errors="ignore")

        ch = pending(timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: pending(_ESC_WAIT))
        return _name(ch)


# -- windows ------------------------------------------------------------------


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    if timeout is not None:
        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.02)

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WIN_ARROWS.get(msvcrt.getwch(), "")
    if ch == "\x1b":
        return "escape"
    return _name(ch)


_read = _read_windows if _WINDOWS else _read_unix


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its name.

    Returns ``"up"``/``"down"``/``"left"``/``"right"`` for arrows,
    ``"enter"``, ``"backspace"``, ``"tab"``, ``"escape"``, ``"interrupt"``
    for Ctrl-C, the character itself when printable, or ``""``.
    """
    key = _read(None)
    return key or ""


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but return None if nothing is typed in *timeout* seconds."""
    return _read(timeout)


# -- line editing -------------------------------------------------------------


class LineEditor:
    """Builds a line from key names; :meth:`feed` returns it on Enter."""

    def __init__(self, max_len: int = 60) -> None:
        self.buffer = ""
        self.max_len = max_len

    def feed(self, key: str) -> str | None:
        if key == "enter":
            line, self.buffer = self.buffer, ""
            return line
        if key == "backspace":
            self.buffer = self.buffer[:-1]
        elif len(key) == 1 and len(self.buffer) < self.max_len:
            self.buffer += key
        return None

    def clear(self) -> None:
        self.buffer = ""
