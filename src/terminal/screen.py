"""
Terminal screen abstraction and its curses implementation.

The engine never talks to a terminal. The application draws through the
`Screen` protocol and reads input events from it, which keeps the renderer
and the event loop testable against an in-memory screen.
"""

import curses
import threading
import time
from typing import Literal, Optional, Protocol, Tuple, Union
from pydantic import BaseModel


Style = Literal["default", "hidden", "guessed", "title", "highlight", "error"]
Key = Literal["rune", "enter", "escape", "up", "down", "backspace", "ctrl_c", "other"]


class KeyEvent(BaseModel):
    """A key press; `char` is set for printable keys."""
    key: Key
    char: Optional[str] = None


class ResizeEvent(BaseModel):
    """The terminal changed size."""
    width: int
    height: int


Event = Union[KeyEvent, ResizeEvent]


class Screen(Protocol):
    """Minimal terminal surface used by the renderer and the event loop."""

    def size(self) -> Tuple[int, int]:
        """Return (width, height) in cells."""

    def set_cell(self, x: int, y: int, char: str, style: Style = "default") -> None:
        """Put a single character at (x, y)."""

    def clear(self) -> None:
        """Blank the back buffer."""

    def present(self) -> None:
        """Flush the back buffer to the terminal."""

    def poll_event(self) -> Event:
        """Block until the next input event."""


_CONTROL_KEYS = {
    "\n": "enter",
    "\r": "enter",
    "\x1b": "escape",
    "\x03": "ctrl_c",
    "\x7f": "backspace",
    "\b": "backspace",
}

_SPECIAL_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_ENTER: "enter",
    curses.KEY_BACKSPACE: "backspace",
}


def translate_key(raw: Union[int, str]) -> KeyEvent:
    """Map a curses get_wch() result onto a KeyEvent."""
    if isinstance(raw, int):
        return KeyEvent(key=_SPECIAL_KEYS.get(raw, "other"))

    if raw in _CONTROL_KEYS:
        return KeyEvent(key=_CONTROL_KEYS[raw])
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent(key="rune", char=raw)
    return KeyEvent(key="other")


class CursesScreen:
    """
    `Screen` backed by the standard curses module.

    curses is not thread-safe, so every call into it happens under one lock.
    Input is read without blocking; poll_event() sleeps between attempts
    with the lock released so the draw loop can paint meanwhile.
    """

    POLL_INTERVAL = 0.02

    def __init__(self, stdscr) -> None:
        self._stdscr = stdscr
        self._lock = threading.Lock()
        self._styles = {}

        with self._lock:
            # Cursor hidden, keys delivered as they are pressed, Ctrl-C as a key.
            try:
                curses.curs_set(0)
            except curses.error:
                pass
            curses.raw()
            curses.noecho()
            stdscr.keypad(True)
            stdscr.nodelay(True)
            self._init_styles()

    def _init_styles(self) -> None:
        self._styles = {
            "default": curses.A_NORMAL,
            "hidden": curses.A_DIM,
            "guessed": curses.A_BOLD,
            "title": curses.A_BOLD,
            "highlight": curses.A_REVERSE,
            "error": curses.A_BOLD,
        }
        if not curses.has_colors():
            return

        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_GREEN, -1)
        curses.init_pair(2, curses.COLOR_CYAN, -1)
        curses.init_pair(3, curses.COLOR_RED, -1)
        self._styles["guessed"] = curses.color_pair(1) | curses.A_BOLD
        self._styles["title"] = curses.color_pair(2) | curses.A_BOLD
        self._styles["error"] = curses.color_pair(3) | curses.A_BOLD

    def size(self) -> Tuple[int, int]:
        with self._lock:
            height, width = self._stdscr.getmaxyx()
        return width, height

    def set_cell(self, x: int, y: int, char: str, style: Style = "default") -> None:
        with self._lock:
            try:
                self._stdscr.addstr(y, x, char, self._styles.get(style, curses.A_NORMAL))
            except curses.error:
                # Bottom-right corner or off-screen; nothing to draw.
                pass

    def clear(self) -> None:
        with self._lock:
            self._stdscr.erase()

    def present(self) -> None:
        with self._lock:
            self._stdscr.refresh()

    def poll_event(self) -> Event:
        while True:
            with self._lock:
                try:
                    raw = self._stdscr.get_wch()
                except curses.error:
                    raw = None

            if raw is None:
                time.sleep(self.POLL_INTERVAL)
                continue
            if raw == curses.KEY_RESIZE:
                width, height = self.size()
                return ResizeEvent(width=width, height=height)
            return translate_key(raw)
