# ggedit/ui/Terminal.py
"""Terminal.py
==============
The Terminal collaborator: everything the editor core needs from the screen
and keyboard, and its curses implementation.

`Terminal` is the interface the core and the render pass talk to. It keeps a
write position ("pen"): `move_cursor_to` places it, `write_styled` writes a
run of text there and advances it, `write_styled_line` writes and moves to the
start of the next line. Colours are names ("yellow") or hex strings
("#e8a5a5"); `None` means the terminal default.

`CursesTerminal` maps that interface onto a curses window. Curses errors
raised by writes at the screen edge are logged and swallowed; read
failures propagate as `OSError`.
"""

import curses
import logging
import sys
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from wcwidth import wcswidth

from ggedit.ui.KeyBinder import KeyBinder
from ggedit.utils.utils import hex_to_xterm


class CursorShape(Enum):
    """DECSCUSR parameter for each shape."""

    BLOCK = 2
    UNDERLINE = 4
    BAR = 6


class Key:
    """Names of the non-character keys delivered by `Terminal.read_key`."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    ESC = "esc"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    QUIT = "ctrl+q"
    RESIZE = "resize"


class Terminal(ABC):
    """Screen and keyboard as seen by the editor core."""

    @abstractmethod
    def current_size(self) -> tuple[int, int]:
        """Full terminal size as (rows, cols)."""

    @abstractmethod
    def read_key(self) -> str:
        """Blocks for the next key event. Raises OSError when input fails."""

    @abstractmethod
    def write_styled(self, text: str, fg: Optional[str] = None, bg: Optional[str] = None) -> None: ...

    def write_styled_line(self, text: str, fg: Optional[str] = None, bg: Optional[str] = None) -> None:
        """Writes `text` and moves the pen to the start of the next line."""
        self.write_styled(text, fg, bg)
        self.newline()

    @abstractmethod
    def newline(self) -> None: ...

    @abstractmethod
    def set_cursor_shape(self, shape: CursorShape) -> None: ...

    @abstractmethod
    def move_cursor_to(self, col: int, row: int) -> None: ...

    @abstractmethod
    def hide_cursor(self) -> None: ...

    @abstractmethod
    def show_cursor(self) -> None: ...

    @abstractmethod
    def clear_screen(self) -> None: ...

    @abstractmethod
    def clear_line(self) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...


## ================= class CursesTerminal ==============================
class CursesTerminal(Terminal):
    """Terminal backed by a curses window.

    Attributes:
        stdscr (curses.window): Window everything is drawn on.
        keybinder (KeyBinder): Decoder for raw curses input.
        config (dict): Application configuration.
    """

    COLOR_NAMES: dict[str, str] = {
        "black": "COLOR_BLACK",
        "red": "COLOR_RED",
        "green": "COLOR_GREEN",
        "yellow": "COLOR_YELLOW",
        "blue": "COLOR_BLUE",
        "magenta": "COLOR_MAGENTA",
        "cyan": "COLOR_CYAN",
        "white": "COLOR_WHITE",
    }

    def __init__(self, stdscr: "curses.window", config: Optional[dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config or {}
        self.keybinder = KeyBinder(stdscr)
        self._pen_row: int = 0
        self._pen_col: int = 0
        self._pairs: dict[tuple[int, int], int] = {}

    # --- Input ---
    def current_size(self) -> tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return rows, cols

    def read_key(self) -> str:
        return self.keybinder.read_key()

    # --- Colours ---
    def _color_index(self, color: Optional[str]) -> int:
        if color is None:
            return -1
        if color.startswith("#"):
            if curses.COLORS >= 256:
                return hex_to_xterm(color)
            return curses.COLOR_WHITE
        attr_name = self.COLOR_NAMES.get(color.lower())
        if attr_name is None:
            logging.debug("CursesTerminal: unknown colour %r, using default.", color)
            return -1
        return getattr(curses, attr_name)

    def _attr(self, fg: Optional[str], bg: Optional[str]) -> int:
        if fg is None and bg is None:
            return curses.A_NORMAL
        if not curses.has_colors():
            return curses.A_REVERSE if bg else curses.A_NORMAL

        key = (self._color_index(fg), self._color_index(bg))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return curses.A_REVERSE if bg else curses.A_NORMAL
            try:
                curses.init_pair(pair, *key)
            except curses.error as exc:
                logging.warning("init_pair failed (%s) – roll back to A_REVERSE", exc)
                return curses.A_REVERSE if bg else curses.A_NORMAL
            self._pairs[key] = pair
        return curses.color_pair(pair)

    # --- Output ---
    def write_styled(self, text: str, fg: Optional[str] = None, bg: Optional[str] = None) -> None:
        if not text:
            return
        try:
            self.stdscr.addstr(self._pen_row, self._pen_col, text, self._attr(fg, bg))
        except curses.error:
            # Writing into the bottom-right cell raises after a successful write.
            logging.debug(
                "curses.error in addstr at (%d,%d): %r", self._pen_row, self._pen_col, text
            )
        width = wcswidth(text)
        self._pen_col += width if width >= 0 else len(text)

    def newline(self) -> None:
        self._pen_row += 1
        self._pen_col = 0

    def move_cursor_to(self, col: int, row: int) -> None:
        self._pen_row, self._pen_col = row, col
        try:
            self.stdscr.move(row, col)
        except curses.error:
            logging.debug("curses.error in move to (%d,%d)", row, col)

    def set_cursor_shape(self, shape: CursorShape) -> None:
        try:
            sys.stdout.write(f"\x1b[{shape.value} q")
            sys.stdout.flush()
        except OSError as e:
            logging.debug("Cursor shape change failed: %r", e)

    def hide_cursor(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass

    def show_cursor(self) -> None:
        try:
            curses.curs_set(1)
        except curses.error:
            pass

    def clear_screen(self) -> None:
        self.stdscr.erase()

    def clear_line(self) -> None:
        try:
            self.stdscr.move(self._pen_row, 0)
            self.stdscr.clrtoeol()
        except curses.error:
            logging.debug("curses.error clearing line %d", self._pen_row)
        self._pen_col = 0

    def flush(self) -> None:
        self.stdscr.refresh()
