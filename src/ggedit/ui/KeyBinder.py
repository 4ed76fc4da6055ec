# ggedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Translates raw curses input into the abstract key names the editor core
understands.

A key event is a plain string:
- a single printable character stands for itself ("a", ":", "/", "$"),
- every other key is a lowercase name ("up", "pagedown", "esc", "enter",
  "backspace", "delete", "tab", "ctrl+q", "resize", ...).

Input arrives through `get_wch` so non-ASCII text is delivered as whole code
points. A lone ESC, CSI/SS3 escape sequences and curses key codes are all
normalised here; nothing downstream sees terminal-specific codes.
"""

import curses
import logging
import re
from typing import Optional

from ggedit.utils.logging_config import KEY_LOGGER


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Decodes curses input into key names.

    Attributes:
        stdscr: The curses window keys are read from.
        curses_key_names (dict[int, str]): curses KEY_* codes to key names.
    """

    # Normalised escape sequences; keys exclude the leading ESC.
    ESCAPE_SEQUENCE_MAP: dict[str, str] = {
        "[A": "up", "[B": "down", "[C": "right", "[D": "left",
        "OA": "up", "OB": "down", "OC": "right", "OD": "left",
        "[H": "home", "[F": "end", "OH": "home", "OF": "end",
        "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",
        "[2~": "insert", "[3~": "delete", "[5~": "pageup", "[6~": "pagedown",
    }

    CONTROL_CHAR_NAMES: dict[str, str] = {
        "\n": "enter",
        "\r": "enter",
        "\t": "tab",
        "\x7f": "backspace",
        "\x08": "backspace",
        "\x1b": "esc",
    }

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.curses_key_names: dict[int, str] = {
            curses.KEY_UP: "up",
            curses.KEY_DOWN: "down",
            curses.KEY_LEFT: "left",
            curses.KEY_RIGHT: "right",
            curses.KEY_HOME: "home",
            curses.KEY_END: "end",
            curses.KEY_PPAGE: "pageup",
            curses.KEY_NPAGE: "pagedown",
            curses.KEY_BACKSPACE: "backspace",
            curses.KEY_DC: "delete",
            curses.KEY_IC: "insert",
            curses.KEY_ENTER: "enter",
            curses.KEY_RESIZE: "resize",
        }
        logging.debug("KeyBinder initialized for window: %s", stdscr)

    def decode(self, raw: int | str) -> Optional[str]:
        """Maps one `get_wch` result to a key name; None for keys the editor ignores."""
        if isinstance(raw, int):
            return self.curses_key_names.get(raw)
        if raw in self.CONTROL_CHAR_NAMES:
            return self.CONTROL_CHAR_NAMES[raw]
        if len(raw) == 1 and "\x01" <= raw <= "\x1a":
            return f"ctrl+{chr(ord(raw) + 96)}"
        if raw.isprintable():
            return raw
        return None

    def _read_escape_sequence(self) -> str:
        """Drains the bytes following an ESC; empty string for a lone ESC."""
        seq = ""
        self.stdscr.nodelay(True)
        try:
            while True:
                try:
                    nx = self.stdscr.get_wch()
                except curses.error:
                    break
                seq += nx if isinstance(nx, str) else f"<{nx}>"
        finally:
            self.stdscr.nodelay(False)
        return seq

    def decode_escape_sequence(self, seq: str) -> str:
        """Key name for ESC + `seq`; unknown sequences degrade to a plain ESC."""
        if not seq:
            return "esc"
        if seq[0] == "\x1b":
            seq = seq[1:]
        mapped = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if not mapped:
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            mapped = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
        if mapped:
            return mapped
        logging.warning("KeyBinder: unknown escape sequence: ESC + %r", seq)
        return "esc"

    def read_key(self) -> str:
        """Blocks until a key the editor understands arrives and returns its name.

        Raises:
            OSError: The terminal read failed.
        """
        while True:
            try:
                raw = self.stdscr.get_wch()
            except curses.error as e:
                raise OSError(f"terminal read failed: {e}") from e

            if raw == "\x1b":
                key: Optional[str] = self.decode_escape_sequence(self._read_escape_sequence())
            else:
                key = self.decode(raw)

            if key is None:
                logging.debug("KeyBinder: ignoring raw input %r", raw)
                continue
            KEY_LOGGER.debug("raw=%r key=%r", raw, key)
            return key
