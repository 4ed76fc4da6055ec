# tests/stubs.py
"""Test stubs for ggedit editor tests.

This module provides in-memory implementations of the editor's two
collaborators, so the controller and the render pass can be driven without a
real terminal or file system:

- `FakeTerminal`: scripted key events plus a character grid of everything
  written to the screen.
- `MemoryFileStore`: a dict-backed `FileStore`.
"""

from collections import deque
from typing import Iterable, Optional

from ggedit.core.FileStore import FileStore
from ggedit.ui.Terminal import CursorShape, Terminal


class FakeTerminal(Terminal):
    """Terminal that replays scripted keys and records output."""

    def __init__(self, keys: Iterable[str] = (), size: tuple[int, int] = (24, 80)) -> None:
        self.keys: deque[str] = deque(keys)
        self.size = size
        self.screen: dict[int, str] = {}
        self.writes: list[tuple[int, int, str, Optional[str], Optional[str]]] = []
        self.cursor_shapes: list[CursorShape] = []
        self.cursor: tuple[int, int] = (0, 0)
        self.cursor_visible: bool = True
        self.flushes: int = 0
        self._row = 0
        self._col = 0

    # ---- input ----
    def feed(self, *keys: str) -> None:
        self.keys.extend(keys)

    def current_size(self) -> tuple[int, int]:
        return self.size

    def read_key(self) -> str:
        if not self.keys:
            # Ends the controller's main loop the way a dead terminal would.
            raise OSError("no more scripted keys")
        return self.keys.popleft()

    # ---- output ----
    def write_styled(self, text: str, fg: Optional[str] = None, bg: Optional[str] = None) -> None:
        self.writes.append((self._row, self._col, text, fg, bg))
        line = self.screen.get(self._row, "").ljust(self._col)
        self.screen[self._row] = line[: self._col] + text + line[self._col + len(text) :]
        self._col += len(text)

    def newline(self) -> None:
        self._row += 1
        self._col = 0

    def set_cursor_shape(self, shape: CursorShape) -> None:
        self.cursor_shapes.append(shape)

    def move_cursor_to(self, col: int, row: int) -> None:
        self._row, self._col = row, col
        self.cursor = (col, row)

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def show_cursor(self) -> None:
        self.cursor_visible = True

    def clear_screen(self) -> None:
        self.screen.clear()

    def clear_line(self) -> None:
        self.screen[self._row] = ""
        self._col = 0

    def flush(self) -> None:
        self.flushes += 1

    # ---- helpers for assertions ----
    def line(self, row: int) -> str:
        return self.screen.get(row, "")


class MemoryFileStore(FileStore):
    """FileStore backed by a dict of path -> file content."""

    def __init__(self, files: Optional[dict[str, str]] = None) -> None:
        super().__init__()
        self.files: dict[str, str] = dict(files or {})
        self.fail_writes: bool = False

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_lines(self, path: str) -> list[str]:
        if path not in self.files:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        lines = self.files[path].split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def write_all(self, path: str, lines: Iterable[str]) -> None:
        if self.fail_writes:
            raise PermissionError(f"Permission denied: '{path}'")
        self.files[path] = "".join(lines)
