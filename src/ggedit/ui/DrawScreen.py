# ggedit/ui/DrawScreen.py
"""DrawScreen.py
================
DrawScreen: the render pass of the ggedit editor.

It is responsible for:
- drawing the visible slice of document rows with per-character highlighting,
- marking lines past the end of the document with `~`,
- showing the welcome banner on an empty document,
- rendering the status bar (file name, dirty marker, mode, line position),
- rendering the message bar while the status message is still fresh,
- placing the terminal cursor on the document cursor.

All output goes through the `Terminal` collaborator, so the renderer works
the same against curses and against the in-memory terminal used in tests.
Display widths are measured with `wcwidth` so wide glyphs never overflow the
screen.
"""

import logging
import time
from typing import TYPE_CHECKING, Any, cast

from wcwidth import wcswidth, wcwidth

from ggedit import __version__
from ggedit.utils.utils import DEFAULT_CONFIG

if TYPE_CHECKING:
    from ggedit.core.Editor import EditorController
    from ggedit.core.Row import Row
    from ggedit.ui.Terminal import Terminal


def get_char_width(ch: str) -> int:
    """Width (0-2 cells) of a single code point; undefined widths count as 1."""
    width = wcwidth(ch)
    return width if width >= 0 else 1


def get_string_width(text: str) -> int:
    """Display width of `text`, falling back to a per-character sum."""
    width = cast(int, wcswidth(text))
    if width != -1:
        return width
    return sum(get_char_width(ch) for ch in text)


def truncate_string(s: str, max_width: int) -> str:
    """Return `s` clipped to visual width `max_width`."""
    result: list[str] = []
    consumed = 0
    for ch in s:
        w = get_char_width(ch)
        if consumed + w > max_width:
            break
        result.append(ch)
        consumed += w
    return "".join(result)


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    ====================
    Renders one frame of the editor from the controller's state.

    Attributes:
        editor (EditorController): Source of document, cursor, offset, mode and status.
        colors (dict[str, Any]): Colour names keyed by highlight/status role.
    """

    def __init__(self, editor: "EditorController") -> None:
        self.editor = editor
        self.colors: dict[str, Any] = {
            **DEFAULT_CONFIG["colors"],
            **editor.config.get("colors", {}),
        }

    @property
    def terminal(self) -> "Terminal":
        return self.editor.terminal

    def draw(self) -> None:
        """Renders a complete frame and flushes it."""
        terminal = self.terminal
        terminal.hide_cursor()
        terminal.move_cursor_to(0, 0)

        if self.editor.should_quit:
            terminal.clear_screen()
            terminal.write_styled_line("Goodbye.")
            terminal.flush()
            return

        rows, cols = self.editor.text_area_size()
        self._draw_rows(rows, cols)
        self._draw_status_bar(rows, cols)
        self._draw_message_bar(rows + 1, cols)
        self._position_cursor(cols)
        terminal.show_cursor()
        terminal.flush()

    # --- Text area ---
    def _draw_rows(self, rows: int, cols: int) -> None:
        document = self.editor.document
        for screen_row, doc_index in enumerate(self.editor.viewport.visible_rows(rows)):
            self.terminal.move_cursor_to(0, screen_row)
            self.terminal.clear_line()
            row = document.row(doc_index)
            if row is not None:
                self._draw_row(row, cols)
            elif document.is_empty() and screen_row == rows // 3:
                self._draw_welcome_message(cols)
            else:
                self.terminal.write_styled("~", self.colors.get("empty_line"))

    def _draw_row(self, row: "Row", cols: int) -> None:
        """Draws display cells `[offset.x, offset.x + cols)` of `row`.

        A wide glyph cut by the left edge is padded with blanks; one cut by the
        right edge is left out.
        """
        left = self.editor.offset.x
        right = left + cols
        column = 0
        for text, kind in row.render_segments(0, len(row)):
            if column >= right:
                break
            visible: list[str] = []
            for ch in text:
                if column >= right:
                    break
                width = get_char_width(ch)
                if column >= left and column + width <= right:
                    visible.append(ch)
                elif column < left < column + width:
                    visible.append(" " * (min(column + width, right) - left))
                column += width
            if visible:
                self.terminal.write_styled(
                    "".join(visible), kind.fg_color(self.colors), kind.bg_color(self.colors)
                )

    def _draw_welcome_message(self, cols: int) -> None:
        message = f"ggedit -- version {__version__}"
        padding = max(cols - len(message), 0) // 2
        line = "~" + " " * max(padding - 1, 0) + message
        self.terminal.write_styled(truncate_string(line, cols))

    # --- Bars ---
    def status_line(self, cols: int) -> str:
        """`<name>[ [+]] <padding> [ <Mode> ] <row>/<rows>` fitted to `cols` cells."""
        document = self.editor.document
        name = (document.file_name or "[No Name]")[:20]
        left = f"{name}{' [+]' if document.is_dirty() else ''}"
        right = f"[ {self.editor.mode.name} ] {self.editor.cursor.y + 1}/{len(document)}"
        gap = max(cols - get_string_width(left) - get_string_width(right), 1)
        status = truncate_string(f"{left}{' ' * gap}{right}", cols)
        return status + " " * max(cols - get_string_width(status), 0)

    def _draw_status_bar(self, screen_row: int, cols: int) -> None:
        self.terminal.move_cursor_to(0, screen_row)
        self.terminal.clear_line()
        self.terminal.write_styled(
            self.status_line(cols),
            self.colors.get("status_fg"),
            self.colors.get("status_bg"),
        )

    def _draw_message_bar(self, screen_row: int, cols: int) -> None:
        self.terminal.move_cursor_to(0, screen_row)
        self.terminal.clear_line()
        message = self.editor.status_message
        if time.monotonic() - message.time < self.editor.status_message_timeout:
            self.terminal.write_styled(truncate_string(message.text, cols))

    # --- Cursor ---
    def _position_cursor(self, cols: int) -> None:
        cursor, offset = self.editor.cursor, self.editor.offset
        row = self.editor.document.row(cursor.y)
        screen_x = 0
        if row is not None:
            screen_x = get_string_width(row.render(0, cursor.x)) - offset.x
        screen_x = min(max(screen_x, 0), max(cols - 1, 0))
        screen_y = max(cursor.y - offset.y, 0)
        logging.debug(f"Cursor at doc ({cursor.x},{cursor.y}) -> screen ({screen_x},{screen_y})")
        self.terminal.move_cursor_to(screen_x, screen_y)
