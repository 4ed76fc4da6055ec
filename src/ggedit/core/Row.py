# ggedit/core/Row.py
"""Row Module for ggedit
======================
A single line of text with its cached highlight classification.

Rows are addressed by code point: a column is an index into the row's
string, never a byte offset and never a display cell. Display concerns (tab
expansion, placeholder glyphs for non-printable characters) are applied only
by `render` / `render_segments`.

The highlight list is a pure function of (content, options, search word) and
is recomputed eagerly by the Document after every mutation, so the invariant
``len(row.highlighting) == len(row)`` holds whenever a Row is read.
"""

import unicodedata
from typing import Optional

from pygments.lexer import Lexer

from ggedit.core.Highlighter import HighlightOptions, HighlightType, highlight_row
from ggedit.core.Position import SearchDirection

DEFAULT_TAB_STOP = 4
PLACEHOLDER_GLYPH = "?"

_NON_PRINTABLE_CATEGORIES = ("Cc", "Cf", "Cs", "Co")


def _display_char(ch: str, tab_stop: int) -> str:
    if ch == "\t":
        return " " * tab_stop
    if unicodedata.category(ch) in _NON_PRINTABLE_CATEGORIES:
        return PLACEHOLDER_GLYPH
    return ch


## ==================== Row Class ====================
class Row:
    """One editable line of a Document.

    Attributes:
        string (str): The raw row content.
        highlighting (list[HighlightType]): One classification per character.
        tab_stop (int): Number of cells a tab expands to when rendered.
    """

    def __init__(self, string: str = "", tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.string: str = string
        self.tab_stop: int = tab_stop
        self.highlighting: list[HighlightType] = [HighlightType.NONE] * len(string)

    def __len__(self) -> int:
        return len(self.string)

    def __repr__(self) -> str:
        return f"Row({self.string!r})"

    # --- Content mutation ---
    def insert(self, column: int, char: str) -> None:
        """Inserts `char` before `column`; columns past the end append."""
        if column >= len(self.string):
            self.string += char
        else:
            self.string = self.string[:column] + char + self.string[column:]

    def delete(self, column: int) -> bool:
        """Removes the character at `column`. Returns False when out of range."""
        if column < 0 or column >= len(self.string):
            return False
        self.string = self.string[:column] + self.string[column + 1 :]
        return True

    def split(self, column: int) -> "Row":
        """Truncates this row to `[0, column)` and returns the tail as a new Row."""
        column = max(0, min(column, len(self.string)))
        tail = Row(self.string[column:], tab_stop=self.tab_stop)
        self.string = self.string[:column]
        return tail

    def append(self, other: "Row") -> None:
        self.string += other.string

    # --- Rendering ---
    def render(self, start: int, end: int) -> str:
        """Display projection of characters `[start, end)` clipped to the row."""
        end = min(end, len(self.string))
        start = max(0, min(start, end))
        return "".join(_display_char(ch, self.tab_stop) for ch in self.string[start:end])

    def render_segments(self, start: int, end: int) -> list[tuple[str, HighlightType]]:
        """Like `render`, grouped into runs that share one highlight class.

        Tab expansions inherit the class of the tab character they replace.
        """
        end = min(end, len(self.string))
        start = max(0, min(start, end))
        segments: list[tuple[str, HighlightType]] = []
        run: list[str] = []
        current: Optional[HighlightType] = None

        for index in range(start, end):
            kind = (
                self.highlighting[index]
                if index < len(self.highlighting)
                else HighlightType.NONE
            )
            if kind is not current and run:
                segments.append(("".join(run), current))  # type: ignore[arg-type]
                run = []
            current = kind
            run.append(_display_char(self.string[index], self.tab_stop))

        if run:
            segments.append(("".join(run), current))  # type: ignore[arg-type]
        return segments

    # --- Search ---
    def find(
        self, query: str, from_col: int, direction: SearchDirection
    ) -> Optional[int]:
        """Column of the first occurrence of `query` relative to `from_col`.

        Forward finds the first match starting at or after `from_col`;
        Backward finds the last match starting at or before it. Only this row
        is searched.
        """
        if not query or from_col < 0 or from_col > len(self.string):
            return None
        if direction is SearchDirection.FORWARD:
            index = self.string.find(query, from_col)
        else:
            index = self.string.rfind(query, 0, from_col + len(query))
        return index if index != -1 else None

    # --- Highlighting ---
    def highlight(
        self,
        options: HighlightOptions,
        word: Optional[str] = None,
        lexer: Optional[Lexer] = None,
    ) -> None:
        self.highlighting = highlight_row(self.string, options, word, lexer)
