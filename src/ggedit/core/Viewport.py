# ggedit/core/Viewport.py
"""ViewportController: keeps the cursor inside the visible window.

Rows are scrolled in document lines. Columns are scrolled in display cells,
so tabs and wide glyphs take as much room in the offset as they do on screen.
"""

from ggedit.core.Position import Position


def compute_offset(
    cursor: Position, offset: Position, rows: int, cols: int, width: int = 1
) -> Position:
    """Returns the smallest scroll of `offset` that makes `cursor` visible.

    Each axis is independent: scrolling up/left snaps the offset to the
    cursor, scrolling down/right moves it by exactly the overflow. `cursor.x`
    is a display column and `width` is the number of cells under the cursor;
    all of them must fit on screen.
    """
    rows = max(rows, 1)
    cols = max(cols, 1)
    width = min(max(width, 1), cols)
    x, y = offset.x, offset.y
    if cursor.y < y:
        y = cursor.y
    elif cursor.y >= y + rows:
        y = cursor.y - rows + 1
    if cursor.x < x:
        x = cursor.x
    elif cursor.x + width > x + cols:
        x = cursor.x + width - cols
    return Position(x, y)


class ViewportController:
    """Owns the current scroll offset; recomputed after every keystroke.

    Attributes:
        offset (Position): Top document row (y) and leftmost display cell (x)
            shown on screen.
    """

    def __init__(self) -> None:
        self.offset: Position = Position(0, 0)

    def scroll(self, cursor: Position, rows: int, cols: int, width: int = 1) -> Position:
        self.offset = compute_offset(cursor, self.offset, rows, cols, width)
        return self.offset

    def visible_rows(self, rows: int) -> range:
        """Document row indices mapped to the `rows` text lines of the screen."""
        return range(self.offset.y, self.offset.y + max(rows, 0))
