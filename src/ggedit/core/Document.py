# ggedit/core/Document.py
"""Document Module for ggedit
===========================
The in-memory buffer: an ordered list of Rows plus file identity, dirty state
and the file type that selects highlighting rules.

Edit operations take a `Position` and silently ignore positions outside the
document, except ``y == len(document)`` which is the "append a new row" case.
Persistence goes through a `FileStore`; I/O failures surface as `OSError`,
the remaining refusals as `DocumentError` subclasses.

Classes:
--------
- DocumentError, EmptyDocumentError, NoFileNameError: persistence refusals.
- Document: Rows, identity, dirty flag, edit/search/persist operations.
"""

import logging
from typing import Any, Iterator, Optional

from ggedit.core.FileStore import FileStore
from ggedit.core.Highlighter import FileType
from ggedit.core.Position import Position, SearchDirection
from ggedit.core.Row import DEFAULT_TAB_STOP, Row

logger = logging.getLogger("ggedit")


class DocumentError(Exception):
    """Base class for refusals raised by Document persistence."""


class EmptyDocumentError(DocumentError):
    def __init__(self) -> None:
        super().__init__("Document is empty")


class NoFileNameError(DocumentError):
    def __init__(self) -> None:
        super().__init__("No file name")


## ==================== Document Class ====================
class Document:
    """Class Document
    ===================
    Ordered buffer of Rows with file identity and dirty tracking.

    Attributes:
        file_name (Optional[str]): Path the document persists to, if any.
        file_type (FileType): Type inferred from `file_name`; selects highlighting.
        file_store (FileStore): Collaborator used to read and write lines.
        config (dict): Configuration used for file type inference and tab stops.

    Invariants:
        - `dirty` becomes True on every successful mutation and False only
          after a successful persist to the document's own `file_name`.
        - Every row's highlighting is current for (content, file type, active
          search term).
    """

    def __init__(
        self,
        rows: Optional[list[Row]] = None,
        file_name: Optional[str] = None,
        dirty: bool = False,
        file_store: Optional[FileStore] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> None:
        self.config: dict[str, Any] = config or {}
        self.tab_stop: int = self.config.get("editor", {}).get("tab_stop", DEFAULT_TAB_STOP)
        self.rows: list[Row] = rows if rows is not None else []
        self.file_name: Optional[str] = file_name or None
        self.file_store: FileStore = file_store or FileStore()
        self.file_type: FileType = FileType.from_path(self.file_name)
        self._dirty: bool = dirty
        self._search_term: Optional[str] = None
        for row in self.rows:
            row.tab_stop = self.tab_stop
            self._highlight_row(row)

    # --- Construction ---
    @classmethod
    def open(
        cls,
        path: str,
        file_store: Optional[FileStore] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> "Document":
        """Loads `path` into a clean Document. Raises OSError on read failure."""
        store = file_store or FileStore()
        lines = store.read_lines(path)
        logger.info(f"Opened '{path}' ({len(lines)} lines, {store.encoding}).")
        return cls(
            rows=[Row(line) for line in lines],
            file_name=path,
            dirty=False,
            file_store=store,
            config=config,
        )

    @classmethod
    def from_empty_named(
        cls,
        name: str,
        file_store: Optional[FileStore] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> "Document":
        """A new, unsaved file: no rows, the given name, dirty."""
        return cls(file_name=name, dirty=True, file_store=file_store, config=config)

    # --- Accessors ---
    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def is_empty(self) -> bool:
        return not self.rows

    def is_dirty(self) -> bool:
        return self._dirty

    def file_type_name(self) -> str:
        return self.file_type.name

    def lines(self) -> list[str]:
        return [row.string for row in self.rows]

    def size_in_bytes(self) -> int:
        """Characters plus one terminator per row (not encoded byte length)."""
        return sum(len(row) + 1 for row in self.rows)

    # --- Highlighting ---
    def _highlight_row(self, row: Row) -> None:
        row.highlight(self.file_type.options, self._search_term, self.file_type.lexer)

    def highlight(self, word: Optional[str]) -> None:
        """Sets (or clears, with None/empty) the active search term and re-highlights."""
        self._search_term = word or None
        for row in self.rows:
            self._highlight_row(row)

    # --- Editing ---
    def insert(self, at: Position, char: str) -> None:
        if at.y > len(self.rows):
            return
        if char == "\n":
            self.insert_newline(at)
            return
        if at.y == len(self.rows):
            row = Row(char, tab_stop=self.tab_stop)
            self.rows.append(row)
        else:
            row = self.rows[at.y]
            row.insert(at.x, char)
        self._highlight_row(row)
        self._dirty = True

    def insert_newline(self, at: Position) -> None:
        if at.y > len(self.rows):
            return
        if at.y == len(self.rows):
            self.rows.append(Row(tab_stop=self.tab_stop))
        else:
            current = self.rows[at.y]
            tail = current.split(at.x)
            self._highlight_row(current)
            self._highlight_row(tail)
            self.rows.insert(at.y + 1, tail)
        self._dirty = True

    def delete(self, at: Position) -> None:
        if at.y >= len(self.rows):
            return
        row = self.rows[at.y]
        if at.x == len(row) and at.y + 1 < len(self.rows):
            row.append(self.rows.pop(at.y + 1))
        elif not row.delete(at.x):
            return
        self._highlight_row(row)
        self._dirty = True

    def delete_line(self, at: Position) -> None:
        if at.y >= len(self.rows):
            return
        del self.rows[at.y]
        self._dirty = True

    # --- Search ---
    def find(
        self, query: str, at: Position, direction: SearchDirection
    ) -> Optional[Position]:
        """Next occurrence of `query` from `at` in `direction`, without wraparound.

        Forward scans rows `at.y` to the last row, Backward scans rows `at.y`
        down to 0. The first scanned row is searched from `at.x`; later rows
        from column 0 (Forward) or from their end (Backward).
        """
        if not query or at.y >= len(self.rows):
            return None

        if direction is SearchDirection.FORWARD:
            x = at.x
            for y in range(at.y, len(self.rows)):
                hit = self.rows[y].find(query, x, direction)
                if hit is not None:
                    return Position(hit, y)
                x = 0
        else:
            x = at.x
            for y in range(at.y, -1, -1):
                row = self.rows[y]
                hit = row.find(query, min(x, len(row)), direction)
                if hit is not None:
                    return Position(hit, y)
                if y > 0:
                    x = len(self.rows[y - 1])
        return None

    # --- Persistence ---
    def save(self) -> str:
        """Writes every row to `file_name` and returns the status message.

        Raises:
            EmptyDocumentError: The document is empty and clean.
            NoFileNameError: The document has no file name.
            OSError: The FileStore could not write.
        """
        if self.is_empty() and not self._dirty:
            raise EmptyDocumentError()
        if not self.file_name:
            raise NoFileNameError()

        self.file_store.write_all(self.file_name, (row.string + "\n" for row in self.rows))
        self.file_type = FileType.from_path(self.file_name)
        for row in self.rows:
            self._highlight_row(row)
        self._dirty = False
        message = f'"{self.file_name}" {len(self.rows)}L, {self.size_in_bytes()}B written'
        logger.info(message)
        return message

    def save_as(self, name: Optional[str] = None) -> str:
        """Persists under `name` when given, else under the current name.

        Saving under a different name than the current one writes a copy:
        the current name is restored afterwards (on success and on failure)
        and the dirty flag is left untouched. A document without a name
        adopts `name`.
        """
        if self.is_empty() and not self._dirty:
            raise EmptyDocumentError()
        if not name or name == self.file_name or not self.file_name:
            if name:
                self.file_name = name
            return self.save()

        previous_name = self.file_name
        previous_dirty = self._dirty
        previous_type = self.file_type
        self.file_name = name
        try:
            return self.save()
        finally:
            self.file_name = previous_name
            self._dirty = previous_dirty
            if self.file_type != previous_type:
                self.file_type = previous_type
                for row in self.rows:
                    self._highlight_row(row)
