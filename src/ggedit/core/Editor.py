# ggedit/core/Editor.py
# ruff: noqa: E501
"""ggedit.core.Editor
=====================
EditorController: the mode state machine at the heart of ggedit.

The controller owns the Document, the cursor, the viewport and the current
Mode. One key event is processed completely (including the nested blocking
reads of the delete-line gesture and of search-result navigation) before the
next render. Rendering is delegated to `DrawScreen`; the terminal and the
file system are reached only through the `Terminal` and `FileStore`
collaborators, so the whole machine can be driven from tests with scripted
keys.

Modes and transitions:
    Normal  -> Insert  (i, a), Command (:), Search (/)
    Insert  -> Normal  (Esc; cursor steps one column left)
    Command -> Normal  (Esc, or after running the command line)
    Search  -> Normal  (Esc restores the cursor; Enter navigates with n/N
                        until Esc)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from ggedit.core.Document import Document, DocumentError
from ggedit.core.Mode import Command, Insert, Mode, Normal, Search
from ggedit.core.Position import Position, SearchDirection
from ggedit.core.Viewport import ViewportController
from ggedit.ui.DrawScreen import DrawScreen, get_string_width
from ggedit.ui.Terminal import CursorShape, Key, Terminal

logger = logging.getLogger("ggedit")

HELP_MESSAGE = "HELP: :w save | :q quit | / search"
UNSAVED_CHANGES_WARNING = "No write since last change (add ! to override)"
SEARCH_NAVIGATION_HELP = "n: next match | N: previous match | Esc: leave search"
DEFAULT_STATUS_MESSAGE_TIMEOUT = 5.0

# Normal-mode letters that alias cursor movement keys.
NORMAL_MOTIONS: dict[str, str] = {
    "h": Key.LEFT,
    "j": Key.DOWN,
    "k": Key.UP,
    "l": Key.RIGHT,
    "0": Key.HOME,
    "$": Key.END,
}

MOVEMENT_KEYS = frozenset(
    {
        Key.UP,
        Key.DOWN,
        Key.LEFT,
        Key.RIGHT,
        Key.HOME,
        Key.END,
        Key.PAGE_UP,
        Key.PAGE_DOWN,
    }
)

CURSOR_SHAPES: dict[str, CursorShape] = {
    Normal.name: CursorShape.BLOCK,
    Insert.name: CursorShape.BAR,
    Command.name: CursorShape.UNDERLINE,
    Search.name: CursorShape.UNDERLINE,
}


@dataclass
class StatusMessage:
    text: str
    time: float = field(default_factory=time.monotonic)


## ==================== EditorController Class ====================
class EditorController:
    """Class EditorController
    =========================
    Consumes key events and turns them into Document edits, cursor moves and
    mode transitions.

    Attributes:
        terminal (Terminal): Screen/keyboard collaborator.
        document (Document): The buffer being edited.
        config (dict): Application configuration.
        cursor (Position): Cursor position in document coordinates.
        viewport (ViewportController): Scroll offset owner.
        mode (Mode): Active mode; Command/Search carry their own buffers.
        should_quit (bool): Set when the main loop must stop.
        status_message (StatusMessage): Text shown in the message bar.
        drawer (DrawScreen): Render pass.
    """

    def __init__(
        self,
        terminal: Terminal,
        document: Optional[Document] = None,
        config: Optional[dict[str, Any]] = None,
        initial_status: str = HELP_MESSAGE,
    ) -> None:
        self.terminal = terminal
        self.config: dict[str, Any] = config or {}
        self.document: Document = document if document is not None else Document(config=self.config)
        self.cursor: Position = Position(0, 0)
        self.viewport = ViewportController()
        self.mode: Mode = Normal()
        self.should_quit: bool = False
        self.status_message = StatusMessage(initial_status)
        self.status_message_timeout: float = self.config.get("editor", {}).get(
            "status_message_timeout", DEFAULT_STATUS_MESSAGE_TIMEOUT
        )
        self.drawer = DrawScreen(self)
        self.terminal.set_cursor_shape(CURSOR_SHAPES[self.mode.name])
        logger.info(
            "EditorController initialized. File: %s, rows: %d",
            self.document.file_name,
            len(self.document),
        )

    # --- State helpers ---
    @property
    def offset(self) -> Position:
        return self.viewport.offset

    def text_area_size(self) -> tuple[int, int]:
        """(rows, cols) available for document text: the terminal minus status and message bars."""
        rows, cols = self.terminal.current_size()
        return max(rows - 2, 1), max(cols, 1)

    def set_status_message(self, text: str) -> None:
        self.status_message = StatusMessage(str(text))
        logging.debug(f"Status message set to: '{text}'")

    def set_mode(self, mode: Mode) -> None:
        if type(mode) is not type(self.mode):
            logging.debug(f"Mode change: {self.mode.name} -> {mode.name}")
            self.terminal.set_cursor_shape(CURSOR_SHAPES[mode.name])
        self.mode = mode

    # --- Main loop ---
    def run(self) -> None:
        """Renders, then processes one key, until `should_quit` is set.

        Terminal read failures and Ctrl+C end the loop; the terminal guard
        held by the caller restores the terminal.
        """
        logger.info("Editor main loop started.")
        while True:
            try:
                self.refresh_screen()
                if self.should_quit:
                    break
                self.process_keypress()
            except KeyboardInterrupt:
                logger.info("Main loop interrupted by KeyboardInterrupt.")
                break
            except OSError as e:
                logger.critical("Terminal I/O failed: %s", e, exc_info=True)
                break
        logger.info("Editor main loop finished.")

    def refresh_screen(self) -> None:
        self.drawer.draw()

    def process_keypress(self) -> None:
        key = self.terminal.read_key()
        self.handle_key(key)
        self.scroll()

    def scroll(self) -> None:
        """Scrolls so the cursor cell is on screen; columns are display cells."""
        rows, cols = self.text_area_size()
        cursor = self.cursor
        cell_x, cell_width = 0, 1
        row = self.document.row(cursor.y)
        if row is not None:
            cell_x = get_string_width(row.render(0, cursor.x))
            cell_width = max(get_string_width(row.render(cursor.x, cursor.x + 1)), 1)
        self.viewport.scroll(Position(cell_x, cursor.y), rows, cols, cell_width)

    def handle_key(self, key: str) -> None:
        """Dispatches one key event according to the active mode."""
        if key == Key.RESIZE:
            return
        if key == Key.QUIT:
            self.quit(force=False)
            return

        if isinstance(self.mode, Normal):
            self._handle_normal(key)
        elif isinstance(self.mode, Insert):
            self._handle_insert(key)
        elif isinstance(self.mode, Command):
            self._handle_command(self.mode, key)
        elif isinstance(self.mode, Search):
            self._handle_search(self.mode, key)

    # --- Cursor movement ---
    def _row_len(self, y: int) -> int:
        row = self.document.row(y)
        return len(row) if row is not None else 0

    def move_cursor(self, key: str) -> None:
        """Moves the cursor for a movement key, then clamps x to the target row."""
        x, y = self.cursor.x, self.cursor.y
        height = len(self.document)
        page, _ = self.text_area_size()
        width = self._row_len(y)

        if key == Key.UP:
            y = max(y - 1, 0)
        elif key == Key.DOWN:
            if y < height:
                y += 1
        elif key == Key.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = self._row_len(y)
        elif key == Key.RIGHT:
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif key == Key.PAGE_UP:
            y = max(y - page, 0)
        elif key == Key.PAGE_DOWN:
            y = min(y + page, height)
        elif key == Key.HOME:
            x = 0
        elif key == Key.END:
            x = width

        self.cursor = Position(min(x, self._row_len(y)), y)

    # --- Normal mode ---
    def _handle_normal(self, key: str) -> None:
        key = NORMAL_MOTIONS.get(key, key)
        if key in MOVEMENT_KEYS:
            self.move_cursor(key)
        elif key == "i":
            self.set_mode(Insert())
        elif key == "a":
            self.move_cursor(Key.RIGHT)
            self.set_mode(Insert())
        elif key == ":":
            self.set_mode(Command())
            self.set_status_message(":")
        elif key == "/":
            self.set_mode(Search(return_position=self.cursor))
            self.set_status_message("/")
        elif key == "d":
            self._delete_line_gesture()

    def _delete_line_gesture(self) -> None:
        """Second key of `dd`: `d` deletes the line, Esc aborts, others are re-read."""
        while True:
            key = self.terminal.read_key()
            if key == "d":
                self.document.delete_line(self.cursor)
                self.cursor = Position(min(self.cursor.x, self._row_len(self.cursor.y)), self.cursor.y)
                return
            if key == Key.ESC:
                return
            logging.debug(f"Delete-line gesture ignoring key {key!r}")

    # --- Insert mode ---
    def _handle_insert(self, key: str) -> None:
        if key == Key.ESC:
            self.set_mode(Normal())
            if self.cursor.x > 0:
                self.cursor = Position(self.cursor.x - 1, self.cursor.y)
        elif key in MOVEMENT_KEYS:
            self.move_cursor(key)
        elif key == Key.ENTER:
            self.document.insert(self.cursor, "\n")
            self.move_cursor(Key.RIGHT)
        elif key == Key.DELETE:
            self.document.delete(self.cursor)
        elif key == Key.BACKSPACE:
            if self.cursor.x > 0 or self.cursor.y > 0:
                self.move_cursor(Key.LEFT)
                self.document.delete(self.cursor)
        elif key == Key.TAB:
            self.document.insert(self.cursor, "\t")
            self.move_cursor(Key.RIGHT)
        elif len(key) == 1:
            self.document.insert(self.cursor, key)
            self.move_cursor(Key.RIGHT)

    # --- Command mode ---
    def _handle_command(self, mode: Command, key: str) -> None:
        if key == Key.ESC:
            self.set_mode(Normal())
            self.set_status_message("")
        elif key == Key.ENTER:
            self.execute_command(mode.buffer)
        elif key == Key.BACKSPACE:
            mode.buffer = mode.buffer[:-1]
            self.set_status_message(f":{mode.buffer}")
        elif len(key) == 1:
            mode.buffer += key
            self.set_status_message(f":{mode.buffer}")

    def execute_command(self, line: str) -> None:
        """Runs a command line (`q`, `q!`, `w [name]`, `wq [name]`) and returns to Normal."""
        self.set_mode(Normal())
        tokens = line.strip().lstrip(":").split()
        if not tokens:
            self.set_status_message("")
            return

        command, force = tokens[0], False
        if command.endswith("!"):
            command, force = command[:-1], True
        target = tokens[1] if len(tokens) > 1 else None
        logger.debug(f"Executing command {command!r} (force={force}, target={target!r})")

        if command == "q":
            self.quit(force=force)
        elif command == "w":
            self.save(target)
        elif command == "wq":
            self.save(target)
            self.should_quit = True
        else:
            self.set_status_message(f"Not an editor command: {line.strip()}")

    def quit(self, force: bool) -> None:
        if self.document.is_dirty() and not force:
            self.set_status_message(UNSAVED_CHANGES_WARNING)
            return
        self.should_quit = True

    def save(self, name: Optional[str] = None) -> bool:
        """Persists the document (as `name` when given) and reports the outcome."""
        try:
            message = self.document.save_as(name)
        except (DocumentError, OSError) as e:
            logger.error(f"Save failed: {e}", exc_info=isinstance(e, OSError))
            self.set_status_message(f"Error: {e}")
            return False
        self.set_status_message(message)
        return True

    # --- Search mode ---
    def _handle_search(self, mode: Search, key: str) -> None:
        if key == Key.ESC:
            self._leave_search(mode)
        elif key == Key.ENTER:
            self._navigate_results(mode)
        elif key == Key.BACKSPACE:
            mode.buffer = mode.buffer[:-1]
            if mode.buffer:
                hit = self.document.find(mode.buffer, self.cursor, SearchDirection.FORWARD)
                if hit is not None:
                    self.cursor = hit
            self.document.highlight(mode.buffer or None)
            self.set_status_message(f"/{mode.buffer}")
        elif len(key) == 1:
            mode.buffer += key
            self._incremental_search(mode)

    def _incremental_search(self, mode: Search) -> None:
        self.document.highlight(mode.buffer)
        hit = self.document.find(mode.buffer, mode.return_position, SearchDirection.FORWARD)
        if hit is None:
            self.set_status_message(f"Pattern not found: {mode.buffer}")
            return
        self.cursor = hit
        self.scroll()
        self.set_status_message(f"/{mode.buffer}")

    def _leave_search(self, mode: Search) -> None:
        self.cursor = mode.return_position
        mode.buffer = ""
        self.document.highlight(None)
        self.set_mode(Normal())
        self.set_status_message("")

    def find_next(self, query: str) -> Optional[Position]:
        return self.document.find(
            query, Position(self.cursor.x + 1, self.cursor.y), SearchDirection.FORWARD
        )

    def find_previous(self, query: str) -> Optional[Position]:
        x, y = self.cursor.x, self.cursor.y
        if x > 0:
            start = Position(x - 1, y)
        elif y > 0:
            start = Position(self._row_len(y - 1), y - 1)
        else:
            return None
        return self.document.find(query, start, SearchDirection.BACKWARD)

    def _navigate_results(self, mode: Search) -> None:
        """Blocking n/N loop over the matches of the current query; Esc leaves search."""
        self.set_status_message(SEARCH_NAVIGATION_HELP)
        while True:
            self.scroll()
            self.refresh_screen()
            key = self.terminal.read_key()
            if key == Key.ESC:
                self._leave_search(mode)
                return
            if key == "n":
                hit = self.find_next(mode.buffer)
                boundary = "search hit BOTTOM"
            elif key == "N":
                hit = self.find_previous(mode.buffer)
                boundary = "search hit TOP"
            else:
                continue

            if hit is None:
                self.set_status_message(f"{boundary}: {mode.buffer}")
            else:
                self.cursor = hit
                self.set_status_message(f"/{mode.buffer}")
