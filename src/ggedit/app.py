#!/usr/bin/env python3
# ggedit/app.py
"""
ggedit Application Entry Point
==============================

Launches the editor. It performs:
1) Environment Loading: reads ~/.config/ggedit/.env early (GGEDIT_KEYTRACE).
2) Configuration & Logging: loads config and initializes logging ASAP.
3) Curses Wrapper: safely initializes/tears down curses.
4) Terminal Guard: holds TerminalAppMode for the whole session so the terminal
   is restored on every exit path.
5) Application Run: opens (or names) the document and runs the controller.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ggedit.core.Document import Document
from ggedit.core.Editor import HELP_MESSAGE, EditorController
from ggedit.core.FileStore import FileStore
from ggedit.ui.Terminal import CursesTerminal
from ggedit.ui.TerminalAppMode import TerminalAppMode
from ggedit.utils.logging_config import setup_logging
from ggedit.utils.utils import get_config_dir, load_config

logger = logging.getLogger("ggedit")


def load_document(
    file_to_open: Optional[str],
    config: dict[str, Any],
    file_store: Optional[FileStore] = None,
) -> tuple[Document, str]:
    """Returns the document to edit and the first status message.

    An existing path is opened, a missing one becomes a new named (dirty)
    document, and a read failure falls back to an empty document whose status
    explains what went wrong.
    """
    store = file_store or FileStore()
    if not file_to_open:
        return Document(file_store=store, config=config), HELP_MESSAGE

    path = str(Path(file_to_open).expanduser())
    if not store.exists(path):
        logger.info("'%s' does not exist; starting a new named document.", path)
        return Document.from_empty_named(path, file_store=store, config=config), HELP_MESSAGE

    try:
        return Document.open(path, file_store=store, config=config), HELP_MESSAGE
    except OSError as e:
        logger.error("Error opening file '%s': %s", path, e)
        return Document(file_store=store, config=config), f"Error opening file: {e}"


def main_app_runner(stdscr: curses.window, config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`: builds the controller and runs it inside the
    terminal guard.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path (may or may not exist on disk).
    """
    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        try:
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        except (ValueError, OSError):
            pass

    document, status = load_document(file_to_open, config)
    with TerminalAppMode(stdscr):
        editor = EditorController(
            CursesTerminal(stdscr, config), document, config=config, initial_status=status
        )
        editor.run()


def start() -> None:
    """Loads environment, config and logging, then runs the curses application."""
    try:
        load_dotenv(dotenv_path=get_config_dir() / ".env")
    except OSError:
        # HOME may be missing; defaults apply.
        pass

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("ggedit starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = sys.argv[1] if len(sys.argv) > 1 and sys.argv[1].strip() else None

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("ggedit shut down gracefully.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
