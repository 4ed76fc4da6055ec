# ggedit/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
import sys
from types import TracebackType
from typing import Optional

try:
    from curses import tigetstr, setupterm, putp
except Exception:  # pragma: no cover
    tigetstr = None  # type: ignore[assignment]
    setupterm = None  # type: ignore[assignment]
    putp = None  # type: ignore[assignment]


class TerminalAppMode:
    """
    Scoped ownership of the terminal's application state:

    - Alternate screen buffer (smcup/rmcup) so the shell prompt is hidden.
    - Application cursor keys (smkx/rmkx).
    - raw + noecho (+ cbreak fallback), keypad(True).
    - Short ESC delay so a lone Esc leaves Insert mode promptly.

    Use as a context manager; the terminal (including the cursor shape) is
    restored on every exit path, errors included:

        with TerminalAppMode(stdscr):
            editor.run()
    """

    def __init__(self, stdscr: Optional[curses.window] = None) -> None:
        self._entered: bool = False
        self._stdscr: Optional[curses.window] = stdscr

    def __enter__(self) -> "TerminalAppMode":
        if self._stdscr is None:
            raise ValueError("TerminalAppMode needs a curses window to enter")
        self.enter(self._stdscr)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc is not None:
            logging.debug("TerminalAppMode: leaving after %r", exc)
        self.exit()

    def enter(self, stdscr: curses.window) -> None:
        self._stdscr = stdscr

        try:
            if setupterm:
                setupterm()
        except Exception as e:
            logging.debug("setupterm() failed or not required: %r", e)

        self._tputs("smcup")
        self._tputs("smkx")

        try:
            curses.raw()
        except curses.error:
            curses.cbreak()
        curses.noecho()

        stdscr.keypad(True)

        try:
            curses.set_escdelay(25)
        except Exception:
            pass

        try:
            curses.use_default_colors()
        except curses.error:
            pass

        stdscr.scrollok(False)
        stdscr.leaveok(False)
        stdscr.clearok(True)
        stdscr.erase()
        stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered (alternate screen + app cursor keys).")

    def exit(self) -> None:
        if not self._entered:
            return

        try:
            if self._stdscr is not None:
                self._stdscr.keypad(False)
        except curses.error:
            pass

        try:
            curses.noraw()
        except curses.error:
            try:
                curses.nocbreak()
            except curses.error:
                pass
        try:
            curses.echo()
        except curses.error:
            pass

        # Back to the terminal's default cursor shape.
        try:
            sys.stdout.write("\x1b[0 q")
            sys.stdout.flush()
        except OSError:
            pass

        self._tputs("rmkx")
        self._tputs("rmcup")

        self._entered = False
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            if tigetstr and putp:
                s = tigetstr(capname)
                if s:
                    putp(s.decode("ascii", "ignore"))
        except Exception as e:
            # Non-fatal where capability is missing.
            logging.debug("tputs(%s) skipped: %r", capname, e)
