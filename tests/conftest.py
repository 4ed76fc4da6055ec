# tests/conftest.py
"""Pytest configuration with shared fixtures for the ggedit editor tests.

Fixtures build documents and controllers on top of the in-memory stubs in
`tests/stubs.py`, so no test needs a real terminal or touches the user's
configuration directory.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Optional

import pytest

from ggedit.core.Document import Document
from ggedit.core.Editor import EditorController
from ggedit.core.Row import Row
from ggedit.utils.utils import DEFAULT_CONFIG
from stubs import FakeTerminal, MemoryFileStore


@pytest.fixture
def config() -> dict[str, Any]:
    """A private copy of the embedded default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def file_store() -> MemoryFileStore:
    return MemoryFileStore()


@pytest.fixture
def make_document(
    config: dict[str, Any], file_store: MemoryFileStore
) -> Callable[..., Document]:
    """Factory for documents built from plain lines.

    Args (of the returned callable):
        lines: Row contents.
        file_name: Optional document name.
        dirty: Initial dirty flag.
    """

    def _make(
        lines: Iterable[str] = (), file_name: Optional[str] = None, dirty: bool = False
    ) -> Document:
        return Document(
            rows=[Row(line) for line in lines],
            file_name=file_name,
            dirty=dirty,
            file_store=file_store,
            config=config,
        )

    return _make


@pytest.fixture
def make_editor(
    config: dict[str, Any], make_document: Callable[..., Document]
) -> Callable[..., EditorController]:
    """Factory for a controller wired to a `FakeTerminal`.

    Args (of the returned callable):
        lines: Row contents of the document.
        keys: Scripted key events available to `read_key`.
        file_name: Optional document name.
        size: Terminal size as (rows, cols).
    """

    def _make(
        lines: Iterable[str] = (),
        keys: Iterable[str] = (),
        file_name: Optional[str] = None,
        size: tuple[int, int] = (24, 80),
    ) -> EditorController:
        terminal = FakeTerminal(keys, size=size)
        return EditorController(terminal, make_document(lines, file_name), config=config)

    return _make
