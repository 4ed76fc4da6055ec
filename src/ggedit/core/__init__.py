# src/ggedit/core/__init__.py
"""Public facade for ggedit.core: re-export main classes from CamelCase modules.

Keeps Java-like file names (Document.py, Editor.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Position import Position, SearchDirection  # noqa: F401
from .Row import Row  # noqa: F401
from .Highlighter import FileType, HighlightOptions, HighlightType  # noqa: F401
from .FileStore import FileStore  # noqa: F401
from .Document import (  # noqa: F401
    Document,
    DocumentError,
    EmptyDocumentError,
    NoFileNameError,
)
from .Viewport import ViewportController  # noqa: F401
from .Mode import Command, Insert, Mode, Normal, Search  # noqa: F401
from .Editor import EditorController  # noqa: F401


__all__ = [
    "Position",
    "SearchDirection",
    "Row",
    "FileType",
    "HighlightOptions",
    "HighlightType",
    "FileStore",
    "Document",
    "DocumentError",
    "EmptyDocumentError",
    "NoFileNameError",
    "ViewportController",
    "Mode",
    "Normal",
    "Insert",
    "Command",
    "Search",
    "EditorController",
]
