# ggedit/core/Position.py
"""Cursor/offset coordinates and search direction shared by the core modules."""

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class Position:
    """Zero-based column (`x`) and row (`y`) coordinate.

    A Position is not valid by itself: every consumer checks it against the
    current Document/Row bounds.
    """

    x: int = 0
    y: int = 0


class SearchDirection(Enum):
    FORWARD = auto()
    BACKWARD = auto()
