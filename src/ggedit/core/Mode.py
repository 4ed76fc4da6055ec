# ggedit/core/Mode.py
"""Editor modes as a closed sum type.

Each mode is its own dataclass so transient state lives only where it is
legal: a command buffer exists only in `Command`, a query and its return
position only in `Search`.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from ggedit.core.Position import Position


@dataclass(frozen=True)
class Normal:
    name: ClassVar[str] = "Normal"


@dataclass(frozen=True)
class Insert:
    name: ClassVar[str] = "Insert"


@dataclass
class Command:
    name: ClassVar[str] = "Command"
    buffer: str = ""


@dataclass
class Search:
    return_position: Position
    name: ClassVar[str] = "Search"
    buffer: str = ""


Mode = Union[Normal, Insert, Command, Search]
