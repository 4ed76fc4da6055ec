# ggedit/core/Highlighter.py
"""Highlighter Module for ggedit
==============================
Per-character classification of row text for the render pass.

Each row is tokenized with the Pygments lexer of the document's file type.
Token types are resolved by walking up the token tree until one of the
semantic categories is reached (numbers, strings, character literals,
comments), so e.g. ``Token.Literal.Number.Hex`` and
``Token.Literal.String.Single`` land on NUMBER and STRING. Every occurrence of
the active search term then overrides all of these. Which categories are
shown is decided by a `HighlightOptions` policy attached to the document's
`FileType`.

Classes:
--------
- HighlightType: Classification of a single character, with its colours.
- HighlightOptions: Which categories the current file type shows.
- FileType: Human readable file type name, its lexer and its HighlightOptions.

Functions:
----------
- highlight_row(text, options, word, lexer): Returns one HighlightType per character.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.token import Comment, Number, String, Token, _TokenType
from pygments.util import ClassNotFound

from ggedit.utils.utils import DEFAULT_CONFIG

logger = logging.getLogger("ggedit")


class HighlightType(Enum):
    """Semantic category of one character; the value is the config colour key."""

    NONE = "default"
    NUMBER = "number"
    STRING = "string"
    CHARACTER = "character"
    COMMENT = "comment"
    MATCH = "match"

    def fg_color(self, colors: Optional[dict[str, Any]] = None) -> Optional[str]:
        """Foreground colour name for this category, or None for the terminal default."""
        palette = colors if colors is not None else DEFAULT_CONFIG["colors"]
        return palette.get(self.value)

    def bg_color(self, colors: Optional[dict[str, Any]] = None) -> Optional[str]:
        """Background colour name; only search matches paint a background."""
        if self is not HighlightType.MATCH:
            return None
        palette = colors if colors is not None else DEFAULT_CONFIG["colors"]
        return palette.get("match_bg")


@dataclass(frozen=True)
class HighlightOptions:
    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False

    def allows(self, kind: HighlightType) -> bool:
        return {
            HighlightType.NUMBER: self.numbers,
            HighlightType.STRING: self.strings,
            HighlightType.CHARACTER: self.characters,
            HighlightType.COMMENT: self.comments,
        }.get(kind, False)


CODE_OPTIONS = HighlightOptions(numbers=True, strings=True, characters=True, comments=True)

# Token tree nodes mapped to categories; lookups walk up `token_type.parent`.
TOKEN_CATEGORIES: dict[_TokenType, HighlightType] = {
    Number: HighlightType.NUMBER,
    String.Char: HighlightType.CHARACTER,
    String: HighlightType.STRING,
    Comment: HighlightType.COMMENT,
}


@dataclass(frozen=True)
class FileType:
    """File type name, the lexer that tokenizes it and its highlighting policy."""

    name: str = "No filetype"
    options: HighlightOptions = field(default_factory=HighlightOptions)
    lexer: Optional[Lexer] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_path(cls, path: Optional[str]) -> "FileType":
        """Infers the file type of `path` through Pygments' lexer registry.

        Unknown files get the default "No filetype" policy; plain text keeps
        its name but has every category switched off.
        """
        if not path:
            return cls()
        try:
            # Rows never contain line breaks; keep leading/trailing text intact.
            lexer = get_lexer_for_filename(os.path.basename(path), stripnl=False)
        except ClassNotFound:
            logger.debug("No lexer for '%s'; highlighting disabled.", path)
            return cls()

        if isinstance(lexer, TextLexer):
            return cls(name=lexer.name)
        logger.debug("File type for '%s': %s", path, lexer.name)
        return cls(name=lexer.name, options=CODE_OPTIONS, lexer=lexer)


def classify_token(token_type: _TokenType, options: HighlightOptions) -> HighlightType:
    """Category of `token_type`, walking up the token tree past disabled categories."""
    current: Optional[_TokenType] = token_type
    while current is not None and current is not Token:
        kind = TOKEN_CATEGORIES.get(current)
        if kind is not None and options.allows(kind):
            return kind
        current = current.parent
    return HighlightType.NONE


def _mark_matches(text: str, word: str, result: list[HighlightType]) -> None:
    start = text.find(word)
    while start != -1:
        for i in range(start, start + len(word)):
            result[i] = HighlightType.MATCH
        start = text.find(word, start + 1)


def highlight_row(
    text: str,
    options: HighlightOptions,
    word: Optional[str] = None,
    lexer: Optional[Lexer] = None,
) -> list[HighlightType]:
    """Classifies every character of `text`.

    Args:
        text: Row content.
        options: Categories shown for the current file type.
        word: Active search term; its occurrences override every other class.
        lexer: Pygments lexer of the file type; None leaves text unclassified.

    Returns:
        A list with exactly one HighlightType per character of `text`.
    """
    result: list[HighlightType] = []
    if lexer is not None and text:
        try:
            for token_type, value in lex(text, lexer):
                result.extend([classify_token(token_type, options)] * len(value))
        except Exception as e:
            logging.error(f"Pygments tokenization error for line '{text[:70]}...': {e}")
            result = []

    # The lexer appends a final newline; align the result with the row.
    result = result[: len(text)]
    result.extend([HighlightType.NONE] * (len(text) - len(result)))

    if word:
        _mark_matches(text, word, result)
    return result
