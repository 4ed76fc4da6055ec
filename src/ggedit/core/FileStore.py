# ggedit/core/FileStore.py
"""FileStore: reads a path into lines and writes lines back to a path.

Reading detects the encoding with `chardet` and remembers it, so a file is
written back in the encoding it was read with. I/O failures are logged and
re-raised as `OSError`; callers decide how to report them.
"""

import logging
import os
from typing import Iterable

import chardet

logger = logging.getLogger("ggedit")

CHARDET_SAMPLE_SIZE = 1024 * 20
MIN_CHARDET_CONFIDENCE = 0.75


class FileStore:
    """Line-oriented file access for a Document.

    Attributes:
        encoding (str): Encoding used for the last read and for writes.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding: str = encoding

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def _decode(self, raw: bytes, path: str) -> str:
        guess = chardet.detect(raw[:CHARDET_SAMPLE_SIZE]) if raw else {}
        encoding_guess = guess.get("encoding")
        confidence = guess.get("confidence") or 0.0
        logger.debug(
            f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f} for '{path}'."
        )

        # ASCII is a subset of UTF-8; keep UTF-8 so typed non-ASCII text survives a save.
        if encoding_guess and encoding_guess.lower() == "ascii":
            encoding_guess = "utf-8"

        candidates = []
        if encoding_guess and confidence >= MIN_CHARDET_CONFIDENCE:
            candidates.append(encoding_guess)
        candidates.extend(enc for enc in ("utf-8", "latin-1") if enc not in candidates)

        for encoding in candidates:
            try:
                text = raw.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Decoding '{path}' as '{encoding}' failed, trying next.")
                continue
            self.encoding = encoding
            return text
        # latin-1 decodes any byte sequence, so this is only reached for exotic guesses.
        self.encoding = "utf-8"
        return raw.decode("utf-8", errors="replace")

    def read_lines(self, path: str) -> list[str]:
        """Reads `path` and returns its lines without terminators.

        A trailing line break does not produce an extra empty line, and a
        carriage return before each line break is dropped.
        """
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            logger.error(f"Failed to read file '{path}': {e}")
            raise

        text = self._decode(raw, path)
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def write_all(self, path: str, lines: Iterable[str]) -> None:
        """Writes `lines` (each already carrying its terminator) to `path`."""
        try:
            with open(path, "w", encoding=self.encoding, errors="replace", newline="") as f:
                for line in lines:
                    f.write(line)
        except OSError as e:
            logger.error(f"Failed to write file '{path}': {e}", exc_info=True)
            raise
        logger.debug(f"Successfully wrote to '{path}' ({self.encoding}).")
