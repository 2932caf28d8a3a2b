# File: cs2ts/utils.py
"""
cs2ts - Utility Functions & Helpers
===================================
String casing, indentation, file I/O and timing helpers shared by the
translator, the CLI and the web adapter.  Standard library only.
"""

from __future__ import annotations

import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.utils")


# ---------------------------------------------------------------------------
# Casing
# ---------------------------------------------------------------------------


def to_camel_case(name: str) -> str:
    """
    Lower-case the first character of *name*; the rest is kept as-is.

    Examples:
        >>> to_camel_case("FirstName")
        'firstName'
        >>> to_camel_case("URL")
        'uRL'
        >>> to_camel_case("Ärger")
        'ärger'
    """
    if not name:
        return ""
    return name[0].lower() + name[1:]


# ---------------------------------------------------------------------------
# Indentation
# ---------------------------------------------------------------------------


def indent_block(text: str, prefix: str = "  ") -> str:
    """Prefix every non-empty line of *text*; a trailing newline is kept."""
    if not text:
        return ""
    lines: List[str] = text.split("\n")
    return "\n".join(prefix + line if line else line for line in lines)


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def read_source_files(paths: Sequence[Path]) -> str:
    """
    Read C# sources and join them with newlines into one translation unit.

    Raises:
        FileNotFoundError: A path does not exist.
        ValueError: A path is not a regular file.
    """
    texts: List[str] = []
    for path in paths:
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {path}")
        if not path.is_file():
            raise ValueError(f"Source path is not a file: {path}")
        texts.append(path.read_text(encoding="utf-8-sig"))
        logger.debug("Read source file %s.", path)
    return "\n".join(texts)


def write_file(path: Path, content: str, atomic: bool = True) -> int:
    """
    Write *content* to *path*, creating parent directories.

    When *atomic* is True, writes to a temporary file in the same directory
    and renames it over the target.

    Returns the number of bytes written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    encoded: bytes = content.encode("utf-8")

    if atomic:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(encoded)
            os.replace(tmp_path, str(path))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    else:
        path.write_bytes(encoded)

    logger.debug("Wrote %d bytes to %s", len(encoded), path)
    return len(encoded)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for the generation steps.

    Usage:
        with Timer("parse") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


__all__: List[str] = [
    "Timer",
    "count_lines",
    "indent_block",
    "read_source_files",
    "to_camel_case",
    "write_file",
]

logger.debug("cs2ts.utils loaded.")
