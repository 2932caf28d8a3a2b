# File: cs2ts/errors.py
"""
cs2ts - Exception hierarchy
===========================
Fatal conditions of a translation run.  Constructs the generator cannot
translate are *not* exceptions: they are recorded as warnings by
``cs2ts.diagnostics`` and leave a placeholder in the output.
"""

from __future__ import annotations

from typing import List, Optional


class Cs2TsError(Exception):
    """Base class for all cs2ts errors."""


class ConfigurationError(Cs2TsError, ValueError):
    """A configuration string or file is malformed."""


class SourceParseError(Cs2TsError):
    """The C# source could not be parsed into a declaration tree."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.line: Optional[int] = line
        self.column: Optional[int] = column
        if line is not None and column is not None:
            message = f"(Line: {line}:{column}): {message}"
        super().__init__(message)


__all__: List[str] = [
    "ConfigurationError",
    "Cs2TsError",
    "SourceParseError",
]
