# File: cs2ts/diagnostics.py
"""
cs2ts - Diagnostics Collector
=============================
The single error-recovery channel of the translator.  When a declaration,
type reference or expression has no translation rule, the emitting
component hands the node to ``DiagnosticsCollector.report()``, which

1. records a warning ``(Line: <line>:<col>): Could not recognize <text>``,
2. returns an inline placeholder ``<???> /* @<line>:<col> <text> */``
   that the caller splices into the output in place of the node.

Translation therefore always completes; every placeholder in the output
has exactly one matching warning.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List

from cs2ts.models import SourceSpan, SyntaxNode

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.diagnostics")

PLACEHOLDER: str = "<???>"


class Diagnostic:
    """A single unrecognized-construct record."""

    __slots__ = ("line", "column", "text", "node_kind")

    def __init__(self, line: int, column: int, text: str, node_kind: str = "") -> None:
        self.line: int = line
        self.column: int = column
        self.text: str = text
        self.node_kind: str = node_kind

    @property
    def message(self) -> str:
        return f"(Line: {self.line}:{self.column}): Could not recognize {self.text}"

    @property
    def placeholder(self) -> str:
        return f"{PLACEHOLDER} /* @{self.line}:{self.column} {self.text} */"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "text": self.text,
            "kind": self.node_kind,
        }

    def __repr__(self) -> str:
        return f"<Diagnostic {self.line}:{self.column} {self.node_kind}>"

    def __str__(self) -> str:
        return self.message


class DiagnosticsCollector:
    """Accumulates ``Diagnostic`` records for one generation session."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def report(self, node: SyntaxNode) -> str:
        """Record *node* as unrecognized and return its placeholder text."""
        span: SourceSpan = node.span or SourceSpan()
        diagnostic = Diagnostic(
            line=span.line,
            column=span.column,
            text=node.describe(),
            node_kind=str(getattr(node, "kind", "")),
        )
        self._items.append(diagnostic)
        logger.warning("%s", diagnostic.message)
        return diagnostic.placeholder

    @property
    def items(self) -> List[Diagnostic]:
        return list(self._items)

    @property
    def warnings(self) -> List[str]:
        return [item.message for item in self._items]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"<DiagnosticsCollector warnings={len(self._items)}>"


__all__: List[str] = [
    "Diagnostic",
    "DiagnosticsCollector",
    "PLACEHOLDER",
]

logger.debug("cs2ts.diagnostics loaded.")
