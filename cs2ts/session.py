# File: cs2ts/session.py
"""
cs2ts - Generation session state
================================
Everything one ``generate()`` call accumulates: referenced type names,
locally declared names, and diagnostics.  A session is created per call
and discarded when the call returns; nothing here is shared between
calls, threads or web requests.
"""

from __future__ import annotations

import logging
from typing import List, Set

from cs2ts.diagnostics import DiagnosticsCollector
from cs2ts.models import GeneratorConfig

logger: logging.Logger = logging.getLogger("cs2ts.session")


class GenerationSession:
    """Mutable accumulator owned by a single translation run."""

    __slots__ = ("config", "imports", "exports", "diagnostics")

    def __init__(self, config: GeneratorConfig) -> None:
        self.config: GeneratorConfig = config
        # Insertion order is kept; dedup and sorting happen at resolution.
        self.imports: List[str] = []
        self.exports: Set[str] = set()
        self.diagnostics: DiagnosticsCollector = DiagnosticsCollector()

    def record_import(self, name: str) -> None:
        self.imports.append(name)

    def record_export(self, name: str) -> None:
        self.exports.add(name)

    @property
    def warnings(self) -> List[str]:
        return self.diagnostics.warnings

    def __repr__(self) -> str:
        return (
            f"<GenerationSession imports={len(self.imports)} "
            f"exports={len(self.exports)} warnings={len(self.diagnostics)}>"
        )


__all__: List[str] = ["GenerationSession"]
