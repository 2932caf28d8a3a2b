# File: cs2ts/resolver.py
"""
cs2ts - Import/Export Resolver
==============================
Runs after the declaration walker.  Every type name the walker referenced
but did not declare becomes one ``import { Name } from '...';`` line.

Example:
    >>> resolve_imports(["Money", "Address", "Money", "Person"], {"Person"}, {"Money": "@shared/money"})
    "import { Address } from './Address';\\nimport { Money } from '@shared/money';"
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Mapping

logger: logging.Logger = logging.getLogger("cs2ts.resolver")


def import_statement(name: str, known_types: Mapping[str, str]) -> str:
    path: str = known_types.get(name, f"./{name}")
    return f"import {{ {name} }} from '{path}';"


def resolve_import_names(
    imports: Iterable[str],
    exports: AbstractSet[str],
) -> List[str]:
    """Referenced names that are not declared locally, deduped and sorted."""
    return sorted({name for name in imports if name not in exports})


def resolve_imports(
    imports: Iterable[str],
    exports: AbstractSet[str],
    known_types: Mapping[str, str],
) -> str:
    """Return the import block, or ``""`` when nothing needs importing."""
    names: List[str] = resolve_import_names(imports, exports)
    logger.debug("Resolved %d import(s): %s", len(names), ", ".join(names))
    return "\n".join(import_statement(name, known_types) for name in names)


def prepend_imports(import_block: str, body: str) -> str:
    """Imports, a blank line, then the body; the body alone without imports."""
    if not import_block:
        return body
    return f"{import_block}\n\n{body}"


__all__: List[str] = [
    "import_statement",
    "prepend_imports",
    "resolve_import_names",
    "resolve_imports",
]
