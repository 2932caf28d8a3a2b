# File: cs2ts/trivia.py
"""
cs2ts - Documentation comment extraction
========================================
Turns the ``<summary>`` of a C# XML documentation comment into a JSDoc
block::

    /// <summary>                 /**
    /// The customer's name.  →    * The customer's name.
    /// </summary>                 */

Only ``///`` line comments and ``/** ... */`` block comments count as
documentation; ordinary comments are ignored.  Only the direct text of the
summary counts: nested elements (``<see cref="..."/>``, ``<c>...</c>``)
are dropped together with their content.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

logger: logging.Logger = logging.getLogger("cs2ts.trivia")

_SUMMARY_RE: re.Pattern[str] = re.compile(
    r"<summary\b[^>]*>(.*?)</summary\s*>", re.DOTALL | re.IGNORECASE
)
_EMPTY_ELEMENT_RE: re.Pattern[str] = re.compile(r"<[^<>]*/>")
_ELEMENT_RE: re.Pattern[str] = re.compile(r"<([\w:.-]+)\b[^<>]*>[^<]*</\1\s*>")
_TAG_RE: re.Pattern[str] = re.compile(r"<[^<>]*>")


def _documentation_text(comments: Sequence[str]) -> str:
    """Join the bodies of the documentation comments among *comments*."""
    lines: List[str] = []
    for comment in comments:
        stripped: str = comment.strip()
        if stripped.startswith("///"):
            for line in stripped.splitlines():
                line = line.strip()
                lines.append(line[3:] if line.startswith("///") else line)
        elif stripped.startswith("/**") and stripped.endswith("*/") and len(stripped) > 4:
            body: str = stripped[3:-2]
            for line in body.splitlines():
                line = line.strip()
                lines.append(line[1:] if line.startswith("*") else line)
    return "\n".join(lines)


def _summary_text(documentation: str) -> Optional[str]:
    match = _SUMMARY_RE.search(documentation)
    if match is None:
        return None
    text: str = _EMPTY_ELEMENT_RE.sub("", match.group(1))
    # Innermost elements first, until nothing nested is left.
    previous: Optional[str] = None
    while previous != text:
        previous = text
        text = _ELEMENT_RE.sub("", text)
    return _TAG_RE.sub("", text)


def extract_documentation(comments: Sequence[str]) -> str:
    """
    Build a JSDoc block from the leading comments of a declaration.

    Returns ``""`` when there is no ``<summary>`` element.
    """
    if not comments:
        return ""
    summary: Optional[str] = _summary_text(_documentation_text(comments))
    if summary is None:
        return ""
    body: str = "\n".join(f" * {line.strip()}" for line in summary.strip().split("\n"))
    return f"/**\n{body}\n */\n"


__all__: List[str] = ["extract_documentation"]
