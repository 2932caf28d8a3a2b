# File: cs2ts/expressions.py
"""
cs2ts - Expression Evaluator
============================
Renders the constant expressions of enum member values as TypeScript text.
Nothing is computed; the expression is re-spelled operand by operand.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, FrozenSet, List

from cs2ts.models import (
    BinaryExpression,
    LiteralExpression,
    LiteralKind,
    ParenthesizedExpression,
    PrefixUnaryExpression,
    SyntaxNode,
)
from cs2ts.session import GenerationSession

logger: logging.Logger = logging.getLogger("cs2ts.expressions")

UNARY_OPERATORS: FrozenSet[str] = frozenset({"+", "-"})

BINARY_OPERATORS: FrozenSet[str] = frozenset({"+", "-", "*", "/", "%", "<<", ">>"})


class ExpressionEvaluator:
    """Turns enum value expressions into literal text."""

    def __init__(self, session: GenerationSession) -> None:
        self._session: GenerationSession = session
        self._handlers: Dict[str, Callable[[SyntaxNode], str]] = {
            "literal": self._eval_literal,
            "prefix_unary": self._eval_prefix_unary,
            "binary": self._eval_binary,
            "parenthesized": self._eval_parenthesized,
        }

    def evaluate(self, expr: SyntaxNode) -> str:
        handler = self._handlers.get(getattr(expr, "kind", ""))
        if handler is None:
            return self._session.diagnostics.report(expr)
        return handler(expr)

    def _eval_literal(self, node: LiteralExpression) -> str:
        kind = node.literal_kind
        if kind == LiteralKind.DEFAULT:
            return "undefined"
        if kind == LiteralKind.NULL:
            return "null"
        if kind == LiteralKind.CHARACTER:
            if not node.value:
                return self._session.diagnostics.report(node)
            return f"{ord(node.value[0])} /* {node.value} */"
        if kind in (LiteralKind.NUMERIC, LiteralKind.STRING):
            return node.text
        if kind == LiteralKind.FALSE:
            return "false"
        if kind == LiteralKind.TRUE:
            return "true"
        return self._session.diagnostics.report(node)

    def _eval_prefix_unary(self, node: PrefixUnaryExpression) -> str:
        if node.operator not in UNARY_OPERATORS:
            return self._session.diagnostics.report(node)
        return f"{node.operator}{self.evaluate(node.operand)}"

    def _eval_binary(self, node: BinaryExpression) -> str:
        if node.operator not in BINARY_OPERATORS:
            return self._session.diagnostics.report(node)
        return f"{self.evaluate(node.left)} {node.operator} {self.evaluate(node.right)}"

    def _eval_parenthesized(self, node: ParenthesizedExpression) -> str:
        return f"({self.evaluate(node.inner)})"


__all__: List[str] = [
    "BINARY_OPERATORS",
    "ExpressionEvaluator",
    "UNARY_OPERATORS",
]

logger.debug("cs2ts.expressions loaded.")
