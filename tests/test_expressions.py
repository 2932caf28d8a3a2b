"""
tests/test_expressions.py
Unit tests for cs2ts.expressions.ExpressionEvaluator.
"""

from __future__ import annotations

import pytest

from cs2ts.expressions import ExpressionEvaluator
from cs2ts.models import (
    BinaryExpression,
    LiteralExpression,
    LiteralKind,
    ParenthesizedExpression,
    PrefixUnaryExpression,
    SourceSpan,
    UnknownExpression,
)
from cs2ts.session import GenerationSession


def _num(text: str) -> LiteralExpression:
    return LiteralExpression(literal_kind=LiteralKind.NUMERIC, text=text)


@pytest.mark.parametrize(
    "literal, expected",
    [
        (LiteralExpression(literal_kind=LiteralKind.DEFAULT, text="default"), "undefined"),
        (LiteralExpression(literal_kind=LiteralKind.NULL, text="null"), "null"),
        (LiteralExpression(literal_kind=LiteralKind.TRUE, text="true"), "true"),
        (LiteralExpression(literal_kind=LiteralKind.FALSE, text="false"), "false"),
        (_num("0x1F"), "0x1F"),
        (LiteralExpression(literal_kind=LiteralKind.STRING, text='"abc"'), '"abc"'),
        (LiteralExpression(literal_kind=LiteralKind.CHARACTER, text="'A'", value="A"), "65 /* A */"),
    ],
)
def test_literals(session: GenerationSession, literal: LiteralExpression, expected: str) -> None:
    assert ExpressionEvaluator(session).evaluate(literal) == expected
    assert session.warnings == []


def test_prefix_minus(session: GenerationSession) -> None:
    expr = PrefixUnaryExpression(operator="-", operand=_num("1"))
    assert ExpressionEvaluator(session).evaluate(expr) == "-1"


def test_prefix_bitwise_not_reported(session: GenerationSession) -> None:
    expr = PrefixUnaryExpression(
        operator="~",
        operand=_num("0"),
        span=SourceSpan(line=4, column=8, text="~0"),
    )
    assert ExpressionEvaluator(session).evaluate(expr) == "<???> /* @4:8 ~0 */"
    assert session.warnings == ["(Line: 4:8): Could not recognize ~0"]


def test_binary_and_parentheses(session: GenerationSession) -> None:
    expr = BinaryExpression(
        operator="<<",
        left=_num("1"),
        right=ParenthesizedExpression(
            inner=BinaryExpression(operator="+", left=_num("2"), right=_num("3"))
        ),
    )
    assert ExpressionEvaluator(session).evaluate(expr) == "1 << (2 + 3)"


def test_binary_or_reported(session: GenerationSession) -> None:
    expr = BinaryExpression(
        operator="|",
        left=_num("1"),
        right=_num("2"),
        span=SourceSpan(line=0, column=10, text="1 | 2"),
    )
    assert ExpressionEvaluator(session).evaluate(expr) == "<???> /* @0:10 1 | 2 */"
    assert len(session.warnings) == 1


def test_unknown_expression_reported(session: GenerationSession) -> None:
    expr = UnknownExpression(
        node_type="member_access_expression",
        span=SourceSpan(line=5, column=12, text="Other.Value"),
    )
    assert ExpressionEvaluator(session).evaluate(expr) == "<???> /* @5:12 Other.Value */"
