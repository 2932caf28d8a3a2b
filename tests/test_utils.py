"""
tests/test_utils.py
Tests for the string helpers in cs2ts.utils.
"""

from __future__ import annotations

import pytest

from cs2ts.utils import indent_block, to_camel_case


@pytest.mark.parametrize(
    "name, expected",
    [
        ("FirstName", "firstName"),
        ("URL", "uRL"),
        ("Ärger", "ärger"),
        ("x", "x"),
        ("", ""),
    ],
)
def test_to_camel_case(name: str, expected: str) -> None:
    assert to_camel_case(name) == expected


def test_to_camel_case_keeps_no_cache() -> None:
    for index in range(1000):
        to_camel_case(f"Property{index}")
    assert not hasattr(to_camel_case, "cache_info")


def test_indent_block() -> None:
    assert indent_block("a;\n\nb;\n") == "  a;\n\n  b;\n"
    assert indent_block("") == ""
