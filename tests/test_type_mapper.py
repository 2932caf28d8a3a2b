"""
tests/test_type_mapper.py
Unit tests for cs2ts.type_mapper.TypeMapper on hand-built type references.
"""

from __future__ import annotations

import pytest

from cs2ts.models import (
    ArrayType,
    GenericType,
    IdentifierType,
    NullableType,
    PredefinedType,
    QualifiedType,
    SourceSpan,
    UnknownType,
)
from cs2ts.session import GenerationSession
from cs2ts.type_mapper import TypeMapper, is_nullable


def _ident(name: str) -> IdentifierType:
    return IdentifierType(name=name)


def _predef(keyword: str) -> PredefinedType:
    return PredefinedType(keyword=keyword, span=SourceSpan(line=3, column=11, text=keyword))


class TestIdentifiers:
    def test_external_name_is_imported(self, session: GenerationSession) -> None:
        assert TypeMapper(session).map(_ident("Address")) == "Address"
        assert session.imports == ["Address"]

    def test_generic_parameter_in_scope_not_imported(self, session: GenerationSession) -> None:
        assert TypeMapper(session).map(_ident("T"), frozenset({"T"})) == "T"
        assert session.imports == []

    @pytest.mark.parametrize("name", ["String", "DateTime", "Guid"])
    def test_string_like(self, session: GenerationSession, name: str) -> None:
        assert TypeMapper(session).map(_ident(name)) == "string"
        assert session.imports == []

    def test_dynamic(self, session: GenerationSession) -> None:
        assert TypeMapper(session).map(_ident("dynamic")) == "any"


class TestPredefined:
    @pytest.mark.parametrize(
        "keyword, expected",
        [
            ("bool", "boolean"),
            ("int", "number"),
            ("decimal", "number"),
            ("char", "number"),
            ("ulong", "number"),
            ("object", "any"),
            ("string", "string"),
        ],
    )
    def test_mapping(self, session: GenerationSession, keyword: str, expected: str) -> None:
        assert TypeMapper(session).map(_predef(keyword)) == expected

    def test_void_is_reported(self, session: GenerationSession) -> None:
        text = TypeMapper(session).map(_predef("void"))
        assert text == "<???> /* @3:11 void */"
        assert session.warnings == ["(Line: 3:11): Could not recognize void"]


class TestGenerics:
    @pytest.mark.parametrize("name", ["List", "IList", "ICollection", "IEnumerable"])
    def test_collections_become_arrays(self, session: GenerationSession, name: str) -> None:
        node = GenericType(name=name, arguments=[_ident("Order")])
        assert TypeMapper(session).map(node) == "Order[]"
        assert session.imports == ["Order"]

    def test_dictionary_plain_key(self, session: GenerationSession) -> None:
        node = GenericType(name="Dictionary", arguments=[_ident("Color"), _predef("int")])
        assert TypeMapper(session).map(node) == "{ [ key: Color ]: number }"

    def test_dictionary_known_enum_key(self, make_session) -> None:
        session = make_session(enums="Color")
        node = GenericType(name="Dictionary", arguments=[_ident("Color"), _predef("int")])
        assert TypeMapper(session).map(node) == "{ [ key in Color ]: number }"

    def test_other_generic_imported(self, session: GenerationSession) -> None:
        node = GenericType(name="Page", arguments=[_ident("T"), _predef("int")])
        assert TypeMapper(session).map(node, frozenset({"T"})) == "Page<T, number>"
        assert session.imports == ["Page"]

    def test_collection_wrong_arity_reported(self, session: GenerationSession) -> None:
        node = GenericType(
            name="List",
            arguments=[_predef("int"), _predef("int")],
            span=SourceSpan(line=1, column=4, text="List<int, int>"),
        )
        assert TypeMapper(session).map(node) == "<???> /* @1:4 List<int, int> */"
        assert len(session.warnings) == 1


class TestWrappers:
    def test_qualified_maps_rightmost(self, session: GenerationSession) -> None:
        node = QualifiedType(
            qualifier=["System", "Collections", "Generic"],
            right=GenericType(name="List", arguments=[_predef("string")]),
        )
        assert TypeMapper(session).map(node) == "string[]"

    def test_nullable_unwrapped(self, session: GenerationSession) -> None:
        node = NullableType(inner=_predef("int"))
        assert TypeMapper(session).map(node) == "number"
        assert is_nullable(node)
        assert not is_nullable(_predef("int"))

    def test_nested_arrays(self, session: GenerationSession) -> None:
        node = ArrayType(element=ArrayType(element=_predef("int")))
        assert TypeMapper(session).map(node) == "number[][]"

    def test_unknown_shape_reported(self, session: GenerationSession) -> None:
        node = UnknownType(
            node_type="tuple_type",
            span=SourceSpan(line=2, column=11, text="(int, string)"),
        )
        assert TypeMapper(session).map(node) == "<???> /* @2:11 (int, string) */"
        assert session.warnings == ["(Line: 2:11): Could not recognize (int, string)"]
