"""
tests/test_models.py
Unit tests for cs2ts.models: configuration string parsing, GeneratorConfig
and the discriminated node unions.
"""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from cs2ts.errors import ConfigurationError
from cs2ts.models import (
    CompilationUnit,
    GeneratorConfig,
    IdentifierType,
    NullableType,
    SourceSpan,
    TypeReference,
    UnknownType,
    parse_enum_config,
    parse_type_map_config,
)


# ===========================================================================
# parse_type_map_config
# ===========================================================================


class TestParseTypeMapConfig:
    """Tests for the ``Name=path,...`` configuration string."""

    def test_empty_string(self) -> None:
        assert parse_type_map_config("") == {}

    def test_entries_are_trimmed(self) -> None:
        mapping = parse_type_map_config(" Money = @shared/money , Address=./addr ")
        assert mapping == {"Money": "@shared/money", "Address": "./addr"}

    def test_empty_entries_ignored(self) -> None:
        assert parse_type_map_config("A=a,, ,B=b,") == {"A": "a", "B": "b"}

    def test_only_first_equals_splits(self) -> None:
        assert parse_type_map_config("Q=./q?x=1") == {"Q": "./q?x=1"}

    def test_missing_equals_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="missing '='"):
            parse_type_map_config("Money")

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_type_map_config("=./x")

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_type_map_config("broken")


# ===========================================================================
# parse_enum_config
# ===========================================================================


class TestParseEnumConfig:
    """Tests for the ``Name[:mode],...`` configuration string."""

    def test_names_and_modes(self) -> None:
        names, modes = parse_enum_config("Color:keyof, Size")
        assert names == ["Color", "Size"]
        assert modes == {"Color": "keyof"}

    def test_duplicates_keep_first_position(self) -> None:
        names, _ = parse_enum_config("A,B,A")
        assert names == ["A", "B"]

    def test_empty_mode_ignored(self) -> None:
        names, modes = parse_enum_config("Color:")
        assert names == ["Color"]
        assert modes == {}

    def test_unknown_mode_stored(self) -> None:
        _, modes = parse_enum_config("Color:flags")
        assert modes == {"Color": "flags"}

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_enum_config(":keyof")


# ===========================================================================
# GeneratorConfig
# ===========================================================================


class TestGeneratorConfig:
    def test_from_strings(self) -> None:
        config = GeneratorConfig.from_strings("Money=@m", "Color:keyof,Size")
        assert config.known_types == {"Money": "@m"}
        assert config.is_known_enum("Color")
        assert config.is_known_enum("Size")
        assert not config.is_known_enum("Money")
        assert config.enum_mode("Color") == "keyof"
        assert config.enum_mode("Size") is None

    def test_merged_layers_other_on_top(self) -> None:
        base = GeneratorConfig(
            known_types={"A": "a", "B": "b"},
            known_enums=["X"],
            enum_modes={"X": "keyof"},
        )
        top = GeneratorConfig(known_types={"B": "bb"}, known_enums=["Y", "X"])
        merged = base.merged(top)
        assert merged.known_types == {"A": "a", "B": "bb"}
        assert merged.known_enums == ["X", "Y"]
        assert merged.enum_modes == {"X": "keyof"}

    def test_empty_type_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GeneratorConfig(known_types={" ": "x"})

    def test_known_enums_deduplicated(self) -> None:
        assert GeneratorConfig(known_enums=["A", "A", "B"]).known_enums == ["A", "B"]


# ===========================================================================
# Node models
# ===========================================================================


class TestNodes:
    def test_describe_prefers_span_text(self) -> None:
        node = UnknownType(node_type="tuple_type", span=SourceSpan(line=1, column=2, text=" (int, string) "))
        assert node.describe() == "(int, string)"

    def test_describe_without_span(self) -> None:
        assert UnknownType(node_type="pointer_type").describe() == "pointer_type"

    def test_type_reference_union_dispatches_on_kind(self) -> None:
        adapter = TypeAdapter(TypeReference)
        node = adapter.validate_python({"kind": "nullable", "inner": {"kind": "identifier", "name": "Foo"}})
        assert isinstance(node, NullableType)
        assert isinstance(node.inner, IdentifierType)

    def test_nodes_are_frozen(self) -> None:
        node = IdentifierType(name="Foo")
        with pytest.raises(ValidationError):
            node.name = "Bar"

    def test_compilation_unit_accepts_nested_namespaces(self) -> None:
        unit = CompilationUnit.model_validate(
            {
                "members": [
                    {
                        "kind": "namespace",
                        "name": "Outer",
                        "members": [{"kind": "enum", "name": "Color", "members": [{"name": "Red"}]}],
                    }
                ]
            }
        )
        assert unit.members[0].members[0].members[0].name == "Red"
