# File: cs2ts/models.py
"""
cs2ts - Core Data Models
========================
Pydantic V2 models for the two inputs of a translation run:

- the **declaration tree** produced by the parser adapter (namespaces, type
  declarations, enums, properties, type references and constant
  expressions), and
- the **generator configuration** (known types with import-path overrides,
  known enums with optional rendering modes).

Every tree node carries a ``kind`` literal.  The ``TypeReference``,
``Expression`` and ``Declaration`` unions discriminate on it, so consumers
dispatch on ``node.kind`` and fall back to the diagnostics channel for
anything they do not handle.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Dict, FrozenSet, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cs2ts.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.models")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TypeKeyword(str, Enum):
    """Declaration keywords translated into ``export type`` blocks."""

    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"


class LiteralKind(str, Enum):
    """Literal expression kinds understood by the expression evaluator."""

    DEFAULT = "default"
    NULL = "null"
    CHARACTER = "character"
    NUMERIC = "numeric"
    STRING = "string"
    TRUE = "true"
    FALSE = "false"


class EnumMode(str, Enum):
    """Known-enum rendering modes with an effect on the output."""

    KEYOF = "keyof"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_NODE_CONFIG: ConfigDict = ConfigDict(
    frozen=True,
    extra="forbid",
)

_SHARED_CONFIG: ConfigDict = ConfigDict(
    strict=False,
    populate_by_name=True,
    validate_assignment=True,
    frozen=False,
    extra="forbid",
)


# ---------------------------------------------------------------------------
# Source positions
# ---------------------------------------------------------------------------


class SourceSpan(BaseModel):
    """0-based start position and source text of a node."""

    model_config = _NODE_CONFIG

    line: int = Field(default=0, ge=0, description="0-based line.")
    column: int = Field(
        default=0, ge=0, description="0-based column, in characters."
    )
    text: str = Field(default="", description="Source text of the node.")


class SyntaxNode(BaseModel):
    """Base class of every tree node."""

    model_config = _NODE_CONFIG

    span: Optional[SourceSpan] = None

    def describe(self) -> str:
        """Trimmed source text, or the node kind when no span is known."""
        if self.span is not None and self.span.text.strip():
            return self.span.text.strip()
        return str(getattr(self, "node_type", "") or getattr(self, "kind", ""))


# ---------------------------------------------------------------------------
# Type references
# ---------------------------------------------------------------------------


class IdentifierType(SyntaxNode):
    """A simple type name, e.g. ``Address`` or ``T``."""

    kind: Literal["identifier"] = "identifier"
    name: str = Field(..., min_length=1)


class GenericType(SyntaxNode):
    """A constructed generic type, e.g. ``List<Address>``."""

    kind: Literal["generic"] = "generic"
    name: str = Field(..., min_length=1)
    arguments: List[TypeReference] = Field(default_factory=list)


class QualifiedType(SyntaxNode):
    """A namespace-qualified type; only ``right`` is ever rendered."""

    kind: Literal["qualified"] = "qualified"
    qualifier: List[str] = Field(default_factory=list)
    right: TypeReference


class PredefinedType(SyntaxNode):
    """A primitive keyword type such as ``int`` or ``string``."""

    kind: Literal["predefined"] = "predefined"
    keyword: str = Field(..., min_length=1)


class NullableType(SyntaxNode):
    kind: Literal["nullable"] = "nullable"
    inner: TypeReference


class ArrayType(SyntaxNode):
    kind: Literal["array"] = "array"
    element: TypeReference


class UnknownType(SyntaxNode):
    """Any type shape without a mapping rule (tuples, pointers, ...)."""

    kind: Literal["unknown_type"] = "unknown_type"
    node_type: str = ""


TypeReference = Annotated[
    Union[
        IdentifierType,
        GenericType,
        QualifiedType,
        PredefinedType,
        NullableType,
        ArrayType,
        UnknownType,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Constant expressions (enum values)
# ---------------------------------------------------------------------------


class LiteralExpression(SyntaxNode):
    """
    A literal token.

    ``text`` is the verbatim source token; ``value`` holds the decoded
    character for character literals.
    """

    kind: Literal["literal"] = "literal"
    literal_kind: LiteralKind
    text: str = ""
    value: Optional[str] = None


class PrefixUnaryExpression(SyntaxNode):
    kind: Literal["prefix_unary"] = "prefix_unary"
    operator: str = Field(..., min_length=1)
    operand: Expression


class BinaryExpression(SyntaxNode):
    kind: Literal["binary"] = "binary"
    operator: str = Field(..., min_length=1)
    left: Expression
    right: Expression


class ParenthesizedExpression(SyntaxNode):
    kind: Literal["parenthesized"] = "parenthesized"
    inner: Expression


class UnknownExpression(SyntaxNode):
    kind: Literal["unknown_expression"] = "unknown_expression"
    node_type: str = ""


Expression = Annotated[
    Union[
        LiteralExpression,
        PrefixUnaryExpression,
        BinaryExpression,
        ParenthesizedExpression,
        UnknownExpression,
    ],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class PropertyDeclaration(SyntaxNode):
    """A property member; the only member kind that is translated."""

    kind: Literal["property"] = "property"
    name: str = Field(..., min_length=1)
    type: TypeReference
    modifiers: FrozenSet[str] = frozenset()
    documentation: Tuple[str, ...] = Field(
        default=(), description="Raw leading comments, in source order."
    )

    def has_modifier(self, keyword: str) -> bool:
        return keyword in self.modifiers


class TypeDeclaration(SyntaxNode):
    """A class, interface or struct."""

    kind: Literal["type"] = "type"
    keyword: TypeKeyword
    name: str = Field(..., min_length=1)
    type_parameters: List[str] = Field(default_factory=list)
    properties: List[PropertyDeclaration] = Field(default_factory=list)
    base_types: List[TypeReference] = Field(default_factory=list)
    modifiers: FrozenSet[str] = frozenset()
    documentation: Tuple[str, ...] = ()

    def has_modifier(self, keyword: str) -> bool:
        return keyword in self.modifiers

    @property
    def is_interface(self) -> bool:
        return self.keyword == TypeKeyword.INTERFACE


class EnumMember(SyntaxNode):
    kind: Literal["enum_member"] = "enum_member"
    name: str = Field(..., min_length=1)
    value: Optional[Expression] = None


class EnumDeclaration(SyntaxNode):
    kind: Literal["enum"] = "enum"
    name: str = Field(..., min_length=1)
    members: List[EnumMember] = Field(default_factory=list)
    modifiers: FrozenSet[str] = frozenset()
    documentation: Tuple[str, ...] = ()


class NamespaceDeclaration(SyntaxNode):
    """Block or file-scoped namespace.  Transparent in the output."""

    kind: Literal["namespace"] = "namespace"
    name: str = ""
    members: List[Declaration] = Field(default_factory=list)


class UnknownDeclaration(SyntaxNode):
    """A declaration shape without a translation rule (delegates, records)."""

    kind: Literal["unknown_declaration"] = "unknown_declaration"
    node_type: str = ""


Declaration = Annotated[
    Union[
        NamespaceDeclaration,
        TypeDeclaration,
        EnumDeclaration,
        UnknownDeclaration,
    ],
    Field(discriminator="kind"),
]


class CompilationUnit(SyntaxNode):
    """Root of a parsed source file."""

    kind: Literal["compilation_unit"] = "compilation_unit"
    members: List[Declaration] = Field(default_factory=list)


# Resolve the forward references of the recursive unions.
for _model in (
    GenericType,
    QualifiedType,
    NullableType,
    ArrayType,
    PrefixUnaryExpression,
    BinaryExpression,
    ParenthesizedExpression,
    PropertyDeclaration,
    TypeDeclaration,
    EnumMember,
    EnumDeclaration,
    NamespaceDeclaration,
    CompilationUnit,
):
    _model.model_rebuild()


# ---------------------------------------------------------------------------
# Configuration string parsing
# ---------------------------------------------------------------------------


def parse_type_map_config(text: str) -> Dict[str, str]:
    """
    Parse ``"Name=path,Name=path"`` into a mapping.

    Entries are trimmed and empty entries ignored.  Only the first ``=``
    separates name from path.

    Raises:
        ConfigurationError: An entry has no ``=`` or an empty name.
    """
    mapping: Dict[str, str] = {}
    if not text:
        return mapping

    for raw_entry in text.split(","):
        entry: str = raw_entry.strip()
        if not entry:
            continue
        name, sep, path = entry.partition("=")
        name = name.strip()
        if not sep:
            raise ConfigurationError(
                f"Type map entry '{entry}' is missing '=' (expected Name=path)."
            )
        if not name:
            raise ConfigurationError(
                f"Type map entry '{entry}' has an empty type name."
            )
        mapping[name] = path.strip()

    return mapping


def parse_enum_config(text: str) -> Tuple[List[str], Dict[str, str]]:
    """
    Parse ``"Name[:mode],Name[:mode]"`` into known enum names and modes.

    Returns:
        Tuple of (names in first-seen order, name → mode for entries that
        carry a mode).
    """
    names: List[str] = []
    modes: Dict[str, str] = {}
    if not text:
        return names, modes

    for raw_entry in text.split(","):
        entry: str = raw_entry.strip()
        if not entry:
            continue
        name, sep, mode = entry.partition(":")
        name = name.strip()
        mode = mode.strip()
        if not name:
            raise ConfigurationError(
                f"Enum entry '{entry}' has an empty enum name."
            )
        if name not in names:
            names.append(name)
        if sep and mode:
            modes[name] = mode

    return names, modes


# ---------------------------------------------------------------------------
# Generator configuration
# ---------------------------------------------------------------------------


class GeneratorConfig(BaseModel):
    """
    Per-run translation settings.

    ``known_types`` maps an external type name to the module path used in
    its import statement.  ``known_enums`` lists enums whose names change
    how dictionary keys render; ``enum_modes`` optionally assigns a mode
    per enum.  Only the ``keyof`` mode has a rendering effect, other
    tokens are stored unchanged.
    """

    model_config = _SHARED_CONFIG

    known_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Type name → import path override.",
    )
    known_enums: List[str] = Field(
        default_factory=list,
        description="Enum names known to the generator.",
    )
    enum_modes: Dict[str, str] = Field(
        default_factory=dict,
        description="Enum name → rendering mode.",
    )

    @field_validator("known_types")
    @classmethod
    def _check_type_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name in value:
            if not name or not name.strip():
                raise ValueError("known_types contains an empty type name.")
        return value

    @field_validator("known_enums")
    @classmethod
    def _dedupe_enums(cls, value: List[str]) -> List[str]:
        seen: List[str] = []
        for name in value:
            if not name or not name.strip():
                raise ValueError("known_enums contains an empty enum name.")
            if name not in seen:
                seen.append(name)
        return seen

    @classmethod
    def from_strings(
        cls,
        type_map: str = "",
        enums: str = "",
    ) -> "GeneratorConfig":
        """Build a config from the two comma-separated configuration strings."""
        known_types: Dict[str, str] = parse_type_map_config(type_map)
        known_enums, enum_modes = parse_enum_config(enums)
        logger.debug(
            "Parsed config strings: %d known type(s), %d known enum(s).",
            len(known_types),
            len(known_enums),
        )
        return cls(
            known_types=known_types,
            known_enums=known_enums,
            enum_modes=enum_modes,
        )

    def merged(self, other: "GeneratorConfig") -> "GeneratorConfig":
        """Return a new config with *other* layered on top of this one."""
        known_enums: List[str] = list(self.known_enums)
        known_enums.extend(n for n in other.known_enums if n not in known_enums)
        return GeneratorConfig(
            known_types={**self.known_types, **other.known_types},
            known_enums=known_enums,
            enum_modes={**self.enum_modes, **other.enum_modes},
        )

    def is_known_enum(self, name: str) -> bool:
        return name in self.known_enums

    def enum_mode(self, name: str) -> Optional[str]:
        return self.enum_modes.get(name)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ArrayType",
    "BinaryExpression",
    "CompilationUnit",
    "Declaration",
    "EnumDeclaration",
    "EnumMember",
    "EnumMode",
    "Expression",
    "GenericType",
    "GeneratorConfig",
    "IdentifierType",
    "LiteralExpression",
    "LiteralKind",
    "NamespaceDeclaration",
    "NullableType",
    "ParenthesizedExpression",
    "PredefinedType",
    "PrefixUnaryExpression",
    "PropertyDeclaration",
    "QualifiedType",
    "SourceSpan",
    "SyntaxNode",
    "TypeDeclaration",
    "TypeKeyword",
    "TypeReference",
    "UnknownDeclaration",
    "UnknownExpression",
    "UnknownType",
    "parse_enum_config",
    "parse_type_map_config",
]

logger.debug("cs2ts.models loaded.")
