# File: cs2ts/type_mapper.py
"""
cs2ts - Type Mapper
===================
Converts a C# type reference into TypeScript type text.

Rules::

    T (in generic scope)              → T            (never imported)
    String / DateTime / Guid          → string
    dynamic                           → any
    Foo                               → Foo          (recorded as import)
    List<X> / IList / ICollection /
      IEnumerable                     → X[]
    Dictionary<K, V>                  → { [ key: K ]: V }
                                        { [ key in K ]: V }  when K is a known enum
    Foo<A, B>                         → Foo<A, B>    (Foo recorded as import)
    A.B.Foo                           → rule for Foo
    bool / numeric keywords /
      object / string                 → boolean / number / any / string
    X?                                → rule for X   (the '?' goes on the property)
    X[]                               → X[]
    anything else                     → diagnostics placeholder

The generic scope is passed explicitly with every call; the mapper keeps no
scope of its own.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Callable, Dict, FrozenSet, List

from cs2ts.models import (
    ArrayType,
    GenericType,
    IdentifierType,
    NullableType,
    PredefinedType,
    QualifiedType,
    SyntaxNode,
)
from cs2ts.session import GenerationSession

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.type_mapper")

# ---------------------------------------------------------------------------
# Mapping tables
# ---------------------------------------------------------------------------

STRING_LIKE_TYPES: FrozenSet[str] = frozenset({"String", "DateTime", "Guid"})

DYNAMIC_TYPE: str = "dynamic"

COLLECTION_TYPES: FrozenSet[str] = frozenset({
    "List", "IList", "ICollection", "IEnumerable",
})

DICTIONARY_TYPE: str = "Dictionary"

PREDEFINED_TYPES: Dict[str, str] = {
    "bool": "boolean",
    "byte": "number",
    "sbyte": "number",
    "char": "number",
    "decimal": "number",
    "double": "number",
    "float": "number",
    "int": "number",
    "uint": "number",
    "nint": "number",
    "nuint": "number",
    "long": "number",
    "ulong": "number",
    "short": "number",
    "ushort": "number",
    "object": "any",
    "string": "string",
}

EMPTY_SCOPE: FrozenSet[str] = frozenset()


class TypeMapper:
    """Maps type references to TypeScript text within one session."""

    def __init__(self, session: GenerationSession) -> None:
        self._session: GenerationSession = session
        self._handlers: Dict[str, Callable[[SyntaxNode, AbstractSet[str]], str]] = {
            "identifier": self._map_identifier,
            "generic": self._map_generic,
            "qualified": self._map_qualified,
            "predefined": self._map_predefined,
            "nullable": self._map_nullable,
            "array": self._map_array,
        }

    def map(self, type_ref: SyntaxNode, scope: AbstractSet[str] = EMPTY_SCOPE) -> str:
        """
        Return the TypeScript text for *type_ref*.

        Args:
            type_ref: Any ``TypeReference`` variant.
            scope: Generic parameter names of the enclosing declaration.
        """
        handler = self._handlers.get(getattr(type_ref, "kind", ""))
        if handler is None:
            return self._session.diagnostics.report(type_ref)
        return handler(type_ref, scope)

    # -----------------------------------------------------------------
    # Variant handlers
    # -----------------------------------------------------------------

    def _map_identifier(self, node: IdentifierType, scope: AbstractSet[str]) -> str:
        name: str = node.name
        if name in scope:
            return name
        if name in STRING_LIKE_TYPES:
            return "string"
        if name == DYNAMIC_TYPE:
            return "any"
        self._session.record_import(name)
        return name

    def _map_generic(self, node: GenericType, scope: AbstractSet[str]) -> str:
        args: List[SyntaxNode] = list(node.arguments)

        if node.name in COLLECTION_TYPES:
            if len(args) != 1:
                return self._session.diagnostics.report(node)
            return f"{self.map(args[0], scope)}[]"

        if node.name == DICTIONARY_TYPE:
            if len(args) != 2:
                return self._session.diagnostics.report(node)
            key: str = self.map(args[0], scope)
            value: str = self.map(args[1], scope)
            sep: str = " in " if self._session.config.is_known_enum(key) else ": "
            return f"{{ [ key{sep}{key} ]: {value} }}"

        self._session.record_import(node.name)
        mapped_args: str = ", ".join(self.map(arg, scope) for arg in args)
        return f"{node.name}<{mapped_args}>"

    def _map_qualified(self, node: QualifiedType, scope: AbstractSet[str]) -> str:
        return self.map(node.right, scope)

    def _map_predefined(self, node: PredefinedType, scope: AbstractSet[str]) -> str:
        mapped = PREDEFINED_TYPES.get(node.keyword)
        if mapped is None:
            return self._session.diagnostics.report(node)
        return mapped

    def _map_nullable(self, node: NullableType, scope: AbstractSet[str]) -> str:
        return self.map(node.inner, scope)

    def _map_array(self, node: ArrayType, scope: AbstractSet[str]) -> str:
        return f"{self.map(node.element, scope)}[]"


def is_nullable(type_ref: SyntaxNode) -> bool:
    """True when the property type is declared with a nullable wrapper."""
    return isinstance(type_ref, NullableType)


__all__: List[str] = [
    "COLLECTION_TYPES",
    "PREDEFINED_TYPES",
    "STRING_LIKE_TYPES",
    "TypeMapper",
    "is_nullable",
]

logger.debug("cs2ts.type_mapper loaded.")
