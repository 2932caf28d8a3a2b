# File: cs2ts/walker.py
"""
cs2ts - Declaration Walker
==========================
Depth-first traversal of the declaration tree that emits TypeScript.

Output shapes::

    /** doc */                                  (when documented)
    export type Name<T> = {
      /** doc */
      propertyName?: mapped;
    } & Base & IOther;

    export enum Name {                          export enum NameEnum {
      A = 1,                                      A = 1,
      B,                         (keyof mode)  }
    }                                           export type Name = Uncapitalize<keyof typeof NameEnum>;

Namespaces produce no text of their own.  Every declaration segment ends
with a newline and segments are joined by another, leaving one blank line
between declarations.

Suppressed declarations (emit nothing, export nothing):
    - static classes,
    - attribute classes: ``class FooAttribute : Attribute``.

Properties are emitted when they are neither ``override`` nor ``static``
and are ``public`` (interface members need no modifier).
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Callable, Dict, FrozenSet, Iterable, List

from cs2ts.expressions import ExpressionEvaluator
from cs2ts.models import (
    EnumDeclaration,
    EnumMember,
    EnumMode,
    IdentifierType,
    NamespaceDeclaration,
    PropertyDeclaration,
    SyntaxNode,
    TypeDeclaration,
    TypeKeyword,
)
from cs2ts.session import GenerationSession
from cs2ts.trivia import extract_documentation
from cs2ts.type_mapper import TypeMapper, is_nullable
from cs2ts.utils import indent_block, to_camel_case

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.walker")

ATTRIBUTE_BASE: str = "Attribute"
ENUM_SUFFIX: str = "Enum"
INDENT: str = "  "


class DeclarationWalker:
    """Emits TypeScript for a sequence of declarations within one session."""

    def __init__(self, session: GenerationSession) -> None:
        self._session: GenerationSession = session
        self._types: TypeMapper = TypeMapper(session)
        self._expressions: ExpressionEvaluator = ExpressionEvaluator(session)
        self._handlers: Dict[str, Callable[[SyntaxNode], str]] = {
            "namespace": self._emit_namespace,
            "type": self._emit_type,
            "enum": self._emit_enum,
        }

    def emit(self, declarations: Iterable[SyntaxNode]) -> str:
        segments: List[str] = [self._emit_one(decl) for decl in declarations]
        return "\n".join(segment for segment in segments if segment)

    def _emit_one(self, declaration: SyntaxNode) -> str:
        handler = self._handlers.get(getattr(declaration, "kind", ""))
        if handler is None:
            return self._session.diagnostics.report(declaration) + "\n"
        return handler(declaration)

    # -----------------------------------------------------------------
    # Namespaces
    # -----------------------------------------------------------------

    def _emit_namespace(self, namespace: NamespaceDeclaration) -> str:
        return self.emit(namespace.members)

    # -----------------------------------------------------------------
    # Classes, interfaces, structs
    # -----------------------------------------------------------------

    def _emit_type(self, declaration: TypeDeclaration) -> str:
        if is_suppressed(declaration):
            logger.debug("Suppressed %s %s.", declaration.keyword.value, declaration.name)
            return ""

        scope: FrozenSet[str] = frozenset(declaration.type_parameters)
        parts: List[str] = [
            extract_documentation(declaration.documentation),
            f"export type {declaration.name}"
            f"{_type_parameter_list(declaration.type_parameters)} = {{\n",
        ]
        for prop in declaration.properties:
            if is_emitted_property(prop, declaration):
                parts.append(self._emit_property(prop, scope))
        parts.append(f"}}{self._extends_clause(declaration, scope)};\n")

        self._session.record_export(declaration.name)
        return "".join(parts)

    def _emit_property(self, prop: PropertyDeclaration, scope: AbstractSet[str]) -> str:
        doc: str = indent_block(extract_documentation(prop.documentation), INDENT)
        optional: str = "?" if is_nullable(prop.type) else ""
        mapped: str = self._types.map(prop.type, scope)
        return f"{doc}{INDENT}{to_camel_case(prop.name)}{optional}: {mapped};\n"

    def _extends_clause(self, declaration: TypeDeclaration, scope: AbstractSet[str]) -> str:
        if not declaration.base_types:
            return ""
        bases: List[str] = [self._types.map(base, scope) for base in declaration.base_types]
        return " & " + " & ".join(bases)

    # -----------------------------------------------------------------
    # Enums
    # -----------------------------------------------------------------

    def _emit_enum(self, declaration: EnumDeclaration) -> str:
        keyof: bool = self._session.config.enum_mode(declaration.name) == EnumMode.KEYOF.value
        emitted_name: str = declaration.name + ENUM_SUFFIX if keyof else declaration.name

        parts: List[str] = [f"export enum {emitted_name} {{\n"]
        for member in declaration.members:
            parts.append(f"{INDENT}{member.name}{self._enum_value(member)},\n")
        parts.append("}\n")
        if keyof:
            parts.append(
                f"export type {declaration.name} = "
                f"Uncapitalize<keyof typeof {emitted_name}>;\n"
            )

        self._session.record_export(declaration.name)
        return "".join(parts)

    def _enum_value(self, member: EnumMember) -> str:
        if member.value is None:
            return ""
        return f" = {self._expressions.evaluate(member.value)}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def is_attribute_class(declaration: TypeDeclaration) -> bool:
    """``class FooAttribute : Attribute`` (plain identifier base only)."""
    if declaration.keyword != TypeKeyword.CLASS:
        return False
    extends_attribute: bool = any(
        isinstance(base, IdentifierType) and base.name == ATTRIBUTE_BASE
        for base in declaration.base_types
    )
    return extends_attribute and declaration.name.endswith(ATTRIBUTE_BASE)


def is_suppressed(declaration: TypeDeclaration) -> bool:
    return is_attribute_class(declaration) or declaration.has_modifier("static")


def is_emitted_property(prop: PropertyDeclaration, owner: TypeDeclaration) -> bool:
    if prop.has_modifier("override") or prop.has_modifier("static"):
        return False
    return owner.is_interface or prop.has_modifier("public")


def _type_parameter_list(names: List[str]) -> str:
    if not names:
        return ""
    return f"<{', '.join(names)}>"


__all__: List[str] = [
    "DeclarationWalker",
    "is_attribute_class",
    "is_emitted_property",
    "is_suppressed",
]

logger.debug("cs2ts.walker loaded.")
