# File: cs2ts/parser.py
"""
cs2ts - C# parser adapter
=========================
Parses C# source with ``tree-sitter`` (``tree-sitter-c-sharp`` grammar) and
lowers the concrete syntax tree into the declaration model of
``cs2ts.models``.

The adapter only *describes* what it finds.  Shapes the translator has no
rule for are kept as ``Unknown*`` nodes carrying their source span, so the
translator can report them; the adapter itself never drops a declaration,
type or expression silently.

Conditional compilation blocks (``#if``/``#elif``/``#else``) are replaced by
their active branch.  Conditions are evaluated against the symbols the file
``#define``s; no other symbols are defined.

tree-sitter recovers from syntax errors.  An error is fatal
(``SourceParseError``) only where the lowering consumes the source: the
declaration lists, a type or namespace header, a property's type and name,
and enum members.  Errors inside method bodies, accessors, constraint
clauses and other skipped members are left alone.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from cs2ts.errors import SourceParseError
from cs2ts.models import (
    ArrayType,
    BinaryExpression,
    CompilationUnit,
    EnumDeclaration,
    EnumMember,
    GenericType,
    IdentifierType,
    LiteralExpression,
    LiteralKind,
    NamespaceDeclaration,
    NullableType,
    ParenthesizedExpression,
    PredefinedType,
    PrefixUnaryExpression,
    PropertyDeclaration,
    QualifiedType,
    SourceSpan,
    SyntaxNode,
    TypeDeclaration,
    UnknownDeclaration,
    UnknownExpression,
    UnknownType,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("cs2ts.parser")

CSHARP_LANGUAGE: Language = Language(tree_sitter_c_sharp.language())

# ---------------------------------------------------------------------------
# Grammar node names
# ---------------------------------------------------------------------------

TYPE_DECLARATION_NODES: Dict[str, str] = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "struct_declaration": "struct",
}

NAMESPACE_NODES: FrozenSet[str] = frozenset({
    "namespace_declaration",
    "file_scoped_namespace_declaration",
})

# Children of a compilation unit or namespace that are not declarations.
NON_DECLARATION_NODES: FrozenSet[str] = frozenset({
    "using_directive",
    "extern_alias_directive",
    "global_attribute",
    "global_attribute_list",
    "attribute_list",
    "identifier",
    "qualified_name",
    "declaration_list",
    "shebang_directive",
})

CONDITIONAL_BRANCH_NODES: FrozenSet[str] = frozenset({"preproc_elif", "preproc_else"})

NUMERIC_LITERAL_NODES: FrozenSet[str] = frozenset({"integer_literal", "real_literal"})

STRING_LITERAL_NODES: FrozenSet[str] = frozenset({
    "string_literal",
    "verbatim_string_literal",
    "raw_string_literal",
})

_SIMPLE_ESCAPES: Dict[str, str] = {
    "'": "'",
    '"': '"',
    "\\": "\\",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


# ---------------------------------------------------------------------------
# Character literal decoding
# ---------------------------------------------------------------------------


def decode_character_literal(text: str) -> str:
    """
    Decode a C# character literal token such as ``'a'``, ``'\\n'`` or
    ``'\\u0041'`` into the character it denotes.

    Raises:
        ValueError: The token is not a well-formed character literal.
    """
    if len(text) < 3 or text[0] != "'" or text[-1] != "'":
        raise ValueError(f"Not a character literal: {text!r}")
    body: str = text[1:-1]
    if not body.startswith("\\"):
        return body[0]

    code: str = body[1:2]
    if code in _SIMPLE_ESCAPES and len(body) == 2:
        return _SIMPLE_ESCAPES[code]
    if code == "u" and len(body) == 6:
        return chr(int(body[2:], 16))
    if code == "U" and len(body) == 10:
        return chr(int(body[2:], 16))
    if code == "x" and 3 <= len(body) <= 6:
        return chr(int(body[2:], 16))
    raise ValueError(f"Unsupported escape sequence in {text!r}")


# ---------------------------------------------------------------------------
# Tree lowering
# ---------------------------------------------------------------------------


class _TreeLowering:
    """Converts tree-sitter nodes of one source buffer into model nodes."""

    def __init__(self, source: bytes) -> None:
        self._source: bytes = source
        self._symbols: Set[str] = set()

    # -- helpers -------------------------------------------------------

    def text(self, node: Node) -> str:
        return self._source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def span(self, node: Node) -> SourceSpan:
        """Span of *node*; the column counts UTF-16 code units."""
        row, byte_column = node.start_point
        line_start: int = node.start_byte - byte_column
        prefix: str = self._source[line_start:node.start_byte].decode("utf-8", errors="replace")
        return SourceSpan(
            line=row,
            column=len(prefix.encode("utf-16-le")) // 2,
            text=self.text(node),
        )

    # -- syntax errors -------------------------------------------------

    def syntax_error(self, node: Node) -> SourceParseError:
        first: Node = next(_iter_error_nodes(node), node)
        span: SourceSpan = self.span(first)
        detail: str = (
            f"missing '{first.type}'" if first.is_missing else f"unexpected '{span.text.strip()[:40]}'"
        )
        return SourceParseError(f"Syntax error: {detail}", line=span.line, column=span.column)

    def check(self, node: Optional[Node]) -> None:
        """Raise if *node* contains an ERROR or MISSING node anywhere."""
        if node is not None and (node.has_error or node.is_missing):
            raise self.syntax_error(node)

    def check_tokens(self, node: Node) -> None:
        """Raise if one of *node*'s own tokens is MISSING."""
        for child in node.children:
            if child.is_missing:
                raise self.syntax_error(child)

    # -- conditional compilation ---------------------------------------

    def collect_symbols(self, root: Node) -> None:
        for child in root.named_children:
            if child.type not in ("preproc_define", "preproc_undef"):
                continue
            name_node: Optional[Node] = _first_named_child(child, "identifier")
            words: List[str] = self.text(child).split()
            name: str = self.text(name_node).strip() if name_node is not None else words[-1]
            if child.type == "preproc_define":
                self._symbols.add(name)
            else:
                self._symbols.discard(name)

    def expand(self, nodes: List[Node]) -> Iterator[Node]:
        """Yield *nodes* with each ``#if`` block replaced by its active branch."""
        for node in nodes:
            if node.type == "preproc_if":
                yield from self.expand(self.active_branch(node))
            else:
                yield node

    def active_branch(self, node: Node) -> List[Node]:
        branch: Optional[Node] = node
        while branch is not None:
            condition: Optional[Node] = None
            if branch.type != "preproc_else":
                condition = branch.child_by_field_name("condition")
                if condition is None and branch.named_children:
                    condition = branch.named_children[0]
            alternative: Optional[Node] = branch.child_by_field_name("alternative")
            if alternative is None:
                alternative = next(
                    (c for c in branch.named_children if c.type in CONDITIONAL_BRANCH_NODES),
                    None,
                )
            if condition is None or self.condition(condition):
                skipped: Set[int] = {n.id for n in (condition, alternative) if n is not None}
                return [child for child in branch.named_children if child.id not in skipped]
            branch = alternative
        return []

    def condition(self, node: Node) -> bool:
        """Evaluate a preprocessor condition."""
        kind: str = node.type
        text: str = self.text(node).strip()

        if kind == "identifier":
            return text in self._symbols
        if kind == "boolean_literal":
            return text == "true"
        if kind == "parenthesized_expression":
            inner: List[Node] = [c for c in node.named_children if c.type != "comment"]
            return len(inner) == 1 and self.condition(inner[0])
        if kind in ("prefix_unary_expression", "unary_expression") and node.named_children:
            return not self.condition(node.named_children[-1])
        if kind == "binary_expression":
            left: Optional[Node] = node.child_by_field_name("left")
            right: Optional[Node] = node.child_by_field_name("right")
            operator_node: Optional[Node] = node.child_by_field_name("operator")
            if left is not None and right is not None and operator_node is not None:
                operator: str = self.text(operator_node).strip()
                if operator == "&&":
                    return self.condition(left) and self.condition(right)
                if operator == "||":
                    return self.condition(left) or self.condition(right)
                if operator == "==":
                    return self.condition(left) == self.condition(right)
                if operator == "!=":
                    return self.condition(left) != self.condition(right)

        logger.debug("Unsupported preprocessor condition %r; treating it as false.", text)
        return False

    def name_of(self, node: Node) -> str:
        name_node: Optional[Node] = node.child_by_field_name("name")
        if name_node is None:
            name_node = _first_named_child(node, "identifier")
        return self.text(name_node) if name_node is not None else ""

    def modifiers(self, node: Node) -> frozenset:
        return frozenset(
            self.text(child).strip()
            for child in node.children
            if child.type == "modifier"
        )

    # -- declarations --------------------------------------------------

    def compilation_unit(self, root: Node) -> CompilationUnit:
        self.collect_symbols(root)
        self.check_tokens(root)
        return CompilationUnit(
            members=self.declarations(root.named_children),
            span=self.span(root),
        )

    def declarations(self, nodes: List[Node]) -> List[SyntaxNode]:
        """Lower the declaration children of a unit, namespace or body."""
        result: List[SyntaxNode] = []
        comments: List[str] = []
        for node in self.expand(nodes):
            if node.type == "comment":
                comments.append(self.text(node))
                continue
            documentation: Tuple[str, ...] = tuple(comments)
            comments = []
            if node.type == "ERROR" or node.is_missing:
                raise self.syntax_error(node)
            if node.type in NON_DECLARATION_NODES or node.type.startswith("preproc"):
                continue
            result.append(self.declaration(node, documentation))
        return result

    def declaration(self, node: Node, documentation: Tuple[str, ...]) -> SyntaxNode:
        if node.type in NAMESPACE_NODES:
            return self.namespace(node)
        if node.type in TYPE_DECLARATION_NODES:
            return self.type_declaration(node, documentation)
        if node.type == "enum_declaration":
            return self.enum_declaration(node, documentation)
        logger.debug("Unknown declaration node '%s'.", node.type)
        return UnknownDeclaration(node_type=node.type, span=self.span(node))

    def namespace(self, node: Node) -> NamespaceDeclaration:
        body: Optional[Node] = node.child_by_field_name("body")
        if body is None:
            body = _first_named_child(node, "declaration_list")
        # File-scoped namespaces hold their declarations directly.
        children: List[Node] = body.named_children if body is not None else node.named_children
        name_node: Optional[Node] = node.child_by_field_name("name")
        self.check(name_node)
        self.check_tokens(node)
        if body is not None:
            self.check_tokens(body)
        return NamespaceDeclaration(
            name=self.text(name_node) if name_node is not None else "",
            members=self.declarations(children),
            span=self.span(node),
        )

    def type_declaration(self, node: Node, documentation: Tuple[str, ...]) -> TypeDeclaration:
        # Errors in constraint clauses and non-property members pass through.
        self.check(node.child_by_field_name("name"))
        self.check_tokens(node)

        type_parameters: List[str] = []
        parameter_list: Optional[Node] = _first_named_child(node, "type_parameter_list")
        self.check(parameter_list)
        if parameter_list is not None:
            for parameter in parameter_list.named_children:
                if parameter.type == "type_parameter":
                    type_parameters.append(self.name_of(parameter))

        base_types: List[SyntaxNode] = []
        base_list: Optional[Node] = _first_named_child(node, "base_list")
        self.check(base_list)
        if base_list is not None:
            for base in base_list.named_children:
                if base.type == "primary_constructor_base_type":
                    base = base.named_children[0]
                if base.type in ("argument_list", "comment"):
                    continue
                base_types.append(self.type_reference(base))

        properties: List[PropertyDeclaration] = []
        body: Optional[Node] = node.child_by_field_name("body")
        if body is None:
            body = _first_named_child(node, "declaration_list")
        if body is not None:
            self.check_tokens(body)
            comments: List[str] = []
            for member in self.expand(body.named_children):
                if member.type == "comment":
                    comments.append(self.text(member))
                    continue
                if member.type == "ERROR":
                    raise self.syntax_error(member)
                if member.type == "property_declaration":
                    properties.append(self.property(member, tuple(comments)))
                comments = []

        return TypeDeclaration(
            keyword=TYPE_DECLARATION_NODES[node.type],
            name=self.name_of(node),
            type_parameters=type_parameters,
            properties=properties,
            base_types=base_types,
            modifiers=self.modifiers(node),
            documentation=documentation,
            span=self.span(node),
        )

    def property(self, node: Node, documentation: Tuple[str, ...]) -> PropertyDeclaration:
        type_node: Optional[Node] = node.child_by_field_name("type")
        self.check(type_node)
        self.check(node.child_by_field_name("name"))
        type_ref: SyntaxNode = (
            self.type_reference(type_node)
            if type_node is not None
            else UnknownType(node_type=node.type, span=self.span(node))
        )
        return PropertyDeclaration(
            name=self.name_of(node),
            type=type_ref,
            modifiers=self.modifiers(node),
            documentation=documentation,
            span=self.span(node),
        )

    def enum_declaration(self, node: Node, documentation: Tuple[str, ...]) -> EnumDeclaration:
        members: List[EnumMember] = []
        body: Optional[Node] = node.child_by_field_name("body")
        if body is None:
            body = _first_named_child(node, "enum_member_declaration_list")
        self.check(node.child_by_field_name("name"))
        self.check_tokens(node)
        if body is not None:
            self.check_tokens(body)
            for member in self.expand(body.named_children):
                if member.type in ("enum_member_declaration", "ERROR"):
                    self.check(member)
                if member.type == "enum_member_declaration":
                    members.append(self.enum_member(member))
        return EnumDeclaration(
            name=self.name_of(node),
            members=members,
            modifiers=self.modifiers(node),
            documentation=documentation,
            span=self.span(node),
        )

    def enum_member(self, node: Node) -> EnumMember:
        value_node: Optional[Node] = node.child_by_field_name("value")
        if value_node is None:
            candidates = [
                child for child in node.named_children
                if child.type not in ("identifier", "attribute_list", "comment")
            ]
            value_node = candidates[0] if candidates else None
        return EnumMember(
            name=self.name_of(node),
            value=self.expression(value_node) if value_node is not None else None,
            span=self.span(node),
        )

    # -- type references -----------------------------------------------

    def type_reference(self, node: Node) -> SyntaxNode:
        kind: str = node.type
        span: SourceSpan = self.span(node)

        if kind == "identifier":
            return IdentifierType(name=self.text(node), span=span)

        if kind == "generic_name":
            name: str = self.name_of(node)
            arguments: List[SyntaxNode] = []
            argument_list: Optional[Node] = _first_named_child(node, "type_argument_list")
            if argument_list is not None:
                arguments = [
                    self.type_reference(arg)
                    for arg in argument_list.named_children
                    if arg.type != "comment"
                ]
            return GenericType(name=name, arguments=arguments, span=span)

        if kind in ("qualified_name", "alias_qualified_name"):
            right: Optional[Node] = node.child_by_field_name("name")
            if right is None and node.named_children:
                right = node.named_children[-1]
            qualifier: Optional[Node] = node.child_by_field_name("qualifier")
            if qualifier is None:
                qualifier = node.child_by_field_name("alias")
            path: List[str] = []
            if qualifier is not None:
                path = [part.strip() for part in self.text(qualifier).replace("::", ".").split(".")]
            if right is None:
                return UnknownType(node_type=kind, span=span)
            return QualifiedType(qualifier=path, right=self.type_reference(right), span=span)

        if kind == "predefined_type":
            return PredefinedType(keyword=self.text(node).strip(), span=span)

        if kind == "nullable_type":
            inner: Optional[Node] = node.child_by_field_name("type")
            if inner is None and node.named_children:
                inner = node.named_children[0]
            if inner is None:
                return UnknownType(node_type=kind, span=span)
            return NullableType(inner=self.type_reference(inner), span=span)

        if kind == "array_type":
            element: Optional[Node] = node.child_by_field_name("type")
            if element is None and node.named_children:
                element = node.named_children[0]
            if element is None:
                return UnknownType(node_type=kind, span=span)
            return ArrayType(element=self.type_reference(element), span=span)

        return UnknownType(node_type=kind, span=span)

    # -- expressions ---------------------------------------------------

    def expression(self, node: Node) -> SyntaxNode:
        kind: str = node.type
        span: SourceSpan = self.span(node)
        text: str = self.text(node)

        if kind == "literal" and node.named_child_count == 1:
            return self.expression(node.named_children[0])

        if kind in NUMERIC_LITERAL_NODES:
            return LiteralExpression(literal_kind=LiteralKind.NUMERIC, text=text, span=span)
        if kind in STRING_LITERAL_NODES:
            return LiteralExpression(literal_kind=LiteralKind.STRING, text=text, span=span)
        if kind == "boolean_literal":
            literal_kind = LiteralKind.TRUE if text.strip() == "true" else LiteralKind.FALSE
            return LiteralExpression(literal_kind=literal_kind, text=text, span=span)
        if kind == "null_literal":
            return LiteralExpression(literal_kind=LiteralKind.NULL, text=text, span=span)
        if kind in ("default_expression", "default_literal") and text.strip() == "default":
            return LiteralExpression(literal_kind=LiteralKind.DEFAULT, text=text, span=span)
        if kind == "character_literal":
            try:
                value: str = decode_character_literal(text.strip())
            except ValueError:
                return UnknownExpression(node_type=kind, span=span)
            return LiteralExpression(
                literal_kind=LiteralKind.CHARACTER, text=text, value=value, span=span
            )

        if kind == "prefix_unary_expression":
            operand: Optional[Node] = node.child_by_field_name("operand")
            if operand is None and node.named_children:
                operand = node.named_children[-1]
            operator: str = _operator_text(self, node, operand)
            if operand is None or not operator:
                return UnknownExpression(node_type=kind, span=span)
            return PrefixUnaryExpression(
                operator=operator, operand=self.expression(operand), span=span
            )

        if kind == "binary_expression":
            left: Optional[Node] = node.child_by_field_name("left")
            right: Optional[Node] = node.child_by_field_name("right")
            operator_node: Optional[Node] = node.child_by_field_name("operator")
            if left is None or right is None or operator_node is None:
                return UnknownExpression(node_type=kind, span=span)
            return BinaryExpression(
                operator=self.text(operator_node).strip(),
                left=self.expression(left),
                right=self.expression(right),
                span=span,
            )

        if kind == "parenthesized_expression":
            inner = [child for child in node.named_children if child.type != "comment"]
            if len(inner) != 1:
                return UnknownExpression(node_type=kind, span=span)
            return ParenthesizedExpression(inner=self.expression(inner[0]), span=span)

        return UnknownExpression(node_type=kind, span=span)


def _first_named_child(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def _operator_text(lowering: _TreeLowering, node: Node, operand: Optional[Node]) -> str:
    """Text of the operator token in front of a prefix-unary operand."""
    operator_node: Optional[Node] = node.child_by_field_name("operator")
    if operator_node is not None:
        return lowering.text(operator_node).strip()
    for child in node.children:
        if operand is not None and child.start_byte >= operand.start_byte:
            break
        if not child.is_named:
            return lowering.text(child).strip()
    return ""


def _iter_error_nodes(node: Node) -> Iterator[Node]:
    if node.type == "ERROR" or node.is_missing:
        yield node
        return
    for child in node.children:
        if child.has_error or child.is_missing:
            yield from _iter_error_nodes(child)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_source(source: str) -> CompilationUnit:
    """
    Parse C# *source* into a ``CompilationUnit``.

    Raises:
        SourceParseError: A syntax error sits in a part of the source that
            is translated.
    """
    encoded: bytes = source.encode("utf-8")
    parser: Parser = Parser(CSHARP_LANGUAGE)
    tree = parser.parse(encoded)
    root: Node = tree.root_node
    lowering = _TreeLowering(encoded)

    unit: CompilationUnit = lowering.compilation_unit(root)
    if root.has_error:
        ignored: Optional[Node] = next(_iter_error_nodes(root), None)
        if ignored is not None:
            span: SourceSpan = lowering.span(ignored)
            logger.debug(
                "Ignored syntax error at %d:%d outside translated declarations.",
                span.line,
                span.column,
            )
    logger.debug("Parsed %d top-level declaration(s).", len(unit.members))
    return unit


__all__: List[str] = [
    "CSHARP_LANGUAGE",
    "decode_character_literal",
    "parse_source",
]

logger.debug("cs2ts.parser loaded.")
