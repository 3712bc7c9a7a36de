"""Tree-sitter parsing helpers for TypeScript and compiled JavaScript sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser, Tree

TYPESCRIPT = "typescript"
TSX = "tsx"

_ENCODING = "utf-8"
_TSX_SUFFIXES = (".tsx", ".jsx", ".js", ".mjs", ".cjs")

_LANGUAGES: Dict[str, Language] = {
    TYPESCRIPT: Language(tsts.language_typescript()),
    TSX: Language(tsts.language_tsx()),
}
_PARSERS: Dict[str, Parser] = {}

CLASS_TYPES = ("class_declaration", "abstract_class_declaration", "class")
INTERFACE_TYPE = "interface_declaration"
FIELD_TYPES = ("public_field_definition", "property_definition")
STRING_TYPES = ("string",)


def grammar_for_file(file_name: Optional[str]) -> str:
    """Pick the grammar for an original file name; JSX-capable files use TSX."""
    if file_name and file_name.lower().endswith(_TSX_SUFFIXES):
        return TSX
    return TYPESCRIPT


def _get_parser(grammar: str) -> Parser:
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser()
        parser.language = _LANGUAGES[grammar]
        _PARSERS[grammar] = parser
    return parser


@dataclass
class ParsedSource:
    """A parsed syntax tree together with the bytes it was parsed from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode(_ENCODING, errors="replace")


def parse_source(source: str, grammar: str = TYPESCRIPT) -> ParsedSource:
    source_bytes = source.encode(_ENCODING)
    tree = _get_parser(grammar).parse(source_bytes)
    return ParsedSource(tree=tree, source=source_bytes)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and its descendants depth-first in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def find_nodes_by_type(node: Node, *node_types: str) -> List[Node]:
    return [
        candidate
        for candidate in iter_nodes(node)
        if candidate.is_named and candidate.type in node_types
    ]


def find_child_by_type(node: Node, *child_types: str) -> Optional[Node]:
    for child in node.children:
        if child.type in child_types:
            return child
    return None


def has_child_token(node: Node, token: str) -> bool:
    return any(child.type == token for child in node.children)


def type_annotation_text(parsed: ParsedSource, annotation: Optional[Node]) -> Optional[str]:
    """Return the type expression of a ``type_annotation`` node without the colon."""
    if annotation is None or annotation.type != "type_annotation":
        return None
    if len(annotation.children) < 2:
        return None
    return parsed.text(annotation.children[-1]).strip()


def declaration_name(parsed: ParsedSource, node: Node) -> Optional[str]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        name_node = find_child_by_type(
            node, "type_identifier", "identifier", "property_identifier", "private_property_identifier"
        )
    if name_node is None:
        return None
    return parsed.text(name_node)


def string_literal_value(parsed: ParsedSource, node: Node) -> Optional[str]:
    if node.type not in STRING_TYPES:
        return None
    raw = parsed.text(node)
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in {"'", '"'}:
        return raw[1:-1]
    return None


def is_default_export(node: Node) -> bool:
    parent = node.parent
    if parent is None or parent.type != "export_statement":
        return False
    return has_child_token(parent, "default")


def callee_name(parsed: ParsedSource, call: Node) -> Optional[str]:
    """Name of the function a call expression invokes (``f()`` or ``obj.f()``)."""
    function = call.child_by_field_name("function")
    if function is None:
        return None
    if function.type == "identifier":
        return parsed.text(function)
    if function.type == "member_expression":
        prop = function.child_by_field_name("property")
        return parsed.text(prop) if prop is not None else None
    return None


__all__ = [
    "CLASS_TYPES",
    "FIELD_TYPES",
    "INTERFACE_TYPE",
    "ParsedSource",
    "TSX",
    "TYPESCRIPT",
    "callee_name",
    "declaration_name",
    "find_child_by_type",
    "find_nodes_by_type",
    "grammar_for_file",
    "has_child_token",
    "is_default_export",
    "iter_nodes",
    "parse_source",
    "string_literal_value",
    "type_annotation_text",
]
