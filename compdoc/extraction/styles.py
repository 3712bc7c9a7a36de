"""Style class extraction from style registration sources."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from tree_sitter import Node

from ..logging import get_logger
from ..models import DEFAULT_STYLE_DESCRIPTION, StyleClasses, StyleDescriptor
from .syntax import (
    TYPESCRIPT,
    ParsedSource,
    callee_name,
    find_nodes_by_type,
    parse_source,
    string_literal_value,
)

logger = get_logger("extraction.styles")


class ConstantResolver:
    """Folds string-valued expressions built from literals and file-level constants."""

    def __init__(self, parsed: ParsedSource) -> None:
        self._parsed = parsed
        self._bindings: Dict[str, Node] = {}
        self._resolved: Dict[str, Optional[str]] = {}
        self._resolving: set[str] = set()
        for declarator in find_nodes_by_type(parsed.root, "variable_declarator"):
            name_node = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name_node is None or value is None or name_node.type != "identifier":
                continue
            self._bindings.setdefault(parsed.text(name_node), value)

    def constant(self, name: str) -> Optional[str]:
        if name in self._resolved:
            return self._resolved[name]
        node = self._bindings.get(name)
        if node is None or name in self._resolving:
            return None
        self._resolving.add(name)
        try:
            value = self.resolve(node)
        finally:
            self._resolving.discard(name)
        self._resolved[name] = value
        return value

    def resolve(self, node: Optional[Node]) -> Optional[str]:
        if node is None:
            return None
        kind = node.type
        if kind == "string":
            return string_literal_value(self._parsed, node)
        if kind == "identifier":
            return self.constant(self._parsed.text(node))
        if kind in ("parenthesized_expression", "as_expression", "satisfies_expression"):
            return self.resolve(node.named_children[0]) if node.named_children else None
        if kind == "binary_expression":
            operator = node.child_by_field_name("operator")
            if operator is None or self._parsed.text(operator) != "+":
                return None
            left = self.resolve(node.child_by_field_name("left"))
            right = self.resolve(node.child_by_field_name("right"))
            if left is None or right is None:
                return None
            return left + right
        if kind == "template_string":
            return self._resolve_template(node)
        return None

    def _resolve_template(self, node: Node) -> Optional[str]:
        source = self._parsed.source
        parts: List[str] = []
        cursor = node.start_byte + 1
        for child in node.children:
            if child.type != "template_substitution":
                continue
            parts.append(source[cursor : child.start_byte].decode("utf-8", errors="replace"))
            inner = child.named_children[0] if child.named_children else None
            value = self.resolve(inner)
            if value is None:
                return None
            parts.append(value)
            cursor = child.end_byte
        parts.append(source[cursor : node.end_byte - 1].decode("utf-8", errors="replace"))
        return "".join(parts)


def extract_style_classes(
    source: str,
    *,
    grammar: str = TYPESCRIPT,
    default_constant: str = "DEFAULT_CLASS",
    registrars: Iterable[str] = ("addStyle",),
) -> Optional[StyleClasses]:
    """Return the default style class and every registered class name, in order.

    Returns None when the source declares no resolvable default class constant.
    """
    parsed = parse_source(source, grammar)
    resolver = ConstantResolver(parsed)
    default_class = resolver.constant(default_constant)
    if not default_class:
        logger.debug("No %s constant found in style source", default_constant)
        return None

    registrar_names = set(registrars)
    classes: List[str] = []
    for call in find_nodes_by_type(parsed.root, "call_expression"):
        if callee_name(parsed, call) not in registrar_names:
            continue
        arguments = call.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            continue
        first = arguments.named_children[0]
        class_name = resolver.resolve(first)
        if class_name is None:
            logger.debug("Skipping unresolved style class expression %s", parsed.text(first))
            continue
        classes.append(class_name)

    return StyleClasses(default_class=default_class, style_classes=tuple(classes))


def build_style_descriptors(style_classes: StyleClasses) -> List[StyleDescriptor]:
    """Default class first, then the remaining distinct registrations in order."""
    styles = [
        StyleDescriptor(
            class_name=style_classes.default_class, description=DEFAULT_STYLE_DESCRIPTION
        )
    ]
    seen = {style_classes.default_class}
    for class_name in style_classes.style_classes:
        if class_name in seen:
            continue
        seen.add(class_name)
        styles.append(StyleDescriptor(class_name=class_name))
    return styles


__all__ = [
    "ConstantResolver",
    "build_style_descriptors",
    "extract_style_classes",
]
