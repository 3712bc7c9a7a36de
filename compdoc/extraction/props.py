"""Property-bag extraction from TypeScript props declarations."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from tree_sitter import Node

from ..logging import get_logger
from ..models import PropertyBag, PropertyDescriptor
from .syntax import (
    CLASS_TYPES,
    FIELD_TYPES,
    INTERFACE_TYPE,
    TYPESCRIPT,
    ParsedSource,
    declaration_name,
    find_child_by_type,
    find_nodes_by_type,
    has_child_token,
    parse_source,
    string_literal_value,
    type_annotation_text,
)

logger = get_logger("extraction.props")

UNTYPED = "any"
_HIDDEN_MODIFIERS = {"private", "protected"}
_WRAPPER_EXPRESSIONS = {"as_expression", "satisfies_expression", "parenthesized_expression"}


def extract_props(
    source: str,
    type_name: Optional[str] = None,
    *,
    grammar: str = TYPESCRIPT,
    type_suffix: str = "Props",
    default_props_names: Sequence[str] = ("defaultProps", "DEFAULT_PROPS"),
) -> Optional[PropertyBag]:
    """Extract the property bag declared in ``source``.

    The declaration named ``type_name`` is preferred; otherwise the first class or
    interface whose name ends with ``type_suffix``; otherwise the first one that
    declares any fields. Returns None when the file has no such declaration.
    """
    parsed = parse_source(source, grammar)
    declaration = _select_declaration(parsed, type_name, type_suffix)
    if declaration is None:
        logger.debug("No property declaration found (wanted %s)", type_name or f"*{type_suffix}")
        return None

    class_name = declaration_name(parsed, declaration) or "<anonymous>"
    initializer_defaults = _collect_default_initializers(parsed, declaration, default_props_names)

    if declaration.type == INTERFACE_TYPE:
        base_class = _interface_base(parsed, declaration)
        props = _interface_props(parsed, declaration, initializer_defaults)
    else:
        base_class = _class_base(parsed, declaration)
        props = _class_props(parsed, declaration, initializer_defaults)

    return PropertyBag(class_name=class_name, props=tuple(props), base_class=base_class)


def _select_declaration(
    parsed: ParsedSource, type_name: Optional[str], type_suffix: str
) -> Optional[Node]:
    declarations = find_nodes_by_type(parsed.root, *CLASS_TYPES, INTERFACE_TYPE)
    if not declarations:
        return None

    names = [declaration_name(parsed, node) or "" for node in declarations]
    if type_name:
        for node, name in zip(declarations, names):
            if name == type_name:
                return node

    if type_suffix:
        for node, name in zip(declarations, names):
            if name.endswith(type_suffix):
                return node

    for node in declarations:
        if _declared_members(node):
            return node
    return None


def _declared_members(declaration: Node) -> List[Node]:
    body = declaration.child_by_field_name("body")
    if body is None:
        return []
    if declaration.type == INTERFACE_TYPE:
        return [
            child
            for child in body.children
            if child.type in ("property_signature", "method_signature")
        ]
    return [child for child in body.children if child.type in FIELD_TYPES]


def _class_base(parsed: ParsedSource, declaration: Node) -> Optional[str]:
    heritage = find_child_by_type(declaration, "class_heritage")
    if heritage is None:
        return None
    extends = find_child_by_type(heritage, "extends_clause")
    if extends is None:
        return None
    value = extends.child_by_field_name("value")
    if value is None:
        named = [child for child in extends.named_children if child.type != "type_arguments"]
        value = named[0] if named else None
    if value is None:
        return None
    return _last_segment(parsed.text(value))


def _interface_base(parsed: ParsedSource, declaration: Node) -> Optional[str]:
    clause = find_child_by_type(declaration, "extends_type_clause")
    if clause is None or not clause.named_children:
        return None
    first = clause.named_children[0]
    if first.type == "generic_type":
        name_node = first.child_by_field_name("name") or (
            first.named_children[0] if first.named_children else None
        )
        if name_node is None:
            return None
        return _last_segment(parsed.text(name_node))
    return _last_segment(parsed.text(first))


def _last_segment(text: str) -> str:
    return text.strip().split(".")[-1]


def _class_props(
    parsed: ParsedSource, declaration: Node, defaults: Dict[str, str]
) -> List[PropertyDescriptor]:
    props: List[PropertyDescriptor] = []
    seen: set[str] = set()
    for member in _declared_members(declaration):
        if has_child_token(member, "static") or _is_hidden(parsed, member):
            continue
        name = _member_name(parsed, member)
        if not name or name in seen:
            continue
        seen.add(name)
        value = member.child_by_field_name("value")
        default_value = parsed.text(value).strip() if value is not None else defaults.get(name)
        prop_type = type_annotation_text(parsed, member.child_by_field_name("type"))
        if prop_type is None:
            prop_type = type_annotation_text(parsed, find_child_by_type(member, "type_annotation"))
        props.append(
            PropertyDescriptor(
                name=name,
                type=prop_type or UNTYPED,
                optional=has_child_token(member, "?"),
                default_value=default_value,
            )
        )
    return props


def _interface_props(
    parsed: ParsedSource, declaration: Node, defaults: Dict[str, str]
) -> List[PropertyDescriptor]:
    props: List[PropertyDescriptor] = []
    seen: set[str] = set()
    for member in _declared_members(declaration):
        name = _member_name(parsed, member)
        if not name or name in seen:
            continue
        seen.add(name)
        if member.type == "method_signature":
            prop_type = _method_signature_type(parsed, member)
        else:
            prop_type = type_annotation_text(parsed, member.child_by_field_name("type"))
            if prop_type is None:
                prop_type = type_annotation_text(
                    parsed, find_child_by_type(member, "type_annotation")
                )
        props.append(
            PropertyDescriptor(
                name=name,
                type=prop_type or UNTYPED,
                optional=has_child_token(member, "?"),
                default_value=defaults.get(name),
            )
        )
    return props


def _method_signature_type(parsed: ParsedSource, member: Node) -> str:
    params = member.child_by_field_name("parameters") or find_child_by_type(
        member, "formal_parameters"
    )
    return_type = type_annotation_text(parsed, member.child_by_field_name("return_type"))
    params_text = parsed.text(params) if params is not None else "()"
    return f"{params_text} => {return_type or 'void'}"


def _member_name(parsed: ParsedSource, member: Node) -> Optional[str]:
    name_node = member.child_by_field_name("name")
    if name_node is None:
        name_node = find_child_by_type(member, "property_identifier", "string")
    if name_node is None or name_node.type in ("private_property_identifier", "computed_property_name"):
        return None
    literal = string_literal_value(parsed, name_node)
    return literal if literal is not None else parsed.text(name_node)


def _is_hidden(parsed: ParsedSource, member: Node) -> bool:
    modifier = find_child_by_type(member, "accessibility_modifier")
    return modifier is not None and parsed.text(modifier) in _HIDDEN_MODIFIERS


def _collect_default_initializers(
    parsed: ParsedSource, declaration: Node, names: Sequence[str]
) -> Dict[str, str]:
    """Collect defaults from ``defaultProps``-style object literals anywhere in the file."""
    if not names:
        return {}
    wanted = set(names)
    objects: List[Node] = []

    for member in _static_members(declaration):
        if _member_name(parsed, member) in wanted:
            value = _unwrap(member.child_by_field_name("value"))
            if value is not None and value.type == "object":
                objects.append(value)

    for declarator in find_nodes_by_type(parsed.root, "variable_declarator"):
        name_node = declarator.child_by_field_name("name")
        if name_node is not None and parsed.text(name_node) in wanted:
            value = _unwrap(declarator.child_by_field_name("value"))
            if value is not None and value.type == "object":
                objects.append(value)

    for assignment in find_nodes_by_type(parsed.root, "assignment_expression"):
        left = assignment.child_by_field_name("left")
        if left is None or left.type != "member_expression":
            continue
        prop = left.child_by_field_name("property")
        if prop is not None and parsed.text(prop) in wanted:
            value = _unwrap(assignment.child_by_field_name("right"))
            if value is not None and value.type == "object":
                objects.append(value)

    defaults: Dict[str, str] = {}
    for obj in objects:
        for key, value in _object_entries(parsed, obj):
            defaults.setdefault(key, value)
    return defaults


def _static_members(declaration: Node) -> List[Node]:
    body = declaration.child_by_field_name("body")
    if body is None or declaration.type == INTERFACE_TYPE:
        return []
    return [
        child
        for child in body.children
        if child.type in FIELD_TYPES and has_child_token(child, "static")
    ]


def _unwrap(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type in _WRAPPER_EXPRESSIONS and node.named_children:
        node = node.named_children[0]
    return node


def _object_entries(parsed: ParsedSource, obj: Node) -> List[tuple[str, str]]:
    entries: List[tuple[str, str]] = []
    for child in obj.named_children:
        if child.type == "pair":
            key_node = child.child_by_field_name("key")
            value_node = child.child_by_field_name("value")
            if key_node is None or value_node is None:
                continue
            literal = string_literal_value(parsed, key_node)
            key = literal if literal is not None else parsed.text(key_node)
            entries.append((key, parsed.text(value_node).strip()))
        elif child.type == "shorthand_property_identifier":
            name = parsed.text(child)
            entries.append((name, name))
    return entries


__all__ = ["UNTYPED", "extract_props"]
