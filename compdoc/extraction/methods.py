"""Public method extraction from component class declarations."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from tree_sitter import Node

from ..logging import get_logger
from ..models import MethodDescriptor, ParameterDescriptor
from .syntax import (
    CLASS_TYPES,
    FIELD_TYPES,
    TSX,
    ParsedSource,
    declaration_name,
    find_child_by_type,
    find_nodes_by_type,
    has_child_token,
    is_default_export,
    parse_source,
    type_annotation_text,
)

logger = get_logger("extraction.methods")

_NON_COMPONENT_SUFFIXES = ("Props", "State", "Styles")
_PARAMETER_TYPES = ("required_parameter", "optional_parameter")
_ACCESSOR_TOKENS = ("get", "set")


def extract_methods(
    source: str,
    *,
    grammar: str = TSX,
    denylist: Iterable[str] = (),
    non_component_suffixes: Sequence[str] = _NON_COMPONENT_SUFFIXES,
) -> Optional[List[MethodDescriptor]]:
    """Return the externally callable methods of the primary component class.

    Members are kept when they are public (explicitly or by omission), not static,
    not accessors, not listed in ``denylist``, and declare both a parameter list
    and a return type. Returns None when the source has no class declaration.
    """
    parsed = parse_source(source, grammar)
    declaration = _select_component_class(parsed, non_component_suffixes)
    if declaration is None:
        logger.debug("No component class declaration found")
        return None

    body = declaration.child_by_field_name("body")
    if body is None:
        return []

    blocked = set(denylist)
    methods: List[MethodDescriptor] = []
    seen: set[str] = set()
    for member in body.named_children:
        if member.type == "method_definition":
            callable_node = member
        elif member.type in FIELD_TYPES:
            callable_node = member.child_by_field_name("value")
            if callable_node is None or callable_node.type != "arrow_function":
                continue
        else:
            continue

        if not _is_exposed(parsed, member):
            continue
        name_node = member.child_by_field_name("name")
        if name_node is None or name_node.type != "property_identifier":
            continue
        name = parsed.text(name_node)
        if name in blocked or name in seen or name == "constructor":
            continue

        method = _build_method(parsed, name, callable_node)
        if method is None:
            continue
        seen.add(name)
        methods.append(method)
    return methods


def _select_component_class(
    parsed: ParsedSource, non_component_suffixes: Sequence[str]
) -> Optional[Node]:
    classes = find_nodes_by_type(parsed.root, *CLASS_TYPES)
    if not classes:
        return None
    for node in classes:
        if is_default_export(node):
            return node
    for node in classes:
        name = declaration_name(parsed, node) or ""
        if not name.endswith(tuple(non_component_suffixes)):
            return node
    return classes[0]


def _is_exposed(parsed: ParsedSource, member: Node) -> bool:
    if has_child_token(member, "static"):
        return False
    if any(has_child_token(member, token) for token in _ACCESSOR_TOKENS):
        return False
    modifier = find_child_by_type(member, "accessibility_modifier")
    return modifier is None or parsed.text(modifier) == "public"


def _build_method(parsed: ParsedSource, name: str, node: Node) -> Optional[MethodDescriptor]:
    params_node = node.child_by_field_name("parameters")
    return_type = type_annotation_text(parsed, node.child_by_field_name("return_type"))
    if params_node is None or return_type is None:
        logger.debug("Skipping %s: missing parameter list or return type", name)
        return None
    return MethodDescriptor(
        name=name,
        parameters=tuple(_parameters(parsed, params_node)),
        return_type=return_type,
    )


def _parameters(parsed: ParsedSource, params_node: Node) -> List[ParameterDescriptor]:
    parameters: List[ParameterDescriptor] = []
    for param in params_node.named_children:
        if param.type not in _PARAMETER_TYPES:
            continue
        pattern = param.child_by_field_name("pattern")
        name = parsed.text(pattern).strip() if pattern is not None else ""
        if not name or name == "this":
            continue
        param_type = type_annotation_text(parsed, param.child_by_field_name("type"))
        optional = param.type == "optional_parameter" or param.child_by_field_name("value") is not None
        parameters.append(
            ParameterDescriptor(name=name, type=param_type or "any", optional=optional)
        )
    return parameters


__all__ = ["extract_methods"]
