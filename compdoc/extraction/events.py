"""Event inference from callback properties and compiled emitter call sites."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence

from tree_sitter import Node

from ..logging import get_logger
from ..models import EVENT_TYPE, EventDescriptor, PropertyDescriptor
from .syntax import (
    TSX,
    TYPESCRIPT,
    ParsedSource,
    callee_name,
    find_child_by_type,
    find_nodes_by_type,
    parse_source,
    string_literal_value,
)

logger = get_logger("extraction.events")

EVENT_PREFIX = "on"
_NULLISH_TYPES = frozenset({"undefined", "null"})


def _union_members(node: Node) -> List[Node]:
    if node.type != "union_type":
        return [node]
    members: List[Node] = []
    for child in node.named_children:
        members.extend(_union_members(child))
    return members


def _callable_shape(parsed: ParsedSource, node: Node) -> Optional[Node]:
    """Unwrap parentheses and nullable union members down to a single type."""
    while node.type == "parenthesized_type" and node.named_children:
        node = node.named_children[0]
    if node.type != "union_type":
        return None if parsed.text(node).strip() in _NULLISH_TYPES else node
    members = [
        member
        for member in _union_members(node)
        if parsed.text(member).strip() not in _NULLISH_TYPES
    ]
    if len(members) != 1:
        return None
    return _callable_shape(parsed, members[0])


@lru_cache(maxsize=512)
def _callable_parameters(event_type: str) -> Optional[str]:
    """Parameter list of a callable type, or None when the type is not callable.

    ``Function`` renders as ``()``. A nullable callable such as
    ``((v: string) => void) | undefined`` is treated as the callable itself.
    """
    parsed = parse_source(f"type EventType = {event_type};", TYPESCRIPT)
    if parsed.root.has_error:
        return None
    declarations = find_nodes_by_type(parsed.root, "type_alias_declaration")
    if not declarations:
        return None
    value = declarations[0].child_by_field_name("value")
    if value is None:
        return None
    shape = _callable_shape(parsed, value)
    if shape is None:
        return None
    if shape.type == "type_identifier" and parsed.text(shape) == "Function":
        return "()"
    if shape.type != "function_type":
        return None
    parameters = shape.child_by_field_name("parameters") or find_child_by_type(
        shape, "formal_parameters"
    )
    if parameters is None:
        return None
    return parsed.text(parameters)


def is_event_property(prop: PropertyDescriptor) -> bool:
    """True for ``on*`` properties whose type is a callable shape."""
    if not prop.name.startswith(EVENT_PREFIX):
        return False
    return _callable_parameters(prop.type.strip()) is not None


def extract_event_parameters(event_type: str) -> str:
    """Render the parameter signature of a callable type expression.

    Types that are not callable are returned verbatim.
    """
    parameters = _callable_parameters(event_type.strip())
    return event_type if parameters is None else parameters


def events_from_props(props: Iterable[PropertyDescriptor]) -> List[EventDescriptor]:
    return [
        EventDescriptor(name=prop.name, parameters=extract_event_parameters(prop.type))
        for prop in props
        if is_event_property(prop)
    ]


def events_from_call_sites(
    compiled_js: str, emitters: Sequence[str] = ("invokeEventCallback",)
) -> List[EventDescriptor]:
    """Scan compiled output for ``emitter('onName', [args])`` calls.

    Only calls whose first argument is a string literal are recognised. The
    argument list is rendered as written at the call site.
    """
    parsed = parse_source(compiled_js, TSX)
    emitter_names = set(emitters)
    events: List[EventDescriptor] = []
    for call in find_nodes_by_type(parsed.root, "call_expression"):
        if callee_name(parsed, call) not in emitter_names:
            continue
        arguments = call.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            continue
        name = string_literal_value(parsed, arguments.named_children[0])
        if not name:
            logger.debug("Skipping emitter call without literal name: %s", parsed.text(call))
            continue

        if len(arguments.named_children) < 2:
            parameters = "()"
        else:
            payload = arguments.named_children[1]
            if payload.type == "array":
                rendered = ", ".join(
                    " ".join(parsed.text(element).split())
                    for element in payload.named_children
                    if element.type != "comment"
                )
            else:
                rendered = " ".join(parsed.text(payload).split())
            parameters = f"({rendered})"
        events.append(EventDescriptor(name=name, parameters=parameters, type=EVENT_TYPE))
    return events


def synthesize_events(
    prop_events: Iterable[EventDescriptor], call_events: Iterable[EventDescriptor]
) -> List[EventDescriptor]:
    """Merge both event lists by name; call-site entries overwrite in place."""
    merged: Dict[str, EventDescriptor] = {}
    for event in prop_events:
        merged.setdefault(event.name, event)
    for event in call_events:
        merged[event.name] = event
    return list(merged.values())


__all__ = [
    "EVENT_PREFIX",
    "events_from_call_sites",
    "events_from_props",
    "extract_event_parameters",
    "is_event_property",
    "synthesize_events",
]
