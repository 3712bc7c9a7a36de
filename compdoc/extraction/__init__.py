"""Structural extraction from recovered component sources."""

from __future__ import annotations

from .events import (
    events_from_call_sites,
    events_from_props,
    extract_event_parameters,
    synthesize_events,
)
from .methods import extract_methods
from .props import extract_props
from .source_map import SourceLocator, has_component_artifacts, load_source_map
from .styles import build_style_descriptors, extract_style_classes

__all__ = [
    "SourceLocator",
    "build_style_descriptors",
    "events_from_call_sites",
    "events_from_props",
    "extract_event_parameters",
    "extract_methods",
    "extract_props",
    "extract_style_classes",
    "has_component_artifacts",
    "load_source_map",
    "synthesize_events",
]
