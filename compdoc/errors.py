"""Error taxonomy for the extraction pipeline.

Everything except :class:`ConfigError` is recoverable: the layer that raises it
is always wrapped by a caller that logs a diagnostic and continues with an
empty result for the affected facet.
"""

from __future__ import annotations


class CompdocError(Exception):
    """Base class for compdoc errors."""


class ConfigError(CompdocError):
    """Raised when the configuration file cannot be parsed."""


class SourceNotFound(CompdocError):
    """An artifact is missing, unreadable, or has no source at the requested index."""


class UnresolvedAncestor(CompdocError):
    """A base type name could not be mapped to a property-declaration artifact."""

    def __init__(self, type_name: str, candidates: tuple[str, ...] = ()) -> None:
        self.type_name = type_name
        self.candidates = candidates
        tried = ", ".join(candidates) if candidates else "none"
        super().__init__(f"Could not resolve base type {type_name} (tried stems: {tried})")


class MissingChild(CompdocError):
    """A declared child component path does not exist on disk."""

    def __init__(self, parent: str, child: str, path: str) -> None:
        self.parent = parent
        self.child = child
        self.path = path
        super().__init__(f"Child component {child} of {parent} not found at {path}")


__all__ = [
    "CompdocError",
    "ConfigError",
    "MissingChild",
    "SourceNotFound",
    "UnresolvedAncestor",
]
