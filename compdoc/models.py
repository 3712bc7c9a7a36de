"""Core data models shared across compdoc components."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Union

EVENT_TYPE = "Function"
DEFAULT_STYLE_DESCRIPTION = "Default style class"


@dataclass(frozen=True)
class SourceMapArtifact:
    """Index-aligned original file names and contents recovered from a source map."""

    sources: Sequence[str] = ()
    sources_content: Sequence[Optional[str]] = ()


@dataclass(frozen=True)
class PropertyDescriptor:
    """A configurable attribute declared on a property bag."""

    name: str
    type: str
    optional: bool = False
    default_value: Optional[str] = None
    inherited: bool = False
    inherited_from: Optional[str] = None

    def as_inherited(self, origin: str) -> "PropertyDescriptor":
        return replace(self, inherited=True, inherited_from=origin)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "optional": self.optional,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        data["inherited"] = self.inherited
        if self.inherited_from:
            data["inheritedFrom"] = self.inherited_from
        return data


@dataclass(frozen=True)
class ParameterDescriptor:
    """A single parameter of a public method."""

    name: str
    type: str
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "optional": self.optional}


@dataclass(frozen=True)
class MethodDescriptor:
    """An externally callable component method."""

    name: str
    parameters: Sequence[ParameterDescriptor] = ()
    return_type: str = "void"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [param.to_dict() for param in self.parameters],
            "returnType": self.return_type,
        }


@dataclass(frozen=True)
class EventDescriptor:
    """An event a component emits, keyed by name."""

    name: str
    parameters: str
    type: str = EVENT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "parameters": self.parameters}


@dataclass(frozen=True)
class StyleDescriptor:
    """A registered style class name."""

    class_name: str
    description: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.description == DEFAULT_STYLE_DESCRIPTION

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"className": self.class_name}
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class PropertyBag:
    """Result of property extraction for one declaration."""

    class_name: str
    props: Sequence[PropertyDescriptor] = ()
    base_class: Optional[str] = None


@dataclass(frozen=True)
class StyleClasses:
    """Raw result of style extraction before descriptors are built."""

    default_class: str
    style_classes: Sequence[str] = ()


@dataclass(frozen=True)
class ComponentDocument:
    """A concrete component document that owns its extracted facets."""

    name: str
    path: str
    category: str
    props: Sequence[PropertyDescriptor] = ()
    methods: Sequence[MethodDescriptor] = ()
    events: Sequence[EventDescriptor] = ()
    styles: Sequence[StyleDescriptor] = ()
    base_class: Optional[str] = None
    children: Sequence["ComponentDocument"] = ()
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "componentName": self.name,
            "componentPath": self.path,
            "category": self.category,
            "props": [prop.to_dict() for prop in self.props],
            "methods": [method.to_dict() for method in self.methods],
            "events": [event.to_dict() for event in self.events],
            "styles": [style.to_dict() for style in self.styles],
        }
        if self.base_class:
            data["baseClass"] = self.base_class
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.description:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class AliasDocument:
    """A document that exposes another document's facets under a different name."""

    name: str
    source: ComponentDocument
    description: str

    @property
    def path(self) -> str:
        return self.source.path

    @property
    def category(self) -> str:
        return self.source.category

    @property
    def props(self) -> Sequence[PropertyDescriptor]:
        return self.source.props

    @property
    def methods(self) -> Sequence[MethodDescriptor]:
        return self.source.methods

    @property
    def events(self) -> Sequence[EventDescriptor]:
        return self.source.events

    @property
    def styles(self) -> Sequence[StyleDescriptor]:
        return self.source.styles

    @property
    def base_class(self) -> Optional[str]:
        return self.source.base_class

    @property
    def children(self) -> Sequence[ComponentDocument]:
        return self.source.children

    def to_dict(self) -> Dict[str, Any]:
        data = self.source.to_dict()
        data["componentName"] = self.name
        data["description"] = self.description
        return data


Document = Union[ComponentDocument, AliasDocument]


@dataclass(frozen=True)
class ComponentCandidate:
    """A directory discovered as a component, prior to document generation."""

    name: str
    path: str
    category: str
    alias_of: Optional[str] = None

    @property
    def is_alias(self) -> bool:
        return self.alias_of is not None


@dataclass
class ComponentSources:
    """Recovered sources for one component directory."""

    props: Optional[str] = None
    props_file: Optional[str] = None
    component: Optional[str] = None
    component_file: Optional[str] = None
    styles: Optional[str] = None
    styles_file: Optional[str] = None
    compiled: Optional[str] = None

    def is_empty(self) -> bool:
        return self.props is None and self.component is None


def documents_to_dicts(docs: Sequence[Document]) -> List[Dict[str, Any]]:
    return [doc.to_dict() for doc in docs]


__all__ = [
    "AliasDocument",
    "ComponentCandidate",
    "ComponentDocument",
    "ComponentSources",
    "DEFAULT_STYLE_DESCRIPTION",
    "Document",
    "EVENT_TYPE",
    "EventDescriptor",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PropertyBag",
    "PropertyDescriptor",
    "SourceMapArtifact",
    "StyleClasses",
    "StyleDescriptor",
    "documents_to_dicts",
]
