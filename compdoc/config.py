"""Configuration loading for compdoc (.compdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

from .docs_fetcher import DEFAULT_DOCS_BASE_URL, DOC_PATH_MAPPING
from .errors import ConfigError

CONFIG_FILENAME = ".compdoc.yml"

DEFAULT_EXCLUDE_GROUPS: Tuple[str, ...] = ("page", "prefab")

DEFAULT_EXCLUDE_INHERITED_PROPS: Tuple[str, ...] = (
    "listener",
    "showskeletonchildren",
    "deferload",
    "isdefault",
    "key",
)

DEFAULT_EXCLUDE_METHODS: Tuple[str, ...] = (
    "renderWidget",
    "renderSkeleton",
    "prepareIcon",
    "prepareBadge",
    "updateState",
    "componentDidMount",
    "componentWillUnmount",
    "componentDidUpdate",
)

DEFAULT_INTERNAL_METHODS: Tuple[str, ...] = (
    "constructor",
    "render",
    "renderWidget",
    "renderSkeleton",
    "componentDidMount",
    "componentWillUnmount",
    "componentDidUpdate",
    "shouldComponentUpdate",
    "getSnapshotBeforeUpdate",
    "componentDidCatch",
    "onPropertyChange",
    "prepareIcon",
    "prepareBadge",
    "updateState",
)

DEFAULT_CHILD_COMPONENTS: Dict[str, Dict[str, str]] = {
    "tabs": {"tabpane": "tabpane"},
    "accordion": {"accordionpane": "accordionpane"},
    "wizard": {"wizardstep": "wizardstep"},
}


@dataclass(frozen=True)
class ComponentOverride:
    """Per-component exclusion lists applied on top of the global ones."""

    exclude_props: Sequence[str] = ()
    exclude_methods: Sequence[str] = ()
    exclude_style_classes: Sequence[str] = ()


@dataclass(frozen=True)
class DocumentationConfig:
    """Member filtering applied to assembled documents."""

    exclude_props: Sequence[str] = ()
    exclude_inherited_props: Sequence[str] = DEFAULT_EXCLUDE_INHERITED_PROPS
    exclude_methods: Sequence[str] = DEFAULT_EXCLUDE_METHODS
    exclude_style_classes: Sequence[str] = ()
    component_overrides: Mapping[str, ComponentOverride] = field(default_factory=dict)

    def override_for(self, component_name: str) -> ComponentOverride:
        return self.component_overrides.get(component_name, ComponentOverride())


@dataclass(frozen=True)
class InheritanceConfig:
    """Where and how base property types are looked up."""

    root_type: str = "BaseProps"
    root_artifact: str = "core/base.component.js.map"
    search_roots: Sequence[str] = ("components", "core")
    type_prefixes: Sequence[str] = ("Wm",)
    type_suffix: str = "Props"


@dataclass(frozen=True)
class ParserConfig:
    """Names the structural parser recognises in component sources."""

    internal_methods: Sequence[str] = DEFAULT_INTERNAL_METHODS
    style_registrars: Sequence[str] = ("addStyle",)
    default_class_constant: str = "DEFAULT_CLASS"
    event_emitters: Sequence[str] = ("invokeEventCallback",)
    default_props_names: Sequence[str] = ("defaultProps", "DEFAULT_PROPS")


@dataclass(frozen=True)
class DocsConfig:
    """Location of pre-existing prose documentation."""

    base_url: str = DEFAULT_DOCS_BASE_URL
    path_mapping: Mapping[str, Sequence[str]] = field(
        default_factory=lambda: dict(DOC_PATH_MAPPING)
    )


@dataclass(frozen=True)
class GeneratorConfig:
    """Represents the settings defined in .compdoc.yml."""

    include_components: Sequence[str] = tuple(DOC_PATH_MAPPING)
    exclude_groups: Sequence[str] = DEFAULT_EXCLUDE_GROUPS
    exclude_components: Sequence[str] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    child_components: Mapping[str, Mapping[str, str]] = field(
        default_factory=lambda: {
            parent: dict(children) for parent, children in DEFAULT_CHILD_COMPONENTS.items()
        }
    )
    documentation: DocumentationConfig = field(default_factory=DocumentationConfig)
    inheritance: InheritanceConfig = field(default_factory=InheritanceConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)


def load_config(config_path: Path | None) -> GeneratorConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    if config_path is None:
        return GeneratorConfig()

    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return GeneratorConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    defaults = GeneratorConfig()

    components_data = _as_dict(data.get("components"))
    include = _list_or_default(components_data, "include", defaults.include_components)
    exclude_groups = _list_or_default(components_data, "exclude_groups", defaults.exclude_groups)
    exclude_components = _list_or_default(
        components_data, "exclude", defaults.exclude_components
    )
    aliases = _as_str_mapping(components_data.get("aliases"))
    if "children" in components_data:
        children = _as_children(components_data.get("children"))
    else:
        children = dict(defaults.child_components)

    doc_data = _as_dict(data.get("documentation"))
    doc_defaults = defaults.documentation
    overrides: Dict[str, ComponentOverride] = {}
    for name, raw in _as_dict(doc_data.get("component_overrides")).items():
        override_data = _as_dict(raw)
        overrides[str(name)] = ComponentOverride(
            exclude_props=tuple(_as_str_list(override_data.get("exclude_props"))),
            exclude_methods=tuple(_as_str_list(override_data.get("exclude_methods"))),
            exclude_style_classes=tuple(_as_str_list(override_data.get("exclude_style_classes"))),
        )
    documentation = DocumentationConfig(
        exclude_props=_list_or_default(doc_data, "exclude_props", doc_defaults.exclude_props),
        exclude_inherited_props=_list_or_default(
            doc_data, "exclude_inherited_props", doc_defaults.exclude_inherited_props
        ),
        exclude_methods=_list_or_default(doc_data, "exclude_methods", doc_defaults.exclude_methods),
        exclude_style_classes=_list_or_default(
            doc_data, "exclude_style_classes", doc_defaults.exclude_style_classes
        ),
        component_overrides=overrides,
    )

    inh_data = _as_dict(data.get("inheritance"))
    inh_defaults = defaults.inheritance
    inheritance = InheritanceConfig(
        root_type=_as_str(inh_data.get("root_type")) or inh_defaults.root_type,
        root_artifact=_as_str(inh_data.get("root_artifact")) or inh_defaults.root_artifact,
        search_roots=_list_or_default(inh_data, "search_roots", inh_defaults.search_roots),
        type_prefixes=_list_or_default(inh_data, "type_prefixes", inh_defaults.type_prefixes),
        type_suffix=_as_str(inh_data.get("type_suffix")) or inh_defaults.type_suffix,
    )

    parser_data = _as_dict(data.get("parser"))
    parser_defaults = defaults.parser
    parser = ParserConfig(
        internal_methods=_list_or_default(
            parser_data, "internal_methods", parser_defaults.internal_methods
        ),
        style_registrars=_list_or_default(
            parser_data, "style_registrars", parser_defaults.style_registrars
        ),
        default_class_constant=_as_str(parser_data.get("default_class_constant"))
        or parser_defaults.default_class_constant,
        event_emitters=_list_or_default(parser_data, "event_emitters", parser_defaults.event_emitters),
        default_props_names=_list_or_default(
            parser_data, "default_props_names", parser_defaults.default_props_names
        ),
    )

    docs_data = _as_dict(data.get("docs"))
    path_mapping: Dict[str, Sequence[str]] = dict(defaults.docs.path_mapping)
    for name, raw in _as_dict(docs_data.get("paths")).items():
        paths = _as_str_list(raw)
        if paths:
            path_mapping[str(name).lower()] = tuple(paths)
    docs = DocsConfig(
        base_url=_as_str(docs_data.get("base_url")) or defaults.docs.base_url,
        path_mapping=path_mapping,
    )

    return GeneratorConfig(
        include_components=include,
        exclude_groups=exclude_groups,
        exclude_components=exclude_components,
        aliases=aliases,
        child_components=children,
        documentation=documentation,
        inheritance=inheritance,
        parser=parser,
        docs=docs,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _list_or_default(
    data: Mapping[str, Any], key: str, default: Sequence[str]
) -> Tuple[str, ...]:
    if key not in data:
        return tuple(default)
    return tuple(_as_str_list(data.get(key)))


def _as_children(value: Any) -> Dict[str, Dict[str, str]]:
    children: Dict[str, Dict[str, str]] = {}
    for parent, raw in _as_dict(value).items():
        mapping = _as_str_mapping(raw)
        if mapping:
            children[str(parent)] = mapping
    return children


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_mapping(value: Any) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for key, raw in _as_dict(value).items():
        text = _as_str(raw)
        if text:
            result[str(key)] = text
    return result


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ComponentOverride",
    "ConfigError",
    "DocsConfig",
    "DocumentationConfig",
    "GeneratorConfig",
    "InheritanceConfig",
    "ParserConfig",
    "load_config",
]
