"""Assembles component documents from a library's build artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, cast

from .config import GeneratorConfig
from .discovery import ComponentDiscovery
from .errors import MissingChild
from .extraction.events import events_from_call_sites, events_from_props, synthesize_events
from .extraction.methods import extract_methods
from .extraction.props import extract_props
from .extraction.source_map import SourceLocator
from .extraction.styles import build_style_descriptors, extract_style_classes
from .extraction.syntax import TSX, TYPESCRIPT, grammar_for_file
from .filters import FilterPolicy
from .inheritance import InheritanceResolver, RootPropsCache, merge_props
from .logging import get_logger
from .models import (
    AliasDocument,
    ComponentCandidate,
    ComponentDocument,
    ComponentSources,
    Document,
    EventDescriptor,
    MethodDescriptor,
    PropertyDescriptor,
    StyleDescriptor,
)


def alias_description(alias: str, source: str) -> str:
    return f"{alias} is an alias of {source} and shares its API."


class DocumentationGenerator:
    """Generates filtered component documents for one library in one run.

    The generator owns the run-scoped root property cache, so two generators
    never share parsed state.
    """

    def __init__(
        self,
        library_path: Path,
        config: GeneratorConfig | None = None,
        locator: SourceLocator | None = None,
        root_cache: RootPropsCache | None = None,
    ) -> None:
        self.library_path = Path(library_path)
        self.config = config or GeneratorConfig()
        self.locator = locator or SourceLocator()
        self.logger = get_logger("generator")
        self.root_cache = root_cache or RootPropsCache(
            self.library_path, self.config.inheritance, self.locator, self.config.parser
        )
        self.resolver = InheritanceResolver(
            self.library_path,
            self.config.inheritance,
            self.root_cache,
            self.locator,
            self.config.parser,
        )
        self.discovery = ComponentDiscovery(self.library_path, self.config)
        self.filters = FilterPolicy(self.config.documentation)

    def find_all_components(self) -> List[ComponentCandidate]:
        return self.discovery.find_components()

    def generate_all_docs(self) -> List[Document]:
        components = self.find_all_components()
        self.logger.info("Found %d components", len(components))

        docs: List[Document] = []
        generated: dict[str, ComponentDocument] = {}
        pending_aliases: List[ComponentCandidate] = []
        for candidate in components:
            if candidate.is_alias:
                pending_aliases.append(candidate)
                continue
            self.logger.info("Generating docs for %s/%s", candidate.category, candidate.name)
            doc = self.generate_component_doc(candidate.path, candidate.category, candidate.name)
            if doc is None:
                continue
            generated[candidate.name] = doc
            docs.append(doc)

        for candidate in pending_aliases:
            source = generated.get(candidate.alias_of or "")
            if source is None:
                self.logger.warning(
                    "Alias %s skipped: no document for %s", candidate.name, candidate.alias_of
                )
                continue
            docs.append(self.generate_alias_doc(candidate.name, source))
        return docs

    def generate_doc(self, candidate: ComponentCandidate) -> Optional[Document]:
        """Generate the document for one discovered candidate, alias or concrete."""
        if not candidate.is_alias:
            return self.generate_component_doc(candidate.path, candidate.category, candidate.name)
        source = self.generate_component_doc(
            candidate.path, candidate.category, candidate.alias_of
        )
        if source is None:
            return None
        return self.generate_alias_doc(candidate.name, source)

    def generate_alias_doc(self, alias: str, source: ComponentDocument) -> AliasDocument:
        return AliasDocument(
            name=alias, source=source, description=alias_description(alias, source.name)
        )

    def generate_component_doc(
        self, component_path: Path | str, category: str, name: str | None = None
    ) -> Optional[ComponentDocument]:
        """Build and filter the document for one component directory.

        Returns None when the directory yields no sources or generation fails.
        """
        doc = self._build_document(Path(component_path), category, name, ancestry=())
        if doc is None:
            return None
        return cast(ComponentDocument, self.filters.apply(doc))

    def _build_document(
        self,
        component_dir: Path,
        category: str,
        name: Optional[str],
        ancestry: Tuple[Path, ...],
    ) -> Optional[ComponentDocument]:
        try:
            return self._assemble(component_dir, category, name, ancestry)
        except Exception as exc:
            self._log_exception(f"Error generating docs for {component_dir}", exc)
            return None

    def _assemble(
        self,
        component_dir: Path,
        category: str,
        name: Optional[str],
        ancestry: Tuple[Path, ...],
    ) -> Optional[ComponentDocument]:
        sources = self.locator.extract_component_sources(component_dir)
        if sources.is_empty():
            self.logger.warning("No source files found for %s", component_dir)
            return None

        component_name = name or component_dir.name
        props, base_class = self._props(sources)
        methods = self._methods(sources)
        events = self._events(sources, props)
        styles = self._styles(sources)
        children = self._children(component_name, component_dir, category, ancestry)

        return ComponentDocument(
            name=component_name,
            path=str(component_dir),
            category=category,
            props=tuple(props),
            methods=tuple(methods),
            events=tuple(events),
            styles=tuple(styles),
            base_class=base_class,
            children=tuple(children),
        )

    def _props(self, sources: ComponentSources) -> Tuple[List[PropertyDescriptor], Optional[str]]:
        if sources.props is None:
            return [], None
        bag = extract_props(
            sources.props,
            grammar=grammar_for_file(sources.props_file) if sources.props_file else TYPESCRIPT,
            type_suffix=self.config.inheritance.type_suffix,
            default_props_names=self.config.parser.default_props_names,
        )
        if bag is None:
            self.logger.debug("No props declaration in %s", sources.props_file)
            return [], None
        inherited = self.resolver.resolve(bag.base_class) if bag.base_class else []
        return merge_props(bag.props, inherited), bag.base_class

    def _methods(self, sources: ComponentSources) -> List[MethodDescriptor]:
        if sources.component is None:
            return []
        methods = extract_methods(
            sources.component,
            grammar=grammar_for_file(sources.component_file) if sources.component_file else TSX,
            denylist=self.config.parser.internal_methods,
        )
        return methods or []

    def _events(
        self, sources: ComponentSources, props: Sequence[PropertyDescriptor]
    ) -> List[EventDescriptor]:
        prop_events = events_from_props(props)
        call_events: List[EventDescriptor] = []
        if sources.compiled:
            call_events = events_from_call_sites(
                sources.compiled, self.config.parser.event_emitters
            )
        return synthesize_events(prop_events, call_events)

    def _styles(self, sources: ComponentSources) -> List[StyleDescriptor]:
        if sources.styles is None:
            return []
        style_classes = extract_style_classes(
            sources.styles,
            grammar=grammar_for_file(sources.styles_file) if sources.styles_file else TYPESCRIPT,
            default_constant=self.config.parser.default_class_constant,
            registrars=self.config.parser.style_registrars,
        )
        if style_classes is None:
            return []
        return build_style_descriptors(style_classes)

    def _children(
        self,
        parent_name: str,
        parent_dir: Path,
        category: str,
        ancestry: Tuple[Path, ...],
    ) -> List[ComponentDocument]:
        lineage = ancestry + (parent_dir.resolve(),)
        children: List[ComponentDocument] = []
        for child_name, relative_path in self.discovery.declared_children(parent_name):
            try:
                child_dir = self.discovery.resolve_child_path(
                    parent_name, parent_dir, child_name, relative_path
                )
            except MissingChild as exc:
                self.logger.warning("%s", exc)
                continue
            if child_dir.resolve() in lineage:
                self.logger.warning(
                    "Child %s of %s points back at an ancestor directory; skipped",
                    child_name,
                    parent_name,
                )
                continue
            child = self._build_document(child_dir, category, child_dir.name, lineage)
            if child is not None:
                children.append(child)
        return children

    def _log_exception(self, message: str, exc: Exception) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.exception("%s: %s", message, exc)
        else:
            self.logger.error("%s: %s", message, exc)


__all__ = ["DocumentationGenerator", "alias_description"]
