"""Exclusion policy applied to assembled component documents."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from .config import DocumentationConfig
from .models import AliasDocument, ComponentDocument, Document


class FilterPolicy:
    """Trims member lists according to global and per-component exclusions."""

    def __init__(self, config: DocumentationConfig) -> None:
        self.config = config

    def apply(self, doc: Document) -> Document:
        if isinstance(doc, AliasDocument):
            return doc
        return self._apply_component(doc)

    def _apply_component(self, doc: ComponentDocument) -> ComponentDocument:
        override = self.config.override_for(doc.name)
        excluded_props = set(self.config.exclude_props) | set(override.exclude_props)
        excluded_inherited = set(self.config.exclude_inherited_props)
        excluded_methods = set(self.config.exclude_methods) | set(override.exclude_methods)
        excluded_styles = set(self.config.exclude_style_classes) | set(
            override.exclude_style_classes
        )

        props = [
            prop
            for prop in doc.props
            if prop.name not in excluded_props
            and not (prop.inherited and prop.name in excluded_inherited)
        ]
        methods = [method for method in doc.methods if method.name not in excluded_methods]
        styles = [
            style
            for style in doc.styles
            if style.is_default or style.class_name not in excluded_styles
        ]
        children: List[ComponentDocument] = [
            self._apply_component(child) for child in doc.children
        ]
        return replace(
            doc,
            props=tuple(props),
            methods=tuple(methods),
            styles=tuple(styles),
            children=tuple(children),
        )


__all__ = ["FilterPolicy"]
