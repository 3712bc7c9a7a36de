"""Tests for style class extraction."""

from __future__ import annotations

from compdoc.extraction.styles import build_style_descriptors, extract_style_classes
from compdoc.models import DEFAULT_STYLE_DESCRIPTION, StyleClasses, StyleDescriptor

ANCHOR_STYLES = """
import BASE_THEME from '@wavemaker/app-rn-runtime/styles/theme';

export const DEFAULT_CLASS = 'app-anchor';

BASE_THEME.registerStyle((themeVariables, addStyle) => {
    addStyle(DEFAULT_CLASS, '', {});
    addStyle(DEFAULT_CLASS + '-rtl', '', {});
    addStyle('link-primary', '', {});
});
"""


def test_anchor_styles_resolve_concatenated_names() -> None:
    style_classes = extract_style_classes(ANCHOR_STYLES)

    assert style_classes == StyleClasses(
        default_class="app-anchor",
        style_classes=("app-anchor", "app-anchor-rtl", "link-primary"),
    )
    assert build_style_descriptors(style_classes) == [
        StyleDescriptor(class_name="app-anchor", description=DEFAULT_STYLE_DESCRIPTION),
        StyleDescriptor(class_name="app-anchor-rtl"),
        StyleDescriptor(class_name="link-primary"),
    ]


def test_template_strings_and_member_registrars_are_resolved() -> None:
    source = """
const PREFIX = 'app';
export const DEFAULT_CLASS = PREFIX + '-button';
const SIZE = `${DEFAULT_CLASS}-small`;

theme.addStyle(SIZE, '', {});
theme.addStyle(`${DEFAULT_CLASS}-${'large'}`, '', {});
theme.addStyle((DEFAULT_CLASS + '-rounded'), '', {});
"""
    style_classes = extract_style_classes(source)

    assert style_classes is not None
    assert style_classes.default_class == "app-button"
    assert list(style_classes.style_classes) == [
        "app-button-small",
        "app-button-large",
        "app-button-rounded",
    ]


def test_unresolvable_registrations_are_skipped() -> None:
    source = """
export const DEFAULT_CLASS = 'app-label';
addStyle(computeName(), '', {});
addStyle(`${unknownValue}-x`, '', {});
addStyle('app-label-bold', '', {});
"""
    style_classes = extract_style_classes(source)

    assert style_classes is not None
    assert list(style_classes.style_classes) == ["app-label-bold"]


def test_missing_default_constant_is_unavailable() -> None:
    assert extract_style_classes("addStyle('orphan', '', {});\n") is None


def test_default_class_appears_once_even_when_registered_twice() -> None:
    descriptors = build_style_descriptors(
        StyleClasses(
            default_class="app-chip",
            style_classes=("app-chip-active", "app-chip", "app-chip-active", "app-chip"),
        )
    )

    defaults = [style for style in descriptors if style.is_default]
    assert len(defaults) == 1
    assert [style.class_name for style in descriptors] == ["app-chip", "app-chip-active"]
