"""Tests for compdoc.extraction.source_map."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from compdoc.errors import SourceNotFound
from compdoc.extraction.source_map import SourceLocator, has_component_artifacts, load_source_map
from tests._fixtures.library_builder import LibraryBuilder


def _write_map(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_extract_source_content_returns_indexed_source(tmp_path: Path) -> None:
    map_path = _write_map(
        tmp_path / "button.props.js.map",
        {"sources": ["button.props.ts", "other.ts"], "sourcesContent": ["class A {}", "class B {}"]},
    )
    locator = SourceLocator()

    assert locator.extract_source_content(map_path) == "class A {}"
    assert locator.extract_source_content(map_path, 1) == "class B {}"
    assert locator.get_source_file_name(map_path, 1) == "other.ts"


@pytest.mark.parametrize("index", [2, -1])
def test_extract_source_content_out_of_range_logs_and_returns_none(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, index: int
) -> None:
    map_path = _write_map(
        tmp_path / "a.js.map", {"sources": ["a.ts", "b.ts"], "sourcesContent": ["a", "b"]}
    )

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        assert SourceLocator().extract_source_content(map_path, index) is None
        assert SourceLocator().get_source_file_name(map_path, index) is None

    assert "out of bounds" in caplog.text


def test_missing_content_list_is_not_fatal(tmp_path: Path) -> None:
    map_path = _write_map(tmp_path / "a.js.map", {"sources": ["a.ts"]})

    assert SourceLocator().extract_source_content(map_path) is None
    assert SourceLocator().get_source_file_name(map_path) == "a.ts"


def test_unreadable_and_invalid_maps_return_none(tmp_path: Path) -> None:
    invalid = tmp_path / "broken.js.map"
    invalid.write_text("{not json", encoding="utf-8")
    locator = SourceLocator()

    assert locator.read_source_map(tmp_path / "missing.js.map") is None
    assert locator.extract_source_content(invalid) is None
    with pytest.raises(SourceNotFound):
        load_source_map(invalid)


def test_non_object_payload_raises_source_not_found(tmp_path: Path) -> None:
    map_path = _write_map(tmp_path / "list.js.map", ["a", "b"])

    with pytest.raises(SourceNotFound):
        load_source_map(map_path)


def test_extract_component_sources_reads_every_artifact(library_builder: LibraryBuilder) -> None:
    directory = library_builder.component(
        "basic",
        "button",
        props="export default class WmButtonProps {}\n",
        component="export default class WmButton {}\n",
        styles="export const DEFAULT_CLASS = 'app-button';\n",
        compiled="this.invokeEventCallback('onTap', []);\n",
    )

    sources = SourceLocator().extract_component_sources(directory)

    assert sources.props == "export default class WmButtonProps {}\n"
    assert sources.props_file == "button.props.ts"
    assert sources.component_file == "button.component.tsx"
    assert sources.styles == "export const DEFAULT_CLASS = 'app-button';\n"
    assert sources.compiled == "this.invokeEventCallback('onTap', []);\n"
    assert not sources.is_empty()


def test_extract_component_sources_empty_directory(tmp_path: Path) -> None:
    directory = tmp_path / "empty"
    directory.mkdir()

    sources = SourceLocator().extract_component_sources(directory)

    assert sources.is_empty()
    assert sources.styles is None


def test_has_component_artifacts_requires_own_name(library_builder: LibraryBuilder) -> None:
    button = library_builder.component("basic", "button", component="class WmButton {}")
    stray = library_builder.root / "components" / "basic" / "stray"
    stray.mkdir()
    (stray / "button.props.js.map").write_text("{}", encoding="utf-8")

    assert has_component_artifacts(button)
    assert not has_component_artifacts(stray)


def test_empty_embedded_source_counts_as_missing(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    component_dir = tmp_path / "label"
    component_dir.mkdir()
    _write_map(
        component_dir / "label.props.js.map",
        {"sources": ["label.props.ts"], "sourcesContent": [""]},
    )
    locator = SourceLocator()

    with caplog.at_level(logging.WARNING, logger="compdoc"):
        assert locator.extract_source_content(component_dir / "label.props.js.map") is None

    assert "no embedded content" in caplog.text
    assert locator.extract_component_sources(component_dir).is_empty()
