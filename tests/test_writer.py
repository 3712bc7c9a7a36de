"""Tests for compdoc.writer."""

from __future__ import annotations

import json
from pathlib import Path

from compdoc.models import AliasDocument, ComponentDocument, PropertyDescriptor
from compdoc.writer import save_component_doc, save_docs_to_file


def _doc() -> ComponentDocument:
    return ComponentDocument(
        name="label",
        path="/library/components/basic/label",
        category="basic",
        props=(PropertyDescriptor(name="caption", type="string"),),
        base_class="BaseProps",
    )


def test_save_component_doc_writes_json_and_prose(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "out"

    path = save_component_doc(_doc(), output, prose="# Label\n")

    assert path == output / "label.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["componentName"] == "label"
    assert data["baseClass"] == "BaseProps"
    assert (output / "label.manual.md").read_text(encoding="utf-8") == "# Label\n"


def test_save_component_doc_without_prose(tmp_path: Path) -> None:
    save_component_doc(_doc(), tmp_path)

    assert not (tmp_path / "label.manual.md").exists()
    assert "\n  " in (tmp_path / "label.json").read_text(encoding="utf-8")


def test_save_docs_to_file_writes_array(tmp_path: Path) -> None:
    doc = _doc()
    alias = AliasDocument(name="text", source=doc, description="text is an alias of label")

    path = save_docs_to_file([doc, alias], tmp_path / "docs" / "all-components.json")

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert [item["componentName"] for item in payload] == ["label", "text"]
    assert payload[1]["props"] == payload[0]["props"]
    assert payload[1]["description"] == "text is an alias of label"
