"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import compdoc.docs_fetcher as docs_fetcher
from compdoc.cli import _build_parser, main
from tests._fixtures.library_builder import LibraryBuilder

BUTTON_PROPS = "export default class WmButtonProps {\n  caption?: string = 'Button';\n}\n"
ANCHOR_PROPS = "export default class WmAnchorProps {\n  hyperlink?: string;\n}\n"


def _library(library_builder: LibraryBuilder) -> Path:
    library_builder.component("basic", "button", props=BUTTON_PROPS)
    library_builder.component("basic", "anchor", props=ANCHOR_PROPS)
    library_builder.component("container", "tabs", props="export class WmTabsProps {}\n")
    return library_builder.path()


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "list"])
    assert args.verbose is True
    assert args.command == "list"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "--all", "--verbose"])
    assert args.verbose is True
    assert args.all is True


def test_generate_requires_a_target() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["generate"])
    with pytest.raises(SystemExit):
        parser.parse_args(["generate", "--all", "--component", "button"])


def test_missing_library_exits_non_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main(["list", "--library", str(tmp_path / "absent")])
    assert excinfo.value.code == 1


def test_list_groups_components_by_category(
    library_builder: LibraryBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)

    main(["list", "-l", str(library)])

    out = capsys.readouterr().out
    assert "Found 3 components" in out
    assert "basic/ (2)" in out
    assert "  - anchor" in out
    assert "container/ (1)" in out


def test_generate_all_writes_one_file_per_component(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out"

    main(["generate", "--all", "-l", str(library), "-o", str(output)])

    assert sorted(path.name for path in output.iterdir()) == [
        "anchor.json",
        "button.json",
        "tabs.json",
    ]
    button = json.loads((output / "button.json").read_text(encoding="utf-8"))
    assert button["componentName"] == "button"
    assert button["props"][0] == {
        "name": "caption",
        "type": "string",
        "optional": True,
        "defaultValue": "'Button'",
        "inherited": False,
    }


def test_generate_single_file(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out"

    main(["generate", "--all", "--single-file", "-l", str(library), "-o", str(output)])

    payload = json.loads((output / "all-components.json").read_text(encoding="utf-8"))
    assert [item["componentName"] for item in payload] == ["anchor", "button", "tabs"]


def test_generate_single_component_honours_config(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    (tmp_path / ".compdoc.yml").write_text(
        "components:\n  include: [button]\n  aliases:\n    iconbutton: button\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out"

    main(["generate", "--component", "IconButton", "-l", str(library), "-o", str(output)])

    alias = json.loads((output / "iconbutton.json").read_text(encoding="utf-8"))
    assert alias["componentName"] == "iconbutton"
    assert alias["description"] == "iconbutton is an alias of button and shares its API."


def test_unknown_component_exits_non_zero(
    library_builder: LibraryBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "-c", "carousel", "-l", str(library), "-o", str(tmp_path / "out")])

    assert excinfo.value.code == 1
    assert "Component 'carousel' not found" in capsys.readouterr().err


def test_invalid_config_exits_non_zero(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    config_file = tmp_path / "broken.yml"
    config_file.write_text("- not\n- a mapping\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["list", "-l", str(library), "--config", str(config_file)])

    assert excinfo.value.code == 1


def test_log_file_receives_run_records(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)
    log_file = tmp_path / "logs" / "compdoc.log"

    main(["generate", "--all", "-l", str(library), "-o", str(tmp_path / "out"), "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "INFO compdoc.generator: Found 3 components" in text


def test_log_file_option_parses_on_either_side() -> None:
    parser = _build_parser()
    before = parser.parse_args(["--log-file", "run.log", "list"])
    after = parser.parse_args(["list", "--log-file", "run.log"])
    assert before.log_file == Path("run.log")
    assert after.log_file == Path("run.log")
    assert parser.parse_args(["list"]).log_file is None


def test_failing_docs_fetch_keeps_generated_json(
    library_builder: LibraryBuilder, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    library = _library(library_builder)
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out"

    def _timeout(request: object, timeout: float) -> object:
        raise TimeoutError("The read operation timed out")

    monkeypatch.setattr(docs_fetcher, "urlopen", _timeout)

    main(["generate", "--all", "--fetch-docs", "-l", str(library), "-o", str(output)])

    assert sorted(path.name for path in output.iterdir()) == [
        "anchor.json",
        "button.json",
        "tabs.json",
    ]
