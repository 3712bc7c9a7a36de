"""Tests for compdoc.docs_fetcher."""

from __future__ import annotations

from typing import Dict, List

import pytest

import compdoc.docs_fetcher as docs_fetcher
from compdoc.docs_fetcher import DOCS_SEPARATOR, DocsFetcher


class _FakeOpener:
    def __init__(self, responses: Dict[str, str]) -> None:
        self.responses = responses
        self.calls: List[str] = []

    def __call__(self, url: str, timeout: float) -> str:
        self.calls.append(url)
        if url not in self.responses:
            raise RuntimeError("status 404")
        return self.responses[url]


def test_fetch_joins_every_mapped_document() -> None:
    opener = _FakeOpener(
        {
            "https://docs.test/widgets/card.md": "# Card",
            "https://docs.test/widgets/card-content.md": "## Content",
        }
    )
    fetcher = DocsFetcher(
        "https://docs.test/widgets/",
        {"card": ("card.md", "card-content.md")},
        opener=opener,
    )

    assert fetcher.fetch("Card") == f"# Card{DOCS_SEPARATOR}## Content"
    assert opener.calls == [
        "https://docs.test/widgets/card.md",
        "https://docs.test/widgets/card-content.md",
    ]


def test_failed_paths_are_skipped() -> None:
    opener = _FakeOpener({"https://docs.test/list.md": "# List"})
    fetcher = DocsFetcher(
        "https://docs.test", {"list": ("missing.md", "list.md")}, opener=opener
    )

    assert fetcher.fetch("list") == "# List"


def test_unmapped_or_unavailable_components_return_none() -> None:
    fetcher = DocsFetcher("https://docs.test", {"chart": ("chart.md",)}, opener=_FakeOpener({}))

    assert fetcher.fetch("unknown") is None
    assert fetcher.fetch("chart") is None
    assert fetcher.fetch_many(["unknown", "chart"]) == {}


def test_default_mapping_covers_documented_components() -> None:
    fetcher = DocsFetcher(opener=_FakeOpener({}))

    assert fetcher.paths_for("Button") == ["form-widgets/button.md"]


class _TimingOutResponse:
    def __enter__(self) -> "_TimingOutResponse":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def read(self) -> bytes:
        raise TimeoutError("The read operation timed out")


def test_read_timeouts_are_reported_not_raised(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(docs_fetcher, "urlopen", lambda request, timeout: _TimingOutResponse())
    fetcher = DocsFetcher("https://docs.test")

    with caplog.at_level("WARNING", logger="compdoc.docs"):
        assert fetcher.fetch_many(["button", "label"]) == {}

    assert "timed out" in caplog.text
