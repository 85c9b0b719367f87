"""Tests for the line-oriented document search and its JSON payload."""

from __future__ import annotations

import os
from pathlib import Path

import msgspec.json
import pytest

from docpages.config import SiteConfig
from docpages.search import (
    DocumentSearch,
    FileNotReadableError,
    SearchFileReadError,
    encode_payload,
    search_payload,
    strip_line,
)
from docpages.translations import TranslationCatalog

HIGHLIGHT = '<span style="background-color: yellow;">'


def _write(root: Path, relative: str, text: str) -> Path:
    path = root / "1.0" / "en" / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def html_root(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    _write(root, "index.html", "<h1>Welcome</h1>\n<p>Concatenate the cats.</p>\n")
    _write(root, "ui/forms.html", '<p>Forms &amp; <a href="x">fields</a></p>\n<p class="cat">\n</p>\n')
    _write(root, "ui/notes.md", "cat in markdown is ignored\n")
    return root


def _search(html_root: Path, **kwargs: object) -> DocumentSearch:
    return DocumentSearch(html_root, "https://example.com/docs/", "1.0", "en", **kwargs)  # type: ignore[arg-type]


def test_highlight_extends_to_letter_runs(html_root: Path) -> None:
    """``cat`` highlights both ``Concatenate`` and ``cats``."""
    hits = _search(html_root).search("cat")
    assert len(hits) == 1
    hit = hits[0]
    assert hit.file == "/index.html"
    assert hit.base_url == "https://example.com/docs"
    assert hit.version == "1.0"
    assert hit.line == (
        f"{HIGHLIGHT}Concatenate</span> the {HIGHLIGHT}cats</span>."
    )


def test_lines_are_stripped_and_escaped(html_root: Path) -> None:
    hits = _search(html_root).search("fields")
    assert [hit.line for hit in hits] == [f"Forms &amp; {HIGHLIGHT}fields</span>"]


def test_keywords_are_searched_in_order(html_root: Path) -> None:
    hits = _search(html_root).search("forms welcome")
    assert [hit.file for hit in hits] == ["/ui/forms.html", "/index.html"]


def test_keyword_limits(html_root: Path) -> None:
    search = _search(html_root, max_keywords=2, max_query_length=12)
    assert search.keywords("alpha beta gamma") == ["alpha", "beta"]
    assert search.keywords("abcdefghijklmnop") == ["abcdefghijkl"]
    assert search.keywords("cat cat dog") == ["cat", "dog"]


def test_custom_highlight_markup(html_root: Path) -> None:
    hits = _search(html_root, highlight=("<mark>", "</mark>")).search("welcome")
    assert hits[0].line == "<mark>Welcome</mark>"


def test_missing_tree_returns_no_hits(tmp_path: Path) -> None:
    assert _search(tmp_path).search("anything") == []


def test_unreadable_file_raises(html_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "access", lambda path, mode: False)
    with pytest.raises(FileNotReadableError, match="not readable"):
        _search(html_root).search("cat")


def test_read_failure_raises(html_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(self: Path, *args: object, **kwargs: object) -> object:
        raise OSError("disk error")

    monkeypatch.setattr(Path, "open", _fail)
    with pytest.raises(SearchFileReadError, match="Error opening"):
        _search(html_root).search("cat")


def test_strip_line_decodes_entities() -> None:
    assert strip_line("  <b>Tom &amp; Jerry</b>\r\n") == "Tom & Jerry"


def test_short_query_returns_no_results_payload(html_root: Path) -> None:
    """A two character query never reports hits, even when lines match."""
    payload = search_payload(_search(html_root), "ca")
    decoded = msgspec.json.decode(encode_payload(payload))
    assert decoded["data"]["results"] == []
    assert decoded["data"]["title"] == "No results found"


def test_payload_shape(html_root: Path) -> None:
    catalog = TranslationCatalog({"tr": {"Search Results": "Arama Sonuçları"}})
    payload = search_payload(_search(html_root), "cats", catalog, locale="tr")
    decoded = msgspec.json.decode(encode_payload(payload))
    assert decoded["data"]["title"] == "Arama Sonuçları"
    assert decoded["data"]["resultText"].startswith("1 ")
    assert decoded["data"]["results"] == [
        {
            "baseUrl": "https://example.com/docs",
            "version": "1.0",
            "file": "/index.html",
            "line": f"Concatenate the {HIGHLIGHT}cats</span>.",
        }
    ]


def test_from_config(site_config: SiteConfig) -> None:
    search = DocumentSearch.from_config(site_config, "latest", "tr")
    assert search.version == "1.0"
    assert search.base_url == "https://tr.example.com/docs/"
    assert search.search_root == site_config.html_root / "1.0" / "tr"
