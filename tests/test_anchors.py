"""Tests for heading anchors and sidebar TOC items."""

from __future__ import annotations

from bs4 import BeautifulSoup

from docpages.generator.anchors import (
    AnchorExtractor,
    format_anchor_name,
    render_anchor_items,
)
from docpages.generator.link_rewriter import LinkContext


def test_anchor_inserted_before_each_heading() -> None:
    page = AnchorExtractor().extract("<h1>Title</h1><h2>Install</h2><p>x</p><h3>Pip</h3>")
    assert [entry.anchor_id for entry in page.headings] == ["0-Install", "1-Pip"]
    assert [entry.level for entry in page.headings] == [2, 3]
    soup = BeautifulSoup(page.html, "html.parser")
    anchor = soup.find("a", class_="anchor")
    assert anchor["id"] == anchor["name"] == "0-Install"
    assert anchor.find_next_sibling().name == "h2"


def test_duplicate_headings_get_unique_ids() -> None:
    page = AnchorExtractor().extract("<h2>Usage</h2><h2>Usage</h2><h3>Usage</h3>")
    ids = [entry.anchor_id for entry in page.headings]
    assert ids == ["0-Usage", "1-Usage", "2-Usage"]
    assert len(set(ids)) == len(ids)


def test_empty_and_nested_headings_are_skipped() -> None:
    """Only top-level headings with text produce anchors."""
    html = "<h2> </h2><blockquote><h2>Quoted</h2></blockquote><h2>Real</h2>"
    page = AnchorExtractor().extract(html)
    assert [entry.text for entry in page.headings] == ["Real"]
    assert page.headings[0].anchor_id == "0-Real"


def test_custom_query() -> None:
    page = AnchorExtractor("h2").extract("<h2>Two</h2><h3>Three</h3>")
    assert [entry.tag for entry in page.headings] == ["h2"]


def test_link_context_rewrites_links() -> None:
    extractor = AnchorExtractor(link_context=LinkContext("/", "2.0"))
    page = extractor.extract('<h2>Links</h2><p><a href="setup.md">Setup</a></p>')
    link = BeautifulSoup(page.html, "html.parser").find("a", href=True)
    assert link["href"] == "/2.0/setup.html"


def test_format_anchor_name_drops_arguments() -> None:
    assert format_anchor_name("setFactory($name, $factory)") == "setFactory"
    assert format_anchor_name("Configure   the  site") == "Configure-the-site"


def test_render_anchor_items() -> None:
    page = AnchorExtractor().extract("<h2>Install</h2><h4>Details</h4>")
    soup = BeautifulSoup(str(render_anchor_items(page.headings)), "html.parser")
    items = soup.select("li.nav-sub-item")
    assert [item["class"] for item in items] == [
        ["nav-sub-item", "nav-sub-item-h2"],
        ["nav-sub-item", "nav-sub-item-h4"],
    ]
    assert [item.a["href"] for item in items] == ["#0-Install", "#1-Details"]


def test_render_anchor_items_empty() -> None:
    assert str(render_anchor_items(())) == ""
