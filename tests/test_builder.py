"""Tests for building the HTML tree and the sitemap."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

from bs4 import BeautifulSoup

from docpages.builder import (
    SiteBuilder,
    SourceDocument,
    iter_source_documents,
    remove_html_files,
)
from docpages.config import SiteConfig
from docpages.generator.postprocess import HtmlPostProcessor, PostProcessStage

FIXED_NOW = dt.datetime(2024, 5, 1, 12, 0, tzinfo=dt.UTC)


def _builder(site_config: SiteConfig, **kwargs: object) -> SiteBuilder:
    return SiteBuilder(site_config, clock=lambda: FIXED_NOW, **kwargs)  # type: ignore[arg-type]


def test_source_document_paths(tmp_path: Path) -> None:
    document = SourceDocument("1.0", "en", "ui", "resources.md", tmp_path)
    assert document.source_path == tmp_path / "ui" / "resources.md"
    assert document.output_path == tmp_path / "ui" / "resources.html"
    assert document.url_path == "ui/resources.html"
    top = SourceDocument("1.0", "en", "", "index.md", tmp_path)
    assert top.url_path == "index.html"


def test_sources_are_sorted(site_config: SiteConfig) -> None:
    documents = list(iter_source_documents(site_config, "1.0", "en"))
    assert [document.url_path for document in documents] == [
        "changelog.html",
        "index.html",
        "installation.html",
        "ui/getting-started.html",
        "ui/index.html",
        "ui/resources.html",
    ]


def test_run_writes_html_beside_sources(site_config: SiteConfig) -> None:
    report = _builder(site_config).run()
    assert report.ok
    assert len(report.written) == 12
    root = site_config.content_root("1.0", "en")
    html = (root / "installation.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")
    code = soup.select_one("pre > code.language-bash")
    assert code is not None
    assert code["data-line"] == "2"
    assert soup.select_one("div.alert.alert-info") is not None

    index = BeautifulSoup((root / "index.html").read_text(encoding="utf-8"), "html.parser")
    assert index.find("a")["href"] == "https://example.com/docs/1.0/installation.html"
    tr_index = BeautifulSoup(
        (site_config.content_root("1.0", "tr") / "index.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert tr_index.find("a")["href"] == "https://tr.example.com/docs/1.0/installation.html"

    resources = (root / "ui" / "resources.html").read_text(encoding="utf-8")
    assert 'class="img-fluid"' in resources
    assert '<div class="table-responsive">' in resources
    assert not list(root.rglob("*.tmp"))


def test_sitemap_lists_every_page(site_config: SiteConfig) -> None:
    report = _builder(site_config).run()
    assert report.sitemap == site_config.sitemap_output
    soup = BeautifulSoup(report.sitemap.read_text(encoding="utf-8"), "html.parser")
    locs = [loc.get_text() for loc in soup.find_all("loc")]
    assert len(locs) == 12
    assert locs[0] == "https://example.com/docs/1.0/changelog.html"
    assert locs[6] == "https://tr.example.com/docs/1.0/changelog.html"
    assert {tag.get_text() for tag in soup.find_all("changefreq")} == {"weekly"}
    assert {tag.get_text() for tag in soup.find_all("priority")} == {"1"}
    assert {tag.get_text() for tag in soup.find_all("lastmod")} == {"2024-05-01T12:00:00+00:00"}


def test_sitemap_disabled(site_config: SiteConfig) -> None:
    site_config.build_sitemap = False
    report = _builder(site_config).run()
    assert report.sitemap is None
    assert not site_config.sitemap_output.exists()


def test_failed_page_is_collected(site_config: SiteConfig) -> None:
    """One failing page is reported while the others are still written."""

    def _fail_on_changelog(html: str, context: object) -> str:
        if "First release" in html:
            raise RuntimeError("bad page")
        return html

    processor = HtmlPostProcessor([PostProcessStage("check", _fail_on_changelog)])
    report = _builder(site_config, post_processor=processor).run()
    assert not report.ok
    assert [failure.path.name for failure in report.failures] == ["changelog.md", "changelog.md"]
    assert "bad page" in str(report.failures[0])
    root = site_config.content_root("1.0", "en")
    assert not (root / "changelog.html").exists()
    assert (root / "index.html").exists()
    assert len(report.written) == 10


def test_run_removes_stale_html(site_config: SiteConfig) -> None:
    stale = site_config.content_root("1.0", "en") / "old" / "gone.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("<p>old</p>", encoding="utf-8")
    report = _builder(site_config).run()
    assert stale in report.removed
    assert not stale.exists()


def test_remove_html_files_keeps_sources(site_config: SiteConfig) -> None:
    _builder(site_config).run()
    removed = remove_html_files(site_config.html_root)
    assert len(removed) == 12
    assert not list(site_config.html_root.rglob("*.html"))
    assert len(list(site_config.html_root.rglob("*.md"))) == 12


def test_remove_html_files_missing_root(tmp_path: Path) -> None:
    assert remove_html_files(tmp_path / "absent") == []
