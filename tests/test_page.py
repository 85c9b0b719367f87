"""Tests for assembling served pages around the rendered content."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docpages.builder import SiteBuilder
from docpages.config import SiteConfig
from docpages.navigation import NavigationState, RouteKind
from docpages.page import PageAssembler
from docpages.translations import TranslationCatalog


@pytest.fixture
def built_site(site_config: SiteConfig) -> SiteConfig:
    """Return the sample site after a full build."""
    assert SiteBuilder(site_config).run().ok
    return site_config


def _state(config: SiteConfig, route: str, **params: str) -> NavigationState:
    return NavigationState.from_route(route, params, config)


def test_assemble_page_route(built_site: SiteConfig) -> None:
    model = PageAssembler(built_site).assemble(
        _state(built_site, "page", version="1.0", page="installation.html")
    )
    assert model.subtitle == "Installation"
    assert model.meta.title == "Installing docpages"
    assert [entry.anchor_id for entry in model.headings] == [
        "0-Requirements",
        "1-Install-the-package",
    ]
    assert [crumb.label for crumb in model.breadcrumbs] == ["Index", "Installation"]
    assert model.prev_page is not None
    assert model.prev_page.label == "Introduction"
    assert model.next_page is not None
    assert model.next_page.label == "Ui"
    active = [item for item in model.sidebar if item.active]
    assert [item.label for item in active] == ["Installation"]
    assert active[0].anchors is not None


def test_assemble_directory_route(built_site: SiteConfig) -> None:
    model = PageAssembler(built_site).assemble(
        _state(built_site, "directory", directory="ui", page="resources.html")
    )
    assert model.title == "Ui"
    assert [item.label for item in model.sidebar] == ["Resources", "Getting Started"]
    assert [crumb.label for crumb in model.breadcrumbs] == ["Index", "Ui", "Resources"]
    assert model.prev_page is None
    assert model.next_page is not None
    assert model.next_page.href == "https://example.com/docs/1.0/ui/getting-started.html"
    assert model.sidebar_header.back_link == "https://example.com/docs/1.0/index.html"


def test_index_route_has_no_anchor_list(built_site: SiteConfig) -> None:
    model = PageAssembler(built_site).assemble(_state(built_site, "index-default"))
    assert all(item.anchors is None for item in model.sidebar)
    assert model.breadcrumbs[-1].label == "Introduction"


def test_render_wraps_content(built_site: SiteConfig) -> None:
    catalog = TranslationCatalog({"tr": {"Index": "Dizin", "Next": "Sonraki"}})
    html = PageAssembler(built_site, catalog).render(
        _state(built_site, "page", locale="tr", page="installation.html")
    )
    soup = BeautifulSoup(html, "html.parser")
    content = soup.select_one("#markdown-content")
    assert content is not None
    assert content.find("a", class_="anchor") is not None
    crumbs = [li.get_text(strip=True) for li in soup.select("ol.breadcrumb li")]
    assert crumbs == ["Dizin", "Installation"]
    assert soup.select_one("ol.breadcrumb a")["href"] == "https://tr.example.com/docs/1.0/index.html"
    assert "Sonraki" in soup.select_one("li.page-next").get_text()
    assert soup.select_one("#version-combobox option[selected]")["value"] == "1.0"
    assert soup.select_one("ul.nav-sub li.nav-sub-item-h2") is not None
    assert soup.find("meta", attrs={"name": "keywords"})["content"] == "install, setup"


def test_missing_page_raises(built_site: SiteConfig) -> None:
    with pytest.raises(FileNotFoundError):
        PageAssembler(built_site).assemble(_state(built_site, "page", page="nope.html"))


def test_missing_menu_raises(built_site: SiteConfig) -> None:
    (built_site.menu_root / "1.0" / "navigation.yaml").unlink()
    with pytest.raises(FileNotFoundError):
        PageAssembler(built_site).assemble(_state(built_site, "index-default"))


def test_render_wires_version_switch_and_search_box(built_site: SiteConfig) -> None:
    html = PageAssembler(built_site).render(_state(built_site, "page", page="installation.html"))
    soup = BeautifulSoup(html, "html.parser")
    combobox = soup.select_one("select#version-combobox")
    assert combobox is not None
    assert "dataset.url" in combobox["onchange"]
    option = combobox.select_one("option[selected]")
    assert option["data-url"] == "https://example.com/docs/1.0/index.html"
    search_input = soup.select_one("#search-box input#search-input")
    assert search_input is not None
    assert search_input["minlength"] == "3"
    assert search_input["data-version"] == "1.0"
    assert search_input["data-locale"] == "en"
