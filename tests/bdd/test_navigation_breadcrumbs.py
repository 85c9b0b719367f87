"""Behaviour tests for breadcrumbs and pagination inside a menu folder."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docpages.config import SiteConfig
from docpages.navigation import (
    Menu,
    NavigationState,
    PageContext,
    RouteKind,
    build_breadcrumbs,
    build_pagination,
    parse_menu,
)

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "navigation_breadcrumbs.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a menu with a top-level page and a folder holding one page")
def given_menu(scenario_state: dict[str, object]) -> None:
    scenario_state["menu"] = Menu(
        parse_menu(
            [
                {"url": "/a.html", "label": "A"},
                {
                    "url": "/b/index.html",
                    "label": "B",
                    "folder": "b",
                    "children": [{"url": "/b/c.html", "label": "C"}],
                },
            ]
        )
    )


@when(parsers.parse('I open the page "{page}" in the directory "{directory}"'))
def when_open_page(
    page: str,
    directory: str,
    site_config: SiteConfig,
    scenario_state: dict[str, object],
) -> None:
    state = NavigationState.from_route(
        RouteKind.DIRECTORY, {"directory": directory, "page": page}, site_config
    )
    scenario_state["context"] = PageContext.create(state, site_config)


@then(parsers.parse('the breadcrumb trail reads "{trail}"'))
def then_breadcrumbs(trail: str, scenario_state: dict[str, object]) -> None:
    menu = typ.cast("Menu", scenario_state["menu"])
    context = typ.cast("PageContext", scenario_state["context"])
    crumbs = build_breadcrumbs(context, menu)
    assert [crumb.label for crumb in crumbs] == trail.split(", ")


@then("the page has no next page")
def then_no_next(scenario_state: dict[str, object]) -> None:
    menu = typ.cast("Menu", scenario_state["menu"])
    context = typ.cast("PageContext", scenario_state["context"])
    assert build_pagination(context, menu).next is None
