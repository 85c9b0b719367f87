"""Sidebar entries for the current menu level and the sidebar header."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docpages._constants import INDEX_PAGE
from docpages.generator.anchors import render_anchor_items
from docpages.translations import identity_translate

from .state import RouteKind

if typ.TYPE_CHECKING:
    from markupsafe import Markup

    from docpages.config import SiteConfig
    from docpages.generator.anchors import HeadingEntry
    from docpages.translations import Translate

    from .menu import Menu, MenuNode
    from .state import NavigationState, PageContext


@dc.dataclass(frozen=True, slots=True)
class SidebarItem:
    """A rendered sidebar link; ``anchors`` holds the page's TOC items."""

    label: str
    href: str
    active: bool = False
    is_folder: bool = False
    css_class: str = "nav-item"
    anchors: Markup | None = None


@dc.dataclass(frozen=True, slots=True)
class SidebarHeader:
    """Label above the sidebar and, on directory routes, the back link."""

    label: str
    back_link: str | None = None
    back_text: str | None = None


def _page_urls(state: NavigationState) -> set[str]:
    return {state.page_url, f"/{state.page}"}


def should_show_anchors(
    state: NavigationState,
    entry: MenuNode,
    headings: typ.Sequence[HeadingEntry],
    config: SiteConfig,
) -> bool:
    """Return whether ``entry`` gets the page's table of contents.

    Index routes and, unless ``anchors_for_index_pages`` is set, a
    directory's own ``index.html`` never show anchors.
    """
    if not headings or not config.anchor_generations:
        return False
    if state.is_index_route or entry.url not in _page_urls(state):
        return False
    return config.anchors_for_index_pages or state.page != INDEX_PAGE


def build_sidebar(
    context: PageContext,
    menu: Menu,
    headings: typ.Sequence[HeadingEntry],
    config: SiteConfig,
) -> tuple[SidebarItem, ...]:
    """Return the sidebar items of the current menu level."""
    state = context.state
    pages = _page_urls(state)
    folder_class = (
        "nav-folder-index"
        if state.route_kind is RouteKind.PAGE and state.page == INDEX_PAGE
        else "nav-folder"
    )
    items: list[SidebarItem] = []
    for entry in menu.current_level(state.directory):
        anchors = None
        if should_show_anchors(state, entry, headings, config):
            anchors = render_anchor_items(headings)
        items.append(
            SidebarItem(
                label=entry.label,
                href=context.url_for(entry.url),
                active=entry.url in pages,
                is_folder=entry.is_folder,
                css_class=f"{folder_class} nav-item" if entry.is_folder else "nav-item",
                anchors=anchors,
            )
        )
    return tuple(items)


def directory_label(state: NavigationState) -> str:
    """Return ``Ui / Resources`` style label for the directory segments."""
    return " / ".join(f"{segment[:1].upper()}{segment[1:]}" for segment in state.segments)


def back_link(context: PageContext) -> str:
    """Return the parent directory index, or the version index at depth one."""
    segments = context.state.segments
    if len(segments) > 1:
        parent = "/".join(segments[:-1])
        return context.url_for(f"/{parent}/{INDEX_PAGE}")
    return context.version_index_url


def sidebar_header(
    context: PageContext, translate: Translate = identity_translate
) -> SidebarHeader:
    state = context.state
    if state.route_kind is RouteKind.DIRECTORY:
        return SidebarHeader(
            label=directory_label(state),
            back_link=back_link(context),
            back_text=translate("Back to Menu", state.locale),
        )
    return SidebarHeader(label=translate("Index", state.locale))


__all__ = [
    "SidebarHeader",
    "SidebarItem",
    "back_link",
    "build_sidebar",
    "directory_label",
    "should_show_anchors",
    "sidebar_header",
]
