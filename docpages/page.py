"""Assemble a served documentation page around its rendered content.

The builder writes the page bodies; :class:`PageAssembler` is the request-time
half. It loads the stored HTML for a route, adds heading anchors, and builds
the sidebar, breadcrumbs and pagination from the version menu before handing
everything to ``doc_page.jinja``.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from markupsafe import Markup

from docpages._constants import FOLDER_ICON, INDEX_PAGE
from docpages.generator.anchors import AnchorExtractor
from docpages.navigation import (
    PageContext,
    build_breadcrumbs,
    build_pagination,
    build_sidebar,
    load_menu,
    menu_path,
    sidebar_header,
)
from docpages.navigation.sidebar import directory_label
from docpages.templating import template_environment
from docpages.translations import identity_translate

if typ.TYPE_CHECKING:
    from docpages.config import SiteConfig
    from docpages.generator.anchors import HeadingEntry
    from docpages.navigation import (
        Crumb,
        MenuMeta,
        MenuNode,
        NavigationState,
        SidebarHeader,
        SidebarItem,
    )
    from docpages.translations import Translate

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class PageLink:
    """A labelled link used by the pagination bar."""

    label: str
    href: str


@dc.dataclass(frozen=True, slots=True)
class VersionOption:
    """One entry of the version switcher; ``url`` is that version's index."""

    version: str
    selected: bool
    url: str


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the ``doc_page.jinja`` template.

    Attributes
    ----------
    state : NavigationState
        Route the page was assembled for.
    base_url : str
        Resolved public base URL (locale substituted, trailing slash).
    title : str
        Directory label on directory routes, otherwise the page label.
    subtitle : str
        Menu label of the current page.
    content : Markup
        Page body with heading anchors inserted.
    headings : tuple[HeadingEntry, ...]
        Headings that received anchors.
    meta : MenuMeta
        Meta values of the current menu entry.
    sidebar_header : SidebarHeader
        Label and back link shown above the sidebar.
    sidebar : tuple[SidebarItem, ...]
        Entries of the current menu level.
    breadcrumbs : tuple[Crumb, ...]
        Trail from the version index to the current page.
    prev_page, next_page : PageLink or None
        Pagination links.
    versions : tuple[VersionOption, ...]
        Options of the version selector.
    """

    state: NavigationState
    base_url: str
    title: str
    subtitle: str
    content: Markup
    headings: tuple[HeadingEntry, ...]
    meta: MenuMeta
    sidebar_header: SidebarHeader
    sidebar: tuple[SidebarItem, ...]
    breadcrumbs: tuple[Crumb, ...]
    prev_page: PageLink | None
    next_page: PageLink | None
    versions: tuple[VersionOption, ...]


class PageAssembler:
    """Build :class:`PageModel` values and full pages for routes."""

    def __init__(
        self, config: SiteConfig, translate: Translate = identity_translate
    ) -> None:
        self.config = config
        self.translate = translate

    def assemble(self, state: NavigationState) -> PageModel:
        """Return the page model for ``state``.

        Raises
        ------
        FileNotFoundError
            If the rendered page or the menu file does not exist.
        ConfigurationError
            If the menu definition is invalid.
        """
        context = PageContext.create(state, self.config)
        content_path = state.content_path(self.config)
        if not content_path.is_file():
            msg = f"Documentation page '{content_path}' does not exist."
            raise FileNotFoundError(msg)
        body = content_path.read_text(encoding="utf-8")
        menu = load_menu(menu_path(self.config, state.version, state.locale))

        rendered = AnchorExtractor(self.config.anchor_parse_query).extract(body)
        pagination = build_pagination(context, menu)
        page_label = menu.page_label(state)
        logger.debug(
            "Assembled %s with %d headings", content_path, len(rendered.headings)
        )
        return PageModel(
            state=state,
            base_url=context.base_url,
            title=directory_label(state) if state.directory else page_label,
            subtitle=page_label,
            content=Markup(rendered.html),
            headings=rendered.headings,
            meta=menu.page_meta(state),
            sidebar_header=sidebar_header(context, self.translate),
            sidebar=build_sidebar(context, menu, rendered.headings, self.config),
            breadcrumbs=build_breadcrumbs(context, menu, self.translate),
            prev_page=self._page_link(context, pagination.prev),
            next_page=self._page_link(context, pagination.next),
            versions=tuple(
                VersionOption(
                    version,
                    version == state.version,
                    f"{context.base_url}{version}/{INDEX_PAGE}",
                )
                for version in self.config.available_versions
            ),
        )

    @staticmethod
    def _page_link(context: PageContext, entry: MenuNode | None) -> PageLink | None:
        if entry is None:
            return None
        return PageLink(label=entry.label, href=context.url_for(entry.url))

    def render(self, state: NavigationState) -> str:
        """Return the complete HTML page for ``state``."""
        model = self.assemble(state)
        template = template_environment().get_template("doc_page.jinja")
        return template.render(
            page=model,
            folder_icon=Markup(FOLDER_ICON),
            search_min_length=self.config.search.min_query_length,
            t=lambda key: self.translate(key, state.locale),
        )


__all__ = ["PageAssembler", "PageLink", "PageModel", "VersionOption"]
