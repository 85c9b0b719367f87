"""Route kinds and the per-request navigation state."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from docpages._constants import HTML_SUFFIX, INDEX_PAGE
from docpages.config import resolve_base_url
from docpages.generator.link_rewriter import LinkContext

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docpages.config import SiteConfig


class RouteKind(enum.StrEnum):
    """Closed set of routes the documentation pages are served under."""

    INDEX_DEFAULT = "index-default"
    INDEX_DEFAULT_WITH_EXTENSION = "index-default-with-extension"
    INDEX_DEFAULT_TRAILING_SLASH = "index-default-trailing-slash"
    INDEX_DEFAULT_LATEST_ALIAS = "index-default-latest-alias"
    PAGE = "page"
    DIRECTORY = "directory"


INDEX_ROUTES: frozenset[RouteKind] = frozenset(
    {
        RouteKind.INDEX_DEFAULT,
        RouteKind.INDEX_DEFAULT_WITH_EXTENSION,
        RouteKind.INDEX_DEFAULT_TRAILING_SLASH,
        RouteKind.INDEX_DEFAULT_LATEST_ALIAS,
    }
)


def _normalize_page(page: str | None) -> str:
    page = (page or "").strip().strip("/")
    if not page:
        return INDEX_PAGE
    if not page.endswith(HTML_SUFFIX):
        page = f"{page}{HTML_SUFFIX}"
    return page


@dc.dataclass(frozen=True, slots=True)
class NavigationState:
    """Which page of which version and locale is being rendered.

    Attributes
    ----------
    version : str
        Resolved version (never empty and never ``latest``).
    locale : str
        Locale of the content tree.
    directory : str
        Slash-separated directory below the locale root, empty for top-level
        pages.
    page : str
        File name of the rendered page, ``index.html`` for index routes.
    route_kind : RouteKind
        Route the request matched.
    request_path : str or None
        Raw request path, when rendering for an HTTP request.
    """

    version: str
    locale: str
    directory: str
    page: str
    route_kind: RouteKind
    request_path: str | None = None

    @classmethod
    def from_route(
        cls,
        route_kind: RouteKind | str,
        params: typ.Mapping[str, str | None],
        config: SiteConfig,
        request_path: str | None = None,
    ) -> NavigationState:
        """Build the state for a matched route.

        ``params`` may carry ``version``, ``locale``, ``directory`` and
        ``page``. Index routes always render ``index.html`` at the locale root
        and page routes never carry a directory.

        Raises
        ------
        ValueError
            If the route kind is unknown, the version or locale is not
            configured, or a directory route has no directory.
        """
        kind = RouteKind(route_kind)
        version = config.resolve_version(params.get("version"))
        if version not in config.available_versions:
            msg = f"Unknown documentation version '{version}'."
            raise ValueError(msg)
        locale = (params.get("locale") or config.default_locale).strip()
        if locale not in config.available_locales:
            msg = f"Unknown documentation locale '{locale}'."
            raise ValueError(msg)

        directory = (params.get("directory") or "").strip().strip("/")
        page = _normalize_page(params.get("page"))
        match kind:
            case RouteKind.PAGE:
                directory = ""
            case RouteKind.DIRECTORY:
                if not directory:
                    msg = "Directory routes require a 'directory' parameter."
                    raise ValueError(msg)
            case _:
                directory = ""
                page = INDEX_PAGE
        return cls(
            version=version,
            locale=locale,
            directory=directory,
            page=page,
            route_kind=kind,
            request_path=request_path,
        )

    @property
    def is_index_route(self) -> bool:
        return self.route_kind in INDEX_ROUTES

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the lowercased directory segments."""
        if not self.directory:
            return ()
        return tuple(segment.lower() for segment in self.directory.split("/") if segment)

    @property
    def relative_path(self) -> str:
        """Return the page path relative to the locale content root."""
        if self.directory:
            return f"{self.directory}/{self.page}"
        return self.page

    @property
    def page_url(self) -> str:
        """Return the page URL in menu form (``/ui/resources.html``)."""
        return f"/{self.relative_path}"

    def content_path(self, config: SiteConfig) -> Path:
        """Return the rendered HTML file backing this page."""
        return config.content_root(self.version, self.locale) / self.relative_path


@dc.dataclass(frozen=True, slots=True)
class PageContext:
    """Navigation state bound to the resolved public base URL."""

    state: NavigationState
    base_url: str

    @classmethod
    def create(cls, state: NavigationState, config: SiteConfig) -> PageContext:
        """Resolve the base URL for ``state.locale`` once."""
        return cls(state=state, base_url=resolve_base_url(config, state.locale))

    @property
    def links(self) -> LinkContext:
        return LinkContext(base_url=self.base_url, version=self.state.version)

    @property
    def version_index_url(self) -> str:
        """Return the URL of the version's root index page."""
        return self.url_for(f"/{INDEX_PAGE}")

    def url_for(self, menu_url: str) -> str:
        """Return ``base_url + version + menu_url``."""
        return self.links.url_for(menu_url)

    def current_path(self) -> str:
        """Return the request path with everything up to the version removed.

        Falls back to :attr:`NavigationState.page_url` when no request path is
        known or the version segment is absent.

        Examples
        --------
        >>> state = NavigationState("1.0", "en", "b", "c.html", RouteKind.DIRECTORY,
        ...                         request_path="/docs/1.0/b/c.html")
        >>> PageContext(state, "/docs/").current_path()
        '/b/c.html'
        """
        path = self.state.request_path
        marker = f"/{self.state.version}/"
        if not path or marker not in path:
            return self.state.page_url
        return f"/{path.split(marker, 1)[1].lstrip('/')}"


__all__ = ["INDEX_ROUTES", "NavigationState", "PageContext", "RouteKind"]
