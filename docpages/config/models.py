"""Typed dataclasses describing docpages site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docpages._constants import (
    DEFAULT_ANCHOR_QUERY,
    DEFAULT_HIGHLIGHT_CLOSE,
    DEFAULT_HIGHLIGHT_OPEN,
    LATEST_VERSION_NAME,
)


class ConfigurationError(ValueError):
    """Raised when the site configuration or a menu definition is invalid."""


@dc.dataclass(slots=True)
class SearchConfig:
    """Settings for the line-oriented document search."""

    highlight_open: str = DEFAULT_HIGHLIGHT_OPEN
    highlight_close: str = DEFAULT_HIGHLIGHT_CLOSE
    min_query_length: int = 3
    max_query_length: int = 128
    max_keywords: int = 8


@dc.dataclass(slots=True)
class SiteConfig:
    """A fully resolved documentation site definition sourced from YAML config.

    Attributes
    ----------
    root_path : Path
        Project root every other path is resolved against.
    html_path : str
        Directory (relative to ``root_path``) holding the versioned Markdown
        sources and the generated HTML.
    config_path : str
        Directory (relative to ``root_path``) holding per-version menus.
    http_prefix : str
        Scheme and host prepended to ``base_url`` (``https://`` or empty).
    base_url : str
        Public base path; may carry a ``{locale}`` placeholder.
    images_folder : str
        Directory (relative to ``root_path``) that inline image sources are
        resolved against.
    available_versions : list[str]
        Published documentation versions.
    default_version : str
        Version served for ``latest`` and empty version routes.
    available_locales : list[str]
        Locales with a content tree for each version.
    default_locale : str
        Locale used when none is requested.
    """

    root_path: Path
    html_path: str
    config_path: str
    http_prefix: str
    base_url: str
    images_folder: str
    available_versions: list[str]
    default_version: str
    available_locales: list[str]
    default_locale: str
    remove_default_locale: bool = False
    base64_convert: bool = False
    build_sitemap: bool = False
    xml_path: str = "public/sitemap.xml"
    anchor_parse_query: str = DEFAULT_ANCHOR_QUERY
    anchor_generations: bool = True
    anchors_for_index_pages: bool = False
    translations_file: Path | None = None
    search: SearchConfig = dc.field(default_factory=SearchConfig)

    @property
    def html_root(self) -> Path:
        """Return the directory holding ``{version}/{locale}`` content trees."""
        return self.root_path / self.html_path

    @property
    def menu_root(self) -> Path:
        """Return the directory holding ``{version}`` menu definitions."""
        return self.root_path / self.config_path

    @property
    def images_root(self) -> Path:
        """Return the directory inline image sources are resolved against."""
        return self.root_path / self.images_folder

    @property
    def sitemap_output(self) -> Path:
        """Return the path the sitemap XML is written to."""
        return self.root_path / self.xml_path

    def content_root(self, version: str, locale: str) -> Path:
        """Return the rendered content tree for one version and locale."""
        return self.html_root / version / locale

    def resolve_version(self, requested: str | None) -> str:
        """Map an empty or ``latest`` version request onto the default version."""
        if not requested or requested == LATEST_VERSION_NAME:
            return self.default_version
        return requested


__all__ = ["ConfigurationError", "SearchConfig", "SiteConfig"]
