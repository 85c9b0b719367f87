"""Line-oriented keyword search over the rendered HTML tree.

Every ``.html`` file below ``{html_root}/{version}/{locale}`` is read line by
line. A line matches when it contains a keyword case-insensitively; the line
is reduced to its text, and the word around each match is highlighted.

Examples
--------
>>> search = DocumentSearch(Path("."), "/docs/", "1.0", "en")
>>> search.highlight("cat", "concatenate the cats")
'<span style="background-color: yellow;">concatenate</span> the <span style="background-color: yellow;">cats</span>'
"""

from __future__ import annotations

import logging
import os
import re
import typing as typ
from html import escape
from pathlib import Path

import msgspec
import msgspec.json
from bs4 import BeautifulSoup

from docpages._constants import (
    DEFAULT_HIGHLIGHT_CLOSE,
    DEFAULT_HIGHLIGHT_OPEN,
    MIN_SEARCH_QUERY_LENGTH,
)
from docpages.config import resolve_base_url
from docpages.translations import identity_translate

if typ.TYPE_CHECKING:
    from docpages.config import SiteConfig
    from docpages.translations import Translate

logger = logging.getLogger(__name__)

LETTERS = r"[^\W\d_]"


class FileNotReadableError(PermissionError):
    """Raised when a rendered page cannot be read by the search process."""


class SearchFileReadError(OSError):
    """Raised when opening or reading a rendered page fails."""


class SearchHit(msgspec.Struct, frozen=True, rename="camel"):
    """One matching line; ``file`` is relative to the locale root."""

    base_url: str
    version: str
    file: str
    line: str


class SearchData(msgspec.Struct, rename="camel"):
    title: str
    result_text: str
    results: list[SearchHit] = msgspec.field(default_factory=list)


class SearchPayload(msgspec.Struct):
    """Response body of the search endpoint: ``{"data": {...}}``."""

    data: SearchData


class DocumentSearch:
    """Brute-force search over one version and locale of the rendered site."""

    def __init__(
        self,
        html_root: Path,
        base_url: str,
        version: str,
        locale: str,
        *,
        highlight: tuple[str, str] = (DEFAULT_HIGHLIGHT_OPEN, DEFAULT_HIGHLIGHT_CLOSE),
        max_keywords: int = 8,
        max_query_length: int = 128,
    ) -> None:
        """Initialize a search.

        Parameters
        ----------
        html_root : Path
            Directory holding the ``{version}/{locale}`` output trees.
        base_url : str
            Public base URL; reported without its trailing slash.
        version, locale : str
            Output tree to scan.
        highlight : tuple[str, str], optional
            Markup placed around each highlighted word.
        max_keywords : int, optional
            Keywords beyond this count are ignored.
        max_query_length : int, optional
            Queries are truncated to this many characters.
        """
        self.html_root = html_root
        self.base_url = base_url
        self.version = version
        self.locale = locale
        self.highlight_open, self.highlight_close = highlight
        self.max_keywords = max_keywords
        self.max_query_length = max_query_length

    @classmethod
    def from_config(
        cls, config: SiteConfig, version: str | None = None, locale: str | None = None
    ) -> DocumentSearch:
        """Build a search for ``version``/``locale`` using the site settings."""
        locale = locale or config.default_locale
        return cls(
            config.html_root,
            resolve_base_url(config, locale),
            config.resolve_version(version),
            locale,
            highlight=(config.search.highlight_open, config.search.highlight_close),
            max_keywords=config.search.max_keywords,
            max_query_length=config.search.max_query_length,
        )

    @property
    def search_root(self) -> Path:
        return self.html_root / self.version / self.locale

    def keywords(self, query: str) -> list[str]:
        """Split a truncated query into at most ``max_keywords`` distinct terms."""
        terms = query[: self.max_query_length].split()
        return list(dict.fromkeys(terms))[: self.max_keywords]

    def search(self, query: str) -> list[SearchHit]:
        """Return every matching line, grouped by keyword in query order.

        Raises
        ------
        FileNotReadableError
            If a rendered page is not readable.
        SearchFileReadError
            If a rendered page cannot be opened or read.
        """
        keywords = self.keywords(query)
        if not keywords:
            return []
        files = self._html_files()
        logger.debug(
            "Searching %d files under %s for %s", len(files), self.search_root, keywords
        )
        hits: list[SearchHit] = []
        for keyword in keywords:
            for path in files:
                hits.extend(self._search_file(keyword, path))
        return hits

    def _html_files(self) -> list[Path]:
        root = self.search_root
        if not root.is_dir():
            return []
        return sorted(
            (path for path in root.rglob("*") if path.suffix.lower() == ".html"),
            key=lambda path: path.relative_to(root).as_posix(),
        )

    def _search_file(self, keyword: str, path: Path) -> list[SearchHit]:
        relative = f"/{path.relative_to(self.search_root).as_posix()}"
        if not os.access(path, os.R_OK):
            msg = f"Search file {relative} not readable."
            raise FileNotReadableError(msg)
        needle = keyword.casefold()
        hits: list[SearchHit] = []
        try:
            with path.open("r", encoding="utf-8", errors="replace") as handle:
                for raw_line in handle:
                    if needle not in raw_line.casefold():
                        continue
                    line = strip_line(raw_line)
                    if not line:
                        continue
                    hits.append(
                        SearchHit(
                            base_url=self.base_url.rstrip("/"),
                            version=self.version,
                            file=relative,
                            line=self.highlight(keyword, line),
                        )
                    )
        except OSError as exc:
            msg = f"Error opening the file {relative}."
            raise SearchFileReadError(msg) from exc
        return hits

    def highlight(self, keyword: str, line: str) -> str:
        """Wrap each letter run containing ``keyword`` in the highlight markup.

        Text outside the highlighted words is HTML-escaped.
        """
        pattern = re.compile(
            rf"{LETTERS}*?{re.escape(keyword)}{LETTERS}*", re.IGNORECASE
        )
        parts: list[str] = []
        position = 0
        for match in pattern.finditer(line):
            parts.append(escape(line[position : match.start()], quote=False))
            parts.append(
                f"{self.highlight_open}{escape(match.group(0), quote=False)}"
                f"{self.highlight_close}"
            )
            position = match.end()
        parts.append(escape(line[position:], quote=False))
        return "".join(parts)


def strip_line(line: str) -> str:
    """Return the text of one HTML line without tags, entities or newlines.

    Examples
    --------
    >>> strip_line("<p>Fish &amp; chips</p>\\r\\n")
    'Fish & chips'
    """
    text = BeautifulSoup(line, "html.parser").get_text()
    return text.replace("\r", "").replace("\n", "").strip()


def search_payload(
    search: DocumentSearch,
    query: str,
    translate: Translate = identity_translate,
    locale: str | None = None,
    min_length: int = MIN_SEARCH_QUERY_LENGTH,
) -> SearchPayload:
    """Run ``query`` and wrap the hits in the search endpoint response.

    Queries shorter than ``min_length`` characters return the empty
    "no results" response without touching the filesystem.
    """
    locale = locale or search.locale
    query = query.strip()
    hits = search.search(query) if len(query) >= min_length else []
    if not hits:
        return SearchPayload(
            data=SearchData(
                title=translate("No results found", locale),
                result_text=translate(
                    "Try searching with different keywords.", locale
                ),
            )
        )
    return SearchPayload(
        data=SearchData(
            title=translate("Search Results", locale),
            result_text=f"{len(hits)} {translate('results found', locale)}",
            results=hits,
        )
    )


def encode_payload(payload: SearchPayload) -> bytes:
    """Serialize a search response as JSON."""
    return msgspec.json.encode(payload)


__all__ = [
    "DocumentSearch",
    "FileNotReadableError",
    "SearchData",
    "SearchFileReadError",
    "SearchHit",
    "SearchPayload",
    "encode_payload",
    "search_payload",
    "strip_line",
]
