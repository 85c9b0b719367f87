"""Helpers for rewriting relative documentation links to versioned site URLs.

Markdown authors link between pages relative to the version root
(``ui/resources.md``, ``/installation.html#requirements``). Generated pages are
served under ``{base_url}{version}/``, so every relative ``<a href>`` is turned
into an absolute site URL. Links that already carry a scheme, point at an
in-page fragment, or are protocol relative are left untouched, which keeps the
rewrite idempotent.

Examples
--------
>>> context = LinkContext(base_url="/docs/", version="1.0")
>>> rewrite_target("ui/resources.md#tabs", context)
'/docs/1.0/ui/resources.html#tabs'
>>> rewrite_target("#tabs", context) is None
True
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import re
from urllib.parse import urlsplit

from docpages._constants import HTML_SUFFIX, SOURCE_SUFFIX

ANCHOR_HREF_PATTERN = re.compile(
    r"(?P<head><a\b[^>]*?\bhref=)(?P<quote>[\"'])(?P<target>.*?)(?P=quote)",
    re.IGNORECASE | re.DOTALL,
)
_SCHEME_PREFIXES = ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")


@dc.dataclass(frozen=True, slots=True)
class LinkContext:
    """Base URL (with a trailing slash) and version every link is anchored to."""

    base_url: str
    version: str

    @property
    def prefix(self) -> str:
        """Return the ``{base_url}{version}/`` prefix of generated URLs."""
        return f"{self.base_url}{self.version}/"

    def url_for(self, menu_url: str) -> str:
        """Return the site URL for a menu URL such as ``/ui/index.html``."""
        return f"{self.base_url}{self.version}/{menu_url.lstrip('/')}"


def rewrite_target(target: str | None, context: LinkContext) -> str | None:
    """Rewrite a relative link target into a site URL when applicable.

    Returns ``None`` when the target must be left as is.
    """
    if not target:
        return None

    lower = target.lower()
    invalid = lower.startswith(_SCHEME_PREFIXES)
    if target.startswith(("#", "//")) or "://" in target:
        invalid = True
    if target.startswith(context.prefix):
        invalid = True

    parsed = None
    if not invalid:
        parsed = urlsplit(target)
        invalid = bool(
            parsed.scheme or parsed.netloc or (not parsed.path and parsed.fragment)
        )

    joined = None
    if not invalid and parsed is not None:
        joined = posixpath.normpath(parsed.path.lstrip("/"))
        while joined.startswith("../"):
            joined = joined[3:]
        if joined in (".", "", ".."):
            invalid = True
        elif joined.endswith(SOURCE_SUFFIX):
            joined = joined[: -len(SOURCE_SUFFIX)] + HTML_SUFFIX

    if invalid or parsed is None or joined is None:
        return None

    url = f"{context.prefix}{joined}"
    if parsed.query:
        url = f"{url}?{parsed.query}"
    if parsed.fragment:
        url = f"{url}#{parsed.fragment}"
    return url


def rewrite_links(html: str, context: LinkContext) -> str:
    """Rewrite every relative ``<a href>`` in ``html``.

    Examples
    --------
    >>> rewrite_links('<a href="setup.md">Setup</a>', LinkContext("/", "2.0"))
    '<a href="/2.0/setup.html">Setup</a>'
    """

    def _repl(match: re.Match[str]) -> str:
        rewritten = rewrite_target(match.group("target"), context)
        if rewritten is None:
            return match.group(0)
        quote = match.group("quote")
        return f"{match.group('head')}{quote}{rewritten}{quote}"

    return ANCHOR_HREF_PATTERN.sub(_repl, html)


__all__ = ["ANCHOR_HREF_PATTERN", "LinkContext", "rewrite_links", "rewrite_target"]
