"""Heading anchors and table-of-contents entries for rendered pages.

:class:`AnchorExtractor` parses a page body, picks the top-level headings
matched by a CSS selector, inserts an ``<a class="anchor">`` target before
each one and returns the entries used for the sidebar table of contents.
Headings nested in other elements (quotes, tab panes, examples) are skipped.

Examples
--------
>>> page = AnchorExtractor().extract("<h2>setAlias()</h2><p>x</p><h2>Overview</h2>")
>>> [entry.anchor_id for entry in page.headings]
['0-setAlias', '1-Overview']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from bs4 import BeautifulSoup
from markupsafe import Markup

from docpages._constants import DEFAULT_ANCHOR_QUERY
from docpages.templating import template_environment

from .link_rewriter import rewrite_target

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from .link_rewriter import LinkContext

ARGUMENT_SUFFIX_PATTERN = re.compile(r"\s*\(.*\)")
PUNCTUATION_PATTERN = re.compile(r"[^\w\s.-]", re.UNICODE)
WHITESPACE_PATTERN = re.compile(r"\s+")


@dc.dataclass(frozen=True, slots=True)
class HeadingEntry:
    """One table-of-contents entry.

    Attributes
    ----------
    level : int
        Heading level (2 for ``h2`` and so on).
    tag : str
        Heading tag name.
    text : str
        Visible heading text.
    anchor_id : str
        ``{index}-{slug}`` target inserted before the heading.
    """

    level: int
    tag: str
    text: str
    anchor_id: str


@dc.dataclass(frozen=True, slots=True)
class RenderedPage:
    """Page body with anchor targets and its ordered headings."""

    html: str
    headings: tuple[HeadingEntry, ...]


def format_anchor_name(text: str) -> str:
    """Return the anchor slug for heading ``text``.

    Examples
    --------
    >>> format_anchor_name("setFactory($name, $factory)")
    'setFactory'
    >>> format_anchor_name("What's new?")
    'Whats-new'
    """
    name = ARGUMENT_SUFFIX_PATTERN.sub("", text.strip())
    name = PUNCTUATION_PATTERN.sub("", name).strip()
    return WHITESPACE_PATTERN.sub("-", name)


class AnchorExtractor:
    """Insert heading anchors and collect table-of-contents entries."""

    def __init__(
        self,
        query: str = DEFAULT_ANCHOR_QUERY,
        *,
        link_context: LinkContext | None = None,
    ) -> None:
        """Initialize the extractor.

        Parameters
        ----------
        query : str, optional
            CSS selector for candidate headings.
        link_context : LinkContext, optional
            When given, relative links are rewritten the same way the
            post-processor does, for bodies that did not go through it.
        """
        self.query = query
        self.link_context = link_context

    def extract(self, html: str) -> RenderedPage:
        """Return ``html`` with anchor targets plus the heading entries."""
        soup = BeautifulSoup(html, "html.parser")
        headings: list[HeadingEntry] = []
        for tag in soup.select(self.query):
            if tag.parent is not soup:
                continue
            text = tag.get_text(" ", strip=True)
            slug = format_anchor_name(text)
            if not text or not slug:
                continue
            anchor_id = f"{len(headings)}-{slug}"
            tag.insert_before(self._anchor_tag(soup, anchor_id))
            headings.append(
                HeadingEntry(
                    level=_heading_level(tag.name),
                    tag=tag.name,
                    text=text,
                    anchor_id=anchor_id,
                )
            )
        if self.link_context is not None:
            self._rewrite_links(soup, self.link_context)
        return RenderedPage(html=str(soup), headings=tuple(headings))

    @staticmethod
    def _anchor_tag(soup: BeautifulSoup, anchor_id: str) -> Tag:
        return soup.new_tag(
            "a", attrs={"class": "anchor", "id": anchor_id, "name": anchor_id}
        )

    @staticmethod
    def _rewrite_links(soup: BeautifulSoup, context: LinkContext) -> None:
        for link in soup.find_all("a", href=True):
            rewritten = rewrite_target(str(link["href"]), context)
            if rewritten:
                link["href"] = rewritten


def _heading_level(name: str) -> int:
    """Return ``2`` for ``h2``; non-heading selectors map to ``0``."""
    if len(name) == 2 and name[0] == "h" and name[1].isdigit():
        return int(name[1])
    return 0


def render_anchor_items(headings: typ.Sequence[HeadingEntry]) -> Markup:
    """Render the sidebar ``<li>`` items linking to each heading anchor."""
    if not headings:
        return Markup("")
    template = template_environment().get_template("anchor_items.jinja")
    return Markup(template.render(headings=headings))


__all__ = [
    "AnchorExtractor",
    "HeadingEntry",
    "RenderedPage",
    "format_anchor_name",
    "render_anchor_items",
]
