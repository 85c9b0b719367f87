"""Tab group markup: Markdown pass-through and Bootstrap widget rendering.

Authors write tab groups as raw blocks::

    <tab>
    <tab-title>Linux|Windows</tab-title>
    <tab-content>
    <tab-column>
    Run `make`.
    </tab-column>
    <tab-column>
    Run `nmake`.
    </tab-column>
    </tab-content>
    </tab>

:class:`TabMarkupExtension` marks the tab tags as block level so
Python-Markdown keeps the block verbatim. :func:`render_tabs` then expands
each block into a tab widget, pairing titles with columns by position.
"""

from __future__ import annotations

import itertools
import re
import textwrap
import typing as typ

from markdown.extensions import Extension
from markupsafe import Markup

from docpages.templating import template_environment

from .link_rewriter import rewrite_links

if typ.TYPE_CHECKING:
    from markdown import Markdown

    from .postprocess import RenderContext

TAB_TAGS = ("tab", "tab-title", "tab-content", "tab-column")
TAB_PATTERN = re.compile(r"<tab>(?P<body>.*?)</tab>", re.DOTALL | re.IGNORECASE)
TITLE_PATTERN = re.compile(r"<tab-title>(.*?)</tab-title>", re.DOTALL | re.IGNORECASE)
CONTENT_PATTERN = re.compile(
    r"<tab-content>(.*?)</tab-content>", re.DOTALL | re.IGNORECASE
)
COLUMN_PATTERN = re.compile(r"<tab-column>(.*?)</tab-column>", re.DOTALL | re.IGNORECASE)


class TabMarkupExtension(Extension):
    """Treat the tab tags as block-level raw HTML."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Append the tab tags to the Markdown block-level element list."""
        md.registerExtension(self)
        for tag in TAB_TAGS:
            if tag not in md.block_level_elements:
                md.block_level_elements.append(tag)


def split_tab_titles(body: str) -> list[str]:
    """Return the pipe-delimited titles of one tab block, or ``[]``."""
    match = TITLE_PATTERN.search(body)
    if match is None:
        return []
    return [title.strip() for title in match.group(1).split("|") if title.strip()]


def split_tab_columns(body: str) -> list[str]:
    """Return the raw Markdown of each ``<tab-column>``, or ``[]``."""
    match = CONTENT_PATTERN.search(body)
    if match is None:
        return []
    return [
        textwrap.dedent(column).strip("\n")
        for column in COLUMN_PATTERN.findall(match.group(1))
    ]


def render_tabs(html: str, context: RenderContext) -> str:
    """Expand every ``<tab>`` block in ``html`` into a tab widget."""
    template = template_environment().get_template("tabs.jinja")
    counter = itertools.count()

    def _repl(match: re.Match[str]) -> str:
        body = match.group("body")
        titles = [
            Markup(context.renderer.inline(title)) for title in split_tab_titles(body)
        ]
        columns = [
            Markup(rewrite_links(context.renderer.markdown(column), context.links))
            for column in split_tab_columns(body)
        ]
        return template.render(group=next(counter), titles=titles, columns=columns)

    return TAB_PATTERN.sub(_repl, html)


__all__ = [
    "TAB_TAGS",
    "TabMarkupExtension",
    "render_tabs",
    "split_tab_columns",
    "split_tab_titles",
]
