"""Ordered HTML rewrites applied to every rendered documentation page.

Each stage is a pure ``(html, context) -> html`` function; a pattern that does
not match leaves the input unchanged. :data:`DEFAULT_STAGES` fixes the order:

1. ``links``          relative ``<a href>`` targets become site URLs
2. ``escapes``        backslash-escaped backticks become literal backticks
3. ``tables``         tables are wrapped in a responsive container
4. ``alerts``         GitHub alert blockquotes become titled callouts
5. ``blockquotes``    remaining blockquotes get the generic callout styling
6. ``tabs``           ``<tab>`` blocks become tab widgets
7. ``images``         images get the responsive CSS class
8. ``inline_images``  image sources are embedded as ``data:`` URIs (optional)

Alerts run before the generic blockquote rule, otherwise an alert marker would
be absorbed into a plain callout. Image inlining is last so it only sees the
final ``<img>`` tags.

Examples
--------
>>> from docpages.generator.link_rewriter import LinkContext
>>> from docpages.generator.renderer import HtmlContentRenderer
>>> context = RenderContext(
...     links=LinkContext("/docs/", "1.0"), locale="en",
...     renderer=HtmlContentRenderer(),
... )
>>> HtmlPostProcessor().run('<img src="a.png" alt="A" />', context)
'<img src="a.png" alt="A" class="img-fluid" />'
"""

from __future__ import annotations

import base64
import dataclasses as dc
import logging
import re
import typing as typ
from html import escape
from urllib.parse import unquote, urlsplit

from docpages._constants import (
    IMAGE_CSS_CLASS,
    INLINE_IMAGE_MIME_TYPES,
    TABLE_WRAPPER_CLASS,
)
from docpages.translations import identity_translate

from .link_rewriter import rewrite_links
from .tabs import render_tabs

if typ.TYPE_CHECKING:
    from pathlib import Path

    from docpages.translations import Translate

    from .link_rewriter import LinkContext
    from .renderer import HtmlContentRenderer

logger = logging.getLogger(__name__)

TABLE_PATTERN = re.compile(r"<table\b.*?</table>", re.DOTALL | re.IGNORECASE)
TABLE_WRAPPER_OPEN = f'<div class="{TABLE_WRAPPER_CLASS}">\n'
SINGLE_PARAGRAPH_BLOCKQUOTE = re.compile(
    r"<blockquote>\s*<p>(?P<body>(?:(?!</?blockquote\b|</p>).)*)</p>\s*</blockquote>",
    re.DOTALL,
)
PLAIN_BLOCKQUOTE = re.compile(r"<blockquote>")
IMG_TAG_PATTERN = re.compile(r"<img\b(?P<attrs>[^>]*?)\s*/?>", re.IGNORECASE)
CLASS_ATTR_PATTERN = re.compile(r"\bclass=(?P<quote>[\"'])(?P<value>.*?)(?P=quote)")
SRC_ATTR_PATTERN = re.compile(r"\bsrc=\"(?P<src>[^\"]*)\"")


class PostProcessingError(RuntimeError):
    """Raised when a post-processing stage fails; names the stage."""

    def __init__(self, stage: str) -> None:
        super().__init__(f"HTML post-processing stage '{stage}' failed.")
        self.stage = stage


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-page inputs shared by every stage.

    Attributes
    ----------
    links : LinkContext
        Base URL (locale already substituted) and version for link rewrites.
    locale : str
        Locale passed to ``translate`` for alert titles.
    renderer : HtmlContentRenderer
        Renderer used for Markdown nested inside tab groups.
    translate : Translate
        ``translate(key, locale)`` lookup.
    images_root : Path or None
        Directory that image sources are resolved against for inlining.
    base64_convert : bool
        Whether the ``inline_images`` stage embeds images.
    """

    links: LinkContext
    locale: str
    renderer: HtmlContentRenderer
    translate: Translate = identity_translate
    images_root: Path | None = None
    base64_convert: bool = False


@dc.dataclass(frozen=True, slots=True)
class AlertKind:
    """One GitHub-style alert marker and its callout presentation."""

    marker: str
    variant: str
    icon: str
    title_key: str


ALERT_KINDS: tuple[AlertKind, ...] = (
    AlertKind("NOTE", "info", "&#9432;", "Note"),
    AlertKind("TIP", "success", "&#128161;", "Tip"),
    AlertKind("IMPORTANT", "primary", "&#10071;", "Important"),
    AlertKind("WARNING", "warning", "&#9888;", "Warning"),
    AlertKind("CAUTION", "danger", "&#9940;", "Caution"),
)
ALERTS_BY_MARKER: dict[str, AlertKind] = {kind.marker: kind for kind in ALERT_KINDS}
ALERT_OPEN_PATTERN = re.compile(
    r"<blockquote>\s*<p>\[!(?P<marker>"
    + "|".join(ALERTS_BY_MARKER)
    + r")\]\s*"
)
BLOCKQUOTE_TAG_PATTERN = re.compile(r"<(?P<close>/?)blockquote\b[^>]*>", re.IGNORECASE)


def rewrite_internal_links(html: str, context: RenderContext) -> str:
    """Stage 1: point relative links at ``{base_url}{version}/``."""
    return rewrite_links(html, context.links)


def unescape_backticks(html: str, context: RenderContext) -> str:  # noqa: ARG001
    """Stage 2: turn ``\\``` into a literal backtick."""
    return html.replace("\\`", "`")


def wrap_tables(html: str, context: RenderContext) -> str:  # noqa: ARG001
    """Stage 3: wrap every table not already wrapped in a responsive div."""

    def _repl(match: re.Match[str]) -> str:
        start = match.start()
        if html[max(0, start - len(TABLE_WRAPPER_OPEN)) : start] == TABLE_WRAPPER_OPEN:
            return match.group(0)
        return f"{TABLE_WRAPPER_OPEN}{match.group(0)}\n</div>"

    return TABLE_PATTERN.sub(_repl, html)


def _closing_blockquote(html: str, start: int) -> re.Match[str] | None:
    """Return the ``</blockquote>`` balancing a quote opened before ``start``."""
    depth = 1
    for tag in BLOCKQUOTE_TAG_PATTERN.finditer(html, start):
        depth += -1 if tag.group("close") else 1
        if depth == 0:
            return tag
    return None


def render_alerts(html: str, context: RenderContext) -> str:
    """Stage 4: convert ``[!NOTE]``-style blockquotes into titled callouts.

    The closing tag is found by counting nested ``<blockquote>`` tags, so an
    alert may hold quotes of its own; those are left for stage 5.
    """
    position = 0
    while (match := ALERT_OPEN_PATTERN.search(html, position)) is not None:
        closing = _closing_blockquote(html, match.end())
        if closing is None:
            position = match.end()
            continue
        kind = ALERTS_BY_MARKER[match.group("marker")]
        title = escape(context.translate(kind.title_key, context.locale))
        body = html[match.end() : closing.start()].strip()
        if body.startswith("</p>"):
            body = body[len("</p>") :].lstrip()
        else:
            body = f"<p>{body}"
        head = (
            f'<div class="alert alert-{kind.variant}" role="alert">\n'
            f'<p class="alert-title">{kind.icon} {title}</p>\n'
        )
        html = f"{html[: match.start()]}{head}{body}\n</div>{html[closing.end() :]}"
        position = match.start() + len(head)
    return html


def style_blockquotes(html: str, context: RenderContext) -> str:  # noqa: ARG001
    """Stage 5: single-paragraph quotes become callouts, others get a class."""
    html = SINGLE_PARAGRAPH_BLOCKQUOTE.sub(
        r'<div class="alert alert-warning alert-dismissible fade show" role="alert">'
        r"\g<body></div>",
        html,
    )
    return PLAIN_BLOCKQUOTE.sub('<blockquote class="blockquote">', html)


def expand_tabs(html: str, context: RenderContext) -> str:
    """Stage 6: render ``<tab>`` groups."""
    return render_tabs(html, context)


def add_image_class(html: str, context: RenderContext) -> str:  # noqa: ARG001
    """Stage 7: append the responsive class to every ``<img>``."""

    def _repl(match: re.Match[str]) -> str:
        attrs = match.group("attrs")
        existing = CLASS_ATTR_PATTERN.search(attrs)
        if existing is None:
            attrs = f'{attrs} class="{IMAGE_CSS_CLASS}"'
        elif IMAGE_CSS_CLASS not in existing.group("value").split():
            quote = existing.group("quote")
            merged = f"{existing.group('value')} {IMAGE_CSS_CLASS}".strip()
            attrs = (
                f"{attrs[: existing.start()]}class={quote}{merged}{quote}"
                f"{attrs[existing.end() :]}"
            )
        return f"<img{attrs} />"

    return IMG_TAG_PATTERN.sub(_repl, html)


def inline_images(html: str, context: RenderContext) -> str:
    """Stage 8: embed allow-listed local images as base64 ``data:`` URIs."""
    if not context.base64_convert or context.images_root is None:
        return html
    images_root = context.images_root

    def _replace_src(match: re.Match[str]) -> str:
        data_uri = _image_data_uri(images_root, match.group("src"))
        if data_uri is None:
            return match.group(0)
        return f'src="{data_uri}"'

    def _repl(match: re.Match[str]) -> str:
        return SRC_ATTR_PATTERN.sub(_replace_src, match.group(0))

    return IMG_TAG_PATTERN.sub(_repl, html)


def _image_data_uri(images_root: Path, src: str) -> str | None:
    """Return a ``data:`` URI for ``src`` or ``None`` to keep the original."""
    if not src or src.startswith("data:") or urlsplit(src).scheme:
        return None
    path = images_root / unquote(urlsplit(src).path).lstrip("/")
    mime = INLINE_IMAGE_MIME_TYPES.get(path.suffix.lower().lstrip("."))
    if mime is None or not path.is_file():
        return None
    try:
        payload = path.read_bytes()
    except OSError as exc:
        logger.warning("Leaving image %s unchanged: %s", path, exc)
        return None
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


Stage = typ.Callable[[str, RenderContext], str]


@dc.dataclass(frozen=True, slots=True)
class PostProcessStage:
    """A named rewrite in the pipeline."""

    name: str
    apply: Stage


DEFAULT_STAGES: tuple[PostProcessStage, ...] = (
    PostProcessStage("links", rewrite_internal_links),
    PostProcessStage("escapes", unescape_backticks),
    PostProcessStage("tables", wrap_tables),
    PostProcessStage("alerts", render_alerts),
    PostProcessStage("blockquotes", style_blockquotes),
    PostProcessStage("tabs", expand_tabs),
    PostProcessStage("images", add_image_class),
    PostProcessStage("inline_images", inline_images),
)


class HtmlPostProcessor:
    """Run an ordered tuple of stages over one page body."""

    def __init__(self, stages: typ.Sequence[PostProcessStage] = DEFAULT_STAGES) -> None:
        self.stages = tuple(stages)

    def run(self, html: str, context: RenderContext) -> str:
        """Apply every stage in order.

        Raises
        ------
        PostProcessingError
            If a stage raises; the original exception is chained.
        """
        for stage in self.stages:
            try:
                html = stage.apply(html, context)
            except Exception as exc:
                raise PostProcessingError(stage.name) from exc
        return html


__all__ = [
    "ALERTS_BY_MARKER",
    "ALERT_KINDS",
    "DEFAULT_STAGES",
    "AlertKind",
    "HtmlPostProcessor",
    "PostProcessStage",
    "PostProcessingError",
    "RenderContext",
    "add_image_class",
    "expand_tabs",
    "inline_images",
    "render_alerts",
    "rewrite_internal_links",
    "style_blockquotes",
    "unescape_backticks",
    "wrap_tables",
]
