r"""Fenced code blocks with a language token and an attribute block.

The opening fence accepts a language followed by a small attribute grammar so
that Prism.js plugins can be configured from Markdown::

    ```bash [command-line] data-user=root data-output="2, 4-8"
    ls -la
    ```

renders as ``<pre><code class="language-bash command-line" data-user="root"
data-output="2, 4-8">``.

Grammar
-------
Tokens are whitespace separated. Each token is ``key=value``,
``key="quoted value"``, ``key='quoted value'``, a bare ``key`` or a section
header ``[name]``. Keys before the first header belong to the anonymous root
section. Named sections become extra CSS classes on ``<code>``. A key written
``name[index]`` collects an ``index -> value`` mapping and ``name[]`` appends
to a sequence. Empty values and bare keys become the ``"null"`` sentinel,
which is never emitted. Malformed input never raises.

Examples
--------
>>> info = parse_fence_info('bash data-line="2,4-8"')
>>> info.classes
['language-bash']
>>> info.html_attributes()
{'data-line': '2,4-8'}
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from html import escape

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from docpages._constants import NULL_ATTRIBUTE_VALUE

if typ.TYPE_CHECKING:
    from markdown import Markdown

logger = logging.getLogger(__name__)

AttributeValue = str | list[str] | dict[str, str]

FENCE_PATTERN = re.compile(
    r"(?P<fence>^(?:~{3,}|`{3,}))(?!(?<=`)[^\n]*`)[ ]*(?P<info>[^\n]*?)[ ]*\n"
    r"(?P<code>.*?)(?<=\n)(?P=fence)[ ]*$",
    re.MULTILINE | re.DOTALL,
)
TOKEN_PATTERN = re.compile(
    r"""
    (?P<section>\[[^\[\]\s=]+\])(?=\s|$)
    | (?P<key>[^\s=]+)=(?P<value>"[^"]*"|'[^']*'|\S*)
    | (?P<bare>\S+)
    """,
    re.VERBOSE,
)
CONTAINER_KEY_PATTERN = re.compile(r"^(?P<name>[^\[\]]+)\[(?P<index>[^\[\]]*)\]$")
ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z_:][-A-Za-z0-9_:.]*$")
ROOT_SECTION = ""


@dc.dataclass(slots=True)
class FenceInfo:
    """Parsed info string of an opening fence.

    Attributes
    ----------
    language : str or None
        Language token (the first word), or ``None`` when absent.
    sections : dict[str, dict[str, AttributeValue]]
        ``section -> key -> value``; the root section is keyed by ``""``.
    """

    language: str | None = None
    sections: dict[str, dict[str, AttributeValue]] = dc.field(default_factory=dict)

    @property
    def classes(self) -> list[str]:
        """Return ``language-X`` followed by every named section."""
        classes = [f"language-{self.language}"] if self.language else []
        classes.extend(name for name in self.sections if name != ROOT_SECTION)
        extra = self.sections.get(ROOT_SECTION, {}).get("class")
        if isinstance(extra, str) and extra != NULL_ATTRIBUTE_VALUE:
            classes.extend(extra.split())
        return classes

    def html_attributes(self) -> dict[str, str]:
        """Flatten every section into HTML attributes, dropping null values."""
        attributes: dict[str, str] = {}
        for entries in self.sections.values():
            for key, value in entries.items():
                if key == "class":
                    continue
                for name, text in _flatten(key, value):
                    if not ATTRIBUTE_NAME_PATTERN.match(name):
                        logger.debug("Dropping invalid fence attribute %r", name)
                        continue
                    attributes[name] = text
        return attributes


def _flatten(key: str, value: AttributeValue) -> list[tuple[str, str]]:
    """Return the ``(attribute, value)`` pairs produced by one parsed key."""
    match value:
        case list():
            joined = ",".join(item for item in value if item != NULL_ATTRIBUTE_VALUE)
            return [(key, joined)] if joined else []
        case dict():
            return [
                (f"{key}-{index}", item)
                for index, item in value.items()
                if item != NULL_ATTRIBUTE_VALUE
            ]
        case _:
            return [] if value == NULL_ATTRIBUTE_VALUE else [(key, value)]


def _unquote(value: str) -> str:
    """Strip one pair of matching quotes and normalize empties to the sentinel."""
    text = value.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1]
    return text or NULL_ATTRIBUTE_VALUE


def parse_fence_attributes(text: str) -> dict[str, dict[str, AttributeValue]]:
    """Parse an attribute string into ``section -> key -> value``.

    Parameters
    ----------
    text : str
        Everything after the language token on the opening fence line.

    Returns
    -------
    dict[str, dict[str, AttributeValue]]
        Sections in first-seen order. A header with no keys still yields an
        (empty) section so that it contributes a CSS class.

    Examples
    --------
    >>> parse_fence_attributes("[line-numbers] data-start=5 tags[]=a tags[]=b")
    {'line-numbers': {'data-start': '5', 'tags': ['a', 'b']}}
    >>> parse_fence_attributes("[broken data-x=1")
    {'': {'[broken': 'null', 'data-x': '1'}}
    """
    sections: dict[str, dict[str, AttributeValue]] = {}
    current = ROOT_SECTION
    for match in TOKEN_PATTERN.finditer(text):
        if match.group("section"):
            current = match.group("section")[1:-1]
            sections.setdefault(current, {})
            continue
        if match.group("key") is not None:
            key = match.group("key")
            value = _unquote(match.group("value"))
        else:
            key = match.group("bare")
            value = NULL_ATTRIBUTE_VALUE
        _store(sections.setdefault(current, {}), key, value)
    return sections


def _store(entries: dict[str, AttributeValue], key: str, value: str) -> None:
    """Store ``value`` under ``key``, building containers for ``[]`` keys."""
    container = CONTAINER_KEY_PATTERN.match(key)
    if container is None:
        entries[key] = value
        return
    name = container.group("name")
    index = container.group("index")
    if index:
        existing = entries.get(name)
        mapping = existing if isinstance(existing, dict) else {}
        mapping[index] = value
        entries[name] = mapping
    else:
        existing = entries.get(name)
        sequence = existing if isinstance(existing, list) else []
        sequence.append(value)
        entries[name] = sequence


def parse_fence_info(info: str) -> FenceInfo:
    """Split a fence info string into its language token and attributes."""
    stripped = info.strip()
    if not stripped:
        return FenceInfo()
    language, *remainder = stripped.split(None, 1)
    rest = remainder[0] if remainder else ""
    if "=" in language or language.startswith("["):
        return FenceInfo(sections=parse_fence_attributes(stripped))
    return FenceInfo(language=language, sections=parse_fence_attributes(rest))


def render_code_block(code: str, info: FenceInfo) -> str:
    """Return the ``<pre><code>`` markup for one fenced block."""
    classes = info.classes
    class_attr = f' class="{escape(" ".join(classes), quote=True)}"' if classes else ""
    extra = "".join(
        f' {name}="{escape(value, quote=True)}"'
        for name, value in info.html_attributes().items()
    )
    return f"<pre><code{class_attr}{extra}>{escape(code, quote=False)}</code></pre>"


class FencedAttributeExtension(Extension):
    """Register the attribute-aware fenced code preprocessor."""

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the fenced block preprocessor ahead of raw HTML handling."""
        md.registerExtension(self)
        md.preprocessors.register(
            FencedAttributePreprocessor(md), "docpages_fenced_attributes", 25
        )


class FencedAttributePreprocessor(Preprocessor):
    """Replace fenced blocks with stashed ``<pre><code>`` markup."""

    def run(self, lines: list[str]) -> list[str]:
        """Convert every fenced block in ``lines``."""
        text = "\n".join(lines)
        while True:
            match = FENCE_PATTERN.search(text)
            if match is None:
                break
            info = parse_fence_info(match.group("info"))
            html = render_code_block(match.group("code"), info)
            placeholder = self.md.htmlStash.store(html)
            text = f"{text[: match.start()]}\n{placeholder}\n{text[match.end() :]}"
        return text.split("\n")


__all__ = [
    "FENCE_PATTERN",
    "FenceInfo",
    "FencedAttributeExtension",
    "FencedAttributePreprocessor",
    "parse_fence_attributes",
    "parse_fence_info",
    "render_code_block",
]
