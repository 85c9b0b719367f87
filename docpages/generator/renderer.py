"""Utilities for rendering documentation Markdown into HTML fragments."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown

from .fenced_attributes import FencedAttributeExtension
from .tabs import TabMarkupExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
PARAGRAPH_WRAPPER_PATTERN = re.compile(r"</?p>")


class HtmlContentRenderer:
    """Render Markdown with the fenced attribute grammar and tab markup."""

    def __init__(self, extra_extensions: typ.Sequence[Extension | str] = ()) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        extra_extensions : Sequence[Extension | str], optional
            Additional Python-Markdown extensions appended after the built-in
            set (``tables``, ``sane_lists``, fenced attributes, tab markup).
        """
        self._extra_extensions = list(extra_extensions)

    def _build(self) -> Markdown:
        extensions: list[Extension | str] = [
            FencedAttributeExtension(),
            TabMarkupExtension(),
            "tables",
            "sane_lists",
            *self._extra_extensions,
        ]
        return Markdown(extensions=extensions)

    def markdown(self, text: str) -> str:
        """Render a Markdown document into HTML."""
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        return self._build().convert(normalized)

    def inline(self, text: str) -> str:
        """Render a one-line fragment and drop the wrapping paragraph tags."""
        return PARAGRAPH_WRAPPER_PATTERN.sub("", self.markdown(text.strip())).strip()

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        """Move fences indented by one to three spaces back to column zero."""
        return FENCED_INDENT_PATTERN.sub(r"\1", text)


__all__ = ["HtmlContentRenderer"]
