"""Shared Jinja environment for docpages templates."""

from __future__ import annotations

import functools
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@functools.cache
def template_environment(templates_dir: Path | None = None) -> Environment:
    """Return a cached Jinja environment rooted at ``templates_dir``.

    Defaults to the ``docpages/templates`` directory shipped with the package.
    HTML and XML templates are autoescaped; callers wrap pre-rendered
    fragments in :class:`markupsafe.Markup`.
    """
    return Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


__all__ = ["TEMPLATES_DIR", "template_environment"]
