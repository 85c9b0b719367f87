"""Build versioned, localized documentation sites from Markdown.

This package exposes the CLI entry points used by the ``docpages`` console
script to render the Markdown tree, search the rendered pages and assemble
served pages.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docpages import main
>>> main()  # doctest: +SKIP
>>> from docpages import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
