"""Cyclopts CLI entrypoint for building and querying docpages sites.

The ``docpages`` console script renders the versioned Markdown tree into HTML
(``docpages generate``), clears generated HTML (``docpages remove``), runs the
line search the site's search endpoint uses (``docpages search``) and
assembles one served page for a route (``docpages page``). Every option can
also be supplied through an ``INPUT_*`` environment variable so the commands
run unchanged in CI.

Examples
--------
Build every version and locale of the configured site:

>>> from docpages.cli import main
>>> main()  # doctest: +SKIP

Search the default version for a keyword:

>>> from docpages.cli import app
>>> app.run(["search", "install", "--locale", "en"])  # doctest: +SKIP
"""

from __future__ import annotations

import contextlib
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import SiteBuilder, remove_html_files
from .config import load_site_config
from .navigation import NavigationState, RouteKind
from .page import PageAssembler
from .search import DocumentSearch, encode_payload, search_payload
from .translations import TranslationCatalog, identity_translate

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .translations import Translate

DEFAULT_CONFIG = Path("docpages.yaml")

app = App(name="docpages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
LogLevelOption = typ.Annotated[
    str, Parameter(help="Logging level (DEBUG, INFO, ...)", env_var="INPUT_LOG_LEVEL")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


@contextlib.contextmanager
def _reporting_errors() -> typ.Iterator[None]:
    """Print configuration and filesystem errors and exit with status 1."""
    try:
        yield
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _load_translate(site_config: SiteConfig) -> Translate:
    if site_config.translations_file is None:
        return identity_translate
    return TranslationCatalog.from_file(site_config.translations_file)


@app.command(help="Render the Markdown tree of every version and locale to HTML.")
def generate(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Build the whole site and print the written paths.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docpages.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    log_level : str, optional
        Logging level for the build.

    Raises
    ------
    SystemExit
        With status 1 when the configuration is invalid or any page failed.
    """
    _configure_logging(log_level)
    with _reporting_errors():
        site_config = load_site_config(config)
        builder = SiteBuilder(site_config, translate=_load_translate(site_config))
        report = builder.run()
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    if report.sitemap is not None:
        print(f"wrote {_format_path(report.sitemap)}")
    if not report.ok:
        for failure in report.failures:
            print(f"failed {_format_path(failure.path)}: {failure.cause}", file=sys.stderr)
        raise SystemExit(1)


@app.command(help="Delete every generated HTML file below the html path.")
def remove(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Remove generated HTML pages, leaving the Markdown sources in place."""
    _configure_logging(log_level)
    with _reporting_errors():
        site_config = load_site_config(config)
        removed = remove_html_files(site_config.html_root)
    for path in removed:
        print(f"removed {_format_path(path)}")


@app.command(help="Search the rendered pages and print the JSON response.")
def search(
    query: str,
    *,
    version: typ.Annotated[
        str | None, Parameter(help="Version to search", env_var="INPUT_VERSION")
    ] = None,
    locale: typ.Annotated[
        str | None, Parameter(help="Locale to search", env_var="INPUT_LOCALE")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Print the search endpoint payload for ``query``.

    Parameters
    ----------
    query : str
        Whitespace separated keywords.
    version : str or None, optional
        Version to search; ``latest`` or omitted selects the default version.
    locale : str or None, optional
        Locale to search; defaults to the configured default locale.
    """
    _configure_logging(log_level)
    with _reporting_errors():
        site_config = load_site_config(config)
        searcher = DocumentSearch.from_config(site_config, version, locale)
        payload = search_payload(
            searcher,
            query,
            _load_translate(site_config),
            min_length=site_config.search.min_query_length,
        )
    print(encode_payload(payload).decode("utf-8"))


@app.command(help="Assemble one documentation page for a route.")
def page(
    route: typ.Annotated[
        RouteKind, Parameter(help="Route kind, e.g. 'page' or 'directory'")
    ] = RouteKind.INDEX_DEFAULT,
    *,
    version: str | None = None,
    locale: str | None = None,
    directory: str | None = None,
    name: typ.Annotated[str | None, Parameter(help="Page file name")] = None,
    request_path: str | None = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the page here instead of stdout")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Render the full page shell for a route, as a web handler would."""
    _configure_logging(log_level)
    with _reporting_errors():
        site_config = load_site_config(config)
        state = NavigationState.from_route(
            route,
            {"version": version, "locale": locale, "directory": directory, "page": name},
            site_config,
            request_path=request_path,
        )
        html = PageAssembler(site_config, _load_translate(site_config)).render(state)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html, encoding="utf-8")
    if output is None:
        print(html)
    else:
        print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docpages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
