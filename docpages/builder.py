"""Render the Markdown source tree into HTML pages and a sitemap.

:class:`SiteBuilder` walks ``{html_path}/{version}/{locale}`` for every
configured version and locale, renders each ``.md`` file with
:class:`~docpages.generator.renderer.HtmlContentRenderer`, runs the
post-processing pipeline and writes the ``.html`` file next to its source.
Files are processed in sorted order so the sitemap is deterministic.

Example
-------
>>> from pathlib import Path
>>> from docpages.config import load_site_config
>>> config = load_site_config(Path("docpages.yaml"))  # doctest: +SKIP
>>> report = SiteBuilder(config).run()  # doctest: +SKIP
>>> report.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
from pathlib import Path

from docpages._constants import HTML_SUFFIX, SOURCE_SUFFIX
from docpages.config import resolve_base_url
from docpages.generator.link_rewriter import LinkContext
from docpages.generator.postprocess import HtmlPostProcessor, RenderContext
from docpages.generator.renderer import HtmlContentRenderer
from docpages.templating import template_environment
from docpages.translations import identity_translate

if typ.TYPE_CHECKING:
    from docpages.config import SiteConfig
    from docpages.translations import Translate

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class SourceDocument:
    """One Markdown file of the source tree.

    Attributes
    ----------
    version, locale : str
        Content tree the file belongs to.
    directory : str
        Slash-separated directory below the locale root, empty at the top.
    filename : str
        Markdown file name, e.g. ``resources.md``.
    root : Path
        Locale content root (``{html_root}/{version}/{locale}``).
    """

    version: str
    locale: str
    directory: str
    filename: str
    root: Path

    @property
    def source_path(self) -> Path:
        if self.directory:
            return self.root / self.directory / self.filename
        return self.root / self.filename

    @property
    def output_path(self) -> Path:
        return self.source_path.with_suffix(HTML_SUFFIX)

    @property
    def url_path(self) -> str:
        """Return the page path relative to the version URL (``ui/resources.html``)."""
        name = f"{Path(self.filename).stem}{HTML_SUFFIX}"
        return f"{self.directory}/{name}" if self.directory else name


class PageBuildError(RuntimeError):
    """Raised (and collected) when a single page fails to build."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed to build {path}: {cause}")
        self.path = path
        self.cause = cause


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    loc: str
    lastmod: str
    changefreq: str = "weekly"
    priority: str = "1"


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of one :meth:`SiteBuilder.run`."""

    written: list[Path] = dc.field(default_factory=list)
    failures: list[PageBuildError] = dc.field(default_factory=list)
    removed: list[Path] = dc.field(default_factory=list)
    sitemap: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.failures


def iter_source_documents(
    config: SiteConfig, version: str, locale: str
) -> typ.Iterator[SourceDocument]:
    """Yield the Markdown files of one content tree in sorted path order."""
    root = config.content_root(version, locale)
    if not root.is_dir():
        logger.warning("No content directory for %s/%s at %s", version, locale, root)
        return
    sources = sorted(
        (path for path in root.rglob(f"*{SOURCE_SUFFIX}") if path.is_file()),
        key=lambda path: path.relative_to(root).as_posix(),
    )
    for path in sources:
        directory = path.parent.relative_to(root).as_posix()
        yield SourceDocument(
            version=version,
            locale=locale,
            directory="" if directory == "." else directory,
            filename=path.name,
            root=root,
        )


def remove_html_files(root: Path) -> list[Path]:
    """Delete every ``.html`` file below ``root`` and return the removed paths."""
    if not root.is_dir():
        return []
    removed: list[Path] = []
    for path in sorted(root.rglob(f"*{HTML_SUFFIX}")):
        if path.is_file():
            path.unlink()
            removed.append(path)
    logger.info("Removed %d HTML files under %s", len(removed), root)
    return removed


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(text, encoding="utf-8")
    tmp_path.replace(path)


def build_sitemap(entries: typ.Sequence[SitemapEntry], output: Path) -> Path:
    """Render ``entries`` through ``sitemap.xml.jinja`` and write them."""
    template = template_environment().get_template("sitemap.xml.jinja")
    _write_atomic(output, template.render(entries=entries))
    logger.info("Wrote sitemap with %d URLs to %s", len(entries), output)
    return output


class SiteBuilder:
    """Build every version and locale of the documentation site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        translate: Translate = identity_translate,
        renderer: HtmlContentRenderer | None = None,
        post_processor: HtmlPostProcessor | None = None,
        clock: typ.Callable[[], dt.datetime] | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Site definition.
        translate : Translate, optional
            Lookup used for alert titles.
        renderer : HtmlContentRenderer, optional
            Markdown renderer; a default instance is created when omitted.
        post_processor : HtmlPostProcessor, optional
            Pipeline applied to every rendered body.
        clock : Callable[[], datetime], optional
            Source of the sitemap ``lastmod`` timestamp.
        """
        self.config = config
        self.translate = translate
        self.renderer = renderer or HtmlContentRenderer()
        self.post_processor = post_processor or HtmlPostProcessor()
        self.clock = clock or (lambda: dt.datetime.now(dt.UTC))

    def render_context(self, version: str, locale: str) -> RenderContext:
        """Return the post-processing inputs for one content tree."""
        return RenderContext(
            links=LinkContext(resolve_base_url(self.config, locale), version),
            locale=locale,
            renderer=self.renderer,
            translate=self.translate,
            images_root=self.config.images_root,
            base64_convert=self.config.base64_convert,
        )

    def render_document(self, document: SourceDocument, context: RenderContext) -> str:
        """Return the post-processed HTML body of ``document``."""
        markdown_source = document.source_path.read_text(encoding="utf-8")
        html = self.renderer.markdown(markdown_source)
        return self.post_processor.run(html, context)

    def run(self) -> BuildReport:
        """Remove stale output, build every page and write the sitemap.

        Returns
        -------
        BuildReport
            Written paths, removed paths and collected per-page failures.

        Notes
        -----
        A page that fails to render is recorded in
        :attr:`BuildReport.failures` and no file is written for it; the
        remaining pages are still built.
        """
        report = BuildReport(removed=remove_html_files(self.config.html_root))
        lastmod = self.clock().isoformat(timespec="seconds")
        entries: list[SitemapEntry] = []
        for version in self.config.available_versions:
            for locale in self.config.available_locales:
                context = self.render_context(version, locale)
                for document in iter_source_documents(self.config, version, locale):
                    try:
                        html = self.render_document(document, context)
                        _write_atomic(document.output_path, html)
                    except Exception as exc:  # noqa: BLE001 - collected per page
                        failure = PageBuildError(document.source_path, exc)
                        logger.error("%s", failure)
                        report.failures.append(failure)
                        continue
                    report.written.append(document.output_path)
                    entries.append(
                        SitemapEntry(
                            loc=f"{context.links.prefix}{document.url_path}",
                            lastmod=lastmod,
                        )
                    )
        if self.config.build_sitemap:
            report.sitemap = build_sitemap(entries, self.config.sitemap_output)
        return report


__all__ = [
    "BuildReport",
    "PageBuildError",
    "SiteBuilder",
    "SitemapEntry",
    "SourceDocument",
    "build_sitemap",
    "iter_source_documents",
    "remove_html_files",
]
