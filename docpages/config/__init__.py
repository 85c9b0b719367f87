"""Load and validate site configuration YAML for docpages builds.

This subpackage parses the project's ``docpages.yaml`` file, checks that every
required key is present, and produces strongly typed dataclasses
(:class:`SiteConfig`, :class:`SearchConfig`) that the builder, the page
assembler and the search engine consume. The primary entry point is
:func:`load_site_config`; :func:`resolve_base_url` is the single place where
the ``{locale}`` placeholder of the public base URL is substituted.

Examples
--------
>>> from pathlib import Path
>>> from docpages.config import load_site_config, resolve_base_url
>>> site = load_site_config(Path("docpages.yaml"))  # doctest: +SKIP
>>> resolve_base_url(site, "en")  # doctest: +SKIP
'https://example.com/docs/'
"""

from .helpers import resolve_base_url
from .loader import load_site_config
from .models import ConfigurationError, SearchConfig, SiteConfig

__all__ = [
    "ConfigurationError",
    "SearchConfig",
    "SiteConfig",
    "load_site_config",
    "resolve_base_url",
]
