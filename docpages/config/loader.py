"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docpages._constants import DEFAULT_ANCHOR_QUERY

from .helpers import (
    _as_bool,
    _build_search_config,
    _optional_str,
    _require_list,
    _require_str,
    _trim_path,
)
from .models import ConfigurationError, SiteConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docpages.yaml``). Relative paths inside the file are resolved
        against the file's parent directory unless ``root_path`` is given.

    Returns
    -------
    SiteConfig
        Parsed site configuration with versions, locales, URL settings and
        feature flags.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ConfigurationError
        If the top-level structure is not a mapping, the ``site`` section is
        missing, or a required key is empty. The message names the key.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docpages.config import load_site_config
    >>> config = load_site_config(Path("docpages.yaml"))  # doctest: +SKIP
    >>> config.available_versions  # doctest: +SKIP
    ['1.0', '2.0']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigurationError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    site_raw = raw.get("site")
    if not isinstance(site_raw, dict):
        msg = "The configuration key 'site' not found in your config file."
        raise ConfigurationError(msg)
    return _build_site_config(site_raw, base_dir=path.resolve().parent)


def _build_site_config(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> SiteConfig:
    """Validate the ``site`` mapping and build a SiteConfig."""
    root_value = _optional_str(payload.get("root_path"))
    root_path = Path(root_value) if root_value else base_dir
    if not root_path.is_absolute():
        root_path = (base_dir / root_path).resolve()

    versions = _require_list(payload, "available_versions")
    locales = _require_list(payload, "available_locales")
    default_version = _optional_str(payload.get("default_version")) or versions[0]
    if default_version not in versions:
        msg = (
            f"The configuration key 'default_version' must be one of "
            f"{', '.join(versions)}, got '{default_version}'."
        )
        raise ConfigurationError(msg)
    default_locale = _optional_str(payload.get("default_locale")) or locales[0]
    if default_locale not in locales:
        msg = (
            f"The configuration key 'default_locale' must be one of "
            f"{', '.join(locales)}, got '{default_locale}'."
        )
        raise ConfigurationError(msg)

    translations = _optional_str(payload.get("translations_file"))
    translations_file = None
    if translations:
        translations_file = Path(translations)
        if not translations_file.is_absolute():
            translations_file = root_path / translations_file

    return SiteConfig(
        root_path=root_path,
        html_path=_trim_path(_require_str(payload, "html_path")),
        config_path=_trim_path(_require_str(payload, "config_path")),
        http_prefix=_optional_str(payload.get("http_prefix")) or "",
        base_url=_require_str(payload, "base_url"),
        images_folder=_trim_path(_require_str(payload, "images_folder")),
        available_versions=versions,
        default_version=default_version,
        available_locales=locales,
        default_locale=default_locale,
        remove_default_locale=_as_bool(
            payload, "remove_default_locale", default=False
        ),
        base64_convert=_as_bool(payload, "base64_convert", default=False),
        build_sitemap=_as_bool(payload, "build_sitemap", default=False),
        xml_path=_trim_path(
            _optional_str(payload.get("xml_path")) or "public/sitemap.xml"
        ),
        anchor_parse_query=_optional_str(payload.get("anchor_parse_query"))
        or DEFAULT_ANCHOR_QUERY,
        anchor_generations=_as_bool(payload, "anchor_generations", default=True),
        anchors_for_index_pages=_as_bool(
            payload, "anchors_for_index_pages", default=False
        ),
        translations_file=translations_file,
        search=_build_search_config(payload.get("search")),
    )


__all__ = ["load_site_config"]
