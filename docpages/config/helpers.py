"""Utility helpers shared by the docpages configuration loader."""

from __future__ import annotations

import re
import typing as typ

from docpages._constants import LOCALE_PLACEHOLDER

from .models import ConfigurationError, SearchConfig

if typ.TYPE_CHECKING:
    from .models import SiteConfig

DUPLICATE_SLASHES = re.compile(r"/{2,}")


def _normalize_list(value: str | list[object] | None) -> list[str]:
    """Normalize a YAML list (or whitespace separated string) into strings."""
    if isinstance(value, str):
        return [segment for segment in value.split() if segment]
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return normalized
    return []


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return the non-empty string stored under ``key`` or raise."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"The configuration key '{key}' cannot be empty in your 'site' configuration."
        raise ConfigurationError(msg)
    return value


def _require_list(payload: typ.Mapping[str, typ.Any], key: str) -> list[str]:
    """Return the non-empty list stored under ``key`` or raise."""
    values = _normalize_list(payload.get(key))
    if not values:
        msg = f"The configuration key '{key}' cannot be empty in your 'site' configuration."
        raise ConfigurationError(msg)
    return values


def _as_bool(payload: typ.Mapping[str, typ.Any], key: str, *, default: bool) -> bool:
    """Return a boolean flag, rejecting values YAML did not parse as booleans."""
    value = payload.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"The configuration key '{key}' must be a boolean, got {value!r}."
        raise ConfigurationError(msg)
    return value


def _as_int(
    payload: typ.Mapping[str, typ.Any], key: str, *, default: int, section: str
) -> int:
    """Return a non-negative integer setting, naming ``section.key`` on error."""
    value = payload.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        msg = (
            f"The configuration key '{section}.{key}' must be a non-negative "
            f"integer, got {value!r}."
        )
        raise ConfigurationError(msg)
    return value


def _trim_path(value: str) -> str:
    """Strip leading and trailing slashes from a configured relative path."""
    return value.strip().strip("/")


def _build_search_config(payload: typ.Mapping[str, typ.Any] | None) -> SearchConfig:
    """Build a SearchConfig from the optional ``search`` mapping."""
    base = SearchConfig()
    if not payload:
        return base

    def _search_int(key: str, default: int) -> int:
        return _as_int(payload, key, default=default, section="search")

    return SearchConfig(
        highlight_open=payload.get("highlight_open", base.highlight_open),
        highlight_close=payload.get("highlight_close", base.highlight_close),
        min_query_length=_search_int("min_query_length", base.min_query_length),
        max_query_length=_search_int("max_query_length", base.max_query_length),
        max_keywords=_search_int("max_keywords", base.max_keywords),
    )


def resolve_base_url(site: SiteConfig, locale: str) -> str:
    """Return the public base URL for ``locale`` with a single trailing slash.

    The ``{locale}`` placeholder is substituted here and nowhere else. When
    ``remove_default_locale`` is set and ``locale`` is the default locale the
    placeholder (and a directly following dot, for subdomain layouts) is
    removed instead.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docpages.config import SiteConfig
    >>> site = SiteConfig(
    ...     root_path=Path("."), html_path="data/docs", config_path="config/docs",
    ...     http_prefix="https://", base_url="{locale}.example.com/docs/",
    ...     images_folder="public/images", available_versions=["1.0"],
    ...     default_version="1.0", available_locales=["en", "tr"],
    ...     default_locale="en", remove_default_locale=True,
    ... )
    >>> resolve_base_url(site, "en")
    'https://example.com/docs/'
    >>> resolve_base_url(site, "tr")
    'https://tr.example.com/docs/'
    """
    base_url = site.base_url
    if site.remove_default_locale and locale == site.default_locale:
        base_url = base_url.replace(f"{LOCALE_PLACEHOLDER}.", "").replace(
            LOCALE_PLACEHOLDER, ""
        )
    else:
        base_url = base_url.replace(LOCALE_PLACEHOLDER, locale)
    base_url = DUPLICATE_SLASHES.sub("/", base_url).rstrip("/")
    if not site.http_prefix and not base_url.startswith("/"):
        base_url = f"/{base_url}"
    if base_url == "/":
        base_url = ""
    return f"{site.http_prefix}{base_url}/"


__all__ = [
    "_as_bool",
    "_as_int",
    "_build_search_config",
    "_normalize_list",
    "_optional_str",
    "_require_list",
    "_require_str",
    "_trim_path",
    "resolve_base_url",
]
