"""Locale string lookup used for alert titles and navigation labels.

Rendering code only depends on the :class:`Translate` call signature
``translate(key, locale) -> str``. :class:`TranslationCatalog` is the default
implementation: a YAML mapping of ``locale -> key -> text`` where a missing
key (or locale) returns the key itself.

Examples
--------
>>> catalog = TranslationCatalog({"tr": {"Note": "Not"}})
>>> catalog("Note", "tr")
'Not'
>>> catalog("Note", "en")
'Note'
"""

from __future__ import annotations

import logging
import typing as typ

from ruamel.yaml import YAML

from docpages.config import ConfigurationError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class Translate(typ.Protocol):
    """Callable resolving a UI string key for a locale."""

    def __call__(self, key: str, locale: str) -> str: ...


class TranslationCatalog:
    """In-memory ``locale -> key -> text`` lookup with identity fallback."""

    def __init__(self, messages: typ.Mapping[str, typ.Mapping[str, str]] | None = None):
        self._messages: dict[str, dict[str, str]] = {
            str(locale): {str(key): str(text) for key, text in entries.items()}
            for locale, entries in (messages or {}).items()
        }

    def __call__(self, key: str, locale: str) -> str:
        """Return the translation of ``key`` for ``locale`` or ``key`` itself."""
        return self._messages.get(locale, {}).get(key, key)

    @property
    def locales(self) -> list[str]:
        """Return the locales with at least one message."""
        return sorted(self._messages)

    @classmethod
    def from_file(cls, path: Path) -> TranslationCatalog:
        """Load a catalog from a YAML mapping of locales to messages.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist.
        ConfigurationError
            If the document is not a mapping of mappings.
        """
        if not path.exists():
            msg = f"Translations file '{path}' not found."
            raise FileNotFoundError(msg)
        loader = YAML(typ="safe")
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict) or not all(
            isinstance(entries, dict) for entries in loaded.values()
        ):
            msg = f"Translations file '{path}' must map each locale to a mapping."
            raise ConfigurationError(msg)
        logger.debug("Loaded translations for %d locales from %s", len(loaded), path)
        return cls(loaded)


def identity_translate(key: str, locale: str) -> str:  # noqa: ARG001 - protocol shape
    """Return ``key`` unchanged; used when no catalog is configured."""
    return key


__all__ = ["Translate", "TranslationCatalog", "identity_translate"]
