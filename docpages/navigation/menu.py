"""Load and query the per-version navigation menu.

Menus are YAML lists of entries::

    - url: /installation.html
      label: Installation
    - url: /ui/index.html
      label: Ui
      folder: ui
      children:
        - url: /ui/resources.html
          label: Resources
          meta:
            title: UI resources

Entries are validated into :class:`MenuLeaf` and :class:`MenuFolder` values
when the file is loaded, so rendering code never sees a malformed entry.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from docpages._constants import MENU_FILENAME
from docpages.config import ConfigurationError

from .breadcrumbs import title_case_segment

if typ.TYPE_CHECKING:
    from docpages.config import SiteConfig

    from .state import NavigationState

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class MenuMeta:
    """Optional HTML meta values attached to a menu entry."""

    title: str | None = None
    keywords: str | None = None
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class MenuLeaf:
    """A menu entry pointing at a single page."""

    url: str
    label: str
    meta: MenuMeta = dc.field(default_factory=MenuMeta)

    @property
    def is_folder(self) -> bool:
        return False


@dc.dataclass(frozen=True, slots=True)
class MenuFolder:
    """A menu entry that owns a directory of pages.

    ``identifier`` is the ``folder`` key of the entry; the folder index maps
    its lowercased form to ``children``.
    """

    url: str
    label: str
    identifier: str
    children: tuple[MenuNode, ...] = ()
    meta: MenuMeta = dc.field(default_factory=MenuMeta)

    @property
    def is_folder(self) -> bool:
        return True


MenuNode = MenuLeaf | MenuFolder


def normalize_menu_url(url: str) -> str:
    """Return ``url`` with exactly one leading slash."""
    return f"/{url.strip().lstrip('/')}"


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_meta(value: object, location: str) -> MenuMeta:
    if value is None:
        return MenuMeta()
    if not isinstance(value, dict):
        msg = f"Menu entry {location} has a 'meta' value that is not a mapping."
        raise ConfigurationError(msg)
    return MenuMeta(
        title=_optional_text(value.get("title")),
        keywords=_optional_text(value.get("keywords")),
        description=_optional_text(value.get("description")),
    )


def _required_text(entry: typ.Mapping[str, typ.Any], key: str, location: str) -> str:
    value = _optional_text(entry.get(key))
    if value is None:
        msg = f"Menu entry {location} is missing the '{key}' key."
        raise ConfigurationError(msg)
    return value


def _parse_node(entry: object, location: str) -> MenuNode:
    if not isinstance(entry, dict):
        msg = f"Menu entry {location} must be a mapping."
        raise ConfigurationError(msg)
    url = normalize_menu_url(_required_text(entry, "url", location))
    label = _required_text(entry, "label", location)
    meta = _parse_meta(entry.get("meta"), location)
    raw_children = entry.get("children") or []
    if not isinstance(raw_children, list):
        msg = f"Menu entry {location} has a 'children' value that is not a list."
        raise ConfigurationError(msg)
    identifier = _optional_text(entry.get("folder"))
    if raw_children and identifier is None:
        msg = (
            f"Menu entry {location} has children but no 'folder' key; "
            "parent menu entries must declare a folder."
        )
        raise ConfigurationError(msg)
    if identifier is None:
        return MenuLeaf(url=url, label=label, meta=meta)
    children = tuple(
        _parse_node(child, f"{location}.children[{index}]")
        for index, child in enumerate(raw_children)
    )
    return MenuFolder(
        url=url, label=label, identifier=identifier, children=children, meta=meta
    )


def parse_menu(payload: object, source: str = "menu") -> tuple[MenuNode, ...]:
    """Validate a loaded YAML document into menu nodes.

    Raises
    ------
    ConfigurationError
        If the document is not a list or an entry is malformed.
    """
    if not isinstance(payload, list):
        msg = f"The {source} definition must be a list of menu entries."
        raise ConfigurationError(msg)
    return tuple(
        _parse_node(entry, f"{source}[{index}]") for index, entry in enumerate(payload)
    )


def build_folder_index(
    nodes: typ.Iterable[MenuNode],
) -> dict[str, tuple[MenuNode, ...]]:
    """Map every lowercased folder identifier to that folder's children.

    Raises
    ------
    ConfigurationError
        If two folders share an identifier.
    """
    index: dict[str, tuple[MenuNode, ...]] = {}

    def _walk(level: typ.Iterable[MenuNode]) -> None:
        for node in level:
            if not isinstance(node, MenuFolder):
                continue
            key = node.identifier.lower()
            if key in index:
                msg = f"Duplicate menu folder identifier '{node.identifier}'."
                raise ConfigurationError(msg)
            index[key] = node.children
            _walk(node.children)

    _walk(nodes)
    return index


def _iter_nodes(nodes: typ.Iterable[MenuNode]) -> typ.Iterator[MenuNode]:
    for node in nodes:
        yield node
        if isinstance(node, MenuFolder):
            yield from _iter_nodes(node.children)


class Menu:
    """Read-only navigation tree with folder and URL lookups."""

    def __init__(self, nodes: typ.Sequence[MenuNode]) -> None:
        self.nodes: tuple[MenuNode, ...] = tuple(nodes)
        self.folders = build_folder_index(self.nodes)
        self._by_url: dict[str, MenuNode] = {}
        for node in _iter_nodes(self.nodes):
            self._by_url.setdefault(node.url, node)

    def __iter__(self) -> typ.Iterator[MenuNode]:
        return iter(self.nodes)

    def current_level(self, directory: str) -> tuple[MenuNode, ...]:
        """Return the entries shown for ``directory``.

        The full lowercased directory path is tried first, then its last
        segment; otherwise the root level is returned.
        """
        key = directory.strip("/").lower()
        if not key:
            return self.nodes
        if self.folders.get(key):
            return self.folders[key]
        last = key.rsplit("/", 1)[-1]
        if self.folders.get(last):
            return self.folders[last]
        return self.nodes

    def find(self, url: str) -> MenuNode | None:
        """Return the entry registered for ``url``, if any."""
        return self._by_url.get(normalize_menu_url(url))

    def page_entry(self, state: NavigationState) -> MenuNode | None:
        """Return the entry for the page ``state`` points at."""
        entry = self.find(state.page_url)
        # Directory pages missing from the menu fall back to a root-level entry
        # with the same file name, so `/ui/index.html` can take `/index.html`.
        if entry is None and state.directory:
            entry = self.find(state.page)
        return entry

    def page_label(self, state: NavigationState) -> str:
        """Return the menu label of the page, or its title-cased file stem."""
        entry = self.page_entry(state)
        if entry is not None:
            return entry.label
        return title_case_segment(Path(state.page).stem)

    def page_meta(self, state: NavigationState) -> MenuMeta:
        entry = self.page_entry(state)
        return entry.meta if entry is not None else MenuMeta()


def menu_path(config: SiteConfig, version: str, locale: str) -> Path:
    """Return the menu file for ``version``, preferring a per-locale copy."""
    localized = config.menu_root / version / locale / MENU_FILENAME
    if localized.exists():
        return localized
    return config.menu_root / version / MENU_FILENAME


def load_menu(path: Path) -> Menu:
    """Load and validate a menu definition file.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigurationError
        If the definition is not a list or an entry is malformed.
    """
    if not path.exists():
        msg = f"Menu configuration file '{path}' does not exist."
        raise FileNotFoundError(msg)
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        payload = loader.load(handle)
    menu = Menu(parse_menu(payload, source=path.name))
    logger.debug("Loaded %d top-level menu entries from %s", len(menu.nodes), path)
    return menu


__all__ = [
    "Menu",
    "MenuFolder",
    "MenuLeaf",
    "MenuMeta",
    "MenuNode",
    "build_folder_index",
    "load_menu",
    "menu_path",
    "normalize_menu_url",
    "parse_menu",
]
