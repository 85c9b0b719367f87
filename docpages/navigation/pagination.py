"""Previous/next links within the current menu level."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .menu import MenuFolder, normalize_menu_url

if typ.TYPE_CHECKING:
    from .menu import Menu, MenuNode
    from .state import PageContext


@dc.dataclass(frozen=True, slots=True)
class Pagination:
    """Adjacent entries of the current page; either side may be ``None``."""

    prev: MenuNode | None = None
    next: MenuNode | None = None  # noqa: A003 - mirrors the prev/next pair


def flatten_level(nodes: typ.Iterable[MenuNode]) -> list[MenuNode]:
    """Return ``nodes`` depth first, each entry followed by its descendants."""
    flat: list[MenuNode] = []
    for node in nodes:
        flat.append(node)
        if isinstance(node, MenuFolder):
            flat.extend(flatten_level(node.children))
    return flat


def build_pagination(context: PageContext, menu: Menu) -> Pagination:
    """Return the entries before and after the current page.

    The current page is located by comparing the request path (version
    stripped) and the page URL against each entry of the current level.
    """
    state = context.state
    entries = flatten_level(menu.current_level(state.directory))
    candidates = {context.current_path(), state.page_url}
    for index, entry in enumerate(entries):
        if normalize_menu_url(entry.url) not in candidates:
            continue
        prev = entries[index - 1] if index > 0 else None
        following = entries[index + 1] if index + 1 < len(entries) else None
        return Pagination(prev=prev, next=following)
    return Pagination()


__all__ = ["Pagination", "build_pagination", "flatten_level"]
