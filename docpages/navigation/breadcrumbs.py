"""Breadcrumb trail for a documentation page."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from docpages._constants import INDEX_PAGE
from docpages.translations import identity_translate

from .state import RouteKind

if typ.TYPE_CHECKING:
    from docpages.translations import Translate

    from .menu import Menu
    from .state import PageContext


@dc.dataclass(frozen=True, slots=True)
class Crumb:
    """One breadcrumb; ``href`` is ``None`` for plain-text crumbs."""

    label: str
    href: str | None = None
    active: bool = False


def title_case_segment(segment: str) -> str:
    """Return a display label for a dash-separated path segment.

    Examples
    --------
    >>> title_case_segment("getting-started")
    'Getting Started'
    """
    return " ".join(
        f"{token[:1].upper()}{token[1:]}" for token in segment.split("-") if token
    )


def build_breadcrumbs(
    context: PageContext,
    menu: Menu,
    translate: Translate = identity_translate,
) -> tuple[Crumb, ...]:
    """Return the trail from the version index down to the current page.

    The last crumb always carries the page label.
    """
    state = context.state
    page_label = menu.page_label(state)
    crumbs = [Crumb(translate("Index", state.locale), context.version_index_url)]

    if state.route_kind is RouteKind.DIRECTORY:
        segments = [segment for segment in state.directory.split("/") if segment]
        for position, segment in enumerate(segments):
            label = title_case_segment(segment)
            if position == len(segments) - 1 and state.page == INDEX_PAGE:
                crumbs.append(Crumb(label, active=True))
                continue
            prefix = "/".join(segments[: position + 1])
            crumbs.append(Crumb(label, context.url_for(f"/{prefix}/{INDEX_PAGE}")))
    else:
        crumbs.append(Crumb(page_label, active=True))

    if crumbs[-1].label.strip() != page_label.strip():
        crumbs.append(Crumb(page_label, active=True))
    return tuple(crumbs)


__all__ = ["Crumb", "build_breadcrumbs", "title_case_segment"]
