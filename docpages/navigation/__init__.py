"""Menu, breadcrumb, pagination and sidebar model for documentation pages."""

from __future__ import annotations

from .breadcrumbs import Crumb, build_breadcrumbs, title_case_segment
from .menu import (
    Menu,
    MenuFolder,
    MenuLeaf,
    MenuMeta,
    MenuNode,
    build_folder_index,
    load_menu,
    menu_path,
    parse_menu,
)
from .pagination import Pagination, build_pagination, flatten_level
from .sidebar import (
    SidebarHeader,
    SidebarItem,
    build_sidebar,
    should_show_anchors,
    sidebar_header,
)
from .state import INDEX_ROUTES, NavigationState, PageContext, RouteKind

__all__ = [
    "INDEX_ROUTES",
    "Crumb",
    "Menu",
    "MenuFolder",
    "MenuLeaf",
    "MenuMeta",
    "MenuNode",
    "NavigationState",
    "PageContext",
    "Pagination",
    "RouteKind",
    "SidebarHeader",
    "SidebarItem",
    "build_breadcrumbs",
    "build_folder_index",
    "build_pagination",
    "build_sidebar",
    "flatten_level",
    "load_menu",
    "menu_path",
    "parse_menu",
    "sidebar_header",
    "should_show_anchors",
    "title_case_segment",
]
