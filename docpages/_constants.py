"""Common literal values used across docpages.

These constants keep filenames, CSS hooks, and sentinel values centralized so
templates, generators, and tests can import the same values without drifting.
Intended for internal use within the docpages package.

Examples
--------
>>> from docpages import _constants
>>> _constants.MENU_FILENAME
'navigation.yaml'
>>> "png" in _constants.INLINE_IMAGE_MIME_TYPES
True
"""

INDEX_PAGE = "index.html"
LATEST_VERSION_NAME = "latest"
LOCALE_PLACEHOLDER = "{locale}"
MENU_FILENAME = "navigation.yaml"
SOURCE_SUFFIX = ".md"
HTML_SUFFIX = ".html"

NULL_ATTRIBUTE_VALUE = "null"
DEFAULT_ANCHOR_QUERY = "h2, h3, h4, h5, h6"

IMAGE_CSS_CLASS = "img-fluid"
TABLE_WRAPPER_CLASS = "table-responsive"
INLINE_IMAGE_MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
}

DEFAULT_HIGHLIGHT_OPEN = '<span style="background-color: yellow;">'
DEFAULT_HIGHLIGHT_CLOSE = "</span>"
MIN_SEARCH_QUERY_LENGTH = 3

FOLDER_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" height="20px" viewBox="0 -960 960 960"'
    ' width="20px" fill="currentColor"><path d="M168-192q-29 0-50.5-21.5T96-264v-432'
    "q0-29.7 21.5-50.85Q139-768 168-768h216l96 96h312q29.7 0 50.85 21.15Q864-629.7 "
    "864-600v336q0 29-21.15 50.5T792-192H168Zm0-72h624v-336H450l-96-96H168v432Zm0 "
    '0v-432 432Z"/></svg>'
)
