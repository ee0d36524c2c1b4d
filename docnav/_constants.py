"""Common literal values used across docnav.

These constants keep metadata keys, file extensions, and user-facing message
templates centralized so the parser, renderers, and tests can import the same
values without drifting. Intended for internal use within the docnav package.

Examples
--------
>>> from docnav import _constants
>>> _constants.NAVIGATION_META_KEY
'docnavigation'
>>> _constants.MESSAGES["dontlinkback"].format(page="a:b", previous="a:a")
'Page a:b does not link back to previous page a:a'
"""

NAVIGATION_META_KEY = "docnavigation"
FIRST_HEADING_META_KEY = "title"
HEADINGS_META_KEY = "headings"
REFERENCES_META_KEY = "relation_references"

PAGE_EXTENSION = ".md"
META_EXTENSION = ".meta"
HTML_EXTENSION = ".html"

OUTLINE_LIST_CLASS = "pagnavtoc"

MESSAGES = {
    "dontlinkback": "Page {page} does not link back to previous page {previous}",
    "recursionprevented": (
        "Recursion prevented: page {page} links to {next}, "
        "which was already visited"
    ),
}
