"""Page id helpers shared by the wiki host and the navigation engine.

Page ids are colon-separated paths such as ``manual:install:linux``. The last
component is the page name; everything before it is the namespace.

Examples
--------
>>> clean_id(" Manual : Getting Started ")
'manual:getting_started'
>>> get_ns("manual:install:linux")
'manual:install'
>>> no_ns("manual:install:linux")
'linux'
"""

from __future__ import annotations

import re

from markdown.extensions.toc import slugify

HEADING_ID_SEPARATOR = "-"

_SEPARATORS = re.compile(r"[;/]")
_WHITESPACE = re.compile(r"\s+")
_INVALID = re.compile(r"[^\w:.\-]", re.UNICODE)
_REPEATED_COLONS = re.compile(r":{2,}")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")
_TRIM = re.compile(r"(^[:._\-]+|[:._\-]+$)")
_TRIM_COMPONENT = re.compile(r"[._\-]*:[._\-]*")


def clean_id(raw: str) -> str:
    """Normalize ``raw`` into a canonical page id.

    Lowercases, maps ``;`` and ``/`` to ``:``, turns whitespace into
    underscores, drops characters outside ``[\\w:.-]``, collapses repeated
    separators, and trims separators from both ends of the id and of every
    component.
    """
    value = raw.strip().lower()
    value = _SEPARATORS.sub(":", value)
    value = _WHITESPACE.sub("_", value)
    value = _INVALID.sub("_", value)
    value = _REPEATED_COLONS.sub(":", value)
    value = _REPEATED_UNDERSCORES.sub("_", value)
    value = _TRIM_COMPONENT.sub(":", value)
    value = _REPEATED_COLONS.sub(":", value)
    return _TRIM.sub("", value)


def clean_fragment(raw: str) -> str:
    """Normalize an in-page anchor the way heading ids are generated."""
    return slugify(raw, HEADING_ID_SEPARATOR)


def get_ns(page_id: str) -> str:
    """Return the namespace of ``page_id``; empty for root pages."""
    namespace, _sep, _name = page_id.rpartition(":")
    return namespace


def no_ns(page_id: str) -> str:
    """Return the last component of ``page_id``."""
    return page_id.rpartition(":")[2]


def id_to_path(page_id: str) -> str:
    """Return the slash-separated relative path for ``page_id``."""
    return page_id.replace(":", "/")


__all__ = [
    "HEADING_ID_SEPARATOR",
    "clean_fragment",
    "clean_id",
    "get_ns",
    "id_to_path",
    "no_ns",
]
