"""File-backed wiki services used by the navigation engine."""

from .acl import AccessControl, AccessLevel, AclRule, Viewer
from .headings import Heading, HeadingIndex
from .host import WikiHost
from .links import LinkRenderer
from .lists import build_list
from .metadata import MetadataStore
from .pages import PageNotFoundError, PageRepository

__all__ = [
    "AccessControl",
    "AccessLevel",
    "AclRule",
    "Heading",
    "HeadingIndex",
    "LinkRenderer",
    "MetadataStore",
    "PageNotFoundError",
    "PageRepository",
    "Viewer",
    "WikiHost",
    "build_list",
]
