"""Shared dataclasses used by the navigation engine.

The link triple attached to each page, the outline entries produced by the
chain walker, and the option bundle of the outline directive all live here so
that parser, store, renderers, and walker agree on a single vocabulary.
"""

from __future__ import annotations

import dataclasses as dc
import enum


class RenderMode(enum.Enum):
    """How the current page render treats navigation data.

    ``COMMITTED`` renders persist the parsed triple as page metadata while
    ``PREVIEW`` renders only keep it in the request's preview cache.
    """

    COMMITTED = "committed"
    PREVIEW = "preview"


class EntryKind(enum.Enum):
    """Kind of line in an aggregated outline."""

    PAGE_ONLY = "pageonly"
    PAGE_WITH_HEADINGS = "pagewithheadings"
    HEADING = "heading"
    FIRST_HEADING = "firstheading"


@dc.dataclass(frozen=True, slots=True)
class PlainText:
    """An explicit text title typed by the author."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class ImageRef:
    """An embedded image used as a link title.

    Attributes
    ----------
    src : str
        Media reference as written inside ``{{...}}``.
    alt : str
        Alternative text; empty when none was given.
    width : int | None
        Requested width in pixels.
    height : int | None
        Requested height in pixels.
    """

    src: str
    alt: str = ""
    width: int | None = None
    height: int | None = None


@dc.dataclass(frozen=True, slots=True)
class UseDefault:
    """Marker title: derive the display title from the raw reference."""


LinkTitle = PlainText | ImageRef | UseDefault


@dc.dataclass(frozen=True, slots=True)
class LinkRef:
    """One navigation endpoint of a page.

    Attributes
    ----------
    canonical_id : str
        Fully resolved page id; empty when the link is absent.
    fragment : str
        Heading anchor inside the target page, empty if none.
    raw_id : str
        Reference text before resolution, used for default titles.
    title : LinkTitle
        Explicit text, an image, or :class:`UseDefault`.
    """

    canonical_id: str = ""
    fragment: str = ""
    raw_id: str = ""
    title: LinkTitle = dc.field(default_factory=UseDefault)

    @property
    def is_absent(self) -> bool:
        """Return True when the link should not be rendered."""
        return not self.canonical_id


@dc.dataclass(frozen=True, slots=True)
class NavigationTriple:
    """Previous, table-of-contents, and next links of one page."""

    previous: LinkRef = dc.field(default_factory=LinkRef)
    toc: LinkRef = dc.field(default_factory=LinkRef)
    next: LinkRef = dc.field(default_factory=LinkRef)


@dc.dataclass(slots=True)
class TocOptions:
    """Options of one outline directive occurrence.

    Attributes
    ----------
    start_id : str
        Page the chain walk starts from.
    include_headings : tuple[int, int] | None
        Inclusive heading level range to expand, or None to list pages only.
    numbered : bool
        Render ordered lists.
    use_heading_as_title : bool
        Use each page's first heading as its outline title.
    hide_page_links : bool
        Leave pages out and let their first heading stand in for them.
    previous_id : str | None
        Page expected as ``previous`` of the start page; None skips the check.
    """

    start_id: str
    include_headings: tuple[int, int] | None = None
    numbered: bool = False
    use_heading_as_title: bool = False
    hide_page_links: bool = False
    previous_id: str | None = None


@dc.dataclass(slots=True)
class OutlineEntry:
    """One line of an aggregated outline."""

    id: str
    namespace: str
    kind: EntryKind
    level: int
    title: str | None = None
    ordered: bool = False


@dc.dataclass(frozen=True, slots=True)
class Message:
    """User-visible notice attached to a render result.

    ``level`` follows the wiki convention: -1 error, 0 info, 1 success.
    """

    text: str
    level: int = -1


@dc.dataclass(slots=True)
class OutlineResult:
    """Outline entries keyed by id in walk order, plus emitted warnings."""

    entries: dict[str, OutlineEntry] = dc.field(default_factory=dict)
    messages: list[Message] = dc.field(default_factory=list)


__all__ = [
    "EntryKind",
    "ImageRef",
    "LinkRef",
    "LinkTitle",
    "Message",
    "NavigationTriple",
    "OutlineEntry",
    "OutlineResult",
    "PlainText",
    "RenderMode",
    "TocOptions",
    "UseDefault",
]
