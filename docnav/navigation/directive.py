r"""Parse the inline navigation and outline directives.

Two directives are recognised in page sources:

``<- previous ^ toc ^ next ->`` (or ``<< previous ^ toc ^ next >>``)
    Declares the page's navigation triple. Every field is a page reference
    optionally followed by ``|title``; the title may be an embedded image
    ``{{media.png?64x64|alt}}``.

``<doctoc start=..., includeheadings=2-3, numbers=1, useheading=1, hidepagelink=1>``
    Renders the aggregated outline of the chain starting at ``start``.

Example
-------
>>> NAVIGATION_PATTERN.fullmatch("<- intro ^ ^ setup|Set up ->") is not None
True
>>> OUTLINE_PATTERN.fullmatch("<doctoc start=intro, includeheadings=2-3>") is not None
True
"""

from __future__ import annotations

import logging
import re
import typing as typ

from docnav._constants import REFERENCES_META_KEY
from docnav.wiki.ids import get_ns

from .models import (
    ImageRef,
    LinkRef,
    LinkTitle,
    NavigationTriple,
    PlainText,
    TocOptions,
    UseDefault,
)
from .resolver import PageResolver, namespace_head_candidates

if typ.TYPE_CHECKING:
    from docnav.wiki.host import WikiHost

    from .context import RenderContext
    from .store import NavigationStore

logger = logging.getLogger(__name__)

NAVIGATION_PATTERN = re.compile(
    r"<-[^\n]*\^[^\n]*\^[^\n]*->|<<[^\n]*\^[^\n]*\^[^\n]*>>"
)
OUTLINE_PATTERN = re.compile(r"<doctoc\b.*?>")
IMAGE_TITLE_PATTERN = re.compile(r"^\{\{[^}]+}}$")
IMAGE_SIZE_PATTERN = re.compile(r"(\d+)(?:x(\d+))?")
LEADING_INT_PATTERN = re.compile(r"^\s*(\d+)")

DELIMITER_WIDTH = 2
OUTLINE_PREFIX = "<doctoc"
TOC_SLOT = 1
SLOT_COUNT = 3


def parse_image_title(text: str) -> ImageRef:
    """Parse ``{{src?WxH|alt}}`` into an :class:`ImageRef`."""
    inner = text.strip()[2:-2]
    source, _sep, alt = inner.partition("|")
    src, _sep, params = source.strip().partition("?")
    width = height = None
    size = IMAGE_SIZE_PATTERN.search(params)
    if size:
        width = int(size.group(1))
        height = int(size.group(2)) if size.group(2) else None
    return ImageRef(src=src.strip(), alt=alt.strip(), width=width, height=height)


def _parse_title(text: str | None) -> LinkTitle:
    """Return the title variant of one directive field."""
    if text is None:
        return UseDefault()
    stripped = text.strip()
    if not stripped:
        return UseDefault()
    if IMAGE_TITLE_PATTERN.match(stripped):
        return parse_image_title(stripped)
    return PlainText(stripped)


class NavigationDirectiveParser:
    """Turn ``<- previous ^ toc ^ next ->`` text into a navigation triple."""

    def __init__(self, host: WikiHost, store: NavigationStore) -> None:
        self.host = host
        self.store = store

    def parse(self, match_text: str, context: RenderContext) -> NavigationTriple:
        """Parse ``match_text`` found on ``context.page_id`` and record the result.

        Parameters
        ----------
        match_text : str
            Full directive text including the two-character delimiters.
        context : RenderContext
            Render state of the page containing the directive. The triple is
            written to its preview cache and, for committed renders, to its
            pending metadata.

        Returns
        -------
        NavigationTriple
            The previous, toc, and next links. Previous and next never point
            at the page itself.
        """
        body = match_text[DELIMITER_WIDTH:-DELIMITER_WIDTH]
        segments = body.split("^", SLOT_COUNT - 1)
        segments += [""] * (SLOT_COUNT - len(segments))
        resolver = PageResolver(
            context.page_id,
            exists=self.host.page_exists,
            start_page=self.host.config.start,
        )

        links: list[LinkRef] = []
        for index, segment in enumerate(segments):
            link_text, separator, title_text = segment.partition("|")
            title = _parse_title(title_text if separator else None)
            link_text = link_text.strip()
            if index == TOC_SLOT and not link_text:
                link_text = self._namespace_head(context.page_id)

            canonical_id, fragment = resolver.resolve(link_text)
            if index != TOC_SLOT and canonical_id == context.page_id:
                canonical_id = ""
            links.append(
                LinkRef(
                    canonical_id=canonical_id,
                    fragment=fragment,
                    raw_id=link_text,
                    title=title,
                )
            )

        triple = NavigationTriple(previous=links[0], toc=links[1], next=links[2])
        self.store.save(context, triple)
        if not context.is_preview:
            self._record_references(triple, context)
        return triple

    def _namespace_head(self, page_id: str) -> str:
        """Return the absolute id of the namespace head page, or ``""``."""
        namespace = get_ns(page_id)
        for candidate in namespace_head_candidates(namespace, self.host.config.start):
            if self.host.page_exists(candidate):
                return f":{candidate}"
        logger.debug("no head page found for namespace %r of %s", namespace, page_id)
        return ""

    def _record_references(
        self, triple: NavigationTriple, context: RenderContext
    ) -> None:
        """Add the triple's targets to the page's reference index."""
        references = context.pending_metadata.setdefault(REFERENCES_META_KEY, {})
        for link in (triple.previous, triple.toc, triple.next):
            if not link.is_absent:
                target = link.canonical_id
                references[target] = self.host.page_exists(target)


def _leading_int(text: str) -> int:
    """Return the leading integer of ``text`` or 0."""
    match = LEADING_INT_PATTERN.match(text)
    return int(match.group(1)) if match else 0


def _flag(value: str) -> bool:
    """Return the boolean meaning of an option value."""
    return value not in ("", "0")


def parse_heading_range(value: str) -> tuple[int, int]:
    """Parse ``N`` or ``N-M`` into an ordered inclusive level range.

    A missing or non-positive start defaults to 2, a missing or non-positive
    end to the start, and reversed ranges are swapped.

    >>> parse_heading_range("3-1")
    (1, 3)
    >>> parse_heading_range("")
    (2, 2)
    """
    start_text, _sep, end_text = value.partition("-")
    start = _leading_int(start_text)
    end = _leading_int(end_text)
    if start < 1:
        start = 2
    if end < 1:
        end = start
    if start > end:
        start, end = end, start
    return start, end


class OutlineDirectiveParser:
    """Turn ``<doctoc ...>`` text into :class:`TocOptions`."""

    def __init__(self, host: WikiHost) -> None:
        self.host = host

    def parse(self, match_text: str, context: RenderContext) -> TocOptions:
        """Parse the comma-separated ``key=value`` options of ``match_text``.

        Unknown keys are ignored and malformed values fall back to defaults,
        so parsing never fails.
        """
        options = TocOptions(
            start_id=context.page_id,
            use_heading_as_title=self.host.config.useheading.navigation,
        )
        body = match_text[len(OUTLINE_PREFIX) : -1]
        for option in body.split(","):
            key, _sep, value = option.partition("=")
            value = value.strip()
            match key.strip().lower():
                case "start":
                    start_id = self._resolve_start(value, context.page_id)
                    if start_id:
                        options.start_id = start_id
                        options.previous_id = context.page_id
                case "includeheadings":
                    options.include_headings = parse_heading_range(value)
                case "numbers":
                    options.numbered = _flag(value)
                case "useheading":
                    options.use_heading_as_title = _flag(value)
                case "hidepagelink":
                    options.hide_page_links = _flag(value)
                case _:
                    continue
        if options.hide_page_links and options.include_headings is None:
            options.include_headings = (1, 2)
        return options

    def _resolve_start(self, value: str, page_id: str) -> str:
        """Resolve the ``start`` option to a page id without fragment."""
        resolver = PageResolver(
            page_id, exists=self.host.page_exists, start_page=self.host.config.start
        )
        start_id, _fragment = resolver.resolve(value)
        return start_id


__all__ = [
    "IMAGE_TITLE_PATTERN",
    "NAVIGATION_PATTERN",
    "OUTLINE_PATTERN",
    "NavigationDirectiveParser",
    "OutlineDirectiveParser",
    "parse_heading_range",
    "parse_image_title",
]
