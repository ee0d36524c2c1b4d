"""Walk a chain of ``next`` links and build its aggregated outline.

Starting at a page, the walker follows the ``next`` link stored in every
page's navigation triple. Each readable page contributes an outline entry
(unless page links are hidden) and, optionally, the entries of its headings
within a level range. Along the way the walker reports pages whose
``previous`` link does not point back to the page it came from, and stops
with a warning when a ``next`` link leads back to a page already walked.

Pages the viewer may not read are left out silently; the walk still passes
through them.

Example
-------
>>> walker = ChainWalker(host, store)  # doctest: +SKIP
>>> result = walker.build_outline(TocOptions(start_id="book:intro"))  # doctest: +SKIP
>>> list(result.entries)  # doctest: +SKIP
['book:intro', 'book:setup', 'book:usage']
"""

from __future__ import annotations

import logging
import typing as typ
from html import escape

from docnav._constants import MESSAGES, OUTLINE_LIST_CLASS
from docnav.wiki.ids import get_ns, no_ns
from docnav.wiki.lists import build_list

from .models import (
    EntryKind,
    Message,
    NavigationTriple,
    OutlineEntry,
    OutlineResult,
    RenderMode,
    TocOptions,
)

if typ.TYPE_CHECKING:
    from docnav.wiki.host import WikiHost

    from .context import RenderContext
    from .store import NavigationStore

logger = logging.getLogger(__name__)

PAGE_LEVEL = 1


class ChainWalker:
    """Build outlines across pages linked by their navigation triples."""

    def __init__(self, host: WikiHost, store: NavigationStore) -> None:
        self.host = host
        self.store = store

    def build_outline(
        self, options: TocOptions, context: RenderContext | None = None
    ) -> OutlineResult:
        """Walk the chain described by ``options`` and collect its outline.

        Parameters
        ----------
        options : TocOptions
            Start page, heading range, and presentation flags.
        context : RenderContext, optional
            Render state of the page requesting the outline. When previewing,
            the previewed page's navigation is read from its preview cache;
            warnings are also attached to the context.

        Returns
        -------
        OutlineResult
            Entries keyed by page id or ``page#anchor`` in walk order, and the
            warnings emitted during the walk.

        Notes
        -----
        The loop ends at a page without ``next`` link or when a ``next`` link
        points at a page walked before. Every page is walked at most once, so
        the walk always terminates.
        """
        result = OutlineResult()
        walked: set[str] = set()
        page_id: str | None = options.start_id
        previous_id = options.previous_id
        while page_id is not None:
            walked.add(page_id)
            if self.host.can_read(page_id):
                self._add_page(page_id, options, result.entries)

            triple = self._load(page_id, context)
            self._check_back_link(page_id, previous_id, triple, result, context)

            next_id = triple.next.canonical_id if triple else ""
            previous_id = page_id
            if not next_id:
                page_id = None
            elif next_id in walked:
                text = MESSAGES["recursionprevented"].format(page=page_id, next=next_id)
                self._warn(result, context, text)
                page_id = None
            else:
                page_id = next_id
        return result

    def render(self, result: OutlineResult) -> str:
        """Return the nested-list HTML of ``result``'s entries."""
        return build_list(result.entries.values(), OUTLINE_LIST_CLASS, self.format_item)

    def format_item(self, entry: OutlineEntry) -> str:
        """Return the link markup of one outline entry.

        Entries without title show the last id component. Pages with headings
        and first headings standing in for hidden pages are emphasized.
        """
        name = entry.title if entry.title is not None else no_ns(entry.id)
        page_id, _sep, fragment = entry.id.partition("#")
        link = self.host.links.internal_link(page_id, fragment, escape(name))
        if entry.kind in (EntryKind.PAGE_WITH_HEADINGS, EntryKind.FIRST_HEADING):
            return f"<strong>{link}</strong>"
        return link

    def _add_page(
        self, page_id: str, options: TocOptions, entries: dict[str, OutlineEntry]
    ) -> None:
        """Add ``page_id`` and its in-range headings to ``entries``."""
        if options.include_headings is None:
            kind = EntryKind.PAGE_ONLY
        else:
            kind = EntryKind.PAGE_WITH_HEADINGS
        title = None
        if options.use_heading_as_title:
            title = self.host.headings.first_heading(page_id)

        if options.hide_page_links:
            base_level = PAGE_LEVEL
        else:
            entries.setdefault(
                page_id,
                OutlineEntry(
                    id=page_id,
                    namespace=get_ns(page_id),
                    kind=kind,
                    level=PAGE_LEVEL,
                    title=title,
                    ordered=options.numbered,
                ),
            )
            base_level = PAGE_LEVEL + 1

        if options.include_headings is None:
            return
        low, high = options.include_headings
        first = True
        for heading in self.host.headings.outline(page_id):
            if heading.level < low or heading.level > high:
                continue
            heading_kind = EntryKind.HEADING
            if options.hide_page_links and first:
                # the first heading in range stands in for the hidden page link
                heading_kind = EntryKind.FIRST_HEADING
                first = False
            entry_id = f"{page_id}#{heading.anchor}"
            entries.setdefault(
                entry_id,
                OutlineEntry(
                    id=entry_id,
                    namespace=get_ns(page_id),
                    kind=heading_kind,
                    level=base_level + heading.level - low,
                    title=heading.title,
                    ordered=options.numbered,
                ),
            )

    def _load(
        self, page_id: str, context: RenderContext | None
    ) -> NavigationTriple | None:
        mode = context.mode_for(page_id) if context else RenderMode.COMMITTED
        return self.store.load(page_id, mode, context)

    def _check_back_link(
        self,
        page_id: str,
        previous_id: str | None,
        triple: NavigationTriple | None,
        result: OutlineResult,
        context: RenderContext | None,
    ) -> None:
        """Warn when ``page_id`` does not link back to ``previous_id``.

        The first page of a walk and pages that do not exist are exempt.
        """
        if previous_id is None:
            return
        linked_previous = triple.previous.canonical_id if triple else ""
        if linked_previous == previous_id or not self.host.page_exists(page_id):
            return
        text = MESSAGES["dontlinkback"].format(page=page_id, previous=previous_id)
        self._warn(result, context, text)

    @staticmethod
    def _warn(
        result: OutlineResult, context: RenderContext | None, text: str
    ) -> None:
        if context is not None:
            result.messages.append(context.warn(text))
            return
        result.messages.append(Message(text=text))
        logger.warning(text)


__all__ = ["ChainWalker"]
