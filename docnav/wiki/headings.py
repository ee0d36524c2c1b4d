"""Cached heading outlines of wiki pages.

Heading outlines and first headings are recorded in page metadata when a page
is rendered. Lookups never render a page: pages without stored metadata are
scanned for ATX headings directly in their Markdown source instead, with
anchors generated the same way the renderer's ``toc`` extension does.
"""

from __future__ import annotations

import dataclasses as dc
import html
import re
import typing as typ

from markdown.extensions.toc import unique

from docnav._constants import FIRST_HEADING_META_KEY, HEADINGS_META_KEY

from .ids import clean_fragment

if typ.TYPE_CHECKING:
    from .metadata import MetadataStore
    from .pages import PageRepository

ATX_HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$")
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """One heading of a page outline."""

    level: int
    anchor: str
    title: str

    def to_builtins(self) -> dict[str, typ.Any]:
        """Return the metadata representation of this heading."""
        return {"level": self.level, "hid": self.anchor, "title": self.title}

    @classmethod
    def from_builtins(cls, payload: typ.Mapping[str, typ.Any]) -> Heading:
        """Build a heading from its metadata representation."""
        return cls(
            level=int(payload.get("level", 1)),
            anchor=str(payload.get("hid", "")),
            title=str(payload.get("title", "")),
        )


def flatten_toc_tokens(tokens: list[dict[str, typ.Any]]) -> list[Heading]:
    """Flatten Python-Markdown ``toc_tokens`` into document-ordered headings."""
    headings: list[Heading] = []
    for token in tokens:
        headings.append(
            Heading(
                level=token["level"],
                anchor=token["id"],
                title=html.unescape(token["name"]),
            )
        )
        headings.extend(flatten_toc_tokens(token.get("children", [])))
    return headings


def extract_headings(markdown_text: str) -> list[Heading]:
    """Return the ATX headings of ``markdown_text`` outside fenced code."""
    headings: list[Heading] = []
    used: set[str] = set()
    fence: str | None = None
    for line in markdown_text.splitlines():
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0] * 3
            elif marker.startswith(fence):
                fence = None
            continue
        if fence is not None:
            continue
        match = ATX_HEADING_PATTERN.match(line)
        if not match:
            continue
        title = match.group(2).strip()
        anchor = unique(clean_fragment(title), used)
        headings.append(Heading(level=len(match.group(1)), anchor=anchor, title=title))
    return headings


class HeadingIndex:
    """Serve first headings and heading outlines without rendering pages."""

    def __init__(self, pages: PageRepository, metadata: MetadataStore) -> None:
        self.pages = pages
        self.metadata = metadata
        self._scanned: dict[str, list[Heading]] = {}

    def outline(self, page_id: str) -> list[Heading]:
        """Return the headings of ``page_id`` in document order."""
        stored = self.metadata.get(page_id, HEADINGS_META_KEY)
        if isinstance(stored, list):
            return [Heading.from_builtins(item) for item in stored]
        return self._scan(page_id)

    def first_heading(self, page_id: str) -> str | None:
        """Return the first heading of ``page_id`` or None."""
        stored = self.metadata.get(page_id, FIRST_HEADING_META_KEY)
        if isinstance(stored, str) and stored:
            return stored
        headings = self.outline(page_id)
        return headings[0].title if headings else None

    def _scan(self, page_id: str) -> list[Heading]:
        if page_id not in self._scanned:
            if self.pages.exists(page_id):
                self._scanned[page_id] = extract_headings(self.pages.read(page_id))
            else:
                self._scanned[page_id] = []
        return self._scanned[page_id]


__all__ = ["Heading", "HeadingIndex", "extract_headings", "flatten_toc_tokens"]
