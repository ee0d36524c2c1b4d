"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from docnav.navigation.models import Message
    from docnav.wiki.headings import Heading


@dc.dataclass(slots=True)
class RenderedMarkdown:
    """Markdown conversion output.

    Attributes
    ----------
    html : str
        Rendered page body without navigation bars.
    headings : list[Heading]
        Headings of the page in document order, with their anchors.
    """

    html: str
    headings: list[Heading]

    @property
    def first_heading(self) -> str | None:
        """Return the title of the first heading, if any."""
        return self.headings[0].title if self.headings else None


@dc.dataclass(slots=True)
class RenderedPage:
    """A fully rendered wiki page.

    Attributes
    ----------
    page_id : str
        Id of the rendered page.
    title : str
        Document title: the first heading, or the page id.
    html : str
        Complete HTML document.
    messages : list[Message]
        Notices raised while rendering (chain warnings and the like).
    metadata : dict[str, Any]
        Metadata collected by the render; persisted for committed renders.
    """

    page_id: str
    title: str
    html: str
    messages: list[Message]
    metadata: dict[str, typ.Any]


__all__ = ["RenderedMarkdown", "RenderedPage"]
