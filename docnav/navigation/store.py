"""Persist and load the navigation triple of each page.

Committed renders attach the triple to the page's pending metadata under
``docnavigation``; the page generator persists it once the render completes.
Preview renders keep it in the request's preview cache only. Reads pick the
source by :class:`RenderMode`.

The persisted form keeps the wiki's historical field names::

    {"previous": {"link": "ns:a", "hash": "", "rawlink": "a", "title": null},
     "toc": {...}, "next": {...}}

where ``title`` is ``null`` (use the default title), a string, or an image
object ``{"type": "image", "src": ..., "alt": ..., "width": ..., "height": ...}``.
"""

from __future__ import annotations

import typing as typ

from docnav._constants import NAVIGATION_META_KEY

from .models import (
    ImageRef,
    LinkRef,
    LinkTitle,
    NavigationTriple,
    PlainText,
    RenderMode,
    UseDefault,
)

if typ.TYPE_CHECKING:
    from docnav.wiki.metadata import MetadataStore

    from .context import RenderContext

_SLOTS = ("previous", "toc", "next")


def title_to_builtins(title: LinkTitle) -> str | dict[str, typ.Any] | None:
    """Return the metadata representation of a link title."""
    match title:
        case PlainText(text=text):
            return text
        case ImageRef(src=src, alt=alt, width=width, height=height):
            return {
                "type": "image",
                "src": src,
                "alt": alt,
                "width": width,
                "height": height,
            }
        case _:
            return None


def title_from_builtins(payload: object) -> LinkTitle:
    """Build a link title from its metadata representation."""
    match payload:
        case str() as text:
            return PlainText(text)
        case {"type": "image", "src": str() as src, **rest}:
            return ImageRef(
                src=src,
                alt=str(rest.get("alt") or ""),
                width=rest.get("width"),
                height=rest.get("height"),
            )
        case _:
            return UseDefault()


def triple_to_builtins(triple: NavigationTriple) -> dict[str, dict[str, typ.Any]]:
    """Return the metadata representation of ``triple``."""
    payload: dict[str, dict[str, typ.Any]] = {}
    for slot in _SLOTS:
        link: LinkRef = getattr(triple, slot)
        payload[slot] = {
            "link": link.canonical_id,
            "hash": link.fragment,
            "rawlink": link.raw_id,
            "title": title_to_builtins(link.title),
        }
    return payload


def triple_from_builtins(payload: object) -> NavigationTriple | None:
    """Build a triple from its metadata representation; None when invalid."""
    if not isinstance(payload, dict) or not payload:
        return None
    links: dict[str, LinkRef] = {}
    for slot in _SLOTS:
        raw = payload.get(slot)
        if not isinstance(raw, dict):
            links[slot] = LinkRef()
            continue
        links[slot] = LinkRef(
            canonical_id=str(raw.get("link") or ""),
            fragment=str(raw.get("hash") or ""),
            raw_id=str(raw.get("rawlink") or ""),
            title=title_from_builtins(raw.get("title")),
        )
    return NavigationTriple(**links)


class NavigationStore:
    """Read and write navigation triples for pages."""

    def __init__(self, metadata: MetadataStore) -> None:
        self.metadata = metadata

    def save(self, context: RenderContext, triple: NavigationTriple) -> None:
        """Record ``triple`` as the navigation of the page being rendered.

        The preview cache always receives the triple; committed renders also
        stage it as pending metadata, replacing any earlier triple.
        """
        context.preview_cache[context.page_id] = triple
        if context.mode is RenderMode.COMMITTED:
            context.pending_metadata[NAVIGATION_META_KEY] = triple_to_builtins(triple)

    def load(
        self, page_id: str, mode: RenderMode, context: RenderContext | None = None
    ) -> NavigationTriple | None:
        """Return the navigation triple of ``page_id`` or None.

        Preview reads only consult ``context``'s preview cache; committed reads
        only consult durable metadata.
        """
        if mode is RenderMode.PREVIEW:
            if context is None:
                return None
            return context.preview_cache.get(page_id)
        return triple_from_builtins(self.metadata.get(page_id, NAVIGATION_META_KEY))


__all__ = [
    "NavigationStore",
    "title_from_builtins",
    "title_to_builtins",
    "triple_from_builtins",
    "triple_to_builtins",
]
