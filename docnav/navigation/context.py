"""Request-scoped state of one page render.

A :class:`RenderContext` is created when a page render starts and dropped when
it ends. It carries the render mode, the preview cache that lets a preview see
the navigation it has just parsed, the metadata the render wants persisted,
and the notices shown to the reader.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .models import Message, NavigationTriple, RenderMode

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RenderContext:
    """State shared by every directive handled while rendering ``page_id``.

    Attributes
    ----------
    page_id : str
        Page being rendered.
    mode : RenderMode
        Whether parsed navigation is committed or only previewed.
    preview_cache : dict[str, NavigationTriple]
        Triples parsed during this render, keyed by page id; a re-parse of the
        same page overwrites its entry.
    pending_metadata : dict[str, Any]
        Metadata collected during the render, persisted afterwards in
        committed mode.
    messages : list[Message]
        Notices attached to the render result.
    """

    page_id: str
    mode: RenderMode = RenderMode.COMMITTED
    preview_cache: dict[str, NavigationTriple] = dc.field(default_factory=dict)
    pending_metadata: dict[str, typ.Any] = dc.field(default_factory=dict)
    messages: list[Message] = dc.field(default_factory=list)

    @property
    def is_preview(self) -> bool:
        """Return True for preview renders."""
        return self.mode is RenderMode.PREVIEW

    def mode_for(self, page_id: str) -> RenderMode:
        """Return the mode to read ``page_id``'s navigation with.

        Only the page being previewed is read from the preview cache; every
        other page is read from committed metadata.
        """
        if self.is_preview and page_id == self.page_id:
            return RenderMode.PREVIEW
        return RenderMode.COMMITTED

    def warn(self, text: str) -> Message:
        """Attach a warning to the render result and log it."""
        message = Message(text=text, level=-1)
        self.messages.append(message)
        logger.warning("%s: %s", self.page_id, text)
        return message


__all__ = ["RenderContext"]
