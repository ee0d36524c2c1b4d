"""Bundle of wiki services the navigation engine talks to.

:class:`WikiHost` wires the page repository, metadata store, access control,
heading cache, and link renderer for one wiki and one viewer. The navigation
components receive a host rather than reaching for global state.

Example
-------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> site = load_site_config(Path("config/docnav.yaml"))  # doctest: +SKIP
>>> host = WikiHost.from_config(site)  # doctest: +SKIP
>>> host.pages.exists("start")  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .acl import AccessControl, Viewer
from .headings import HeadingIndex
from .links import LinkRenderer
from .metadata import MetadataStore
from .pages import PageRepository

if typ.TYPE_CHECKING:
    from docnav.config import SiteConfig, WikiConfig


@dc.dataclass(slots=True)
class WikiHost:
    """Services of one wiki as seen by one viewer."""

    config: WikiConfig
    pages: PageRepository
    metadata: MetadataStore
    acl: AccessControl
    headings: HeadingIndex
    links: LinkRenderer
    viewer: Viewer = dc.field(default_factory=Viewer)

    @classmethod
    def from_config(cls, site: SiteConfig, *, viewer: Viewer | None = None) -> WikiHost:
        """Build the host services described by ``site``."""
        wiki = site.wiki
        pages = PageRepository(wiki.pages_dir)
        metadata = MetadataStore(wiki.meta_dir)
        headings = HeadingIndex(pages, metadata)
        links = LinkRenderer(
            exists=pages.exists,
            first_heading=headings.first_heading,
            base_url=wiki.base_url,
            media_url=wiki.media_url,
            use_heading_for_content=wiki.useheading.content,
        )
        return cls(
            config=wiki,
            pages=pages,
            metadata=metadata,
            acl=AccessControl(site.acl),
            headings=headings,
            links=links,
            viewer=viewer or Viewer(),
        )

    def page_exists(self, page_id: str) -> bool:
        """Return True when ``page_id`` exists."""
        return self.pages.exists(page_id)

    def can_read(self, page_id: str) -> bool:
        """Return True when the viewer may read ``page_id``."""
        return self.acl.can_read(page_id, self.viewer)


__all__ = ["WikiHost"]
