"""Render the previous/toc/next bar around page content."""

from __future__ import annotations

import typing as typ
from html import escape
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import ImageRef, LinkRef, PlainText

if typ.TYPE_CHECKING:
    from docnav.wiki.host import WikiHost

    from .context import RenderContext
    from .models import RenderMode
    from .store import NavigationStore

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


class NavigationBarRenderer:
    """Render navigation bars from stored or previewed triples."""

    def __init__(
        self,
        host: WikiHost,
        store: NavigationStore,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer and its Jinja template.

        Parameters
        ----------
        host : WikiHost
            Wiki services used to build links and default titles.
        store : NavigationStore
            Source of navigation triples.
        templates_dir : Path, optional
            Directory containing ``navbar.jinja``; defaults to the package
            templates.
        """
        self.host = host
        self.store = store
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or DEFAULT_TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("navbar.jinja")

    def render(
        self,
        page_id: str,
        mode: RenderMode,
        context: RenderContext | None = None,
        *,
        show_toc_link: bool = False,
    ) -> str:
        """Return the navigation bar of ``page_id``, or ``""`` without a triple.

        Parameters
        ----------
        page_id : str
            Page whose navigation is shown.
        mode : RenderMode
            Selects the preview cache or committed metadata as the source.
        context : RenderContext, optional
            Render state holding the preview cache.
        show_toc_link : bool, optional
            Include the centered table-of-contents link.
        """
        triple = self.store.load(page_id, mode, context)
        if triple is None:
            return ""
        return self.template.render(
            show_toc=show_toc_link,
            previous=self._link(triple.previous),
            toc=self._link(triple.toc) if show_toc_link else "",
            next=self._link(triple.next),
        )

    def wrap_content(self, content_html: str, context: RenderContext) -> str:
        """Surround ``content_html`` with the bars of the page being rendered.

        The bar above the content omits the toc link; the one below shows it.
        """
        mode = context.mode_for(context.page_id)
        before = self.render(context.page_id, mode, context)
        after = self.render(context.page_id, mode, context, show_toc_link=True)
        return f"{before}{content_html}{after}"

    def _link(self, link: LinkRef) -> str:
        """Return the anchor markup of ``link`` or ``""`` when absent."""
        if link.is_absent:
            return ""
        return self.host.links.internal_link(
            link.canonical_id, link.fragment, self._label(link)
        )

    def _label(self, link: LinkRef) -> str:
        """Return the escaped label HTML of ``link``."""
        links = self.host.links
        match link.title:
            case PlainText(text=text):
                return escape(text)
            case ImageRef() as image:
                return links.image(image)
            case _:
                default = links.simple_title(link.raw_id)
                return escape(
                    links.decorate_link_title(None, default, link.canonical_id)
                )


__all__ = ["NavigationBarRenderer"]
