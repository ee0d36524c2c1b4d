"""High-level orchestration for wiki page generation.

This module renders wiki pages to HTML while maintaining their navigation
metadata. :class:`WikiPageGenerator` wires the directive extension into the
Markdown renderer, surrounds each page with its navigation bars, and persists
per-page metadata (first heading, heading outline, navigation triple) so that
other pages' outlines can walk through it.

A full build runs in two passes: a metadata pass over every page, then an
HTML pass, so outlines always see the navigation of every page.

Example
-------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> from docnav.wiki import WikiHost
>>> from docnav.generator import WikiPageGenerator
>>> site = load_site_config(Path("config/docnav.yaml"))  # doctest: +SKIP
>>> host = WikiHost.from_config(site)  # doctest: +SKIP
>>> generator = WikiPageGenerator(host)  # doctest: +SKIP
>>> generator.run()  # doctest: +SKIP
[PosixPath('public/start.html'), ...]
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docnav._constants import (
    FIRST_HEADING_META_KEY,
    HEADINGS_META_KEY,
    HTML_EXTENSION,
)
from docnav.navigation.context import RenderContext
from docnav.navigation.directive import (
    NavigationDirectiveParser,
    OutlineDirectiveParser,
)
from docnav.navigation.models import RenderMode
from docnav.navigation.navbar import NavigationBarRenderer
from docnav.navigation.outline import ChainWalker
from docnav.navigation.store import NavigationStore
from docnav.wiki.ids import id_to_path

from .extension import DirectiveExtension
from .models import RenderedMarkdown, RenderedPage
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from docnav.wiki.host import WikiHost

logger = logging.getLogger(__name__)


class WikiPageGenerator:
    """Render wiki pages and keep their navigation metadata current."""

    def __init__(
        self,
        host: WikiHost,
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the generator with the wiki services and templates.

        Parameters
        ----------
        host : WikiHost
            Wiki services and the viewer pages are rendered for.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        output_dir : Path, optional
            Override for the HTML output directory; defaults to the wiki config.
        """
        self.host = host
        self.output_dir_override = output_dir
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.store = NavigationStore(host.metadata)
        self.navigation_parser = NavigationDirectiveParser(host, self.store)
        self.outline_parser = OutlineDirectiveParser(host)
        self.walker = ChainWalker(host, self.store)
        self.navbar = NavigationBarRenderer(
            host, self.store, templates_dir=self.templates_dir
        )
        self.renderer = HtmlContentRenderer(host.config.pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("wiki_page.jinja")

    @property
    def output_dir(self) -> Path:
        """Return the directory rendered pages are written to."""
        return self.output_dir_override or self.host.config.output_dir

    def run(self) -> list[Path]:
        """Render every readable page of the wiki into HTML files on disk.

        Returns
        -------
        list[Path]
            Paths to the generated HTML documents, in page id order.

        Notes
        -----
        Side effects include writing metadata documents for every page and
        HTML files into the output directory. Pages the viewer cannot read
        are skipped.
        """
        page_ids = list(self.host.pages.iter_page_ids())
        for page_id in page_ids:
            self.collect_metadata(page_id)

        written: list[Path] = []
        for page_id in page_ids:
            if not self.host.can_read(page_id):
                logger.info("skipping %s: not readable by viewer", page_id)
                continue
            page = self.render_page(page_id)
            output_path = self.output_dir / f"{id_to_path(page_id)}{HTML_EXTENSION}"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(page.html, encoding="utf-8")
            logger.info("wrote %s", output_path)
            written.append(output_path)
        return written

    def collect_metadata(self, page_id: str) -> dict[str, typ.Any]:
        """Parse ``page_id`` for metadata only and persist the result.

        Outline directives are not expanded during this pass.
        """
        context = RenderContext(page_id=page_id, mode=RenderMode.COMMITTED)
        converted = self._convert(
            self.host.pages.read(page_id), context, expand_outlines=False
        )
        return self._persist(context, converted)

    def render_page(
        self,
        page_id: str,
        *,
        mode: RenderMode = RenderMode.COMMITTED,
        source: str | None = None,
    ) -> RenderedPage:
        """Render ``page_id`` into a complete HTML document.

        Parameters
        ----------
        page_id : str
            Page to render.
        mode : RenderMode, optional
            ``COMMITTED`` persists the page metadata once the body is
            rendered; ``PREVIEW`` never touches stored metadata.
        source : str, optional
            Markdown to render instead of the stored page source.

        Raises
        ------
        PageNotFoundError
            Raised when no ``source`` is given and the page does not exist.
        """
        context = RenderContext(page_id=page_id, mode=mode)
        text = source if source is not None else self.host.pages.read(page_id)
        converted = self._convert(text, context, expand_outlines=True)
        metadata = self._page_metadata(context, converted)
        if mode is RenderMode.COMMITTED:
            self.host.metadata.save(page_id, metadata)

        body = self.navbar.wrap_content(converted.html, context)
        title = converted.first_heading or page_id
        html = self.template.render(
            page_id=page_id,
            title=title,
            wiki_title=self.host.config.title,
            pygments_css=self.renderer.stylesheet,
            messages=context.messages,
            preview=context.is_preview,
            body=body,
        )
        return RenderedPage(
            page_id=page_id,
            title=title,
            html=html,
            messages=list(context.messages),
            metadata=metadata,
        )

    def preview(self, page_id: str, source: str | None = None) -> RenderedPage:
        """Render ``page_id`` in preview mode, optionally from ``source``."""
        return self.render_page(page_id, mode=RenderMode.PREVIEW, source=source)

    def _convert(
        self, text: str, context: RenderContext, *, expand_outlines: bool
    ) -> RenderedMarkdown:
        """Render ``text`` with directive handling bound to ``context``."""

        def _on_navigation(match_text: str) -> None:
            self.navigation_parser.parse(match_text, context)

        def _on_outline(match_text: str) -> str:
            if not expand_outlines:
                return ""
            options = self.outline_parser.parse(match_text, context)
            return self.walker.render(self.walker.build_outline(options, context))

        extension = DirectiveExtension(_on_navigation, _on_outline)
        return self.renderer.render(text, extensions=[extension])

    @staticmethod
    def _page_metadata(
        context: RenderContext, converted: RenderedMarkdown
    ) -> dict[str, typ.Any]:
        """Return the metadata document of the page rendered in ``context``."""
        metadata = dict(context.pending_metadata)
        metadata[HEADINGS_META_KEY] = [
            heading.to_builtins() for heading in converted.headings
        ]
        if converted.first_heading:
            metadata[FIRST_HEADING_META_KEY] = converted.first_heading
        return metadata

    def _persist(
        self, context: RenderContext, converted: RenderedMarkdown
    ) -> dict[str, typ.Any]:
        metadata = self._page_metadata(context, converted)
        self.host.metadata.save(context.page_id, metadata)
        logger.info("collected metadata for %s", context.page_id)
        return metadata


__all__ = ["WikiPageGenerator"]
