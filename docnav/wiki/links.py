"""Render internal wiki links and derive default link titles."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from docnav._constants import HTML_EXTENSION

from .ids import id_to_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from docnav.navigation.models import ImageRef

_NAMESPACE_PREFIX = re.compile(r".*[:;/]")
_HASH_PREFIX = re.compile(r".*#")


class LinkRenderer:
    """Build anchors for wiki pages and images.

    Parameters
    ----------
    exists : Callable[[str], bool]
        Page existence check used to style links to missing pages.
    first_heading : Callable[[str], str | None]
        Cached first-heading lookup used when headings replace link titles.
    base_url : str
        URL prefix of rendered pages.
    media_url : str
        URL prefix of media files referenced by image titles.
    use_heading_for_content : bool
        Replace default link titles by the target page's first heading.
    """

    def __init__(
        self,
        *,
        exists: cabc.Callable[[str], bool],
        first_heading: cabc.Callable[[str], str | None],
        base_url: str = "/",
        media_url: str = "/media/",
        use_heading_for_content: bool = False,
    ) -> None:
        self._exists = exists
        self._first_heading = first_heading
        self.base_url = base_url
        self.media_url = media_url
        self.use_heading_for_content = use_heading_for_content

    def page_url(self, page_id: str, fragment: str = "") -> str:
        """Return the URL of the rendered page, with an optional anchor."""
        url = f"{self.base_url}{id_to_path(page_id)}{HTML_EXTENSION}"
        return f"{url}#{fragment}" if fragment else url

    def internal_link(self, page_id: str, fragment: str, label_html: str) -> str:
        """Return an anchor to ``page_id`` whose content is ``label_html``.

        Links to missing pages get the ``wikilink2`` class instead of
        ``wikilink1``.
        """
        css_class = "wikilink1" if self._exists(page_id) else "wikilink2"
        href = escape(self.page_url(page_id, fragment), quote=True)
        target = escape(page_id, quote=True)
        return (
            f'<a href="{href}" class="{css_class}" title="{target}" '
            f'data-wiki-id="{target}">{label_html}</a>'
        )

    def image(self, image: ImageRef) -> str:
        """Return an ``<img>`` tag for an image link title."""
        src = image.src
        if "://" not in src:
            src = f"{self.media_url}{id_to_path(src.lstrip(':'))}"
        attributes = [
            f'src="{escape(src, quote=True)}"',
            'class="media"',
            f'alt="{escape(image.alt, quote=True)}"',
        ]
        if image.width:
            attributes.append(f'width="{image.width}"')
        if image.height:
            attributes.append(f'height="{image.height}"')
        return f"<img {' '.join(attributes)} />"

    @staticmethod
    def simple_title(raw_id: str) -> str:
        """Return the display title derived from a raw reference.

        The namespace is dropped; when a ``#`` is present the anchor name is
        used instead of the page name.
        """
        name = _NAMESPACE_PREFIX.sub("", raw_id)
        return _HASH_PREFIX.sub("", name)

    def decorate_link_title(
        self, explicit: str | None, default: str, target_id: str
    ) -> str:
        """Return the final plain-text title of a link.

        ``explicit`` wins when given; otherwise the target's first heading is
        used when headings replace titles in content, else ``default``.
        """
        if explicit:
            return explicit
        if self.use_heading_for_content and target_id:
            heading = self._first_heading(target_id)
            if heading:
                return heading
        return default


__all__ = ["LinkRenderer"]
