"""Render wiki Markdown into HTML with highlighted code and heading anchors."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from docnav.wiki.headings import flatten_toc_tokens
from docnav.wiki.ids import HEADING_ID_SEPARATOR

from .models import RenderedMarkdown

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


class HtmlContentRenderer:
    """Render page Markdown with consistent styling."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        """Initialize a renderer with an optional pygments style.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        """
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(
        self, text: str, extensions: typ.Sequence[Extension] = ()
    ) -> RenderedMarkdown:
        """Render ``text`` and collect its heading outline.

        Parameters
        ----------
        text : str
            Page Markdown.
        extensions : Sequence[Extension], optional
            Additional extensions, such as the directive extension of the
            page being rendered.

        Returns
        -------
        RenderedMarkdown
            Body HTML and the headings with the anchors assigned to them.
        """
        normalized = self._normalize_fenced_blocks(text)
        md = Markdown(
            extensions=[
                "fenced_code",
                "codehilite",
                "tables",
                "sane_lists",
                "toc",
                *extensions,
            ],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                },
                "toc": {"separator": HEADING_ID_SEPARATOR},
            },
        )
        html = md.convert(normalized)
        headings = flatten_toc_tokens(getattr(md, "toc_tokens", []))
        return RenderedMarkdown(
            html=self._annotate_codehilite(html, normalized), headings=headings
        )

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "text"
            for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "text")
            return (
                f'<div class="codehilite" data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
