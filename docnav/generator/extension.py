"""Python-Markdown extension that handles the docnav directives.

Insert :class:`DirectiveExtension` into a ``markdown.Markdown`` instance to
strip navigation directives (``<- a ^ b ^ c ->``) from the page body, handing
each to a callback, and to replace outline directives (``<doctoc ...>``) with
the HTML their callback returns. Directives inside fenced code blocks are left
alone because the fenced-code preprocessor has already stashed those blocks.
Indented code blocks and inline code spans are skipped as well, so directive
examples can be shown in a page. An indented block is any run of lines
indented by four spaces or a tab that follows a blank line; list items
continued that way count as code too.
"""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from docnav.navigation.directive import NAVIGATION_PATTERN, OUTLINE_PATTERN

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown

# after fenced_code_block (25), before html_block (20)
PREPROCESSOR_PRIORITY = 22

INDENTED_CODE_PATTERN = re.compile(r"^(?: {4}|\t)")
CODE_SPAN_PATTERN = re.compile(r"(`+).+?(?<!`)\1(?!`)")


class DirectiveExtension(Extension):
    """Route docnav directives to the given callbacks."""

    def __init__(
        self,
        on_navigation: cabc.Callable[[str], object],
        on_outline: cabc.Callable[[str], str],
    ) -> None:
        super().__init__()
        self.on_navigation = on_navigation
        self.on_outline = on_outline

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the directive preprocessor on the Markdown instance."""
        processor = DirectivePreprocessor(md, self.on_navigation, self.on_outline)
        md.preprocessors.register(processor, "docnav_directives", PREPROCESSOR_PRIORITY)


class DirectivePreprocessor(Preprocessor):
    """Handle navigation directives first, then render outline directives.

    Navigation is handled before any outline so that an outline on the same
    page already sees the page's freshly parsed triple.
    """

    def __init__(
        self,
        md: Markdown,
        on_navigation: cabc.Callable[[str], object],
        on_outline: cabc.Callable[[str], str],
    ) -> None:
        super().__init__(md)
        self.on_navigation = on_navigation
        self.on_outline = on_outline

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with every directive handled and replaced."""
        code_lines = _indented_code_lines(lines)
        lines = [
            line if index in code_lines else self._substitute(line, NAVIGATION_PATTERN)
            for index, line in enumerate(lines)
        ]
        lines = [
            line if index in code_lines else self._substitute(line, OUTLINE_PATTERN)
            for index, line in enumerate(lines)
        ]
        return "\n".join(lines).split("\n")

    def _substitute(self, line: str, pattern: re.Pattern[str]) -> str:
        """Replace directives in ``line`` outside its inline code spans."""
        replace = self._navigation if pattern is NAVIGATION_PATTERN else self._outline
        pieces: list[str] = []
        position = 0
        for span in CODE_SPAN_PATTERN.finditer(line):
            pieces.append(pattern.sub(replace, line[position : span.start()]))
            pieces.append(span.group(0))
            position = span.end()
        pieces.append(pattern.sub(replace, line[position:]))
        return "".join(pieces)

    def _navigation(self, match: re.Match[str]) -> str:
        self.on_navigation(match.group(0))
        return ""

    def _outline(self, match: re.Match[str]) -> str:
        html = self.on_outline(match.group(0))
        if not html:
            return ""
        placeholder = self.md.htmlStash.store(html)
        return f"\n\n{placeholder}\n\n"


def _indented_code_lines(lines: list[str]) -> set[int]:
    """Return the indexes of ``lines`` that belong to indented code blocks."""
    code_lines: set[int] = set()
    previous_blank = True
    in_code = False
    for index, line in enumerate(lines):
        if not line.strip():
            previous_blank = True
            continue
        indented = INDENTED_CODE_PATTERN.match(line) is not None
        in_code = indented and (in_code or previous_blank)
        if in_code:
            code_lines.add(index)
        previous_blank = False
    return code_lines


__all__ = ["DirectiveExtension", "DirectivePreprocessor"]
