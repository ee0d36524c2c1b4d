"""Utilities for parsing, rendering, and generating wiki pages."""

from .extension import DirectiveExtension
from .models import RenderedMarkdown, RenderedPage
from .page_generator import WikiPageGenerator
from .renderer import HtmlContentRenderer

__all__ = [
    "DirectiveExtension",
    "HtmlContentRenderer",
    "RenderedMarkdown",
    "RenderedPage",
    "WikiPageGenerator",
]
