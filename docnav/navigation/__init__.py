"""Sequential page navigation: link triples, navigation bars, chain outlines."""

from .context import RenderContext
from .directive import NavigationDirectiveParser, OutlineDirectiveParser
from .models import (
    EntryKind,
    ImageRef,
    LinkRef,
    Message,
    NavigationTriple,
    OutlineEntry,
    OutlineResult,
    PlainText,
    RenderMode,
    TocOptions,
    UseDefault,
)
from .navbar import NavigationBarRenderer
from .outline import ChainWalker
from .resolver import PageResolver
from .store import NavigationStore

__all__ = [
    "ChainWalker",
    "EntryKind",
    "ImageRef",
    "LinkRef",
    "Message",
    "NavigationBarRenderer",
    "NavigationDirectiveParser",
    "NavigationStore",
    "NavigationTriple",
    "OutlineDirectiveParser",
    "OutlineEntry",
    "OutlineResult",
    "PageResolver",
    "PlainText",
    "RenderContext",
    "RenderMode",
    "TocOptions",
    "UseDefault",
]
