"""Unit tests for the navigation and outline directive parsers.

The navigation directive ``<- previous ^ toc ^ next ->`` is parsed into a
:class:`~docnav.navigation.models.NavigationTriple`; these tests pin down title
handling, namespace head fallback for the toc field, self-reference
suppression, padding of malformed input, and where the parsed triple is
recorded for committed and preview renders. The outline directive tests cover
option defaults and tolerant value parsing.

Usage
-----
Run ``pytest tests/test_directive.py -v``. The ``make_wiki`` fixture from
``conftest.py`` provides a temporary wiki.
"""

from __future__ import annotations

import typing as typ

import pytest

from docnav._constants import NAVIGATION_META_KEY, REFERENCES_META_KEY
from docnav.config import UseHeading
from docnav.navigation import (
    ImageRef,
    NavigationDirectiveParser,
    NavigationStore,
    OutlineDirectiveParser,
    PlainText,
    RenderContext,
    RenderMode,
    UseDefault,
)
from docnav.navigation.directive import (
    NAVIGATION_PATTERN,
    OUTLINE_PATTERN,
    parse_heading_range,
)

if typ.TYPE_CHECKING:
    from conftest import WikiFactory

    from docnav.wiki import WikiHost


def _parser(host: WikiHost) -> NavigationDirectiveParser:
    return NavigationDirectiveParser(host, NavigationStore(host.metadata))


def test_parses_titles_toc_fallback_and_links(make_wiki: WikiFactory) -> None:
    """Titles are kept, the empty toc falls back to the namespace start page."""
    host = make_wiki({"ns:page": "", "ns:start": "", "ns:a": "", "ns:c": ""})
    context = RenderContext(page_id="ns:page")

    triple = _parser(host).parse("<-a|Title A ^ ^ c->", context)

    assert triple.previous.canonical_id == "ns:a"
    assert triple.previous.title == PlainText("Title A")
    assert triple.previous.raw_id == "a"
    assert triple.toc.canonical_id == "ns:start"
    assert triple.toc.title == UseDefault()
    assert triple.next.canonical_id == "ns:c"
    assert triple.next.title == UseDefault(), "missing title must use the default"


@pytest.mark.parametrize(
    ("pages", "expected_toc"),
    [
        ({"book:chapter:start": ""}, "book:chapter:start"),
        ({"book:chapter:chapter": ""}, "book:chapter:chapter"),
        ({"book:chapter": ""}, "book:chapter"),
        ({}, ""),
    ],
)
def test_toc_fallback_prefers_start_then_named_pages(
    make_wiki: WikiFactory, pages: dict[str, str], expected_toc: str
) -> None:
    """The first existing namespace head page fills an empty toc field."""
    host = make_wiki({"book:chapter:one": "", **pages})
    context = RenderContext(page_id="book:chapter:one")

    triple = _parser(host).parse("<- ^ ^ ->", context)

    assert triple.toc.canonical_id == expected_toc, (
        f"expected toc {expected_toc!r}, got {triple.toc.canonical_id!r}"
    )


@pytest.mark.parametrize(
    "directive",
    [
        "<- page ^ x ^ page ->",
        "<- :ns:page ^ x ^ .:page ->",
        "<< #intro ^ x ^ ..:ns:page >>",
        "<- ^ x ^ ->",
    ],
)
def test_previous_and_next_never_point_at_own_page(
    make_wiki: WikiFactory, directive: str
) -> None:
    """Self references in previous/next are dropped; toc keeps its target."""
    host = make_wiki({"ns:page": ""})
    context = RenderContext(page_id="ns:page")

    triple = _parser(host).parse(directive, context)

    assert triple.previous.canonical_id == ""
    assert triple.next.canonical_id == ""
    assert triple.toc.canonical_id == "ns:x"


def test_toc_may_point_at_own_page(make_wiki: WikiFactory) -> None:
    """Only previous and next are subject to self-reference suppression."""
    host = make_wiki({"ns:page": ""})
    triple = _parser(host).parse("<- a ^ page ^ b ->", RenderContext("ns:page"))
    assert triple.toc.canonical_id == "ns:page"


def test_image_titles_become_image_refs(make_wiki: WikiFactory) -> None:
    """``{{...}}`` titles are parsed into image references."""
    host = make_wiki({"ns:page": ""})
    triple = _parser(host).parse(
        "<- a|{{icons:back.png?32x16|Back}} ^ ^ b|{{next.png}} ->",
        RenderContext("ns:page"),
    )
    assert triple.previous.title == ImageRef("icons:back.png", "Back", 32, 16)
    assert triple.next.title == ImageRef("next.png", "", None, None)


def test_fragments_are_kept_separately(make_wiki: WikiFactory) -> None:
    """Anchors are split off the link and normalized."""
    host = make_wiki({"ns:page": ""})
    triple = _parser(host).parse("<- a#Setup Steps ^ ^ ->", RenderContext("ns:page"))
    assert triple.previous.canonical_id == "ns:a"
    assert triple.previous.fragment == "setup-steps"


def test_malformed_input_is_padded(make_wiki: WikiFactory) -> None:
    """Missing fields are treated as empty; extra separators stay in next."""
    host = make_wiki({"ns:page": ""})
    parser = _parser(host)

    short = parser.parse("<-a->", RenderContext("ns:page"))
    assert short.previous.canonical_id == "ns:a"
    assert short.toc.canonical_id == ""
    assert short.next.canonical_id == ""

    extra = parser.parse("<- a ^ b ^ c ^ d ->", RenderContext("ns:page"))
    assert extra.next.raw_id == "c ^ d"
    assert extra.next.canonical_id == "ns:c_d"


def test_committed_parse_stages_metadata(make_wiki: WikiFactory) -> None:
    """Committed renders stage the triple and its references as metadata."""
    host = make_wiki({"ns:page": "", "ns:b": ""})
    context = RenderContext("ns:page", RenderMode.COMMITTED)

    triple = _parser(host).parse("<- a ^ ^ b ->", context)

    assert context.preview_cache["ns:page"] == triple
    assert context.pending_metadata[NAVIGATION_META_KEY]["next"]["link"] == "ns:b"
    assert context.pending_metadata[REFERENCES_META_KEY] == {
        "ns:a": False,
        "ns:b": True,
    }


def test_preview_parse_only_fills_cache(make_wiki: WikiFactory) -> None:
    """Preview renders never stage durable metadata."""
    host = make_wiki({"ns:page": ""})
    context = RenderContext("ns:page", RenderMode.PREVIEW)

    first = _parser(host).parse("<- a ^ ^ b ->", context)
    second = _parser(host).parse("<- c ^ ^ d ->", context)

    assert context.pending_metadata == {}
    assert context.preview_cache == {"ns:page": second}
    assert first != second


def test_patterns_match_both_delimiter_pairs() -> None:
    """Both delimiter pairs are recognised; single-line only."""
    assert NAVIGATION_PATTERN.fullmatch("<- a ^ b ^ c ->")
    assert NAVIGATION_PATTERN.fullmatch("<< a ^ b ^ c >>")
    assert NAVIGATION_PATTERN.search("<- a ^ b\n ^ c ->") is None
    assert OUTLINE_PATTERN.fullmatch("<doctoc>")
    assert OUTLINE_PATTERN.search("<doctocs>") is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2-3", (2, 3)),
        ("3", (3, 3)),
        ("4-2", (2, 4)),
        ("0", (2, 2)),
        ("abc-x", (2, 2)),
        ("1-", (1, 1)),
    ],
)
def test_heading_range_parsing(value: str, expected: tuple[int, int]) -> None:
    """Heading ranges default, fill in, and reorder tolerant of bad input."""
    assert parse_heading_range(value) == expected


def test_outline_defaults(make_wiki: WikiFactory) -> None:
    """Without options the walk starts at the page itself without back check."""
    host = make_wiki({"book:toc": ""}, useheading=UseHeading.NAVIGATION)
    options = OutlineDirectiveParser(host).parse("<doctoc>", RenderContext("book:toc"))
    assert options.start_id == "book:toc"
    assert options.previous_id is None
    assert options.include_headings is None
    assert options.use_heading_as_title is True
    assert options.numbered is False
    assert options.hide_page_links is False


def test_outline_options(make_wiki: WikiFactory) -> None:
    """Options are parsed from comma separated key=value pairs."""
    host = make_wiki({"book:toc": ""})
    options = OutlineDirectiveParser(host).parse(
        "<doctoc start=intro#top, includeheadings=3-2, numbers=1, useheading=yes,"
        " bogus=1>",
        RenderContext("book:toc"),
    )
    assert options.start_id == "book:intro"
    assert options.previous_id == "book:toc"
    assert options.include_headings == (2, 3)
    assert options.numbered is True
    assert options.use_heading_as_title is True


def test_hidepagelink_implies_heading_range(make_wiki: WikiFactory) -> None:
    """Hiding page links includes headings 1-2 unless a range is given."""
    host = make_wiki({"book:toc": ""})
    parser = OutlineDirectiveParser(host)
    options = parser.parse("<doctoc hidepagelink=1>", RenderContext("book:toc"))
    assert options.hide_page_links is True
    assert options.include_headings == (1, 2)

    off = parser.parse("<doctoc hidepagelink=0, numbers>", RenderContext("book:toc"))
    assert off.hide_page_links is False
    assert off.numbered is False
    assert off.include_headings is None
