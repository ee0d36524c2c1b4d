"""Unit tests for page reference resolution and id helpers.

These tests cover :class:`docnav.navigation.resolver.PageResolver`, which turns
author-written references (bare names, ``.``/``..`` relative paths, ``~``
sub-pages, absolute ids, namespace links) into canonical page ids, plus the
``clean_id`` helper it relies on.

Usage
-----
Run ``pytest tests/test_resolver.py -v``. No fixtures beyond plain pytest are
required; page existence is stubbed with a set of ids.
"""

from __future__ import annotations

import pytest

from docnav.navigation.resolver import PageResolver, namespace_head_candidates
from docnav.wiki.ids import clean_id, get_ns, no_ns

EXISTING = {"manual:start", "guide:guide", "tools"}


def _resolver(context: str = "manual:install:linux") -> PageResolver:
    return PageResolver(context, exists=EXISTING.__contains__, start_page="start")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("windows", "manual:install:windows"),
        (".:windows", "manual:install:windows"),
        ("..:faq", "manual:faq"),
        ("..faq", "manual:faq"),
        ("~details", "manual:install:linux:details"),
        (":tools", "tools"),
        ("other:page", "other:page"),
        ("Other:Some Page", "other:some_page"),
        ("other/page", "other:page"),
    ],
)
def test_resolves_references(raw: str, expected: str) -> None:
    """References resolve relative to the context page's namespace."""
    resolved, fragment = _resolver().resolve(raw)
    assert resolved == expected, f"{raw!r} resolved to {resolved!r}"
    assert fragment == "", f"unexpected fragment {fragment!r} for {raw!r}"


def test_splits_fragment_on_first_hash() -> None:
    """The fragment is split off and normalized like heading anchors."""
    resolved, fragment = _resolver().resolve("..:faq#Common Errors#2")
    assert resolved == "manual:faq"
    assert fragment == "common-errors2", f"unexpected fragment {fragment!r}"


def test_empty_reference_is_absent() -> None:
    """An empty reference resolves to an empty id."""
    assert _resolver().resolve("   ") == ("", "")


def test_fragment_only_points_at_context_page() -> None:
    """``#anchor`` references the context page itself."""
    assert _resolver().resolve("#Top") == ("manual:install:linux", "top")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (":manual:", "manual:start"),
        (":guide:", "guide:guide"),
        (":tools:", "tools"),
        (":missing:", "missing:start"),
        ("..:", "manual:start"),
        (":", "start"),
    ],
)
def test_namespace_links_resolve_to_head_page(raw: str, expected: str) -> None:
    """Trailing colons link to the first existing head page of a namespace."""
    resolved, _fragment = _resolver().resolve(raw)
    assert resolved == expected, f"{raw!r} resolved to {resolved!r}"


def test_namespace_head_candidates_order() -> None:
    """Head candidates are start page, same-named page, then the namespace page."""
    assert namespace_head_candidates("a:b", "start") == ("a:b:start", "a:b:b", "a:b")
    assert namespace_head_candidates("", "start") == ("start",)


def test_clean_id_normalizes() -> None:
    """Ids are lowercased with whitespace and separators normalized."""
    assert clean_id(" Manual : Getting Started ") == "manual:getting_started"
    assert clean_id("::a;;b//c::") == "a:b:c"


def test_namespace_helpers() -> None:
    """Namespace and name helpers split on the last colon."""
    assert get_ns("a:b:c") == "a:b"
    assert get_ns("root") == ""
    assert no_ns("a:b:c") == "c"
