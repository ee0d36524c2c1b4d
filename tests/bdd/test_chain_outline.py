"""Behaviour tests for chain outlines using pytest-bdd.

Scenarios in ``chain_outline.feature`` describe small chains of pages through
their previous and next links, build the outline from a start page, and check
the listed pages, heading levels, and warnings. Pages are written to a
temporary wiki by the shared ``make_wiki`` fixture, which also collects their
navigation metadata before the walk.

Usage
-----
Run ``pytest tests/bdd/test_chain_outline.py -v``. Use the word ``none`` in a
step to leave a previous or next link empty.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docnav.navigation import ChainWalker, NavigationStore, TocOptions
from docnav.navigation.directive import parse_heading_range
from docnav.wiki import AccessLevel, AclRule

if typ.TYPE_CHECKING:
    from conftest import WikiFactory

    from docnav.navigation import OutlineResult

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "chain_outline.feature"
)
scenarios(FEATURE_FILE)

NO_LINK = "none"
WITH_HEADINGS_STEP = (
    'I build the outline starting at "{start}" with headings "{levels}"'
)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"pages": {}, "acl": [AclRule("*", "@ALL", AccessLevel.READ)]}


def _link(value: str) -> str:
    return "" if value == NO_LINK else value


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@given(parsers.parse('page "{page}" with previous "{previous}" and next "{next_}"'))
def given_linked_page(
    scenario_state: ScenarioState, page: str, previous: str, next_: str
) -> None:
    """Record a page whose navigation links to ``previous`` and ``next_``."""
    directive = f"<- {_link(previous)} ^ ^ {_link(next_)} ->"
    scenario_state["pages"][page] = f"{directive}\n# {page.upper()}\n"


@given(parsers.parse('page "{page}" with headings "{headings}"'))
def given_page_with_headings(
    scenario_state: ScenarioState, page: str, headings: str
) -> None:
    """Record a page made of ``<level> <title>`` headings."""
    lines = []
    for heading in _split(headings):
        level, _sep, title = heading.partition(" ")
        lines.append(f"{'#' * int(level)} {title}\n")
    scenario_state["pages"][page] = "\n".join(lines)


@given(parsers.parse('page "{page}" is hidden from anonymous readers'))
def given_hidden_page(scenario_state: ScenarioState, page: str) -> None:
    """Deny reading ``page`` to every viewer."""
    scenario_state["acl"].append(AclRule(page, "@ALL", AccessLevel.NONE))


def _build(
    make_wiki: WikiFactory,
    scenario_state: ScenarioState,
    start: str,
    include_headings: tuple[int, int] | None = None,
) -> None:
    host = make_wiki(scenario_state["pages"], acl=scenario_state["acl"])
    walker = ChainWalker(host, NavigationStore(host.metadata))
    options = TocOptions(start_id=start, include_headings=include_headings)
    scenario_state["result"] = walker.build_outline(options)


@when(parsers.parse(WITH_HEADINGS_STEP))
def when_build_with_headings(
    make_wiki: WikiFactory, scenario_state: ScenarioState, start: str, levels: str
) -> None:
    """Walk the chain from ``start`` expanding headings in ``levels``."""
    _build(make_wiki, scenario_state, start, parse_heading_range(levels))


@when(parsers.re(r'I build the outline starting at "(?P<start>[^"]+)"$'))
def when_build(
    make_wiki: WikiFactory, scenario_state: ScenarioState, start: str
) -> None:
    """Walk the chain from ``start`` listing pages only."""
    _build(make_wiki, scenario_state, start)


@then(parsers.parse('the outline lists "{pages}"'))
def then_outline_lists(scenario_state: ScenarioState, pages: str) -> None:
    result = typ.cast("OutlineResult", scenario_state["result"])
    assert list(result.entries) == _split(pages)


@then(parsers.parse('the outline levels are "{levels}"'))
def then_outline_levels(scenario_state: ScenarioState, levels: str) -> None:
    result = typ.cast("OutlineResult", scenario_state["result"])
    expected = [int(level) for level in _split(levels)]
    assert [entry.level for entry in result.entries.values()] == expected


@then(parsers.parse('exactly one warning reads "{text}"'))
def then_one_warning(scenario_state: ScenarioState, text: str) -> None:
    result = typ.cast("OutlineResult", scenario_state["result"])
    assert [message.text for message in result.messages] == [text]


@then("no warnings are reported")
def then_no_warnings(scenario_state: ScenarioState) -> None:
    result = typ.cast("OutlineResult", scenario_state["result"])
    assert result.messages == []
