"""Unit tests for page access control."""

from __future__ import annotations

import pytest

from docnav.wiki.acl import AccessControl, AccessLevel, AclRule, Viewer

RULES = [
    AclRule("*", "@ALL", AccessLevel.READ),
    AclRule("private:*", "@ALL", AccessLevel.NONE),
    AclRule("private:*", "@staff", AccessLevel.EDIT),
    AclRule("private:notes", "alice", AccessLevel.READ),
    AclRule("private:team:*", "@ALL", AccessLevel.READ),
]


@pytest.mark.parametrize(
    ("page_id", "viewer", "expected"),
    [
        ("manual:start", Viewer(), AccessLevel.READ),
        ("private:plans", Viewer(), AccessLevel.NONE),
        ("private:plans", Viewer("bob", ("staff",)), AccessLevel.EDIT),
        ("private:notes", Viewer("alice"), AccessLevel.READ),
        ("private:notes", Viewer(), AccessLevel.NONE),
        ("private:team:roster", Viewer(), AccessLevel.READ),
    ],
)
def test_most_specific_scope_wins(
    page_id: str, viewer: Viewer, expected: AccessLevel
) -> None:
    """The closest scope with a matching rule decides the level."""
    assert AccessControl(RULES).level(page_id, viewer) is expected


def test_no_rules_deny_reading() -> None:
    assert not AccessControl([]).can_read("start", Viewer())


def test_every_viewer_belongs_to_all() -> None:
    assert Viewer("carol", ("dev",)).subjects == {"carol", "@dev", "@ALL"}


@pytest.mark.parametrize(
    ("value", "expected"),
    [("read", AccessLevel.READ), (" None ", AccessLevel.NONE), (2, AccessLevel.EDIT)],
)
def test_parse_access_levels(value: str | int, expected: AccessLevel) -> None:
    assert AccessLevel.parse(value) is expected


def test_parse_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown access level"):
        AccessLevel.parse("admin")
