"""Access control checks for wiki pages.

Rules grant a permission level to a subject (a user name, or ``@group``) on a
scope: an exact page id, a namespace wildcard ``ns:*``, or ``*`` for the whole
wiki. The most specific scope with a rule matching the viewer decides; when
several of that scope's rules match, the highest level wins.

Example
-------
>>> rules = [AclRule("*", "@ALL", AccessLevel.READ),
...          AclRule("private:*", "@ALL", AccessLevel.NONE)]
>>> acl = AccessControl(rules)
>>> viewer = Viewer()
>>> acl.level("private:plans", viewer)
<AccessLevel.NONE: 0>
>>> acl.level("manual:start", viewer)
<AccessLevel.READ: 1>
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .ids import get_ns

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ALL_GROUP = "ALL"


class AccessLevel(enum.IntEnum):
    """Ordered permission levels."""

    NONE = 0
    READ = 1
    EDIT = 2
    CREATE = 4
    UPLOAD = 8
    DELETE = 16

    @classmethod
    def parse(cls, value: str | int) -> AccessLevel:
        """Return the level named or numbered by ``value``.

        Raises
        ------
        ValueError
            Raised when ``value`` names no level.
        """
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[value.strip().upper()]
        except KeyError as exc:
            msg = f"Unknown access level '{value}'."
            raise ValueError(msg) from exc


@dc.dataclass(frozen=True, slots=True)
class AclRule:
    """Grant ``level`` to ``subject`` on ``scope``."""

    scope: str
    subject: str
    level: AccessLevel


@dc.dataclass(frozen=True, slots=True)
class Viewer:
    """The user a page is rendered for."""

    user: str = ""
    groups: tuple[str, ...] = ()

    @property
    def subjects(self) -> frozenset[str]:
        """Return the user name and ``@group`` subjects of this viewer."""
        subjects = {f"@{group}" for group in (*self.groups, ALL_GROUP)}
        if self.user:
            subjects.add(self.user)
        return frozenset(subjects)


class AccessControl:
    """Evaluate :class:`AclRule` lists for a viewer."""

    def __init__(self, rules: cabc.Iterable[AclRule]) -> None:
        self._by_scope: dict[str, list[AclRule]] = {}
        for rule in rules:
            self._by_scope.setdefault(rule.scope, []).append(rule)

    def level(self, page_id: str, viewer: Viewer) -> AccessLevel:
        """Return the access level ``viewer`` has on ``page_id``."""
        subjects = viewer.subjects
        for scope in self._scopes(page_id):
            matching = [
                rule.level
                for rule in self._by_scope.get(scope, ())
                if rule.subject in subjects
            ]
            if matching:
                return max(matching)
        return AccessLevel.NONE

    def can_read(self, page_id: str, viewer: Viewer) -> bool:
        """Return True when ``viewer`` may read ``page_id``."""
        return self.level(page_id, viewer) >= AccessLevel.READ

    @staticmethod
    def _scopes(page_id: str) -> list[str]:
        """Return the scopes covering ``page_id``, most specific first."""
        scopes = [page_id]
        namespace = get_ns(page_id)
        while namespace:
            scopes.append(f"{namespace}:*")
            namespace = get_ns(namespace)
        scopes.append("*")
        return scopes


__all__ = ["ALL_GROUP", "AccessControl", "AccessLevel", "AclRule", "Viewer"]
