"""Utility helpers shared by the docnav configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from docnav.wiki.acl import AccessLevel, AclRule

from .models import SiteConfigError, UseHeading


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_dir(value: object | None, default: Path, base_dir: Path) -> Path:
    """Return ``value`` as a path anchored at ``base_dir`` when relative."""
    text = _optional_str(value)
    path = Path(text) if text else default
    if path.is_absolute():
        return path
    return base_dir / path


def _parse_useheading(value: object | None) -> UseHeading:
    """Map the ``useheading`` setting onto :class:`UseHeading`.

    Booleans are accepted as shorthands: true means ``all``, false ``none``.
    """
    match value:
        case None:
            return UseHeading.NAVIGATION
        case bool() as flag:
            return UseHeading.ALL if flag else UseHeading.NONE
        case str() as text:
            try:
                return UseHeading(text.strip().lower())
            except ValueError as exc:
                allowed = ", ".join(member.value for member in UseHeading)
                msg = f"Invalid useheading '{text}'; expected one of: {allowed}."
                raise SiteConfigError(msg) from exc
        case _:
            msg = f"Invalid useheading value {value!r}."
            raise SiteConfigError(msg)


def _build_acl_rules(payload: object | None) -> list[AclRule] | None:
    """Build ACL rules from a list of ``{scope, subject, level}`` mappings."""
    if payload is None:
        return None
    if not isinstance(payload, list):
        msg = "The 'acl' block must be a list of rules."
        raise SiteConfigError(msg)
    rules: list[AclRule] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            msg = f"ACL rule #{index + 1} must be a mapping."
            raise SiteConfigError(msg)
        rule: typ.Mapping[str, typ.Any] = entry
        scope = _optional_str(rule.get("scope")) or "*"
        subject = _optional_str(rule.get("subject")) or "@ALL"
        try:
            level = AccessLevel.parse(rule.get("level", "read"))
        except ValueError as exc:
            msg = f"ACL rule #{index + 1}: {exc}"
            raise SiteConfigError(msg) from exc
        rules.append(AclRule(scope=scope, subject=subject, level=level))
    return rules


__all__ = [
    "_build_acl_rules",
    "_optional_str",
    "_parse_useheading",
    "_resolve_dir",
]
