"""Resolve author-written page references into canonical page ids.

References are resolved relative to the page that contains them:

- ``name`` (no colon) lives in the context page's namespace,
- ``.name``, ``..:name``, ``.:sub:name`` walk relative to that namespace,
- ``~name`` lives below the context page itself,
- ``:ns:name`` and ``ns:name`` are absolute,
- a trailing ``:`` (or a trailing ``.``/``..``) points at a namespace and is
  resolved to that namespace's head page.

Example
-------
>>> resolver = PageResolver("manual:install:linux", exists=lambda _id: False)
>>> resolver.resolve("..:faq#Top Questions")
('manual:faq', 'top-questions')
>>> resolver.resolve("windows")
('manual:install:windows', '')
"""

from __future__ import annotations

import logging
import re
import typing as typ

from docnav.wiki.ids import clean_fragment, clean_id, get_ns, no_ns

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[;/]")
_BARE_DOTS = re.compile(r"^((?:\.+:)*)(\.+)(?=[^:.])")


def namespace_head_candidates(namespace: str, start_page: str) -> tuple[str, ...]:
    """Return the page ids that may act as the head page of ``namespace``.

    In order: the configured start page inside the namespace, a page named
    like the namespace inside it, and a page named like the namespace itself.
    The root namespace only has the start page.
    """
    if not namespace:
        return (start_page,)
    return (
        f"{namespace}:{start_page}",
        f"{namespace}:{no_ns(namespace)}",
        namespace,
    )


class PageResolver:
    """Resolve references written on ``context_id`` to ``(page_id, fragment)``."""

    def __init__(
        self,
        context_id: str,
        *,
        exists: cabc.Callable[[str], bool],
        start_page: str = "start",
    ) -> None:
        self.context_id = context_id
        self.context_ns = get_ns(context_id)
        self.start_page = start_page
        self._exists = exists

    def resolve(self, raw: str) -> tuple[str, str]:
        """Return the canonical id and cleaned fragment for ``raw``.

        Resolution never fails: an empty reference yields ``("", "")`` and
        anything else yields the best cleaned id that can be derived.
        """
        id_part, _sep, fragment = raw.partition("#")
        fragment = clean_fragment(fragment) if fragment.strip() else ""
        id_part = id_part.strip()
        if not id_part:
            return (self.context_id if fragment else ""), fragment

        value = _SEPARATORS.sub(":", id_part)
        value = self._resolve_prefix(value)
        value, is_namespace = self._resolve_relatives(value)
        if is_namespace:
            value = self._resolve_head_page(value)
        resolved = clean_id(value)
        logger.debug("resolved %r on %s to %r", raw, self.context_id, resolved)
        return resolved, fragment

    def _resolve_prefix(self, value: str) -> str:
        """Anchor relative references to the context page or namespace."""
        if value.startswith("~"):
            return f"{self.context_id}:{value[1:]}"
        if value.startswith("."):
            value = _BARE_DOTS.sub(r"\1\2:", value)
            return f"{self.context_ns}:{value}"
        if ":" not in value:
            return f"{self.context_ns}:{value}"
        return value

    @staticmethod
    def _resolve_relatives(value: str) -> tuple[str, bool]:
        """Apply ``.`` and ``..`` components; report namespace references."""
        parts = value.split(":")
        is_namespace = parts[-1] in ("", ".", "..")
        result: list[str] = []
        for part in parts:
            stripped = part.strip()
            if stripped in ("", "."):
                continue
            if stripped == "..":
                if result:
                    result.pop()
                continue
            result.append(stripped)
        return ":".join(result), is_namespace

    def _resolve_head_page(self, namespace: str) -> str:
        """Return the first existing head page of ``namespace``."""
        candidates = namespace_head_candidates(clean_id(namespace), self.start_page)
        for candidate in candidates:
            if self._exists(candidate):
                return candidate
        return candidates[0]


__all__ = ["PageResolver", "namespace_head_candidates"]
