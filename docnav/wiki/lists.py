"""Nested HTML list formatter driven by per-item nesting levels."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ListItem(typ.Protocol):
    """Anything carrying a nesting level and an ordered-list flag."""

    level: int
    ordered: bool


ItemT = typ.TypeVar("ItemT", bound=ListItem)


def build_list(
    items: cabc.Iterable[ItemT],
    css_class: str,
    formatter: cabc.Callable[[ItemT], str],
) -> str:
    """Render ``items`` as nested ``<ul>``/``<ol>`` lists.

    Parameters
    ----------
    items : Iterable
        Items in display order; ``level`` 1 is the outermost list.
    css_class : str
        Class attribute applied to every list element.
    formatter : Callable
        Returns the inner HTML of one item.

    Returns
    -------
    str
        The list markup; empty when there are no items. Skipped levels are
        bridged with ``<li class="clear">`` wrappers.
    """
    parts: list[str] = []
    open_tags: list[str] = []
    for item in items:
        level = max(item.level, 1)
        depth = len(open_tags)
        if level > depth:
            for step in range(level - depth):
                if step:
                    parts.append('<li class="clear">')
                tag = "ol" if item.ordered else "ul"
                parts.append(f'\n<{tag} class="{css_class}">\n')
                open_tags.append(tag)
        elif level < depth:
            parts.append("</li>\n")
            for _ in range(depth - level):
                parts.append(f"</{open_tags.pop()}>\n</li>\n")
        elif depth:
            parts.append("</li>\n")
        content = formatter(item)
        parts.append(f'<li class="level{level}"><div class="li">{content}</div>')

    if open_tags:
        parts.append("</li>\n")
    while open_tags:
        parts.append(f"</{open_tags.pop()}>\n")
        if open_tags:
            parts.append("</li>\n")
    return "".join(parts)


__all__ = ["ListItem", "build_list"]
