"""File-backed page repository.

Page ``a:b:c`` is stored as ``<pages_dir>/a/b/c.md``.
"""

from __future__ import annotations

import typing as typ

from docnav._constants import PAGE_EXTENSION

from .ids import clean_id, id_to_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class PageNotFoundError(KeyError):
    """Raised when a requested page has no source file."""


class PageRepository:
    """Read page sources from a directory tree."""

    def __init__(self, pages_dir: Path, *, extension: str = PAGE_EXTENSION) -> None:
        self.pages_dir = pages_dir
        self.extension = extension

    def path_for(self, page_id: str) -> Path:
        """Return the source path of ``page_id`` whether or not it exists."""
        return self.pages_dir / f"{id_to_path(page_id)}{self.extension}"

    def exists(self, page_id: str) -> bool:
        """Return True when ``page_id`` has a source file."""
        if not page_id:
            return False
        return self.path_for(page_id).is_file()

    def read(self, page_id: str) -> str:
        """Return the Markdown source of ``page_id``.

        Raises
        ------
        PageNotFoundError
            Raised when the page has no source file.
        """
        path = self.path_for(page_id)
        if not path.is_file():
            msg = f"Page '{page_id}' does not exist (expected {path})."
            raise PageNotFoundError(msg)
        return path.read_text(encoding="utf-8")

    def iter_page_ids(self) -> cabc.Iterator[str]:
        """Yield every page id in the repository in sorted path order."""
        if not self.pages_dir.is_dir():
            return
        for path in sorted(self.pages_dir.rglob(f"*{self.extension}")):
            relative = path.relative_to(self.pages_dir).with_suffix("")
            yield clean_id(":".join(relative.parts))


__all__ = ["PageNotFoundError", "PageRepository"]
