"""Durable per-page metadata stored as JSON files.

Each page owns one metadata document, ``<meta_dir>/a/b/c.meta``, holding a
flat mapping of keys (``title``, ``headings``, ``docnavigation``, ...) to
JSON-compatible values. Documents are written once a page render completes;
the last render wins.
"""

from __future__ import annotations

import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from docnav._constants import META_EXTENSION

from .ids import id_to_path

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class MetadataStore:
    """Load and persist page metadata documents."""

    def __init__(self, meta_dir: Path) -> None:
        self.meta_dir = meta_dir
        self._cache: dict[str, dict[str, typ.Any]] = {}

    def path_for(self, page_id: str) -> Path:
        """Return the metadata file path of ``page_id``."""
        return self.meta_dir / f"{id_to_path(page_id)}{META_EXTENSION}"

    def load(self, page_id: str) -> dict[str, typ.Any]:
        """Return the metadata document of ``page_id``; empty when missing.

        Unreadable or corrupt documents are logged and treated as empty.
        """
        if page_id in self._cache:
            return self._cache[page_id]
        path = self.path_for(page_id)
        document: dict[str, typ.Any] = {}
        if path.is_file():
            try:
                decoded = msgspec_json.decode(path.read_bytes())
            except (OSError, msgspec.DecodeError) as exc:
                logger.warning("ignoring unreadable metadata %s: %s", path, exc)
                decoded = {}
            if isinstance(decoded, dict):
                document = decoded
        self._cache[page_id] = document
        return document

    def get(self, page_id: str, key: str) -> typ.Any:  # noqa: ANN401 - JSON value
        """Return the value stored under ``key`` for ``page_id`` or None."""
        return self.load(page_id).get(key)

    def save(self, page_id: str, metadata: typ.Mapping[str, typ.Any]) -> Path:
        """Replace the metadata document of ``page_id`` and return its path."""
        document = dict(metadata)
        path = self.path_for(page_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(msgspec_json.format(msgspec_json.encode(document), indent=2))
        self._cache[page_id] = document
        logger.debug("saved metadata for %s to %s", page_id, path)
        return path


__all__ = ["MetadataStore"]
