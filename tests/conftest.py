"""Shared fixtures that build throwaway wikis under ``tmp_path``.

``make_wiki`` writes page sources for the given ``{page_id: markdown}``
mapping, builds a :class:`~docnav.wiki.WikiHost` around them, and, unless told
otherwise, runs the metadata pass so every page's navigation triple and
heading outline is stored before the test inspects anything.
"""

from __future__ import annotations

import typing as typ

import pytest

from docnav.config import SiteConfig, UseHeading, WikiConfig
from docnav.generator import WikiPageGenerator
from docnav.wiki import AccessLevel, AclRule, Viewer, WikiHost
from docnav.wiki.ids import id_to_path

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


class WikiFactory(typ.Protocol):
    def __call__(
        self,
        pages: cabc.Mapping[str, str],
        *,
        acl: list[AclRule] | None = None,
        useheading: UseHeading = UseHeading.NONE,
        viewer: Viewer | None = None,
        collect: bool = True,
    ) -> WikiHost: ...


def write_page(pages_dir: Path, page_id: str, text: str) -> Path:
    """Write ``text`` as the source of ``page_id`` below ``pages_dir``."""
    path = pages_dir / f"{id_to_path(page_id)}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def make_wiki(tmp_path: Path) -> WikiFactory:
    """Return a factory creating a wiki with the given page sources."""

    def _factory(
        pages: cabc.Mapping[str, str],
        *,
        acl: list[AclRule] | None = None,
        useheading: UseHeading = UseHeading.NONE,
        viewer: Viewer | None = None,
        collect: bool = True,
    ) -> WikiHost:
        wiki = WikiConfig(
            title="Fixture Wiki",
            pages_dir=tmp_path / "pages",
            meta_dir=tmp_path / "meta",
            output_dir=tmp_path / "public",
            useheading=useheading,
        )
        wiki.pages_dir.mkdir(parents=True, exist_ok=True)
        for page_id, text in pages.items():
            write_page(wiki.pages_dir, page_id, text)
        rules = acl if acl is not None else [AclRule("*", "@ALL", AccessLevel.READ)]
        host = WikiHost.from_config(SiteConfig(wiki=wiki, acl=rules), viewer=viewer)
        if collect:
            generator = WikiPageGenerator(host)
            for page_id in host.pages.iter_page_ids():
                generator.collect_metadata(page_id)
        return host

    return _factory
