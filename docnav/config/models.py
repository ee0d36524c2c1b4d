"""Typed dataclasses describing docnav site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path

from docnav.wiki.acl import AccessLevel, AclRule


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class UseHeading(enum.Enum):
    """Where first headings replace page names as link titles."""

    NONE = "none"
    NAVIGATION = "navigation"
    CONTENT = "content"
    ALL = "all"

    @property
    def navigation(self) -> bool:
        """Return True when outlines should use first headings."""
        return self in (UseHeading.NAVIGATION, UseHeading.ALL)

    @property
    def content(self) -> bool:
        """Return True when links in page content should use first headings."""
        return self in (UseHeading.CONTENT, UseHeading.ALL)


@dc.dataclass(slots=True)
class WikiConfig:
    """Location and presentation settings of one wiki."""

    title: str = "Wiki"
    pages_dir: Path = Path("pages")
    meta_dir: Path = Path("meta")
    output_dir: Path = Path("public")
    start: str = "start"
    useheading: UseHeading = UseHeading.NAVIGATION
    base_url: str = "/"
    media_url: str = "/media/"
    pygments_style: str = "monokai"


@dc.dataclass(slots=True)
class SiteConfig:
    """Wiki settings together with its access rules."""

    wiki: WikiConfig = dc.field(default_factory=WikiConfig)
    acl: list[AclRule] = dc.field(
        default_factory=lambda: [AclRule("*", "@ALL", AccessLevel.READ)]
    )


__all__ = ["SiteConfig", "SiteConfigError", "UseHeading", "WikiConfig"]
