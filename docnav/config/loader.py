"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_acl_rules, _optional_str, _parse_useheading, _resolve_dir
from .models import SiteConfig, SiteConfigError, WikiConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the wiki and its access rules.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/docnav.yaml``). Relative directories inside the file are
        resolved against the file's own directory.

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping or a setting is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docnav.config import load_site_config
    >>> config = load_site_config(Path("config/docnav.yaml"))  # doctest: +SKIP
    >>> config.wiki.start  # doctest: +SKIP
    'start'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    wiki_raw = raw.get("wiki") or {}
    if not isinstance(wiki_raw, dict):
        msg = "The 'wiki' block must be a mapping."
        raise SiteConfigError(msg)

    wiki = _build_wiki_config(wiki_raw, base_dir=path.resolve().parent)
    rules = _build_acl_rules(raw.get("acl"))
    if rules is None:
        return SiteConfig(wiki=wiki)
    return SiteConfig(wiki=wiki, acl=rules)


def _build_wiki_config(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> WikiConfig:
    """Build a WikiConfig from ``payload`` using dataclass defaults."""
    defaults = WikiConfig()
    start = _optional_str(payload.get("start")) or defaults.start
    if ":" in start:
        msg = f"The start page name '{start}' must not contain a namespace."
        raise SiteConfigError(msg)
    return WikiConfig(
        title=_optional_str(payload.get("title")) or defaults.title,
        pages_dir=_resolve_dir(payload.get("pages_dir"), defaults.pages_dir, base_dir),
        meta_dir=_resolve_dir(payload.get("meta_dir"), defaults.meta_dir, base_dir),
        output_dir=_resolve_dir(
            payload.get("output_dir"), defaults.output_dir, base_dir
        ),
        start=start,
        useheading=_parse_useheading(payload.get("useheading")),
        base_url=payload.get("base_url", defaults.base_url),
        media_url=payload.get("media_url", defaults.media_url),
        pygments_style=payload.get("pygments_style", defaults.pygments_style),
    )


__all__ = ["load_site_config"]
