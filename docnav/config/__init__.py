"""Load and validate docnav configuration YAML.

This subpackage parses the project's ``docnav.yaml`` file, applies defaults,
anchors relative directories at the configuration file, and produces typed
dataclasses (:class:`SiteConfig`, :class:`WikiConfig`) consumed by the wiki
host and the page generator. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docnav.config import load_site_config
>>> site = load_site_config(Path("config/docnav.yaml"))  # doctest: +SKIP
>>> site.wiki.useheading  # doctest: +SKIP
<UseHeading.NAVIGATION: 'navigation'>
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, UseHeading, WikiConfig

__all__ = [
    "SiteConfig",
    "SiteConfigError",
    "UseHeading",
    "WikiConfig",
    "load_site_config",
]
