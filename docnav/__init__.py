"""Book-like previous/toc/next navigation for a Markdown wiki.

This package exposes the CLI entry points used by the ``docnav`` console
script to build a wiki, preview single pages, and print chain outlines.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docnav import main
>>> main()  # doctest: +SKIP
>>> from docnav import app
>>> app(["build", "--config", "config/docnav.yaml"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
