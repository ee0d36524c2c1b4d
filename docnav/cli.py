"""Cyclopts CLI entrypoint for building and previewing docnav wikis.

The ``docnav`` console script defined here renders every page of a wiki to
static HTML (``docnav build``), renders a single page in preview mode without
touching stored metadata (``docnav preview``), and prints the aggregated
outline of a chain of pages together with any broken-link warnings
(``docnav outline``).

Examples
--------
Build the wiki described by the default configuration:

>>> from docnav.cli import main
>>> main()  # doctest: +SKIP

Preview an edited page before saving it:

>>> from docnav.cli import app
>>> app(
...     ["preview", "manual:install", "--source", "draft.md"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .generator import WikiPageGenerator
from .navigation import ChainWalker, NavigationStore, TocOptions
from .navigation.directive import parse_heading_range
from .wiki import PageNotFoundError, Viewer, WikiHost
from .wiki.ids import clean_id

DEFAULT_CONFIG = Path("config/docnav.yaml")

app = App(name="docnav", config=cyclopts.config.Env("DOCNAV_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_host(config: Path, user: str, groups: list[str] | None) -> WikiHost:
    """Build the wiki host from ``config`` for the given viewer."""
    site_config = load_site_config(config)
    viewer = Viewer(user=user, groups=tuple(groups or ()))
    return WikiHost.from_config(site_config, viewer=viewer)


@app.command(help="Render every page of the wiki to static HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to the docnav config", env_var="DOCNAV_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the output folder")
    ] = None,
    user: typ.Annotated[str, Parameter(help="Render pages as this user")] = "",
    group: typ.Annotated[
        list[str] | None, Parameter(help="Groups of the rendering user")
    ] = None,
    verbose: bool = False,
) -> None:
    """Render all wiki pages and refresh their navigation metadata.

    Parameters
    ----------
    config : Path, optional
        Path to the ``docnav.yaml`` configuration file.
    output_dir : Path or None, optional
        Override for the HTML output directory.
    user : str, optional
        Viewer name used for access checks; anonymous by default.
    group : list[str] or None, optional
        Groups of the viewer in addition to ``ALL``.
    verbose : bool, optional
        Log debug output.

    Returns
    -------
    None
        Writes metadata and HTML files and prints the written paths.
    """
    _configure_logging(verbose=verbose)
    host = _load_host(config, user, group)
    generator = WikiPageGenerator(host, output_dir=output_dir)
    for path in generator.run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Render one page in preview mode without saving metadata.")
def preview(
    page: str,
    *,
    source: typ.Annotated[
        Path | None, Parameter(help="Markdown file to preview instead of the page")
    ] = None,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the HTML here instead of stdout")
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to the docnav config", env_var="DOCNAV_CONFIG")
    ] = DEFAULT_CONFIG,
    user: str = "",
    group: list[str] | None = None,
    verbose: bool = False,
) -> None:
    """Render ``page`` as a preview.

    Parameters
    ----------
    page : str
        Page id to preview.
    source : Path or None, optional
        Draft Markdown to render in place of the stored page source.
    output : Path or None, optional
        File receiving the HTML; printed to stdout when omitted.

    Raises
    ------
    PageNotFoundError
        If no ``source`` is given and the page does not exist.
    """
    _configure_logging(verbose=verbose)
    host = _load_host(config, user, group)
    generator = WikiPageGenerator(host)
    text = source.read_text(encoding="utf-8") if source else None
    rendered = generator.preview(clean_id(page), text)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered.html, encoding="utf-8")
        print(f"wrote {_format_path(output)}")
    else:
        print(rendered.html)
    for message in rendered.messages:
        print(f"warning: {message.text}")


@app.command(help="Print the outline of the chain starting at a page.")
def outline(
    start: str,
    *,
    include_headings: typ.Annotated[
        str | None, Parameter(help="Heading levels to include, N or N-M")
    ] = None,
    numbers: bool = False,
    use_heading: bool = False,
    hide_page_links: bool = False,
    config: typ.Annotated[
        Path, Parameter(help="Path to the docnav config", env_var="DOCNAV_CONFIG")
    ] = DEFAULT_CONFIG,
    user: str = "",
    group: list[str] | None = None,
    verbose: bool = False,
) -> None:
    """Walk the chain from ``start`` using stored metadata and print it.

    Each entry is printed on its own line, indented by its nesting level,
    followed by one ``warning:`` line per broken back link or cycle.

    Raises
    ------
    PageNotFoundError
        If ``start`` does not exist.
    """
    _configure_logging(verbose=verbose)
    host = _load_host(config, user, group)
    start_id = clean_id(start)
    if not host.page_exists(start_id):
        msg = f"Page '{start_id}' does not exist."
        raise PageNotFoundError(msg)

    headings = parse_heading_range(include_headings) if include_headings else None
    if hide_page_links and headings is None:
        headings = (1, 2)
    options = TocOptions(
        start_id=start_id,
        include_headings=headings,
        numbered=numbers,
        use_heading_as_title=use_heading,
        hide_page_links=hide_page_links,
    )
    walker = ChainWalker(host, NavigationStore(host.metadata))
    result = walker.build_outline(options)
    for entry in result.entries.values():
        indent = "  " * (entry.level - 1)
        label = entry.title if entry.title is not None else entry.id
        print(f"{indent}- {label} ({entry.id})")
    for message in result.messages:
        print(f"warning: {message.text}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `docnav` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
