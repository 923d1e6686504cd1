"""Cyclopts CLI entrypoint for validating and exporting site configuration.

The ``site`` console script defined here loads ``config/site.yaml``, builds
the locale-aware :class:`~locale_site.site.SiteConfig`, and writes the
artefacts a static site generator consumes at build time: ``sitemap.xml``,
a JSON snapshot of navigation and head tags, and the merged ``<head>`` HTML
for an individual page. Typical usage runs ``site check`` in CI and
``site sitemap`` after the content tree is finalized.

Examples
--------
Validate the default configuration:

>>> from locale_site.cli import main
>>> main()  # doctest: +SKIP

Write the sitemap for a docs tree into a custom location:

>>> from locale_site.cli import app
>>> app.run(
...     ["sitemap", "--content-dir", "docs", "--output", "dist/sitemap.xml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .content import discover_pages, find_page, page_head
from .head import render_head

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_CONTENT_DIR = Path("docs")

app = App(name="site", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
ContentDirOption = typ.Annotated[
    Path, Parameter(help="Markdown content root", env_var="INPUT_CONTENT_DIR")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Validate the site config and summarize each locale.")
def check(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Build the site configuration and print one summary line per locale.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).

    Returns
    -------
    None
        Prints the locale summaries and the merged head tag count.

    Raises
    ------
    SiteConfigError
        If the configuration fails validation; the first error aborts the run.
    """
    site = load_site_config(config)
    for locale in site.locales:
        resolved = site.locale_site(locale.key)
        root = resolved.path_prefix or "/"
        print(
            f"{locale.key} ({locale.language_tag}) at {root}: "
            f"{len(resolved.nav)} nav links, {len(resolved.sidebar)} sidebar prefixes"
        )
    print(f"head: {len(site.head)} tags")


@app.command(help="Print the merged <head> tags for a page.")
def head(
    *,
    page: typ.Annotated[
        str, Parameter(help="Site route of the page", env_var="INPUT_PAGE")
    ] = "/",
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = DEFAULT_CONTENT_DIR,
    clean_urls: bool = False,
) -> None:
    """Print the head HTML injected into ``page``.

    Site, locale, and page layers are merged in that order. The page layer
    comes from the front matter of the Markdown file published at ``page``
    when ``content_dir`` exists and contains it.
    """
    site = load_site_config(config)
    page_tags = ()
    if content_dir.is_dir():
        source_page = find_page(discover_pages(content_dir, clean_urls=clean_urls), page)
        if source_page is not None:
            page_tags = page_head(source_page)
    print(render_head(site.head_for(page, page_tags)), end="")


@app.command(help="Write sitemap.xml for every page in the content tree.")
def sitemap(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    content_dir: ContentDirOption = DEFAULT_CONTENT_DIR,
    output: typ.Annotated[
        Path, Parameter(help="Sitemap output path", env_var="INPUT_OUTPUT")
    ] = Path("public/sitemap.xml"),
    clean_urls: bool = False,
) -> None:
    """Discover routes under ``content_dir`` and write the sitemap.

    Parameters
    ----------
    config : Path, optional
        Path to the site configuration; provides the sitemap hostname.
    content_dir : Path, optional
        Root of the Markdown content tree.
    output : Path, optional
        Destination for ``sitemap.xml``; parent directories are created.
    clean_urls : bool, optional
        Publish pages without the ``.html`` suffix.
    """
    site = load_site_config(config)
    pages = discover_pages(content_dir, clean_urls=clean_urls)
    written = site.sitemap_writer().write(pages, output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Write the built configuration as JSON for the generator.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path, Parameter(help="JSON output path", env_var="INPUT_OUTPUT")
    ] = Path("public/site-config.json"),
) -> None:
    """Serialize the built navigation, head tags, and theme to ``output``."""
    site = load_site_config(config)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(site.as_dict(), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    print(f"wrote {_format_path(output)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``site`` console command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
