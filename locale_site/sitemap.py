"""Annotate discovered routes with crawler hints and write ``sitemap.xml``.

:class:`SitemapTransformer` is the pure policy the generator applies to each
route it discovers in the content tree: the site root is published with
priority ``1.0`` and every other page with ``0.8``, all on a weekly change
frequency. :class:`SitemapWriter` binds that policy to the site hostname and
renders the sitemaps.org ``urlset`` document.

Example
-------
>>> from locale_site.sitemap import Route, SitemapTransformer
>>> SitemapTransformer().transform(Route("/")).priority
1.0
>>> SitemapTransformer().transform(Route("/guide/")).priority
0.8
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import (
    DEFAULT_CHANGEFREQ,
    PAGE_PRIORITY,
    ROOT_PRIORITY,
    SITEMAP_NAMESPACE,
    SITEMAP_TEMPLATE,
)
from .config.models import SitemapEntry

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class HasUrl(typ.Protocol):
    """Anything the generator discovered that has a site-relative URL."""

    @property
    def url(self) -> str: ...


@dc.dataclass(frozen=True, slots=True)
class Route:
    """Site-relative route discovered by the generator."""

    url: str


class SitemapTransformer:
    """Pure mapping from a discovered route to its sitemap entry."""

    def transform(self, route: HasUrl) -> SitemapEntry:
        """Return the sitemap entry for ``route``."""
        priority = ROOT_PRIORITY if route.url == "/" else PAGE_PRIORITY
        return SitemapEntry(
            url=route.url, changefreq=DEFAULT_CHANGEFREQ, priority=priority
        )

    def __call__(self, route: HasUrl) -> SitemapEntry:
        return self.transform(route)


def absolute_url(hostname: str, url: str) -> str:
    """Join ``hostname`` and a site-relative ``url`` with a single slash."""
    return f"{hostname.rstrip('/')}/{url.lstrip('/')}"


class SitemapWriter:
    """Render ``sitemap.xml`` for a hostname using a transformer policy."""

    def __init__(
        self,
        hostname: str,
        transformer: SitemapTransformer | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the writer and its Jinja environment.

        Parameters
        ----------
        hostname : str
            Absolute site origin such as ``https://example.com``; prefixed to
            every route URL to form ``<loc>`` values.
        transformer : SitemapTransformer, optional
            Policy applied to every route. Defaults to the weekly policy.
        templates_dir : Path, optional
            Directory containing ``sitemap.xml.jinja``. Defaults to the
            packaged templates.
        """
        self.hostname = hostname
        self.transformer = transformer or SitemapTransformer()
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template(SITEMAP_TEMPLATE)

    def entries(self, routes: cabc.Iterable[HasUrl]) -> list[SitemapEntry]:
        """Transform ``routes`` in the order they were discovered."""
        return [self.transformer.transform(route) for route in routes]

    def render(self, routes: cabc.Iterable[HasUrl]) -> str:
        """Return the sitemap XML document for ``routes``."""
        context = {
            "namespace": SITEMAP_NAMESPACE,
            "entries": [
                {
                    "loc": absolute_url(self.hostname, entry.url),
                    "changefreq": entry.changefreq,
                    "priority": entry.priority,
                }
                for entry in self.entries(routes)
            ],
        }
        xml = self.template.render(**context)
        if not xml.endswith("\n"):
            xml += "\n"
        return xml

    def write(self, routes: cabc.Iterable[HasUrl], output_path: Path) -> Path:
        """Render the sitemap and write it to ``output_path`` as UTF-8."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(routes), encoding="utf-8")
        return output_path


__all__ = [
    "HasUrl",
    "Route",
    "SitemapTransformer",
    "SitemapWriter",
    "absolute_url",
]
