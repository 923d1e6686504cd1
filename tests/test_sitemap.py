"""Unit tests for the sitemap policy and XML writer."""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from locale_site.config import SiteConfigError, SitemapEntry
from locale_site.sitemap import Route, SitemapTransformer, SitemapWriter, absolute_url

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


def test_root_route_gets_top_priority() -> None:
    entry = SitemapTransformer().transform(Route("/"))
    assert entry == SitemapEntry(url="/", changefreq="weekly", priority=1.0)


@pytest.mark.parametrize("url", ["/guide/", "/zh/", "/api/define-store.html", ""])
def test_other_routes_get_default_priority(url: str) -> None:
    entry = SitemapTransformer().transform(Route(url))
    assert entry.priority == 0.8, f"expected 0.8 for {url!r}, got {entry.priority}"
    assert entry.changefreq == "weekly"


def test_transform_is_idempotent() -> None:
    """Repeated transforms of the same URL return equal entries."""
    transformer = SitemapTransformer()
    assert transformer.transform(Route("/guide/")) == transformer.transform(
        Route("/guide/")
    )
    assert transformer(Route("/")) == transformer.transform(Route("/"))


def test_entry_priority_must_be_in_range() -> None:
    with pytest.raises(SiteConfigError):
        SitemapEntry(url="/", changefreq="weekly", priority=1.5)


@pytest.mark.parametrize(
    ("hostname", "url", "expected"),
    [
        ("https://allfun.net", "/", "https://allfun.net/"),
        ("https://allfun.net/", "/guide/", "https://allfun.net/guide/"),
        ("https://allfun.net", "zh/", "https://allfun.net/zh/"),
    ],
)
def test_absolute_url_joins_with_single_slash(
    hostname: str, url: str, expected: str
) -> None:
    assert absolute_url(hostname, url) == expected


def test_writer_renders_urlset(tmp_path: Path) -> None:
    """The sitemap lists every route with its policy values in order."""
    writer = SitemapWriter("https://allfun.net")
    output = writer.write(
        [Route("/"), Route("/guide/"), Route("/zh/guide/state.html")],
        tmp_path / "public" / "sitemap.xml",
    )
    text = output.read_text(encoding="utf-8")
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    soup = BeautifulSoup(text, "html.parser")
    urlset = soup.find("urlset")
    assert urlset is not None
    assert urlset.get("xmlns") == "http://www.sitemaps.org/schemas/sitemap/0.9"
    locs = [node.get_text() for node in soup.find_all("loc")]
    assert locs == [
        "https://allfun.net/",
        "https://allfun.net/guide/",
        "https://allfun.net/zh/guide/state.html",
    ], f"unexpected locs {locs!r}"
    priorities = [node.get_text() for node in soup.find_all("priority")]
    assert priorities == ["1.0", "0.8", "0.8"]
    freqs = {node.get_text() for node in soup.find_all("changefreq")}
    assert freqs == {"weekly"}


def test_writer_escapes_urls() -> None:
    xml = SitemapWriter("https://allfun.net").render([Route("/search?q=a&b=c")])
    assert "q=a&amp;b=c" in xml, "ampersands in URLs must be XML-escaped"


def test_writer_uses_injected_transformer(mocker: MockerFixture) -> None:
    """Every route passes through the bound transformer exactly once."""
    transformer = SitemapTransformer()
    spy = mocker.spy(transformer, "transform")
    SitemapWriter("https://allfun.net", transformer).render(
        [Route("/"), Route("/guide/")]
    )
    assert spy.call_count == 2, f"expected 2 transforms, got {spy.call_count}"
