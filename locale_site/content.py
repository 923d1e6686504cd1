r"""Discover routable pages in a Markdown content tree.

The generator publishes every ``*.md`` file below the content root. This
module maps those files to site routes the same way the generator does
(``index.md`` becomes its directory route) and reads the optional YAML front
matter block so pages can contribute their own head tags.

Example
-------
>>> from locale_site.content import parse_front_matter
>>> meta, body = parse_front_matter("---\ntitle: State\n---\n# State\n")
>>> meta["title"], body
('State', '# State\n')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .config.helpers import _build_head_tags, _optional_str
from .config.models import HeadTag, SiteConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FRONT_MATTER_FENCE = "---"


@dc.dataclass(frozen=True, slots=True)
class ContentPage:
    """A Markdown source file and the route it is published at.

    Attributes
    ----------
    url : str
        Site-relative route, always starting with ``/``.
    source : Path
        Path of the Markdown file relative to the content root.
    front_matter : Mapping[str, Any]
        Parsed YAML front matter; empty when the file has none.
    """

    url: str
    source: Path
    front_matter: cabc.Mapping[str, typ.Any] = dc.field(default_factory=dict)


def parse_front_matter(
    text: str, *, source: Path | None = None
) -> tuple[dict[str, typ.Any], str]:
    """Split a leading ``---`` delimited YAML block from Markdown ``text``.

    Returns the parsed mapping and the remaining body. Text without a closed
    front matter block is returned unchanged with an empty mapping.

    Raises
    ------
    SiteConfigError
        If the front matter is not valid YAML or is not a mapping.
    """
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return {}, clean_text
    end = next(
        (
            index
            for index in range(1, len(lines))
            if lines[index].strip() == FRONT_MATTER_FENCE
        ),
        None,
    )
    if end is None:
        return {}, clean_text

    label = f"'{source}'" if source else "page"
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load("".join(lines[1:end])) or {}
    except YAMLError as exc:
        msg = f"Front matter in {label} is not valid YAML: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Front matter in {label} must be a mapping."
        raise SiteConfigError(msg)
    return dict(loaded), "".join(lines[end + 1 :])


def route_for(relative_path: Path, *, clean_urls: bool = False) -> str:
    """Return the site route for a Markdown file relative to the content root."""
    parts = list(relative_path.with_suffix("").parts)
    if parts and parts[-1] == "index":
        directory = "/".join(parts[:-1])
        return f"/{directory}/" if directory else "/"
    suffix = "" if clean_urls else ".html"
    return f"/{'/'.join(parts)}{suffix}"


def discover_pages(
    content_dir: Path, *, clean_urls: bool = False
) -> list[ContentPage]:
    """Return every publishable page below ``content_dir`` sorted by route.

    Dot-prefixed directories (``.vitepress``) and paths whose components
    start with ``_`` (partials) are skipped.
    """
    if not content_dir.is_dir():
        msg = f"Content directory '{content_dir}' not found."
        raise FileNotFoundError(msg)
    pages: list[ContentPage] = []
    for path in content_dir.rglob("*.md"):
        relative = path.relative_to(content_dir)
        if any(part.startswith((".", "_")) for part in relative.parts):
            continue
        front_matter, _body = parse_front_matter(
            path.read_text(encoding="utf-8"), source=relative
        )
        pages.append(
            ContentPage(
                url=route_for(relative, clean_urls=clean_urls),
                source=relative,
                front_matter=front_matter,
            )
        )
    return sorted(pages, key=lambda page: page.url)


def find_page(pages: cabc.Iterable[ContentPage], url: str) -> ContentPage | None:
    """Return the page published at ``url``, if any."""
    return next((page for page in pages if page.url == url), None)


def page_head(page: ContentPage) -> tuple[HeadTag, ...]:
    """Return the head layer contributed by ``page``'s front matter.

    ``title`` and ``description`` become the matching Open Graph and
    description metas; explicit ``head`` entries follow so they can refine
    them.
    """
    tags: list[HeadTag] = []
    title = _optional_str(page.front_matter.get("title"))
    description = _optional_str(page.front_matter.get("description"))
    if title:
        tags.append(HeadTag("meta", {"property": "og:title", "content": title}))
    if description:
        tags.append(HeadTag("meta", {"name": "description", "content": description}))
        tags.append(
            HeadTag("meta", {"property": "og:description", "content": description})
        )
    tags.extend(
        _build_head_tags(page.front_matter.get("head"), f"Page '{page.source}'")
    )
    return tuple(tags)


__all__ = [
    "ContentPage",
    "discover_pages",
    "find_page",
    "page_head",
    "parse_front_matter",
    "route_for",
]
