"""Merge and render the ``<head>`` tags injected into every generated page.

Head tags arrive in layers: site-wide SEO defaults first, then locale
overrides, then per-page front matter. :class:`HeadTagAssembler` folds those
layers into one ordered sequence in which each tag identity (``meta`` by
``name``/``property``, ``link`` by ``rel``, ``script`` by ``type``) appears
once. A later layer replaces the values of an earlier tag but keeps its
position, so the emitted ``<head>`` stays stable between builds.

Example
-------
>>> from locale_site.config import HeadTag
>>> from locale_site.head import HeadTagAssembler
>>> base = [HeadTag("meta", {"name": "robots", "content": "noindex"})]
>>> page = [HeadTag("meta", {"name": "robots", "content": "index, follow"})]
>>> merged = HeadTagAssembler().merge([base, page])
>>> [tag.attributes["content"] for tag in merged]
['index, follow']
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ._constants import HEAD_KEY_ATTRIBUTES, HEAD_TEMPLATE, JSON_LD_TYPE
from .config.models import HeadTag, UnsupportedTagKindError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

IdentityKey = tuple[str, str]


def identity_key(tag: HeadTag) -> IdentityKey:
    """Return the ``(tag_name, key)`` pair used to deduplicate ``tag``.

    Raises
    ------
    UnsupportedTagKindError
        If ``tag.tag_name`` is not ``meta``, ``link`` or ``script``.
    """
    key_attributes = HEAD_KEY_ATTRIBUTES.get(tag.tag_name)
    if key_attributes is None:
        msg = (
            f"Unsupported head tag '<{tag.tag_name}>'; expected one of "
            f"{', '.join(HEAD_KEY_ATTRIBUTES)}."
        )
        raise UnsupportedTagKindError(msg)
    for attribute in key_attributes:
        value = tag.attributes.get(attribute)
        if value is not None:
            return tag.tag_name, str(value)
    if tag.tag_name == "meta" and "charset" in tag.attributes:
        return tag.tag_name, "charset"
    return tag.tag_name, ""


class HeadTagAssembler:
    """Fold ordered head tag layers into one deduplicated sequence."""

    def merge(
        self, layers: cabc.Iterable[cabc.Iterable[HeadTag]]
    ) -> tuple[HeadTag, ...]:
        """Merge ``layers`` (base first, most specific last).

        A tag whose identity was already seen replaces the earlier tag's
        attributes and body in place: first-seen position, last-seen value.
        All JSON-LD scripts share a single identity, so only one structured
        data block survives a merge.
        """
        merged: dict[IdentityKey, HeadTag] = {}
        for layer in layers:
            for tag in layer:
                merged[identity_key(tag)] = tag
        return tuple(merged.values())


def json_ld_tag(payload: cabc.Mapping[str, typ.Any]) -> HeadTag:
    """Build the structured-data script tag for ``payload``."""
    return HeadTag(
        "script",
        {"type": JSON_LD_TYPE},
        json.dumps(payload, ensure_ascii=False, separators=(",", ":")),
    )


class HeadRenderer:
    """Render merged head tags to HTML for injection into page templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["script_body"] = _escape_script_body
        self.template = self.env.get_template(HEAD_TEMPLATE)

    def render(self, tags: cabc.Iterable[HeadTag]) -> str:
        """Return the HTML for ``tags``, one element per line."""
        html = self.template.render(tags=list(tags))
        if html and not html.endswith("\n"):
            html += "\n"
        return html


def render_head(tags: cabc.Iterable[HeadTag]) -> str:
    """Render ``tags`` with the packaged head template."""
    return HeadRenderer().render(tags)


def _escape_script_body(body: str | None) -> str:
    # A literal "</" would close the script element early.
    return (body or "").replace("</", "<\\/")


__all__ = [
    "HeadRenderer",
    "HeadTagAssembler",
    "IdentityKey",
    "identity_key",
    "json_ld_tag",
    "render_head",
]
