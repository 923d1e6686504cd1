"""Unit tests for head tag merging and rendering.

These tests cover identity-key deduplication (first-seen position, last-seen
value), the single JSON-LD slot, rejection of unsupported tag kinds, and the
HTML produced for injection into page templates.
"""

from __future__ import annotations

import json

import pytest
from bs4 import BeautifulSoup

from locale_site.config import HeadTag, UnsupportedTagKindError
from locale_site.head import HeadTagAssembler, identity_key, json_ld_tag, render_head


@pytest.fixture
def assembler() -> HeadTagAssembler:
    return HeadTagAssembler()


def test_later_layer_overrides_value(assembler: HeadTagAssembler) -> None:
    """A robots meta from a later layer replaces the base value."""
    merged = assembler.merge(
        [
            [HeadTag("meta", {"name": "robots", "content": "noindex"})],
            [HeadTag("meta", {"name": "robots", "content": "index, follow"})],
        ]
    )
    assert len(merged) == 1, f"expected a single robots tag, got {merged!r}"
    assert merged[0].attributes["content"] == "index, follow"


def test_override_keeps_first_seen_position(assembler: HeadTagAssembler) -> None:
    """The overriding tag takes the slot of the tag it replaces."""
    base = [
        HeadTag("meta", {"name": "author", "content": "base"}),
        HeadTag("meta", {"property": "og:title", "content": "Base"}),
        HeadTag("link", {"rel": "canonical", "href": "https://example.com/"}),
    ]
    page = [
        HeadTag("link", {"rel": "manifest", "href": "/manifest.json"}),
        HeadTag("meta", {"property": "og:title", "content": "Page"}),
    ]
    merged = assembler.merge([base, page])
    keys = [identity_key(tag) for tag in merged]
    assert keys == [
        ("meta", "author"),
        ("meta", "og:title"),
        ("link", "canonical"),
        ("link", "manifest"),
    ], f"unexpected order {keys!r}"
    assert merged[1].attributes["content"] == "Page", "last-seen value must win"


def test_identity_keys_unique_after_merge(assembler: HeadTagAssembler) -> None:
    """No identity key appears twice in merged output."""
    layers = [
        [
            HeadTag("link", {"rel": "icon", "href": "/favicon.svg"}),
            HeadTag("link", {"rel": "icon", "href": "/favicon.ico"}),
            HeadTag("meta", {"name": "theme-color", "content": "#646cff"}),
        ],
        [HeadTag("meta", {"name": "theme-color", "content": "#000"})],
    ]
    merged = assembler.merge(layers)
    keys = [identity_key(tag) for tag in merged]
    assert len(keys) == len(set(keys)), f"duplicate identity keys in {keys!r}"
    assert merged[0].attributes["href"] == "/favicon.ico"


def test_name_and_property_share_meta_namespace(assembler: HeadTagAssembler) -> None:
    """``name`` and ``property`` values key the same meta identity space."""
    merged = assembler.merge(
        [
            [HeadTag("meta", {"name": "og:title", "content": "A"})],
            [HeadTag("meta", {"property": "og:title", "content": "B"})],
        ]
    )
    assert [tag.attributes["content"] for tag in merged] == ["B"]


def test_json_ld_blocks_collapse_into_one(assembler: HeadTagAssembler) -> None:
    """Only one structured-data block survives a merge."""
    first = json_ld_tag({"@type": "WebSite", "name": "First"})
    second = json_ld_tag({"@type": "WebSite", "name": "Second"})
    merged = assembler.merge([[first], [second]])
    assert len(merged) == 1, "JSON-LD scripts share a single identity slot"
    assert json.loads(merged[0].body or "")["name"] == "Second"


def test_unsupported_tag_kind_rejected(assembler: HeadTagAssembler) -> None:
    """Only meta, link, and script tags may be merged."""
    with pytest.raises(UnsupportedTagKindError, match="style"):
        assembler.merge([[HeadTag("style", {}, "body { color: red; }")]])


def test_meta_charset_has_stable_identity() -> None:
    """Charset metas collapse together regardless of the declared encoding."""
    assert identity_key(HeadTag("meta", {"charset": "utf-8"})) == ("meta", "charset")


def test_render_head_emits_escaped_attributes() -> None:
    """Attributes are escaped and void elements are not closed."""
    html = render_head(
        [
            HeadTag("meta", {"name": "description", "content": 'Say "hi" & <bye>'}),
            HeadTag(
                "link",
                {"rel": "preconnect", "href": "https://fonts.gstatic.com", "crossorigin": ""},
            ),
        ]
    )
    soup = BeautifulSoup(html, "html.parser")
    meta = soup.find("meta")
    assert meta is not None and meta.get("content") == 'Say "hi" & <bye>'
    assert "&amp;" in html, "ampersands must be escaped in attribute values"
    link = soup.find("link")
    assert link is not None and link.get("crossorigin") == ""
    assert "</meta>" not in html and "</link>" not in html


def test_render_head_keeps_json_ld_body_parseable() -> None:
    """Script bodies are emitted raw so JSON-LD stays valid JSON."""
    tag = json_ld_tag({"@context": "https://schema.org", "name": "Guide </script>"})
    soup = BeautifulSoup(render_head([tag]), "html.parser")
    script = soup.find("script", attrs={"type": "application/ld+json"})
    assert script is not None, "expected a JSON-LD script element"
    payload = json.loads(script.string or "")
    assert payload["name"] == "Guide </script>", (
        "closing tag sequences must be neutralized without changing the data"
    )
