"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import typing as typ

from ..head import json_ld_tag
from .models import (
    EditLinkConfig,
    FooterConfig,
    HeadTag,
    NavItem,
    RouteGroup,
    SidebarGroup,
    SiteConfigError,
    SocialLink,
    ThemeConfig,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: cabc.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a string or raise naming the missing field."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} is missing '{key}'."
        raise SiteConfigError(msg)
    return value


def _build_nav_items(entries: object, context: str) -> tuple[NavItem, ...]:
    """Build navigation items from a list of ``{text, link}`` mappings."""
    match entries:
        case None:
            return ()
        case list() as items:
            pass
        case _:
            msg = f"{context} must be a list of navigation links."
            raise SiteConfigError(msg)
    links: list[NavItem] = []
    for entry in items:
        match entry:
            case {"text": text, "link": link} if text and link:
                links.append(NavItem(text=str(text), link=str(link)))
            case _:
                msg = f"{context} entries require 'text' and 'link'."
                raise SiteConfigError(msg)
    return tuple(links)


def _build_sections(entries: object, context: str) -> tuple[SidebarGroup, ...]:
    """Build the sidebar sections listed under one route prefix."""
    match entries:
        case list() as items:
            pass
        case _:
            msg = f"{context} must be a list of sections."
            raise SiteConfigError(msg)
    sections: list[SidebarGroup] = []
    for entry in items:
        match entry:
            case {"text": text, **rest} if text:
                sections.append(
                    SidebarGroup(
                        text=str(text),
                        items=_build_nav_items(
                            rest.get("items"), f"{context} section '{text}'"
                        ),
                    )
                )
            case _:
                msg = f"{context} sections require 'text'."
                raise SiteConfigError(msg)
    return tuple(sections)


def _build_route_groups(payload: object, context: str) -> tuple[RouteGroup, ...]:
    """Build route groups from a prefix mapping or a ``{prefix, sections}`` list."""
    match payload:
        case None:
            return ()
        case dict() as by_prefix:
            pairs = [(prefix, sections) for prefix, sections in by_prefix.items()]
        case list() as entries:
            pairs = []
            for entry in entries:
                match entry:
                    case {"prefix": prefix, "sections": sections}:
                        pairs.append((prefix, sections))
                    case _:
                        msg = f"{context} entries require 'prefix' and 'sections'."
                        raise SiteConfigError(msg)
        case _:
            msg = f"{context} must be a mapping or a list."
            raise SiteConfigError(msg)
    return tuple(
        RouteGroup(
            prefix=str(prefix),
            sections=_build_sections(sections, f"{context} '{prefix}'"),
        )
        for prefix, sections in pairs
    )


def _build_edit_link(payload: object, context: str) -> EditLinkConfig | None:
    """Build the edit link settings for a locale, if configured."""
    match payload:
        case None:
            return None
        case {"pattern": pattern, **rest} if pattern:
            return EditLinkConfig(
                pattern=str(pattern),
                text=_optional_str(rest.get("text")) or "Edit this page",
            )
        case _:
            msg = f"{context} edit_link requires a 'pattern'."
            raise SiteConfigError(msg)


def _build_head_tag(entry: object, context: str) -> HeadTag:
    """Build one head tag from ``[tag, attrs, body?]`` or ``{tag, attrs, body}``."""
    match entry:
        case [str() as tag_name, dict() as attrs]:
            body = None
        case [str() as tag_name, dict() as attrs, body]:
            pass
        case {"tag": str() as tag_name, **rest}:
            attrs = rest.get("attrs") or {}
            body = rest.get("body")
        case _:
            msg = f"{context} head entries must be [tag, attrs] or [tag, attrs, body]."
            raise SiteConfigError(msg)
    if not isinstance(attrs, dict):
        msg = f"{context} head tag '<{tag_name}>' attributes must be a mapping."
        raise SiteConfigError(msg)
    attributes = {str(name): _attribute_value(value) for name, value in attrs.items()}
    match body:
        case dict() as payload:
            tag = json_ld_tag(payload)
            return HeadTag(tag_name, attributes, tag.body)
        case None:
            return HeadTag(tag_name, attributes)
        case _:
            return HeadTag(tag_name, attributes, str(body))


def _build_head_tags(entries: object, context: str) -> tuple[HeadTag, ...]:
    """Build an ordered head layer from a list of head entries."""
    match entries:
        case None:
            return ()
        case list() as items:
            return tuple(_build_head_tag(entry, context) for entry in items)
        case _:
            msg = f"{context} head must be a list."
            raise SiteConfigError(msg)


def _attribute_value(value: object) -> str:
    """Render a YAML scalar as an HTML attribute value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_theme_config(payload: cabc.Mapping[str, typ.Any] | None) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    if not payload:
        return ThemeConfig()
    social_links: list[SocialLink] = []
    for entry in payload.get("social_links") or []:
        match entry:
            case {"icon": icon, "link": link} if icon and link:
                social_links.append(SocialLink(icon=str(icon), link=str(link)))
            case _:
                msg = "Theme social links require 'icon' and 'link'."
                raise SiteConfigError(msg)
    footer_raw = payload.get("footer")
    footer = (
        FooterConfig(
            message=_optional_str(footer_raw.get("message")),
            copyright=_optional_str(footer_raw.get("copyright")),
        )
        if isinstance(footer_raw, dict)
        else None
    )
    search = payload.get("search")
    search_provider = (
        _optional_str(search.get("provider"))
        if isinstance(search, dict)
        else _optional_str(search)
    )
    return ThemeConfig(
        logo=_optional_str(payload.get("logo")),
        site_title=_optional_str(payload.get("site_title")),
        social_links=tuple(social_links),
        footer=footer,
        search_provider=search_provider,
    )


__all__ = [
    "_attribute_value",
    "_build_edit_link",
    "_build_head_tag",
    "_build_head_tags",
    "_build_nav_items",
    "_build_route_groups",
    "_build_sections",
    "_build_theme_config",
    "_optional_str",
    "_require_str",
]
