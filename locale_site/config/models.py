"""Typed dataclasses describing locale-aware site configuration structures."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import types
import typing as typ


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class DuplicateLocaleError(SiteConfigError):
    """Raised when a locale key is registered more than once."""


class InvalidLanguageTagError(SiteConfigError):
    """Raised when a locale declares a malformed BCP-47 language tag."""


class LocaleNotFoundError(SiteConfigError, KeyError):
    """Raised when a locale key is not present in the registry."""

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return str(self.args[0]) if self.args else ""


class InvalidLinkError(SiteConfigError):
    """Raised when a navigation link or sidebar prefix is not root-relative."""


class DuplicatePrefixError(SiteConfigError):
    """Raised when two sidebar groups resolve to the same route prefix."""


class UnsupportedTagKindError(SiteConfigError):
    """Raised when a head tag is not a meta, link, or script element."""


class AlreadyBuiltError(SiteConfigError):
    """Raised when ``SiteConfig.build`` is called on a built instance."""


TagName = typ.Literal["meta", "link", "script"]
Appearance = typ.Literal["light", "dark"]


@dc.dataclass(frozen=True, slots=True)
class Locale:
    """A language/region configuration unit with its own route prefix."""

    key: str
    label: str
    language_tag: str
    title: str
    description: str


@dc.dataclass(frozen=True, slots=True)
class NavItem:
    """Leaf navigation entry pointing at a root-relative page."""

    text: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """Named, ordered collection of navigation items."""

    text: str
    items: tuple[NavItem, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class RouteGroup:
    """Declarative sidebar sections shown for pages under ``prefix``."""

    prefix: str
    sections: tuple[SidebarGroup, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class EditLinkConfig:
    """Pattern used to build "edit this page" links for a locale."""

    pattern: str
    text: str

    def url_for(self, relative_path: str) -> str:
        """Return the edit URL for a content file relative to the docs root."""
        return self.pattern.replace(":path", relative_path.lstrip("/"))


@dc.dataclass(frozen=True, slots=True)
class LocaleNavSpec:
    """Navigation input for a single locale prior to prefixing."""

    nav: tuple[NavItem, ...] = ()
    sidebar: tuple[RouteGroup, ...] = ()
    edit_link: EditLinkConfig | None = None


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """Descriptor for an element injected into every page's ``<head>``.

    Attributes
    ----------
    tag_name : str
        Element name; only ``meta``, ``link`` and ``script`` are accepted by
        the assembler.
    attributes : Mapping[str, str]
        Element attributes in declaration order.
    body : str or None
        Inner text, used for inline scripts such as JSON-LD blocks.
    """

    tag_name: str
    attributes: cabc.Mapping[str, str] = dc.field(default_factory=dict)
    body: str | None = None

    def __post_init__(self) -> None:
        # Attributes are a read-only snapshot of the mapping passed in.
        object.__setattr__(
            self, "attributes", types.MappingProxyType(dict(self.attributes))
        )


@dc.dataclass(frozen=True, slots=True)
class SitemapEntry:
    """Crawler hints attached to a discovered route."""

    url: str
    changefreq: str
    priority: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.priority <= 1.0:
            msg = f"Sitemap priority {self.priority} for '{self.url}' is out of range."
            raise SiteConfigError(msg)


@dc.dataclass(frozen=True, slots=True)
class SocialLink:
    """Icon link rendered in the theme header."""

    icon: str
    link: str


@dc.dataclass(frozen=True, slots=True)
class FooterConfig:
    """Footer copy passed through to the theme."""

    message: str | None = None
    copyright: str | None = None


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Presentational settings the generator consumes without interpretation."""

    logo: str | None = None
    site_title: str | None = None
    social_links: tuple[SocialLink, ...] = ()
    footer: FooterConfig | None = None
    search_provider: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SiteSpec:
    """Declarative input consumed by :meth:`SiteConfig.build`.

    ``navigation`` and ``locale_head`` are keyed by locale key; locales with
    no entry get an empty navigation and no locale head layer.
    """

    locales: tuple[Locale, ...]
    sitemap_hostname: str
    navigation: cabc.Mapping[str, LocaleNavSpec] = dc.field(default_factory=dict)
    head_layers: tuple[tuple[HeadTag, ...], ...] = ()
    locale_head: cabc.Mapping[str, tuple[HeadTag, ...]] = dc.field(
        default_factory=dict
    )
    title: str = ""
    description: str = ""
    base: str = "/"
    appearance: Appearance = "dark"
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)


__all__ = [
    "AlreadyBuiltError",
    "Appearance",
    "DuplicateLocaleError",
    "DuplicatePrefixError",
    "EditLinkConfig",
    "FooterConfig",
    "HeadTag",
    "InvalidLanguageTagError",
    "InvalidLinkError",
    "Locale",
    "LocaleNavSpec",
    "LocaleNotFoundError",
    "NavItem",
    "RouteGroup",
    "SidebarGroup",
    "SiteConfigError",
    "SiteSpec",
    "SitemapEntry",
    "SocialLink",
    "TagName",
    "ThemeConfig",
    "UnsupportedTagKindError",
]
