"""Load and validate locale-aware site configuration YAML.

This subpackage parses the project's ``site.yaml`` file into strongly typed
dataclasses: locales with their display metadata, per-locale navigation and
sidebar input, head tag layers, and the pass-through theme settings. The
primary entry points are :func:`load_site_spec`, which returns the
declarative :class:`SiteSpec`, and :func:`load_site_config`, which also builds
the immutable :class:`~locale_site.site.SiteConfig` the generator reads.

Examples
--------
>>> from pathlib import Path
>>> from locale_site.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.locale_site("zh").nav[0].link  # doctest: +SKIP
'/zh/guide/'
"""

from .models import (
    AlreadyBuiltError,
    DuplicateLocaleError,
    DuplicatePrefixError,
    EditLinkConfig,
    FooterConfig,
    HeadTag,
    InvalidLanguageTagError,
    InvalidLinkError,
    Locale,
    LocaleNavSpec,
    LocaleNotFoundError,
    NavItem,
    RouteGroup,
    SidebarGroup,
    SiteConfigError,
    SiteSpec,
    SitemapEntry,
    SocialLink,
    ThemeConfig,
    UnsupportedTagKindError,
)
from .loader import load_site_config, load_site_spec

__all__ = [
    "AlreadyBuiltError",
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
    "ThemeConfig",
    "UnsupportedTagKindError",
    "load_site_config",
    "load_site_spec",
]
