"""Composition root assembling a locale-aware site configuration.

:class:`SiteConfig` starts out unbuilt. :meth:`SiteConfig.build` registers
locales, builds each locale's top navigation and sidebar, merges the head tag
layers, and binds the sitemap policy to the site hostname, in that order. It
either succeeds completely or raises the first component error, leaving the
instance unbuilt. A built instance is read-only and cannot be rebuilt; a
watch-mode rebuild constructs a fresh ``SiteConfig``.

Example
-------
>>> from locale_site.config import Locale, SiteSpec
>>> from locale_site.site import SiteConfig
>>> spec = SiteSpec(
...     locales=(Locale("root", "English", "en-US", "Guide", "Docs"),),
...     sitemap_hostname="https://example.com",
... )
>>> site = SiteConfig().build(spec)
>>> site.is_built
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .config.models import (
    AlreadyBuiltError,
    HeadTag,
    LocaleNavSpec,
    SiteConfigError,
)
from .head import HeadTagAssembler
from .locales import LocaleRegistry
from .navigation import NavigationBuilder, SidebarTree
from .sitemap import SitemapTransformer, SitemapWriter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .config.models import (
        Appearance,
        EditLinkConfig,
        Locale,
        NavItem,
        SidebarGroup,
        SiteSpec,
        ThemeConfig,
    )


class BuildState(enum.Enum):
    """Lifecycle of a :class:`SiteConfig`."""

    UNBUILT = "unbuilt"
    BUILT = "built"


@dc.dataclass(frozen=True, slots=True)
class LocaleSite:
    """Navigation and display settings resolved for one locale."""

    locale: Locale
    path_prefix: str
    nav: tuple[NavItem, ...]
    sidebar: SidebarTree
    head: tuple[HeadTag, ...] = ()
    edit_link: EditLinkConfig | None = None

    def sidebar_for(self, path: str) -> tuple[SidebarGroup, ...]:
        """Return the sidebar sections shown on the page at ``path``."""
        return self.sidebar.lookup(path)


@dc.dataclass(frozen=True, slots=True)
class _BuiltSite:
    registry: LocaleRegistry
    locales: dict[str, LocaleSite]
    head: tuple[HeadTag, ...]
    transformer: SitemapTransformer
    sitemap_hostname: str
    title: str
    description: str
    base: str
    appearance: Appearance
    theme: ThemeConfig


class SiteConfig:
    """One-shot, read-only configuration consumed by the site generator."""

    __slots__ = ("_built", "_head_assembler")

    def __init__(self) -> None:
        self._built: _BuiltSite | None = None
        self._head_assembler = HeadTagAssembler()

    @property
    def state(self) -> BuildState:
        return BuildState.UNBUILT if self._built is None else BuildState.BUILT

    @property
    def is_built(self) -> bool:
        return self._built is not None

    def build(self, spec: SiteSpec) -> SiteConfig:
        """Assemble every component described by ``spec`` and return ``self``.

        Parameters
        ----------
        spec : SiteSpec
            Declarative locales, per-locale navigation, head layers, sitemap
            hostname and pass-through theme settings.

        Returns
        -------
        SiteConfig
            This instance, now in the ``BUILT`` state.

        Raises
        ------
        AlreadyBuiltError
            If this instance was already built; the existing state is kept.
        SiteConfigError
            The first component failure (duplicate or malformed locale,
            unknown locale in the navigation input, invalid link, duplicate
            sidebar prefix, or unsupported head tag). Nothing is retained.
        """
        if self._built is not None:
            msg = "SiteConfig has already been built; construct a new instance."
            raise AlreadyBuiltError(msg)

        registry = LocaleRegistry()
        for locale in spec.locales:
            registry.register(locale)
        if not len(registry):
            msg = "At least one locale is required to build a site."
            raise SiteConfigError(msg)

        for key in (*spec.navigation, *spec.locale_head):
            registry.get(key)

        navigation = NavigationBuilder(registry)
        locales: dict[str, LocaleSite] = {}
        for locale in registry.all():
            nav_spec = spec.navigation.get(locale.key) or LocaleNavSpec()
            locales[locale.key] = LocaleSite(
                locale=locale,
                path_prefix=registry.path_prefix(locale),
                nav=navigation.build_top_nav(locale, nav_spec.nav),
                sidebar=navigation.build_sidebar(locale, nav_spec.sidebar),
                head=self._head_assembler.merge([spec.locale_head.get(locale.key, ())]),
                edit_link=nav_spec.edit_link,
            )

        head = self._head_assembler.merge(spec.head_layers)

        self._built = _BuiltSite(
            registry=registry,
            locales=locales,
            head=head,
            transformer=SitemapTransformer(),
            sitemap_hostname=spec.sitemap_hostname,
            title=spec.title,
            description=spec.description,
            base=spec.base,
            appearance=spec.appearance,
            theme=spec.theme,
        )
        return self

    def _require_built(self) -> _BuiltSite:
        if self._built is None:
            msg = "SiteConfig has not been built yet; call build() first."
            raise SiteConfigError(msg)
        return self._built

    @property
    def locales(self) -> tuple[Locale, ...]:
        """Registered locales, default first."""
        return self._require_built().registry.all()

    @property
    def head(self) -> tuple[HeadTag, ...]:
        """Site-wide head tags after merging every configured layer."""
        return self._require_built().head

    @property
    def transformer(self) -> SitemapTransformer:
        return self._require_built().transformer

    @property
    def sitemap_hostname(self) -> str:
        return self._require_built().sitemap_hostname

    @property
    def title(self) -> str:
        return self._require_built().title

    @property
    def description(self) -> str:
        return self._require_built().description

    @property
    def base(self) -> str:
        return self._require_built().base

    @property
    def appearance(self) -> Appearance:
        return self._require_built().appearance

    @property
    def theme(self) -> ThemeConfig:
        return self._require_built().theme

    def locale_site(self, key: str) -> LocaleSite:
        """Return the resolved navigation for the locale registered as ``key``."""
        built = self._require_built()
        return built.locales[built.registry.get(key).key]

    def locale_site_for(self, path: str) -> LocaleSite:
        """Return the resolved navigation of the locale that owns ``path``."""
        built = self._require_built()
        return built.locales[built.registry.locale_for_path(path).key]

    def head_for(
        self, path: str, page_tags: cabc.Iterable[HeadTag] = ()
    ) -> tuple[HeadTag, ...]:
        """Merge site, owning-locale, and page head layers for ``path``."""
        locale_site = self.locale_site_for(path)
        return self._head_assembler.merge([self.head, locale_site.head, page_tags])

    def sitemap_writer(self) -> SitemapWriter:
        """Return a writer bound to this site's hostname and sitemap policy."""
        built = self._require_built()
        return SitemapWriter(built.sitemap_hostname, built.transformer)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return a JSON-ready snapshot for external generators."""
        built = self._require_built()
        return {
            "title": built.title,
            "description": built.description,
            "base": built.base,
            "appearance": built.appearance,
            "sitemap": {"hostname": built.sitemap_hostname},
            "head": [_tag_as_dict(tag) for tag in built.head],
            "locales": {
                key: {
                    **dc.asdict(site.locale),
                    "path_prefix": site.path_prefix,
                    "nav": [dc.asdict(item) for item in site.nav],
                    "sidebar": {
                        prefix: [dc.asdict(group) for group in groups]
                        for prefix, groups in site.sidebar.items()
                    },
                    "head": [_tag_as_dict(tag) for tag in site.head],
                    "edit_link": dc.asdict(site.edit_link) if site.edit_link else None,
                }
                for key, site in built.locales.items()
            },
            "theme": dc.asdict(built.theme),
        }


def _tag_as_dict(tag: HeadTag) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {
        "tag": tag.tag_name,
        "attrs": dict(tag.attributes),
    }
    if tag.body is not None:
        payload["body"] = tag.body
    return payload


__all__ = ["BuildState", "LocaleSite", "SiteConfig"]
