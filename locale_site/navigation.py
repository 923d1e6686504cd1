"""Build locale-scoped top navigation and sidebar trees.

Navigation is authored once per locale as root-relative links. The builder
rewrites those links beneath the locale's route prefix (``/zh/guide/`` for a
``zh`` locale) so authors never repeat the prefix by hand, and rejects links
that could not be resolved by the generator.

Example
-------
>>> from locale_site.config import Locale, NavItem
>>> from locale_site.locales import LocaleRegistry
>>> from locale_site.navigation import NavigationBuilder
>>> registry = LocaleRegistry()
>>> registry.register(Locale("root", "English", "en-US", "Guide", "Docs"))
>>> registry.register(Locale("zh", "简体中文", "zh-CN", "指南", "文档"))
>>> builder = NavigationBuilder(registry)
>>> builder.build_top_nav(registry.get("zh"), [NavItem("Guide", "/guide/")])
(NavItem(text='Guide', link='/zh/guide/'),)
"""

from __future__ import annotations

import collections.abc as cabc
import types
import typing as typ

from .config.models import (
    DuplicatePrefixError,
    InvalidLinkError,
    NavItem,
    RouteGroup,
    SidebarGroup,
)

if typ.TYPE_CHECKING:
    from .config.models import Locale
    from .locales import LocaleRegistry


class SidebarTree(cabc.Mapping[str, tuple[SidebarGroup, ...]]):
    """Read-only mapping of route prefix to the sidebar shown beneath it."""

    __slots__ = ("_groups",)

    def __init__(
        self, groups: cabc.Mapping[str, tuple[SidebarGroup, ...]] | None = None
    ) -> None:
        self._groups = types.MappingProxyType(dict(groups or {}))

    def __getitem__(self, prefix: str) -> tuple[SidebarGroup, ...]:
        return self._groups[prefix]

    def __iter__(self) -> cabc.Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"SidebarTree({dict(self._groups)!r})"

    def match_prefix(self, path: str) -> str | None:
        """Return the longest registered prefix that ``path`` starts with."""
        candidates = [prefix for prefix in self._groups if path.startswith(prefix)]
        if not candidates:
            return None
        return max(candidates, key=len)

    def lookup(self, path: str) -> tuple[SidebarGroup, ...]:
        """Return the sidebar for ``path`` or an empty tuple when none applies."""
        prefix = self.match_prefix(path)
        if prefix is None:
            return ()
        return self._groups[prefix]


class NavigationBuilder:
    """Turn declarative per-locale navigation into prefixed, validated trees."""

    def __init__(self, registry: LocaleRegistry) -> None:
        self.registry = registry

    def build_sidebar(
        self, locale: Locale, groups: cabc.Iterable[RouteGroup]
    ) -> SidebarTree:
        """Build the sidebar tree for ``locale``.

        Parameters
        ----------
        locale : Locale
            Registered locale whose route prefix is applied to every link.
        groups : Iterable[RouteGroup]
            Route groups in declaration order. Section and item order is kept
            exactly as declared.

        Returns
        -------
        SidebarTree
            Prefixed sidebar sections keyed by prefixed route.

        Raises
        ------
        InvalidLinkError
            If a group prefix or item link is not root-relative.
        DuplicatePrefixError
            If two groups resolve to the same route prefix.
        """
        tree: dict[str, tuple[SidebarGroup, ...]] = {}
        for group in groups:
            prefix = self.localize_link(locale, group.prefix)
            if prefix in tree:
                msg = (
                    f"Sidebar prefix '{prefix}' is declared more than once "
                    f"for locale '{locale.key}'."
                )
                raise DuplicatePrefixError(msg)
            tree[prefix] = tuple(
                SidebarGroup(
                    text=section.text,
                    items=self.build_top_nav(locale, section.items),
                )
                for section in group.sections
            )
        return SidebarTree(tree)

    def build_top_nav(
        self, locale: Locale, items: cabc.Iterable[NavItem]
    ) -> tuple[NavItem, ...]:
        """Return ``items`` with locale-prefixed links, order preserved."""
        return tuple(
            NavItem(text=item.text, link=self.localize_link(locale, item.link))
            for item in items
        )

    def localize_link(self, locale: Locale, link: str) -> str:
        """Prefix ``link`` with the locale route unless it already carries it."""
        if not link.startswith("/"):
            msg = (
                f"Link '{link}' for locale '{locale.key}' must be root-relative "
                "(start with '/')."
            )
            raise InvalidLinkError(msg)
        prefix = self.registry.path_prefix(locale)
        if not prefix or link.startswith(f"{prefix}/"):
            return link
        if link == prefix:
            return f"{prefix}/"
        return f"{prefix}{link}"


__all__ = ["NavigationBuilder", "SidebarTree"]
