"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _build_edit_link,
    _build_head_tags,
    _build_nav_items,
    _build_route_groups,
    _build_theme_config,
    _optional_str,
    _require_str,
)
from .models import (
    HeadTag,
    Locale,
    LocaleNavSpec,
    SiteConfigError,
    SiteSpec,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..site import SiteConfig

APPEARANCES = ("light", "dark")


def load_site_spec(path: Path) -> SiteSpec:
    """Load the YAML file describing locales, navigation, and head tags.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteSpec
        Declarative site description ready for :meth:`SiteConfig.build`.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or malformed (for example,
        no locales are defined or the sitemap hostname is absent).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from locale_site.config import load_site_spec
    >>> spec = load_site_spec(Path("config/site.yaml"))  # doctest: +SKIP
    >>> [locale.key for locale in spec.locales]  # doctest: +SKIP
    ['root', 'zh']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    locales_raw = raw.get("locales") or {}
    if not isinstance(locales_raw, dict) or not locales_raw:
        msg = "No locales defined in site configuration."
        raise SiteConfigError(msg)

    sitemap_raw = raw.get("sitemap") or {}
    hostname = (
        _optional_str(sitemap_raw.get("hostname"))
        if isinstance(sitemap_raw, dict)
        else None
    )
    if not hostname:
        msg = "Site configuration requires 'sitemap.hostname'."
        raise SiteConfigError(msg)

    appearance = raw.get("appearance", "dark")
    if appearance not in APPEARANCES:
        msg = f"Appearance must be one of {', '.join(APPEARANCES)}; got {appearance!r}."
        raise SiteConfigError(msg)

    title = _optional_str(raw.get("title")) or ""
    description = _optional_str(raw.get("description")) or ""

    locales: list[Locale] = []
    navigation: dict[str, LocaleNavSpec] = {}
    locale_head: dict[str, tuple[HeadTag, ...]] = {}
    for key, payload in locales_raw.items():
        match payload:
            case dict():
                locale, nav_spec, head = _build_locale(
                    str(key), payload, title=title, description=description
                )
            case _:
                msg = f"Locale '{key}' must be a mapping."
                raise SiteConfigError(msg)
        locales.append(locale)
        navigation[locale.key] = nav_spec
        if head:
            locale_head[locale.key] = head

    return SiteSpec(
        locales=tuple(locales),
        sitemap_hostname=hostname,
        navigation=navigation,
        head_layers=(_build_head_tags(raw.get("head"), "Site"),),
        locale_head=locale_head,
        title=title,
        description=description,
        base=_optional_str(raw.get("base")) or "/",
        appearance=appearance,
        theme=_build_theme_config(raw.get("theme")),
    )


def load_site_config(path: Path) -> SiteConfig:
    """Load ``path`` and build the immutable :class:`SiteConfig` it describes."""
    from ..site import SiteConfig

    return SiteConfig().build(load_site_spec(path))


def _build_locale(
    key: str,
    payload: typ.Mapping[str, typ.Any],
    *,
    title: str,
    description: str,
) -> tuple[Locale, LocaleNavSpec, tuple[HeadTag, ...]]:
    """Build a locale, its navigation input, and its head layer."""
    context = f"Locale '{key}'"
    locale = Locale(
        key=key,
        label=_require_str(payload, "label", context),
        language_tag=_require_str(payload, "lang", context),
        title=_optional_str(payload.get("title")) or title,
        description=_optional_str(payload.get("description")) or description,
    )
    nav_spec = LocaleNavSpec(
        nav=_build_nav_items(payload.get("nav"), f"{context} nav"),
        sidebar=_build_route_groups(payload.get("sidebar"), f"{context} sidebar"),
        edit_link=_build_edit_link(payload.get("edit_link"), context),
    )
    head = _build_head_tags(payload.get("head"), context)
    return locale, nav_spec, head


__all__ = ["APPEARANCES", "load_site_config", "load_site_spec"]
