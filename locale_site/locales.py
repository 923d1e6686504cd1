"""Registry of the locales a site is published in.

The first locale registered is the default (root) locale: its pages live at
the site root while every other locale is served beneath ``/{key}/``.

Example
-------
>>> from locale_site.config import Locale
>>> from locale_site.locales import LocaleRegistry
>>> registry = LocaleRegistry()
>>> registry.register(Locale("root", "English", "en-US", "Guide", "Docs"))
>>> registry.register(Locale("zh", "简体中文", "zh-CN", "指南", "文档"))
>>> registry.path_prefix(registry.get("zh"))
'/zh'
>>> registry.locale_for_path("/zh/guide/").key
'zh'
"""

from __future__ import annotations

import re
import typing as typ

from .config.models import (
    DuplicateLocaleError,
    InvalidLanguageTagError,
    Locale,
    LocaleNotFoundError,
    SiteConfigError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# RFC 5646 langtag / privateuse productions; grandfathered tags are rejected.
_LANGTAG = r"""
    (?:[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4,8})   # language (+ extlang)
    (?:-[a-z]{4})?                                # script
    (?:-(?:[a-z]{2}|\d{3}))?                      # region
    (?:-(?:[a-z\d]{5,8}|\d[a-z\d]{3}))*           # variants
    (?:-[a-wyz\d](?:-[a-z\d]{2,8})+)*             # extensions
    (?:-x(?:-[a-z\d]{1,8})+)?                     # private use
"""
LANGUAGE_TAG_PATTERN = re.compile(
    rf"(?:{_LANGTAG}|x(?:-[a-z\d]{{1,8}})+)", re.IGNORECASE | re.VERBOSE
)


def is_language_tag(value: str) -> bool:
    """Return True when ``value`` is a well-formed BCP-47 language tag."""
    return bool(LANGUAGE_TAG_PATTERN.fullmatch(value)) and not _has_repeated_subtags(
        value
    )


def _has_repeated_subtags(value: str) -> bool:
    """Detect duplicate variants or extension singletons outside private use."""
    subtags = value.lower().split("-")
    if "x" in subtags:
        subtags = subtags[: subtags.index("x")]
    singletons = [tag for tag in subtags[1:] if len(tag) == 1]
    variants = [
        tag for tag in subtags[1:] if len(tag) >= 5 or (len(tag) == 4 and tag[0].isdigit())
    ]
    return len(set(singletons)) != len(singletons) or len(set(variants)) != len(
        variants
    )


class LocaleRegistry:
    """Hold and validate the ordered set of locales for one site build."""

    def __init__(self) -> None:
        self._locales: dict[str, Locale] = {}

    def register(self, locale: Locale) -> None:
        """Add ``locale`` to the registry.

        Raises
        ------
        DuplicateLocaleError
            If a locale with the same key is already registered.
        InvalidLanguageTagError
            If ``locale.language_tag`` is not a well-formed BCP-47 tag.
        """
        if locale.key in self._locales:
            msg = f"Locale '{locale.key}' is already registered."
            raise DuplicateLocaleError(msg)
        if not is_language_tag(locale.language_tag):
            msg = (
                f"Locale '{locale.key}' has malformed language tag "
                f"'{locale.language_tag}'."
            )
            raise InvalidLanguageTagError(msg)
        self._locales[locale.key] = locale

    def get(self, key: str) -> Locale:
        """Return the locale registered under ``key``."""
        try:
            return self._locales[key]
        except KeyError as exc:
            available = ", ".join(self._locales) or "none"
            msg = f"Unknown locale '{key}'. Known locales: {available}"
            raise LocaleNotFoundError(msg) from exc

    def all(self) -> tuple[Locale, ...]:
        """Return every locale in registration order."""
        return tuple(self._locales.values())

    @property
    def default(self) -> Locale:
        """The first registered locale, served from the site root."""
        if not self._locales:
            msg = "No locales registered."
            raise SiteConfigError(msg)
        return next(iter(self._locales.values()))

    def is_default(self, locale: Locale) -> bool:
        return bool(self._locales) and self.default.key == locale.key

    def path_prefix(self, locale: Locale) -> str:
        """Return the route prefix for ``locale`` (empty for the default)."""
        if self.is_default(locale):
            return ""
        return f"/{locale.key}"

    def locale_for_path(self, path: str) -> Locale:
        """Return the locale owning ``path``, falling back to the default."""
        for locale in self._locales.values():
            if self.is_default(locale):
                continue
            prefix = self.path_prefix(locale)
            if path == prefix or path.startswith(f"{prefix}/"):
                return locale
        return self.default

    def __contains__(self, key: object) -> bool:
        return key in self._locales

    def __iter__(self) -> cabc.Iterator[Locale]:
        return iter(self._locales.values())

    def __len__(self) -> int:
        return len(self._locales)


__all__ = ["LANGUAGE_TAG_PATTERN", "LocaleRegistry", "is_language_tag"]
