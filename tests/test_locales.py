"""Unit tests for the locale registry and language tag validation."""

from __future__ import annotations

import pytest

from locale_site.config import (
    DuplicateLocaleError,
    InvalidLanguageTagError,
    Locale,
    LocaleNotFoundError,
    SiteConfigError,
)
from locale_site.locales import LocaleRegistry, is_language_tag


def _locale(key: str, tag: str) -> Locale:
    return Locale(key=key, label=key.title(), language_tag=tag, title="T", description="D")


@pytest.fixture
def registry() -> LocaleRegistry:
    """Return a registry holding an English root locale and a Chinese locale."""
    reg = LocaleRegistry()
    reg.register(_locale("root", "en-US"))
    reg.register(_locale("zh", "zh-CN"))
    return reg


def test_all_returns_registration_order(registry: LocaleRegistry) -> None:
    """Locales are returned in the order they were registered."""
    keys = [locale.key for locale in registry.all()]
    assert keys == ["root", "zh"], f"expected registration order, got {keys!r}"
    assert registry.default.key == "root", "first registered locale is the default"


def test_register_rejects_duplicate_key(registry: LocaleRegistry) -> None:
    """Registering an existing key fails and keeps the original locale."""
    with pytest.raises(DuplicateLocaleError, match="root"):
        registry.register(_locale("root", "fr-FR"))
    assert registry.get("root").language_tag == "en-US", (
        "duplicate registration must not replace the original locale"
    )
    assert len(registry) == 2, "duplicate registration must not add a locale"


@pytest.mark.parametrize(
    "tag", ["en_US", "en-", "123", "e", "zh-CN-", "en-US-u", "en-US\n", "x-a\n"]
)
def test_register_rejects_malformed_language_tag(tag: str) -> None:
    """Malformed BCP-47 tags are rejected before registration."""
    reg = LocaleRegistry()
    with pytest.raises(InvalidLanguageTagError):
        reg.register(_locale("root", tag))
    assert "root" not in reg, "rejected locale must not be registered"


@pytest.mark.parametrize(
    "tag",
    ["en", "en-US", "zh-CN", "zh-Hans-CN", "de-CH-1901", "es-419", "x-private"],
)
def test_well_formed_language_tags_accepted(tag: str) -> None:
    """Common well-formed tags pass validation."""
    assert is_language_tag(tag), f"expected {tag!r} to be a well-formed tag"


def test_repeated_variant_is_malformed() -> None:
    """Duplicate variant subtags make a tag malformed."""
    assert not is_language_tag("de-1901-1901"), "duplicate variants must be rejected"


def test_get_unknown_locale_raises(registry: LocaleRegistry) -> None:
    """Looking up an unknown key raises LocaleNotFoundError (also a KeyError)."""
    with pytest.raises(LocaleNotFoundError, match="fr"):
        registry.get("fr")
    with pytest.raises(KeyError):
        registry.get("fr")


def test_path_prefix_and_locale_for_path(registry: LocaleRegistry) -> None:
    """Only non-default locales carry a route prefix."""
    assert registry.path_prefix(registry.get("root")) == ""
    assert registry.path_prefix(registry.get("zh")) == "/zh"
    assert registry.locale_for_path("/zh/guide/state.html").key == "zh"
    assert registry.locale_for_path("/zh").key == "zh"
    assert registry.locale_for_path("/zhongwen/").key == "root", (
        "prefix match must respect path segment boundaries"
    )
    assert registry.locale_for_path("/guide/").key == "root"


def test_default_requires_a_locale() -> None:
    """An empty registry has no default locale."""
    with pytest.raises(SiteConfigError):
        _ = LocaleRegistry().default
