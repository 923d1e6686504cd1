"""Common literal values used across locale_site.

These constants keep sitemap policy values, head tag identity rules, and
template names centralized so builders, renderers, and tests can import the
same values without drifting. Intended for internal use within the
locale_site package.

Examples
--------
>>> from locale_site import _constants
>>> _constants.DEFAULT_CHANGEFREQ
'weekly'
>>> _constants.HEAD_KEY_ATTRIBUTES["link"]
('rel',)
"""

DEFAULT_CHANGEFREQ = "weekly"
ROOT_PRIORITY = 1.0
PAGE_PRIORITY = 0.8

JSON_LD_TYPE = "application/ld+json"
SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Attributes tried in order when computing a head tag's identity key.
HEAD_KEY_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "meta": ("name", "property", "http-equiv"),
    "link": ("rel",),
    "script": ("type",),
}

SITEMAP_TEMPLATE = "sitemap.xml.jinja"
HEAD_TEMPLATE = "head_tags.jinja"
