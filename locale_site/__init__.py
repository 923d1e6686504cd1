"""Build locale-aware configuration for a static documentation site.

This package turns a declarative ``site.yaml`` into the navigation trees,
merged ``<head>`` tags, and sitemap policy a static site generator reads at
build time, and exposes the ``site`` CLI used to validate the config and
emit ``sitemap.xml``.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``SiteConfig``: One-shot composition root.

Examples
--------
>>> from locale_site import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .site import SiteConfig

__all__ = ["SiteConfig", "app", "main"]
