"""Quire: index a directory tree of content files into an ordered page hierarchy.

Resolves request paths to pages and keeps per-parent orderings by date,
title, manual order, random, or any header field.

Basic usage::

    from quire import PageIndex, PagesConfig

    index = PageIndex("content", PagesConfig(order_by="date"))
    tree = index.init()
    page = index.dispatch("/blog/first-post")

Cached generations (``diskcache``)::

    from quire import DiskCacheStore
    index = PageIndex("content", store=DiskCacheStore(".quire-cache"))
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BuildError",
    "Collection",
    "ConfigurationError",
    "ConsistencyError",
    "DiskCacheStore",
    "Page",
    "PageIndex",
    "PagesConfig",
    "QuireError",
    "Redirect",
    "Tree",
    "build_routes",
    "build_tree",
    "dispatch",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import quire`` fast while providing a clean top-level API.
    """
    if name == "PagesConfig":
        from quire.config import PagesConfig

        return PagesConfig

    if name in ("PageIndex", "DiskCacheStore"):
        from quire import cache as _cache

        return getattr(_cache, name)

    if name in ("Collection", "Page", "Tree", "build_tree"):
        from quire import pages as _pages

        return getattr(_pages, name)

    if name in ("Redirect", "build_routes", "dispatch"):
        from quire import routing as _routing

        return getattr(_routing, name)

    if name in ("QuireError", "BuildError", "ConfigurationError", "ConsistencyError"):
        from quire import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
