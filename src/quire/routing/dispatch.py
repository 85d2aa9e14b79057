"""Resolve a request URL to a page.

Resolution order, first hit wins:

1. Direct route lookup (unroutable pages only with ``allow_unroutable``)
2. Exact redirect -> :class:`Redirect`
3. Exact alias -> dispatch the alias target
4. Wildcard alias (``/blog/*``) in configured order -> direct lookup
   of the target with ``*`` replaced by the rest of the URL
5. ``None``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quire.pages.tree import Tree
    from quire.pages.types import Page

logger = logging.getLogger("quire.routing")


@dataclass(frozen=True, slots=True)
class Redirect:
    """The URL is configured to redirect elsewhere."""

    url: str


def dispatch(
    tree: Tree,
    url: str,
    allow_unroutable: bool = False,
    *,
    redirects: Mapping[str, str] | None = None,
    routes: Mapping[str, str] | None = None,
) -> Page | Redirect | None:
    """Dispatch *url* against *tree*.

    Args:
        tree: A tree whose routes have been built.
        url: Request path, e.g. ``"/blog/first-post"``.
        allow_unroutable: Return unroutable pages on a direct hit and
            skip the redirect/alias fallback.
        redirects: Exact-URL redirects; defaults to ``config.redirects``.
        routes: Exact and wildcard aliases; defaults to ``config.routes``.

    Returns:
        The matched page, a :class:`Redirect`, or ``None`` if nothing matches.
    """
    if redirects is None:
        redirects = tree.config.redirects
    if routes is None:
        routes = tree.config.routes
    return _dispatch(tree, url, allow_unroutable, redirects, routes, frozenset())


def _dispatch(
    tree: Tree,
    url: str,
    allow_unroutable: bool,
    redirects: Mapping[str, str],
    routes: Mapping[str, str],
    seen: frozenset[str],
) -> Page | Redirect | None:
    page = _lookup(tree, url)
    if allow_unroutable or (page is not None and page.routable):
        return page

    redirect = redirects.get(url)
    if redirect:
        return Redirect(redirect)

    alias = routes.get(url)
    if alias:
        if alias in seen or alias == url:
            logger.warning("Route alias cycle at %s -> %s", url, alias)
            return None
        return _dispatch(tree, alias, allow_unroutable, redirects, routes, seen | {url})

    for pattern, target in routes.items():
        if "*" not in pattern:
            continue
        prefix = pattern.rstrip("*")
        if not url.startswith(prefix):
            continue
        candidate = _lookup(tree, target.replace("*", url[len(prefix) :]))
        if candidate is not None:
            return candidate

    return None


def _lookup(tree: Tree, url: str) -> Page | None:
    path = tree.routes.get(url)
    return tree.get(path) if path is not None else None
