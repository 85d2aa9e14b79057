"""Cache-gated construction of page tree generations.

``PageIndex`` is the entry point for most callers: it fingerprints the
pages directory, hydrates the tree from the store on a hit, and
otherwise walks the directory, builds routes, and saves the result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from quire.cache.fingerprint import fingerprint
from quire.config import PagesConfig
from quire.errors import BuildError
from quire.pages.builder import build_tree
from quire.pages.taxonomy import Taxonomy
from quire.pages.tree import Tree
from quire.routing.dispatch import Redirect, dispatch
from quire.routing.table import build_routes

if TYPE_CHECKING:
    from quire.cache.backends import CacheStore
    from quire.pages.parser import ContentParser
    from quire.pages.types import Page

logger = logging.getLogger("quire.cache")


class PageIndex:
    """Owns the current generation of the page tree.

    Usage::

        index = PageIndex("content", PagesConfig(), store=DiskCacheStore(".cache"))
        tree = index.init()
        page = index.dispatch("/blog")
    """

    __slots__ = ("_tree", "config", "pages_dir", "parser", "store")

    def __init__(
        self,
        pages_dir: str | Path,
        config: PagesConfig | None = None,
        *,
        parser: ContentParser | None = None,
        store: CacheStore | None = None,
    ) -> None:
        self.pages_dir = Path(pages_dir).resolve()
        self.config = config or PagesConfig()
        self.parser = parser
        self.store = store
        self._tree: Tree | None = None

    @property
    def tree(self) -> Tree:
        """The current generation, built on first access."""
        if self._tree is None:
            return self.init()
        return self._tree

    def init(self) -> Tree:
        """Build or hydrate a fresh generation and make it current.

        Raises:
            BuildError: The pages directory is missing or unreadable.
        """
        self._tree = None
        if not self.config.cache_enabled or self.store is None:
            self._tree = self._build()
            return self._tree

        if not self.pages_dir.is_dir():
            msg = f"Pages directory not found: {self.pages_dir}"
            raise BuildError(msg)

        try:
            key = fingerprint(self.pages_dir, self.config)
        except OSError as exc:
            msg = f"Cannot fingerprint pages directory {self.pages_dir}: {exc}"
            raise BuildError(msg) from exc

        bundle = self.store.fetch(key)
        if bundle:
            logger.debug("Page cache hit (%s)", key)
            self._tree = Tree.from_bundle(
                str(self.pages_dir),
                self.config,
                bundle,
                taxonomy=Taxonomy(self.config.taxonomies),
            )
            return self._tree

        logger.debug("Page cache missed (%s), rebuilding pages", key)
        tree = self._build()
        self.store.save(key, tree.bundle())
        self._tree = tree
        return tree

    def reset(self) -> None:
        """Discard the current generation."""
        self._tree = None

    def dispatch(self, url: str, allow_unroutable: bool = False) -> Page | Redirect | None:
        return dispatch(self.tree, url, allow_unroutable)

    def _build(self) -> Tree:
        tree = build_tree(
            self.pages_dir,
            self.config,
            self.parser,
            taxonomy=Taxonomy(self.config.taxonomies),
        )
        build_routes(tree)
        return tree
