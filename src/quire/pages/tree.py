"""The page tree: node table, child adjacency, routes, and sort memo.

A ``Tree`` is one generation.  It is populated by the builder or
hydrated from a private copy of a cache bundle, and is discarded wholesale on
invalidation.  Every relationship is a path key into ``nodes``.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from quire.errors import BuildError
from quire.pages.collection import Collection
from quire.pages.sorting import SortEngine, SortMemo, fingerprint_keys
from quire.pages.taxonomy import Taxonomy
from quire.pages.types import ChildInfo, Page

if TYPE_CHECKING:
    from quire.config import PagesConfig

# Serialized generation: nodes, routes, children, taxonomy map, sort memo
Bundle = tuple[
    dict[str, Page],
    dict[str, str],
    dict[str, dict[str, ChildInfo]],
    dict[str, Any],
    SortMemo,
]


class Tree:
    """Arena of pages plus the path-keyed indexes over them.

    Usage::

        tree = build_tree("content", PagesConfig())
        build_routes(tree)
        blog = tree.get(tree.routes["/blog"])
        for post in tree.children(blog.path).published():
            ...
    """

    __slots__ = ("children_by_parent", "config", "nodes", "root_path", "routes", "sorter", "taxonomy")

    def __init__(
        self,
        root_path: str,
        config: PagesConfig,
        *,
        taxonomy: Taxonomy | None = None,
        memo: SortMemo | None = None,
    ) -> None:
        self.root_path = root_path
        self.config = config
        self.nodes: dict[str, Page] = {}
        self.children_by_parent: dict[str, dict[str, ChildInfo]] = {}
        self.routes: dict[str, str] = {}
        self.taxonomy = taxonomy if taxonomy is not None else Taxonomy(config.taxonomies)
        self.sorter = SortEngine(self.nodes, memo)

    # -- Lookup -----------------------------------------------------------

    def get(self, path: str | None) -> Page | None:
        """Return the page stored at *path*, or ``None``."""
        if path is None:
            return None
        return self.nodes.get(str(path))

    def root(self) -> Page:
        return self.nodes[self.root_path]

    def parent(self, page: Page) -> Page | None:
        return self.get(page.parent_path)

    def children(self, path: str) -> Collection:
        """Return the ordered children of *path* as a collection."""
        return Collection(self.children_by_parent.get(str(path), {}), {}, self)

    @property
    def last_modified(self) -> int:
        return max((page.modified for page in self.nodes.values()), default=0)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, path: object) -> bool:
        return path in self.nodes

    def __iter__(self) -> Iterator[Page]:
        return iter(self.nodes.values())

    # -- Mutation (build pass only) ---------------------------------------

    def register(self, page: Page) -> None:
        """Insert *page* into the node table and link it to its parent.

        Raises ``BuildError`` if the path is already registered.
        """
        if page.path in self.nodes:
            msg = f"Duplicate page path while building the tree: {page.path}"
            raise BuildError(msg)
        self.nodes[page.path] = page
        if page.parent_path is not None:
            self.link(page.parent_path, page)

    def link(self, parent_path: str, page: Page) -> None:
        self.children_by_parent.setdefault(parent_path, {})[page.path] = ChildInfo(page.slug)

    def add_page(self, page: Page, route: str | None = None) -> None:
        """Add a page (if new) and register it under *route* or its own route."""
        self.nodes.setdefault(page.path, page)
        if route is not None:
            page.route = route
        if page.parent_path is not None:
            self.link(page.parent_path, page)
        self.routes[page.route] = page.path

    # -- Ordering ---------------------------------------------------------

    def sort(
        self,
        page: Page,
        order_by: str | None = None,
        order_dir: str | None = None,
    ) -> dict[str, ChildInfo]:
        """Order the children of *page*, defaulting to its own directives."""
        children = self.children_by_parent.get(page.path, {})
        if not children:
            return {}
        return self.sorter.sort(
            page.path,
            children,
            order_by or page.order_by,
            page.order_manual,
            order_dir or page.order_dir,
        )

    def sort_collection(
        self,
        collection: Collection,
        order_by: str,
        order_dir: str = "asc",
        manual: list[str] | tuple[str, ...] | None = None,
    ) -> dict[str, ChildInfo]:
        """Order an ad hoc key set, memoized by a fingerprint of its contents."""
        items = collection.items()
        if not items:
            return {}
        manual = tuple(manual or ())
        scope = fingerprint_keys(items, manual)
        return self.sorter.sort(scope, items, order_by, manual, order_dir)

    # -- Listing ----------------------------------------------------------

    def get_list(self, current: Page | None = None, level: int = 0) -> dict[str, str]:
        """Map each routable page's route to its title, indented by depth."""
        if current is None:
            if level:
                msg = "get_list() needs a page when level is non-zero"
                raise ValueError(msg)
            current = self.root()

        listing: dict[str, str] = {}
        if current.routable:
            listing[current.route] = "  " * max(level - 1, 0) + current.title
        for child in self.children(current.path):
            listing.update(self.get_list(child, level + 1))
        return listing

    # -- Cache bundle -----------------------------------------------------

    def bundle(self) -> Bundle:
        return (
            self.nodes,
            self.routes,
            self.children_by_parent,
            self.taxonomy.taxonomy(),
            self.sorter.memo,
        )

    @classmethod
    def from_bundle(
        cls,
        root_path: str,
        config: PagesConfig,
        bundle: Bundle,
        taxonomy: Taxonomy | None = None,
    ) -> Tree:
        """Hydrate a generation from a cached bundle.

        The bundle is deep-copied, so the new generation never shares
        pages or memo entries with the store or with earlier generations.
        """
        nodes, routes, children, taxonomy_map, memo = copy.deepcopy(bundle)
        tree = cls(root_path, config, taxonomy=taxonomy, memo=memo)
        tree.nodes.update(nodes)
        tree.routes.update(routes)
        tree.children_by_parent.update(children)
        tree.taxonomy.load(taxonomy_map)
        return tree
