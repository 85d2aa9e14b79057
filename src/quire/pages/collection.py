"""Ordered, filterable views over page keys.

A ``Collection`` holds page paths (with their ``ChildInfo`` summaries)
and a reference to the ``Tree`` that owns the pages.  It never owns
pages itself.  Filters return a new collection; ``order`` and
``set_params`` update this one in place and return it for chaining.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from dateutil import parser as date_parser

from quire.pages.types import ChildInfo, Page

if TYPE_CHECKING:
    from quire.pages.tree import Tree


class Collection:
    """An ordered view of pages bound to one tree.

    Iterating yields :class:`Page` objects; ``keys()`` yields paths.

    Usage::

        posts = tree.children(blog.path).published().visible()
        posts.order("date", "desc")
        for post in posts:
            print(post.route)
    """

    __slots__ = ("_items", "_params", "_tree")

    def __init__(
        self,
        items: Mapping[str, ChildInfo] | None,
        params: Mapping[str, Any] | None,
        tree: Tree,
    ) -> None:
        self._items: dict[str, ChildInfo] = dict(items or {})
        self._params: dict[str, Any] = dict(params or {})
        self._tree = tree

    # -- Container protocol -----------------------------------------------

    def __iter__(self) -> Iterator[Page]:
        for path in list(self._items):
            page = self._tree.get(path)
            if page is not None:
                yield page

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: object) -> bool:
        if isinstance(path, Page):
            path = path.path
        return path in self._items

    def __getitem__(self, path: str) -> Page | None:
        if path not in self._items:
            return None
        return self._tree.get(path)

    def __repr__(self) -> str:
        return f"Collection({list(self._items)!r})"

    def keys(self) -> list[str]:
        return list(self._items)

    def items(self) -> dict[str, ChildInfo]:
        return dict(self._items)

    @property
    def tree(self) -> Tree:
        return self._tree

    # -- Params -----------------------------------------------------------

    def params(self) -> dict[str, Any]:
        return self._params

    def set_params(self, params: Mapping[str, Any]) -> Collection:
        """Merge *params* into the collection's parameters."""
        self._params.update(params)
        return self

    def copy(self) -> Collection:
        return Collection(self._items, self._params, self._tree)

    def remove(self, key: Page | str) -> None:
        """Drop a page (or path) from the view."""
        if isinstance(key, Page):
            key = key.path
        if not isinstance(key, str):
            msg = f"Invalid key for remove(): {key!r}"
            raise TypeError(msg)
        self._items.pop(key, None)

    # -- Ordering ---------------------------------------------------------

    def order(
        self,
        by: str,
        direction: str = "asc",
        manual: list[str] | tuple[str, ...] | None = None,
    ) -> Collection:
        """Reorder the view through the tree's sort engine."""
        self._items = self._tree.sort_collection(self, by, direction, manual)
        return self

    # -- Position ---------------------------------------------------------

    def first(self) -> Page | None:
        keys = self.keys()
        return self._tree.get(keys[0]) if keys else None

    def last(self) -> Page | None:
        keys = self.keys()
        return self._tree.get(keys[-1]) if keys else None

    def is_first(self, path: str) -> bool:
        keys = self.keys()
        return bool(keys) and keys[0] == path

    def is_last(self, path: str) -> bool:
        keys = self.keys()
        return bool(keys) and keys[-1] == path

    def current_position(self, path: str) -> int | None:
        """Zero-based index of *path*, or ``None`` if it is not a member."""
        try:
            return self.keys().index(path)
        except ValueError:
            return None

    def adjacent_sibling(self, path: str, direction: int = 1) -> Page | Collection:
        """Return the member *direction* steps away from *path*.

        When *path* is not a member or has no neighbour that way, the
        collection itself is returned.  Compare the result with ``is``
        to tell the two apart.
        """
        index = self.current_position(path)
        if index is None:
            return self
        target = index + direction
        keys = self.keys()
        if 0 <= target < len(keys):
            page = self._tree.get(keys[target])
            if page is not None:
                return page
        return self

    def prev_sibling(self, path: str) -> Page | Collection:
        return self.adjacent_sibling(path, -1)

    def next_sibling(self, path: str) -> Page | Collection:
        return self.adjacent_sibling(path, 1)

    # -- Filters ----------------------------------------------------------

    def _filter(self, predicate: Callable[[Page], bool]) -> Collection:
        kept = {}
        for path, info in self._items.items():
            page = self._tree.get(path)
            if page is not None and predicate(page):
                kept[path] = info
        return Collection(kept, self._params, self._tree)

    def date_range(self, start: str, end: str | None = None) -> Collection:
        """Keep pages dated strictly between *start* and *end*.

        Both bounds are parsed with ``dateutil``; parse failures propagate.
        Without *end* the range is open-ended.
        """
        lower = date_parser.parse(start).timestamp()
        upper = date_parser.parse(end).timestamp() if end else math.inf
        return self._filter(lambda page: lower < page.date < upper)

    def visible(self) -> Collection:
        return self._filter(lambda page: page.visible)

    def non_visible(self) -> Collection:
        return self._filter(lambda page: not page.visible)

    def modular(self) -> Collection:
        return self._filter(lambda page: page.modular)

    def non_modular(self) -> Collection:
        return self._filter(lambda page: not page.modular)

    def published(self) -> Collection:
        return self._filter(lambda page: page.published)

    def non_published(self) -> Collection:
        return self._filter(lambda page: not page.published)

    def routable(self) -> Collection:
        return self._filter(lambda page: page.routable)

    def non_routable(self) -> Collection:
        return self._filter(lambda page: not page.routable)
