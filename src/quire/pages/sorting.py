"""Child ordering with per-scope memoization.

A sort is identified by ``(scope, order_by)``.  The scope is a parent
page path for child listings, or a content fingerprint of the key set
for ad hoc collection sorts.  Memo entries hold ascending order only;
descending order is produced by reversing on read.

Strategies::

    "title" | "date" | "modified" | "slug"   page attribute
    "basename"                               last path segment
    "header.<field>[|<default>]"             header value, default, then path
    "random"                                 fresh shuffle on every call
    "manual" | "default" | anything else     the page path
"""

from __future__ import annotations

import enum
import hashlib
import json
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from quire.errors import ConsistencyError
from quire.pages.header import Header

if TYPE_CHECKING:
    from quire.pages.types import ChildInfo, Page

HEADER_PREFIX = "header."

# Memo table: (scope, order_by) -> ascending {path: ChildInfo}
SortMemo = dict[tuple[str, str], dict[str, "ChildInfo"]]


class SortStrategy(enum.Enum):
    TITLE = "title"
    DATE = "date"
    MODIFIED = "modified"
    SLUG = "slug"
    BASENAME = "basename"
    HEADER = "header"
    RANDOM = "random"
    DEFAULT = "default"


_ATTRIBUTE_STRATEGIES = {
    SortStrategy.TITLE: "title",
    SortStrategy.DATE: "date",
    SortStrategy.MODIFIED: "modified",
    SortStrategy.SLUG: "slug",
}


@dataclass(frozen=True, slots=True)
class OrderBy:
    """A parsed ordering directive.

    ``field`` and ``default`` are only set for header strategies.
    """

    strategy: SortStrategy
    field: str | None = None
    default: str | None = None

    @classmethod
    def parse(cls, order_by: str) -> OrderBy:
        """Parse a case-sensitive strategy name.

        Examples::

            "date"                 -> OrderBy(SortStrategy.DATE)
            "header.author|anon"   -> OrderBy(SortStrategy.HEADER, "author", "anon")
            "manual", "whatever"   -> OrderBy(SortStrategy.DEFAULT)
        """
        if order_by.startswith(HEADER_PREFIX):
            query = order_by[len(HEADER_PREFIX) :]
            name, sep, default = query.partition("|")
            return cls(SortStrategy.HEADER, field=name, default=default if sep else None)
        try:
            strategy = SortStrategy(order_by)
        except ValueError:
            return cls(SortStrategy.DEFAULT)
        if strategy is SortStrategy.HEADER:
            return cls(SortStrategy.DEFAULT)
        return cls(strategy)

    def key_for(self, path: str, page: Page) -> Any:
        """Compute the raw sort key of *page* under this directive."""
        if self.strategy in _ATTRIBUTE_STRATEGIES:
            return getattr(page, _ATTRIBUTE_STRATEGIES[self.strategy])
        if self.strategy is SortStrategy.BASENAME:
            return PurePath(path).name
        if self.strategy is SortStrategy.HEADER:
            value = Header(page.header).get(self.field or "")
            if value:
                return value
            return self.default or path
        return path


def _comparable(value: Any) -> tuple[int, Any]:
    """Rank numbers before everything else so mixed keys stay comparable."""
    if isinstance(value, int | float) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def fingerprint_keys(keys: Iterable[str], manual: Iterable[str] = ()) -> str:
    """Return a content fingerprint for an ad hoc key set."""
    payload = json.dumps([list(keys), list(manual)])
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


class SortEngine:
    """Memoized child ordering bound to one generation's node table.

    Usage::

        engine = SortEngine(nodes)
        ordered = engine.sort("/pages/blog", children, "date", direction="desc")
    """

    __slots__ = ("_memo", "_nodes")

    def __init__(self, nodes: Mapping[str, Page], memo: SortMemo | None = None) -> None:
        self._nodes = nodes
        self._memo: SortMemo = memo if memo is not None else {}

    @property
    def memo(self) -> SortMemo:
        return self._memo

    def sort(
        self,
        scope: str,
        children: Mapping[str, ChildInfo],
        order_by: str,
        manual: Iterable[str] = (),
        direction: str = "asc",
    ) -> dict[str, ChildInfo]:
        """Return *children* ordered by *order_by*.

        Raises ``ConsistencyError`` if a child path is missing from the
        node table.
        """
        if not children:
            return {}

        directive = OrderBy.parse(order_by)
        manual = tuple(manual)
        if directive.strategy is SortStrategy.RANDOM:
            ordered = self._build(children, directive, manual)
        else:
            key = (scope, order_by)
            if key not in self._memo:
                self._memo[key] = self._build(children, directive, manual)
            ordered = self._memo[key]

        if direction != "asc":
            return dict(reversed(ordered.items()))
        return dict(ordered)

    def _build(
        self,
        children: Mapping[str, ChildInfo],
        directive: OrderBy,
        manual: tuple[str, ...],
    ) -> dict[str, ChildInfo]:
        keyed: list[tuple[str, Any]] = []
        for path in children:
            page = self._nodes.get(path)
            if page is None:
                raise ConsistencyError(path)
            keyed.append((path, directive.key_for(path, page)))

        if directive.strategy is SortStrategy.RANDOM:
            paths = [path for path, _ in keyed]
            random.shuffle(paths)
        else:
            keyed.sort(key=lambda item: _comparable(item[1]))
            paths = [path for path, _ in keyed]

        if manual:
            positions: dict[str, int] = {}
            for index, slug in enumerate(manual):
                positions.setdefault(slug, index)
            counter = len(manual)
            numbered: list[tuple[int, str]] = []
            for path in paths:
                order = positions.get(children[path].slug)
                if order is None:
                    order = counter
                    counter += 1
                numbered.append((order, path))
            numbered.sort(key=lambda item: item[0])
            paths = [path for _, path in numbered]

        return {path: children[path] for path in paths}
