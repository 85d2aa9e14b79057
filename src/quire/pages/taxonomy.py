"""Reverse index from taxonomy terms to pages.

Route building feeds every routable page through :meth:`Taxonomy.add`.
The resulting map is one of the five parts of a cache bundle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from quire.pages.collection import Collection
from quire.pages.types import ChildInfo

if TYPE_CHECKING:
    from quire.pages.tree import Tree
    from quire.pages.types import Page

# taxonomy name -> term -> {page path: ChildInfo}
TaxonomyMap = dict[str, dict[str, dict[str, ChildInfo]]]


class Taxonomy:
    """Term index for the configured taxonomy names."""

    __slots__ = ("_map", "names")

    def __init__(self, names: tuple[str, ...] = ("category", "tag")) -> None:
        self.names = names
        self._map: TaxonomyMap = {name: {} for name in names}

    def add(self, page: Page) -> None:
        """Index *page* under each of its taxonomy terms."""
        for name, terms in page.taxonomy.items():
            if name not in self._map:
                continue
            for term in terms:
                self._map[name].setdefault(term, {})[page.path] = ChildInfo(page.slug)

    def taxonomy(self) -> TaxonomyMap:
        return self._map

    def load(self, taxonomy_map: dict[str, Any]) -> None:
        """Replace the index with a previously saved map."""
        self._map = {name: {} for name in self.names}
        self._map.update(taxonomy_map)

    def find(self, tree: Tree, query: dict[str, str | list[str]], operator: str = "and") -> Collection:
        """Collect pages matching *query*, e.g. ``{"tag": ["python", "web"]}``.

        With ``"and"`` a page must carry every term; with ``"or"`` any term.
        """
        matches: dict[str, ChildInfo] | None = None
        for name, terms in query.items():
            if isinstance(terms, str):
                terms = [terms]
            for term in terms:
                found = self._map.get(name, {}).get(term, {})
                if matches is None:
                    matches = dict(found)
                elif operator == "or":
                    matches.update(found)
                else:
                    matches = {path: info for path, info in matches.items() if path in found}
        return Collection(matches or {}, {"taxonomies": query}, tree)
