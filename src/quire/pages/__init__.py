"""Directory-tree page index.

Each directory under the pages root is one page.  A content file
directly inside the directory carries the page's header; sub-directories
are child pages.  Ordering of children is decided per parent.

Conventions::

    content/
      01.home/
        default.md        # /home, aliased to /
      02.blog/
        blog.md           # /blog (order_by: date, order_dir: desc)
        first-post/
          item.md         # /blog/first-post
      _sidebar/
        modular.md        # hidden: unroutable, modular
"""

from quire.pages.builder import build_tree
from quire.pages.collection import Collection
from quire.pages.page_types import PageTypes
from quire.pages.parser import ContentParser, FrontmatterParser
from quire.pages.sorting import OrderBy, SortEngine, SortStrategy
from quire.pages.taxonomy import Taxonomy
from quire.pages.tree import Tree
from quire.pages.types import ChildInfo, Page

__all__ = [
    "ChildInfo",
    "Collection",
    "ContentParser",
    "FrontmatterParser",
    "OrderBy",
    "Page",
    "PageTypes",
    "SortEngine",
    "SortStrategy",
    "Taxonomy",
    "Tree",
    "build_tree",
]
