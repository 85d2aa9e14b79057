"""Data model for the indexed page hierarchy.

``Page`` is one indexed directory (a Content Node).  It refers to its
parent by path only; the owning ``Tree`` resolves the key.  ``ChildInfo``
is the summary stored in adjacency and sort tables.
"""

from __future__ import annotations

import hashlib
import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from quire.pages.header import Header, to_timestamp

if TYPE_CHECKING:
    from quire.config import PagesConfig

logger = logging.getLogger("quire.pages")

# Leading "01." style ordering prefix on folder names
ORDER_PREFIX_RE = re.compile(r"^[0-9]+\.")


@dataclass(frozen=True, slots=True)
class ChildInfo:
    """Summary of a child page kept in adjacency and sort tables."""

    slug: str


@dataclass(slots=True)
class Page:
    """One directory mapped to one logical page.

    Created by the tree builder, which fills content-derived fields via
    :meth:`init` and timestamps via :meth:`finalize`.  ``route`` is
    assigned afterwards by route building.

    Attributes:
        path: Filesystem path of the directory.  Primary key.
        parent_path: Path of the parent page, ``None`` for the root.
        folder: Directory basename.
        slug: URL segment for this page.
        route: Absolute route, ``""`` until routes are built.
        has_content: A content file sits directly in the directory.
        routable: Whether dispatch may target this page.
        modified: Newest mtime of this directory and all descendants.
        id: ``modified`` plus a hash of the content file path.
    """

    path: str
    parent_path: str | None = None
    folder: str = ""
    slug: str = ""
    route: str = ""
    title: str = ""
    file_path: str = ""
    template: str = "default"
    header: dict[str, Any] = field(default_factory=dict)
    has_content: bool = False
    routable: bool = True
    visible: bool = False
    modular: bool = False
    published: bool = True
    modified: int = 0
    date: int = 0
    id: str = ""
    order_by: str = "default"
    order_dir: str = "asc"
    order_manual: tuple[str, ...] = ()
    taxonomy: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_directory(
        cls,
        path: str | Path,
        config: PagesConfig,
        parent_path: str | None = None,
    ) -> Page:
        """Create a page for *path* with folder-derived defaults."""
        path = str(path)
        folder = Path(path).name
        modular = bool(config.hidden_prefix) and folder.startswith(config.hidden_prefix)
        slug = ORDER_PREFIX_RE.sub("", folder)
        if modular:
            slug = slug[len(config.hidden_prefix) :]
        return cls(
            path=path,
            parent_path=parent_path,
            folder=folder,
            slug=slug,
            title=slug[:1].upper() + slug[1:],
            visible=ORDER_PREFIX_RE.match(folder) is not None,
            modular=modular,
            order_by=config.order_by,
            order_dir=config.order_dir,
        )

    def init(self, file_path: str | Path, header: dict[str, Any], config: PagesConfig) -> None:
        """Attach a parsed content file and apply its header overrides."""
        self.file_path = str(file_path)
        self.header = dict(header)
        self.has_content = True
        self.template = Path(file_path).stem

        view = Header(self.header)
        if view.get("slug"):
            self.slug = str(view.get("slug")).strip("/")
        self.title = str(view.get("title") or self.slug[:1].upper() + self.slug[1:])
        if view.get("template"):
            self.template = str(view.get("template"))
        if "visible" in view:
            self.visible = bool(view.get("visible"))
        if view.get("routable") is False:
            self.routable = False
        if view.get("order_by"):
            self.order_by = str(view.get("order_by"))
        if view.get("order_dir"):
            self.order_dir = str(view.get("order_dir"))
        manual = view.get("order_manual")
        if isinstance(manual, str):
            manual = [manual]
        if manual:
            self.order_manual = tuple(str(m) for m in manual)

        self.published = self._resolve_published(view)
        self.taxonomy = _normalize_taxonomy(view.get("taxonomy"), config.taxonomies)

    def finalize(self, modified: int) -> None:
        """Record the subtree's newest mtime and derive ``id`` and ``date``."""
        self.modified = modified
        digest = hashlib.md5(self.file_path.encode("utf-8")).hexdigest()
        self.id = f"{modified}{digest}"
        self.date = modified
        raw = self.header.get("date")
        if raw is not None:
            try:
                self.date = to_timestamp(raw)
            except (TypeError, ValueError, OverflowError):
                logger.warning("Ignoring unparseable date %r in %s", raw, self.file_path)

    def _resolve_published(self, view: Header) -> bool:
        if view.get("published") is False:
            return False
        now = time.time()
        for key, unpublished_if_future in (("publish_date", True), ("unpublish_date", False)):
            raw = view.get(key)
            if raw is None:
                continue
            try:
                stamp = to_timestamp(raw)
            except (TypeError, ValueError, OverflowError):
                logger.warning("Ignoring unparseable %s %r in %s", key, raw, self.file_path)
                continue
            if unpublished_if_future and stamp > now:
                return False
            if not unpublished_if_future and stamp <= now:
                return False
        return True


def _normalize_taxonomy(raw: Any, names: tuple[str, ...]) -> dict[str, list[str]]:
    """Keep configured taxonomy names, coercing each value to a list of strings."""
    if not isinstance(raw, dict):
        return {}
    result: dict[str, list[str]] = {}
    for name in names:
        value = raw.get(name)
        if value is None:
            continue
        if isinstance(value, list | tuple):
            terms = [str(v) for v in value]
        else:
            terms = [str(value)]
        if terms:
            result[name] = terms
    return result
