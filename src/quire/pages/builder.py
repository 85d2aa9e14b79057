"""Filesystem walk that materializes the page tree.

Walks the pages directory depth-first and, for each directory:

- creates a :class:`Page` and registers it under its parent
- parses the content file (``config.content_ext``) when one is present
- tracks the newest file mtime, folded together with every child's
- orders its children before returning, so ordering is bottom-up

Dot-files and OS artefacts named in ``config.ignored_files`` are skipped
outright.  Folders starting with ``config.hidden_prefix`` produce
unroutable pages, as does every page beneath them.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from quire.errors import BuildError
from quire.pages.parser import ContentParser, FrontmatterParser
from quire.pages.tree import Tree
from quire.pages.types import Page

if TYPE_CHECKING:
    from quire.config import PagesConfig
    from quire.pages.taxonomy import Taxonomy

logger = logging.getLogger("quire.pages")


def build_tree(
    pages_dir: str | Path,
    config: PagesConfig,
    parser: ContentParser | None = None,
    taxonomy: Taxonomy | None = None,
) -> Tree:
    """Walk *pages_dir* and return a fully ordered tree (routes not yet built).

    Raises:
        BuildError: The directory is missing or unreadable, or a path
            was registered twice.
    """
    root = Path(pages_dir).resolve()
    if not root.is_dir():
        msg = f"Pages directory not found: {root}"
        raise BuildError(msg)

    tree = Tree(str(root), config, taxonomy=taxonomy)
    _walk_directory(
        root,
        tree,
        parser or FrontmatterParser(),
        parent=None,
        hidden=False,
        ancestors=set(),
    )
    logger.debug("Built %d pages from %s", len(tree), root)
    return tree


def _walk_directory(
    directory: Path,
    tree: Tree,
    parser: ContentParser,
    *,
    parent: Page | None,
    hidden: bool,
    ancestors: set[str],
) -> Page:
    """Build the page for *directory* and, recursively, its subtree.

    Args:
        directory: Directory being walked.
        tree: Tree receiving the pages.
        parser: Reads headers from content files.
        parent: Page of the enclosing directory, ``None`` at the root.
        hidden: An ancestor folder carries the hidden prefix.
        ancestors: Real paths of the directories enclosing this one; meeting
            one again (a symlink loop) is fatal.
    """
    real_path = os.path.realpath(directory)
    if real_path in ancestors:
        msg = f"Directory loop while building the tree: {directory}"
        raise BuildError(msg)
    ancestors.add(real_path)

    config = tree.config
    page = Page.from_directory(directory, config, parent.path if parent else None)
    tree.register(page)

    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as exc:
        msg = f"Cannot read pages directory {directory}: {exc}"
        raise BuildError(msg) from exc

    last_modified = 0
    content_exists = False

    for entry in entries:
        name = entry.name
        if name.startswith(".") or name in config.ignored_files:
            continue

        if entry.is_file():
            last_modified = max(last_modified, int(entry.stat().st_mtime))
            if name.endswith(config.content_ext) and not content_exists:
                file_path = Path(entry.path)
                page.init(file_path, parser.parse(file_path), config)
                content_exists = True
        elif entry.is_dir():
            child_hidden = hidden or (
                bool(config.hidden_prefix) and name.startswith(config.hidden_prefix)
            )
            child = _walk_directory(
                Path(entry.path),
                tree,
                parser,
                parent=page,
                hidden=child_hidden,
                ancestors=ancestors,
            )
            tree.link(page.path, child)
            last_modified = max(last_modified, child.modified)

    ancestors.discard(real_path)

    if hidden or not content_exists:
        page.routable = False

    page.finalize(last_modified)

    # Children are final; fix their order before the parent sees this page
    ordered = tree.sort(page)
    if ordered:
        tree.children_by_parent[page.path] = ordered

    return page
