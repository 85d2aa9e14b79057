"""Cache keys for page tree generations.

A fingerprint combines the pages root, a last-modified signal, and the
configuration checksum.  Any change to one of them starts a new
generation.
"""

import hashlib
import os
from pathlib import Path

from quire.config import PagesConfig


def last_modified_file(directory: str | Path) -> int:
    """Newest mtime of any file below *directory* (dot-files excluded).

    Entries that do not resolve to a regular file, such as dangling
    symlinks, are skipped the same way the tree builder skips them.
    """
    newest = 0
    for dirpath, dirnames, filenames in os.walk(directory):
        dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        for name in filenames:
            if name.startswith("."):
                continue
            path = os.path.join(dirpath, name)
            if not os.path.isfile(path):
                continue
            newest = max(newest, int(os.stat(path).st_mtime))
    return newest


def last_modified_folder(directory: str | Path) -> int:
    """Newest mtime of *directory* or any folder below it."""
    newest = int(os.stat(directory).st_mtime)
    for dirpath, dirnames, _ in os.walk(directory):
        dirnames[:] = [name for name in dirnames if not name.startswith(".")]
        for name in dirnames:
            path = os.path.join(dirpath, name)
            if not os.path.isdir(path):
                continue
            newest = max(newest, int(os.stat(path).st_mtime))
    return newest


def last_modified(directory: str | Path, method: str) -> int:
    """Resolve the configured check method to a last-modified signal."""
    method = method.lower()
    if method in ("none", "off"):
        return 0
    if method == "folder":
        return last_modified_folder(directory)
    return last_modified_file(directory)


def fingerprint(directory: str | Path, config: PagesConfig) -> str:
    """Return the cache key for the current state of *directory*."""
    signal = last_modified(directory, config.cache_check_method)
    raw = f"{Path(directory)}{signal}{config.checksum()}"
    return hashlib.md5(raw.encode("utf-8")).hexdigest()
