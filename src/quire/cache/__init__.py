"""Cache gate: skip rebuilding the page tree when content is unchanged."""

from quire.cache.backends import CacheStore, DiskCacheStore
from quire.cache.fingerprint import fingerprint, last_modified_file, last_modified_folder
from quire.cache.gate import PageIndex

__all__ = [
    "CacheStore",
    "DiskCacheStore",
    "PageIndex",
    "fingerprint",
    "last_modified_file",
    "last_modified_folder",
]
