"""Cache store protocol and the diskcache-backed implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import diskcache

if TYPE_CHECKING:
    from pathlib import Path


class CacheStore(Protocol):
    """Opaque-key store for serialized tree bundles."""

    def fetch(self, key: str) -> Any | None: ...

    def save(self, key: str, bundle: Any) -> None: ...


class DiskCacheStore:
    """Adapter for diskcache.Cache to match the CacheStore protocol.

    Bundles are pickled by diskcache.  Concurrent writers of the same key
    simply overwrite each other.
    """

    def __init__(self, directory: Path | str, **kwargs: Any) -> None:
        self._cache = diskcache.Cache(str(directory), **kwargs)

    def fetch(self, key: str) -> Any | None:
        return self._cache.get(key)

    def save(self, key: str, bundle: Any) -> None:
        self._cache.set(key, bundle)

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

    def __enter__(self) -> DiskCacheStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
