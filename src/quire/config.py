"""Pages configuration.

PagesConfig is a frozen dataclass.  Its checksum feeds the page cache
fingerprint, so any field change invalidates a cached tree.
"""

import hashlib
import json
from dataclasses import asdict, dataclass, field

from quire.errors import ConfigurationError

_CHECK_METHODS = frozenset({"file", "folder", "none", "off"})


@dataclass(frozen=True, slots=True)
class PagesConfig:
    """Pages configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PagesConfig(order_by="date", order_dir="desc", home_alias="/blog")
    """

    # Content
    content_ext: str = ".md"
    hidden_prefix: str = "_"
    ignored_files: tuple[str, ...] = (".DS_Store", "Thumbs.db")

    # Ordering defaults (a page header may override them)
    order_by: str = "default"
    order_dir: str = "asc"

    # Routing
    home_alias: str = "/home"  # Registered as "/" too; "" disables
    redirects: dict[str, str] = field(default_factory=dict)
    routes: dict[str, str] = field(default_factory=dict)  # Exact or "*" wildcard aliases

    # Taxonomy
    taxonomies: tuple[str, ...] = ("category", "tag")

    # Cache
    cache_enabled: bool = True
    cache_check_method: str = "file"  # "file", "folder", "none" / "off"

    def __post_init__(self) -> None:
        if self.order_dir not in ("asc", "desc"):
            msg = f"order_dir must be 'asc' or 'desc', got {self.order_dir!r}"
            raise ConfigurationError(msg)
        if self.cache_check_method.lower() not in _CHECK_METHODS:
            allowed = ", ".join(sorted(_CHECK_METHODS))
            msg = f"cache_check_method must be one of {allowed}, got {self.cache_check_method!r}"
            raise ConfigurationError(msg)
        if not self.content_ext.startswith("."):
            msg = f"content_ext must start with '.', got {self.content_ext!r}"
            raise ConfigurationError(msg)

    def checksum(self) -> str:
        """Return a stable md5 digest of every setting."""
        payload = json.dumps(asdict(self), sort_keys=True, default=str)
        return hashlib.md5(payload.encode("utf-8")).hexdigest()
