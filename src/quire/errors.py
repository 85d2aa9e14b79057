"""Quire exception hierarchy.

Shared across the builder, sort engine, route table, and cache gate so
every module raises and catches the same types.
"""


class QuireError(Exception):
    """Base for all quire-specific errors."""


class ConfigurationError(QuireError):
    """Raised when pages configuration is invalid.

    Typically raised while constructing ``PagesConfig``.
    """


class BuildError(QuireError):
    """Raised when the page tree cannot be built.

    Covers a missing or unreadable pages directory and a directory path
    being registered twice.  Aborts the whole build.
    """


class ConsistencyError(QuireError):
    """Raised when the adjacency table references a page the node table lacks."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Page does not exist: {path}")
