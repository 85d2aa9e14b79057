"""Content file parsing.

The tree builder only needs the header of each content file.  Any
object with a matching ``parse`` method can stand in; the default reads
YAML front matter with python-frontmatter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import frontmatter
import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("quire.pages")


class ContentParser(Protocol):
    """Turns a content file into its header mapping."""

    def parse(self, path: Path) -> dict[str, Any]: ...


class FrontmatterParser:
    """Read YAML front matter from Markdown content files.

    A file that cannot be decoded, or whose front matter is malformed or
    not a mapping, still counts as content; its header is empty and a
    warning is logged.
    """

    __slots__ = ("encoding",)

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def parse(self, path: Path) -> dict[str, Any]:
        try:
            post = frontmatter.loads(path.read_text(encoding=self.encoding))
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Failed to parse front matter in %s: %s", path, exc)
            return {}

        metadata = post.metadata or {}
        if not isinstance(metadata, dict):
            logger.warning(
                "Front matter in %s is not a mapping: %s", path, type(metadata).__name__
            )
            return {}
        return dict(metadata)
