"""Header metadata helpers.

Content headers are plain mappings produced by a ``ContentParser``.
``Header`` adds dotted-key lookup over nested mappings, and
``to_timestamp`` coerces the assorted date shapes YAML produces into
integer epoch seconds.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any

from dateutil import parser as date_parser


class Header:
    """Read-only view over a page header with dotted-key access.

    Usage::

        header = Header({"author": {"name": "Ann"}})
        header.get("author.name")  # "Ann"
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: Mapping[str, Any] = data or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Look up *key*, descending into nested mappings on each ``.``."""
        if key in self._data:
            return self._data[key]
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel


def to_timestamp(value: Any) -> int:
    """Coerce a header date value to integer epoch seconds.

    Accepts numbers, ``datetime``, ``date`` and strings ``dateutil`` can
    parse.  Raises ``dateutil.parser.ParserError`` (a ``ValueError``) for
    unparseable strings and ``TypeError`` for unsupported types.
    """
    if isinstance(value, bool):
        msg = f"Cannot use a boolean as a date: {value!r}"
        raise TypeError(msg)
    if isinstance(value, int | float):
        return int(value)
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime.combine(value, time()).timestamp())
    if isinstance(value, str):
        return int(date_parser.parse(value).timestamp())
    msg = f"Unsupported date value: {value!r}"
    raise TypeError(msg)
