# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/values.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Generic value model produced by the parser.

A parsed document is a tree of native Python values:

* ``str``, ``int``, ``float``, ``bool`` and timezone-aware ``datetime``
  scalars,
* ``list`` for arrays,
* :class:`Table` for ``[section]`` tables and the document root,
* :class:`InlineTable` for ``{ k = v }`` tables.

Both table types are insertion-ordered ``dict`` subclasses, so iteration and
re-encoding are deterministic.

Examples:
    >>> kind_of(Table(a=1)).value
    'table'
    >>> kind_of(InlineTable()).value
    'inline table'
    >>> kind_of(True).value
    'bool'
    >>> parse_timestamp("2024-05-01T10:30:00Z").isoformat()
    '2024-05-01T10:30:00+00:00'
    >>> format_timestamp(parse_timestamp("2024-05-01T10:30:00+02:00"))
    '2024-05-01T10:30:00+02:00'
"""

# Future
from __future__ import annotations

# Standard
from datetime import datetime, timezone
from enum import Enum
import re
from typing import Any, List, Union

_RFC3339_RE = re.compile(r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(?:\.\d{1,6})?(?:[Zz]|[+-]\d{2}:\d{2})$")

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class Table(dict):
    """Ordered name to value mapping; a document root or ``[section]``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


class InlineTable(Table):
    """Table written inline as ``{ k = v, ... }``."""


Value = Union[str, int, float, bool, datetime, List[Any], Table]


class ValueKind(str, Enum):
    """Variant names of the value model, used in error messages."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    TIMESTAMP = "timestamp"
    ARRAY = "array"
    TABLE = "table"
    INLINE_TABLE = "inline table"
    NONE = "none"
    OTHER = "unknown"


def kind_of(value: Any) -> ValueKind:
    """Name the variant of ``value``.

    Args:
        value: A value-model node.

    Returns:
        ValueKind: The variant; ``OTHER`` for anything outside the model.
    """
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, InlineTable):
        return ValueKind.INLINE_TABLE
    if isinstance(value, dict):
        return ValueKind.TABLE
    if isinstance(value, list):
        return ValueKind.ARRAY
    if value is None:
        return ValueKind.NONE
    return ValueKind.OTHER


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 date-time with a mandatory offset.

    Args:
        text: Candidate timestamp.

    Returns:
        datetime: Timezone-aware datetime.

    Raises:
        ValueError: If ``text`` is not an RFC 3339 timestamp.

    Examples:
        >>> parse_timestamp("2024-01-01")
        Traceback (most recent call last):
        ...
        ValueError: not an RFC 3339 timestamp: '2024-01-01'
    """
    if not _RFC3339_RE.match(text):
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    normalized = text.upper()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    return datetime.fromisoformat(normalized)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as RFC 3339 with second precision.

    Naive datetimes are taken to be UTC. UTC renders with a ``Z`` suffix.

    Args:
        value: Datetime to format.

    Returns:
        str: RFC 3339 text.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.replace(microsecond=0).isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[:-6] + "Z"
    return rendered


def to_plain(value: Any) -> Any:
    """Strip table subclasses so the tree can be dumped as JSON.

    Args:
        value: A value-model node.

    Returns:
        Any: The same tree built from plain ``dict`` and ``list``.

    Examples:
        >>> to_plain(Table(a=[InlineTable(b=1)]))
        {'a': [{'b': 1}]}
    """
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    return value
