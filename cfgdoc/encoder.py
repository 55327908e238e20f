# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/encoder.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Type-directed encoding of Python values to configuration documents.

The encoder walks the value itself; it never goes through the parser.

* Scalars render literally. Strings are quoted with ``\\``, ``"``, newline,
  carriage return and tab escaped; datetimes render as quoted RFC 3339.
* Sequences render as ``[a, b]``, mappings as inline tables ``{ k = v }`` in
  insertion order.
* Structures (dataclasses, pydantic models) render their scalar and
  collection fields as ``name = value`` lines and their structure fields as
  ``[section]`` tables after those lines. Nested sections use the dotted path
  of their parent. Structures inside arrays or maps render inline.

Examples:
    >>> Encoder().marshal_value([1, 2.5, "a"])
    '[1, 2.5, "a"]'
    >>> Encoder().marshal_value({"a": 1, "b c": True})
    '{ a = 1, "b c" = true }'
    >>> Encoder().marshal_value('say "hi"\\n')
    '"say \\\\"hi\\\\"\\\\n"'
    >>> Encoder().marshal_value(None)
    ''
"""

# Future
from __future__ import annotations

# Standard
from datetime import datetime
from decimal import Decimal
from enum import Enum
import logging
import math
from typing import Any, Dict, List, Sequence

# First-Party
from cfgdoc.errors import UnsupportedTypeError
from cfgdoc.fields import DEFAULT_TAG_KEY, field_bindings, is_struct_type
from cfgdoc.lexer import is_bare_key
from cfgdoc.values import format_timestamp

logger = logging.getLogger(__name__)

# Names written first, in this order, ahead of the remaining fields.
FIELD_PRIORITY = (
    "string_field",
    "integer",
    "int_field",
    "float",
    "float_field",
    "boolean",
    "bool_field",
    "array",
    "slice_field",
    "map_field",
    "string",
    "nested",
    "nested_struct",
    "time_field",
    "interface_field",
)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def quote_string(s: str) -> str:
    """Quote and escape ``s``.

    Args:
        s: Text to quote.

    Returns:
        str: Quoted string.
    """
    result = ['"']
    for char in s:
        if char == "\\":
            result.append("\\\\")
        elif char == '"':
            result.append('\\"')
        elif char == "\n":
            result.append("\\n")
        elif char == "\r":
            result.append("\\r")
        elif char == "\t":
            result.append("\\t")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def encode_key(key: str) -> str:
    """Render a key bare when it lexes as an identifier, quoted otherwise.

    Examples:
        >>> encode_key("port"), encode_key("has space")
        ('port', '"has space"')
    """
    return key if is_bare_key(key) else quote_string(key)


def format_float(value: float) -> str:
    """Render a float in positional notation, always with a ``.``.

    Non-finite values render as ``nan``, ``inf`` and ``-inf``; they do not
    parse back as numbers.

    Examples:
        >>> format_float(3.0), format_float(0.1), format_float(1e20)
        ('3.0', '0.1', '100000000000000000000.0')
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def _is_empty(value: Any) -> bool:
    if isinstance(value, Enum):
        return False
    if isinstance(value, (str, dict) + _SEQUENCE_TYPES):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


class Encoder:
    """Render Python values as document text.

    Args:
        tag_key: Metadata key holding field tags.
        field_priority: Field names written first in structures.
    """

    def __init__(self, tag_key: str = DEFAULT_TAG_KEY, field_priority: Sequence[str] = FIELD_PRIORITY):
        self.tag_key = tag_key
        self.field_priority = list(field_priority)

    def marshal(self, value: Any) -> bytes:
        """Encode ``value`` to UTF-8 document bytes.

        Args:
            value: Structure, mapping, sequence or scalar.

        Returns:
            bytes: Encoded document.

        Raises:
            UnsupportedTypeError: If ``value`` contains a type with no
                textual form.
        """
        text = self.marshal_value(value)
        logger.debug(f"Encoded {type(value).__name__} to {len(text)} characters")
        return text.encode("utf-8")

    def marshal_value(self, value: Any, path: str = "") -> str:
        """Render ``value``; structures render as documents.

        Args:
            value: Value to render.
            path: Dotted section path of ``value`` when it is a structure.

        Returns:
            str: Rendered text.
        """
        if value is None:
            return ""
        if is_struct_type(type(value)):
            return self.marshal_struct(value, path)
        return self._render(value)

    def _render(self, value: Any) -> str:
        if isinstance(value, Enum):
            return self._render(value.value)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return format_float(value)
        if isinstance(value, str):
            return quote_string(value)
        if isinstance(value, datetime):
            return quote_string(format_timestamp(value))
        if isinstance(value, dict):
            return self._render_map(value)
        if isinstance(value, _SEQUENCE_TYPES):
            return self._render_array(value)
        if is_struct_type(type(value)):
            return self._render_inline_struct(value)
        raise UnsupportedTypeError(type(value))

    def _render_array(self, items: Any) -> str:
        if not items:
            return "[]"
        rendered = []
        for item in items:
            if item is None:
                raise UnsupportedTypeError(type(None))
            rendered.append(self._render(item))
        return "[" + ", ".join(rendered) + "]"

    def _render_map(self, mapping: Dict[Any, Any]) -> str:
        pairs = []
        for key, item in mapping.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(type(key))
            if item is None:
                continue
            pairs.append(f"{encode_key(key)} = {self._render(item)}")
        if not pairs:
            return "{}"
        return "{ " + ", ".join(pairs) + " }"

    def _render_inline_struct(self, obj: Any) -> str:
        return self._render_map({name: item for name, item, _ in self._struct_items(obj)})

    def _struct_items(self, obj: Any) -> List[tuple]:
        items = []
        for binding in field_bindings(type(obj), self.tag_key):
            item = getattr(obj, binding.attr, None)
            if item is None:
                continue
            if binding.omit_empty and _is_empty(item):
                continue
            items.append((binding.name, item, binding))
        return items

    def marshal_struct(self, obj: Any, path: str = "") -> str:
        """Render a structure as key/value lines followed by its sections.

        Args:
            obj: Dataclass or pydantic model instance.
            path: Dotted section path of ``obj``; empty for the document root.

        Returns:
            str: Document text.
        """
        flat: Dict[str, str] = {}
        sections: List[str] = []

        for name, item, _ in self._struct_items(obj):
            if is_struct_type(type(item)):
                section = f"{path}.{encode_key(name)}" if path else encode_key(name)
                sections.append(f"\n[{section}]\n{self.marshal_struct(item, section)}")
            else:
                flat[name] = self._render(item)

        ordered = [n for n in self.field_priority if n in flat]
        ordered += [n for n in flat if n not in ordered]
        lines = [f"{encode_key(n)} = {flat[n]}" for n in ordered]

        result = "\n".join(lines)
        if sections:
            if lines:
                result += "\n"
            result += "".join(sections)
        return result
