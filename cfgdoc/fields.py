# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/fields.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Field bindings for typed structures.

A structure is a dataclass or a pydantic model. Each exported field (one whose
name does not start with ``_``) may carry a tag of the form
``name[,omitempty]`` under the tag key (``cfg`` by default):

* dataclasses: ``field(metadata={"cfg": "title,omitempty"})`` or
  ``field(metadata=tag("title", omitempty=True))``,
* pydantic: ``Field(json_schema_extra={"cfg": "title"})``; without a tag the
  field alias, if any, is used as the name.

A tag of ``-`` excludes the field. Bindings are recomputed on every call.

Examples:
    >>> parse_tag("title,omitempty")
    ('title', True, False)
    >>> parse_tag("-")
    ('', False, True)
    >>> parse_tag(",omitempty")
    ('', True, False)
    >>> tag("port", omitempty=True)
    {'cfg': 'port,omitempty'}
"""

# Future
from __future__ import annotations

# Standard
import dataclasses
from typing import Any, Dict, get_origin, get_type_hints, List, Optional, Tuple

# Third-Party
from pydantic import BaseModel

# First-Party
from cfgdoc.errors import UnsupportedTypeError

DEFAULT_TAG_KEY = "cfg"


@dataclasses.dataclass(frozen=True)
class FieldBinding:
    """How one attribute of a structure maps to a document key.

    Attributes:
        attr: Python attribute name.
        name: Key used in documents.
        omit_empty: Skip the field when encoding a zero value.
        hint: Declared type of the attribute.
        override: Name given by the tag or alias, if any.
    """

    attr: str
    name: str
    omit_empty: bool
    hint: Any
    override: Optional[str] = None


def parse_tag(raw: Optional[str]) -> Tuple[str, bool, bool]:
    """Split a tag string.

    Args:
        raw: Tag text, or None when the field has no tag.

    Returns:
        Tuple[str, bool, bool]: ``(name, omit_empty, skip)``.
    """
    if not raw:
        return ("", False, False)
    if raw == "-":
        return ("", False, True)
    name, *options = raw.split(",")
    return (name.strip(), "omitempty" in (o.strip() for o in options), False)


def tag(name: str = "", omitempty: bool = False, key: str = DEFAULT_TAG_KEY) -> Dict[str, str]:
    """Build field metadata carrying a tag.

    Args:
        name: Document key; empty keeps the attribute name.
        omitempty: Skip zero values when encoding.
        key: Tag key the serializer looks up.

    Returns:
        Dict[str, str]: Metadata for ``dataclasses.field`` or
        pydantic's ``json_schema_extra``.
    """
    return {key: f"{name},omitempty" if omitempty else name}


def is_struct_type(tp: Any) -> bool:
    """Return True for dataclass types and pydantic model types.

    Examples:
        >>> is_struct_type(int)
        False
        >>> @dataclasses.dataclass
        ... class Point:
        ...     x: int = 0
        >>> is_struct_type(Point)
        True
    """
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def struct_hints(cls: type) -> Dict[str, Any]:
    """Resolve the annotations of a dataclass.

    Raises:
        UnsupportedTypeError: If an annotation names an unknown type.
    """
    try:
        return get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise UnsupportedTypeError(cls) from e


def _dataclass_fields(cls: type, tag_key: str) -> List[Tuple[str, Any, Optional[str], Optional[str]]]:
    hints = struct_hints(cls)
    return [(f.name, hints.get(f.name, Any), f.metadata.get(tag_key), None) for f in dataclasses.fields(cls)]


def _model_fields(cls: type, tag_key: str) -> List[Tuple[str, Any, Optional[str], Optional[str]]]:
    out = []
    for attr, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        out.append((attr, info.annotation, extra.get(tag_key), info.alias))
    return out


def field_bindings(cls: type, tag_key: str = DEFAULT_TAG_KEY) -> List[FieldBinding]:
    """Compute the bindings of every exported, non-excluded field.

    Args:
        cls: Dataclass or pydantic model type.
        tag_key: Metadata key holding the tag string.

    Returns:
        List[FieldBinding]: Bindings in declaration order.

    Raises:
        UnsupportedTypeError: If ``cls`` is not a structure type or its
            annotations cannot be resolved.
    """
    if dataclasses.is_dataclass(cls):
        raw_fields = _dataclass_fields(cls, tag_key)
    elif isinstance(cls, type) and issubclass(cls, BaseModel):
        raw_fields = _model_fields(cls, tag_key)
    else:
        raise UnsupportedTypeError(cls)

    bindings = []
    for attr, hint, raw_tag, alias in raw_fields:
        if attr.startswith("_"):
            continue
        name, omit_empty, skip = parse_tag(raw_tag)
        if skip:
            continue
        override = name or alias or None
        bindings.append(FieldBinding(attr=attr, name=override or attr, omit_empty=omit_empty, hint=hint, override=override))
    return bindings
