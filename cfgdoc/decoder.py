# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/decoder.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Type-directed decoding of a value tree onto typed Python targets.

The decoder walks the declared type (a type hint) and the parsed value side by
side. Supported shapes:

* ``str``, ``int``, ``float``, ``bool``; floats truncate into ``int`` fields
  and integers widen into ``float`` fields,
* ``datetime`` from a timestamp or an RFC 3339 string,
* ``Enum`` subclasses, built from their value,
* ``list[T]``, ``tuple[T, ...]``, ``tuple[A, B]``,
* ``dict[str, T]``,
* dataclasses and pydantic models, matched by field binding name,
* ``Optional[T]`` (allocated lazily) and ``Any`` (raw value kept).

Unmatched struct fields keep their current value and unknown keys are
ignored. The first mismatch raises; nothing is partially recovered. Nested
structures are decoded into copies, so defaults shared between instances are
never changed.

Examples:
    >>> Decoder().set_value(int, 3.5)
    3
    >>> Decoder().set_value(list[int], [1, 2, 3])
    [1, 2, 3]
    >>> Decoder().set_value(str, None)
    ''
    >>> Decoder().set_value(bool, 1)
    Traceback (most recent call last):
    ...
    cfgdoc.errors.TypeMismatchError: cannot convert integer to bool
"""

# Future
from __future__ import annotations

# Standard
import copy
import dataclasses
from datetime import datetime
from enum import Enum
import logging
import types
from typing import Any, Dict, get_args, get_origin, Union

# Third-Party
from pydantic import BaseModel

# First-Party
from cfgdoc.errors import TypeMismatchError, UnsupportedTypeError
from cfgdoc.fields import DEFAULT_TAG_KEY, field_bindings, is_struct_type, struct_hints
from cfgdoc.values import kind_of, parse_timestamp, ValueKind, ZERO_TIME

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


def _type_name(hint: Any) -> str:
    return getattr(hint, "__name__", None) or str(hint)


def _optional_inner(hint: Any) -> Any:
    """Return ``T`` for ``Optional[T]``, else None."""
    if get_origin(hint) not in (Union, types.UnionType):
        return None
    args = [a for a in get_args(hint) if a is not _NONE_TYPE]
    if len(args) == 1 and len(get_args(hint)) == 2:
        return args[0]
    return None


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _is_frozen(obj: Any) -> bool:
    if dataclasses.is_dataclass(obj):
        return type(obj).__dataclass_params__.frozen
    if isinstance(obj, BaseModel):
        return bool(type(obj).model_config.get("frozen"))
    return False


def _apply(obj: Any, changes: Dict[str, Any]) -> Any:
    """Write decoded attributes onto ``obj``.

    Frozen instances are never mutated: a new instance carrying the changes
    is returned instead. Attributes of a frozen dataclass that are not
    ``__init__`` parameters cannot be set and are left unchanged.

    Returns:
        Any: ``obj`` itself, or its replacement when it is frozen.
    """
    if not changes:
        return obj
    if not _is_frozen(obj):
        for attr, value in changes.items():
            setattr(obj, attr, value)
        return obj
    if isinstance(obj, BaseModel):
        return obj.model_copy(update=changes)
    init_fields = {f.name for f in dataclasses.fields(obj) if f.init}
    return dataclasses.replace(obj, **{k: v for k, v in changes.items() if k in init_fields})


def zero_value(hint: Any) -> Any:
    """Return the zero value of a declared type.

    Args:
        hint: Type hint.

    Returns:
        Any: ``""``, ``0``, ``0.0``, ``False``, the zero time, an empty
        collection, a zero-filled structure, or None.

    Examples:
        >>> zero_value(int), zero_value(str), zero_value(list[str])
        (0, '', [])
    """
    if hint in (str, int, float, bool):
        return hint()
    if hint is datetime:
        return ZERO_TIME
    if is_struct_type(hint):
        return new_struct(hint)
    origin = get_origin(hint) or hint
    if origin is list:
        return []
    if origin is tuple:
        return ()
    if origin is dict:
        return {}
    return None


def new_struct(cls: type) -> Any:
    """Instantiate ``cls`` with zero values for every required field.

    Args:
        cls: Dataclass or pydantic model type.

    Returns:
        Any: A new instance; defaults apply to optional fields.
    """
    if dataclasses.is_dataclass(cls):
        hints = struct_hints(cls)
        kwargs = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                kwargs[f.name] = zero_value(hints.get(f.name, Any))
        return cls(**kwargs)
    zeros = {name: zero_value(info.annotation) for name, info in cls.model_fields.items() if info.is_required()}
    return cls.model_construct(**zeros)


class Decoder:
    """Populate typed targets from value trees.

    Args:
        tag_key: Metadata key holding field tags.
    """

    def __init__(self, tag_key: str = DEFAULT_TAG_KEY):
        self.tag_key = tag_key

    def decode_into(self, target: Any, value: Any) -> Any:
        """Decode ``value`` into ``target``.

        Every field is decoded before anything is written, so a failure
        leaves ``target`` untouched. Nested structures already held by
        ``target`` are copied, not mutated.

        Args:
            target: A structure instance or ``dict`` (populated in place), or
                a type (a new instance is built). A frozen instance is left
                as is and an updated copy is returned.
            value: Root of the value tree.

        Returns:
            Any: The populated target.

        Raises:
            TypeMismatchError: If a value has the wrong shape for its field.
            UnsupportedTypeError: If the target type has no mapping.
        """
        if isinstance(target, type) or get_origin(target) is not None:
            return self.set_value(target, value)
        if is_struct_type(type(target)):
            return self._set_struct(type(target), value, target, "", in_place=True)
        if isinstance(target, dict):
            decoded = self.set_value(dict, value)
            target.clear()
            target.update(decoded)
            return target
        raise UnsupportedTypeError(type(target))

    def set_value(self, hint: Any, value: Any, current: Any = None, path: str = "") -> Any:
        """Convert ``value`` to the type described by ``hint``.

        Args:
            hint: Declared type of the destination.
            value: Value-model node.
            current: Existing destination value; structures are decoded into
                a copy of it and optionals reuse their pointee.
            path: Dotted location used in error messages.

        Returns:
            Any: The decoded value.

        Raises:
            TypeMismatchError: If ``value`` does not fit ``hint``.
            UnsupportedTypeError: If ``hint`` has no mapping.
        """
        if hint is Any or hint is object:
            return value

        origin = get_origin(hint)
        if origin is not None:
            return self._set_generic(hint, origin, value, current, path)

        if value is None:
            return self._set_none(hint, path)

        if hint is bool:
            if isinstance(value, bool):
                return value
            raise self._mismatch("bool", value, path)
        if hint is int:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise self._mismatch("int", value, path)
            return int(value)
        if hint is float:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise self._mismatch("float", value, path)
            return float(value)
        if hint is str:
            if isinstance(value, str):
                return value
            raise self._mismatch("string", value, path)
        if hint is datetime:
            return self._set_time(value, path)
        if isinstance(hint, type) and issubclass(hint, Enum):
            try:
                return hint(value)
            except ValueError as e:
                raise self._mismatch(hint.__name__, value, path) from e
        if is_struct_type(hint):
            return self._set_struct(hint, value, current, path)
        if hint in (list, tuple):
            return self._set_sequence(hint, (), value, path)
        if hint is dict:
            return self._set_map((), value, path)

        raise UnsupportedTypeError(hint, path)

    def _set_generic(self, hint: Any, origin: Any, value: Any, current: Any, path: str) -> Any:
        inner = _optional_inner(hint)
        if inner is not None:
            if value is None:
                return None
            return self.set_value(inner, value, current, path)

        if origin in (list, tuple, dict) and value is None:
            return zero_value(origin)
        if origin in (list, tuple):
            return self._set_sequence(origin, get_args(hint), value, path)
        if origin is dict:
            return self._set_map(get_args(hint), value, path)

        raise UnsupportedTypeError(hint, path)

    def _mismatch(self, expected: str, value: Any, path: str) -> TypeMismatchError:
        return TypeMismatchError(expected, kind_of(value).value, path)

    def _set_none(self, hint: Any, path: str) -> Any:
        if hint in (str, int, float, bool, list, tuple, dict) or hint is datetime:
            return zero_value(hint)
        if is_struct_type(hint):
            raise TypeMismatchError(_type_name(hint), ValueKind.NONE.value, path)
        if isinstance(hint, type) and issubclass(hint, Enum):
            return None
        raise UnsupportedTypeError(hint, path)

    def _set_time(self, value: Any, path: str) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return parse_timestamp(value)
            except ValueError as e:
                raise TypeMismatchError("RFC 3339 timestamp", f"string {value!r}", path) from e
        raise self._mismatch("timestamp", value, path)

    def _set_sequence(self, origin: type, args: tuple, value: Any, path: str) -> Any:
        if not isinstance(value, list):
            raise self._mismatch(_type_name(origin), value, path)

        if origin is tuple and args and args[-1] is not Ellipsis:
            if len(args) != len(value):
                raise TypeMismatchError(f"tuple of {len(args)}", f"array of {len(value)}", path)
            return tuple(self.set_value(a, v, None, f"{path}[{i}]") for i, (a, v) in enumerate(zip(args, value)))

        elem = args[0] if args else Any
        items = [self.set_value(elem, v, None, f"{path}[{i}]") for i, v in enumerate(value)]
        return tuple(items) if origin is tuple else items

    def _set_map(self, args: tuple, value: Any, path: str) -> Dict[str, Any]:
        key_type, elem = args if args else (str, Any)
        if key_type not in (str, Any):
            raise UnsupportedTypeError(key_type, path)
        if not isinstance(value, dict):
            raise self._mismatch("map", value, path)
        return {k: self.set_value(elem, v, None, _join(path, k)) for k, v in value.items()}

    def _set_struct(self, cls: type, value: Any, current: Any, path: str, in_place: bool = False) -> Any:
        if not isinstance(value, dict):
            raise self._mismatch(cls.__name__, value, path)
        if isinstance(current, cls):
            obj = current if in_place else copy.copy(current)
        else:
            obj = new_struct(cls)

        changes: Dict[str, Any] = {}
        for binding in field_bindings(cls, self.tag_key):
            if binding.name not in value:
                continue
            existing = getattr(obj, binding.attr, None)
            changes[binding.attr] = self.set_value(binding.hint, value[binding.name], existing, _join(path, binding.name))

        logger.debug(f"Decoded {cls.__name__} at '{path or '<root>'}'")
        return _apply(obj, changes)
