# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Exception hierarchy for the configuration document engine.

Every error is terminal for the call that raised it: parsing and decoding
stop at the first failure and nothing is accumulated.

Examples:
    >>> err = ParseError("unexpected token", line=3, column=7)
    >>> str(err)
    'line 3, column 7: unexpected token'
    >>> isinstance(err, CfgDocError)
    True
    >>> str(TypeMismatchError("int", "string", path="server.port"))
    'server.port: cannot convert string to int'
"""

# Future
from __future__ import annotations

# Standard
from typing import Any, Optional


class CfgDocError(Exception):
    """Base class for every error raised by cfgdoc."""


class LexError(CfgDocError):
    """Tokenizer failure.

    Never raised: unrecognised or unterminated input degrades to an EOF token
    and the parser reports the problem instead.
    """


class ParseError(CfgDocError):
    """Grammar violation found while building the value tree."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None:
            super().__init__(f"line {line}, column {column}: {message}")
        else:
            super().__init__(message)


class DecodeError(CfgDocError):
    """Base for failures while mapping a value tree onto a typed target."""


class TypeMismatchError(DecodeError):
    """A value has the wrong shape for the field it is decoded into."""

    def __init__(self, expected: str, actual: str, path: str = ""):
        self.expected = expected
        self.actual = actual
        self.path = path
        message = f"cannot convert {actual} to {expected}"
        super().__init__(f"{path}: {message}" if path else message)


class UnsupportedTypeError(DecodeError):
    """The target type (or value being encoded) has no mapping to the format."""

    def __init__(self, type_: Any, path: str = ""):
        self.type = type_
        self.path = path
        name = getattr(type_, "__name__", None) or repr(type_)
        message = f"unsupported type: {name}"
        super().__init__(f"{path}: {message}" if path else message)


class ConfigFileNotFoundError(CfgDocError):
    """The configuration file to load is not configured or does not exist."""
