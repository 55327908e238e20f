# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

cfgdoc - configuration document serialization engine.

Lexer, recursive-descent parser, generic value model and a type-directed
mapper between that model and dataclasses or pydantic models.
"""

__version__ = "0.1.0"

from cfgdoc.errors import (
    CfgDocError,
    ConfigFileNotFoundError,
    DecodeError,
    LexError,
    ParseError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from cfgdoc.fields import FieldBinding, tag
from cfgdoc.lexer import Lexer, Token, TokenKind, tokenize
from cfgdoc.parser import Parser
from cfgdoc.serializer import CfgSerializer, decode, dumps, encode, load_file, load_from_env, loads
from cfgdoc.values import InlineTable, Table

__all__ = [
    # Facade
    "CfgSerializer",
    "decode",
    "encode",
    "loads",
    "dumps",
    "load_file",
    "load_from_env",
    # Building blocks
    "Lexer",
    "Parser",
    "Token",
    "TokenKind",
    "tokenize",
    "Table",
    "InlineTable",
    "FieldBinding",
    "tag",
    # Errors
    "CfgDocError",
    "LexError",
    "ParseError",
    "DecodeError",
    "TypeMismatchError",
    "UnsupportedTypeError",
    "ConfigFileNotFoundError",
]
