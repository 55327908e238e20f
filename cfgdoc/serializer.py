# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/serializer.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Serializer facade and configuration loading helpers.

``decode`` runs lexer, parser and reflective decoder; ``encode`` runs the
reflective encoder. Every call builds its own transient state, so one
serializer can be shared between threads.

Examples:
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Doc:
    ...     title: str = field(default="", metadata={"cfg": "title"})
    ...     count: int = 0
    >>> decode('title = "abc"\\ncount = 3\\n', Doc)
    Doc(title='abc', count=3)
    >>> encode(Doc(title="x", count=2))
    b'title = "x"\\ncount = 2'
    >>> CfgSerializer().format()
    'TOML'
"""

# Future
from __future__ import annotations

# Standard
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

# Third-Party
import orjson

# First-Party
from cfgdoc.config import get_settings, Settings
from cfgdoc.decoder import Decoder
from cfgdoc.encoder import Encoder
from cfgdoc.errors import ConfigFileNotFoundError, ParseError
from cfgdoc.parser import parse as parse_document
from cfgdoc.values import Table, to_plain

logger = logging.getLogger(__name__)


class CfgSerializer:
    """Encode and decode configuration documents.

    Args:
        settings: Engine settings; defaults to :func:`get_settings`.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def format(self) -> str:
        """Name of the document format."""
        return "TOML"

    def parse(self, data: Union[str, bytes]) -> Table:
        """Parse a document into its value tree.

        Args:
            data: Document text or UTF-8 bytes.

        Returns:
            Table: The document root.

        Raises:
            ParseError: On invalid UTF-8 or the first grammar violation.
        """
        if isinstance(data, (bytes, bytearray)):
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"document is not valid UTF-8 at byte {e.start}") from e
        else:
            text = data
        root = parse_document(text, section_scope=self.settings.section_scope)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Parsed document: {orjson.dumps(to_plain(root)).decode()}")
        return root

    def unmarshal(self, data: Union[str, bytes], target: Any) -> Any:
        """Parse ``data`` and populate ``target``.

        Args:
            data: Document text or UTF-8 bytes.
            target: Structure instance or ``dict`` populated in place, or a
                type to instantiate.

        Returns:
            Any: The populated target.

        Raises:
            ParseError: If the document is malformed.
            DecodeError: If the document does not fit ``target``.
        """
        root = self.parse(data)
        return Decoder(tag_key=self.settings.tag_key).decode_into(target, root)

    def marshal(self, value: Any) -> bytes:
        """Encode ``value`` as a document.

        Args:
            value: Structure, mapping, sequence or scalar.

        Returns:
            bytes: UTF-8 document.

        Raises:
            UnsupportedTypeError: If ``value`` contains a type with no
                textual form.
        """
        encoder = Encoder(tag_key=self.settings.tag_key, field_priority=self.settings.field_priority)
        return encoder.marshal(value)

    def load_file(self, path: Union[str, Path], target: Any) -> Any:
        """Read a UTF-8 document from ``path`` and decode it into ``target``.

        Raises:
            ConfigFileNotFoundError: If ``path`` does not exist.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigFileNotFoundError(f"Config file does not exist: {file_path}")
        logger.info(f"Loading configuration from {file_path}")
        return self.unmarshal(file_path.read_bytes(), target)

    def load_from_env(self, target: Any, env_var: str = "CONFIG_PATH") -> Any:
        """Decode the document named by ``env_var`` (or ``config_path``).

        Raises:
            ConfigFileNotFoundError: If no path is configured or the file is
                missing.
        """
        path = os.environ.get(env_var) or self.settings.config_path
        if not path:
            raise ConfigFileNotFoundError(f"{env_var} is not set")
        return self.load_file(path, target)


def _default() -> CfgSerializer:
    return CfgSerializer(get_settings())


def decode(data: Union[str, bytes], target: Any) -> Any:
    """Parse ``data`` and populate ``target`` (instance or type)."""
    return _default().unmarshal(data, target)


def encode(value: Any) -> bytes:
    """Encode ``value`` as UTF-8 document bytes."""
    return _default().marshal(value)


def loads(data: Union[str, bytes]) -> Table:
    """Parse ``data`` into its untyped value tree."""
    return _default().parse(data)


def dumps(value: Any) -> str:
    """Encode ``value`` as document text."""
    return _default().marshal(value).decode("utf-8")


def load_file(path: Union[str, Path], target: Any) -> Any:
    """Load and decode the document at ``path``."""
    return _default().load_file(path, target)


def load_from_env(target: Any, env_var: str = "CONFIG_PATH") -> Any:
    """Load and decode the document named by ``env_var``."""
    return _default().load_from_env(target, env_var)
