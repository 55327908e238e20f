# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/parser.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Recursive-descent parser building a :class:`~cfgdoc.values.Table` tree.

Grammar handled at statement level:

* ``[a.b.c]`` selects (creating on first reference) a chain of tables,
  always navigated from the document root,
* ``key = value`` stores a value in the current table,
* a newline separates statements.

Values are strings (promoted to timestamps when they are RFC 3339), numbers
(float when the literal contains ``.``), dates, booleans, ``[ ... ]`` arrays
and ``{ k = v }`` inline tables.

Section scoping comes in two flavours. ``"section"`` (the default) keeps a
header in effect until the next header. ``"line"`` resets to the root on
every newline that is not consumed after a key/value pair, which is how the
first generation of these documents was read.

Examples:
    >>> Parser('[nested]\\nvalue = 1\\n').parse_table()
    Table({'nested': Table({'value': 1})})
    >>> Parser('arr = [1, 2.5, "x"]').parse_table()["arr"]
    [1, 2.5, 'x']
    >>> Parser("key = \\n").parse_table()
    Traceback (most recent call last):
    ...
    cfgdoc.errors.ParseError: line 1, column 7: unexpected token: newline
"""

# Future
from __future__ import annotations

# Standard
import logging
from typing import Any, List, Literal

# First-Party
from cfgdoc.errors import ParseError
from cfgdoc.lexer import Lexer, Token, TokenKind
from cfgdoc.values import InlineTable, parse_timestamp, Table

logger = logging.getLogger(__name__)

SectionScope = Literal["section", "line"]

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}


def unescape(raw: str) -> str:
    """Decode the escape sequences the encoder writes.

    Unknown escapes are kept verbatim.

    Args:
        raw: String lexeme without its quotes.

    Returns:
        str: Decoded text.

    Examples:
        >>> unescape(r'say \\"hi\\"\\n')
        'say "hi"\\n'
        >>> unescape(r"C:\\x")
        'C:\\\\x'
    """
    if "\\" not in raw:
        return raw
    out: List[str] = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c == "\\" and i + 1 < len(raw) and raw[i + 1] in _ESCAPES:
            out.append(_ESCAPES[raw[i + 1]])
            i += 2
            continue
        out.append(c)
        i += 1
    return "".join(out)


class Parser:
    """Parse one document into a value tree.

    Args:
        text: Document source.
        section_scope: ``"section"`` or ``"line"``, see module docstring.
    """

    def __init__(self, text: str, section_scope: SectionScope = "section"):
        if section_scope not in ("section", "line"):
            raise ValueError(f"Invalid section_scope: {section_scope}")
        self.lexer = Lexer(text)
        self.section_scope = section_scope
        self.token: Token = self.lexer.next()

    def next(self) -> None:
        """Advance to the following token."""
        self.token = self.lexer.next()

    def _error(self, message: str) -> ParseError:
        return ParseError(message, line=self.token.line, column=self.token.column)

    def _expect(self, kind: TokenKind, what: str) -> None:
        if self.token.kind is not kind:
            raise self._error(f"expected {what}, got {self.token}")
        self.next()

    def parse_table(self) -> Table:
        """Consume the whole token stream.

        Returns:
            Table: The document root.

        Raises:
            ParseError: On the first grammar violation.
        """
        root = Table()
        current = root

        while self.token.kind is not TokenKind.EOF:
            kind = self.token.kind
            if kind is TokenKind.LBRACKET:
                self.next()
                path = self.parse_table_path()
                if not path:
                    raise self._error(f"expected table name, got {self.token}")
                self._expect(TokenKind.RBRACKET, "]")
                current = self._open_table(root, path)
            elif kind is TokenKind.STRING:
                key = unescape(self.token.lexeme)
                self.next()
                self._expect(TokenKind.EQUALS, "=")
                current[key] = self.parse_value()
                while self.token.kind is TokenKind.NEWLINE:
                    self.next()
            elif kind is TokenKind.NEWLINE:
                self.next()
                if self.section_scope == "line":
                    current = root
            else:
                raise self._error(f"unexpected token: {self.token}")

        return root

    def _open_table(self, root: Table, path: List[str]) -> Table:
        current = root
        for i, key in enumerate(path):
            if key not in current:
                current[key] = Table()
            child = current[key]
            if not isinstance(child, Table) or isinstance(child, InlineTable):
                dotted = ".".join(path[: i + 1])
                raise self._error(f"cannot use {dotted} as table, it's already defined as a value")
            current = child
        return current

    def parse_table_path(self) -> List[str]:
        """Read ``name(.name)*`` inside a section header.

        Returns:
            List[str]: Path segments; empty when no name follows.
        """
        path: List[str] = []
        while self.token.kind is TokenKind.STRING:
            path.append(unescape(self.token.lexeme))
            self.next()
            if self.token.kind is not TokenKind.DOT:
                break
            self.next()
        return path

    def parse_value(self) -> Any:
        """Parse the value at the cursor.

        Returns:
            Any: A value-model node.

        Raises:
            ParseError: If no value starts here or a literal is malformed.
        """
        token = self.token
        kind = token.kind

        if kind is TokenKind.STRING:
            self.next()
            text = unescape(token.lexeme)
            try:
                return parse_timestamp(text)
            except ValueError:
                return text
        if kind is TokenKind.NUMBER:
            self.next()
            return self._parse_number(token)
        if kind is TokenKind.DATE:
            self.next()
            try:
                return parse_timestamp(token.lexeme)
            except ValueError as e:
                raise ParseError(f"invalid date {token.lexeme!r}", line=token.line, column=token.column) from e
        if kind is TokenKind.TRUE:
            self.next()
            return True
        if kind is TokenKind.FALSE:
            self.next()
            return False
        if kind is TokenKind.LBRACKET:
            return self.parse_array()
        if kind is TokenKind.LBRACE:
            return self.parse_inline_table()
        raise self._error(f"unexpected token: {token}")

    def _parse_number(self, token: Token) -> Any:
        lexeme = token.lexeme
        try:
            if "." in lexeme:
                return float(lexeme)
            value = int(lexeme, 10)
        except ValueError as e:
            raise ParseError(f"invalid number {lexeme!r}", line=token.line, column=token.column) from e
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ParseError(f"integer {lexeme} out of range", line=token.line, column=token.column)
        return value

    def parse_array(self) -> List[Any]:
        """Parse ``[v, v, ...]``; the cursor is on ``[``.

        Returns:
            List[Any]: Array elements.
        """
        items: List[Any] = []
        self.next()
        if self.token.kind is TokenKind.RBRACKET:
            self.next()
            return items

        while True:
            items.append(self.parse_value())
            if self.token.kind is TokenKind.RBRACKET:
                self.next()
                return items
            if self.token.kind is not TokenKind.COMMA:
                raise self._error(f"expected comma or ], got {self.token}")
            self.next()

    def parse_inline_table(self) -> InlineTable:
        """Parse ``{ k = v, ... }``; the cursor is on ``{``.

        Returns:
            InlineTable: The table.
        """
        table = InlineTable()
        self.next()
        if self.token.kind is TokenKind.RBRACE:
            self.next()
            return table

        while True:
            if self.token.kind is not TokenKind.STRING:
                raise self._error(f"expected string key, got {self.token}")
            key = unescape(self.token.lexeme)
            self.next()
            self._expect(TokenKind.EQUALS, "=")
            table[key] = self.parse_value()

            if self.token.kind is TokenKind.RBRACE:
                self.next()
                return table
            if self.token.kind is not TokenKind.COMMA:
                raise self._error(f"expected comma or }}, got {self.token}")
            self.next()


def parse(text: str, section_scope: SectionScope = "section") -> Table:
    """Parse ``text`` into its root table.

    Args:
        text: Document source.
        section_scope: Header scoping mode.

    Returns:
        Table: The document root.
    """
    root = Parser(text, section_scope=section_scope).parse_table()
    logger.debug(f"Parsed document with {len(root)} top-level keys")
    return root
