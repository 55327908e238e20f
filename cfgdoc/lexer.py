# -*- coding: utf-8 -*-
"""Location: ./cfgdoc/lexer.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tokenizer for configuration documents.

Turns raw text into a lazy stream of typed tokens. Newlines are significant
(they separate statements) while every other whitespace character is skipped.
The lexer never raises: anything it cannot recognise, including an
unterminated string, ends the stream with an EOF token and the parser decides
whether that is an error.

Number scanning accepts digits, ``.``, ``+``, ``e`` and ``E``. The characters
``T``, ``Z``, ``-`` and ``:`` are also accepted but mark the run as a date, so
``-5`` lexes as a DATE token. Existing documents depend on this, keep it.

Examples:
    >>> [t.kind.name for t in tokenize('title = "abc"\\n')]
    ['STRING', 'EQUALS', 'STRING', 'NEWLINE', 'EOF']
    >>> tokenize("2024-01-02T03:04:05Z")[0].kind
    <TokenKind.DATE: 'date'>
    >>> tokenize("-5")[0].kind
    <TokenKind.DATE: 'date'>
    >>> tokenize("3.5")[0]
    Token(kind=<TokenKind.NUMBER: 'number'>, lexeme='3.5', line=1, column=1)
"""

# Future
from __future__ import annotations

# Standard
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List


class TokenKind(str, Enum):
    """Kinds of tokens produced by the lexer."""

    EOF = "eof"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    DATE = "date"
    LBRACKET = "["
    RBRACKET = "]"
    DOT = "."
    EQUALS = "="
    COMMA = ","
    NEWLINE = "newline"
    LBRACE = "{"
    RBRACE = "}"


@dataclass(frozen=True)
class Token:
    """A single lexeme with its kind and source position."""

    kind: TokenKind
    lexeme: str = ""
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        if self.kind is TokenKind.EOF:
            return "EOF"
        if self.kind is TokenKind.NEWLINE:
            return "newline"
        return f"{self.kind.name} {self.lexeme!r}"


_SINGLE_CHAR_TOKENS = {
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ".": TokenKind.DOT,
    "=": TokenKind.EQUALS,
    ",": TokenKind.COMMA,
}

_KEYWORDS = {"true": TokenKind.TRUE, "false": TokenKind.FALSE}

_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = _DIGITS | frozenset(".+eE")
_DATE_MARKERS = frozenset("TZ-:")


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c in "_-"


def is_bare_key(text: str) -> bool:
    """Return True when ``text`` lexes back as a single bare identifier.

    Examples:
        >>> is_bare_key("http_server"), is_bare_key("has space"), is_bare_key("true")
        (True, False, False)
    """
    if not text or not text[0].isalpha() or text in _KEYWORDS:
        return False
    return all(_is_ident_char(c) for c in text)


class Lexer:
    """Produce tokens one at a time from ``text``.

    Attributes:
        text: Source document.
        pos: Cursor offset into ``text``.
        line: Current line (1-based, best effort).
        column: Current column (1-based, best effort).
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            token = self.next()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def next(self) -> Token:
        """Return the next token, or EOF once the input is exhausted.

        Returns:
            Token: The next token in the stream.
        """
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.text):
                return self._token(TokenKind.EOF, "", self.line, self.column)

            c = self.text[self.pos]
            if c != "#":
                break
            # comment runs up to, not including, the newline
            while self.pos < len(self.text) and self.text[self.pos] != "\n":
                self._advance()

        line, column = self.line, self.column

        if c in _SINGLE_CHAR_TOKENS:
            self._advance()
            return self._token(_SINGLE_CHAR_TOKENS[c], c, line, column)
        if c == "\n":
            self._advance()
            return self._token(TokenKind.NEWLINE, "\n", line, column)
        if c == '"':
            return self._read_string(line, column)
        if c in "tf":
            keyword = self._read_keyword()
            if keyword is not None:
                return keyword
        if c == "-" or c in _DIGITS:
            return self._read_number_or_date(line, column)
        if c.isalpha():
            return self._read_identifier(line, column)
        return self._token(TokenKind.EOF, "", line, column)

    def _token(self, kind: TokenKind, lexeme: str, line: int, column: int) -> Token:
        return Token(kind=kind, lexeme=lexeme, line=line, column=column)

    def _advance(self) -> None:
        if self.text[self.pos] == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text):
            c = self.text[self.pos]
            if c == "\n" or not c.isspace():
                return
            self._advance()

    def _read_keyword(self) -> Token | None:
        line, column = self.line, self.column
        for word, kind in _KEYWORDS.items():
            end = self.pos + len(word)
            if self.text.startswith(word, self.pos) and (end >= len(self.text) or not _is_ident_char(self.text[end])):
                for _ in word:
                    self._advance()
                return self._token(kind, word, line, column)
        return None

    def _read_string(self, line: int, column: int) -> Token:
        self._advance()  # opening quote
        start = self.pos
        while self.pos < len(self.text):
            c = self.text[self.pos]
            if c == "\\" and self.pos + 1 < len(self.text):
                self._advance()
            elif c == '"':
                lexeme = self.text[start : self.pos]
                self._advance()
                return self._token(TokenKind.STRING, lexeme, line, column)
            self._advance()
        return self._token(TokenKind.EOF, "", self.line, self.column)

    def _read_number_or_date(self, line: int, column: int) -> Token:
        start = self.pos
        is_date = False
        while self.pos < len(self.text):
            c = self.text[self.pos]
            if c in _DATE_MARKERS:
                is_date = True
            elif c not in _NUMBER_CHARS:
                break
            self._advance()
        lexeme = self.text[start : self.pos]
        return self._token(TokenKind.DATE if is_date else TokenKind.NUMBER, lexeme, line, column)

    def _read_identifier(self, line: int, column: int) -> Token:
        start = self.pos
        while self.pos < len(self.text) and _is_ident_char(self.text[self.pos]):
            self._advance()
        return self._token(TokenKind.STRING, self.text[start : self.pos], line, column)


def tokenize(text: str) -> List[Token]:
    """Lex ``text`` completely.

    Args:
        text: Source document.

    Returns:
        List[Token]: Every token, ending with EOF.
    """
    return list(Lexer(text))
