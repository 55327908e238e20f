# -*- coding: utf-8 -*-
"""Location: ./tests/unit/cfgdoc/test_lexer.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for the document tokenizer.
"""

# Third-Party
import pytest

# First-Party
from cfgdoc.lexer import is_bare_key, Lexer, Token, TokenKind, tokenize


def _kinds(source: str) -> list:
    """Return the token kinds for all tokens except EOF."""
    tokens = tokenize(source)
    assert tokens[-1].kind is TokenKind.EOF
    return [t.kind for t in tokens[:-1]]


def _lexemes(source: str) -> list:
    """Return the lexemes for all tokens except EOF."""
    return [t.lexeme for t in tokenize(source)[:-1]]


class TestEof:
    """End of input handling."""

    def test_empty_input(self):
        """Empty input produces a single EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.EOF

    def test_next_keeps_returning_eof(self):
        """Calling next() past the end keeps yielding EOF."""
        lexer = Lexer("a")
        assert lexer.next().kind is TokenKind.STRING
        assert lexer.next().kind is TokenKind.EOF
        assert lexer.next().kind is TokenKind.EOF

    def test_unknown_character_is_eof(self):
        """Unrecognised characters end the stream."""
        assert _kinds("a = @") == [TokenKind.STRING, TokenKind.EQUALS]

    @pytest.mark.parametrize("char", ["²", "٣", "½"])
    def test_non_ascii_digit_is_eof(self, char):
        """Digits outside ASCII are not numbers and end the stream."""
        tokens = tokenize(f"a = {char}")
        assert [t.kind for t in tokens] == [TokenKind.STRING, TokenKind.EQUALS, TokenKind.EOF]

    def test_unterminated_string_is_eof(self):
        """An unterminated string degrades to EOF instead of raising."""
        assert _kinds('a = "open') == [TokenKind.STRING, TokenKind.EQUALS]


class TestPunctuation:
    """Single character tokens."""

    @pytest.mark.parametrize(
        "char,kind",
        [
            ("[", TokenKind.LBRACKET),
            ("]", TokenKind.RBRACKET),
            ("{", TokenKind.LBRACE),
            ("}", TokenKind.RBRACE),
            (".", TokenKind.DOT),
            ("=", TokenKind.EQUALS),
            (",", TokenKind.COMMA),
        ],
    )
    def test_single_char(self, char, kind):
        """Each punctuation character maps to its own kind."""
        tokens = tokenize(char)
        assert tokens[0] == Token(kind=kind, lexeme=char, line=1, column=1)

    def test_newline_is_significant(self):
        """Newlines become tokens; other whitespace is skipped."""
        assert _kinds("a \t=\n 1") == [TokenKind.STRING, TokenKind.EQUALS, TokenKind.NEWLINE, TokenKind.NUMBER]


class TestComments:
    """Line comments."""

    def test_comment_skipped_to_newline(self):
        """A comment is dropped but the newline after it is kept."""
        assert _kinds("# heading\nkey = 1 # trailing\n") == [
            TokenKind.NEWLINE,
            TokenKind.STRING,
            TokenKind.EQUALS,
            TokenKind.NUMBER,
            TokenKind.NEWLINE,
        ]

    def test_comment_at_end_of_input(self):
        """A comment with no newline runs to EOF."""
        assert _kinds("a = 1 # done") == [TokenKind.STRING, TokenKind.EQUALS, TokenKind.NUMBER]


class TestStrings:
    """Quoted strings and bare identifiers."""

    def test_quoted_string_contents(self):
        """The lexeme is the text between the quotes."""
        tokens = tokenize('"hello world"')
        assert tokens[0].kind is TokenKind.STRING
        assert tokens[0].lexeme == "hello world"

    def test_escaped_quote_does_not_close(self):
        """A quote preceded by a backslash stays inside the string."""
        assert _lexemes(r'"say \"hi\""') == [r"say \"hi\""]

    def test_escaped_backslash_before_quote(self):
        """An escaped backslash does not escape the closing quote."""
        assert _lexemes(r'"dir\\" x') == [r"dir\\", "x"]

    def test_identifier(self):
        """Identifiers take letters, digits, underscores and hyphens."""
        assert _lexemes("http_server-2 x") == ["http_server-2", "x"]

    def test_identifier_stops_at_dot(self):
        """Dots separate identifiers in table paths."""
        assert _kinds("a.b") == [TokenKind.STRING, TokenKind.DOT, TokenKind.STRING]


class TestKeywords:
    """Boolean literals."""

    def test_true_false(self):
        """true and false are keywords."""
        assert _kinds("true false") == [TokenKind.TRUE, TokenKind.FALSE]

    def test_keyword_at_end_of_input(self):
        """A keyword is recognised with nothing after it."""
        assert _kinds("flag = true") == [TokenKind.STRING, TokenKind.EQUALS, TokenKind.TRUE]

    def test_keyword_prefix_is_identifier(self):
        """A longer identifier starting with a keyword stays an identifier."""
        tokens = tokenize("trueish falsey")
        assert [t.kind for t in tokens[:2]] == [TokenKind.STRING, TokenKind.STRING]
        assert [t.lexeme for t in tokens[:2]] == ["trueish", "falsey"]


class TestNumbersAndDates:
    """Number and date scanning."""

    @pytest.mark.parametrize("source", ["0", "42", "3.5", "1e5", "2.5E+3"])
    def test_numbers(self, source):
        """Digits with . + e E form a NUMBER."""
        tokens = tokenize(source)
        assert tokens[0].kind is TokenKind.NUMBER
        assert tokens[0].lexeme == source

    @pytest.mark.parametrize("source", ["2024-01-02T03:04:05Z", "1979-05-27T07:32:00-08:00", "2024-01-02", "12:30"])
    def test_dates(self, source):
        """Any date marker makes the run a DATE."""
        tokens = tokenize(source)
        assert tokens[0].kind is TokenKind.DATE
        assert tokens[0].lexeme == source

    def test_negative_number_lexes_as_date(self):
        """'-' is a date marker, so negative numbers are DATE tokens."""
        tokens = tokenize("-5")
        assert tokens[0].kind is TokenKind.DATE
        assert tokens[0].lexeme == "-5"

    def test_number_stops_at_comma(self):
        """Array separators end a number."""
        assert _lexemes("1,2") == ["1", ",", "2"]


class TestPositions:
    """Line and column tracking."""

    def test_line_and_column(self):
        """Tokens carry their starting position."""
        tokens = tokenize("a = 1\n  b = 2")
        b = tokens[4]
        assert b.lexeme == "b"
        assert (b.line, b.column) == (2, 3)

    def test_iteration_stops_after_eof(self):
        """Iterating a lexer yields exactly one EOF."""
        tokens = list(Lexer("a"))
        assert [t.kind for t in tokens] == [TokenKind.STRING, TokenKind.EOF]


class TestBareKeys:
    """Keys that can be written without quotes."""

    @pytest.mark.parametrize("key,expected", [("port", True), ("http-server_1", True), ("1abc", False), ("", False), ("a b", False), ("false", False)])
    def test_is_bare_key(self, key, expected):
        """Only identifier-shaped, non-keyword keys are bare."""
        assert is_bare_key(key) is expected
