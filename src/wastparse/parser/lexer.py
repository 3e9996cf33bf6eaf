# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for WAST scripts.

Converts raw script text into tokens paired with their source offsets. String
tokens keep their raw text between the quotes; escape sequences are decoded by
the parser, not here.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the WAST lexer."""

    LPAREN = "("
    RPAREN = ")"
    KEYWORD = "KEYWORD"
    IDENT = "IDENT"
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    RESERVED = "RESERVED"


class Sign(enum.Enum):
    """Explicit or implied sign of a numeric literal."""

    PLUS = "+"
    MINUS = "-"

    def apply(self, value: float) -> float:
        """Return *value* negated when the sign is minus."""
        return -value if self is Sign.MINUS else value


class NumBase(enum.Enum):
    """Radix of a numeric literal."""

    DEC = 10
    HEX = 16


class FloatForm(enum.Enum):
    """Shape of a float literal."""

    VALUE = "value"
    INF = "inf"
    NAN = "nan"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        type: The kind of token.
        text: Source text of the token. For STRING tokens this is the raw text
            between the quotes with escapes left undecoded.
        sign: Sign of an INT or FLOAT literal.
        base: Radix of an INT or FLOAT literal.
        digits: Digit text of an INT, the mantissa of a FLOAT value (without
            the ``0x`` prefix) or the payload of a ``nan:0x...`` literal.
        exponent: Sign and digit text of a FLOAT exponent, if present.
        float_form: Shape of a FLOAT literal.
    """

    type: TokenType
    text: str
    sign: Sign = Sign.PLUS
    base: NumBase = NumBase.DEC
    digits: str = ""
    exponent: tuple[Sign, str] | None = None
    float_form: FloatForm | None = None


class LexerError(Exception):
    """Raised when the scanner meets text that cannot start or finish a token.

    Attributes:
        offset: 0-based index of the error in the source text.
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, offset: int, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column


class Lexer:
    """Incremental scanner yielding one ``(token, offset)`` pair at a time.

    The scanner state is a single position into an immutable string, so a
    shallow ``copy.copy`` of a lexer is an independent snapshot.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0

    @property
    def source(self) -> str:
        return self._source

    def next_token(self) -> tuple[Token, int] | None:
        """Scan the next token.

        Returns:
            The token and the offset of its first character, or None once the
            input is exhausted.

        Raises:
            LexerError: On unexpected characters, unterminated strings or
                unterminated block comments.
        """
        try:
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._source):
                return None
            return self._scan_token()
        except LexerError:
            # A failed scanner yields nothing further.
            self._pos = len(self._source)
            raise

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        source = self._source
        while self._pos < len(source):
            ch = source[self._pos]
            if ch in " \t\r\n":
                self._pos += 1
            elif source.startswith(";;", self._pos):
                end = source.find("\n", self._pos)
                self._pos = len(source) if end < 0 else end
            elif source.startswith("(;", self._pos):
                self._skip_block_comment()
            else:
                break

    def _skip_block_comment(self) -> None:
        """Consume a possibly nested ``(; ... ;)`` comment."""
        source = self._source
        start = self._pos
        depth = 0
        while self._pos < len(source):
            if source.startswith("(;", self._pos):
                depth += 1
                self._pos += 2
            elif source.startswith(";)", self._pos):
                depth -= 1
                self._pos += 2
                if depth == 0:
                    return
            else:
                self._pos += 1
        raise self._error("Unterminated block comment", start)

    # ------------------------------------------------------------------
    # Token scanning dispatcher
    # ------------------------------------------------------------------

    def _scan_token(self) -> tuple[Token, int]:
        """Dispatch to the appropriate handler based on the current character."""
        source = self._source
        start = self._pos
        ch = source[start]

        if ch == "(":
            self._pos += 1
            return Token(TokenType.LPAREN, ch), start
        if ch == ")":
            self._pos += 1
            return Token(TokenType.RPAREN, ch), start
        if ch == '"':
            return self._scan_string(), start
        if ch in _IDCHARS:
            end = start
            while end < len(source) and source[end] in _IDCHARS:
                end += 1
            self._pos = end
            return _classify_word(source[start:end]), start
        raise self._error(f"Unexpected character: {ch!r}", start)

    def _scan_string(self) -> Token:
        """Scan a double-quoted string, keeping escapes undecoded.

        Every backslash inside the returned text is followed by at least one
        character.
        """
        source = self._source
        start = self._pos
        self._pos += 1  # opening "
        while self._pos < len(source):
            ch = source[self._pos]
            if ch == '"':
                self._pos += 1  # closing "
                return Token(TokenType.STRING, source[start + 1 : self._pos - 1])
            if ch == "\n":
                break
            if ch == "\\":
                if self._pos + 1 >= len(source):
                    break
                self._pos += 2
            else:
                self._pos += 1
        raise self._error("Unterminated string literal", start)

    def _error(self, message: str, offset: int) -> LexerError:
        line = self._source.count("\n", 0, offset) + 1
        column = offset - (self._source.rfind("\n", 0, offset) + 1) + 1
        return LexerError(message, offset, line, column)


def tokenize(source: str) -> list[tuple[Token, int]]:
    """Tokenize a whole script into ``(token, offset)`` pairs.

    Raises:
        LexerError: If the script contains text that cannot be tokenized.
    """
    lexer = Lexer(source)
    tokens: list[tuple[Token, int]] = []
    while (item := lexer.next_token()) is not None:
        tokens.append(item)
    return tokens


# ################
# Implementation
# ################

_IDCHARS = frozenset("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ!#$%&'*+-./:<=>?@\\^_`|~")

_NUM = r"[0-9](?:_?[0-9])*"
_HEXNUM = r"[0-9a-fA-F](?:_?[0-9a-fA-F])*"

_INT_RE = re.compile(rf"(?P<sign>[+-]?)(?:0x(?P<hex>{_HEXNUM})|(?P<dec>{_NUM}))")
_DEC_FLOAT_RE = re.compile(
    rf"(?P<sign>[+-]?)(?P<mantissa>{_NUM}(?:\.(?:{_NUM})?)?)(?:[eE](?P<exp_sign>[+-]?)(?P<exp>{_NUM}))?"
)
_HEX_FLOAT_RE = re.compile(
    rf"(?P<sign>[+-]?)0x(?P<mantissa>{_HEXNUM}(?:\.(?:{_HEXNUM})?)?)(?:[pP](?P<exp_sign>[+-]?)(?P<exp>{_NUM}))?"
)
_SPECIAL_FLOAT_RE = re.compile(rf"(?P<sign>[+-]?)(?:(?P<inf>inf)|nan(?::0x(?P<payload>{_HEXNUM}))?)")


def _sign(text: str) -> Sign:
    return Sign.MINUS if text == "-" else Sign.PLUS


def _classify_word(word: str) -> Token:
    """Map a maximal run of identifier characters to a token."""
    if word.startswith("$"):
        if len(word) > 1:
            return Token(TokenType.IDENT, word)
        return Token(TokenType.RESERVED, word)

    if m := _INT_RE.fullmatch(word):
        if m["hex"] is not None:
            return Token(TokenType.INT, word, sign=_sign(m["sign"]), base=NumBase.HEX, digits=m["hex"])
        return Token(TokenType.INT, word, sign=_sign(m["sign"]), base=NumBase.DEC, digits=m["dec"])

    for pattern, base in ((_HEX_FLOAT_RE, NumBase.HEX), (_DEC_FLOAT_RE, NumBase.DEC)):
        if m := pattern.fullmatch(word):
            exponent = (_sign(m["exp_sign"]), m["exp"]) if m["exp"] is not None else None
            return Token(
                TokenType.FLOAT,
                word,
                sign=_sign(m["sign"]),
                base=base,
                digits=m["mantissa"],
                exponent=exponent,
                float_form=FloatForm.VALUE,
            )

    if m := _SPECIAL_FLOAT_RE.fullmatch(word):
        if m["inf"] is not None:
            return Token(TokenType.FLOAT, word, sign=_sign(m["sign"]), float_form=FloatForm.INF)
        return Token(
            TokenType.FLOAT,
            word,
            sign=_sign(m["sign"]),
            base=NumBase.HEX,
            digits=m["payload"] or "",
            float_form=FloatForm.NAN,
        )

    if "a" <= word[0] <= "z":
        return Token(TokenType.KEYWORD, word)
    return Token(TokenType.RESERVED, word)
