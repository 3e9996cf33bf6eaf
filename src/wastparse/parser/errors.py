# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structured error values raised while parsing WAST scripts."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from wastparse.parser.lexer import Token, TokenType

# ###############
# Public Interface
# ###############


class ErrorKind(enum.Enum):
    """Categories of parse failures."""

    LEX = "lexical error"
    UNEXPECTED = "unexpected token"
    INVALID_INT = "invalid integer literal"
    TOO_SMALL_INT = "integer literal too small"
    INVALID_FLOAT = "invalid float literal"
    INVALID_HEX_FLOAT = "invalid hex float literal"
    INVALID_STRING_LITERAL = "invalid string literal"
    INVALID_UTF8 = "invalid UTF-8 text"


@dataclass(frozen=True)
class SourceLocation:
    """A position in a script.

    Offsets and columns count characters of the decoded source text, not
    bytes of its UTF-8 encoding; they differ after non-ASCII characters.
    Use ``len(source[:offset].encode("utf-8"))`` for a byte offset.

    Attributes:
        offset: 0-based character index into the source text.
        line: 1-based line number.
        column: 1-based column number, in characters.
    """

    offset: int
    line: int
    column: int

    @classmethod
    def from_offset(cls, source: str, offset: int) -> SourceLocation:
        """Compute line and column for *offset* in *source*."""
        line = source.count("\n", 0, offset) + 1
        column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(offset=offset, line=line, column=column)


class ParseError(Exception):
    """Raised when a script cannot be parsed.

    Only the fields relevant to ``kind`` are set; the others stay ``None``.

    Attributes:
        kind: The failure category.
        message: Human-readable description without location prefix.
        location: Where the failure was detected.
        expected: Description of what the grammar expected (UNEXPECTED).
        token: The offending token, or None at end of input (UNEXPECTED).
        type_name: Target value type such as ``"i32"`` (literal errors).
        literal: The raw string literal text (INVALID_STRING_LITERAL).
        reason: Specific defect reported by a decoder.
        prev_error: The error of a discarded parse attempt, at most one level deep.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        location: SourceLocation,
        *,
        expected: str | None = None,
        token: Token | None = None,
        type_name: str | None = None,
        literal: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.location = location
        self.expected = expected
        self.token = token
        self.type_name = type_name
        self.literal = literal
        self.reason = reason
        self.prev_error: ParseError | None = None

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @classmethod
    def at(cls, kind: ErrorKind, message: str, source: str, offset: int, **fields: object) -> ParseError:
        """Build an error located at *offset* in *source*."""
        return cls(kind, message, SourceLocation.from_offset(source, offset), **fields)  # type: ignore[arg-type]

    @classmethod
    def unexpected(cls, token: Token | None, expected: str, source: str, offset: int) -> ParseError:
        """Build an UNEXPECTED error for *token* where *expected* was required."""
        return cls.at(
            ErrorKind.UNEXPECTED,
            f"Expected {expected}, got {describe_token(token)}",
            source,
            offset,
            expected=expected,
            token=token,
        )

    def attach_discarded(self, discarded: ParseError) -> None:
        """Record the error of an abandoned attempt as auxiliary context.

        The discarded error's own link is dropped so chains never grow beyond
        one level.
        """
        discarded.prev_error = None
        self.prev_error = discarded

    def __str__(self) -> str:
        text = f"Line {self.location.line}, column {self.location.column}: {self.message}"
        if self.prev_error is not None:
            text += f" (after discarded attempt: {self.prev_error})"
        return text


def describe_token(token: Token | None) -> str:
    """Return a short description of *token* for error messages."""
    if token is None:
        return "end of input"
    if token.type in (TokenType.LPAREN, TokenType.RPAREN):
        return repr(token.text)
    return f"{token.type.value.lower()} {token.text!r}"
