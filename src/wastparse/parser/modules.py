# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Bridge between the directive parser and inline module parsing.

The directive parser lends its token buffer to a :class:`ModuleCompiler` when a
``(module ...)`` form is written inline. The compiler consumes exactly the
module's tokens and hands the buffer back, so the directive parser resumes at
the next directive.

:class:`StructuralModuleCompiler` is the default compiler. It checks the
module's outer shape (balanced fields, each introduced by a known keyword) and
records every field with its source text; the execution engine compiles the
recorded text.
"""

from __future__ import annotations

from typing import Protocol

from wastparse.model.modules import InlineModule, ModuleField
from wastparse.parser.errors import ErrorKind, ParseError
from wastparse.parser.lexer import LexerError, Token, TokenType
from wastparse.parser.lookahead import LookAhead

# ###############
# Public Interface
# ###############

MODULE_FIELD_KINDS: frozenset[str] = frozenset(
    {
        "type",
        "rec",
        "import",
        "func",
        "table",
        "memory",
        "global",
        "tag",
        "export",
        "start",
        "elem",
        "data",
    }
)


class ModuleCompiler(Protocol):
    """Parses one inline module from a borrowed token buffer."""

    def compile(self, tokens: LookAhead) -> tuple[InlineModule, LookAhead]:
        """Parse the module starting at ``(module`` and return it with the buffer.

        The returned buffer must be positioned just past the module's closing
        parenthesis.

        Raises:
            ParseError: If the tokens do not form a module.
        """
        ...


class StructuralModuleCompiler:
    """Parses ``(module $id? field*)`` into fields with their source text."""

    def compile(self, tokens: LookAhead) -> tuple[InlineModule, LookAhead]:
        module = _ModuleReader(tokens).read()
        return module, tokens


# ################
# Implementation
# ################


class _ModuleReader:
    """Consumes the tokens of one inline module."""

    def __init__(self, tokens: LookAhead) -> None:
        self._tokens = tokens
        self._source = tokens.source
        self._pos = 0

    def read(self) -> InlineModule:
        """Parse the whole module and return it."""
        start = self._expect(TokenType.LPAREN, "'(' for module")
        keyword = self._consume()
        if keyword is None or keyword.type != TokenType.KEYWORD or keyword.text != "module":
            raise self._unexpected(keyword, "keyword 'module'")

        module_id = self._maybe_id()
        fields: list[ModuleField] = []
        while True:
            tok = self._consume()
            if tok is None or tok.type not in (TokenType.LPAREN, TokenType.RPAREN):
                raise self._unexpected(tok, "'(' for module field or ')'")
            if tok.type == TokenType.RPAREN:
                end = self._pos + 1
                return InlineModule(
                    start=start,
                    end=end,
                    id=module_id,
                    fields=fields,
                    source=self._source[start:end],
                )
            fields.append(self._read_field(self._pos))

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _consume(self) -> Token | None:
        try:
            item = self._tokens.next()
        except LexerError as exc:
            raise ParseError.at(ErrorKind.LEX, exc.message, self._source, exc.offset) from exc
        if item is None:
            self._pos = len(self._source)
            return None
        tok, self._pos = item
        return tok

    def _expect(self, token_type: TokenType, expected: str) -> int:
        """Consume a token of *token_type* and return its offset."""
        tok = self._consume()
        if tok is None or tok.type != token_type:
            raise self._unexpected(tok, expected)
        return self._pos

    def _maybe_id(self) -> str | None:
        try:
            item = self._tokens.peek()
        except LexerError as exc:
            raise ParseError.at(ErrorKind.LEX, exc.message, self._source, exc.offset) from exc
        if item is not None and item[0].type == TokenType.IDENT:
            return self._consume().text  # type: ignore[union-attr]
        return None

    def _unexpected(self, tok: Token | None, expected: str) -> ParseError:
        return ParseError.unexpected(tok, expected, self._source, self._pos)

    # ------------------------------------------------------------------
    # Module fields
    # ------------------------------------------------------------------

    def _read_field(self, start: int) -> ModuleField:
        """Parse one field whose opening parenthesis was consumed at *start*."""
        keyword = self._consume()
        if keyword is None or keyword.type != TokenType.KEYWORD:
            raise self._unexpected(keyword, "keyword for module field")
        if keyword.text not in MODULE_FIELD_KINDS:
            raise ParseError.at(
                ErrorKind.UNEXPECTED,
                f"Unknown module field {keyword.text!r}",
                self._source,
                self._pos,
                expected="module field keyword",
                token=keyword,
            )
        field_id = self._maybe_id()

        depth = 1
        while depth:
            tok = self._consume()
            if tok is None:
                raise self._unexpected(tok, f"')' to close module field {keyword.text!r}")
            if tok.type == TokenType.LPAREN:
                depth += 1
            elif tok.type == TokenType.RPAREN:
                depth -= 1
        end = self._pos + 1
        return ModuleField(
            kind=keyword.text,
            id=field_id,
            start=start,
            end=end,
            text=self._source[start:end],
        )
