# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Two-token lookahead buffer over the WAST lexer."""

from __future__ import annotations

import copy

from wastparse.parser.lexer import Lexer, LexerError, Token

# ###############
# Public Interface
# ###############

# A scanned token with its offset, a buffered scanner failure, or None at end of input.
_Item = tuple[Token, int] | LexerError | None


class LookAhead:
    """Buffers up to two scanned items in front of a lexer.

    Scanner failures are buffered like tokens and re-raised whenever the
    failed position is consumed or peeked, so peeking never loses an error.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._pending: list[_Item] = []

    @classmethod
    def from_source(cls, source: str) -> LookAhead:
        return cls(Lexer(source))

    @property
    def source(self) -> str:
        """The full text being scanned."""
        return self._lexer.source

    def next(self) -> tuple[Token, int] | None:
        """Consume and return the next token with its offset.

        Raises:
            LexerError: If the scanner failed at this position.
        """
        self._fill(1)
        return self._unwrap(self._pending.pop(0))

    def peek(self) -> tuple[Token, int] | None:
        """Return the next token without consuming it."""
        self._fill(1)
        return self._unwrap(self._pending[0])

    def lookahead(self) -> tuple[Token, int] | None:
        """Return the token after the next one without consuming anything."""
        self._fill(2)
        return self._unwrap(self._pending[1])

    def clone(self) -> LookAhead:
        """Snapshot the current position.

        The clone and the original advance independently afterwards.
        """
        other = LookAhead(copy.copy(self._lexer))
        other._pending = list(self._pending)
        return other

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def _fill(self, count: int) -> None:
        while len(self._pending) < count:
            try:
                item: _Item = self._lexer.next_token()
            except LexerError as exc:
                item = exc
            self._pending.append(item)

    @staticmethod
    def _unwrap(item: _Item) -> tuple[Token, int] | None:
        if isinstance(item, LexerError):
            raise item
        return item
