# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the two-token lookahead buffer."""

import pytest

from wastparse.parser.lexer import LexerError
from wastparse.parser.lookahead import LookAhead

# ###############
# Test Helpers
# ###############


def _text(item: object) -> str | None:
    if item is None:
        return None
    tok, _ = item  # type: ignore[misc]
    return tok.text


# ###############
# Consume and Peek
# ###############


class TestConsumeAndPeek:
    def test_next_returns_tokens_with_offsets(self) -> None:
        buf = LookAhead.from_source("(invoke)")
        first = buf.next()
        assert first is not None
        assert first[0].text == "("
        assert first[1] == 0
        assert _text(buf.next()) == "invoke"
        assert _text(buf.next()) == ")"
        assert buf.next() is None

    def test_peek_is_idempotent(self) -> None:
        buf = LookAhead.from_source("(module)")
        assert _text(buf.peek()) == "("
        assert _text(buf.peek()) == "("
        assert _text(buf.lookahead()) == "module"
        assert _text(buf.lookahead()) == "module"
        assert _text(buf.next()) == "("

    def test_lookahead_past_end(self) -> None:
        buf = LookAhead.from_source("(")
        assert _text(buf.peek()) == "("
        assert buf.lookahead() is None

    def test_source_property(self) -> None:
        assert LookAhead.from_source("(x)").source == "(x)"


# ###############
# Snapshots
# ###############


class TestClone:
    def test_clone_advances_independently(self) -> None:
        buf = LookAhead.from_source("(module quote)")
        buf.next()
        snapshot = buf.clone()

        assert _text(buf.next()) == "module"
        assert _text(buf.next()) == "quote"

        assert _text(snapshot.next()) == "module"
        assert _text(snapshot.peek()) == "quote"

    def test_clone_keeps_peeked_tokens(self) -> None:
        buf = LookAhead.from_source("(a b c)")
        buf.lookahead()
        snapshot = buf.clone()
        assert [_text(snapshot.next()) for _ in range(4)] == ["(", "a", "b", "c"]
        assert _text(buf.next()) == "("


# ###############
# Lexer Errors
# ###############


class TestLexerErrors:
    def test_peek_past_error_keeps_error_for_consume(self) -> None:
        buf = LookAhead.from_source("( {")
        assert _text(buf.peek()) == "("
        with pytest.raises(LexerError):
            buf.lookahead()
        assert _text(buf.next()) == "("
        with pytest.raises(LexerError):
            buf.next()

    def test_error_is_raised_on_every_peek(self) -> None:
        buf = LookAhead.from_source("{")
        with pytest.raises(LexerError):
            buf.peek()
        with pytest.raises(LexerError):
            buf.peek()
