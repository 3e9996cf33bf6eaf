# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the structural inline module compiler."""

import pytest

from wastparse.model import InlineModule
from wastparse.parser.errors import ErrorKind, ParseError
from wastparse.parser.lookahead import LookAhead
from wastparse.parser.modules import StructuralModuleCompiler

# ###############
# Test Helpers
# ###############


def _compile(source: str) -> tuple[InlineModule, LookAhead]:
    return StructuralModuleCompiler().compile(LookAhead.from_source(source))


# ###############
# Module Shape
# ###############


class TestInlineModules:
    def test_empty_module(self) -> None:
        module, _ = _compile("(module)")
        assert module.id is None
        assert module.fields == []
        assert (module.start, module.end) == (0, 8)
        assert module.source == "(module)"

    def test_module_with_id(self) -> None:
        module, _ = _compile("(module $M1 (func))")
        assert module.id == "$M1"
        assert [f.kind for f in module.fields] == ["func"]

    def test_fields_record_source_text(self) -> None:
        source = '(module (memory $m 1) (func $f (param i32) (result i32) (local.get 0)) (export "f" (func $f)))'
        module, _ = _compile(source)
        assert [f.kind for f in module.fields] == ["memory", "func", "export"]
        assert [f.id for f in module.fields] == ["$m", "$f", None]
        memory = module.fields_of("memory")[0]
        assert memory.text == "(memory $m 1)"
        assert source[memory.start : memory.end] == memory.text
        assert module.fields[1].text.endswith("(local.get 0))")

    def test_buffer_is_left_after_module(self) -> None:
        module, tokens = _compile("  (module (type (func)))\n(invoke)")
        assert module.start == 2
        assert module.source == "(module (type (func)))"
        item = tokens.next()
        assert item is not None
        assert item[0].text == "("
        assert tokens.next()[0].text == "invoke"  # type: ignore[index]

    def test_strings_with_parens_do_not_unbalance(self) -> None:
        module, _ = _compile('(module (data (i32.const 0) ")(("))')
        assert module.fields_of("data")[0].text == '(data (i32.const 0) ")((")'


# ###############
# Error Cases
# ###############


class TestInlineModuleErrors:
    def test_unknown_field(self) -> None:
        with pytest.raises(ParseError, match="Unknown module field 'quote'") as exc_info:
            _compile("(module (quote))")
        assert exc_info.value.kind is ErrorKind.UNEXPECTED

    def test_bare_string_is_not_a_field(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _compile('(module binary "\\00asm")')
        assert exc_info.value.kind is ErrorKind.UNEXPECTED
        assert exc_info.value.expected == "'(' for module field or ')'"

    def test_unclosed_field(self) -> None:
        with pytest.raises(ParseError, match="to close module field 'func'"):
            _compile("(module (func (nop)")

    def test_not_a_module(self) -> None:
        with pytest.raises(ParseError, match="keyword 'module'"):
            _compile("(invoke)")

    def test_lexer_error_is_wrapped(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _compile("(module (func {))")
        assert exc_info.value.kind is ErrorKind.LEX
        assert exc_info.value.location.offset == 14
