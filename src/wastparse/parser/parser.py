# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for WAST scripts.

Converts the token stream of a script into a :class:`~wastparse.model.Root`.
Directive dispatch looks two tokens ahead (``(`` and the directive keyword).
The only construct this cannot decide is ``(module ...)``, which may be an
embedded module (``quote``/``binary``) or an inline module; it is resolved by
trying the embedded form on a snapshot of the token buffer and falling back to
the module compiler.
"""

import logging
import math
from collections.abc import Callable

from wastparse.model.consts import ArithmeticNan, CanonicalNan, Const, F32Const, F64Const, I32Const, I64Const
from wastparse.model.directives import (
    AssertExhaustion,
    AssertInvalid,
    AssertMalformed,
    AssertReturn,
    AssertTrap,
    AssertUnlinkable,
    Directive,
    GetGlobal,
    Invoke,
    Register,
    Root,
)
from wastparse.model.modules import BinaryModule, EmbeddedModule, InlineModule, ModuleArg, QuoteModule
from wastparse.parser.errors import ErrorKind, ParseError
from wastparse.parser.escapes import EscapeError, TextError, decode_bytes, decode_text
from wastparse.parser.lexer import FloatForm, LexerError, Token, TokenType
from wastparse.parser.lookahead import LookAhead
from wastparse.parser.modules import ModuleCompiler, StructuralModuleCompiler
from wastparse.parser.scalars import ScalarError, decode_float, decode_int

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def parse(source: str, compiler: ModuleCompiler | None = None) -> Root:
    """Parse a WAST script into its ordered directives.

    Args:
        source: The full text of a .wast file.
        compiler: Parser for inline modules. Defaults to
            :class:`~wastparse.parser.modules.StructuralModuleCompiler`.

    Returns:
        A Root holding every directive in source order.

    Raises:
        ParseError: At the first lexical, grammar or literal error.
    """
    return Parser(source, compiler).parse_root()


class Parser:
    """Recursive-descent parser over a two-token lookahead buffer.

    Each ``parse_*`` method consumes exactly one grammar element, including
    its closing parenthesis.
    """

    def __init__(self, source: str, compiler: ModuleCompiler | None = None) -> None:
        self._source = source
        self._tokens: LookAhead | None = LookAhead.from_source(source)
        self._compiler = compiler if compiler is not None else StructuralModuleCompiler()
        self._current_pos = 0

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _buffer(self) -> LookAhead:
        if self._tokens is None:
            raise RuntimeError("token buffer is on loan to the module compiler")
        return self._tokens

    def _consume(self) -> Token | None:
        """Consume the next token and record its offset as the current position."""
        try:
            item = self._buffer().next()
        except LexerError as exc:
            raise self._lex_error(exc) from exc
        if item is None:
            self._current_pos = len(self._source)
            return None
        tok, self._current_pos = item
        return tok

    def _peek(self) -> tuple[Token | None, Token | None]:
        """Return the next two tokens without consuming them."""
        tokens = self._buffer()
        try:
            first = tokens.peek()
            second = tokens.lookahead()
        except LexerError as exc:
            raise self._lex_error(exc) from exc
        return (
            first[0] if first is not None else None,
            second[0] if second is not None else None,
        )

    def _at_end(self) -> bool:
        return self._peek()[0] is None

    def _error(self, kind: ErrorKind, message: str, **fields: object) -> ParseError:
        return ParseError.at(kind, message, self._source, self._current_pos, **fields)

    def _unexpected(self, tok: Token | None, expected: str) -> ParseError:
        return ParseError.unexpected(tok, expected, self._source, self._current_pos)

    def _unexpected_ahead(self, expected: str) -> ParseError:
        """Consume up to the token that breaks an expected ``( keyword`` pair and report it."""
        tok = self._consume()
        if _is_type(tok, TokenType.LPAREN):
            tok = self._consume()
        return self._unexpected(tok, expected)

    def _lex_error(self, exc: LexerError) -> ParseError:
        return ParseError.at(ErrorKind.LEX, exc.message, self._source, exc.offset)

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        """Consume a token of *token_type*, raising ParseError otherwise."""
        tok = self._consume()
        if tok is None or tok.type != token_type:
            raise self._unexpected(tok, expected)
        return tok

    def _parse_start(self, directive: str) -> int:
        """Consume ``(`` and the *directive* keyword; return the offset of ``(``."""
        self._expect(TokenType.LPAREN, f"'(' for '{directive}'")
        start = self._current_pos
        tok = self._consume()
        if not _is_keyword(tok, directive):
            raise self._unexpected(tok, f"keyword for '{directive}'")
        return start

    def _parse_maybe_id(self) -> str | None:
        """Consume an identifier if one comes next."""
        tok, _ = self._peek()
        if tok is not None and tok.type == TokenType.IDENT:
            self._consume()
            return tok.text
        return None

    # ------------------------------------------------------------------
    # String literals
    # ------------------------------------------------------------------

    def _decode_bytes(self, raw: str) -> bytes:
        try:
            return decode_bytes(raw)
        except EscapeError as exc:
            raise self._string_error(raw, exc) from exc

    def _decode_text(self, raw: str) -> str:
        try:
            return decode_text(raw)
        except EscapeError as exc:
            raise self._string_error(raw, exc) from exc
        except TextError as exc:
            raise self._error(
                ErrorKind.INVALID_UTF8,
                f"Invalid UTF-8 in string: {exc.reason}",
                reason=exc.reason,
            ) from exc

    def _string_error(self, raw: str, exc: EscapeError) -> ParseError:
        return self._error(
            ErrorKind.INVALID_STRING_LITERAL,
            f"Invalid string literal {raw!r}: {exc.reason}",
            literal=raw,
            reason=exc.reason,
        )

    def parse_name(self) -> str:
        """Parse a string literal that must decode to text."""
        tok = self._expect(TokenType.STRING, "string literal")
        return self._decode_text(tok.text)

    # ------------------------------------------------------------------
    # Constants
    # ------------------------------------------------------------------

    def parse_const(self) -> Const:
        """Parse ``(i32.const n)``, ``(i64.const n)``, ``(f32.const z)`` or ``(f64.const z)``."""
        self._expect(TokenType.LPAREN, "'(' for constant")
        keyword = self._expect(TokenType.KEYWORD, "keyword for constant")
        if keyword.text == "i32.const":
            const: Const = I32Const(value=self._parse_int_operand(32))
        elif keyword.text == "i64.const":
            const = I64Const(value=self._parse_int_operand(64))
        elif keyword.text == "f32.const":
            const = self._parse_float_operand(32)
        elif keyword.text == "f64.const":
            const = self._parse_float_operand(64)
        else:
            raise self._unexpected(keyword, "t.const for constant")
        self._expect(TokenType.RPAREN, "')' for constant")
        return const

    def _parse_int_operand(self, width: int) -> int:
        tok = self._consume()
        if tok is None or tok.type != TokenType.INT:
            raise self._unexpected(tok, f"i{width} value")
        try:
            return decode_int(tok.sign, tok.base, tok.digits, width)
        except ScalarError as exc:
            raise self._scalar_error(exc, tok) from exc

    def _parse_float_operand(self, width: int) -> Const:
        tok = self._consume()
        if _is_keyword(tok, "nan:canonical"):
            return CanonicalNan(width=width)
        if _is_keyword(tok, "nan:arithmetic"):
            return ArithmeticNan(width=width)
        if tok is None or tok.type not in (TokenType.INT, TokenType.FLOAT):
            raise self._unexpected(tok, f"f{width} value")

        if tok.float_form is FloatForm.NAN:
            # The payload is not kept; expected NaNs only compare by class.
            value = tok.sign.apply(math.nan)
        elif tok.float_form is FloatForm.INF:
            value = tok.sign.apply(math.inf)
        else:
            try:
                value = decode_float(tok.sign, tok.base, tok.digits, tok.exponent, width)
            except ScalarError as exc:
                raise self._scalar_error(exc, tok) from exc
        return F32Const(value=value) if width == 32 else F64Const(value=value)

    def _scalar_error(self, exc: ScalarError, tok: Token) -> ParseError:
        return self._error(
            exc.kind,
            f"Invalid {exc.type_name} literal {tok.text!r}: {exc.reason}",
            token=tok,
            type_name=exc.type_name,
            reason=exc.reason,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def parse_invoke(self) -> Invoke:
        """Parse ``(invoke $id? "name" const*)``."""
        start = self._parse_start("invoke")
        invoke_id = self._parse_maybe_id()
        name = self.parse_name()
        args: list[Const] = []
        while _is_type(self._peek()[0], TokenType.LPAREN):
            args.append(self.parse_const())
        self._expect(TokenType.RPAREN, "')' for invoke")
        return Invoke(start=start, id=invoke_id, name=name, args=args)

    def parse_get(self) -> GetGlobal:
        """Parse ``(get $id? "name")``."""
        start = self._parse_start("get")
        get_id = self._parse_maybe_id()
        name = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for get")
        return GetGlobal(start=start, id=get_id, name=name)

    def parse_register(self) -> Register:
        """Parse ``(register "name" $id?)``."""
        start = self._parse_start("register")
        name = self.parse_name()
        register_id = self._parse_maybe_id()
        self._expect(TokenType.RPAREN, "')' for register")
        return Register(start=start, name=name, id=register_id)

    # ------------------------------------------------------------------
    # Modules
    # ------------------------------------------------------------------

    def parse_embedded_module(self) -> EmbeddedModule:
        """Parse ``(module $id? quote "..."*)`` or ``(module $id? binary "..."*)``."""
        start = self._parse_start("module")
        module_id = self._parse_maybe_id()
        form_tok = self._consume()
        if not (_is_keyword(form_tok, "quote") or _is_keyword(form_tok, "binary")):
            raise self._unexpected(form_tok, "'quote' or 'binary' for embedded module")
        form = form_tok.text  # type: ignore[union-attr]

        chunks: list[str] = []
        data: list[bytes] = []
        while True:
            tok = self._consume()
            if _is_type(tok, TokenType.RPAREN):
                break
            if tok is None or tok.type != TokenType.STRING:
                raise self._unexpected(tok, f"string for module {form} or ')'")
            if form == "quote":
                chunks.append(self._decode_text(tok.text))
            else:
                data.append(self._decode_bytes(tok.text))

        if form == "quote":
            return QuoteModule(start=start, id=module_id, text="".join(chunks))
        return BinaryModule(start=start, id=module_id, data=b"".join(data))

    def parse_inline_module(self) -> InlineModule:
        """Parse an inline module by lending the token buffer to the module compiler."""
        first, second = self._peek()
        if not _is_type(first, TokenType.LPAREN) or not _is_keyword(second, "module"):
            raise self._unexpected_ahead("'(module' for module argument")

        snapshot = self._buffer().clone()
        tokens, self._tokens = self._buffer(), None
        try:
            module, self._tokens = self._compiler.compile(tokens)
        finally:
            # A failed compile never returns the buffer; resume from before the loan.
            if self._tokens is None:
                self._tokens = snapshot
        return module

    def parse_module(self) -> ModuleArg:
        """Parse any ``(module ...)`` form.

        The embedded form is attempted on a snapshot of the token buffer. If it
        fails, the snapshot is restored and the module compiler parses an inline
        module instead. When both fail, the compiler's error is raised with the
        embedded attempt's error attached as ``prev_error``.
        """
        snapshot = self._buffer().clone()
        try:
            return self.parse_embedded_module()
        except ParseError as exc:
            discarded = exc

        logger.debug("Not an embedded module (%s); parsing as inline module", discarded)
        self._tokens = snapshot
        try:
            return self.parse_inline_module()
        except ParseError as exc:
            exc.attach_discarded(discarded)
            raise

    # ------------------------------------------------------------------
    # Assertions
    # ------------------------------------------------------------------

    def parse_assert_return(self) -> AssertReturn:
        """Parse ``(assert_return (invoke ...) const?)`` or ``(assert_return (get ...) const)``."""
        start = self._parse_start("assert_return")
        first, second = self._peek()
        if _is_type(first, TokenType.LPAREN) and _is_keyword(second, "invoke"):
            invoke = self.parse_invoke()
            expected = self.parse_const() if _is_type(self._peek()[0], TokenType.LPAREN) else None
            self._expect(TokenType.RPAREN, "')' for assert_return")
            return AssertReturn(start=start, action=invoke, expected=expected)
        if _is_type(first, TokenType.LPAREN) and _is_keyword(second, "get"):
            get = self.parse_get()
            value = self.parse_const()
            self._expect(TokenType.RPAREN, "')' for assert_return")
            return AssertReturn(start=start, action=get, expected=value)
        raise self._unexpected_ahead("'(invoke' or '(get' for assert_return")

    def parse_assert_trap(self) -> AssertTrap:
        """Parse ``(assert_trap (invoke ...) "message")``."""
        start = self._parse_start("assert_trap")
        invoke = self.parse_invoke()
        expected = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for assert_trap")
        return AssertTrap(start=start, invoke=invoke, expected=expected)

    def parse_assert_exhaustion(self) -> AssertExhaustion:
        """Parse ``(assert_exhaustion (invoke ...) "message")``."""
        start = self._parse_start("assert_exhaustion")
        invoke = self.parse_invoke()
        expected = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for assert_exhaustion")
        return AssertExhaustion(start=start, invoke=invoke, expected=expected)

    def parse_assert_malformed(self) -> AssertMalformed:
        """Parse ``(assert_malformed (module ...) "message")``."""
        start = self._parse_start("assert_malformed")
        module = self._parse_module_argument()
        expected = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for assert_malformed")
        return AssertMalformed(start=start, module=module, expected=expected)

    def parse_assert_invalid(self) -> AssertInvalid:
        """Parse ``(assert_invalid (module ...) "message")``."""
        start = self._parse_start("assert_invalid")
        module = self._parse_module_argument()
        expected = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for assert_invalid")
        return AssertInvalid(start=start, module=module, expected=expected)

    def parse_assert_unlinkable(self) -> AssertUnlinkable:
        """Parse ``(assert_unlinkable (module ...) "message")``."""
        start = self._parse_start("assert_unlinkable")
        module = self._parse_module_argument()
        expected = self.parse_name()
        self._expect(TokenType.RPAREN, "')' for assert_unlinkable")
        return AssertUnlinkable(start=start, module=module, expected=expected)

    def _parse_module_argument(self) -> ModuleArg:
        first, second = self._peek()
        if not _is_type(first, TokenType.LPAREN) or not _is_keyword(second, "module"):
            raise self._unexpected_ahead("'(module' for module argument")
        return self.parse_module()

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def parse_directive(self) -> Directive:
        """Parse one top-level directive, dispatching on its keyword."""
        first, second = self._peek()
        if not _is_type(first, TokenType.LPAREN):
            raise self._unexpected(self._consume(), "'(' for start of WAST directive")
        rule = _DIRECTIVE_RULES.get(second.text) if second is not None and second.type == TokenType.KEYWORD else None
        if rule is None:
            raise self._unexpected_ahead("keyword for WAST directive")
        return rule(self)

    def parse_root(self) -> Root:
        """Parse directives until the input is exhausted."""
        directives: list[Directive] = []
        while not self._at_end():
            directives.append(self.parse_directive())
        return Root(directives=directives)


# ################
# Implementation
# ################


def _is_type(tok: Token | None, token_type: TokenType) -> bool:
    return tok is not None and tok.type == token_type


def _is_keyword(tok: Token | None, keyword: str) -> bool:
    return tok is not None and tok.type == TokenType.KEYWORD and tok.text == keyword


_DIRECTIVE_RULES: dict[str, Callable[[Parser], Directive]] = {
    "module": Parser.parse_module,
    "invoke": Parser.parse_invoke,
    "register": Parser.parse_register,
    "assert_return": Parser.parse_assert_return,
    "assert_trap": Parser.parse_assert_trap,
    "assert_exhaustion": Parser.parse_assert_exhaustion,
    "assert_malformed": Parser.parse_assert_malformed,
    "assert_invalid": Parser.parse_assert_invalid,
    "assert_unlinkable": Parser.parse_assert_unlinkable,
}
