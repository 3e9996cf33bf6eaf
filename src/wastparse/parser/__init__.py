# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and directive parser for .wast scripts."""

from wastparse.parser.errors import ErrorKind, ParseError, SourceLocation
from wastparse.parser.lexer import LexerError, Token, TokenType, tokenize
from wastparse.parser.lookahead import LookAhead
from wastparse.parser.modules import ModuleCompiler, StructuralModuleCompiler
from wastparse.parser.parser import Parser, parse

__all__ = [
    "parse",
    "Parser",
    "ParseError",
    "ErrorKind",
    "SourceLocation",
    "tokenize",
    "Token",
    "TokenType",
    "LexerError",
    "LookAhead",
    "ModuleCompiler",
    "StructuralModuleCompiler",
]
