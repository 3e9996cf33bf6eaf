# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Directive model for parsed WAST scripts."""

from wastparse.model.consts import (
    ArithmeticNan,
    CanonicalNan,
    Const,
    F32Const,
    F64Const,
    I32Const,
    I64Const,
)
from wastparse.model.directives import (
    Action,
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
from wastparse.model.modules import (
    BinaryModule,
    EmbeddedModule,
    InlineModule,
    ModuleArg,
    ModuleField,
    QuoteModule,
)

__all__ = [
    # Constants
    "I32Const",
    "I64Const",
    "F32Const",
    "F64Const",
    "CanonicalNan",
    "ArithmeticNan",
    "Const",
    # Modules
    "ModuleField",
    "InlineModule",
    "QuoteModule",
    "BinaryModule",
    "EmbeddedModule",
    "ModuleArg",
    # Directives
    "Invoke",
    "GetGlobal",
    "Register",
    "Action",
    "AssertReturn",
    "AssertTrap",
    "AssertExhaustion",
    "AssertMalformed",
    "AssertInvalid",
    "AssertUnlinkable",
    "Directive",
    "Root",
]
