# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Directive nodes produced by the WAST parser."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, model_validator
from pydantic import Field as _Field

from wastparse.model.consts import Const
from wastparse.model.modules import BinaryModule, InlineModule, ModuleArg, QuoteModule

# ###############
# Public Interface
# ###############


class Invoke(BaseModel):
    """A call of an exported function: ``(invoke $m? "name" const*)``."""

    kind: Literal["invoke"] = "invoke"
    start: int
    id: str | None = None
    name: str
    args: list[Const] = _Field(default_factory=list)


class GetGlobal(BaseModel):
    """A read of an exported global: ``(get $m? "name")``."""

    kind: Literal["get"] = "get"
    start: int
    id: str | None = None
    name: str


class Register(BaseModel):
    """Makes a module instance importable under a name: ``(register "name" $m?)``."""

    kind: Literal["register"] = "register"
    start: int
    name: str
    id: str | None = None


# An action that can be paired with an expected outcome.
Action = Annotated[Invoke | GetGlobal, _Field(discriminator="kind")]


class AssertReturn(BaseModel):
    """``(assert_return action const?)``.

    An invoke may expect no result; a global read always names one.
    """

    kind: Literal["assert_return"] = "assert_return"
    start: int
    action: Action
    expected: Const | None = None

    @model_validator(mode="after")
    def _global_read_needs_result(self) -> AssertReturn:
        if isinstance(self.action, GetGlobal) and self.expected is None:
            raise ValueError("assert_return on a global read requires an expected value")
        return self


class AssertTrap(BaseModel):
    """``(assert_trap (invoke ...) "message")``."""

    kind: Literal["assert_trap"] = "assert_trap"
    start: int
    invoke: Invoke
    expected: str


class AssertExhaustion(BaseModel):
    """``(assert_exhaustion (invoke ...) "message")``."""

    kind: Literal["assert_exhaustion"] = "assert_exhaustion"
    start: int
    invoke: Invoke
    expected: str


class AssertMalformed(BaseModel):
    """``(assert_malformed (module ...) "message")``."""

    kind: Literal["assert_malformed"] = "assert_malformed"
    start: int
    module: ModuleArg
    expected: str


class AssertInvalid(BaseModel):
    """``(assert_invalid (module ...) "message")``."""

    kind: Literal["assert_invalid"] = "assert_invalid"
    start: int
    module: ModuleArg
    expected: str


class AssertUnlinkable(BaseModel):
    """``(assert_unlinkable (module ...) "message")``."""

    kind: Literal["assert_unlinkable"] = "assert_unlinkable"
    start: int
    module: ModuleArg
    expected: str


# One top-level statement of a script.
Directive = Annotated[
    InlineModule
    | QuoteModule
    | BinaryModule
    | AssertReturn
    | AssertTrap
    | AssertExhaustion
    | AssertMalformed
    | AssertInvalid
    | AssertUnlinkable
    | Invoke
    | Register,
    _Field(discriminator="kind"),
]


class Root(BaseModel):
    """A whole parsed script. Directives run in the order they appear."""

    directives: list[Directive] = _Field(default_factory=list)

    def kinds(self) -> list[str]:
        """Return the directive tags in source order."""
        return [d.kind for d in self.directives]


# Resolve forward references.
AssertReturn.model_rebuild()
Root.model_rebuild()
