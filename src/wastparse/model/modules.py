# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Module payloads carried by module directives and module assertions."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class ModuleField(BaseModel):
    """One top-level field of an inline module, e.g. ``(func $f ...)``.

    Attributes:
        kind: The field keyword (``func``, ``memory``, ``export``, ...).
        id: The field's ``$`` identifier, if it has one.
        start: Offset of the field's opening parenthesis.
        end: Offset just past the field's closing parenthesis.
        text: The exact source text of the field.
    """

    kind: str
    id: str | None = None
    start: int
    end: int
    text: str


class InlineModule(BaseModel):
    """A module written in the script's own text format."""

    kind: Literal["module"] = "module"
    start: int
    end: int
    id: str | None = None
    fields: list[ModuleField] = _Field(default_factory=list)
    source: str

    def fields_of(self, field_kind: str) -> list[ModuleField]:
        """Return the fields of the given kind in source order."""
        return [f for f in self.fields if f.kind == field_kind]


class QuoteModule(BaseModel):
    """A module supplied as quoted source text, ``(module quote "...")``."""

    kind: Literal["module_quote"] = "module_quote"
    start: int
    id: str | None = None
    text: str


class BinaryModule(BaseModel):
    """A module supplied as an encoded binary payload, ``(module binary "...")``."""

    kind: Literal["module_binary"] = "module_binary"
    start: int
    id: str | None = None
    data: bytes


# A module given as quoted text or as a binary payload.
EmbeddedModule = Annotated[QuoteModule | BinaryModule, _Field(discriminator="kind")]

# Any module argument: inline or embedded.
ModuleArg = Annotated[InlineModule | QuoteModule | BinaryModule, _Field(discriminator="kind")]
