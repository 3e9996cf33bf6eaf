# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Constant values appearing as invoke arguments and expected results."""

from __future__ import annotations

import math
import struct
from typing import Annotated, Literal

from pydantic import BaseModel, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class I32Const(BaseModel):
    """An ``i32.const`` value in two's-complement signed form."""

    kind: Literal["i32"] = "i32"
    value: int = _Field(ge=-(2**31), le=2**31 - 1)

    @property
    def bits(self) -> int:
        """The unsigned 32-bit pattern of the value."""
        return self.value & 0xFFFF_FFFF


class I64Const(BaseModel):
    """An ``i64.const`` value in two's-complement signed form."""

    kind: Literal["i64"] = "i64"
    value: int = _Field(ge=-(2**63), le=2**63 - 1)

    @property
    def bits(self) -> int:
        """The unsigned 64-bit pattern of the value."""
        return self.value & 0xFFFF_FFFF_FFFF_FFFF


class F32Const(BaseModel):
    """An ``f32.const`` value. The float is always exactly representable as binary32."""

    kind: Literal["f32"] = "f32"
    value: float

    @field_validator("value")
    @classmethod
    def _check_binary32(cls, value: float) -> float:
        if math.isnan(value):
            return value
        try:
            packed = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            raise ValueError(f"{value!r} is out of binary32 range") from None
        if packed != value:
            raise ValueError(f"{value!r} is not exactly representable as binary32")
        return value

    @property
    def bits(self) -> int:
        """The IEEE binary32 bit pattern of the value."""
        return struct.unpack("<I", struct.pack("<f", self.value))[0]


class F64Const(BaseModel):
    """An ``f64.const`` value."""

    kind: Literal["f64"] = "f64"
    value: float

    @property
    def bits(self) -> int:
        """The IEEE binary64 bit pattern of the value."""
        return struct.unpack("<Q", struct.pack("<d", self.value))[0]


class CanonicalNan(BaseModel):
    """Expected result ``nan:canonical``: any canonical NaN of the result type."""

    kind: Literal["nan:canonical"] = "nan:canonical"
    width: Literal[32, 64]


class ArithmeticNan(BaseModel):
    """Expected result ``nan:arithmetic``: any arithmetic NaN of the result type."""

    kind: Literal["nan:arithmetic"] = "nan:arithmetic"
    width: Literal[32, 64]


Const = Annotated[
    I32Const | I64Const | F32Const | F64Const | CanonicalNan | ArithmeticNan,
    _Field(discriminator="kind"),
]
