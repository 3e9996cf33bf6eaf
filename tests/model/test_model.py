# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the directive data model."""

import math

import pytest
from pydantic import TypeAdapter, ValidationError

from wastparse.model import (
    AssertReturn,
    BinaryModule,
    CanonicalNan,
    Const,
    F32Const,
    F64Const,
    GetGlobal,
    I32Const,
    I64Const,
    InlineModule,
    Invoke,
    ModuleField,
    QuoteModule,
    Register,
    Root,
)

# ###############
# Constants
# ###############


class TestConstants:
    def test_i32_range_is_signed(self) -> None:
        I32Const(value=-(2**31))
        I32Const(value=2**31 - 1)
        with pytest.raises(ValidationError):
            I32Const(value=2**31)

    def test_i64_range_is_signed(self) -> None:
        with pytest.raises(ValidationError):
            I64Const(value=-(2**63) - 1)

    def test_integer_bits(self) -> None:
        assert I32Const(value=-2).bits == 0xFFFFFFFE
        assert I64Const(value=-(2**63)).bits == 0x8000000000000000

    def test_f32_must_be_binary32(self) -> None:
        with pytest.raises(ValidationError, match="not exactly representable"):
            F32Const(value=0.1)

    def test_f32_out_of_range(self) -> None:
        with pytest.raises(ValidationError, match="out of binary32 range"):
            F32Const(value=1e39)

    def test_f32_accepts_specials(self) -> None:
        assert F32Const(value=math.inf).bits == 0x7F800000
        assert math.isnan(F32Const(value=math.nan).value)

    def test_f64_bits(self) -> None:
        assert F64Const(value=-0.0).bits == 0x8000000000000000
        assert F64Const(value=1.0).bits == 0x3FF0000000000000

    def test_const_union_dispatches_on_kind(self) -> None:
        adapter = TypeAdapter(Const)
        assert adapter.validate_python({"kind": "i64", "value": 7}) == I64Const(value=7)
        assert adapter.validate_python({"kind": "nan:canonical", "width": 32}) == CanonicalNan(width=32)

    def test_nan_marker_width(self) -> None:
        with pytest.raises(ValidationError):
            CanonicalNan(width=16)  # type: ignore[arg-type]


# ###############
# Modules
# ###############


class TestModules:
    def test_fields_of(self) -> None:
        module = InlineModule(
            start=0,
            end=30,
            fields=[
                ModuleField(kind="memory", start=8, end=18, text="(memory 1)"),
                ModuleField(kind="func", id="$f", start=19, end=29, text="(func $f)"),
            ],
            source="(module (memory 1) (func $f))",
        )
        assert [f.id for f in module.fields_of("func")] == ["$f"]
        assert module.fields_of("table") == []

    def test_binary_module_holds_bytes(self) -> None:
        module = BinaryModule(start=0, data=b"\x00asm")
        assert module.kind == "module_binary"
        assert module.id is None


# ###############
# Directives
# ###############


class TestDirectives:
    def test_assert_return_on_get_requires_result(self) -> None:
        with pytest.raises(ValidationError, match="requires an expected value"):
            AssertReturn(start=0, action=GetGlobal(start=15, name="g"))

    def test_assert_return_on_invoke_may_omit_result(self) -> None:
        directive = AssertReturn(start=0, action=Invoke(start=15, name="f"))
        assert directive.expected is None

    def test_root_kinds(self) -> None:
        root = Root(
            directives=[
                QuoteModule(start=0, text="(module)"),
                Register(start=10, name="M"),
                Invoke(start=20, name="f", args=[I32Const(value=1)]),
            ]
        )
        assert root.kinds() == ["module_quote", "register", "invoke"]

    def test_root_round_trips_through_json(self) -> None:
        root = Root(
            directives=[
                AssertReturn(
                    start=0,
                    action=Invoke(start=15, name="f", args=[F64Const(value=1.5)]),
                    expected=CanonicalNan(width=64),
                ),
                BinaryModule(start=40, id="$m", data=b"\x00asm"),
            ]
        )
        restored = Root.model_validate_json(root.model_dump_json())
        assert restored == root
