# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding of numeric literal text into fixed-width values.

Integers follow the ``iNN.const`` rule that literals range over
``[signed_min, unsigned_max]``: values in the upper unsigned half are
reinterpreted as two's complement. Floats are produced with the rounding of
the target width, so an ``f32`` result is always exactly representable as an
IEEE binary32 value.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction

from wastparse.parser.errors import ErrorKind
from wastparse.parser.lexer import NumBase, Sign

# ###############
# Public Interface
# ###############


class ScalarError(Exception):
    """Raised when literal text cannot be decoded into a value of the target type.

    Attributes:
        kind: One of INVALID_INT, TOO_SMALL_INT, INVALID_FLOAT, INVALID_HEX_FLOAT.
        type_name: Target type such as ``"i32"`` or ``"f64"``.
        reason: Description of the defect.
    """

    def __init__(self, kind: ErrorKind, type_name: str, reason: str) -> None:
        super().__init__(f"{kind.value} for {type_name}: {reason}")
        self.kind = kind
        self.type_name = type_name
        self.reason = reason


def decode_int(sign: Sign, base: NumBase, digits: str, width: int) -> int:
    """Decode an integer literal into the signed value of a *width*-bit integer.

    Args:
        sign: Sign written in front of the literal.
        base: Radix of *digits*.
        digits: Digit text without prefix; ``_`` separators are ignored.
        width: 32 or 64.

    Returns:
        The two's-complement signed interpretation.

    Raises:
        ScalarError: INVALID_INT when the digits do not form an unsigned
            integer of *width* bits, TOO_SMALL_INT when a negative literal is
            below the signed minimum.
    """
    type_name = f"i{width}"
    unsigned = _parse_unsigned(digits, base, width, type_name)
    signed_max = (1 << (width - 1)) - 1

    if sign is Sign.PLUS:
        return unsigned - (1 << width) if unsigned > signed_max else unsigned
    # -2**(width - 1) has no positive counterpart but is still in range.
    if unsigned <= signed_max + 1:
        return -unsigned
    raise ScalarError(
        ErrorKind.TOO_SMALL_INT,
        type_name,
        f"-{unsigned} is below the minimum {type_name} value",
    )


def decode_float(
    sign: Sign,
    base: NumBase,
    mantissa: str,
    exponent: tuple[Sign, str] | None,
    width: int,
) -> float:
    """Decode a float literal value into a *width*-bit float.

    Args:
        sign: Sign written in front of the literal, applied last.
        base: DEC for ``1.5e3`` style literals, HEX for ``0x1.8p3`` style ones.
        mantissa: Digits with an optional radix point, without ``0x``.
        exponent: Sign and decimal digits of the ``e``/``p`` exponent, if any.
        width: 32 or 64.

    Raises:
        ScalarError: INVALID_FLOAT or INVALID_HEX_FLOAT on malformed text.
    """
    fmt = _FORMATS[width]
    if base is NumBase.DEC:
        value = _decode_decimal(mantissa, exponent, fmt)
    else:
        value = _decode_hex(mantissa, exponent, fmt)
    return sign.apply(value)


def round_to_f32(value: float) -> float:
    """Round a Python float to the nearest binary32 value (ties to even)."""
    if math.isnan(value) or math.isinf(value) or value == 0.0:
        return value
    return _round_fraction(Fraction(value), _F32)


# ################
# Implementation
# ################

_DEC_DIGITS = re.compile(r"[0-9]+")
_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")

# Decimal magnitudes whose exponent lies outside this window are zero or
# infinite at both widths.
_DECIMAL_EXPONENT_LIMIT = 400

# Binary exponents beyond this window overflow or underflow any finite mantissa.
_HEX_EXPONENT_LIMIT = 4096

# Exponent digit strings longer than this exceed any mantissa a script can hold.
_MAX_EXPONENT_DIGITS = 18

# Halfway points between adjacent f64 values have at most 767 significant
# decimal digits; digits past this count only matter as a nonzero tail.
_MAX_SIGNIFICANT_DIGITS = 800


@dataclass(frozen=True)
class _FloatFormat:
    """Parameters of an IEEE 754 binary format."""

    name: str
    precision: int  # significand bits including the implicit one
    min_exp: int  # exponent of the smallest normal value
    max_exp: int  # exponent of the largest finite value

    def round(self, value: float) -> float:
        if self.precision == 53:
            return value
        return round_to_f32(value)


_F32 = _FloatFormat(name="f32", precision=24, min_exp=-126, max_exp=127)
_F64 = _FloatFormat(name="f64", precision=53, min_exp=-1022, max_exp=1023)
_FORMATS = {32: _F32, 64: _F64}


def _parse_unsigned(digits: str, base: NumBase, width: int, type_name: str) -> int:
    text = digits.replace("_", "")
    pattern = _HEX_DIGITS if base is NumBase.HEX else _DEC_DIGITS
    if not text:
        raise ScalarError(ErrorKind.INVALID_INT, type_name, "cannot parse integer from empty string")
    if not pattern.fullmatch(text):
        raise ScalarError(ErrorKind.INVALID_INT, type_name, f"invalid digit found in {digits!r}")
    significant = text.lstrip("0")
    limit = (1 << width) - 1
    max_len = len(f"{limit:x}") if base is NumBase.HEX else len(str(limit))
    value = int(significant or "0", base.value) if len(significant) <= max_len else limit + 1
    if value > limit:
        raise ScalarError(ErrorKind.INVALID_INT, type_name, f"number too large to fit in u{width}")
    return value


def _round_fraction(value: Fraction, fmt: _FloatFormat) -> float:
    """Round an exact rational to the nearest value of *fmt*, ties to even."""
    if value == 0:
        return 0.0
    negative = value < 0
    num, den = abs(value.numerator), value.denominator

    # Normalize so that 2**exp <= |value| < 2**(exp + 1).
    exp = num.bit_length() - den.bit_length()
    if (num << max(0, -exp)) < (den << max(0, exp)):
        exp -= 1
    if exp > fmt.max_exp:
        return -math.inf if negative else math.inf

    quantum = max(exp, fmt.min_exp) - (fmt.precision - 1)
    if quantum >= 0:
        divisor = den << quantum
        scaled, rem = divmod(num, divisor)
    else:
        divisor = den
        scaled, rem = divmod(num << -quantum, divisor)
    if 2 * rem > divisor or (2 * rem == divisor and scaled & 1):
        scaled += 1

    if scaled.bit_length() + quantum > fmt.max_exp + 1:
        result = math.inf
    else:
        result = math.ldexp(scaled, quantum)
    return -result if negative else result


def _decode_decimal(mantissa: str, exponent: tuple[Sign, str] | None, fmt: _FloatFormat) -> float:
    whole, _, frac = mantissa.replace("_", "").partition(".")
    digits = whole + frac
    if not digits or not _DEC_DIGITS.fullmatch(digits):
        raise ScalarError(ErrorKind.INVALID_FLOAT, fmt.name, f"invalid float literal {mantissa!r}")

    power = 0
    if exponent is not None:
        exp_sign, exp_digits = exponent
        exp_text = exp_digits.replace("_", "")
        if not _DEC_DIGITS.fullmatch(exp_text):
            raise ScalarError(ErrorKind.INVALID_FLOAT, fmt.name, f"invalid exponent {exp_digits!r}")
        exp_text = exp_text.lstrip("0") or "0"
        if len(exp_text) > _MAX_EXPONENT_DIGITS:
            exp_text = "1" + "0" * _MAX_EXPONENT_DIGITS
        power = int(exp_sign.apply(int(exp_text)))

    leading = len(digits) - len(digits.lstrip("0"))
    significant = digits[leading:].rstrip("0")
    if not significant:
        return 0.0
    # The value is 0.<significant> * 10**magnitude.
    magnitude = len(whole) - leading + power
    if magnitude > _DECIMAL_EXPONENT_LIMIT:
        return math.inf
    if magnitude < -_DECIMAL_EXPONENT_LIMIT:
        return 0.0
    if len(significant) > _MAX_SIGNIFICANT_DIGITS:
        significant = significant[:_MAX_SIGNIFICANT_DIGITS] + "1"
    scale = magnitude - len(significant)
    return _round_fraction(Fraction(int(significant)) * Fraction(10) ** scale, fmt)


def _hex_digit(ch: str) -> int | None:
    if ch in "0123456789abcdefABCDEF":
        return int(ch, 16)
    return None


def _decode_hex(mantissa: str, exponent: tuple[Sign, str] | None, fmt: _FloatFormat) -> float:
    whole, _, frac = mantissa.partition(".")
    value = 0.0

    for ch in whole:
        if ch == "_":
            continue
        digit = _hex_digit(ch)
        if digit is None:
            raise ScalarError(ErrorKind.INVALID_HEX_FLOAT, fmt.name, f"invalid hex digit {ch!r}")
        value = fmt.round(value * 16.0 + digit)

    step = 16.0
    for ch in frac:
        if ch == "_":
            continue
        digit = _hex_digit(ch)
        if digit is None:
            raise ScalarError(ErrorKind.INVALID_HEX_FLOAT, fmt.name, f"invalid hex digit {ch!r}")
        value = fmt.round(value + fmt.round(digit / step))
        step = fmt.round(step * 16.0)

    if exponent is not None:
        exp_sign, exp_digits = exponent
        exp_text = exp_digits.replace("_", "")
        exp_text = exp_text.lstrip("0") or exp_text
        if not _DEC_DIGITS.fullmatch(exp_text) or len(exp_text) > 10 or int(exp_text) > 2**31 - 1:
            raise ScalarError(ErrorKind.INVALID_HEX_FLOAT, fmt.name, f"invalid exponent {exp_digits!r}")
        power = int(exp_sign.apply(int(exp_text)))
        value = _scale_by_power_of_two(value, power, fmt)

    return value


def _scale_by_power_of_two(value: float, power: int, fmt: _FloatFormat) -> float:
    if value == 0.0 or math.isinf(value):
        return value
    if power > _HEX_EXPONENT_LIMIT:
        return math.inf
    if power < -_HEX_EXPONENT_LIMIT:
        return 0.0
    return _round_fraction(Fraction(value) * Fraction(2) ** power, fmt)
