# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoding of escape sequences in WAST string literals."""

# ###############
# Public Interface
# ###############


class EscapeError(Exception):
    """Raised when a string literal contains a malformed escape sequence.

    Attributes:
        reason: The specific defect, e.g. ``invalid \\XX format``.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class TextError(Exception):
    """Raised when decoded string bytes are not valid UTF-8 text."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def decode_bytes(raw: str) -> bytes:
    """Decode the raw text of a string literal into bytes.

    Unescaped characters are encoded as UTF-8. Recognized escapes are
    ``\\t \\n \\r \\" \\' \\\\``, ``\\hh`` for one raw byte and ``\\u{h+}`` for a
    Unicode scalar value.

    Args:
        raw: Text between the quotes of a string token.

    Raises:
        EscapeError: On any malformed escape.
    """
    buf = bytearray()
    pos = 0
    length = len(raw)
    while pos < length:
        backslash = raw.find("\\", pos)
        if backslash < 0:
            buf += raw[pos:].encode("utf-8")
            break
        buf += raw[pos:backslash].encode("utf-8")
        pos = backslash + 1
        if pos >= length:
            raise EscapeError("unterminated escape sequence")

        esc = raw[pos]
        if esc in _SIMPLE_ESCAPES:
            buf.append(_SIMPLE_ESCAPES[esc])
            pos += 1
        elif esc == "u":
            if raw[pos + 1 : pos + 2] != "{":
                raise EscapeError("invalid \\u{xxxx} format")
            close = raw.find("}", pos + 2)
            if close < 0:
                raise EscapeError("invalid \\u{xxxx} format")
            buf += _code_point(raw[pos + 2 : close]).encode("utf-8")
            pos = close + 1
        else:
            pair = raw[pos : pos + 2]
            if len(pair) != 2 or not all(ch in _HEX for ch in pair):
                raise EscapeError("invalid \\XX format")
            buf.append(int(pair, 16))
            pos += 2
    return bytes(buf)


def decode_text(raw: str) -> str:
    """Decode a string literal and require the result to be UTF-8 text.

    Raises:
        EscapeError: On any malformed escape.
        TextError: If the decoded bytes are not valid UTF-8.
    """
    data = decode_bytes(raw)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TextError(f"invalid utf-8 sequence at byte {exc.start}: {exc.reason}") from exc


# ################
# Implementation
# ################

_SIMPLE_ESCAPES: dict[str, int] = {
    "t": 0x09,
    "n": 0x0A,
    "r": 0x0D,
    '"': 0x22,
    "'": 0x27,
    "\\": 0x5C,
}

_HEX = frozenset("0123456789abcdefABCDEF")


def _code_point(digits: str) -> str:
    """Return the character for the hex digits of a ``\\u{...}`` escape."""
    if not digits or not all(ch in _HEX for ch in digits):
        raise EscapeError("invalid code point in \\u{xxxx}")
    value = int(digits, 16)
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        raise EscapeError("invalid code point in \\u{xxxx}")
    return chr(value)
