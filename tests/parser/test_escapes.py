# Copyright 2026 wastparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for string literal escape decoding."""

import pytest

from wastparse.parser.escapes import EscapeError, TextError, decode_bytes, decode_text

# ###############
# Byte Decoding
# ###############


class TestDecodeBytes:
    def test_plain_text(self) -> None:
        assert decode_bytes("hello") == b"hello"

    def test_wasm_header(self) -> None:
        assert decode_bytes(r"\00asm") + decode_bytes(r"\01\00\00\00") == bytes(
            [0x00, 0x61, 0x73, 0x6D, 0x01, 0x00, 0x00, 0x00]
        )

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (r"\t", b"\t"),
            (r"\n", b"\n"),
            (r"\r", b"\r"),
            (r"\"", b'"'),
            (r"\'", b"'"),
            (r"\\", b"\\"),
        ],
    )
    def test_simple_escapes(self, raw: str, expected: bytes) -> None:
        assert decode_bytes(raw) == expected

    def test_hex_byte_escape_is_raw(self) -> None:
        assert decode_bytes(r"\ff\FE") == b"\xff\xfe"

    def test_unicode_escape_is_utf8_encoded(self) -> None:
        assert decode_bytes(r"\u{41}\u{e9}\u{1F600}") == "Aé😀".encode()

    def test_non_ascii_source_text_is_utf8_encoded(self) -> None:
        assert decode_bytes("é") == b"\xc3\xa9"

    @pytest.mark.parametrize(
        "raw, reason",
        [
            (r"\u41", "invalid \\u{xxxx} format"),
            (r"\u{41", "invalid \\u{xxxx} format"),
            (r"\u{}", "invalid code point in \\u{xxxx}"),
            (r"\u{zz}", "invalid code point in \\u{xxxx}"),
            (r"\u{d800}", "invalid code point in \\u{xxxx}"),
            (r"\u{110000}", "invalid code point in \\u{xxxx}"),
            (r"\zz", "invalid \\XX format"),
            (r"\0", "invalid \\XX format"),
            (r"\0g", "invalid \\XX format"),
            ("\\", "unterminated escape sequence"),
        ],
    )
    def test_malformed_escapes(self, raw: str, reason: str) -> None:
        with pytest.raises(EscapeError) as exc_info:
            decode_bytes(raw)
        assert exc_info.value.reason == reason


# ###############
# Text Decoding
# ###############


class TestDecodeText:
    def test_valid_text(self) -> None:
        assert decode_text(r"caf\u{e9}") == "café"

    def test_utf8_bytes_via_hex_escapes(self) -> None:
        assert decode_text(r"\c3\a9") == "é"

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(TextError, match="invalid utf-8 sequence at byte 1"):
            decode_text(r"a\ff")

    def test_escape_errors_propagate(self) -> None:
        with pytest.raises(EscapeError):
            decode_text(r"\q")
