"""Tests for hex field transforms."""

import pytest
from datetime import datetime, timedelta, timezone

from intchain_genesis.codec.hexutil import (
    UINT64_MAX,
    decode_big,
    decode_bytes,
    decode_uint64,
    encode_big,
    encode_bytes,
    encode_uint64,
    format_rfc3339,
    parse_rfc3339,
)
from intchain_genesis.errors import DecodeError, FormatError


def test_big_encoding_is_lowercase_minimal():
    """Test big integers encode as lowercase minimal hex."""
    assert encode_big(0) == "0x0"
    assert encode_big(0xABC) == "0xabc"
    assert encode_big(0xa56fa5b99019a5c8000000) == "0xa56fa5b99019a5c8000000"
    assert encode_big(None) is None


def test_big_decoding_is_case_insensitive():
    """Test upper and lower case hex digits decode identically."""
    assert decode_big("0xABC") == decode_big("0xabc") == 0xabc
    assert decode_big("0XabC") == 0xabc
    assert decode_big(None) is None


def test_big_decoding_limits():
    """Test the 256-bit limit for big integers."""
    assert decode_big("0x" + "f" * 64) == 2**256 - 1

    with pytest.raises(DecodeError):
        decode_big("0x1" + "0" * 64)


@pytest.mark.parametrize("value", ["abc", "0x", "0x0abc", "0xzz", "0x 1", "", 5, 1.5, [], {}])
def test_invalid_quantities_rejected(value):
    """Test malformed quantities fail with DecodeError."""
    with pytest.raises(DecodeError):
        decode_big(value)
    with pytest.raises(DecodeError):
        decode_uint64(value)


def test_negative_big_not_encodable():
    """Test negative integers cannot be encoded."""
    with pytest.raises(ValueError):
        encode_big(-1)


def test_uint64_encoding():
    """Test uint64 counters encode with minimal digits."""
    assert encode_uint64(0) == "0x0"
    assert encode_uint64(0x1c20) == "0x1c20"
    assert encode_uint64(UINT64_MAX) == "0x" + "f" * 16

    with pytest.raises(ValueError):
        encode_uint64(-1)
    with pytest.raises(ValueError):
        encode_uint64(UINT64_MAX + 1)


def test_uint64_decoding():
    """Test uint64 decoding, defaults and range."""
    assert decode_uint64("0x111c") == 0x111c
    assert decode_uint64("0x0") == 0
    assert decode_uint64(None) == 0
    assert decode_uint64(None, default=7) == 7
    assert decode_uint64("0x" + "F" * 16) == UINT64_MAX

    with pytest.raises(DecodeError):
        decode_uint64("0x1" + "0" * 16)


def test_bytes_hex_roundtrip():
    """Test key bytes encode to 0x-prefixed lowercase hex."""
    assert encode_bytes(b"\xab\x01") == "0xab01"
    assert decode_bytes("0xab01") == b"\xab\x01"
    assert decode_bytes("AB01") == b"\xab\x01"
    assert decode_bytes("0XFF") == b"\xff"


def test_bytes_decoding_edge_cases():
    """Test odd-length padding, empty input and invalid digits."""
    assert decode_bytes("a0b") == b"\x0a\x0b"
    assert decode_bytes("") == b""
    assert decode_bytes("0x") == b""

    with pytest.raises(DecodeError):
        decode_bytes("0xgg")
    with pytest.raises(DecodeError):
        decode_bytes(None)


def test_rfc3339_formatting():
    """Test timestamps keep their offset and trim fractional zeros."""
    cst = timezone(timedelta(hours=8))

    assert format_rfc3339(datetime(2020, 5, 12, 11, 46, 26, 899977, tzinfo=cst)) == \
        "2020-05-12T11:46:26.899977+08:00"
    assert format_rfc3339(datetime(2020, 5, 12, 11, 46, 20, 500000, tzinfo=cst)) == \
        "2020-05-12T11:46:20.5+08:00"
    assert format_rfc3339(datetime(2020, 1, 1, tzinfo=timezone.utc)) == "2020-01-01T00:00:00Z"


def test_rfc3339_nanoseconds_roundtrip():
    """Test nanosecond fractions survive parsing and formatting."""
    text = "2020-05-12T11:46:26.899977123+08:00"

    parsed, nanos = parse_rfc3339(text)

    assert parsed == datetime(2020, 5, 12, 11, 46, 26, 899977, tzinfo=timezone(timedelta(hours=8)))
    assert nanos == 123
    assert format_rfc3339(parsed, nanos) == text


def test_rfc3339_fraction_trimming():
    """Test short fractions and UTC parse and format the way they were written."""
    parsed, nanos = parse_rfc3339("2020-01-01T00:00:00.05Z")
    assert (parsed.microsecond, nanos) == (50000, 0)
    assert format_rfc3339(parsed, nanos) == "2020-01-01T00:00:00.05Z"

    parsed, nanos = parse_rfc3339("2020-01-01T00:00:00.000000007-05:30")
    assert (parsed.microsecond, nanos) == (0, 7)
    assert parsed.utcoffset() == -timedelta(hours=5, minutes=30)
    assert format_rfc3339(parsed, nanos) == "2020-01-01T00:00:00.000000007-05:30"


@pytest.mark.parametrize("value", [
    "1712345678",
    "2020-05-12T11:46:26",
    "2020-05-12 11:46:26+08:00",
    "2020-05-12T11:46:26.8999771234+08:00",
    "2020-13-12T11:46:26+08:00",
    "2020-05-12T11:46:26+24:00",
    "yesterday",
])
def test_rfc3339_invalid_rejected(value):
    """Test non-RFC 3339 text, over-long fractions and bad fields are rejected."""
    with pytest.raises(FormatError):
        parse_rfc3339(value)
