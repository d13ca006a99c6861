"""
Field-level transforms between native values and their JSON forms.

Quantities (big integers and uint64 counters) use the 0x-prefixed
hex-string convention: at least one digit, no leading zero digits,
either letter case on input, lowercase on output. Binary key material
uses plain hex with an optional 0x prefix.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

import nacl.encoding

from ..errors import DecodeError, FormatError

UINT64_MAX = 2**64 - 1
BIG_BITS = 256

_HEX_DIGITS = re.compile(r'[0-9a-fA-F]*')
_RFC3339 = re.compile(
    r'(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})'
    r'(?:\.(\d{1,9}))?'
    r'(?:([Zz])|([+-])(\d{2}):(\d{2}))'
)


def _check_quantity(value: Any, max_bits: int) -> str:
    """Validate a hex quantity string and return its digits."""
    if not isinstance(value, str):
        raise DecodeError(f"cannot unmarshal non-string {value!r} into hex quantity")
    if not value.startswith(('0x', '0X')):
        raise DecodeError(f"hex string without 0x prefix: {value!r}")
    digits = value[2:]
    if not digits:
        raise DecodeError(f"hex string {value!r} has no digits")
    if not _HEX_DIGITS.fullmatch(digits):
        raise DecodeError(f"invalid hex string: {value!r}")
    if len(digits) > 1 and digits[0] == '0':
        raise DecodeError(f"hex number with leading zero digits: {value!r}")
    if len(digits) > max_bits // 4:
        raise DecodeError(f"hex number > {max_bits} bits: {value!r}")
    return digits


def encode_big(value: Optional[int]) -> Optional[str]:
    """Encode a non-negative integer as a quantity; None stays null."""
    if value is None:
        return None
    if value < 0:
        raise ValueError(f"cannot encode negative integer {value}")
    return hex(value)


def decode_big(value: Any) -> Optional[int]:
    """
    Decode a big-integer quantity.

    Args:
        value: JSON value (string or None)

    Returns:
        The integer, or None when the JSON value is null

    Raises:
        DecodeError: If the value is not a valid quantity
    """
    if value is None:
        return None
    return int(_check_quantity(value, BIG_BITS), 16)


def encode_uint64(value: int) -> str:
    """Encode a uint64 counter as a quantity."""
    if not 0 <= value <= UINT64_MAX:
        raise ValueError(f"value {value} out of uint64 range")
    return hex(value)


def decode_uint64(value: Any, default: int = 0) -> int:
    """Decode a uint64 quantity; null decodes to the default."""
    if value is None:
        return default
    return int(_check_quantity(value, 64), 16)


def encode_bytes(data: bytes) -> str:
    """Encode raw bytes as 0x-prefixed lowercase hex."""
    return "0x" + nacl.encoding.HexEncoder.encode(data).decode('ascii')


def decode_bytes(value: Any) -> bytes:
    """
    Decode a hex string to raw bytes.

    A 0x prefix is stripped when present and an odd number of digits
    is padded with a leading zero.
    """
    if not isinstance(value, str):
        raise DecodeError(f"cannot unmarshal non-string {value!r} into hex bytes")
    if value.startswith(('0x', '0X')):
        value = value[2:]
    if not _HEX_DIGITS.fullmatch(value):
        raise DecodeError(f"invalid hex string: {value!r}")
    if len(value) % 2 == 1:
        value = '0' + value
    return nacl.encoding.HexEncoder.decode(value.encode('ascii'))


def parse_rfc3339(value: str) -> Tuple[datetime, int]:
    """
    Parse an RFC 3339 timestamp with up to nanosecond precision.

    Returns:
        Tuple of (aware datetime to the microsecond, remaining nanoseconds 0-999)

    Raises:
        FormatError: If the text is not an RFC 3339 timestamp with an offset
    """
    match = _RFC3339.fullmatch(value)
    if not match:
        raise FormatError(f"not an RFC 3339 timestamp with offset: {value!r}")
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()

    nanos = int((fraction or '').ljust(9, '0'))
    if zulu:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        try:
            tz = timezone(-offset if sign == '-' else offset)
        except ValueError as exc:
            raise FormatError(f"invalid timestamp offset in {value!r}: {exc}") from exc
    try:
        parsed = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second),
                          nanos // 1000, tzinfo=tz)
    except ValueError as exc:
        raise FormatError(f"invalid timestamp {value!r}: {exc}") from exc
    return parsed, nanos % 1000


def format_rfc3339(value: datetime, nanos: int = 0) -> str:
    """
    Format an aware datetime as RFC 3339.

    ``nanos`` adds sub-microsecond digits. Trailing zeros of the
    fractional second are trimmed and UTC is written as ``Z``.
    """
    text = (f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}")
    fraction = value.microsecond * 1000 + nanos
    if fraction:
        text += '.' + f"{fraction:09d}".rstrip('0')

    offset = value.utcoffset()
    if offset == timedelta(0):
        return text + 'Z'
    minutes = int(offset.total_seconds()) // 60
    sign = '-' if minutes < 0 else '+'
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"
