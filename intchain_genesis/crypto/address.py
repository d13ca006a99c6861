"""
Fixed-width chain addresses.

Parsing is stricter than a plain byte copy of the string: an address
must be ``INT3`` followed by 28 base58 characters, and anything else is
rejected with FormatError instead of being coerced into 32 bytes.
"""

from dataclasses import dataclass

import base58

from ..errors import FormatError

ADDRESS_LENGTH = 32
ADDRESS_PREFIX = "INT3"


def is_valid_address(value: str) -> bool:
    """
    Check the canonical address form.

    An address is ``INT3`` followed by base58 characters, 32 characters
    in total.
    """
    if not isinstance(value, str):
        return False
    if len(value) != ADDRESS_LENGTH or not value.startswith(ADDRESS_PREFIX):
        return False
    body = value[len(ADDRESS_PREFIX):]
    if not body.isalnum():
        return False
    try:
        base58.b58decode(body)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class Address:
    """Chain address stored as its 32 raw bytes."""
    raw: bytes

    def __post_init__(self):
        try:
            text = self.raw.decode('ascii')
        except (AttributeError, UnicodeDecodeError):
            raise FormatError(f"invalid address bytes: {self.raw!r}") from None
        if not is_valid_address(text):
            raise FormatError(f"invalid address: {text!r}")

    @classmethod
    def from_string(cls, value: str) -> "Address":
        """
        Parse an address from its canonical string.

        Raises:
            FormatError: If the string is not a valid address
        """
        if not is_valid_address(value):
            raise FormatError(f"invalid address: {value!r}")
        return cls(value.encode('ascii'))

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.raw.decode('ascii')
