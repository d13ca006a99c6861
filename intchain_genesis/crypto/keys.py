"""BLS public keys carried by genesis validators."""

from dataclasses import dataclass

import nacl.encoding

from ..errors import FormatError

BLS_PUBKEY_LENGTH = 128


@dataclass(frozen=True)
class BLSPubKey:
    """BLS public key (exactly 128 raw bytes)."""
    key_bytes: bytes

    def __post_init__(self):
        if not isinstance(self.key_bytes, bytes):
            raise FormatError(f"BLS public key must be bytes, got {type(self.key_bytes).__name__}")
        if len(self.key_bytes) != BLS_PUBKEY_LENGTH:
            raise FormatError(
                f"BLS public key must be {BLS_PUBKEY_LENGTH} bytes, got {len(self.key_bytes)}"
            )

    @property
    def key_hex(self) -> str:
        """Get 0x-prefixed lowercase hex of the raw key bytes."""
        return "0x" + nacl.encoding.HexEncoder.encode(self.key_bytes).decode('ascii')

    def __bytes__(self) -> bytes:
        return self.key_bytes

    def __str__(self) -> str:
        return self.key_hex
