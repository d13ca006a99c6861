"""Address and public key types used by genesis documents."""

from .address import Address, ADDRESS_LENGTH, ADDRESS_PREFIX, is_valid_address
from .keys import BLSPubKey, BLS_PUBKEY_LENGTH

__all__ = [
    "Address",
    "ADDRESS_LENGTH",
    "ADDRESS_PREFIX",
    "is_valid_address",
    "BLSPubKey",
    "BLS_PUBKEY_LENGTH",
]
