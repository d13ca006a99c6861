"""Hex-aware JSON codec for genesis documents."""

from .genesis_json import (
    to_write_shape,
    from_write_shape,
    encode,
    decode,
    load_from_bytes,
    load_from_file,
    save_to_file,
)

__all__ = [
    "to_write_shape",
    "from_write_shape",
    "encode",
    "decode",
    "load_from_bytes",
    "load_from_file",
    "save_to_file",
]
