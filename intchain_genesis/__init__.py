"""Genesis document model and hex-aware JSON codec for intchain networks."""

from .codec import (
    to_write_shape,
    from_write_shape,
    encode,
    decode,
    load_from_bytes,
    load_from_file,
    save_to_file,
)
from .errors import GenesisError, DecodeError, MissingFieldError, FormatError, UnknownFixtureError
from .fixtures import builtin_fixture, BUILTIN_FIXTURES
from .models import GenesisDocument, EpochRecord, RewardSchedule, ValidatorEntry, ConsensusKind

__version__ = "0.1.0"

__all__ = [
    "to_write_shape",
    "from_write_shape",
    "encode",
    "decode",
    "load_from_bytes",
    "load_from_file",
    "save_to_file",
    "GenesisError",
    "DecodeError",
    "MissingFieldError",
    "FormatError",
    "UnknownFixtureError",
    "builtin_fixture",
    "BUILTIN_FIXTURES",
    "GenesisDocument",
    "EpochRecord",
    "RewardSchedule",
    "ValidatorEntry",
    "ConsensusKind",
]
