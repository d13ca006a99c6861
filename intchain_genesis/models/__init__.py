"""Data models for genesis documents."""

from .genesis import (
    GenesisDocument,
    EpochRecord,
    RewardSchedule,
    ValidatorEntry,
    ConsensusKind,
    KNOWN_CONSENSUS,
    UINT64_MAX,
    UINT256_MAX,
    INT64_MIN,
    INT64_MAX,
)

__all__ = [
    "GenesisDocument",
    "EpochRecord",
    "RewardSchedule",
    "ValidatorEntry",
    "ConsensusKind",
    "KNOWN_CONSENSUS",
    "UINT64_MAX",
    "UINT256_MAX",
    "INT64_MIN",
    "INT64_MAX",
]
