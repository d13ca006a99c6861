"""Genesis document data models."""

import logging
from enum import Enum
from typing import Tuple

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from ..crypto import Address, BLSPubKey

logger = logging.getLogger(__name__)

UINT64_MAX = 2**64 - 1
UINT256_MAX = 2**256 - 1
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class ConsensusKind(str, Enum):
    """Documented consensus engines."""
    POS = "pos"
    POW = "pow"
    IPBFT = "ipbft"


KNOWN_CONSENSUS = frozenset(kind.value for kind in ConsensusKind)


class ValidatorEntry(BaseModel):
    """One validator of the genesis roster."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    account: Address = Field(..., description="Validator account address")
    public_key: BLSPubKey = Field(..., description="BLS public key")
    voting_power: int = Field(..., ge=0, le=UINT256_MAX, description="Staked amount")
    name: str = Field(default="", description="Free-form label")
    remaining_epoch: int = Field(default=0, ge=0, le=UINT64_MAX, description="Remaining epochs")


class EpochRecord(BaseModel):
    """The epoch the chain starts in."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    number: int = Field(default=0, ge=0, le=UINT64_MAX, description="Epoch sequence number")
    reward_per_block: int = Field(..., ge=0, le=UINT256_MAX, description="Block reward during this epoch")
    start_block: int = Field(default=0, ge=0, le=UINT64_MAX, description="First block height")
    end_block: int = Field(default=0, ge=0, le=UINT64_MAX, description="Last block height")
    status: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, strict=True, description="Lifecycle tag")
    validators: Tuple[ValidatorEntry, ...] = Field(..., description="Ordered validator roster")


class RewardSchedule(BaseModel):
    """Chain-wide emission parameters."""
    model_config = ConfigDict(frozen=True)

    total_reward: int = Field(..., ge=0, le=UINT256_MAX, description="Total emission over the schedule")
    reward_first_year: int = Field(..., ge=0, le=UINT256_MAX, description="Emission in the first year")
    epochs_per_year: int = Field(default=0, ge=0, le=UINT64_MAX, description="Epochs per year")
    total_years: int = Field(default=0, ge=0, le=UINT64_MAX, description="Schedule length in years")


class GenesisDocument(BaseModel):
    """
    Genesis document - the chain state at block height zero.

    Built once from JSON or a built-in fixture and never mutated;
    every node must start from an identical document.
    """
    model_config = ConfigDict(frozen=True)

    chain_id: str = Field(..., min_length=1, description="Chain identifier")
    consensus: str = Field(default="", description="Consensus engine (pos, pow or ipbft)")
    genesis_time: AwareDatetime = Field(..., strict=True, description="Genesis timestamp with offset")
    genesis_time_nanos: int = Field(
        default=0, ge=0, le=999, strict=True,
        description="Nanoseconds below the microsecond precision of genesis_time"
    )
    reward_schedule: RewardSchedule = Field(..., description="Emission schedule")
    current_epoch: EpochRecord = Field(..., description="Initial epoch")

    @field_validator("consensus")
    @classmethod
    def check_consensus(cls, v: str) -> str:
        """Warn about consensus values outside the documented set."""
        if v not in KNOWN_CONSENSUS:
            logger.warning(f"Unknown consensus '{v}', expected one of {sorted(KNOWN_CONSENSUS)}")
        return v

    @property
    def validators(self) -> Tuple[ValidatorEntry, ...]:
        """Genesis validator roster."""
        return self.current_epoch.validators

    @property
    def total_voting_power(self) -> int:
        """Sum of the voting power of all genesis validators."""
        return sum(v.voting_power for v in self.current_epoch.validators)

    def to_canonical_json(self) -> str:
        """
        Convert to canonical JSON (sorted keys, no whitespace).

        Two nodes holding equal documents produce identical text.
        """
        from ..codec.genesis_json import to_write_shape
        import json
        return json.dumps(to_write_shape(self), sort_keys=True, separators=(',', ':'))

    def fingerprint(self) -> str:
        """SHA-256 hex digest of the canonical JSON."""
        import nacl.encoding
        import nacl.hash
        digest = nacl.hash.sha256(
            self.to_canonical_json().encode('utf-8'),
            encoder=nacl.encoding.HexEncoder
        )
        return digest.decode('ascii')
