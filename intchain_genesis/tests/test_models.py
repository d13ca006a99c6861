"""Tests for data models."""

import logging

import pytest
from datetime import datetime, timedelta, timezone
from pydantic import ValidationError

from intchain_genesis.crypto import Address, BLSPubKey
from intchain_genesis.models import (
    GenesisDocument,
    EpochRecord,
    RewardSchedule,
    ValidatorEntry,
    ConsensusKind,
    UINT64_MAX,
)

CST = timezone(timedelta(hours=8))


def make_validator(name="", voting_power=10**18):
    return ValidatorEntry(
        account=Address.from_string("INT3DvvQnnBNcUUeMJfiRi6GKFRjhwaw"),
        public_key=BLSPubKey(bytes(range(128))),
        voting_power=voting_power,
        name=name,
        remaining_epoch=0
    )


def make_document(chain_id="intchain", consensus="ipbft", validators=None):
    if validators is None:
        validators = [make_validator()]
    return GenesisDocument(
        chain_id=chain_id,
        consensus=consensus,
        genesis_time=datetime(2020, 5, 12, 11, 46, 26, 899977, tzinfo=CST),
        reward_schedule=RewardSchedule(
            total_reward=0xa56fa5b99019a5c8000000,
            reward_first_year=0x108b2a2c28029094000000,
            epochs_per_year=0x111c,
            total_years=10
        ),
        current_epoch=EpochRecord(
            number=0,
            reward_per_block=0x8cd1dc18de05834,
            start_block=0,
            end_block=0x1c20,
            status=0,
            validators=validators
        )
    )


def test_genesis_document_creation():
    """Test genesis document model creation."""
    doc = make_document()

    assert doc.chain_id == "intchain"
    assert doc.consensus == ConsensusKind.IPBFT.value
    assert doc.reward_schedule.total_years == 10
    assert doc.current_epoch.end_block == 0x1c20
    assert isinstance(doc.current_epoch.validators, tuple)
    assert doc.validators == doc.current_epoch.validators


def test_optional_fields_default():
    """Test defaults of counters, name and status."""
    schedule = RewardSchedule(total_reward=1, reward_first_year=1)
    epoch = EpochRecord(reward_per_block=1, validators=[])
    validator = ValidatorEntry(
        account=Address.from_string("INT3DvvQnnBNcUUeMJfiRi6GKFRjhwaw"),
        public_key=BLSPubKey(bytes(128)),
        voting_power=1
    )

    assert schedule.epochs_per_year == 0
    assert schedule.total_years == 0
    assert epoch.number == 0
    assert epoch.status == 0
    assert epoch.validators == ()
    assert validator.name == ""
    assert validator.remaining_epoch == 0


def test_document_is_immutable():
    """Test documents cannot be mutated after construction."""
    doc = make_document()

    with pytest.raises(ValidationError):
        doc.chain_id = "other"
    with pytest.raises(ValidationError):
        doc.current_epoch.validators[0].voting_power = 0


def test_required_fields_enforced():
    """Test required fields have no default."""
    with pytest.raises(ValidationError):
        RewardSchedule(total_reward=1)
    with pytest.raises(ValidationError):
        EpochRecord(reward_per_block=1)
    with pytest.raises(ValidationError):
        make_document(chain_id="")


def test_value_ranges_enforced():
    """Test uint64 and non-negative bounds."""
    with pytest.raises(ValidationError):
        make_validator(voting_power=-1)
    with pytest.raises(ValidationError):
        EpochRecord(reward_per_block=1, end_block=UINT64_MAX + 1, validators=[])

    epoch = EpochRecord(reward_per_block=1, end_block=UINT64_MAX, validators=[])
    assert epoch.end_block == UINT64_MAX


def test_naive_genesis_time_rejected():
    """Test genesis time must carry a timezone offset."""
    doc = make_document()
    data = dict(doc)
    data["genesis_time"] = datetime(2020, 5, 12, 11, 46, 26)

    with pytest.raises(ValidationError):
        GenesisDocument(**data)


def test_unknown_consensus_is_advisory(caplog):
    """Test unknown consensus values are kept with a warning."""
    with caplog.at_level(logging.WARNING):
        doc = make_document(consensus="raft")

    assert doc.consensus == "raft"
    assert "Unknown consensus 'raft'" in caplog.text


def test_total_voting_power():
    """Test summing validator voting power."""
    doc = make_document(validators=[
        make_validator(name="a", voting_power=5),
        make_validator(name="b", voting_power=7),
    ])

    assert doc.total_voting_power == 12
    assert make_document(validators=[]).total_voting_power == 0


def test_canonical_json_and_fingerprint():
    """Test canonical JSON is stable and the fingerprint tracks content."""
    doc1 = make_document()
    doc2 = make_document()

    canonical = doc1.to_canonical_json()
    assert canonical == doc2.to_canonical_json()
    assert " " not in canonical
    assert canonical.index('"chain_id"') < canonical.index('"consensus"') < canonical.index('"current_epoch"')

    assert doc1.fingerprint() == doc2.fingerprint()
    assert len(doc1.fingerprint()) == 64
    assert doc1.fingerprint() != make_document(chain_id="testnet").fingerprint()


def test_status_and_time_are_strict():
    """Test status and genesis time are not coerced from other types."""
    for status in (True, "5", 1.0, 2**70):
        with pytest.raises(ValidationError):
            EpochRecord(reward_per_block=1, status=status, validators=[])

    data = dict(make_document())
    data["genesis_time"] = "2020-05-12T11:46:26+08:00"
    with pytest.raises(ValidationError):
        GenesisDocument(**data)

    data = dict(make_document())
    data["genesis_time_nanos"] = 1000
    with pytest.raises(ValidationError):
        GenesisDocument(**data)
