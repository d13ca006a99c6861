"""
JSON codec for genesis documents.

The file form of a document (the "write shape") is a plain dict of
JSON values: quantities as 0x-prefixed hex strings, the public key as
raw hex and the account as its address string. ``to_write_shape`` and
``from_write_shape`` translate between that dict and the domain model
field by field; ``encode``/``decode`` add the JSON text layer.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from ..crypto import Address, BLSPubKey, BLS_PUBKEY_LENGTH
from ..errors import DecodeError, FormatError, MissingFieldError
from ..models import GenesisDocument, EpochRecord, RewardSchedule, ValidatorEntry, INT64_MAX, INT64_MIN
from .hexutil import (
    decode_big,
    decode_bytes,
    decode_uint64,
    encode_big,
    encode_bytes,
    encode_uint64,
    format_rfc3339,
    parse_rfc3339,
)

logger = logging.getLogger(__name__)

GENESIS_PATH = "Genesis"
REWARD_SCHEME_PATH = "Genesis/reward_scheme"
EPOCH_PATH = "Genesis/current_epoch"
VALIDATORS_PATH = "Genesis/current_epoch/validators"


# Domain -> write shape

def encode_validator(validator: ValidatorEntry) -> Dict[str, Any]:
    """Convert a validator entry to its write shape."""
    return {
        "address": str(validator.account),
        "pub_key": encode_bytes(bytes(validator.public_key)),
        "amount": encode_big(validator.voting_power),
        "name": validator.name,
        "epoch": encode_uint64(validator.remaining_epoch),
    }


def encode_epoch(epoch: EpochRecord) -> Dict[str, Any]:
    """Convert an epoch record to its write shape."""
    return {
        "number": encode_uint64(epoch.number),
        "reward_per_block": encode_big(epoch.reward_per_block),
        "start_block": encode_uint64(epoch.start_block),
        "end_block": encode_uint64(epoch.end_block),
        "status": epoch.status,
        "validators": [encode_validator(v) for v in epoch.validators],
    }


def encode_reward_schedule(schedule: RewardSchedule) -> Dict[str, Any]:
    """Convert a reward schedule to its write shape."""
    return {
        "total_reward": encode_big(schedule.total_reward),
        "reward_first_year": encode_big(schedule.reward_first_year),
        "epoch_no_per_year": encode_uint64(schedule.epochs_per_year),
        "total_year": encode_uint64(schedule.total_years),
    }


def to_write_shape(doc: GenesisDocument) -> Dict[str, Any]:
    """
    Convert a genesis document to its write shape.

    Args:
        doc: Genesis document

    Returns:
        JSON-ready dict in file field order
    """
    return {
        "chain_id": doc.chain_id,
        "consensus": doc.consensus,
        "genesis_time": format_rfc3339(doc.genesis_time, doc.genesis_time_nanos),
        "reward_scheme": encode_reward_schedule(doc.reward_schedule),
        "current_epoch": encode_epoch(doc.current_epoch),
    }


# Write shape -> domain

def _object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"cannot unmarshal {type(value).__name__} into {path} object")
    return value


def _required_object(obj: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    value = obj.get(key)
    if value is None:
        raise MissingFieldError(key, path)
    return _object(value, f"{path}/{key}")


def _quantity(obj: Dict[str, Any], key: str, path: str, decoder: Callable[[Any], Any]) -> Any:
    """Decode one hex field, naming it in the error."""
    try:
        return decoder(obj.get(key))
    except DecodeError as exc:
        raise DecodeError(f"invalid field '{key}' for {path}: {exc}") from exc


def _string(obj: Dict[str, Any], key: str, path: str, default: Optional[str] = None) -> Optional[str]:
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise DecodeError(f"cannot unmarshal {type(value).__name__} into string field '{key}' for {path}")
    return value


def _native_int(obj: Dict[str, Any], key: str, path: str, default: int = 0) -> int:
    """Read a plain JSON integer that must fit in int64."""
    value = obj.get(key)
    if value is None:
        return default
    if not isinstance(value, int) or isinstance(value, bool):
        raise DecodeError(f"cannot unmarshal {type(value).__name__} into integer field '{key}' for {path}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise DecodeError(f"number {value} overflows int64 field '{key}' for {path}")
    return value


def _build(model: Type[BaseModel], path: str, **fields: Any) -> Any:
    """Construct a model, reporting validation failures as FormatError."""
    try:
        return model(**fields)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise FormatError(
            f"invalid field '{field}' for {path}: {error['msg']}",
            field=field,
            path=path
        ) from exc


def decode_validator(raw: Any, path: str = VALIDATORS_PATH) -> ValidatorEntry:
    """
    Decode one validator entry.

    Raises:
        DecodeError: On wrong JSON types or invalid hex
        FormatError: On a bad address or a public key that is not 128 bytes
        MissingFieldError: If address or amount is missing
    """
    obj = _object(raw, path)
    address = _string(obj, "address", path)
    pub_key = _string(obj, "pub_key", path, default="")
    amount = _quantity(obj, "amount", path, decode_big)
    name = _string(obj, "name", path, default="")
    remaining_epoch = _quantity(obj, "epoch", path, decode_uint64)

    if address is None:
        raise MissingFieldError("address", path)
    try:
        account = Address.from_string(address)
    except FormatError as exc:
        raise FormatError(f"wrong format of field 'address' for {path}: {exc}",
                          field="address", path=path) from exc

    key_bytes = b"" if pub_key == "" else _quantity(obj, "pub_key", path, decode_bytes)
    if len(key_bytes) != BLS_PUBKEY_LENGTH:
        raise FormatError(f"wrong format of required field 'pub_key' for {path}",
                          field="pub_key", path=path)

    if amount is None:
        raise MissingFieldError("amount", path)

    return _build(
        ValidatorEntry, path,
        account=account,
        public_key=BLSPubKey(key_bytes),
        voting_power=amount,
        name=name,
        remaining_epoch=remaining_epoch,
    )


def decode_epoch(raw: Any, path: str = EPOCH_PATH) -> EpochRecord:
    """
    Decode the current epoch.

    An empty ``validators`` list is accepted; an absent or null one is
    rejected with MissingFieldError.
    """
    obj = _object(raw, path)
    number = _quantity(obj, "number", path, decode_uint64)
    reward_per_block = _quantity(obj, "reward_per_block", path, decode_big)
    start_block = _quantity(obj, "start_block", path, decode_uint64)
    end_block = _quantity(obj, "end_block", path, decode_uint64)
    status = _native_int(obj, "status", path)

    raw_validators = obj.get("validators")
    if raw_validators is None:
        raise MissingFieldError("validators", path)
    if not isinstance(raw_validators, list):
        raise DecodeError(f"cannot unmarshal {type(raw_validators).__name__} into {path}/validators array")
    validators: List[ValidatorEntry] = [
        decode_validator(entry, f"{path}/validators[{i}]")
        for i, entry in enumerate(raw_validators)
    ]

    if reward_per_block is None:
        logger.warning(f"Field 'reward_per_block' for {path} is missing, defaulting to 0")
        reward_per_block = 0

    return _build(
        EpochRecord, path,
        number=number,
        reward_per_block=reward_per_block,
        start_block=start_block,
        end_block=end_block,
        status=status,
        validators=validators,
    )


def decode_reward_schedule(raw: Any, path: str = REWARD_SCHEME_PATH) -> RewardSchedule:
    """
    Decode the reward scheme.

    ``total_reward`` and ``reward_first_year`` are required; the yearly
    counters default to zero.
    """
    obj = _object(raw, path)
    total_reward = _quantity(obj, "total_reward", path, decode_big)
    reward_first_year = _quantity(obj, "reward_first_year", path, decode_big)
    epochs_per_year = _quantity(obj, "epoch_no_per_year", path, decode_uint64)
    total_years = _quantity(obj, "total_year", path, decode_uint64)

    if total_reward is None:
        raise MissingFieldError("total_reward", path)
    if reward_first_year is None:
        raise MissingFieldError("reward_first_year", path)

    return _build(
        RewardSchedule, path,
        total_reward=total_reward,
        reward_first_year=reward_first_year,
        epochs_per_year=epochs_per_year,
        total_years=total_years,
    )


def from_write_shape(shape: Any) -> GenesisDocument:
    """
    Convert a write shape (parsed JSON) to a genesis document.

    Validation is all-or-nothing: either a complete document is
    returned or an error is raised.

    Raises:
        DecodeError: On wrong JSON types or invalid hex
        MissingFieldError: If a required field is absent or null
        FormatError: If a field has invalid content
    """
    obj = _object(shape, GENESIS_PATH)

    chain_id = _string(obj, "chain_id", GENESIS_PATH)
    if chain_id is None:
        raise MissingFieldError("chain_id", GENESIS_PATH)
    consensus = _string(obj, "consensus", GENESIS_PATH, default="")
    genesis_text = _string(obj, "genesis_time", GENESIS_PATH)
    if genesis_text is None:
        raise MissingFieldError("genesis_time", GENESIS_PATH)
    try:
        genesis_time, genesis_time_nanos = parse_rfc3339(genesis_text)
    except FormatError as exc:
        raise FormatError(f"wrong format of field 'genesis_time' for {GENESIS_PATH}: {exc}",
                          field="genesis_time", path=GENESIS_PATH) from exc

    reward_schedule = decode_reward_schedule(
        _required_object(obj, "reward_scheme", GENESIS_PATH)
    )
    current_epoch = decode_epoch(
        _required_object(obj, "current_epoch", GENESIS_PATH)
    )

    return _build(
        GenesisDocument, GENESIS_PATH,
        chain_id=chain_id,
        consensus=consensus,
        genesis_time=genesis_time,
        genesis_time_nanos=genesis_time_nanos,
        reward_schedule=reward_schedule,
        current_epoch=current_epoch,
    )


def encode(doc: GenesisDocument) -> bytes:
    """Serialize a document to tab-indented UTF-8 JSON."""
    return json.dumps(to_write_shape(doc), indent='\t', ensure_ascii=False).encode('utf-8')


def decode(data: Union[bytes, str]) -> GenesisDocument:
    """
    Parse and validate a genesis document from JSON text.

    Raises:
        DecodeError: If the text is not valid JSON
        GenesisError: Any other validation failure (see from_write_shape)
    """
    try:
        shape = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid genesis JSON: {exc}") from exc
    return from_write_shape(shape)


def load_from_bytes(json_bytes: Union[bytes, str]) -> GenesisDocument:
    """Load a genesis document from an in-memory JSON buffer."""
    doc = decode(json_bytes)
    logger.debug(
        f"Decoded genesis document for chain {doc.chain_id} "
        f"with {len(doc.validators)} validator(s)"
    )
    return doc


def load_from_file(path: str) -> GenesisDocument:
    """
    Load a genesis document from a file.

    OSError from reading the file propagates unchanged.
    """
    with open(path, 'rb') as f:
        data = f.read()
    logger.debug(f"Read {len(data)} bytes from {path}")
    return load_from_bytes(data)


def save_to_file(doc: GenesisDocument, path: str) -> None:
    """
    Write a genesis document as tab-indented JSON.

    OSError from writing the file propagates unchanged.
    """
    data = encode(doc)
    with open(path, 'wb') as f:
        f.write(data)
    logger.info(f"Saved genesis document for chain {doc.chain_id} to {path}")
