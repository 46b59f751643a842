"""AbiDecoder: decodes call-data and event logs against the signature registry."""

import logging
from enum import Enum
from typing import Any, Literal

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from pydantic import BaseModel

from farmledger.abi.registry import SignatureRegistry
from farmledger.abi.types import Param
from farmledger.domain.models.log import RawLog
from farmledger.exceptions import MalformedInput, UnknownMethod

logger = logging.getLogger(__name__)

# "0x" + 8 hex chars of method id
MIN_CALL_DATA_LENGTH = 10


class DecodeState(Enum):
    """Decode outcome that is neither a value sequence nor an error."""

    INDETERMINATE = "INDETERMINATE"


# The log had no payload yet: try again later, it is not malformed.
INDETERMINATE = DecodeState.INDETERMINATE

DecodedValues = tuple[Any, ...]


class DecodedCall(BaseModel):
    """Result of decoding transaction input."""

    method_id: str
    name: str
    values: list[Any]


def _strip_hex(value: str) -> bytes:
    raw = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(raw)
    except ValueError as e:
        raise MalformedInput(f"Invalid hex payload: {value[:20]}...") from e


def _normalize(value: Any) -> Any:
    """Lowercase addresses and turn nested sequences into tuples."""
    if isinstance(value, str) and value.startswith("0x") and len(value) == 42:
        return value.lower()
    if isinstance(value, (list, tuple)):
        return tuple(_normalize(v) for v in value)
    return value


def _decode(parameters: list[Param], payload: bytes) -> DecodedValues:
    if not parameters:
        return ()
    types = [p.canonical for p in parameters]
    try:
        values = decode(types, payload)
    except (DecodingError, OverflowError) as e:
        raise MalformedInput(f"Can't decode {types}: {e}") from e
    return tuple(_normalize(v) for v in values)


class AbiDecoder:
    """Stateless decoder. All method knowledge comes from the injected registry."""

    def __init__(self, registry: SignatureRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> SignatureRegistry:
        return self._registry

    def decode_call_data(self, input_data: str | None) -> DecodedCall:
        """Decode transaction input: 4-byte method id followed by ABI-encoded arguments."""
        if input_data is None or len(input_data) < MIN_CALL_DATA_LENGTH:
            raise MalformedInput(f"Call data too short: {input_data!r}")

        method_id = input_data[:MIN_CALL_DATA_LENGTH].lower()
        entry = self._registry.entry(method_id)
        if entry is None:
            raise UnknownMethod(method_id)

        values = _decode(list(entry.parameters), _strip_hex(input_data[MIN_CALL_DATA_LENGTH:]))
        return DecodedCall(method_id=method_id, name=entry.name, values=list(values))

    def decode_log(
        self, log: RawLog, parameters: list[Param] | tuple[Param, ...]
    ) -> DecodedValues | Literal[DecodeState.INDETERMINATE]:
        """Decode a log: indexed params from topics[1:], then data params, in declaration order."""
        if log.data is None:
            logger.debug("Log %s_%d has no payload yet", log.transaction_hash, log.log_index)
            return INDETERMINATE

        indexed_params = [p for p in parameters if p.indexed]
        data_params = [p for p in parameters if not p.indexed]

        if len(log.topics) < len(indexed_params) + 1:
            raise MalformedInput(
                f"Log {log.transaction_hash} has {len(log.topics)} topics, "
                f"expected {len(indexed_params) + 1}"
            )

        indexed_values: list[Any] = []
        for i, p in enumerate(indexed_params):
            topic = _strip_hex(log.topics[i + 1])
            if p.type.is_dynamic or p.type.is_array:
                # Only the keccak hash of the value is stored in the topic
                indexed_values.append(topic)
            else:
                indexed_values.extend(_decode([p], topic))

        data_values = _decode(data_params, _strip_hex(log.data))
        return tuple(indexed_values) + data_values

    def encode_call(self, name: str, args: list[Any]) -> str:
        """Build call-data for a registered method."""
        entry = self._registry.entry_by_name(name)
        if entry is None:
            raise UnknownMethod(name)
        types = [p.canonical for p in entry.parameters]
        try:
            payload = encode(types, args)
        except (EncodingError, TypeError) as e:
            raise MalformedInput(f"Can't encode {name} with {args}: {e}") from e
        return entry.method_id + payload.hex()
