"""SignatureRegistry: (name, parameter types) → method id, plus topic hash → method id."""

import logging

from eth_utils import keccak
from pydantic import BaseModel, ConfigDict

from farmledger.abi.types import Param

logger = logging.getLogger(__name__)

VARIANT_SEPARATOR = "#"


def method_signature(name: str, parameters: list[Param] | tuple[Param, ...]) -> str:
    """Canonical signature string, e.g. "Transfer(address,address,uint256)"."""
    method_name = name.split(VARIANT_SEPARATOR)[0]
    return f"{method_name}({','.join(p.canonical for p in parameters)})"


def signature_to_full_hex(signature: str) -> str:
    """0x-prefixed keccak256 of the signature (what topic0 of a log carries)."""
    return "0x" + keccak(text=signature).hex()


def signature_to_short_hex(signature: str) -> str:
    """0x + first 4 bytes of the keccak256 (call-data method id)."""
    return signature_to_full_hex(signature)[:10]


class SignatureEntry(BaseModel):
    """A registered method or event. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str  # As registered, may carry a "#Variant" suffix
    parameters: tuple[Param, ...]
    signature: str
    method_id: str
    full_hash: str

    @property
    def method_name(self) -> str:
        return self.name.split(VARIANT_SEPARATOR)[0]

    @property
    def indexed_parameters(self) -> list[Param]:
        return [p for p in self.parameters if p.indexed]

    @property
    def data_parameters(self) -> list[Param]:
        return [p for p in self.parameters if not p.indexed]


class SignatureRegistry:
    """Registry of known method/event signatures.

    Built once at startup and then only read; lookups never mutate the tables,
    so one instance can be shared by every pipeline.
    """

    def __init__(self) -> None:
        self._by_method_id: dict[str, SignatureEntry] = {}
        self._method_id_by_full_hash: dict[str, str] = {}
        self._method_id_by_name: dict[str, str] = {}

    def register(self, name: str, parameters: list[Param] | tuple[Param, ...]) -> SignatureEntry:
        """Add or overwrite an entry. Raises UnsupportedType for types outside the closed set."""
        signature = method_signature(name, parameters)
        full_hash = signature_to_full_hex(signature)
        entry = SignatureEntry(
            name=name,
            parameters=tuple(parameters),
            signature=signature,
            method_id=full_hash[:10],
            full_hash=full_hash,
        )
        self._by_method_id[entry.method_id] = entry
        self._method_id_by_full_hash[full_hash] = entry.method_id
        self._method_id_by_name[name] = entry.method_id
        return entry

    def register_all(self, signatures: dict[str, list[Param]]) -> None:
        for name, parameters in signatures.items():
            self.register(name, parameters)

    def resolve_method_id(self, topic0: str | None) -> str | None:
        """Full 32-byte topic hash → short method id, None if not registered."""
        if not topic0:
            return None
        return self._method_id_by_full_hash.get(topic0.lower())

    def entry(self, method_id: str) -> SignatureEntry | None:
        return self._by_method_id.get(method_id.lower())

    def parameters(self, method_id: str) -> tuple[Param, ...] | None:
        entry = self.entry(method_id)
        return entry.parameters if entry is not None else None

    def name(self, method_id: str) -> str | None:
        entry = self.entry(method_id)
        return entry.name if entry is not None else None

    def entry_by_name(self, name: str) -> SignatureEntry | None:
        method_id = self._method_id_by_name.get(name)
        return self._by_method_id.get(method_id) if method_id is not None else None

    def method_id(self, name: str) -> str | None:
        return self._method_id_by_name.get(name)

    def full_hash(self, name: str) -> str | None:
        entry = self.entry_by_name(name)
        return entry.full_hash if entry is not None else None

    def names(self) -> list[str]:
        return list(self._method_id_by_name)

    def __contains__(self, method_id: object) -> bool:
        return isinstance(method_id, str) and method_id.lower() in self._by_method_id

    def __len__(self) -> int:
        return len(self._by_method_id)


def build_default_registry() -> SignatureRegistry:
    """Create a SignatureRegistry with the whole protocol surface registered.

    Any malformed entry in the static table raises here, at process start.
    """
    from farmledger.abi.signatures import ALL_SIGNATURES

    registry = SignatureRegistry()
    for table in ALL_SIGNATURES:
        registry.register_all(table)
    logger.info("Signature registry built with %d entries", len(registry))
    return registry
