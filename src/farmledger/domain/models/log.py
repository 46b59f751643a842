"""Raw event log as delivered by the chain RPC."""

from typing import Any

from pydantic import BaseModel, ConfigDict


def _hex_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16) if value.startswith("0x") else int(value)
    return int(value or 0)


class RawLog(BaseModel):
    """One contract event log. Never mutated by the core."""

    model_config = ConfigDict(frozen=True)

    address: str
    topics: tuple[str, ...] = ()
    data: str | None = "0x"  # None = node returned the log without a payload
    block_hash: str
    block_number: int
    transaction_hash: str
    log_index: int = 0

    @property
    def topic0(self) -> str | None:
        return self.topics[0].lower() if self.topics else None

    @classmethod
    def from_rpc(cls, raw: dict) -> "RawLog":
        """Build from an eth_getLogs result item (hex-encoded quantities)."""
        return cls(
            address=raw.get("address", "").lower(),
            topics=tuple(t.lower() for t in raw.get("topics") or []),
            data=raw.get("data"),
            block_hash=raw.get("blockHash", ""),
            block_number=_hex_int(raw.get("blockNumber")),
            transaction_hash=raw.get("transactionHash", ""),
            log_index=_hex_int(raw.get("logIndex")),
        )
