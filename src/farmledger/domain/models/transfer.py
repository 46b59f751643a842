"""Transfer record: the ledger entity profit attribution runs over."""

from decimal import Decimal

from pydantic import BaseModel

from farmledger.domain.enums import TransferType


def transfer_id(tx_hash: str, log_index: int) -> str:
    """Deterministic dedup key for a transfer log."""
    return f"{tx_hash.lower()}_{log_index}"


class Transfer(BaseModel):
    """A token transfer between two addresses, enriched with balances, price and profit."""

    id: str
    token: str
    block: int
    block_date: int = 0  # Unix seconds
    log_index: int = 0
    tx_hash: str
    owner: str
    recipient: str
    value: Decimal  # Token units (raw value / 10**decimals)
    balance_owner: Decimal = Decimal(0)
    balance_recipient: Decimal = Decimal(0)
    type: TransferType = TransferType.COMMON
    method_name: str | None = None
    tx_from: str | None = None  # Transaction sender, from the receipt
    last_gas: Decimal | None = None  # Gwei at processing time
    price: Decimal | None = None  # USD per token at block_date
    profit: Decimal | None = None
    profit_usd: Decimal | None = None

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return self.block_date, self.block, self.log_index

    def print(self) -> str:
        return (
            f"{self.tx_hash} {self.type.value} {self.value} "
            f"{self.owner} -> {self.recipient} price={self.price}"
        )
