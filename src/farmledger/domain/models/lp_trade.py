"""LpTrade record: one swap or liquidity change of the tracked token on a pair."""

from decimal import Decimal

from pydantic import BaseModel

from farmledger.domain.enums import LpTradeType


class LpTrade(BaseModel):
    id: str  # <tx_hash>_<log_index>, same key shape as transfers
    pair: str
    block: int
    block_date: int = 0  # Unix seconds
    log_index: int = 0
    tx_hash: str
    owner: str | None = None  # Transaction sender, from the receipt
    type: LpTradeType
    amount: Decimal  # Tracked token units
    other_coin: str
    other_amount: Decimal  # Other coin units
    price: Decimal | None = None  # USD per tracked token, derived from the other coin
    method_name: str | None = None
    last_gas: Decimal | None = None  # Gwei at processing time

    def print(self) -> str:
        return f"{self.tx_hash} {self.type.value} {self.amount} for {self.other_amount} {self.other_coin} price={self.price}"
