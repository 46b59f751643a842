"""Typed event records produced by the event mappers."""

from typing import Any

from pydantic import BaseModel


class LogEvent(BaseModel):
    """Common metadata every decoded event carries."""

    event: str  # Registered event name, e.g. "Transfer", "Deposit#V2"
    address: str  # Emitting contract
    block_hash: str
    block_number: int
    tx_hash: str
    log_index: int = 0


class TransferEvent(LogEvent):
    from_address: str
    to_address: str
    value: int  # Smallest unit


class ApprovalEvent(LogEvent):
    owner: str
    spender: str
    value: int


class VaultEvent(LogEvent):
    """Deposit/Withdraw on a vault. V2 vaults also index the share amount."""

    account: str
    amount: int
    shares: int | None = None


class StakeEvent(LogEvent):
    """Reward pool activity: Staked, Withdrawn, RewardPaid, RewardDenied."""

    account: str
    amount: int
    # Staked#V2 trailing values, positional
    extra: list[int] = []


class SwapEvent(LogEvent):
    sender: str
    to: str
    amount0_in: int
    amount1_in: int
    amount0_out: int
    amount1_out: int

    def amount_for(self, token_index: int) -> tuple[int, bool]:
        """(amount, is_buy) from the point of view of token at `token_index` in the pair."""
        if token_index == 0:
            if self.amount0_out > 0:
                return self.amount0_out, True
            return self.amount0_in, False
        if self.amount1_out > 0:
            return self.amount1_out, True
        return self.amount1_in, False


class LiquidityEvent(LogEvent):
    """Mint (add liquidity) or Burn (remove liquidity) on a pair."""

    sender: str
    amount0: int
    amount1: int
    to: str | None = None  # Burn only

    @property
    def is_mint(self) -> bool:
        return self.event == "Mint"


class SyncEvent(LogEvent):
    reserve0: int
    reserve1: int


class GovernanceEvent(LogEvent):
    """Admin/governance activity. Arguments are kept by position."""

    args: list[Any] = []
