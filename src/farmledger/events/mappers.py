"""Concrete event mappers, one per event kind."""

from typing import Any

from farmledger.domain.models.events import (
    ApprovalEvent,
    GovernanceEvent,
    LiquidityEvent,
    LogEvent,
    StakeEvent,
    SwapEvent,
    SyncEvent,
    TransferEvent,
    VaultEvent,
)
from farmledger.domain.models.log import RawLog
from farmledger.events.base import BaseEventMapper


class TransferMapper(BaseEventMapper):
    MAPPER_NAME = "TransferMapper"
    EVENT_NAMES = frozenset({"Transfer", "Approval"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        first, second, value = values
        if event_name == "Approval":
            return ApprovalEvent(**self._meta(event_name, log), owner=first, spender=second, value=value)
        return TransferEvent(**self._meta(event_name, log), from_address=first, to_address=second, value=value)


class VaultMapper(BaseEventMapper):
    """V1 vaults: (account, amount). V2 vaults index the amount and add shares: (account, amount, shares)."""

    MAPPER_NAME = "VaultMapper"
    EVENT_NAMES = frozenset({"Deposit", "Withdraw", "Deposit#V2", "Withdraw#V2"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        shares = values[2] if len(values) > 2 else None
        return VaultEvent(**self._meta(event_name, log), account=values[0], amount=values[1], shares=shares)


class StakeMapper(BaseEventMapper):
    MAPPER_NAME = "StakeMapper"
    EVENT_NAMES = frozenset({"Staked", "Staked#V2", "Withdrawn", "RewardPaid", "RewardDenied"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        return StakeEvent(
            **self._meta(event_name, log),
            account=values[0],
            amount=values[1],
            extra=list(values[2:]),
        )


class SwapMapper(BaseEventMapper):
    """Uniswap V2 Swap: sender and to are indexed, so they come first."""

    MAPPER_NAME = "SwapMapper"
    EVENT_NAMES = frozenset({"Swap"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        sender, to, amount0_in, amount1_in, amount0_out, amount1_out = values
        return SwapEvent(
            **self._meta(event_name, log),
            sender=sender,
            to=to,
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
        )


class LiquidityMapper(BaseEventMapper):
    MAPPER_NAME = "LiquidityMapper"
    EVENT_NAMES = frozenset({"Mint", "Burn"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        if event_name == "Burn":
            sender, to, amount0, amount1 = values
            return LiquidityEvent(**self._meta(event_name, log), sender=sender, to=to, amount0=amount0, amount1=amount1)
        sender, amount0, amount1 = values
        return LiquidityEvent(**self._meta(event_name, log), sender=sender, amount0=amount0, amount1=amount1)


class SyncMapper(BaseEventMapper):
    MAPPER_NAME = "SyncMapper"
    EVENT_NAMES = frozenset({"Sync"})

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        return SyncEvent(**self._meta(event_name, log), reserve0=values[0], reserve1=values[1])


class GovernanceMapper(BaseEventMapper):
    """Admin and bookkeeping events. Arguments are kept positionally."""

    MAPPER_NAME = "GovernanceMapper"
    EVENT_NAMES = frozenset({
        "OwnershipTransferred",
        "StrategyAnnounced",
        "StrategyChanged",
        "SharePriceChangeLog",
        "ProfitLogInReward",
        "RewardAdded",
        "Rewarded",
        "Migrated",
        "Invest",
        "SmartContractRecorded",
        "UpdateLiquidityLimit",
    })

    def map(self, event_name: str, values: tuple[Any, ...], log: RawLog) -> LogEvent:
        return GovernanceEvent(**self._meta(event_name, log), args=list(values))


DEFAULT_MAPPERS: tuple[BaseEventMapper, ...] = (
    TransferMapper(),
    VaultMapper(),
    StakeMapper(),
    SwapMapper(),
    LiquidityMapper(),
    SyncMapper(),
    GovernanceMapper(),
)
