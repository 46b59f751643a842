"""TransferConverter: ERC-20 Transfer events of the tracked token → Transfer records."""

from decimal import Decimal
from typing import Iterable

from farmledger.domain.enums import TransferType
from farmledger.domain.models.events import LogEvent, TransferEvent
from farmledger.domain.models.transfer import Transfer, transfer_id


def _lower_set(addresses: Iterable[str]) -> frozenset[str]:
    return frozenset(a.lower() for a in addresses)


class TransferConverter:
    """Classifies a transfer by the protocol contract on either side of it.

    Rules are applied in order, first match wins.
    """

    def __init__(
        self,
        token: str,
        decimals: int = 18,
        ps_pools: Iterable[str] = (),
        reward_pools: Iterable[str] = (),
        lp_pairs: Iterable[str] = (),
    ) -> None:
        self.token = token.lower()
        self.decimals = decimals
        self._divisor = Decimal(10) ** decimals
        self._ps_pools = _lower_set(ps_pools)
        self._reward_pools = _lower_set(reward_pools)
        self._lp_pairs = _lower_set(lp_pairs)

    def to_units(self, raw: int) -> Decimal:
        return Decimal(raw) / self._divisor

    def classify(self, owner: str, recipient: str) -> TransferType:
        if recipient in self._ps_pools:
            return TransferType.PS_STAKE
        if owner in self._ps_pools:
            return TransferType.PS_EXIT
        if owner in self._reward_pools:
            return TransferType.REWARD
        if owner in self._lp_pairs:
            return TransferType.LP_BUY
        if recipient in self._lp_pairs:
            return TransferType.LP_SELL
        return TransferType.COMMON

    def convert(self, event: LogEvent) -> Transfer | None:
        """None for anything but a Transfer emitted by the tracked token."""
        if not isinstance(event, TransferEvent) or event.address.lower() != self.token:
            return None
        owner = event.from_address.lower()
        recipient = event.to_address.lower()
        return Transfer(
            id=transfer_id(event.tx_hash, event.log_index),
            token=self.token,
            block=event.block_number,
            log_index=event.log_index,
            tx_hash=event.tx_hash.lower(),
            owner=owner,
            recipient=recipient,
            value=self.to_units(event.value),
            type=self.classify(owner, recipient),
        )
