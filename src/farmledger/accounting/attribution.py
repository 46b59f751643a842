"""TransferService: dedup-aware save with balance checks and profit attribution."""

import logging
from decimal import Decimal

from farmledger.accounting.balance import BALANCE_TOLERANCE, ZERO_ADDRESS, balance_matches
from farmledger.accounting.profit import calculate_ps_profit, calculate_reward_profit, calculate_sell_profits
from farmledger.db.repos.transfer_repo import TransferRepo
from farmledger.domain.enums import TransferType
from farmledger.domain.models.transfer import Transfer

logger = logging.getLogger(__name__)

PS_HISTORY_TYPES = (TransferType.PS_STAKE, TransferType.PS_EXIT)
TRADE_HISTORY_TYPES = (TransferType.LP_BUY, TransferType.COMMON, TransferType.LP_SELL)


class TransferService:
    """Profit attribution engine bound to one session's TransferRepo.

    Addresses in `not_checkable` (zero address, pool contracts) are skipped by
    the balance check: their balances are not meaningful as a running sum.
    """

    def __init__(
        self,
        repo: TransferRepo,
        not_checkable: set[str] | frozenset[str] = frozenset({ZERO_ADDRESS}),
        tolerance: Decimal = BALANCE_TOLERANCE,
    ) -> None:
        self._repo = repo
        self._not_checkable = {a.lower() for a in not_checkable} | {ZERO_ADDRESS}
        self._tolerance = tolerance

    async def save(self, transfer: Transfer) -> bool:
        """Persist a new transfer with profit filled in. False if the id was already stored."""
        if not await self._repo.save(transfer):
            return False
        await self.check_balances(transfer)
        await self.fill_profit(transfer)
        await self._repo.update(transfer)
        return True

    async def check_balances(self, transfer: Transfer) -> bool:
        owner_ok = await self.check_balance(transfer.owner, transfer.balance_owner, transfer.block_date)
        recipient_ok = await self.check_balance(transfer.recipient, transfer.balance_recipient, transfer.block_date)
        return owner_ok and recipient_ok

    async def check_balance(self, holder: str, expected: Decimal, block_date: int) -> bool:
        """Compare a reported balance against the ledger sum. Mismatch is logged, never raised."""
        if holder.lower() in self._not_checkable:
            return True
        balance = await self._repo.get_running_balance(holder, block_date)
        if not balance_matches(expected, balance, self._tolerance):
            logger.warning("Wrong balance for %s dbBalance: %s != %s", holder, balance, expected)
            return False
        return True

    async def fill_balances(self, transfer: Transfer) -> None:
        """Recalculation only: overwrite reported balances with the ledger's."""
        transfer.balance_owner = await self._repo.get_running_balance(transfer.owner, transfer.block_date)
        transfer.balance_recipient = await self._repo.get_running_balance(transfer.recipient, transfer.block_date)

    async def fill_profit(self, transfer: Transfer) -> None:
        if transfer.type == TransferType.PS_EXIT:
            await self._fill_profit_for_ps(transfer)
        elif transfer.type == TransferType.REWARD:
            transfer.profit, transfer.profit_usd = calculate_reward_profit(transfer)
        elif transfer.type == TransferType.LP_SELL:
            await self._fill_profit_for_trade(transfer)

    async def _fill_profit_for_ps(self, transfer: Transfer) -> None:
        history = await self._history(transfer.recipient, PS_HISTORY_TYPES, transfer)
        profit = calculate_ps_profit(history)
        transfer.profit = profit
        transfer.profit_usd = profit * transfer.price if transfer.price is not None else None

    async def _fill_profit_for_trade(self, transfer: Transfer) -> None:
        history = await self._history(transfer.owner, TRADE_HISTORY_TYPES, transfer)
        result = calculate_sell_profits(history, transfer.owner)
        sale = result.profit_for(transfer.id)
        if sale is None:
            return
        transfer.profit_usd = sale.profit_usd
        if transfer.price:
            transfer.profit = sale.profit_usd / transfer.price
        else:
            transfer.profit = Decimal(0)

    async def _history(self, address: str, types: tuple[TransferType, ...], current: Transfer) -> list[Transfer]:
        history = await self._repo.fetch_history_for_address(
            address, types, current.block_date, before_log_index=current.log_index,
        )
        history.append(current)
        return history
