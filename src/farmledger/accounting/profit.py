"""Realized profit over an address's transfer history: pure functions, no DB dependency.

Every function expects transfers sorted by (block_date, block, log_index) with
the record being attributed as the last element.
"""

import logging
from decimal import Decimal

from pydantic import BaseModel

from farmledger.domain.enums import TransferType
from farmledger.domain.models.transfer import Transfer
from farmledger.exceptions import InconsistentOwner

logger = logging.getLogger(__name__)

# Below this open position a sale is treated as selling tokens that were never bought
MIN_OPEN_POSITION = Decimal("0.01")


class SaleProfit(BaseModel):
    """Realized result of one LP_SELL against the running cost basis."""

    transfer_id: str
    quantity: Decimal  # Quantity covered by the open position
    cost_basis_usd: Decimal
    proceeds_usd: Decimal
    profit_usd: Decimal


class CostBasisResult(BaseModel):
    sales: list[SaleProfit]
    bought: Decimal  # Remaining open position
    bought_usd: Decimal  # Remaining cost basis

    def profit_for(self, transfer_id: str) -> SaleProfit | None:
        for sale in self.sales:
            if sale.transfer_id == transfer_id:
                return sale
        return None


def calculate_ps_profit(transfers: list[Transfer]) -> Decimal:
    """Stake/exit cycle profit at the last position of the history.

    Exits are accumulated against stakes; once exits exceed stakes the excess is
    realized and both sums restart from zero. Profit larger than the whole
    cumulative stake inside one cycle is not detected.
    """
    stacked = Decimal(0)
    exits = Decimal(0)
    last_profit = Decimal(0)
    for transfer in transfers:
        last_profit = Decimal(0)
        if transfer.type == TransferType.PS_EXIT:
            exits += transfer.value
        elif transfer.type == TransferType.PS_STAKE:
            stacked += transfer.value
        else:
            continue

        if exits > stacked:
            last_profit = exits - stacked
            stacked = Decimal(0)
            exits = Decimal(0)
    return last_profit


def calculate_sell_profits(transfers: list[Transfer], owner: str) -> CostBasisResult:
    """Average cost-basis walk over LP_BUY / COMMON / LP_SELL transfers of `owner`.

    COMMON transfers move the position up when `owner` receives and down when
    it sends; any other relation raises InconsistentOwner.
    """
    owner = owner.lower()
    bought = Decimal(0)
    bought_usd = Decimal(0)
    sales: list[SaleProfit] = []

    for i, transfer in enumerate(transfers):
        price = transfer.price or Decimal(0)

        if transfer.type == TransferType.LP_BUY:
            bought += transfer.value
            bought_usd += transfer.value * price

        elif transfer.type == TransferType.COMMON:
            if transfer.recipient.lower() == owner:
                bought += transfer.value
                bought_usd += transfer.value * price
            elif transfer.owner.lower() == owner:
                bought -= transfer.value
                bought_usd -= transfer.value * price
            else:
                raise InconsistentOwner(owner, transfer.id)

        elif transfer.type == TransferType.LP_SELL:
            if i == 0:
                logger.error("Wrong sequence: sell %s is the first transfer of %s", transfer.id, owner)
                continue

            if abs(bought) < MIN_OPEN_POSITION:
                # Tokens received outside buy accounting
                sales.append(SaleProfit(
                    transfer_id=transfer.id,
                    quantity=Decimal(0),
                    cost_basis_usd=Decimal(0),
                    proceeds_usd=Decimal(0),
                    profit_usd=Decimal(0),
                ))
                continue

            sell = min(transfer.value, bought)
            rate = sell / bought
            covered_usd = bought_usd * rate
            proceeds_usd = sell * price
            bought -= sell
            bought_usd -= covered_usd
            sales.append(SaleProfit(
                transfer_id=transfer.id,
                quantity=sell,
                cost_basis_usd=covered_usd,
                proceeds_usd=proceeds_usd,
                profit_usd=proceeds_usd - covered_usd,
            ))

    return CostBasisResult(sales=sales, bought=bought, bought_usd=bought_usd)


def calculate_reward_profit(transfer: Transfer) -> tuple[Decimal, Decimal | None]:
    """(profit, profit_usd) of a REWARD: the transferred value itself."""
    profit = transfer.value
    if transfer.price is None:
        return profit, None
    return profit, profit * transfer.price
