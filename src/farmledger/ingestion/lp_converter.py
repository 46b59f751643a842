"""LpTradeConverter: Swap / Mint / Burn events of the tracked token's pairs → LpTrade records."""

from decimal import Decimal

from farmledger.domain.enums import LpTradeType
from farmledger.domain.models.events import LiquidityEvent, LogEvent, SwapEvent
from farmledger.domain.models.lp_trade import LpTrade
from farmledger.domain.models.transfer import transfer_id


class LpTradeConverter:
    """Reads pair events from the tracked token's side.

    A Uniswap V2 pair orders its two tokens by address, so the tracked token
    is token0 exactly when its address is the lower of the two.
    """

    def __init__(self, token: str, pair_coins: dict[str, tuple[str, int]], decimals: int = 18) -> None:
        self.token = token.lower()
        self._divisor = Decimal(10) ** decimals
        self._pairs = {
            pair.lower(): (coin.lower(), Decimal(10) ** coin_decimals)
            for pair, (coin, coin_decimals) in pair_coins.items()
        }

    @property
    def pairs(self) -> list[str]:
        return sorted(self._pairs)

    def token_index(self, other_coin: str) -> int:
        return 0 if self.token < other_coin.lower() else 1

    def convert(self, event: LogEvent) -> LpTrade | None:
        """None for events of unknown pairs, other event kinds, or a zero tracked amount."""
        pair = event.address.lower()
        if pair not in self._pairs:
            return None
        other_coin, other_divisor = self._pairs[pair]
        index = self.token_index(other_coin)

        if isinstance(event, SwapEvent):
            amount, is_buy = event.amount_for(index)
            other_amount, _ = event.amount_for(1 - index)
            trade_type = LpTradeType.BUY if is_buy else LpTradeType.SELL
        elif isinstance(event, LiquidityEvent):
            amount, other_amount = (event.amount0, event.amount1) if index == 0 else (event.amount1, event.amount0)
            trade_type = LpTradeType.ADD if event.is_mint else LpTradeType.REMOVE
        else:
            return None

        if amount == 0:
            return None
        return LpTrade(
            id=transfer_id(event.tx_hash, event.log_index),
            pair=pair,
            block=event.block_number,
            log_index=event.log_index,
            tx_hash=event.tx_hash.lower(),
            type=trade_type,
            amount=Decimal(amount) / self._divisor,
            other_coin=other_coin,
            other_amount=Decimal(other_amount) / other_divisor,
        )
