"""Tests for profit attribution: pure functions."""

from decimal import Decimal

import pytest

from farmledger.accounting.profit import calculate_ps_profit, calculate_reward_profit, calculate_sell_profits
from farmledger.domain.enums import TransferType
from farmledger.domain.models.transfer import Transfer
from farmledger.exceptions import InconsistentOwner

USER = "0xuser"
PAIR = "0xpair"
PS = "0xps"
OTHER = "0xother"


def _t(
    transfer_type: TransferType,
    value: str,
    price: str | None = None,
    owner: str = USER,
    recipient: str = OTHER,
    n: int = 0,
) -> Transfer:
    return Transfer(
        id=f"0xtx{n}_{n}",
        token="0xfarm",
        block=100 + n,
        block_date=1_600_000_000 + n,
        log_index=n,
        tx_hash=f"0xtx{n}",
        owner=owner,
        recipient=recipient,
        value=Decimal(value),
        type=transfer_type,
        price=Decimal(price) if price is not None else None,
    )


def _buy(value, price, n):
    return _t(TransferType.LP_BUY, value, price, owner=PAIR, recipient=USER, n=n)


def _sell(value, price, n):
    return _t(TransferType.LP_SELL, value, price, owner=USER, recipient=PAIR, n=n)


class TestPsProfit:
    def test_stake_then_two_exits(self):
        history = [
            _t(TransferType.PS_STAKE, "100", owner=USER, recipient=PS, n=0),
            _t(TransferType.PS_EXIT, "60", owner=PS, recipient=USER, n=1),
            _t(TransferType.PS_EXIT, "50", owner=PS, recipient=USER, n=2),
        ]
        assert calculate_ps_profit(history) == Decimal("10")

    def test_partial_exit_has_no_profit(self):
        history = [
            _t(TransferType.PS_STAKE, "100", owner=USER, recipient=PS, n=0),
            _t(TransferType.PS_EXIT, "60", owner=PS, recipient=USER, n=1),
        ]
        assert calculate_ps_profit(history) == Decimal("0")

    def test_cycle_resets_after_profit(self):
        history = [
            _t(TransferType.PS_STAKE, "100", owner=USER, recipient=PS, n=0),
            _t(TransferType.PS_EXIT, "110", owner=PS, recipient=USER, n=1),
            _t(TransferType.PS_STAKE, "50", owner=USER, recipient=PS, n=2),
            _t(TransferType.PS_EXIT, "55", owner=PS, recipient=USER, n=3),
        ]
        assert calculate_ps_profit(history) == Decimal("5")

    def test_profit_only_at_last_position(self):
        history = [
            _t(TransferType.PS_STAKE, "100", owner=USER, recipient=PS, n=0),
            _t(TransferType.PS_EXIT, "110", owner=PS, recipient=USER, n=1),
            _t(TransferType.PS_STAKE, "10", owner=USER, recipient=PS, n=2),
        ]
        assert calculate_ps_profit(history) == Decimal("0")

    def test_empty(self):
        assert calculate_ps_profit([]) == Decimal("0")


class TestSellProfits:
    def test_single_buy_partial_sell(self):
        sell = _sell("4", "3", 1)
        result = calculate_sell_profits([_buy("10", "2", 0), sell], USER)

        assert result.profit_for(sell.id).profit_usd == Decimal("4")
        assert result.bought == Decimal("6")
        assert result.bought_usd == Decimal("12")

    def test_sale_capped_to_open_position(self):
        sell = _sell("8", "12", 1)
        result = calculate_sell_profits([_buy("5", "10", 0), sell], USER)

        sale = result.profit_for(sell.id)
        assert sale.quantity == Decimal("5")
        assert sale.profit_usd == Decimal("10")
        assert result.bought == Decimal("0")

    def test_no_open_position_is_zero_profit(self):
        sell = _sell("3", "5", 1)
        history = [_t(TransferType.COMMON, "0.001", "1", owner=OTHER, recipient=USER, n=0), sell]
        sale = calculate_sell_profits(history, USER).profit_for(sell.id)
        assert sale.profit_usd == Decimal("0")
        assert sale.quantity == Decimal("0")

    def test_first_sell_skipped(self):
        sell = _sell("3", "5", 0)
        result = calculate_sell_profits([sell], USER)
        assert result.profit_for(sell.id) is None

    def test_common_moves_position(self):
        sell = _sell("5", "4", 3)
        history = [
            _buy("10", "2", 0),
            _t(TransferType.COMMON, "4", "3", owner=OTHER, recipient=USER, n=1),  # +4 @3
            _t(TransferType.COMMON, "4", "2", owner=USER, recipient=OTHER, n=2),  # -4 @2
            sell,
        ]
        result = calculate_sell_profits(history, USER)
        # Position 10 units, basis 20 + 12 - 8 = 24
        sale = result.profit_for(sell.id)
        assert sale.cost_basis_usd == Decimal("12")
        assert sale.profit_usd == Decimal("8")
        assert result.bought == Decimal("5")

    def test_inconsistent_owner(self):
        history = [_buy("10", "2", 0), _t(TransferType.COMMON, "1", "2", owner=OTHER, recipient=PAIR, n=1)]
        with pytest.raises(InconsistentOwner) as exc:
            calculate_sell_profits(history, USER)
        assert exc.value.address == USER

    def test_owner_case_insensitive(self):
        sell = _sell("4", "3", 1)
        result = calculate_sell_profits([_buy("10", "2", 0), sell], USER.upper())
        assert result.profit_for(sell.id) is not None


class TestRewardProfit:
    def test_reward(self):
        profit, profit_usd = calculate_reward_profit(
            _t(TransferType.REWARD, "25", "1.5", owner="0xpool", recipient=USER)
        )
        assert profit == Decimal("25")
        assert profit_usd == Decimal("37.5")

    def test_reward_without_price(self):
        profit, profit_usd = calculate_reward_profit(_t(TransferType.REWARD, "25"))
        assert profit == Decimal("25")
        assert profit_usd is None
