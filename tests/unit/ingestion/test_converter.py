from decimal import Decimal

import pytest

from farmledger.domain.enums import TransferType
from farmledger.domain.models.events import SwapEvent, TransferEvent
from farmledger.ingestion.converter import TransferConverter

FARM = "0xa0246c9032bc3a600820415ae600c6388619a14d"
PS = "0x25550cccbd68533fa04bfd3e3ac4d09f9e00fc50"
POOL = "0x99b0d6641a63ce173e6eb063b3d3aed9a35cf9bf"
PAIR = "0x514906fc121c7878424a5c928cad1852cc545892"
USER = "0x1111111111111111111111111111111111111111"
FRIEND = "0x2222222222222222222222222222222222222222"


@pytest.fixture()
def converter():
    return TransferConverter(token=FARM, decimals=18, ps_pools=[PS], reward_pools=[POOL], lp_pairs=[PAIR])


def _event(from_address: str, to_address: str, value: int = 2 * 10**18, address: str = FARM) -> TransferEvent:
    return TransferEvent(
        event="Transfer",
        address=address,
        block_hash="0xblock",
        block_number=11_000_000,
        tx_hash="0xABC",
        log_index=4,
        from_address=from_address,
        to_address=to_address,
        value=value,
    )


class TestClassify:
    @pytest.mark.parametrize("owner, recipient, expected", [
        (USER, PS, TransferType.PS_STAKE),
        (PS, USER, TransferType.PS_EXIT),
        (POOL, USER, TransferType.REWARD),
        (PAIR, USER, TransferType.LP_BUY),
        (USER, PAIR, TransferType.LP_SELL),
        (USER, FRIEND, TransferType.COMMON),
        # Staking is checked before rewards and pairs
        (POOL, PS, TransferType.PS_STAKE),
        (PAIR, PS, TransferType.PS_STAKE),
    ])
    def test_rules(self, converter, owner, recipient, expected):
        assert converter.classify(owner, recipient) == expected


class TestConvert:
    def test_transfer_record(self, converter):
        transfer = converter.convert(_event(PAIR, USER))

        assert transfer.id == "0xabc_4"
        assert transfer.token == FARM
        assert transfer.block == 11_000_000
        assert transfer.value == Decimal(2)
        assert transfer.type == TransferType.LP_BUY
        assert transfer.price is None

    def test_decimals(self):
        converter = TransferConverter(token=FARM, decimals=6)
        assert converter.convert(_event(USER, FRIEND, value=1_500_000)).value == Decimal("1.5")

    def test_other_token_ignored(self, converter):
        assert converter.convert(_event(USER, FRIEND, address=FRIEND)) is None

    def test_other_event_ignored(self, converter):
        swap = SwapEvent(
            event="Swap", address=FARM, block_hash="0x", block_number=1, tx_hash="0x",
            sender=USER, to=USER, amount0_in=0, amount1_in=1, amount0_out=1, amount1_out=0,
        )
        assert converter.convert(swap) is None
