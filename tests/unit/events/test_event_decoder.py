"""Tests for EventDecoder: raw log → typed event."""

import pytest
from eth_abi import encode

from farmledger.abi.decoder import AbiDecoder
from farmledger.abi.registry import build_default_registry
from farmledger.domain.models.events import StakeEvent, TransferEvent, VaultEvent
from farmledger.domain.models.log import RawLog
from farmledger.events.decoder import EventDecoder
from farmledger.exceptions import MalformedInput

A = "0x1111111111111111111111111111111111111111"
B = "0x2222222222222222222222222222222222222222"


@pytest.fixture(scope="module")
def registry():
    return build_default_registry()


@pytest.fixture(scope="module")
def events(registry):
    return EventDecoder(AbiDecoder(registry))


def _topic(type_name: str, value) -> str:
    return "0x" + encode([type_name], [value]).hex()


def _log(topics, data="0x") -> RawLog:
    return RawLog(
        address="0xpool",
        topics=tuple(topics),
        data=data,
        block_hash="0xblock",
        block_number=100,
        transaction_hash="0xtx",
        log_index=1,
    )


class TestEventDecoder:
    def test_transfer(self, registry, events):
        log = _log(
            [registry.full_hash("Transfer"), _topic("address", A), _topic("address", B)],
            "0x" + encode(["uint256"], [99]).hex(),
        )
        event = events.decode(log)
        assert isinstance(event, TransferEvent)
        assert event.event == "Transfer"
        assert event.value == 99

    def test_v2_deposit_overload(self, registry, events):
        log = _log(
            [registry.full_hash("Deposit#V2"), _topic("address", A), _topic("uint256", 500)],
            "0x" + encode(["uint256"], [480]).hex(),
        )
        event = events.decode(log)
        assert isinstance(event, VaultEvent)
        assert event.event == "Deposit#V2"
        assert event.amount == 500
        assert event.shares == 480

    def test_staked(self, registry, events):
        log = _log(
            [registry.full_hash("Staked"), _topic("address", A)],
            "0x" + encode(["uint256"], [10]).hex(),
        )
        assert isinstance(events.decode(log), StakeEvent)

    def test_no_topics(self, events):
        assert events.decode(_log([])) is None

    def test_unknown_topic(self, events):
        assert events.decode(_log(["0x" + "01" * 32])) is None

    def test_registered_without_mapper(self, registry, events):
        # Method ids are registered too, but no mapper handles them
        log = _log([registry.full_hash("transfer")])
        assert events.decode(log) is None

    def test_indeterminate(self, registry, events):
        log = _log([registry.full_hash("Transfer"), _topic("address", A), _topic("address", B)], None)
        assert events.decode(log) is None

    def test_malformed_propagates(self, registry, events):
        log = _log([registry.full_hash("Transfer"), _topic("address", A)], "0x" + "00" * 32)
        with pytest.raises(MalformedInput):
            events.decode(log)
