"""Tests for AbiDecoder: call-data, logs, encoding."""

import pytest
from eth_abi import encode

from farmledger.abi.decoder import INDETERMINATE, AbiDecoder
from farmledger.abi.registry import build_default_registry
from farmledger.abi.types import indexed, param
from farmledger.domain.models.log import RawLog
from farmledger.exceptions import MalformedInput, UnknownMethod

ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
TRANSFER_PARAMS = [indexed("address"), indexed("address"), param("uint256")]


@pytest.fixture(scope="module")
def decoder():
    return AbiDecoder(build_default_registry())


def _topic(type_name: str, value) -> str:
    return "0x" + encode([type_name], [value]).hex()


def _log(topics: list[str], data: str | None) -> RawLog:
    return RawLog(
        address="0xa0246c9032bc3a600820415ae600c6388619a14d",
        topics=tuple(topics),
        data=data,
        block_hash="0x" + "ab" * 32,
        block_number=11_000_000,
        transaction_hash="0x" + "cd" * 32,
        log_index=7,
    )


def _transfer_log(decoder, value: int = 10**18) -> RawLog:
    return _log(
        [decoder.registry.full_hash("Transfer"), _topic("address", ALICE), _topic("address", BOB)],
        "0x" + encode(["uint256"], [value]).hex(),
    )


class TestDecodeCallData:
    def test_transfer_call(self, decoder):
        data = "0xa9059cbb" + encode(["address", "uint256"], [BOB, 500]).hex()
        call = decoder.decode_call_data(data)

        assert call.method_id == "0xa9059cbb"
        assert call.name == "transfer"
        assert call.values == [BOB, 500]

    def test_arrays_come_back_as_tuples(self, decoder):
        path = [ALICE, BOB]
        data = decoder.encode_call("swapExactTokensForTokens", [100, 90, path, ALICE, 1700000000])
        call = decoder.decode_call_data(data)
        assert call.values[2] == (ALICE, BOB)

    def test_no_argument_method(self, decoder):
        call = decoder.decode_call_data("0x3d18b912")  # getReward()
        assert call.name == "getReward"
        assert call.values == []

    @pytest.mark.parametrize("data", [None, "", "0x", "0xa9059c"])
    def test_short_input(self, decoder, data):
        with pytest.raises(MalformedInput):
            decoder.decode_call_data(data)

    def test_unknown_method(self, decoder):
        with pytest.raises(UnknownMethod) as exc:
            decoder.decode_call_data("0xdeadbeef" + "00" * 32)
        assert exc.value.method_id == "0xdeadbeef"

    def test_truncated_payload(self, decoder):
        with pytest.raises(MalformedInput):
            decoder.decode_call_data("0xa9059cbb" + "00" * 10)

    def test_invalid_hex(self, decoder):
        with pytest.raises(MalformedInput):
            decoder.decode_call_data("0xa9059cbb" + "zz" * 64)


class TestDecodeLog:
    def test_transfer_log(self, decoder):
        values = decoder.decode_log(_transfer_log(decoder, 42), TRANSFER_PARAMS)
        assert values == (ALICE, BOB, 42)

    def test_addresses_lowercased(self, decoder):
        mixed = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
        log = _log(
            [decoder.registry.full_hash("Transfer"), _topic("address", mixed), _topic("address", BOB)],
            "0x" + encode(["uint256"], [1]).hex(),
        )
        values = decoder.decode_log(log, TRANSFER_PARAMS)
        assert values[0] == mixed.lower()

    def test_indexed_first_then_data(self, decoder):
        # Swap declares `to` last, but it is indexed so it comes second
        params = decoder.registry.entry_by_name("Swap").parameters
        log = _log(
            [decoder.registry.full_hash("Swap"), _topic("address", ALICE), _topic("address", BOB)],
            "0x" + encode(["uint256"] * 4, [1, 0, 0, 2]).hex(),
        )
        assert decoder.decode_log(log, params) == (ALICE, BOB, 1, 0, 0, 2)

    def test_missing_payload_is_indeterminate(self, decoder):
        log = _log([decoder.registry.full_hash("Transfer")], None)
        assert decoder.decode_log(log, TRANSFER_PARAMS) is INDETERMINATE

    def test_too_few_topics(self, decoder):
        log = _log([decoder.registry.full_hash("Transfer"), _topic("address", ALICE)], "0x" + "00" * 32)
        with pytest.raises(MalformedInput):
            decoder.decode_log(log, TRANSFER_PARAMS)

    def test_empty_data_for_data_params(self, decoder):
        log = _transfer_log(decoder).model_copy(update={"data": "0x"})
        with pytest.raises(MalformedInput):
            decoder.decode_log(log, TRANSFER_PARAMS)

    def test_indexed_dynamic_keeps_topic_bytes(self, decoder):
        topic = "0x" + "ee" * 32
        log = _log(["0x" + "00" * 32, topic], "0x")
        values = decoder.decode_log(log, [indexed("string")])
        assert values == (bytes.fromhex("ee" * 32),)


class TestEncodeCall:
    def test_balance_of(self, decoder):
        data = decoder.encode_call("balanceOf", [ALICE])
        assert data == "0x70a08231" + "00" * 12 + ALICE[2:]

    def test_unknown_name(self, decoder):
        with pytest.raises(UnknownMethod):
            decoder.encode_call("nope", [])

    def test_wrong_args(self, decoder):
        with pytest.raises(MalformedInput):
            decoder.encode_call("balanceOf", [12345])
