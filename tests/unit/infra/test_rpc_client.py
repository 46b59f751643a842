"""Tests for EthRpcClient: JSON-RPC communication with mocked HTTP."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from eth_abi import encode
from tenacity import wait_none

from farmledger.abi.decoder import AbiDecoder
from farmledger.abi.registry import build_default_registry
from farmledger.exceptions import ExternalServiceError
from farmledger.infra.blockchain.evm.rpc_client import EthRpcClient

FARM = "0xa0246c9032bc3a600820415ae600c6388619a14d"
USER = "0x1111111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(EthRpcClient._call.retry, "wait", wait_none())


@pytest.fixture()
def mock_http():
    return AsyncMock()


@pytest.fixture()
def rpc(mock_http):
    return EthRpcClient(
        rpc_url="http://localhost:8545",
        http_client=mock_http,
        abi_decoder=AbiDecoder(build_default_registry()),
    )


def _mock_response(data: dict, status_code: int = 200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


def _result(result):
    return _mock_response({"jsonrpc": "2.0", "id": 1, "result": result})


class TestCalls:
    async def test_block_number(self, rpc, mock_http):
        mock_http.post.return_value = _result("0xa7d8c0")
        assert await rpc.get_block_number() == 11_000_000

        payload = mock_http.post.call_args.kwargs["json"]
        assert payload["method"] == "eth_blockNumber"

    async def test_block_timestamp(self, rpc, mock_http):
        mock_http.post.return_value = _result({"timestamp": "0x5f5e1000"})
        assert await rpc.get_block_timestamp("0xblock") == 0x5F5E1000

        payload = mock_http.post.call_args.kwargs["json"]
        assert payload["method"] == "eth_getBlockByHash"
        assert payload["params"] == ["0xblock", False]

    async def test_block_timestamp_by_number(self, rpc, mock_http):
        mock_http.post.return_value = _result({"timestamp": "0x10"})
        assert await rpc.get_block_timestamp_by_number(255) == 16
        assert mock_http.post.call_args.kwargs["json"]["params"] == ["0xff", False]

    async def test_gas_price_in_gwei(self, rpc, mock_http):
        mock_http.post.return_value = _result(hex(30 * 10**9))
        assert await rpc.fetch_average_gas_price() == Decimal(30)

    async def test_receipt(self, rpc, mock_http):
        mock_http.post.return_value = _result({"from": USER, "status": "0x1"})
        receipt = await rpc.fetch_transaction_receipt("0xtx")
        assert receipt["from"] == USER

    async def test_missing_transaction(self, rpc, mock_http):
        mock_http.post.return_value = _result(None)
        with pytest.raises(ExternalServiceError):
            await rpc.fetch_transaction("0xtx")

    async def test_balance_of(self, rpc, mock_http):
        mock_http.post.return_value = _result("0x" + encode(["uint256"], [12345]).hex())
        assert await rpc.balance_of(FARM, USER, 11_000_000) == 12345

        call, block = mock_http.post.call_args.kwargs["json"]["params"]
        assert call["to"] == FARM
        assert call["data"].startswith("0x70a08231")
        assert block == hex(11_000_000)

    async def test_balance_of_empty_result(self, rpc, mock_http):
        mock_http.post.return_value = _result("0x")
        assert await rpc.balance_of(FARM, USER, 1) == 0


class TestGetLogs:
    async def test_sorted_and_removed_dropped(self, rpc, mock_http):
        logs = [
            {"address": FARM, "topics": ["0xAA"], "data": "0x", "blockHash": "0xb", "blockNumber": "0x2",
             "transactionHash": "0xt2", "logIndex": "0x0"},
            {"address": FARM, "topics": ["0xAA"], "data": "0x", "blockHash": "0xb", "blockNumber": "0x1",
             "transactionHash": "0xt1", "logIndex": "0x3"},
            {"address": FARM, "topics": ["0xAA"], "data": "0x", "blockHash": "0xb", "blockNumber": "0x1",
             "transactionHash": "0xt0", "logIndex": "0x1", "removed": True},
        ]
        mock_http.post.return_value = _result(logs)

        result = await rpc.get_logs([FARM], 1, 2)
        assert [(log.block_number, log.log_index) for log in result] == [(1, 3), (2, 0)]
        assert result[0].topic0 == "0xaa"

        params = mock_http.post.call_args.kwargs["json"]["params"][0]
        assert params == {"address": [FARM], "fromBlock": "0x1", "toBlock": "0x2"}


class TestErrors:
    async def test_rpc_error_retried_then_raised(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "error": {"message": "header not found"}})
        with pytest.raises(ExternalServiceError, match="header not found"):
            await rpc.get_block_number()
        assert mock_http.post.call_count == 5

    async def test_http_status_error(self, rpc, mock_http):
        mock_http.post.return_value = _mock_response({}, status_code=502)
        with pytest.raises(ExternalServiceError):
            await rpc.get_block_number()

    async def test_transport_error_wrapped(self, rpc, mock_http):
        mock_http.post.side_effect = httpx.ConnectError("refused")
        with pytest.raises(ExternalServiceError):
            await rpc.get_block_number()

    async def test_recovers_after_transient_error(self, rpc, mock_http):
        mock_http.post.side_effect = [_mock_response({}, status_code=429), _result("0x10")]
        assert await rpc.get_block_number() == 16
