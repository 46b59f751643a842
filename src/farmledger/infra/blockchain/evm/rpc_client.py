"""Ethereum JSON-RPC client."""

import logging
from decimal import Decimal
from typing import Any

import httpx
from eth_abi import decode
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from farmledger.abi.decoder import AbiDecoder
from farmledger.domain.models.log import RawLog
from farmledger.exceptions import ExternalServiceError
from farmledger.infra.blockchain.base import ChainClient
from farmledger.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

GWEI = Decimal(10) ** 9


def _hex_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 16)
    return int(value or 0)


class EthRpcClient(ChainClient):
    """Minimal eth_* JSON-RPC client. Call-data for eth_call comes from the signature registry."""

    def __init__(self, rpc_url: str, http_client: RateLimitedClient, abi_decoder: AbiDecoder) -> None:
        self._rpc_url = rpc_url
        self._http = http_client
        self._abi = abi_decoder
        self._request_id = 0

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=1, min=1, max=20),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> Any:
        """Execute a JSON-RPC call and return the result field."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        try:
            resp = await self._http.post(self._rpc_url, json=payload)
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"RPC transport error for {method}: {e}") from e
        if resp.status_code != 200:
            raise ExternalServiceError(f"RPC HTTP {resp.status_code} for {method}")
        data = resp.json()

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"RPC error ({method}): {msg}")

        return data.get("result")

    async def fetch_transaction(self, tx_hash: str) -> dict:
        result = await self._call("eth_getTransactionByHash", [tx_hash])
        if result is None:
            raise ExternalServiceError(f"Transaction {tx_hash} not found")
        return result

    async def fetch_transaction_receipt(self, tx_hash: str) -> dict:
        result = await self._call("eth_getTransactionReceipt", [tx_hash])
        if result is None:
            raise ExternalServiceError(f"Receipt for {tx_hash} not found")
        return result

    async def get_block_timestamp(self, block_hash: str) -> int:
        block = await self._call("eth_getBlockByHash", [block_hash, False])
        if block is None:
            raise ExternalServiceError(f"Block {block_hash} not found")
        return _hex_int(block["timestamp"])

    async def get_block_timestamp_by_number(self, block_number: int) -> int:
        block = await self._call("eth_getBlockByNumber", [hex(block_number), False])
        if block is None:
            raise ExternalServiceError(f"Block {block_number} not found")
        return _hex_int(block["timestamp"])

    async def fetch_average_gas_price(self) -> Decimal:
        wei = _hex_int(await self._call("eth_gasPrice", []))
        return Decimal(wei) / GWEI

    async def get_block_number(self) -> int:
        return _hex_int(await self._call("eth_blockNumber", []))

    async def get_logs(self, addresses: list[str], from_block: int, to_block: int) -> list[RawLog]:
        params = {
            "address": addresses,
            "fromBlock": hex(from_block),
            "toBlock": hex(to_block),
        }
        result = await self._call("eth_getLogs", [params])
        logs = [RawLog.from_rpc(item) for item in result or [] if not item.get("removed")]
        logs.sort(key=lambda log: (log.block_number, log.log_index))
        return logs

    async def balance_of(self, token: str, holder: str, block: int) -> int:
        call_data = self._abi.encode_call("balanceOf", [holder])
        result = await self._call("eth_call", [{"to": token, "data": call_data}, hex(block)])
        if not result or result == "0x":
            return 0
        (balance,) = decode(["uint256"], bytes.fromhex(result[2:]))
        return balance
