from unittest.mock import AsyncMock

from farmledger.infra.blockchain.evm.block_service import EthBlockService


class TestEthBlockService:
    async def test_cached(self):
        chain = AsyncMock()
        chain.get_block_timestamp.return_value = 1_600_000_000
        service = EthBlockService(chain)

        assert await service.get_timestamp_for_block("0xb1", 1) == 1_600_000_000
        assert await service.get_timestamp_for_block("0xb1", 1) == 1_600_000_000
        chain.get_block_timestamp.assert_called_once_with("0xb1")

    async def test_oldest_evicted(self):
        chain = AsyncMock()
        chain.get_block_timestamp.side_effect = [1, 2, 3, 4]
        service = EthBlockService(chain, cache_size=2)

        await service.get_timestamp_for_block("0xb1", 1)
        await service.get_timestamp_for_block("0xb2", 2)
        await service.get_timestamp_for_block("0xb3", 3)
        assert await service.get_timestamp_for_block("0xb1", 1) == 4
        assert chain.get_block_timestamp.call_count == 4
