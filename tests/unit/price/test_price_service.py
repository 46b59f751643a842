"""Tests for PriceService: cache hit/miss behavior."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from farmledger.db.models.price_cache import PriceCache
from farmledger.infra.price.service import PriceService

FARM = "0xa0246c9032bc3a600820415ae600c6388619a14d"


def _service(session_factory, price=Decimal("95.5")):
    chain = AsyncMock()
    chain.get_block_timestamp_by_number.return_value = 1_600_000_000
    coingecko = MagicMock()
    coingecko.get_price = AsyncMock(return_value=price)
    return PriceService(session_factory, chain=chain, coingecko=coingecko), chain, coingecko


class TestPriceServiceCacheHit:
    async def test_cache_hit_returns_price(self, session_factory):
        async with session_factory() as session:
            session.add(PriceCache(token_address=FARM, block=11_000_000, price_usd=Decimal("120"), source="manual"))
            await session.commit()

        service, chain, coingecko = _service(session_factory)
        price = await service.get_price_for_address_at_block(FARM.upper().replace("0X", "0x"), 11_000_000)

        assert price == Decimal("120")
        coingecko.get_price.assert_not_called()
        chain.get_block_timestamp_by_number.assert_not_called()


class TestPriceServiceFetch:
    async def test_cache_miss_fetches_and_stores(self, session_factory):
        service, chain, coingecko = _service(session_factory)

        price = await service.get_price_for_address_at_block(FARM, 11_000_000)
        assert price == Decimal("95.5")
        chain.get_block_timestamp_by_number.assert_called_once_with(11_000_000)
        coingecko.get_price.assert_called_once_with(FARM, 1_600_000_000)

        # Second lookup is served from the cache
        assert await service.get_price_for_address_at_block(FARM, 11_000_000) == Decimal("95.5")
        assert coingecko.get_price.call_count == 1

    async def test_no_price_not_cached(self, session_factory):
        service, _, coingecko = _service(session_factory, price=None)

        assert await service.get_price_for_address_at_block(FARM, 11_000_000) is None
        assert await service.get_price_for_address_at_block(FARM, 11_000_000) is None
        assert coingecko.get_price.call_count == 2
