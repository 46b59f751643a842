"""PriceService: token price at a block, with DB caching."""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from farmledger.db.models.price_cache import PriceCache
from farmledger.infra.blockchain.base import ChainClient
from farmledger.infra.price.coingecko import CoinGeckoProvider

logger = logging.getLogger(__name__)


class PriceService:
    """Price oracle: cache lookup → block timestamp → provider fetch → cache store.

    Opens its own short sessions so it can be shared by every pipeline.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        chain: ChainClient,
        coingecko: CoinGeckoProvider,
    ) -> None:
        self._session_factory = session_factory
        self._chain = chain
        self._coingecko = coingecko

    async def get_price_for_address_at_block(self, token_address: str, block: int) -> Decimal | None:
        token_address = token_address.lower()

        async with self._session_factory() as session:
            cached = await self._cache_lookup(session, token_address, block)
            if cached is not None:
                return cached

            timestamp = await self._chain.get_block_timestamp_by_number(block)
            price = await self._coingecko.get_price(token_address, timestamp)
            if price is None:
                logger.info("No price for %s at block %d", token_address, block)
                return None

            await self._cache_store(session, token_address, block, price, "coingecko")
            await session.commit()
            return price

    async def _cache_lookup(self, session: AsyncSession, token_address: str, block: int) -> Decimal | None:
        result = await session.execute(
            select(PriceCache.price_usd).where(
                PriceCache.token_address == token_address,
                PriceCache.block == block,
            )
        )
        row = result.scalar_one_or_none()
        return Decimal(str(row)) if row is not None else None

    async def _cache_store(
        self, session: AsyncSession, token_address: str, block: int, price: Decimal, source: str
    ) -> None:
        try:
            async with session.begin_nested():
                session.add(PriceCache(token_address=token_address, block=block, price_usd=price, source=source))
        except IntegrityError:
            # Another worker cached the same (token, block) first
            logger.debug("Price for %s at %d already cached", token_address, block)
