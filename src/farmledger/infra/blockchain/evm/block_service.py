"""EthBlockService: block timestamps with an in-process cache."""

import logging
from collections import OrderedDict

from farmledger.infra.blockchain.base import ChainClient

logger = logging.getLogger(__name__)

CACHE_SIZE = 10_000


class EthBlockService:
    """Block hash → timestamp. Entries never expire; the oldest is evicted past cache_size."""

    def __init__(self, chain: ChainClient, cache_size: int = CACHE_SIZE) -> None:
        self._chain = chain
        self._cache: OrderedDict[str, int] = OrderedDict()
        self._cache_size = cache_size

    async def get_timestamp_for_block(self, block_hash: str, block_number: int) -> int:
        cached = self._cache.get(block_hash)
        if cached is not None:
            return cached

        timestamp = await self._chain.get_block_timestamp(block_hash)
        logger.debug("Block %d (%s) timestamp %d", block_number, block_hash, timestamp)
        self._cache[block_hash] = timestamp
        if len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return timestamp
