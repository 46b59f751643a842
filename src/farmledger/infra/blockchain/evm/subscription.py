"""LogSubscription: polls eth_getLogs and feeds pipeline input queues."""

import asyncio
import logging

from farmledger.domain.models.log import RawLog
from farmledger.infra.blockchain.base import ChainClient

logger = logging.getLogger(__name__)

PUT_TIMEOUT = 1.0


class LogSubscription:
    """Block-range poller for a set of contract addresses.

    Every queue passed to `subscribe` receives every log, in chain order.
    A full queue holds the poller until the consumer catches up or `stop()`
    is called; after stop the rest of the batch is dropped.
    """

    def __init__(
        self,
        chain: ChainClient,
        addresses: list[str],
        start_block: int,
        batch_size: int = 1000,
        poll_interval: float = 5.0,
        put_timeout: float = PUT_TIMEOUT,
    ) -> None:
        self._chain = chain
        self._addresses = [a.lower() for a in addresses]
        self._next_block = start_block
        self._batch_size = batch_size
        self._poll_interval = poll_interval
        self._put_timeout = put_timeout
        self._queues: list[asyncio.Queue[RawLog]] = []
        self._stop = asyncio.Event()

    @property
    def next_block(self) -> int:
        return self._next_block

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)

    def subscribe(self, queue: "asyncio.Queue[RawLog]") -> None:
        self._queues.append(queue)

    def stop(self) -> None:
        self._stop.set()

    async def poll_once(self) -> int:
        """Fetch and dispatch the next block range. Returns the number of logs dispatched."""
        tip = await self._chain.get_block_number()
        if self._next_block > tip:
            return 0

        to_block = min(self._next_block + self._batch_size - 1, tip)
        logs = await self._chain.get_logs(self._addresses, self._next_block, to_block)
        for dispatched, log in enumerate(logs):
            for queue in self._queues:
                if not await self._put(queue, log):
                    logger.info(
                        "Subscription stopped, dropping %d of %d logs from blocks %d-%d",
                        len(logs) - dispatched, len(logs), self._next_block, to_block,
                    )
                    return dispatched

        logger.debug("Blocks %d-%d: %d logs", self._next_block, to_block, len(logs))
        self._next_block = to_block + 1
        return len(logs)

    async def _put(self, queue: "asyncio.Queue[RawLog]", log: RawLog) -> bool:
        """Wait for room in `queue`. False once the subscription is stopped."""
        while not self._stop.is_set():
            try:
                await asyncio.wait_for(queue.put(log), timeout=self._put_timeout)
                return True
            except asyncio.TimeoutError:
                continue
        return False

    async def run(self) -> None:
        logger.info("Start log subscription for %d addresses from block %d", len(self._addresses), self._next_block)
        while not self._stop.is_set():
            try:
                dispatched = await self.poll_once()
            except Exception:
                logger.exception("Log subscription poll failed at block %d", self._next_block)
                dispatched = 0
            if dispatched == 0:
                try:
                    await asyncio.wait_for(self._stop.wait(), timeout=self._poll_interval)
                except asyncio.TimeoutError:
                    pass
        logger.info("Log subscription stopped at block %d", self._next_block)
