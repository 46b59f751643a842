"""IngestionRunner: runs the log subscription, its pipelines and the stall monitor as asyncio tasks."""

import asyncio
import logging

from farmledger.infra.blockchain.evm.subscription import LogSubscription
from farmledger.ingestion.monitor import SourceMonitor
from farmledger.ingestion.pipeline import LogPipeline

logger = logging.getLogger(__name__)

MONITOR_INTERVAL = 60.0


class IngestionRunner:
    def __init__(
        self,
        subscription: LogSubscription,
        pipelines: list[LogPipeline],
        monitor: SourceMonitor,
        monitor_interval: float = MONITOR_INTERVAL,
    ) -> None:
        self._subscription = subscription
        self._pipelines = pipelines
        self._monitor = monitor
        self._monitor_interval = monitor_interval
        self._stop = asyncio.Event()
        for pipeline in pipelines:
            subscription.subscribe(pipeline.logs)
            monitor.register(pipeline)

    def stop(self) -> None:
        """Stop the feed first, then every pipeline after its in-flight item."""
        self._stop.set()
        self._subscription.stop()
        for pipeline in self._pipelines:
            pipeline.stop()

    async def run(self) -> None:
        tasks = [asyncio.create_task(self._subscription.run(), name="subscription")]
        tasks += [asyncio.create_task(p.run(), name=p.name) for p in self._pipelines]
        tasks.append(asyncio.create_task(self._watch(), name="monitor"))
        logger.info("Ingestion started with %d pipelines", len(self._pipelines))
        try:
            await asyncio.gather(*tasks)
        finally:
            self.stop()
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Ingestion stopped")

    async def _watch(self) -> None:
        while not self._stop.is_set():
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._monitor_interval)
            except asyncio.TimeoutError:
                self._monitor.check()
