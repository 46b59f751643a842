"""SourceMonitor: liveness of the running pipelines."""

import logging
import time

from farmledger.ingestion.pipeline import LogPipeline

logger = logging.getLogger(__name__)

STALL_THRESHOLD = 600.0


class SourceMonitor:
    def __init__(self, stall_threshold: float = STALL_THRESHOLD, clock=time.monotonic) -> None:
        self._stall_threshold = stall_threshold
        self._clock = clock
        self._pipelines: dict[str, LogPipeline] = {}
        self._registered_at: dict[str, float] = {}

    def register(self, pipeline: LogPipeline) -> None:
        self._pipelines[pipeline.name] = pipeline
        self._registered_at[pipeline.name] = self._clock()

    def stalled(self) -> list[str]:
        """Names of running pipelines that decoded nothing within the threshold.

        A pipeline that never decoded anything is measured from its registration.
        """
        now = self._clock()
        result = []
        for name, pipeline in self._pipelines.items():
            if pipeline.stopped:
                continue
            last = pipeline.last_decoded_at
            if last is None:
                last = self._registered_at[name]
            if now - last > self._stall_threshold:
                result.append(name)
        return result

    def check(self) -> list[str]:
        stalled = self.stalled()
        for name in stalled:
            pipeline = self._pipelines[name]
            logger.warning("Source %s is stalled, last tx %s", name, pipeline.last_tx)
        return stalled

    def status(self) -> dict[str, dict]:
        return {
            name: {
                "processed": pipeline.processed_count,
                "last_tx": pipeline.last_tx,
                "queued": pipeline.logs.qsize(),
                "stopped": pipeline.stopped,
            }
            for name, pipeline in self._pipelines.items()
        }
