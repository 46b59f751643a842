"""Ingest FARM transfers and FARM pair trades from the configured start block until interrupted.

Usage:
    PYTHONPATH=src python scripts/run_ingestion.py
"""

import asyncio
import logging
import signal

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def main() -> None:
    from farmledger.container import Container
    from farmledger.ingestion.runner import IngestionRunner

    container = Container()
    runner = IngestionRunner(
        subscription=container.subscription(),
        pipelines=[container.transfer_pipeline(), container.lp_pipeline()],
        monitor=container.monitor(),
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, runner.stop)

    try:
        await runner.run()
    finally:
        await container.http_client().close()
        await container.engine().dispose()


if __name__ == "__main__":
    asyncio.run(main())
