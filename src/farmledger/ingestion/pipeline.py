"""Per-source workers turning raw logs into enriched, persisted records."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from farmledger.abi.decoder import AbiDecoder
from farmledger.accounting.attribution import TransferService
from farmledger.accounting.balance import BALANCE_TOLERANCE, ZERO_ADDRESS
from farmledger.db.repos.lp_trade_repo import LpTradeRepo
from farmledger.db.repos.transfer_repo import TransferRepo
from farmledger.domain.enums import TransferType
from farmledger.domain.models.events import LogEvent
from farmledger.domain.models.log import RawLog
from farmledger.domain.models.lp_trade import LpTrade
from farmledger.domain.models.transfer import Transfer
from farmledger.events.decoder import EventDecoder
from farmledger.exceptions import DecodeError, FarmLedgerError, PriceUnavailable
from farmledger.infra.blockchain.base import ChainClient
from farmledger.infra.blockchain.evm.block_service import EthBlockService
from farmledger.ingestion.converter import TransferConverter
from farmledger.ingestion.lp_converter import LpTradeConverter
from farmledger.ingestion.result import ProcessResult, Record

logger = logging.getLogger(__name__)

QUEUE_SIZE = 100
POLL_TIMEOUT = 1.0
PROGRESS_LOG_EVERY = 100

# Types whose profit math does not need a price
PRICE_OPTIONAL_TYPES = frozenset({TransferType.PS_STAKE})


class PriceOracle(Protocol):
    async def get_price_for_address_at_block(self, token_address: str, block: int) -> Decimal | None: ...


class LogPipeline(ABC):
    """One worker per source.

    Raw logs arrive on `logs`; every newly saved record is offered to `output`.
    The loop takes one item at a time and awaits each step in order.

    Subclasses define:
        convert: decoded event -> record, or None when the source ignores it
        enrich: fill the record from chain, block and price lookups
        save: persist, False for a duplicate
    """

    def __init__(
        self,
        name: str,
        event_decoder: EventDecoder,
        chain: ChainClient,
        block_service: EthBlockService,
        price_oracle: PriceOracle,
        session_factory: async_sessionmaker[AsyncSession],
        abi_decoder: AbiDecoder,
        input_queue_size: int = QUEUE_SIZE,
        output_queue_size: int = QUEUE_SIZE,
        poll_timeout: float = POLL_TIMEOUT,
    ) -> None:
        self.name = name
        self._events = event_decoder
        self._chain = chain
        self._blocks = block_service
        self._prices = price_oracle
        self._session_factory = session_factory
        self._abi = abi_decoder
        self._poll_timeout = poll_timeout
        self._stop = asyncio.Event()

        self.logs: asyncio.Queue[RawLog] = asyncio.Queue(maxsize=input_queue_size)
        self.output: asyncio.Queue[Record] = asyncio.Queue(maxsize=output_queue_size)
        self.processed_count = 0
        self.last_tx: str | None = None
        self.last_decoded_at: float | None = None  # time.monotonic()

    def stop(self) -> None:
        """Finish the in-flight item, then exit after the next poll."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    async def run(self) -> None:
        logger.info("Start %s pipeline", self.name)
        while not self._stop.is_set():
            try:
                log = await asyncio.wait_for(self.logs.get(), timeout=self._poll_timeout)
            except asyncio.TimeoutError:
                continue

            try:
                result = await self.process_log(log)
                if result.error is not None:
                    logger.error("%s: failed to process log %s: %s", self.name, log, result.error)
            except Exception:
                logger.exception("%s: unexpected error on log %s", self.name, log)
            finally:
                self.logs.task_done()

            self.processed_count += 1
            if self.processed_count % PROGRESS_LOG_EVERY == 0:
                logger.info("%s handled %d logs, last tx %s", self.name, self.processed_count, self.last_tx)
        logger.info("%s pipeline stopped after %d logs", self.name, self.processed_count)

    async def process_log(self, log: RawLog) -> ProcessResult:
        """Decode, convert, enrich and save one log.

        Expected per-item failures come back as FAILED; anything else propagates.
        """
        try:
            event = self._events.decode(log)
            if event is None:
                return ProcessResult.skipped()
            self.last_tx = log.transaction_hash
            self.last_decoded_at = time.monotonic()

            record = self.convert(event)
            if record is None:
                return ProcessResult.skipped()

            await self.enrich(record, log)
            saved = await self.save(record)
        except FarmLedgerError as e:
            return ProcessResult.failed(e)

        if not saved:
            return ProcessResult.duplicate(record)
        self._publish(record)
        return ProcessResult.saved(record)

    @abstractmethod
    def convert(self, event: LogEvent) -> Record | None:
        """Map a decoded event to this source's record type."""

    @abstractmethod
    async def enrich(self, record: Record, log: RawLog) -> None:
        """Fill sender, method, timestamp, price and gas."""

    @abstractmethod
    async def save(self, record: Record) -> bool:
        """Persist the record. False when it was already stored."""

    async def _tx_sender(self, tx_hash: str) -> str | None:
        receipt = await self._chain.fetch_transaction_receipt(tx_hash)
        sender = receipt.get("from")
        return sender.lower() if sender else None

    async def _method_name(self, tx_hash: str) -> str | None:
        tx = await self._chain.fetch_transaction(tx_hash)
        try:
            return self._abi.decode_call_data(tx.get("input")).name
        except DecodeError as e:
            logger.debug("Can't decode input of %s: %s", tx_hash, e)
            return None

    def _publish(self, record: Record) -> None:
        try:
            self.output.put_nowait(record)
        except asyncio.QueueFull:
            logger.warning("%s output queue is full, dropping %s", self.name, record.id)


class TransferPipeline(LogPipeline):
    """Tracked-token Transfer logs → attributed transfers."""

    def __init__(
        self,
        name: str,
        event_decoder: EventDecoder,
        converter: TransferConverter,
        chain: ChainClient,
        block_service: EthBlockService,
        price_oracle: PriceOracle,
        session_factory: async_sessionmaker[AsyncSession],
        abi_decoder: AbiDecoder,
        not_checkable: Iterable[str] = (),
        balance_tolerance: Decimal = BALANCE_TOLERANCE,
        input_queue_size: int = QUEUE_SIZE,
        output_queue_size: int = QUEUE_SIZE,
        poll_timeout: float = POLL_TIMEOUT,
    ) -> None:
        super().__init__(
            name, event_decoder, chain, block_service, price_oracle, session_factory, abi_decoder,
            input_queue_size=input_queue_size,
            output_queue_size=output_queue_size,
            poll_timeout=poll_timeout,
        )
        self._converter = converter
        self._not_checkable = frozenset(a.lower() for a in not_checkable)
        self._tolerance = balance_tolerance

    def convert(self, event: LogEvent) -> Transfer | None:
        return self._converter.convert(event)

    async def enrich(self, transfer: Transfer, log: RawLog) -> None:
        transfer.tx_from = await self._tx_sender(log.transaction_hash)
        transfer.method_name = await self._method_name(log.transaction_hash)
        transfer.block_date = await self._blocks.get_timestamp_for_block(log.block_hash, log.block_number)

        if transfer.price is None:
            transfer.price = await self._prices.get_price_for_address_at_block(transfer.token, transfer.block)
            if transfer.price is None and transfer.type not in PRICE_OPTIONAL_TYPES:
                raise PriceUnavailable(transfer.token, transfer.block)

        transfer.balance_owner = await self._balance(transfer.owner, transfer.block)
        transfer.balance_recipient = await self._balance(transfer.recipient, transfer.block)
        transfer.last_gas = await self._chain.fetch_average_gas_price()

    async def save(self, transfer: Transfer) -> bool:
        async with self._session_factory() as session:
            service = TransferService(TransferRepo(session), self._not_checkable, self._tolerance)
            saved = await service.save(transfer)
            await session.commit()
        return saved

    async def _balance(self, holder: str, block: int) -> Decimal:
        if holder == ZERO_ADDRESS:
            return Decimal(0)
        raw = await self._chain.balance_of(self._converter.token, holder, block)
        return self._converter.to_units(raw)


class LpTradePipeline(LogPipeline):
    """Pair Swap / Mint / Burn logs → LP trades priced through the pair's other coin."""

    def __init__(
        self,
        name: str,
        event_decoder: EventDecoder,
        converter: LpTradeConverter,
        chain: ChainClient,
        block_service: EthBlockService,
        price_oracle: PriceOracle,
        session_factory: async_sessionmaker[AsyncSession],
        abi_decoder: AbiDecoder,
        input_queue_size: int = QUEUE_SIZE,
        output_queue_size: int = QUEUE_SIZE,
        poll_timeout: float = POLL_TIMEOUT,
    ) -> None:
        super().__init__(
            name, event_decoder, chain, block_service, price_oracle, session_factory, abi_decoder,
            input_queue_size=input_queue_size,
            output_queue_size=output_queue_size,
            poll_timeout=poll_timeout,
        )
        self._converter = converter

    def convert(self, event: LogEvent) -> LpTrade | None:
        return self._converter.convert(event)

    async def enrich(self, trade: LpTrade, log: RawLog) -> None:
        trade.owner = await self._tx_sender(log.transaction_hash)
        trade.method_name = await self._method_name(log.transaction_hash)
        trade.block_date = await self._blocks.get_timestamp_for_block(log.block_hash, log.block_number)

        if trade.price is None:
            other_price = await self._prices.get_price_for_address_at_block(trade.other_coin, trade.block)
            if other_price is None:
                raise PriceUnavailable(trade.other_coin, trade.block)
            trade.price = trade.other_amount * other_price / trade.amount

        trade.last_gas = await self._chain.fetch_average_gas_price()
        logger.debug("%s: %s", self.name, trade.print())

    async def save(self, trade: LpTrade) -> bool:
        async with self._session_factory() as session:
            saved = await LpTradeRepo(session).save(trade)
            await session.commit()
        return saved
