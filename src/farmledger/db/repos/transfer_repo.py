import logging
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.db.models.transfer import TransferRecord
from farmledger.domain.enums import TransferType
from farmledger.domain.models.transfer import Transfer

logger = logging.getLogger(__name__)

PROFIT_TYPES = (TransferType.PS_EXIT, TransferType.REWARD, TransferType.LP_SELL)


def _chronological(query):
    return query.order_by(TransferRecord.block_date, TransferRecord.block, TransferRecord.log_index)


class TransferRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists_by_id(self, transfer_id: str) -> bool:
        result = await self._session.execute(
            select(TransferRecord.id).where(TransferRecord.id == transfer_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_by_id(self, transfer_id: str) -> Optional[TransferRecord]:
        return await self._session.get(TransferRecord, transfer_id)

    async def save(self, transfer: Transfer) -> bool:
        """Insert unless a record with the same id exists. Returns False for duplicates."""
        if await self.exists_by_id(transfer.id):
            logger.warning("Duplicate transfer %s", transfer.id)
            return False
        try:
            async with self._session.begin_nested():
                self._session.add(TransferRecord.from_domain(transfer))
        except IntegrityError:
            # Another worker inserted the same id first; savepoint rolled back
            logger.warning("Duplicate transfer %s (concurrent insert)", transfer.id)
            return False
        return True

    async def update(self, transfer: Transfer) -> None:
        record = await self.get_by_id(transfer.id)
        if record is None:
            raise LookupError(f"Transfer {transfer.id} not found")
        record.apply(transfer)
        await self._session.flush()

    async def fetch_history_for_address(
        self,
        address: str,
        types: Iterable[TransferType],
        before_block_date: int,
        before_log_index: Optional[int] = None,
    ) -> list[Transfer]:
        """Transfers sent or received by `address` strictly before the given position, oldest first."""
        address = address.lower()
        before = TransferRecord.block_date < before_block_date
        if before_log_index is not None:
            before = or_(
                before,
                and_(TransferRecord.block_date == before_block_date, TransferRecord.log_index < before_log_index),
            )
        query = select(TransferRecord).where(
            or_(TransferRecord.owner == address, TransferRecord.recipient == address),
            TransferRecord.type.in_([t.value for t in types]),
            before,
        )
        result = await self._session.execute(_chronological(query))
        return [r.to_domain() for r in result.scalars().all()]

    async def get_running_balance(self, address: str, as_of_block_date: int) -> Decimal:
        """Received minus sent for `address` over all persisted transfers up to and including `as_of_block_date`."""
        address = address.lower()
        received = await self._sum_value(TransferRecord.recipient == address, as_of_block_date)
        sent = await self._sum_value(TransferRecord.owner == address, as_of_block_date)
        return received - sent

    async def _sum_value(self, condition, as_of_block_date: int) -> Decimal:
        result = await self._session.execute(
            select(func.coalesce(func.sum(TransferRecord.value), 0)).where(
                condition, TransferRecord.block_date <= as_of_block_date,
            )
        )
        return Decimal(str(result.scalar_one()))

    async def fetch_all_from_block_date(self, block_date: int) -> list[Transfer]:
        query = select(TransferRecord).where(TransferRecord.block_date >= block_date)
        result = await self._session.execute(_chronological(query))
        return [r.to_domain() for r in result.scalars().all()]

    async def fetch_all_without_price(self) -> list[Transfer]:
        query = select(TransferRecord).where(TransferRecord.price.is_(None))
        result = await self._session.execute(_chronological(query))
        return [r.to_domain() for r in result.scalars().all()]

    async def fetch_all_without_profits(self) -> list[Transfer]:
        """Profit-bearing transfers (PS_EXIT, REWARD, LP_SELL) whose USD profit was never filled."""
        query = select(TransferRecord).where(
            TransferRecord.type.in_([t.value for t in PROFIT_TYPES]),
            TransferRecord.profit_usd.is_(None),
        )
        result = await self._session.execute(_chronological(query))
        return [r.to_domain() for r in result.scalars().all()]
