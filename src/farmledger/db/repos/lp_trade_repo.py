import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.db.models.lp_trade import LpTradeRecord
from farmledger.domain.models.lp_trade import LpTrade

logger = logging.getLogger(__name__)


class LpTradeRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists_by_id(self, trade_id: str) -> bool:
        result = await self._session.execute(
            select(LpTradeRecord.id).where(LpTradeRecord.id == trade_id)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, trade: LpTrade) -> bool:
        """Insert unless a record with the same id exists. Returns False for duplicates."""
        if await self.exists_by_id(trade.id):
            logger.warning("Duplicate lp trade %s", trade.id)
            return False
        try:
            async with self._session.begin_nested():
                self._session.add(LpTradeRecord.from_domain(trade))
        except IntegrityError:
            logger.warning("Duplicate lp trade %s (concurrent insert)", trade.id)
            return False
        return True

    async def fetch_for_owner(self, owner: str) -> list[LpTrade]:
        """Trades sent by `owner`, oldest first."""
        query = (
            select(LpTradeRecord)
            .where(LpTradeRecord.owner == owner.lower())
            .order_by(LpTradeRecord.block_date, LpTradeRecord.block, LpTradeRecord.log_index)
        )
        result = await self._session.execute(query)
        return [r.to_domain() for r in result.scalars().all()]
