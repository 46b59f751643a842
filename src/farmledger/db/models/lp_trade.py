"""LpTradeRecord: persisted pair swap / liquidity event, keyed by tx hash + log index."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.db.session import Base, TimestampMixin
from farmledger.domain.enums import LpTradeType
from farmledger.domain.models.lp_trade import LpTrade


def _decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class LpTradeRecord(TimestampMixin, Base):
    __tablename__ = "lp_trades"

    id: Mapped[str] = mapped_column(String(90), primary_key=True)
    pair: Mapped[str] = mapped_column(String(42))
    block: Mapped[int] = mapped_column(BigInteger)
    block_date: Mapped[int] = mapped_column(BigInteger)
    log_index: Mapped[int] = mapped_column(Integer, default=0)
    tx_hash: Mapped[str] = mapped_column(String(66))
    owner: Mapped[Optional[str]] = mapped_column(String(42), default=None)
    type: Mapped[str] = mapped_column(String(10))
    amount: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    other_coin: Mapped[str] = mapped_column(String(42))
    other_amount: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(28, 10), default=None)
    method_name: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    last_gas: Mapped[Optional[Decimal]] = mapped_column(Numeric(20, 9), default=None)

    __table_args__ = (
        Index("ix_lp_trades_owner_block_date", "owner", "block_date"),
        Index("ix_lp_trades_pair_block_date", "pair", "block_date"),
    )

    @classmethod
    def from_domain(cls, trade: LpTrade) -> "LpTradeRecord":
        return cls(
            id=trade.id,
            pair=trade.pair.lower(),
            block=trade.block,
            block_date=trade.block_date,
            log_index=trade.log_index,
            tx_hash=trade.tx_hash.lower(),
            owner=trade.owner,
            type=trade.type.value,
            amount=trade.amount,
            other_coin=trade.other_coin.lower(),
            other_amount=trade.other_amount,
            price=trade.price,
            method_name=trade.method_name,
            last_gas=trade.last_gas,
        )

    def to_domain(self) -> LpTrade:
        return LpTrade(
            id=self.id,
            pair=self.pair,
            block=self.block,
            block_date=self.block_date,
            log_index=self.log_index,
            tx_hash=self.tx_hash,
            owner=self.owner,
            type=LpTradeType(self.type),
            amount=Decimal(str(self.amount)),
            other_coin=self.other_coin,
            other_amount=Decimal(str(self.other_amount)),
            price=_decimal(self.price),
            method_name=self.method_name,
            last_gas=_decimal(self.last_gas),
        )
