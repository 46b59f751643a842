"""TransferRecord: persisted token transfer, keyed by tx hash + log index."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.db.session import Base, TimestampMixin
from farmledger.domain.enums import TransferType
from farmledger.domain.models.transfer import Transfer


class TransferRecord(TimestampMixin, Base):
    """One row per transfer log. `id` is the dedup key."""

    __tablename__ = "transfers"

    id: Mapped[str] = mapped_column(String(90), primary_key=True)  # <tx_hash>_<log_index>
    token: Mapped[str] = mapped_column(String(42))
    block: Mapped[int] = mapped_column(BigInteger)
    block_date: Mapped[int] = mapped_column(BigInteger)
    log_index: Mapped[int] = mapped_column(Integer, default=0)
    tx_hash: Mapped[str] = mapped_column(String(66))
    owner: Mapped[str] = mapped_column(String(42))
    recipient: Mapped[str] = mapped_column(String(42))
    value: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    balance_owner: Mapped[Decimal] = mapped_column(Numeric(38, 18), default=Decimal(0))
    balance_recipient: Mapped[Decimal] = mapped_column(Numeric(38, 18), default=Decimal(0))
    type: Mapped[str] = mapped_column(String(20), default=TransferType.COMMON.value)
    method_name: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    tx_from: Mapped[Optional[str]] = mapped_column(String(42), default=None)
    last_gas: Mapped[Optional[Decimal]] = mapped_column(Numeric(20, 9), default=None)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(28, 10), default=None)
    profit: Mapped[Optional[Decimal]] = mapped_column(Numeric(38, 18), default=None)
    profit_usd: Mapped[Optional[Decimal]] = mapped_column(Numeric(38, 18), default=None)

    __table_args__ = (
        Index("ix_transfers_owner_block_date", "owner", "block_date"),
        Index("ix_transfers_recipient_block_date", "recipient", "block_date"),
        Index("ix_transfers_block_date", "block_date"),
    )

    @classmethod
    def from_domain(cls, transfer: Transfer) -> "TransferRecord":
        return cls(
            id=transfer.id,
            token=transfer.token.lower(),
            block=transfer.block,
            block_date=transfer.block_date,
            log_index=transfer.log_index,
            tx_hash=transfer.tx_hash.lower(),
            owner=transfer.owner.lower(),
            recipient=transfer.recipient.lower(),
            value=transfer.value,
            balance_owner=transfer.balance_owner,
            balance_recipient=transfer.balance_recipient,
            type=transfer.type.value,
            method_name=transfer.method_name,
            tx_from=transfer.tx_from,
            last_gas=transfer.last_gas,
            price=transfer.price,
            profit=transfer.profit,
            profit_usd=transfer.profit_usd,
        )

    def apply(self, transfer: Transfer) -> None:
        """Copy enrichment fields (balances, profit) back from the domain object."""
        self.balance_owner = transfer.balance_owner
        self.balance_recipient = transfer.balance_recipient
        self.price = transfer.price
        self.profit = transfer.profit
        self.profit_usd = transfer.profit_usd

    def to_domain(self) -> Transfer:
        return Transfer(
            id=self.id,
            token=self.token,
            block=self.block,
            block_date=self.block_date,
            log_index=self.log_index,
            tx_hash=self.tx_hash,
            owner=self.owner,
            recipient=self.recipient,
            value=Decimal(str(self.value)),
            balance_owner=Decimal(str(self.balance_owner or 0)),
            balance_recipient=Decimal(str(self.balance_recipient or 0)),
            type=TransferType(self.type),
            method_name=self.method_name,
            tx_from=self.tx_from,
            last_gas=Decimal(str(self.last_gas)) if self.last_gas is not None else None,
            price=Decimal(str(self.price)) if self.price is not None else None,
            profit=Decimal(str(self.profit)) if self.profit is not None else None,
            profit_usd=Decimal(str(self.profit_usd)) if self.profit_usd is not None else None,
        )
