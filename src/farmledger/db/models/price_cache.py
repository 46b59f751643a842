"""Price cache for historical token prices."""

from decimal import Decimal

from sqlalchemy import BigInteger, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.db.session import Base, TimestampMixin


class PriceCache(TimestampMixin, Base):
    """Cached USD price of a token contract. Keyed by (token_address, block)."""

    __tablename__ = "price_cache"
    __table_args__ = (UniqueConstraint("token_address", "block", name="uq_price_cache_token_address_block"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token_address: Mapped[str] = mapped_column(String(42), index=True)
    block: Mapped[int] = mapped_column(BigInteger, index=True)
    price_usd: Mapped[Decimal] = mapped_column(Numeric(28, 10))
    source: Mapped[str] = mapped_column(String(50), default="coingecko")  # coingecko / pool / manual
