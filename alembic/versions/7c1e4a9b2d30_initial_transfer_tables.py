"""initial_transfer_tables

Revision ID: 7c1e4a9b2d30
Revises:
Create Date: 2026-10-19 10:12:44.511903

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "7c1e4a9b2d30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "transfers",
        sa.Column("id", sa.String(90), nullable=False),
        sa.Column("token", sa.String(42), nullable=False),
        sa.Column("block", sa.BigInteger(), nullable=False),
        sa.Column("block_date", sa.BigInteger(), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("owner", sa.String(42), nullable=False),
        sa.Column("recipient", sa.String(42), nullable=False),
        sa.Column("value", sa.Numeric(38, 18), nullable=False),
        sa.Column("balance_owner", sa.Numeric(38, 18), nullable=False),
        sa.Column("balance_recipient", sa.Numeric(38, 18), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("method_name", sa.String(100), nullable=True),
        sa.Column("tx_from", sa.String(42), nullable=True),
        sa.Column("price", sa.Numeric(28, 10), nullable=True),
        sa.Column("profit", sa.Numeric(38, 18), nullable=True),
        sa.Column("profit_usd", sa.Numeric(38, 18), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_transfers")),
    )
    op.create_index("ix_transfers_owner_block_date", "transfers", ["owner", "block_date"])
    op.create_index("ix_transfers_recipient_block_date", "transfers", ["recipient", "block_date"])
    op.create_index("ix_transfers_block_date", "transfers", ["block_date"])

    op.create_table(
        "price_cache",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token_address", sa.String(42), nullable=False),
        sa.Column("block", sa.BigInteger(), nullable=False),
        sa.Column("price_usd", sa.Numeric(28, 10), nullable=False),
        sa.Column("source", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_price_cache")),
        sa.UniqueConstraint("token_address", "block", name="uq_price_cache_token_address_block"),
    )
    op.create_index(op.f("ix_price_cache_token_address"), "price_cache", ["token_address"])
    op.create_index(op.f("ix_price_cache_block"), "price_cache", ["block"])


def downgrade() -> None:
    op.drop_index(op.f("ix_price_cache_block"), table_name="price_cache")
    op.drop_index(op.f("ix_price_cache_token_address"), table_name="price_cache")
    op.drop_table("price_cache")
    op.drop_index("ix_transfers_block_date", table_name="transfers")
    op.drop_index("ix_transfers_recipient_block_date", table_name="transfers")
    op.drop_index("ix_transfers_owner_block_date", table_name="transfers")
    op.drop_table("transfers")
