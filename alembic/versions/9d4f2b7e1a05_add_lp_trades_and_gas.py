"""add lp_trades table and transfers.last_gas

Revision ID: 9d4f2b7e1a05
Revises: 7c1e4a9b2d30
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "9d4f2b7e1a05"
down_revision: Union[str, Sequence[str], None] = "7c1e4a9b2d30"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("transfers", sa.Column("last_gas", sa.Numeric(20, 9), nullable=True))

    op.create_table(
        "lp_trades",
        sa.Column("id", sa.String(90), nullable=False),
        sa.Column("pair", sa.String(42), nullable=False),
        sa.Column("block", sa.BigInteger(), nullable=False),
        sa.Column("block_date", sa.BigInteger(), nullable=False),
        sa.Column("log_index", sa.Integer(), nullable=False),
        sa.Column("tx_hash", sa.String(66), nullable=False),
        sa.Column("owner", sa.String(42), nullable=True),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("amount", sa.Numeric(38, 18), nullable=False),
        sa.Column("other_coin", sa.String(42), nullable=False),
        sa.Column("other_amount", sa.Numeric(38, 18), nullable=False),
        sa.Column("price", sa.Numeric(28, 10), nullable=True),
        sa.Column("method_name", sa.String(100), nullable=True),
        sa.Column("last_gas", sa.Numeric(20, 9), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_lp_trades")),
    )
    op.create_index("ix_lp_trades_owner_block_date", "lp_trades", ["owner", "block_date"])
    op.create_index("ix_lp_trades_pair_block_date", "lp_trades", ["pair", "block_date"])


def downgrade() -> None:
    op.drop_index("ix_lp_trades_pair_block_date", table_name="lp_trades")
    op.drop_index("ix_lp_trades_owner_block_date", table_name="lp_trades")
    op.drop_table("lp_trades")
    op.drop_column("transfers", "last_gas")
