"""Create payment_ledger table

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Immutable payment records, one per paid invoice.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000002"
down_revision: Union[str, None] = "20261019_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "payment_ledger",
        sa.Column("payment_id", sa.String(64), nullable=False),
        sa.Column("tx_hash", sa.String(255), nullable=False),
        sa.Column("payer_public_key", sa.String(255), nullable=False),
        sa.Column("verified_at", sa.BigInteger(), nullable=False),
        sa.Column("site_id", sa.String(255), nullable=False),
        sa.Column("amount", sa.String(length=40), nullable=False),
        sa.PrimaryKeyConstraint("payment_id"),
        sa.ForeignKeyConstraint(
            ["payment_id"],
            ["invoices.payment_id"],
            name="fk_payment_ledger_payment_id",
            ondelete="RESTRICT",
        ),
    )
    op.create_index("ix_payment_ledger_tx_hash", "payment_ledger", ["tx_hash"])
    op.create_index("ix_payment_ledger_site_id", "payment_ledger", ["site_id"])


def downgrade() -> None:
    op.drop_index("ix_payment_ledger_site_id", table_name="payment_ledger")
    op.drop_index("ix_payment_ledger_tx_hash", table_name="payment_ledger")
    op.drop_table("payment_ledger")
