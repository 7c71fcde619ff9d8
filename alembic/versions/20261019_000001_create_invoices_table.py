"""Create invoices table

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

Payment invoices keyed by payment_id. Expiry is derived from expires_at and never stored.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "invoices",
        sa.Column("payment_id", sa.String(64), nullable=False),
        sa.Column("site_id", sa.String(255), nullable=False),
        sa.Column("url_hash", sa.String(255), nullable=False),
        sa.Column("amount", sa.String(length=40), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "PAID", "EXPIRED", name="invoice_status", create_constraint=True),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("payment_id"),
    )
    op.create_index("ix_invoices_site_id", "invoices", ["site_id"])
    op.create_index("ix_invoices_expires_at", "invoices", ["expires_at"])
    op.create_index("ix_invoices_status", "invoices", ["status"])


def downgrade() -> None:
    op.drop_index("ix_invoices_status", table_name="invoices")
    op.drop_index("ix_invoices_expires_at", table_name="invoices")
    op.drop_index("ix_invoices_site_id", table_name="invoices")
    op.drop_table("invoices")
    sa.Enum(name="invoice_status").drop(op.get_bind(), checkfirst=True)
