"""Create payments and receipt_counters tables

Revision ID: 20260110_000002
Revises: 20260110_000001
Create Date: 2026-01-10

Payments with per-month receipt numbers (MA-YYYYMM-####) and the
counter rows the numbers are drawn from.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20260110_000002"
down_revision: Union[str, None] = "20260110_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "receipt_counters",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("month_key", sa.String(7), nullable=False),
        sa.Column("last_number", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("last_number >= 1", name="ck_receipt_counters_last_number_positive"),
    )
    op.create_index("ix_receipt_counters_month_key", "receipt_counters", ["month_key"], unique=True)

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("created_by_user_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column(
            "category",
            sa.Enum(
                "ADMISSION", "MONTHLY", "MODEL_TEST", "OTHER",
                name="payment_category",
                create_constraint=True,
            ),
            nullable=False,
        ),
        sa.Column("applies_to_month", sa.Date(), nullable=False),
        sa.Column("paid_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("receipt_no", sa.String(20), nullable=True),
        sa.Column("receipt_issued_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["student_id"],
            ["students.id"],
            name="fk_payments_student_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["created_by_user_id"],
            ["users.id"],
            name="fk_payments_created_by_user_id",
        ),
        sa.UniqueConstraint("receipt_no", name="uq_payments_receipt_no"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_payments_student_id", "payments", ["student_id"])
    op.create_index("ix_payments_student_month", "payments", ["student_id", "applies_to_month"])


def downgrade() -> None:
    op.drop_index("ix_payments_student_month", table_name="payments")
    op.drop_index("ix_payments_student_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_receipt_counters_month_key", table_name="receipt_counters")
    op.drop_table("receipt_counters")
    op.execute("DROP TYPE IF EXISTS payment_category")
