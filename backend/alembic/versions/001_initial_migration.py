"""Initial migration: create customer, product, session, payment, verification tables

Revision ID: 001_initial
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "customer",
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=25), nullable=False),
        sa.Column("address", sa.String(length=100), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("customer_id"),
    )
    op.create_index("ix_customer_email", "customer", ["email"], unique=True)

    op.create_table(
        "product",
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("min_monthly_rent", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("max_monthly_rent", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("product_id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.customer_id"]),
    )
    op.create_index("ix_product_customer_id", "product", ["customer_id"])

    op.create_table(
        "session",
        sa.Column("session_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("user_agent", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("session_id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.customer_id"]),
    )
    op.create_index("ix_session_customer_id", "session", ["customer_id"])

    op.create_table(
        "payment",
        sa.Column("payment_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("product_id", sa.String(length=36), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("method", sa.String(length=30), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("external_ref", sa.String(length=100), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("payment_id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.customer_id"]),
        sa.ForeignKeyConstraint(["product_id"], ["product.product_id"]),
    )
    op.create_index("ix_payment_customer_id", "payment", ["customer_id"])
    op.create_index("ix_payment_product_id", "payment", ["product_id"])
    op.create_index("ix_payment_status", "payment", ["status"])

    op.create_table(
        "verification",
        sa.Column("verification_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("session_id", sa.String(length=36), nullable=False),
        sa.Column("payment_id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("status", sa.String(length=10), nullable=False),
        sa.Column("attempts", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("verification_id"),
        sa.ForeignKeyConstraint(["customer_id"], ["customer.customer_id"]),
        sa.ForeignKeyConstraint(["session_id"], ["session.session_id"]),
        sa.ForeignKeyConstraint(["payment_id"], ["payment.payment_id"]),
    )
    op.create_index("ix_verification_customer_id", "verification", ["customer_id"])
    op.create_index("ix_verification_session_id", "verification", ["session_id"])
    op.create_index("ix_verification_payment_id", "verification", ["payment_id"])
    op.create_index("ix_verification_created_at", "verification", ["created_at"])


def downgrade() -> None:
    op.drop_table("verification")
    op.drop_table("payment")
    op.drop_table("session")
    op.drop_table("product")
    op.drop_table("customer")
