"""create restaurants and orders

Revision ID: 202606010900
Revises:
Create Date: 2026-06-01 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202606010900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "restaurants",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=False),
        sa.Column("cuisine", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_restaurants_name", "restaurants", ["name"], unique=False)
    op.create_index("ix_restaurants_location", "restaurants", ["location"], unique=False)
    op.create_index("ix_restaurants_cuisine", "restaurants", ["cuisine"], unique=False)

    op.create_table(
        "orders",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("restaurant_id", sa.BigInteger(), nullable=False),
        sa.Column("order_amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("order_time", sa.DateTime(timezone=False), nullable=False),
        sa.CheckConstraint("order_amount >= 0", name="ck_orders_order_amount_non_negative"),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_restaurant_id", "orders", ["restaurant_id"], unique=False)
    op.create_index("ix_orders_order_time", "orders", ["order_time"], unique=False)
    op.create_index("ix_orders_order_amount", "orders", ["order_amount"], unique=False)
    op.create_index(
        "ix_orders_restaurant_order_time",
        "orders",
        ["restaurant_id", "order_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_orders_restaurant_order_time", table_name="orders")
    op.drop_index("ix_orders_order_amount", table_name="orders")
    op.drop_index("ix_orders_order_time", table_name="orders")
    op.drop_index("ix_orders_restaurant_id", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_restaurants_cuisine", table_name="restaurants")
    op.drop_index("ix_restaurants_location", table_name="restaurants")
    op.drop_index("ix_restaurants_name", table_name="restaurants")
    op.drop_table("restaurants")
