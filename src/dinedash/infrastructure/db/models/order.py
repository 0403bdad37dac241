from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from dinedash.infrastructure.db.models.restaurant import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, index=True)
    # wall-clock time as recorded by the restaurant; bucketing uses it as stored
    order_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("order_amount >= 0", name="ck_orders_order_amount_non_negative"),
        Index("ix_orders_restaurant_order_time", "restaurant_id", "order_time"),
    )
