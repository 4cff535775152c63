"""Food menu items and the food orders recorded against bookings."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class FoodItem(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A menu item. ``gst_percent`` is kept for display only; totals ignore it."""

    __tablename__ = "food_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)  # minor units
    gst_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<FoodItem(id={self.id}, name={self.name!r}, enabled={self.enabled})>"


class FoodOrder(UUIDPrimaryKeyMixin, Base):
    """A quantity of one food item consumed during a booking.

    ``invoice_id`` is stamped exactly once, by the settlement that bills the
    order. It is deliberately not a foreign key: deleting an invoice leaves the
    reference in place and the order stays billed.
    """

    __tablename__ = "food_orders"

    booking_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    food_item_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("food_items.id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    chef_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        default=None,
    )
    invoice_id: Mapped[uuid.UUID | None] = mapped_column(default=None, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    food_item: Mapped[FoodItem] = relationship(lazy="selectin")

    __table_args__ = (Index("ix_food_orders_booking_id_invoice_id", "booking_id", "invoice_id"),)

    @property
    def line_total(self) -> int:
        return self.food_item.price * self.quantity

    def __repr__(self) -> str:
        return f"<FoodOrder(id={self.id}, booking_id={self.booking_id}, qty={self.quantity}, invoice_id={self.invoice_id})>"
