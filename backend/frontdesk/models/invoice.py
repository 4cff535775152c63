"""Invoice model — an immutable, point-in-time settlement record."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, ForeignKey, Index, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow
from frontdesk.models.enums import InvoiceType

ROOM_SETTLEMENT_WHERE = "invoice_type = 'ROOM' AND NOT is_manual"


class Invoice(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Snapshot of the charges settled at one point in time.

    Monetary fields are minor units and are never recomputed from the booking
    or menu after creation. ``settlement_group`` ties a booking's room bill to
    its kitchen/food bills so they can be removed together.
    """

    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    invoice_type: Mapped[InvoiceType] = mapped_column(
        Enum(InvoiceType, native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    is_manual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        default=None,
        index=True,
    )
    settlement_group: Mapped[str | None] = mapped_column(String(64), default=None, index=True)

    # Snapshot
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_number: Mapped[str | None] = mapped_column(String(20), default=None)
    room_type: Mapped[str | None] = mapped_column(String(100), default=None)
    room_charges: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    food_charges: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    tariff: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    nights: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    additional_guests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    additional_guest_charges: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    gst_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    gst_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    gst_number: Mapped[str | None] = mapped_column(String(32), default=None)
    gst_amount: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    advance_amount: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    round_off: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    total_amount: Mapped[int] = mapped_column(BigInteger, nullable=False)

    bill_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        default=None,
    )

    # At most one system room bill per booking.
    __table_args__ = (
        Index(
            "uq_invoices_booking_room_settlement",
            "booking_id",
            unique=True,
            postgresql_where=text(ROOM_SETTLEMENT_WHERE),
            sqlite_where=text(ROOM_SETTLEMENT_WHERE),
        ),
    )

    @property
    def is_room_settlement(self) -> bool:
        """A booking's canonical checkout bill (cascades to its food bills)."""
        return self.invoice_type == InvoiceType.ROOM and not self.is_manual

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number={self.invoice_number!r}, type={self.invoice_type.value})>"
