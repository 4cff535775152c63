"""Booking model — one guest's occupancy of one room."""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow
from frontdesk.models.enums import BookingStatus, IdType
from frontdesk.models.room import Room


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Aggregate root for food orders, invoices and payments of one stay.

    ``checkout_date`` is set iff ``status`` is CHECKED_OUT. Money columns are
    minor units.
    """

    __tablename__ = "bookings"

    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)
    id_type: Mapped[IdType] = mapped_column(Enum(IdType, native_enum=False, length=20), nullable=False)
    id_number: Mapped[str | None] = mapped_column(String(100), default=None)
    guest_mobile: Mapped[str | None] = mapped_column(String(50), default=None)
    guest_address: Mapped[str | None] = mapped_column(Text, default=None)

    check_in_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    checkout_date: Mapped[datetime | None] = mapped_column(DateTime, default=None)

    room_price: Mapped[int] = mapped_column(BigInteger, nullable=False)  # per night
    tariff: Mapped[int | None] = mapped_column(BigInteger, default=None)  # whole stay, overrides nights x price
    additional_guests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    additional_guest_charges: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=20),
        default=BookingStatus.ACTIVE,
        nullable=False,
        index=True,
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        default=None,
    )

    room: Mapped[Room] = relationship(lazy="selectin")

    __table_args__ = (Index("ix_bookings_room_id_status", "room_id", "status"),)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, room_id={self.room_id}, status={self.status.value})>"
