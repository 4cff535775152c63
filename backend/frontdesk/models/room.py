"""Room and RoomType models."""

import uuid

from sqlalchemy import BigInteger, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from frontdesk.models.enums import RoomStatus


class RoomType(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A category of room (Deluxe, Suite, ...) with a default nightly price."""

    __tablename__ = "room_types"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)  # minor units
    description: Mapped[str | None] = mapped_column(Text, default=None)

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name={self.name!r})>"


class Room(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A physical room. OCCUPIED iff exactly one ACTIVE booking references it."""

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(String(20), unique=True, index=True, nullable=False)
    room_type_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    floor: Mapped[int | None] = mapped_column(Integer, default=None)
    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus, native_enum=False, length=20),
        default=RoomStatus.AVAILABLE,
        nullable=False,
        index=True,
    )

    room_type: Mapped[RoomType] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number!r}, status={self.status.value})>"
