"""Hotel identity printed on every bill."""

from decimal import Decimal

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class HotelSettings(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Single-row table; absent row means configuration fallbacks apply."""

    __tablename__ = "hotel_settings"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), default=None)
    gstin: Mapped[str | None] = mapped_column(String(32), default=None)
    default_gst_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<HotelSettings(name={self.name!r}, gstin={self.gstin!r})>"
