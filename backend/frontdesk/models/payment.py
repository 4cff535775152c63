"""Payment model — money received (or owed) against an invoice."""

import uuid

from sqlalchemy import BigInteger, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from frontdesk.models.enums import PaymentMode, PaymentStatus


class Payment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A single payment record. Amount is in minor units."""

    __tablename__ = "payments"

    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        default=None,
        index=True,
    )
    invoice_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("invoices.id", ondelete="SET NULL"),
        default=None,
        index=True,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mode: Mapped[PaymentMode] = mapped_column(Enum(PaymentMode, native_enum=False, length=20), nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False, length=20),
        default=PaymentStatus.PENDING,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount}, mode={self.mode.value}, status={self.status.value})>"
