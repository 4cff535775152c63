"""Payment ledger — payments recorded against invoices."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.auth.identity import Actor
from frontdesk.errors import NotFoundError, ValidationError
from frontdesk.models.enums import PaymentMode, PaymentStatus
from frontdesk.models.invoice import Invoice
from frontdesk.models.payment import Payment

logger = logging.getLogger(__name__)


async def record_payment(
    db: AsyncSession,
    actor: Actor,
    invoice: Invoice,
    mode: PaymentMode,
    status: PaymentStatus,
    amount: int | None = None,
) -> Payment:
    """Record a payment for ``invoice``; ``amount`` defaults to the invoice total."""
    if amount is None:
        amount = invoice.total_amount
    if amount <= 0:
        raise ValidationError("Payment amount must be greater than zero")

    payment = Payment(
        booking_id=invoice.booking_id,
        invoice_id=invoice.id,
        amount=amount,
        mode=mode,
        status=status,
    )
    db.add(payment)
    await db.flush()
    logger.info(
        "Payment %s of %d (%s, %s) for invoice %s by %s",
        payment.id,
        amount,
        mode.value,
        status.value,
        invoice.invoice_number,
        actor.user_id,
    )
    return payment


async def pay_invoice(
    db: AsyncSession,
    actor: Actor,
    invoice_id: uuid.UUID,
    mode: PaymentMode,
    status: PaymentStatus,
    amount: int | None = None,
    booking_id: uuid.UUID | None = None,
) -> Payment:
    """Mark a bill paid (or owed). ``booking_id``, when given, must match the invoice's."""
    invoice = await db.get(Invoice, invoice_id)
    if invoice is None or (booking_id is not None and invoice.booking_id != booking_id):
        raise NotFoundError("Invoice not found")
    return await record_payment(db, actor, invoice, mode, status, amount)


async def get_payment(db: AsyncSession, payment_id: uuid.UUID) -> Payment:
    payment = await db.get(Payment, payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment


async def update_payment(
    db: AsyncSession,
    actor: Actor,
    payment_id: uuid.UUID,
    status: PaymentStatus | None = None,
    amount: int | None = None,
) -> Payment:
    """Correct a payment's status and/or amount."""
    payment = await get_payment(db, payment_id)
    if amount is not None:
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        payment.amount = amount
    if status is not None:
        payment.status = status
    await db.flush()
    logger.info("Payment %s corrected by %s: status=%s amount=%d", payment.id, actor.user_id, payment.status.value, payment.amount)
    return payment


async def list_payments(
    db: AsyncSession,
    status: PaymentStatus | None = None,
    booking_id: uuid.UUID | None = None,
) -> list[Payment]:
    query = select(Payment).order_by(Payment.created_at.desc())
    if status is not None:
        query = query.where(Payment.status == status)
    if booking_id is not None:
        query = query.where(Payment.booking_id == booking_id)
    result = await db.execute(query)
    return list(result.scalars().all())
