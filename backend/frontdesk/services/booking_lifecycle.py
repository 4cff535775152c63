"""Booking lifecycle — opening a stay, editing it, and checking it out.

State machine: ``ACTIVE -> CHECKED_OUT`` (terminal). A booking is created
together with its room claim and only leaves ACTIVE through the room
settlement in ``frontdesk.services.settlement``.
"""

import logging
import math
import uuid
from datetime import datetime

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.auth.identity import Actor
from frontdesk.database import utcnow
from frontdesk.errors import ConflictError, NotFoundError, ValidationError
from frontdesk.models.booking import Booking
from frontdesk.models.enums import BookingStatus, IdType, PaymentStatus
from frontdesk.models.food import FoodOrder
from frontdesk.models.invoice import Invoice
from frontdesk.models.payment import Payment
from frontdesk.services import room_registry

logger = logging.getLogger(__name__)

# Status and room are never edited directly; checkout_date only once checked out.
EDITABLE_FIELDS = frozenset(
    {
        "guest_name",
        "id_type",
        "id_number",
        "guest_mobile",
        "guest_address",
        "room_price",
        "tariff",
        "additional_guests",
        "additional_guest_charges",
        "check_in_date",
        "checkout_date",
    }
)
_REQUIRED_FIELDS = frozenset(
    {
        "guest_name",
        "id_type",
        "room_price",
        "additional_guests",
        "additional_guest_charges",
        "check_in_date",
    }
)

_SECONDS_PER_DAY = 24 * 60 * 60


def stay_nights(check_in: datetime, until: datetime) -> int:
    """Nights charged for a stay: elapsed days rounded up, at least one."""
    elapsed = (until - check_in).total_seconds()
    return max(1, math.ceil(elapsed / _SECONDS_PER_DAY))


def room_tariff(booking: Booking, until: datetime) -> int:
    """Room charges for the stay: the agreed tariff, else nights x nightly price."""
    if booking.tariff is not None:
        return booking.tariff
    return booking.room_price * stay_nights(booking.check_in_date, until)


async def get_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


async def list_bookings(
    db: AsyncSession,
    status: BookingStatus | None = None,
    payment_pending: bool = False,
) -> list[Booking]:
    """Bookings newest first.

    ``payment_pending`` selects checked-out stays that still have a PENDING
    payment, regardless of ``status``.
    """
    query = select(Booking).order_by(Booking.check_in_date.desc())
    if payment_pending:
        pending = exists().where(Payment.booking_id == Booking.id, Payment.status == PaymentStatus.PENDING)
        query = query.where(Booking.status == BookingStatus.CHECKED_OUT, pending)
    elif status is not None:
        query = query.where(Booking.status == status)
    result = await db.execute(query)
    return list(result.scalars().all())


async def open_booking(
    db: AsyncSession,
    actor: Actor,
    *,
    room_id: uuid.UUID,
    guest_name: str,
    id_type: IdType,
    room_price: int,
    id_number: str | None = None,
    guest_mobile: str | None = None,
    guest_address: str | None = None,
    tariff: int | None = None,
    additional_guests: int = 0,
    additional_guest_charges: int = 0,
    check_in_date: datetime | None = None,
) -> Booking:
    """Claim the room and create an ACTIVE booking for it, atomically.

    Raises:
        NotFoundError: unknown room.
        NotAvailable: the room is occupied (or was claimed concurrently).
    """
    if room_price <= 0:
        raise ValidationError("Room price must be greater than zero")

    async with db.begin_nested():
        room = await room_registry.claim(db, room_id)
        booking = Booking(
            room=room,
            guest_name=guest_name,
            id_type=id_type,
            id_number=id_number,
            guest_mobile=guest_mobile,
            guest_address=guest_address,
            check_in_date=check_in_date or utcnow(),
            room_price=room_price,
            tariff=tariff,
            additional_guests=additional_guests,
            additional_guest_charges=additional_guest_charges,
            status=BookingStatus.ACTIVE,
            created_by=actor.user_id,
        )
        db.add(booking)
        await db.flush()

    logger.info("Booking %s opened in room %s by %s", booking.id, room.room_number, actor.user_id)
    return booking


async def update_booking(db: AsyncSession, actor: Actor, booking_id: uuid.UUID, changes: dict) -> Booking:
    """Apply an allow-listed set of field edits.

    Allowed regardless of status; an invoice already issued keeps its own
    snapshot and is not affected.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    cleared = sorted(field for field in changes.keys() & _REQUIRED_FIELDS if changes[field] is None)
    if cleared:
        raise ValidationError(f"Fields cannot be empty: {', '.join(cleared)}")

    booking = await get_booking(db, booking_id)

    if "checkout_date" in changes:
        if booking.status != BookingStatus.CHECKED_OUT:
            raise ValidationError("Checkout date can only be edited after checkout")
        if changes["checkout_date"] is None:
            raise ValidationError("A checked-out booking must keep its checkout date")

    check_in = changes.get("check_in_date") or booking.check_in_date
    checkout = changes.get("checkout_date", booking.checkout_date)
    if checkout is not None and checkout < check_in:
        raise ValidationError("Checkout date must be after check-in date")

    if "room_price" in changes and changes["room_price"] <= 0:
        raise ValidationError("Room price must be greater than zero")

    for field, value in changes.items():
        setattr(booking, field, value)
    await db.flush()
    logger.info("Booking %s updated by %s: %s", booking.id, actor.user_id, ", ".join(sorted(changes)))
    return booking


async def mark_checked_out(db: AsyncSession, booking: Booking, when: datetime) -> Booking:
    """ACTIVE -> CHECKED_OUT. Only the room settlement calls this."""
    if booking.status != BookingStatus.ACTIVE:
        raise ConflictError("Booking already checked out")
    booking.status = BookingStatus.CHECKED_OUT
    booking.checkout_date = when
    await db.flush()
    return booking


async def checkout(db: AsyncSession, actor: Actor, booking_id: uuid.UUID, gst, **options) -> Invoice:
    """Check a booking out by issuing its room bill."""
    from frontdesk.services import settlement

    return await settlement.settle_room(db, actor, booking_id, gst, **options)


async def delete_booking(db: AsyncSession, actor: Actor, booking_id: uuid.UUID) -> None:
    """Remove a finished booking together with its orders, invoices and payments."""
    actor.require_manager("delete bookings")
    booking = await get_booking(db, booking_id)
    if booking.is_active:
        raise ConflictError("Check the booking out before deleting it")

    async with db.begin_nested():
        await db.execute(delete(Payment).where(Payment.booking_id == booking.id))
        await db.execute(delete(FoodOrder).where(FoodOrder.booking_id == booking.id))
        await db.execute(delete(Invoice).where(Invoice.booking_id == booking.id))
        await db.delete(booking)
        await db.flush()

    logger.info("Booking %s deleted by %s", booking_id, actor.user_id)
