"""Settlement engine — turns unbilled charges into immutable invoices.

Three flows:

* **food** (kitchen bill / food bill): bills a booking's unbilled food orders,
  optionally a caller-chosen subset, and stamps them so they can never be
  billed again;
* **room** (checkout bill): tariff + additional guests + whatever food is
  still unbilled, then checks the booking out and frees the room;
* **manual**: a walk-in bill with caller-supplied charges and no side effects.

Each flow is one savepoint: the invoice row and every side effect commit
together or not at all. All amounts are integer minor units.
"""

import logging
import secrets
import string
import time
import uuid
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.auth.identity import Actor
from frontdesk.database import utcnow
from frontdesk.errors import AlreadySettled, ConflictError, NotFoundError, NothingToSettle, ValidationError
from frontdesk.models.booking import Booking
from frontdesk.models.enums import BookingStatus, InvoiceType, PaymentMode, PaymentStatus
from frontdesk.models.food import FoodOrder
from frontdesk.models.invoice import Invoice
from frontdesk.money import percent_of
from frontdesk.services import booking_lifecycle, food_ledger, payment_ledger, room_registry

logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.digits + string.ascii_uppercase
_SUFFIX_LENGTH = 9


class FoodBillKind(str, Enum):
    """Which counter issued a food settlement; only the number prefix differs."""

    KITCHEN = "KITCHEN"
    FOOD = "FOOD-INV"


ROOM_PREFIX = "INV"


@dataclass(frozen=True)
class GstOptions:
    """GST surcharge applied on a settlement subtotal."""

    show_gst: bool = False
    percent: Decimal = Decimal("0")
    gst_number: str | None = None

    @property
    def applies(self) -> bool:
        return self.show_gst and self.percent > 0


@dataclass(frozen=True)
class Totals:
    subtotal: int
    gst_amount: int
    total: int


@dataclass(frozen=True)
class PaymentIntent:
    """Payment to record together with a checkout."""

    mode: PaymentMode
    status: PaymentStatus


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def food_subtotal(orders: Iterable[FoodOrder]) -> int:
    """Sum of price x quantity. Item-level GST is stored but never applied."""
    return sum(order.food_item.price * order.quantity for order in orders)


def compute_totals(
    charges: int,
    gst: GstOptions,
    round_off: int = 0,
    advance: int = 0,
    untaxed: int = 0,
) -> Totals:
    """``total = charges + untaxed + gst - advance - round_off``.

    GST is levied on ``charges`` only, and is 0 unless enabled with a positive
    rate. ``untaxed`` covers charges billed without GST (food on manual bills).
    """
    gst_amount = percent_of(charges, gst.percent) if gst.applies else 0
    subtotal = charges + untaxed
    return Totals(
        subtotal=subtotal,
        gst_amount=gst_amount,
        total=subtotal + gst_amount - advance - round_off,
    )


def check_payable(totals: Totals, advance: int) -> None:
    """Reject an advance larger than the bill, or a bill that comes out negative."""
    if advance > totals.subtotal + totals.gst_amount:
        raise ValidationError("Advance cannot exceed the bill amount")
    if totals.total < 0:
        raise ValidationError("Bill total cannot be negative")


def generate_invoice_number(prefix: str, now_ms: int | None = None) -> str:
    """``<prefix>-<unix millis>-<9 upper-case base-36 chars>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}-{now_ms}-{suffix}"


def settlement_group_for(booking: Booking) -> str:
    """Key shared by every non-manual invoice of one occupancy.

    A booking is a single occupancy cycle (checkout is terminal), so the
    booking id is the whole key.
    """
    return booking.id.hex


def _gst_snapshot(gst: GstOptions) -> dict:
    return {
        "gst_enabled": gst.applies,
        "gst_percent": gst.percent if gst.applies else Decimal("0"),
        "gst_number": gst.gst_number if gst.applies else None,
    }


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def get_invoice(db: AsyncSession, invoice_id: uuid.UUID) -> Invoice:
    result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
    invoice = result.scalar_one_or_none()
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


async def list_invoices(
    db: AsyncSession,
    invoice_type: InvoiceType | None = None,
    booking_id: uuid.UUID | None = None,
    is_manual: bool | None = None,
) -> list[Invoice]:
    query = select(Invoice).order_by(Invoice.created_at.desc(), Invoice.invoice_number.desc())
    if invoice_type is not None:
        query = query.where(Invoice.invoice_type == invoice_type)
    if booking_id is not None:
        query = query.where(Invoice.booking_id == booking_id)
    if is_manual is not None:
        query = query.where(Invoice.is_manual.is_(is_manual))
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_food_invoices(db: AsyncSession, booking_id: uuid.UUID) -> list[Invoice]:
    """Kitchen and food bills issued for one booking, newest first."""
    return await list_invoices(db, invoice_type=InvoiceType.FOOD, booking_id=booking_id)


async def find_room_settlement(db: AsyncSession, booking_id: uuid.UUID) -> Invoice | None:
    """The booking's non-manual ROOM invoice, if it has been settled."""
    result = await db.execute(
        select(Invoice).where(
            Invoice.booking_id == booking_id,
            Invoice.invoice_type == InvoiceType.ROOM,
            Invoice.is_manual.is_(False),
        )
    )
    return result.scalars().first()


# ---------------------------------------------------------------------------
# Food settlement
# ---------------------------------------------------------------------------


async def settle_food(
    db: AsyncSession,
    actor: Actor,
    booking_id: uuid.UUID,
    gst: GstOptions,
    order_ids: Collection[uuid.UUID] | None = None,
    kind: FoodBillKind = FoodBillKind.KITCHEN,
) -> Invoice:
    """Bill a booking's unbilled food orders (or the given subset of them).

    Raises:
        NotFoundError: unknown booking.
        NothingToSettle: no unbilled orders match.
        AlreadyInvoiced: another settlement stamped one of the orders first;
            the invoice is rolled back with the savepoint.
    """
    booking = await booking_lifecycle.get_booking(db, booking_id)
    if order_ids is not None and not order_ids:
        raise ValidationError("order_ids must not be empty when given")

    async with db.begin_nested():
        orders = await food_ledger.list_unbilled(db, booking.id, order_ids, lock=True)
        if not orders:
            raise NothingToSettle("No unbilled food orders found")

        food_charges = food_subtotal(orders)
        totals = compute_totals(food_charges, gst)

        invoice = Invoice(
            invoice_number=generate_invoice_number(kind.value),
            invoice_type=InvoiceType.FOOD,
            is_manual=False,
            booking_id=booking.id,
            settlement_group=settlement_group_for(booking),
            guest_name=booking.guest_name,
            room_number=booking.room.room_number,
            room_type=booking.room.room_type.name,
            room_charges=0,
            food_charges=food_charges,
            tariff=0,
            additional_guest_charges=0,
            gst_amount=totals.gst_amount,
            total_amount=totals.total,
            created_by=actor.user_id,
            **_gst_snapshot(gst),
        )
        db.add(invoice)
        await db.flush()

        await food_ledger.stamp_orders(db, orders, invoice.id)

    logger.info(
        "%s bill %s for booking %s: %d orders, total %d",
        kind.name.title(),
        invoice.invoice_number,
        booking.id,
        len(orders),
        invoice.total_amount,
    )
    return invoice


# ---------------------------------------------------------------------------
# Room settlement
# ---------------------------------------------------------------------------


async def settle_room(
    db: AsyncSession,
    actor: Actor,
    booking_id: uuid.UUID,
    gst: GstOptions,
    round_off: int = 0,
    advance: int = 0,
    payment: PaymentIntent | None = None,
    as_of: datetime | None = None,
) -> Invoice:
    """Issue the checkout bill and close the stay.

    Food already covered by kitchen bills is excluded; anything still
    unbilled is included and stamped with this invoice. For an ACTIVE booking
    the booking is checked out and its room released in the same savepoint.
    A CHECKED_OUT booking whose room bill was deleted may be billed again
    (no second checkout happens).

    Raises:
        AlreadySettled: the booking already has a non-manual room invoice.
        ValidationError: the advance exceeds the bill, or the total would be
            negative.
    """
    booking = await booking_lifecycle.get_booking(db, booking_id)
    if await find_room_settlement(db, booking.id) is not None:
        raise AlreadySettled("Booking already has a room bill")

    now = as_of or utcnow()

    try:
        async with db.begin_nested():
            # Serialize concurrent checkouts of one booking, then re-check
            # under the lock; the partial unique index backs this up.
            await db.execute(
                select(Booking)
                .where(Booking.id == booking.id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            if await find_room_settlement(db, booking.id) is not None:
                raise AlreadySettled("Booking already has a room bill")
            regenerating = booking.status == BookingStatus.CHECKED_OUT

            orders = await food_ledger.list_unbilled(db, booking.id, lock=True)
            food_charges = food_subtotal(orders)
            until = booking.checkout_date if regenerating else now
            nights = booking_lifecycle.stay_nights(booking.check_in_date, until)
            room_charges = booking_lifecycle.room_tariff(booking, until)

            totals = compute_totals(
                room_charges + booking.additional_guest_charges + food_charges,
                gst,
                round_off=round_off,
                advance=advance,
            )
            check_payable(totals, advance)

            invoice = Invoice(
                invoice_number=generate_invoice_number(ROOM_PREFIX),
                invoice_type=InvoiceType.ROOM,
                is_manual=False,
                booking_id=booking.id,
                settlement_group=settlement_group_for(booking),
                guest_name=booking.guest_name,
                room_number=booking.room.room_number,
                room_type=booking.room.room_type.name,
                room_charges=room_charges,
                food_charges=food_charges,
                tariff=booking.room_price,
                nights=nights,
                additional_guests=booking.additional_guests,
                additional_guest_charges=booking.additional_guest_charges,
                gst_amount=totals.gst_amount,
                advance_amount=advance,
                round_off=round_off,
                total_amount=totals.total,
                bill_date=now,
                created_by=actor.user_id,
                **_gst_snapshot(gst),
            )
            db.add(invoice)
            await db.flush()

            await food_ledger.stamp_orders(db, orders, invoice.id)

            if not regenerating:
                await booking_lifecycle.mark_checked_out(db, booking, now)
                await room_registry.release(db, booking.room_id)

            if payment is not None and invoice.total_amount > 0:
                await payment_ledger.record_payment(db, actor, invoice, payment.mode, payment.status)
            elif payment is not None:
                logger.info("Room bill %s fully covered by advance, no payment recorded", invoice.invoice_number)
    except IntegrityError:
        raise AlreadySettled("Booking already has a room bill") from None

    if regenerating:
        logger.warning("Room bill %s regenerated for checked-out booking %s", invoice.invoice_number, booking.id)
    else:
        logger.info(
            "Booking %s checked out with room bill %s, total %d",
            booking.id,
            invoice.invoice_number,
            invoice.total_amount,
        )
    return invoice


# ---------------------------------------------------------------------------
# Manual settlement
# ---------------------------------------------------------------------------


async def settle_manual(
    db: AsyncSession,
    actor: Actor,
    *,
    guest_name: str,
    gst: GstOptions,
    booking_id: uuid.UUID | None = None,
    room_number: str | None = None,
    room_type: str | None = None,
    room_charges: int = 0,
    tariff: int = 0,
    food_charges: int = 0,
    additional_guests: int = 0,
    additional_guest_charges: int = 0,
    advance: int = 0,
    round_off: int = 0,
    bill_date: datetime | None = None,
    invoice_type: InvoiceType = InvoiceType.MANUAL,
) -> Invoice:
    """Persist a walk-in bill. No booking, room or food-order side effects.

    ``booking_id`` is only a reference for the printed bill; it does not join
    the booking's settlement group.
    """
    if booking_id is not None:
        await booking_lifecycle.get_booking(db, booking_id)

    # Food on a walk-in bill is added after GST.
    totals = compute_totals(
        room_charges + tariff + additional_guest_charges,
        gst,
        round_off=round_off,
        advance=advance,
        untaxed=food_charges,
    )
    check_payable(totals, advance)
    invoice = Invoice(
        invoice_number=generate_invoice_number(ROOM_PREFIX),
        invoice_type=invoice_type,
        is_manual=True,
        booking_id=booking_id,
        settlement_group=None,
        guest_name=guest_name,
        room_number=room_number,
        room_type=room_type,
        room_charges=room_charges,
        food_charges=food_charges,
        tariff=tariff,
        additional_guests=additional_guests,
        additional_guest_charges=additional_guest_charges,
        gst_amount=totals.gst_amount,
        advance_amount=advance,
        round_off=round_off,
        total_amount=totals.total,
        bill_date=bill_date or utcnow(),
        created_by=actor.user_id,
        **_gst_snapshot(gst),
    )
    async with db.begin_nested():
        db.add(invoice)
    logger.info("Manual bill %s for %r, total %d", invoice.invoice_number, guest_name, invoice.total_amount)
    return invoice


# ---------------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------------


async def delete_invoice(db: AsyncSession, actor: Actor, invoice_id: uuid.UUID) -> list[uuid.UUID]:
    """Delete an invoice; a booking's room bill takes its food bills with it.

    Billed food orders keep pointing at the deleted invoice ids and are not
    made billable again. Returns the ids of every invoice removed.
    """
    actor.require_manager("delete invoices")
    invoice = await get_invoice(db, invoice_id)
    removed = [invoice.id]

    async with db.begin_nested():
        if invoice.is_room_settlement:
            if invoice.settlement_group is None:
                raise ConflictError("Room bill has no settlement group")
            result = await db.execute(
                select(Invoice.id).where(
                    Invoice.settlement_group == invoice.settlement_group,
                    Invoice.invoice_type == InvoiceType.FOOD,
                )
            )
            food_ids = list(result.scalars().all())
            if food_ids:
                await db.execute(
                    delete(Invoice)
                    .where(Invoice.id.in_(food_ids))
                    .execution_options(synchronize_session="fetch")
                )
                removed.extend(food_ids)

        await db.delete(invoice)
        await db.flush()

    logger.info("Deleted invoice(s) %s by %s", ", ".join(str(i) for i in removed), actor.user_id)
    return removed
