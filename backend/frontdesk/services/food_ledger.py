"""Food order ledger — the menu and the food consumed during a booking.

An order is stamped with the id of the invoice that bills it, exactly once.
Stamped orders are immutable and never show up as unbilled again.
"""

import logging
import uuid
from collections.abc import Collection, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from frontdesk.auth.identity import Actor
from frontdesk.errors import (
    AlreadyInvoiced,
    BookingNotActive,
    InUse,
    ItemDisabled,
    NotFoundError,
    ValidationError,
)
from frontdesk.models.booking import Booking
from frontdesk.models.food import FoodItem, FoodOrder
from frontdesk.models.user import User

logger = logging.getLogger(__name__)

_FOOD_ITEM_EDITABLE = frozenset({"name", "category", "price", "gst_percent", "enabled"})


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


async def get_food_item(db: AsyncSession, food_item_id: uuid.UUID) -> FoodItem:
    result = await db.execute(select(FoodItem).where(FoodItem.id == food_item_id))
    item = result.scalar_one_or_none()
    if item is None:
        raise NotFoundError("Food item not found")
    return item


async def list_food_items(db: AsyncSession, enabled_only: bool = False) -> list[FoodItem]:
    query = select(FoodItem).order_by(FoodItem.name)
    if enabled_only:
        query = query.where(FoodItem.enabled.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_food_item(db: AsyncSession, actor: Actor, **fields) -> FoodItem:
    actor.require_manager("add menu items")
    item = FoodItem(enabled=True, **fields)
    db.add(item)
    await db.flush()
    logger.info("Food item %r added by %s", item.name, actor.user_id)
    return item


async def update_food_item(db: AsyncSession, actor: Actor, food_item_id: uuid.UUID, changes: dict) -> FoodItem:
    """Edit a menu item. Past invoices keep the price they were billed at."""
    actor.require_manager("edit menu items")
    unknown = set(changes) - _FOOD_ITEM_EDITABLE
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    item = await get_food_item(db, food_item_id)
    for field, value in changes.items():
        setattr(item, field, value)
    await db.flush()
    return item


async def delete_food_item(db: AsyncSession, actor: Actor, food_item_id: uuid.UUID) -> None:
    actor.require_manager("delete menu items")
    item = await get_food_item(db, food_item_id)

    used = await db.execute(select(func.count()).select_from(FoodOrder).where(FoodOrder.food_item_id == item.id))
    if used.scalar_one() > 0:
        raise InUse("Food item has orders; disable it instead")

    await db.delete(item)
    await db.flush()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


def _check_quantity(quantity: object) -> int:
    # bool is an int subclass; "2" and 2.0 are rejected rather than coerced.
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Quantity must be a whole number")
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    return quantity


async def _get_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


async def add_order(
    db: AsyncSession,
    actor: Actor,
    booking_id: uuid.UUID,
    food_item_id: uuid.UUID,
    quantity: int,
    chef_id: uuid.UUID | None = None,
) -> FoodOrder:
    """Record food consumed by an ACTIVE booking as a new, unbilled order."""
    quantity = _check_quantity(quantity)

    booking = await _get_booking(db, booking_id)
    if not booking.is_active:
        raise BookingNotActive("Can only add food to active bookings")

    item = await get_food_item(db, food_item_id)
    if not item.enabled:
        raise ItemDisabled(f"Food item {item.name!r} is disabled")

    if chef_id is not None:
        chef = await db.get(User, chef_id)
        if chef is None:
            raise NotFoundError("Chef not found")

    order = FoodOrder(
        booking_id=booking.id,
        food_item=item,
        quantity=quantity,
        chef_id=chef_id,
    )
    db.add(order)
    await db.flush()
    logger.info(
        "Food order %s: %d x %s for booking %s (by %s)",
        order.id,
        quantity,
        item.name,
        booking.id,
        actor.user_id,
    )
    return order


async def get_order(db: AsyncSession, order_id: uuid.UUID) -> FoodOrder:
    result = await db.execute(select(FoodOrder).where(FoodOrder.id == order_id))
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundError("Food order not found")
    return order


async def remove_order(db: AsyncSession, actor: Actor, order_id: uuid.UUID) -> None:
    """Delete an unbilled order of an ACTIVE booking."""
    order = await get_order(db, order_id)
    booking = await _get_booking(db, order.booking_id)

    if not booking.is_active:
        raise BookingNotActive("Can only remove food from active bookings")
    if order.invoice_id is not None:
        raise AlreadyInvoiced("Food order has already been billed")

    await db.delete(order)
    await db.flush()
    logger.info("Food order %s removed from booking %s by %s", order_id, booking.id, actor.user_id)


async def list_orders(db: AsyncSession, booking_id: uuid.UUID) -> list[FoodOrder]:
    """Every order of a booking, billed or not, oldest first."""
    result = await db.execute(
        select(FoodOrder).where(FoodOrder.booking_id == booking_id).order_by(FoodOrder.created_at, FoodOrder.id)
    )
    return list(result.scalars().all())


async def list_unbilled(
    db: AsyncSession,
    booking_id: uuid.UUID,
    order_ids: Collection[uuid.UUID] | None = None,
    *,
    lock: bool = False,
) -> list[FoodOrder]:
    """Orders of ``booking_id`` not yet attributed to an invoice.

    ``order_ids`` narrows the result to a caller-chosen subset (e.g. one
    sitting); ids that are billed or belong elsewhere simply drop out.
    ``lock`` takes row locks for the rest of the transaction where the
    database supports ``SELECT ... FOR UPDATE``.
    """
    query = (
        select(FoodOrder)
        .where(FoodOrder.booking_id == booking_id, FoodOrder.invoice_id.is_(None))
        .order_by(FoodOrder.created_at, FoodOrder.id)
    )
    if order_ids is not None:
        query = query.where(FoodOrder.id.in_(list(order_ids)))
    if lock:
        query = query.with_for_update()
    result = await db.execute(query)
    return list(result.scalars().all())


async def stamp_orders(db: AsyncSession, orders: Sequence[FoodOrder], invoice_id: uuid.UUID) -> None:
    """Attribute ``orders`` to ``invoice_id``.

    Each row is only updated while its ``invoice_id`` is still NULL, so if a
    concurrent settlement got there first the affected count comes up short
    and the caller's transaction must be abandoned.
    """
    if not orders:
        return
    ids = [order.id for order in orders]
    result = await db.execute(
        update(FoodOrder)
        .where(FoodOrder.id.in_(ids), FoodOrder.invoice_id.is_(None))
        .values(invoice_id=invoice_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != len(ids):
        raise AlreadyInvoiced("Some food orders were billed by another settlement")

    for order in orders:
        set_committed_value(order, "invoice_id", invoice_id)


async def invoice_orders(db: AsyncSession, invoice_id: uuid.UUID) -> list[FoodOrder]:
    """Orders billed by ``invoice_id``."""
    result = await db.execute(
        select(FoodOrder).where(FoodOrder.invoice_id == invoice_id).order_by(FoodOrder.created_at, FoodOrder.id)
    )
    return list(result.scalars().all())
