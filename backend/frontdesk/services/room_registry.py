"""Room registry — room types, rooms, and room availability."""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from frontdesk.auth.identity import Actor
from frontdesk.errors import ConflictError, InUse, NotAvailable, NotFoundError, ValidationError
from frontdesk.models.booking import Booking
from frontdesk.models.enums import BookingStatus, RoomStatus
from frontdesk.models.room import Room, RoomType

logger = logging.getLogger(__name__)

_ROOM_EDITABLE = frozenset({"room_number", "room_type_id", "floor"})
_ROOM_TYPE_EDITABLE = frozenset({"name", "base_price", "description"})


# ---------------------------------------------------------------------------
# Room types
# ---------------------------------------------------------------------------


async def get_room_type(db: AsyncSession, room_type_id: uuid.UUID) -> RoomType:
    result = await db.execute(select(RoomType).where(RoomType.id == room_type_id))
    room_type = result.scalar_one_or_none()
    if room_type is None:
        raise NotFoundError("Room type not found")
    return room_type


async def list_room_types(db: AsyncSession) -> list[RoomType]:
    result = await db.execute(select(RoomType).order_by(RoomType.name))
    return list(result.scalars().all())


async def create_room_type(
    db: AsyncSession,
    actor: Actor,
    name: str,
    base_price: int,
    description: str | None = None,
) -> RoomType:
    actor.require_manager("create room types")
    room_type = RoomType(name=name, base_price=base_price, description=description)
    try:
        async with db.begin_nested():
            db.add(room_type)
    except IntegrityError:
        raise ConflictError(f"Room type {name!r} already exists") from None
    logger.info("Room type %s created by %s", name, actor.user_id)
    return room_type


async def update_room_type(db: AsyncSession, actor: Actor, room_type_id: uuid.UUID, changes: dict) -> RoomType:
    actor.require_manager("edit room types")
    unknown = set(changes) - _ROOM_TYPE_EDITABLE
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    room_type = await get_room_type(db, room_type_id)
    try:
        async with db.begin_nested():
            for field, value in changes.items():
                setattr(room_type, field, value)
    except IntegrityError:
        raise ConflictError("Room type name already in use") from None
    return room_type


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


async def get_room(db: AsyncSession, room_id: uuid.UUID) -> Room:
    result = await db.execute(select(Room).where(Room.id == room_id))
    room = result.scalar_one_or_none()
    if room is None:
        raise NotFoundError("Room not found")
    return room


async def list_rooms(db: AsyncSession, status: RoomStatus | None = None) -> list[Room]:
    query = select(Room).order_by(Room.room_number)
    if status is not None:
        query = query.where(Room.status == status)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_room(
    db: AsyncSession,
    actor: Actor,
    room_number: str,
    room_type_id: uuid.UUID,
    floor: int | None = None,
) -> Room:
    """Register a new room. Rooms always start AVAILABLE."""
    actor.require_manager("create rooms")
    room_type = await get_room_type(db, room_type_id)

    room = Room(room_number=room_number, room_type=room_type, floor=floor, status=RoomStatus.AVAILABLE)
    try:
        async with db.begin_nested():
            db.add(room)
    except IntegrityError:
        raise ConflictError(f"Room {room_number} already exists") from None
    logger.info("Room %s (%s) created by %s", room_number, room_type.name, actor.user_id)
    return room


async def update_room(db: AsyncSession, actor: Actor, room_id: uuid.UUID, changes: dict) -> Room:
    """Edit a room's descriptive fields. Status is owned by claim/release."""
    actor.require_manager("edit rooms")
    unknown = set(changes) - _ROOM_EDITABLE
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    room = await get_room(db, room_id)
    changes = dict(changes)
    if "room_type_id" in changes:
        room.room_type = await get_room_type(db, changes.pop("room_type_id"))
    try:
        async with db.begin_nested():
            for field, value in changes.items():
                setattr(room, field, value)
    except IntegrityError:
        raise ConflictError("Room number already in use") from None
    return room


async def claim(db: AsyncSession, room_id: uuid.UUID) -> Room:
    """Mark a room OCCUPIED.

    The flip is a single conditional UPDATE so two concurrent claims cannot
    both succeed; the loser sees zero affected rows.
    """
    room = await get_room(db, room_id)
    if room.status != RoomStatus.AVAILABLE:
        raise NotAvailable(f"Room {room.room_number} is not available")

    result = await db.execute(
        update(Room)
        .where(Room.id == room_id, Room.status == RoomStatus.AVAILABLE)
        .values(status=RoomStatus.OCCUPIED)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise NotAvailable(f"Room {room.room_number} is not available")

    set_committed_value(room, "status", RoomStatus.OCCUPIED)
    logger.info("Room %s claimed", room.room_number)
    return room


async def release(db: AsyncSession, room_id: uuid.UUID) -> Room:
    """Mark a room AVAILABLE again. Called once per checkout."""
    room = await get_room(db, room_id)
    room.status = RoomStatus.AVAILABLE
    await db.flush()
    logger.info("Room %s released", room.room_number)
    return room


async def count_active_bookings(db: AsyncSession, room_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Booking)
        .where(Booking.room_id == room_id, Booking.status == BookingStatus.ACTIVE)
    )
    return result.scalar_one()


async def delete(db: AsyncSession, actor: Actor, room_id: uuid.UUID) -> None:
    """Remove a room that no ACTIVE booking references.

    Rooms with checked-out history are kept by the database (RESTRICT) so
    their bookings stay consistent; that surfaces as ``InUse`` too.
    """
    actor.require_manager("delete rooms")
    room = await get_room(db, room_id)

    if await count_active_bookings(db, room_id) > 0:
        raise InUse("Cannot delete room with active bookings")

    history = await db.execute(select(func.count()).select_from(Booking).where(Booking.room_id == room_id))
    if history.scalar_one() > 0:
        raise InUse("Cannot delete room with booking history")

    await db.delete(room)
    await db.flush()
    logger.info("Room %s deleted by %s", room.room_number, actor.user_id)
