"""Rooms and room types API router.

Anyone signed in can read; the service layer restricts writes to managers.
Room status is never set here: it follows bookings and checkouts.
"""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.auth.identity import Actor
from frontdesk.models.enums import RoomStatus
from frontdesk.models.room import Room, RoomType
from frontdesk.schemas.common import MessageResponse
from frontdesk.schemas.room import (
    RoomCreate,
    RoomListResponse,
    RoomResponse,
    RoomTypeCreate,
    RoomTypeResponse,
    RoomTypeUpdate,
    RoomUpdate,
)
from frontdesk.services import room_registry

router = APIRouter(prefix="/api/v1", tags=["rooms"])


# ---------------------------------------------------------------------------
# Room types
# ---------------------------------------------------------------------------


@router.get("/room-types", response_model=list[RoomTypeResponse], summary="List room types")
async def list_room_types(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[RoomType]:
    return await room_registry.list_room_types(db)


@router.post(
    "/room-types",
    response_model=RoomTypeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a room type",
)
async def create_room_type(
    body: RoomTypeCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> RoomType:
    return await room_registry.create_room_type(db, actor, **body.model_dump())


@router.put("/room-types/{room_type_id}", response_model=RoomTypeResponse, summary="Update a room type")
async def update_room_type(
    room_type_id: uuid.UUID,
    body: RoomTypeUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> RoomType:
    return await room_registry.update_room_type(db, actor, room_type_id, body.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


@router.get("/rooms", response_model=RoomListResponse, summary="List rooms")
async def list_rooms(
    status_filter: RoomStatus | None = Query(None, alias="status", description="Filter by room status"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    """Rooms ordered by number, optionally only AVAILABLE or OCCUPIED ones."""
    items = await room_registry.list_rooms(db, status_filter)
    return {"items": items, "total": len(items)}


@router.post(
    "/rooms",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a room",
)
async def create_room(
    body: RoomCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Room:
    return await room_registry.create_room(db, actor, **body.model_dump())


@router.get("/rooms/{room_id}", response_model=RoomResponse, summary="Get a room")
async def get_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Room:
    return await room_registry.get_room(db, room_id)


@router.put("/rooms/{room_id}", response_model=RoomResponse, summary="Update a room")
async def update_room(
    room_id: uuid.UUID,
    body: RoomUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Room:
    return await room_registry.update_room(db, actor, room_id, body.model_dump(exclude_unset=True))


@router.delete("/rooms/{room_id}", response_model=MessageResponse, summary="Delete a room")
async def delete_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    """Delete a room. Refused while any booking references it."""
    await room_registry.delete(db, actor, room_id)
    return {"message": "Room deleted"}
