"""Pydantic v2 request/response schemas for rooms and room types."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from frontdesk.models.enums import RoomStatus
from frontdesk.schemas.common import MinorAmount, Money

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    base_price: MinorAmount = 0
    description: str | None = None


class RoomTypeUpdate(BaseModel):
    """Partial update. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=100)
    base_price: MinorAmount | None = None
    description: str | None = None


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    room_type_id: uuid.UUID
    floor: int | None = None


class RoomUpdate(BaseModel):
    """Partial update. Status is not editable; it follows bookings."""

    room_number: str | None = Field(None, min_length=1, max_length=20)
    room_type_id: uuid.UUID | None = None
    floor: int | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomTypeResponse(BaseModel):
    id: uuid.UUID
    name: str
    base_price: Money
    description: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomResponse(BaseModel):
    id: uuid.UUID
    room_number: str
    floor: int | None = None
    status: RoomStatus
    room_type: RoomTypeResponse
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
    items: list[RoomResponse]
    total: int
