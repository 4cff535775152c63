"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from frontdesk.models.enums import BookingStatus, IdType, PaymentMode, PaymentStatus
from frontdesk.schemas.common import GstPercent, MinorAmount, Money, SignedMinorAmount, UtcDateTime
from frontdesk.schemas.room import RoomResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Check a guest into an available room."""

    room_id: uuid.UUID
    guest_name: str = Field(..., min_length=1, max_length=255)
    id_type: IdType
    id_number: str | None = Field(None, max_length=100)
    guest_mobile: str | None = Field(None, max_length=50)
    guest_address: str | None = None
    room_price: MinorAmount
    tariff: MinorAmount | None = None
    additional_guests: int = Field(0, ge=0)
    additional_guest_charges: MinorAmount = 0
    check_in_date: UtcDateTime | None = None


class BookingUpdate(BaseModel):
    """Partial update of the editable booking fields.

    ``status`` and ``room_id`` are rejected: the request model forbids any
    field it does not list.
    """

    guest_name: str | None = Field(None, min_length=1, max_length=255)
    id_type: IdType | None = None
    id_number: str | None = Field(None, max_length=100)
    guest_mobile: str | None = Field(None, max_length=50)
    guest_address: str | None = None
    room_price: MinorAmount | None = None
    tariff: MinorAmount | None = None
    additional_guests: int | None = Field(None, ge=0)
    additional_guest_charges: MinorAmount | None = None
    check_in_date: UtcDateTime | None = None
    checkout_date: UtcDateTime | None = None

    model_config = ConfigDict(extra="forbid")


class GstRequest(BaseModel):
    """GST options sent with any settlement request."""

    show_gst: bool = False
    gst_percent: GstPercent | None = None  # None -> hotel default
    gst_number: str | None = Field(None, max_length=32)


class FoodSettleRequest(GstRequest):
    """Kitchen bill for all unbilled orders, or just ``order_ids``."""

    order_ids: list[uuid.UUID] | None = None


class CheckoutRequest(GstRequest):
    round_off: SignedMinorAmount = 0
    advance_amount: MinorAmount = 0
    payment_mode: PaymentMode | None = None
    payment_status: PaymentStatus = PaymentStatus.PAID

    @model_validator(mode="after")
    def _payment_needs_mode(self) -> "CheckoutRequest":
        if self.payment_mode is None and "payment_status" in self.model_fields_set:
            raise ValueError("payment_status requires payment_mode")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    id: uuid.UUID
    room_id: uuid.UUID
    guest_name: str
    id_type: IdType
    id_number: str | None = None
    guest_mobile: str | None = None
    guest_address: str | None = None
    check_in_date: datetime
    checkout_date: datetime | None = None
    room_price: Money
    tariff: Money | None = None
    additional_guests: int
    additional_guest_charges: Money
    status: BookingStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking with its room for single-booking views."""

    room: RoomResponse


class BookingListResponse(BaseModel):
    items: list[BookingDetailResponse]
    total: int
