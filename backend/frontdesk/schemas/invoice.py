"""Pydantic v2 request/response schemas for invoices and payments."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from frontdesk.models.enums import InvoiceType, PaymentMode, PaymentStatus
from frontdesk.schemas.booking import GstRequest
from frontdesk.schemas.common import MinorAmount, Money, SignedMinorAmount, UtcDateTime
from frontdesk.schemas.food import FoodOrderResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ManualInvoiceCreate(GstRequest):
    """A walk-in or backdated bill; charges are supplied by the desk."""

    guest_name: str = Field(..., min_length=1, max_length=255)
    booking_id: uuid.UUID | None = None
    room_number: str | None = Field(None, max_length=20)
    room_type: str | None = Field(None, max_length=100)
    room_charges: MinorAmount = 0
    tariff: MinorAmount = 0
    food_charges: MinorAmount = 0
    additional_guests: int = Field(0, ge=0)
    additional_guest_charges: MinorAmount = 0
    advance_amount: MinorAmount = 0
    round_off: SignedMinorAmount = 0
    bill_date: UtcDateTime | None = None


class PaymentCreate(BaseModel):
    """Mark a bill paid. ``amount`` defaults to the invoice total."""

    mode: PaymentMode
    status: PaymentStatus = PaymentStatus.PAID
    amount: MinorAmount | None = None


class PaymentUpdate(BaseModel):
    status: PaymentStatus | None = None
    amount: MinorAmount | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class InvoiceResponse(BaseModel):
    id: uuid.UUID
    invoice_number: str
    invoice_type: InvoiceType
    is_manual: bool
    booking_id: uuid.UUID | None = None
    guest_name: str
    room_number: str | None = None
    room_type: str | None = None
    room_charges: Money
    food_charges: Money
    tariff: Money
    nights: int
    additional_guests: int
    additional_guest_charges: Money
    gst_enabled: bool
    gst_percent: Decimal
    gst_number: str | None = None
    gst_amount: Money
    advance_amount: Money
    round_off: Money
    total_amount: Money
    bill_date: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceDetailResponse(InvoiceResponse):
    """Invoice with the food orders it billed."""

    food_orders: list[FoodOrderResponse] = []


class InvoiceListResponse(BaseModel):
    items: list[InvoiceResponse]
    total: int


class InvoiceDeleteResponse(BaseModel):
    message: str
    deleted_ids: list[uuid.UUID]


class PaymentResponse(BaseModel):
    id: uuid.UUID
    booking_id: uuid.UUID | None = None
    invoice_id: uuid.UUID | None = None
    amount: Money
    mode: PaymentMode
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentListResponse(BaseModel):
    items: list[PaymentResponse]
    total: int
