"""Pydantic v2 request/response schemas for the menu and food orders."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from frontdesk.schemas.common import GstPercent, MinorAmount, Money

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FoodItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    price: MinorAmount
    gst_percent: GstPercent = Decimal("0")


class FoodItemUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=100)
    price: MinorAmount | None = None
    gst_percent: GstPercent | None = None
    enabled: bool | None = None


class FoodOrderCreate(BaseModel):
    booking_id: uuid.UUID
    food_item_id: uuid.UUID
    # Strict: "2" or 2.0 is a client error, not something to coerce.
    quantity: StrictInt = Field(..., gt=0)
    chef_id: uuid.UUID | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class FoodItemResponse(BaseModel):
    id: uuid.UUID
    name: str
    category: str
    price: Money
    gst_percent: Decimal
    enabled: bool

    model_config = ConfigDict(from_attributes=True)


class FoodOrderResponse(BaseModel):
    id: uuid.UUID
    booking_id: uuid.UUID
    quantity: int
    chef_id: uuid.UUID | None = None
    invoice_id: uuid.UUID | None = None
    created_at: datetime
    food_item: FoodItemResponse
    line_total: Money

    model_config = ConfigDict(from_attributes=True)


class FoodOrderListResponse(BaseModel):
    items: list[FoodOrderResponse]
    unbilled_total: Money
