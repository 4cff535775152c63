"""Pydantic v2 schemas for hotel settings."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from frontdesk.schemas.common import GstPercent


class HotelSettingsUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    phone: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=255)
    gstin: str | None = Field(None, max_length=32)
    default_gst_percent: GstPercent | None = None


class HotelSettingsResponse(BaseModel):
    name: str
    address: str
    phone: str
    email: str | None = None
    gstin: str | None = None
    default_gst_percent: Decimal

    model_config = ConfigDict(from_attributes=True)
