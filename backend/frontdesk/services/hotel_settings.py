"""Hotel identity and default GST rate, with configuration fallbacks."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.auth.identity import Actor
from frontdesk.config import settings
from frontdesk.models.hotel_settings import HotelSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HotelProfile:
    """What a printed bill needs to know about the hotel."""

    name: str
    address: str
    phone: str
    email: str | None
    gstin: str | None
    default_gst_percent: Decimal

    @classmethod
    def from_config(cls) -> "HotelProfile":
        return cls(
            name=settings.hotel_name,
            address=settings.hotel_address,
            phone=settings.hotel_phone,
            email=settings.hotel_email,
            gstin=settings.hotel_gstin,
            default_gst_percent=settings.default_gst_percent,
        )

    @classmethod
    def from_row(cls, row: HotelSettings) -> "HotelProfile":
        return cls(
            name=row.name,
            address=row.address,
            phone=row.phone,
            email=row.email,
            gstin=row.gstin,
            default_gst_percent=row.default_gst_percent,
        )


async def _get_row(db: AsyncSession) -> HotelSettings | None:
    result = await db.execute(select(HotelSettings).order_by(HotelSettings.created_at).limit(1))
    return result.scalar_one_or_none()


async def get_profile(db: AsyncSession) -> HotelProfile:
    """Stored settings, or the configured defaults when none were saved yet."""
    row = await _get_row(db)
    if row is None:
        return HotelProfile.from_config()
    return HotelProfile.from_row(row)


async def update_profile(db: AsyncSession, actor: Actor, changes: dict) -> HotelProfile:
    """Upsert the settings row from the current profile plus ``changes``."""
    actor.require_manager("change hotel settings")
    row = await _get_row(db)
    if row is None:
        base = HotelProfile.from_config()
        row = HotelSettings(
            name=base.name,
            address=base.address,
            phone=base.phone,
            email=base.email,
            gstin=base.gstin,
            default_gst_percent=base.default_gst_percent,
        )
        db.add(row)

    for field, value in changes.items():
        setattr(row, field, value)
    await db.flush()
    logger.info("Hotel settings updated by %s: %s", actor.user_id, ", ".join(sorted(changes)) or "-")
    return HotelProfile.from_row(row)
