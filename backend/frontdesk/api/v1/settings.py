"""Hotel settings API router."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.auth.identity import Actor
from frontdesk.schemas.settings import HotelSettingsResponse, HotelSettingsUpdate
from frontdesk.services import hotel_settings
from frontdesk.services.hotel_settings import HotelProfile

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("", response_model=HotelSettingsResponse, summary="Get hotel settings")
async def get_settings(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> HotelProfile:
    """Saved settings, or the configured defaults if none were saved."""
    return await hotel_settings.get_profile(db)


@router.put("", response_model=HotelSettingsResponse, summary="Update hotel settings")
async def update_settings(
    body: HotelSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> HotelProfile:
    return await hotel_settings.update_profile(db, actor, body.model_dump(exclude_none=True))
