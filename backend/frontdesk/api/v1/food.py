"""Food menu API router."""

import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.auth.identity import Actor
from frontdesk.models.food import FoodItem
from frontdesk.schemas.common import MessageResponse
from frontdesk.schemas.food import FoodItemCreate, FoodItemResponse, FoodItemUpdate
from frontdesk.services import food_ledger

router = APIRouter(prefix="/api/v1/food", tags=["food"])


@router.get("", response_model=list[FoodItemResponse], summary="List menu items")
async def list_food_items(
    enabled_only: bool = Query(False, description="Only items that can be ordered"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[FoodItem]:
    return await food_ledger.list_food_items(db, enabled_only=enabled_only)


@router.post(
    "",
    response_model=FoodItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a menu item",
)
async def create_food_item(
    body: FoodItemCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FoodItem:
    return await food_ledger.create_food_item(db, actor, **body.model_dump())


@router.put("/{food_item_id}", response_model=FoodItemResponse, summary="Update a menu item")
async def update_food_item(
    food_item_id: uuid.UUID,
    body: FoodItemUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FoodItem:
    """Edit or enable/disable a menu item. Invoices already issued are unaffected."""
    return await food_ledger.update_food_item(db, actor, food_item_id, body.model_dump(exclude_none=True))


@router.delete("/{food_item_id}", response_model=MessageResponse, summary="Delete a menu item")
async def delete_food_item(
    food_item_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    await food_ledger.delete_food_item(db, actor, food_item_id)
    return {"message": "Food item deleted"}
