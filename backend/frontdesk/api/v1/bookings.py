"""Bookings API router — stays, food orders, and their settlements.

Every write goes through the service layer with the caller's ``Actor``; the
request transaction (``get_db``) commits only when the whole handler
succeeds.
"""

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.api.invoice_output import PDF_RESPONSES, DocumentFormat, gst_options, invoice_document
from frontdesk.auth.identity import Actor
from frontdesk.models.booking import Booking
from frontdesk.models.enums import BookingStatus
from frontdesk.models.food import FoodOrder
from frontdesk.models.invoice import Invoice
from frontdesk.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingListResponse,
    BookingUpdate,
    CheckoutRequest,
    FoodSettleRequest,
)
from frontdesk.schemas.common import MessageResponse
from frontdesk.schemas.food import FoodOrderCreate, FoodOrderListResponse, FoodOrderResponse
from frontdesk.schemas.invoice import InvoiceResponse
from frontdesk.services import booking_lifecycle, food_ledger, settlement
from frontdesk.services.settlement import FoodBillKind, PaymentIntent

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Food orders
# ---------------------------------------------------------------------------


@router.post(
    "/food",
    response_model=FoodOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a food order to an active booking",
)
async def add_food_order(
    body: FoodOrderCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FoodOrder:
    return await food_ledger.add_order(db, actor, **body.model_dump())


@router.delete("/food/{order_id}", response_model=MessageResponse, summary="Remove an unbilled food order")
async def remove_food_order(
    order_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    await food_ledger.remove_order(db, actor, order_id)
    return {"message": "Food order removed"}


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Check a guest into a room",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Booking:
    """Create an ACTIVE booking and mark its room OCCUPIED.

    Fails with 409 ``room_not_available`` if the room is already occupied.
    """
    return await booking_lifecycle.open_booking(db, actor, **body.model_dump())


@router.get("", response_model=BookingListResponse, summary="List bookings")
async def list_bookings(
    status_filter: BookingStatus | None = Query(None, alias="status", description="Filter by booking status"),
    payment_pending: bool = Query(False, description="Checked-out bookings with a pending payment"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    items = await booking_lifecycle.list_bookings(db, status_filter, payment_pending=payment_pending)
    return {"items": items, "total": len(items)}


@router.get("/{booking_id}", response_model=BookingDetailResponse, summary="Get a booking")
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Booking:
    return await booking_lifecycle.get_booking(db, booking_id)


@router.put("/{booking_id}", response_model=BookingDetailResponse, summary="Update a booking")
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Booking:
    """Partially update guest and pricing details.

    Room and status cannot be changed here. Invoices already issued keep
    their own figures.
    """
    return await booking_lifecycle.update_booking(db, actor, booking_id, body.model_dump(exclude_unset=True))


@router.delete("/{booking_id}", response_model=MessageResponse, summary="Delete a checked-out booking")
async def delete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    await booking_lifecycle.delete_booking(db, actor, booking_id)
    return {"message": "Booking deleted"}


@router.get(
    "/{booking_id}/food-orders",
    response_model=FoodOrderListResponse,
    summary="List a booking's food orders",
)
async def list_food_orders(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    await booking_lifecycle.get_booking(db, booking_id)
    orders = await food_ledger.list_orders(db, booking_id)
    unbilled = [order for order in orders if order.invoice_id is None]
    return {"items": orders, "unbilled_total": settlement.food_subtotal(unbilled)}


# ---------------------------------------------------------------------------
# Settlements
# ---------------------------------------------------------------------------


async def _settle_food(
    booking_id: uuid.UUID,
    body: FoodSettleRequest,
    fmt: DocumentFormat,
    kind: FoodBillKind,
    db: AsyncSession,
    actor: Actor,
) -> Response | Invoice:
    gst = await gst_options(db, body)
    invoice = await settlement.settle_food(db, actor, booking_id, gst, order_ids=body.order_ids, kind=kind)
    return await invoice_document(db, invoice, fmt, status_code=status.HTTP_201_CREATED)


@router.get(
    "/{booking_id}/kitchen-bill",
    response_model=list[InvoiceResponse],
    summary="List a booking's kitchen and food bills",
)
async def list_kitchen_bills(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> list[Invoice]:
    await booking_lifecycle.get_booking(db, booking_id)
    return await settlement.list_food_invoices(db, booking_id)


@router.post(
    "/{booking_id}/kitchen-bill",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=PDF_RESPONSES,
    summary="Issue a kitchen bill for unbilled food",
)
async def create_kitchen_bill(
    booking_id: uuid.UUID,
    body: FoodSettleRequest,
    fmt: DocumentFormat = Query(DocumentFormat.PDF, alias="format"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response | Invoice:
    """Bill all unbilled orders, or only ``order_ids``. Billed orders are never billed again."""
    return await _settle_food(booking_id, body, fmt, FoodBillKind.KITCHEN, db, actor)


@router.post(
    "/{booking_id}/food-invoice",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=PDF_RESPONSES,
    summary="Issue a food bill for unbilled food",
)
async def create_food_invoice(
    booking_id: uuid.UUID,
    body: FoodSettleRequest,
    fmt: DocumentFormat = Query(DocumentFormat.PDF, alias="format"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response | Invoice:
    return await _settle_food(booking_id, body, fmt, FoodBillKind.FOOD, db, actor)


@router.post(
    "/{booking_id}/checkout",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=PDF_RESPONSES,
    summary="Check out and issue the room bill",
)
async def checkout(
    booking_id: uuid.UUID,
    body: CheckoutRequest,
    fmt: DocumentFormat = Query(DocumentFormat.PDF, alias="format"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response | Invoice:
    """Issue the room bill, check the booking out and free the room.

    Food already covered by a kitchen bill is excluded. A checked-out
    booking whose room bill was deleted can be billed again.
    """
    gst = await gst_options(db, body)
    payment = None
    if body.payment_mode is not None:
        payment = PaymentIntent(mode=body.payment_mode, status=body.payment_status)
    invoice = await booking_lifecycle.checkout(
        db,
        actor,
        booking_id,
        gst,
        round_off=body.round_off,
        advance=body.advance_amount,
        payment=payment,
    )
    return await invoice_document(db, invoice, fmt, status_code=status.HTTP_201_CREATED)
