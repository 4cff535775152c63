"""Payments API router."""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.auth.identity import Actor
from frontdesk.models.enums import PaymentStatus
from frontdesk.models.payment import Payment
from frontdesk.schemas.invoice import PaymentListResponse, PaymentResponse, PaymentUpdate
from frontdesk.services import payment_ledger

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse, summary="List payments")
async def list_payments(
    status_filter: PaymentStatus | None = Query(None, alias="status", description="PAID or PENDING"),
    booking_id: uuid.UUID | None = Query(None, description="Filter by booking"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    items = await payment_ledger.list_payments(db, status_filter, booking_id)
    return {"items": items, "total": len(items)}


@router.patch("/{payment_id}", response_model=PaymentResponse, summary="Correct a payment")
async def update_payment(
    payment_id: uuid.UUID,
    body: PaymentUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Payment:
    """Change a payment's status (e.g. PENDING -> PAID) and/or amount."""
    return await payment_ledger.update_payment(db, actor, payment_id, status=body.status, amount=body.amount)
