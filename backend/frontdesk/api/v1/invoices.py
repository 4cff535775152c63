"""Invoices API router — listing, manual bills, download and deletion."""

import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api.deps import get_actor, get_db
from frontdesk.api.invoice_output import PDF_RESPONSES, DocumentFormat, gst_options, invoice_document
from frontdesk.auth.identity import Actor
from frontdesk.models.enums import InvoiceType
from frontdesk.models.invoice import Invoice
from frontdesk.models.payment import Payment
from frontdesk.schemas.food import FoodOrderResponse
from frontdesk.schemas.invoice import (
    InvoiceDeleteResponse,
    InvoiceDetailResponse,
    InvoiceListResponse,
    InvoiceResponse,
    ManualInvoiceCreate,
    PaymentCreate,
    PaymentResponse,
)
from frontdesk.services import food_ledger, payment_ledger, settlement

router = APIRouter(prefix="/api/v1/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse, summary="List invoices")
async def list_invoices(
    invoice_type: InvoiceType | None = Query(None, description="ROOM, FOOD or MANUAL"),
    booking_id: uuid.UUID | None = Query(None, description="Filter by booking"),
    is_manual: bool | None = Query(None, description="Only manual (or only system) bills"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    items = await settlement.list_invoices(db, invoice_type, booking_id, is_manual)
    return {"items": items, "total": len(items)}


@router.post(
    "/manual",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=PDF_RESPONSES,
    summary="Create a manual bill",
)
async def create_manual_invoice(
    body: ManualInvoiceCreate,
    fmt: DocumentFormat = Query(DocumentFormat.JSON, alias="format"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response | Invoice:
    """Persist a walk-in bill from the supplied charges. Nothing else changes."""
    gst = await gst_options(db, body)
    data = body.model_dump(exclude={"show_gst", "gst_percent", "gst_number", "advance_amount"})
    invoice = await settlement.settle_manual(db, actor, gst=gst, advance=body.advance_amount, **data)
    return await invoice_document(db, invoice, fmt, status_code=status.HTTP_201_CREATED)


@router.get("/{invoice_id}", response_model=InvoiceDetailResponse, summary="Get an invoice")
async def get_invoice(
    invoice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> InvoiceDetailResponse:
    """Invoice with the food orders it billed."""
    invoice = await settlement.get_invoice(db, invoice_id)
    orders = await food_ledger.invoice_orders(db, invoice.id)
    detail = InvoiceDetailResponse.model_validate(invoice)
    detail.food_orders = [FoodOrderResponse.model_validate(order) for order in orders]
    return detail


@router.get(
    "/{invoice_id}/download",
    response_model=InvoiceResponse,
    responses=PDF_RESPONSES,
    summary="Download an invoice as PDF",
)
async def download_invoice(
    invoice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response | Invoice:
    invoice = await settlement.get_invoice(db, invoice_id)
    return await invoice_document(db, invoice, DocumentFormat.PDF)


@router.delete("/{invoice_id}", response_model=InvoiceDeleteResponse, summary="Delete an invoice")
async def delete_invoice(
    invoice_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> dict:
    """Delete an invoice. A room bill also removes the stay's food bills.

    Food orders billed by a deleted invoice are not billed again.
    """
    removed = await settlement.delete_invoice(db, actor, invoice_id)
    return {"message": f"Deleted {len(removed)} invoice(s)", "deleted_ids": removed}


@router.post(
    "/{invoice_id}/payments",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a payment for an invoice",
)
async def pay_invoice(
    invoice_id: uuid.UUID,
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Payment:
    return await payment_ledger.pay_invoice(db, actor, invoice_id, body.mode, body.status, body.amount)
