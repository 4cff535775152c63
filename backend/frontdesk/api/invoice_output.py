"""Helpers shared by every router that issues or serves an invoice."""

import enum
import logging

from fastapi import Response
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.documents.invoice_pdf import render_invoice_pdf
from frontdesk.models.invoice import Invoice
from frontdesk.schemas.booking import GstRequest
from frontdesk.services import food_ledger, hotel_settings
from frontdesk.services.settlement import GstOptions

logger = logging.getLogger(__name__)

PDF_RESPONSES = {200: {"content": {"application/pdf": {}}, "description": "Printable bill"}}


class DocumentFormat(str, enum.Enum):
    PDF = "pdf"
    JSON = "json"


async def gst_options(db: AsyncSession, body: GstRequest) -> GstOptions:
    """GST options from a request, falling back to the hotel's default rate."""
    percent = body.gst_percent
    if percent is None:
        percent = (await hotel_settings.get_profile(db)).default_gst_percent
    return GstOptions(show_gst=body.show_gst, percent=percent, gst_number=body.gst_number)


async def invoice_document(
    db: AsyncSession,
    invoice: Invoice,
    fmt: DocumentFormat,
    status_code: int = 200,
) -> Response | Invoice:
    """The invoice as a PDF attachment, or the ORM row for JSON serialisation.

    The invoice is already persisted; if rendering fails the caller still
    gets the JSON invoice.
    """
    if fmt is DocumentFormat.JSON:
        return invoice

    try:
        hotel = await hotel_settings.get_profile(db)
        orders = await food_ledger.invoice_orders(db, invoice.id)
        content = render_invoice_pdf(invoice, hotel, orders)
    except Exception:
        logger.exception("Rendering invoice %s failed; returning JSON", invoice.invoice_number)
        return invoice

    return Response(
        content=content,
        status_code=status_code,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{invoice.invoice_number}.pdf"'},
    )
