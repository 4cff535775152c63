"""Printable bill rendering with reportlab.

Rendering only reads the invoice snapshot (plus the billed food lines for
itemisation); it never touches the database, so a failure here cannot undo
a settlement.
"""

import io
from collections.abc import Sequence

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from frontdesk.config import settings
from frontdesk.models.enums import InvoiceType
from frontdesk.models.food import FoodOrder
from frontdesk.models.invoice import Invoice
from frontdesk.money import format_amount
from frontdesk.services.hotel_settings import HotelProfile

_TITLES = {
    InvoiceType.ROOM: "ROOM BILL",
    InvoiceType.FOOD: "FOOD BILL",
    InvoiceType.MANUAL: "BILL",
}

_LINE = 14
_MARGIN = 48


def _amount(minor: int) -> str:
    return format_amount(minor, settings.currency_symbol)


def charge_lines(invoice: Invoice) -> list[tuple[str, str]]:
    """(label, amount) rows of the charges table, in print order."""
    rows: list[tuple[str, str]] = []
    if invoice.room_charges:
        label = "Room Charges"
        if invoice.nights:
            label += f" ({invoice.nights} night{'s' if invoice.nights != 1 else ''} @ {_amount(invoice.tariff)})"
        rows.append((label, _amount(invoice.room_charges)))
    elif invoice.tariff:
        rows.append(("Tariff", _amount(invoice.tariff)))
    if invoice.additional_guest_charges:
        rows.append(
            (f"Additional Guests ({invoice.additional_guests})", _amount(invoice.additional_guest_charges))
        )
    if invoice.food_charges:
        rows.append(("Food Charges", _amount(invoice.food_charges)))
    if invoice.gst_enabled and invoice.gst_amount:
        rows.append((f"Add: GST ({invoice.gst_percent.normalize():f}%)", _amount(invoice.gst_amount)))
    if invoice.advance_amount:
        rows.append(("Less: Advance", _amount(invoice.advance_amount)))
    if invoice.round_off:
        rows.append(("Round Off", _amount(invoice.round_off)))
    rows.append(("Net Payable Amount", _amount(invoice.total_amount)))
    return rows


def render_invoice_pdf(
    invoice: Invoice,
    hotel: HotelProfile,
    orders: Sequence[FoodOrder] = (),
) -> bytes:
    """Render ``invoice`` to PDF bytes."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4
    x = _MARGIN
    y = height - _MARGIN

    c.setTitle(f"{_TITLES[invoice.invoice_type].title()} {invoice.invoice_number}")

    # Hotel header
    c.setFont("Helvetica-Bold", 16)
    c.drawCentredString(width / 2, y, hotel.name.upper())
    y -= 18
    c.setFont("Helvetica", 9)
    for line in (hotel.address, f"Phone: {hotel.phone}"):
        c.drawCentredString(width / 2, y, line)
        y -= 12
    if hotel.email:
        c.drawCentredString(width / 2, y, f"E-Mail: {hotel.email}")
        y -= 12
    if hotel.gstin:
        c.drawCentredString(width / 2, y, f"GSTIN: {hotel.gstin}")
        y -= 12

    y -= 10
    c.setFont("Helvetica-Bold", 12)
    c.drawCentredString(width / 2, y, _TITLES[invoice.invoice_type])
    y -= 22

    # Bill details
    c.setFont("Helvetica", 10)
    details = [
        f"Bill No.: {invoice.invoice_number}",
        f"Bill Date: {invoice.bill_date:%d-%m-%Y %H:%M}",
        f"Guest: {invoice.guest_name}",
    ]
    if invoice.room_number:
        room = f"Room No.: {invoice.room_number}"
        if invoice.room_type:
            room += f" ({invoice.room_type})"
        details.append(room)
    if invoice.gst_number:
        details.append(f"GST No.: {invoice.gst_number}")
    for line in details:
        c.drawString(x, y, line)
        y -= _LINE

    # Food lines
    if orders:
        y -= 8
        c.setFont("Helvetica-Bold", 10)
        c.drawString(x, y, "Items")
        y -= _LINE
        c.setFont("Helvetica", 9)
        for order in orders:
            item = order.food_item
            c.drawString(x, y, f"{order.quantity} x {item.name} @ {_amount(item.price)}"[:90])
            c.drawRightString(width - _MARGIN, y, _amount(order.line_total))
            y -= 12
            if y < _MARGIN * 3:
                c.showPage()
                c.setFont("Helvetica", 9)
                y = height - _MARGIN

    # Charges, kept on one page above the footer
    rows = charge_lines(invoice)
    y -= 8
    if y - len(rows) * _LINE < _MARGIN * 2:
        c.showPage()
        y = height - _MARGIN
    c.line(x, y + 10, width - _MARGIN, y + 10)
    c.setFont("Helvetica", 10)
    for i, (label, amount) in enumerate(rows):
        if y < _MARGIN * 2:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - _MARGIN
        if i == len(rows) - 1:
            c.setFont("Helvetica-Bold", 11)
        c.drawString(x, y, label)
        c.drawRightString(width - _MARGIN, y, amount)
        y -= _LINE

    c.setFont("Helvetica", 8)
    c.drawCentredString(width / 2, _MARGIN, "Thank you for your stay!")

    c.showPage()
    c.save()
    return buf.getvalue()
