"""
Receipt rendering for committed bills.

build_receipt() projects a Bill onto the printable layout; the PDF and plain
text renderers only format what it returns.
"""
from datetime import datetime
from decimal import Decimal
from io import BytesIO
from typing import List

from pydantic import BaseModel
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from pharmacy_pos.core.config import settings
from pharmacy_pos.core.money import ZERO, format_money
from pharmacy_pos.schemas.state import Bill

CLOSING_MESSAGE = "May you have a speedy recovery!"


class ReceiptLine(BaseModel):
    name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class Receipt(BaseModel):
    business_name: str
    business_address: str
    business_phone: str
    customer_name: str
    customer_id: str
    bill_no: str
    date: datetime
    lines: List[ReceiptLine]
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal
    cash_received: Decimal
    change: Decimal
    closing_message: str = CLOSING_MESSAGE


def build_receipt(bill: Bill) -> Receipt:
    """Tax is fixed at zero, so subtotal and grand total are both the bill total."""
    return Receipt(
        business_name=settings.BUSINESS_NAME,
        business_address=settings.BUSINESS_ADDRESS,
        business_phone=settings.BUSINESS_PHONE,
        customer_name=bill.customer_name,
        customer_id=bill.customer_id,
        bill_no=bill.bill_no,
        date=bill.date,
        lines=[
            ReceiptLine(name=i.name, quantity=i.quantity, unit_price=i.unit_price, subtotal=i.subtotal)
            for i in bill.items
        ],
        subtotal=bill.total,
        tax=ZERO,
        grand_total=bill.total,
        cash_received=bill.cash_received,
        change=bill.balance,
    )


def generate_receipt_pdf(receipt: Receipt) -> BytesIO:
    """
    Render the receipt as an A4 PDF.

    Returns:
        BytesIO buffer positioned at the start of the PDF data
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=0.5*inch, bottomMargin=0.5*inch)

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'ReceiptTitle',
        parent=styles['Heading1'],
        fontSize=22,
        textColor=colors.HexColor('#059669'),
        alignment=TA_CENTER,
        spaceAfter=4
    )
    centered_style = ParagraphStyle(
        'Centered',
        parent=styles['Normal'],
        fontSize=9,
        textColor=colors.HexColor('#6b7280'),
        alignment=TA_CENTER
    )
    heading_style = ParagraphStyle(
        'ReceiptHeading',
        parent=styles['Heading2'],
        fontSize=12,
        textColor=colors.HexColor('#1f2937'),
        spaceAfter=4
    )
    normal_style = ParagraphStyle(
        'ReceiptNormal',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#374151')
    )

    # Business header
    elements.append(Paragraph(receipt.business_name.upper(), title_style))
    elements.append(Paragraph(f"{receipt.business_address} | {receipt.business_phone}", centered_style))
    elements.append(Paragraph("OFFICIAL RECEIPT", centered_style))
    elements.append(Spacer(1, 0.3*inch))

    # Billed-to and invoice blocks side by side
    info_data = [[
        Paragraph(f"<b>Billed To</b><br/>{receipt.customer_name}<br/>"
                  f"Customer ID: {receipt.customer_id}", normal_style),
        Paragraph(f"<b>Invoice</b><br/>{receipt.bill_no}<br/>"
                  f"{receipt.date.strftime('%d %b %Y, %I:%M %p')}", normal_style),
    ]]
    info_table = Table(info_data, colWidths=[3.5*inch, 3*inch])
    info_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('ALIGN', (1, 0), (1, 0), 'RIGHT'),
        ('LINEBELOW', (0, 0), (-1, 0), 0.5, colors.HexColor('#e5e7eb')),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 10),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.3*inch))

    # Items
    items_data = [["Medicine Description", "Qty", "Rate", "Amount"]]
    for line in receipt.lines:
        items_data.append([
            Paragraph(line.name, normal_style),
            str(line.quantity),
            format_money(line.unit_price),
            format_money(line.subtotal),
        ])
    items_table = Table(items_data, colWidths=[3*inch, 1*inch, 1.2*inch, 1.3*inch])
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f3f4f6')),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 9),
        ('ALIGN', (1, 0), (1, -1), 'CENTER'),
        ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
        ('LINEBELOW', (0, 0), (-1, -1), 0.25, colors.HexColor('#e5e7eb')),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2*inch))

    # Totals and payment
    total_data = [
        ['', '', "Subtotal", format_money(receipt.subtotal)],
        ['', '', "Tax", format_money(receipt.tax)],
        ['', '', Paragraph("<b>Total Due</b>", heading_style), Paragraph(f"<b>{format_money(receipt.grand_total)}</b>", heading_style)],
        ['', '', "Cash Received", format_money(receipt.cash_received)],
        ['', '', "Change Returned", format_money(receipt.change)],
    ]
    total_table = Table(total_data, colWidths=[3*inch, 1*inch, 1.2*inch, 1.3*inch])
    total_table.setStyle(TableStyle([
        ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
        ('LINEABOVE', (2, 2), (-1, 2), 1, colors.black),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    elements.append(total_table)
    elements.append(Spacer(1, 0.8*inch))

    # Footer
    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.grey,
        alignment=TA_CENTER
    )
    elements.append(Paragraph("AUTHORIZED SIGNATURE", footer_style))
    elements.append(Spacer(1, 0.3*inch))
    elements.append(Paragraph(f"<i>\"{receipt.closing_message}\"</i>", footer_style))

    doc.build(elements)
    buffer.seek(0)
    return buffer


def format_receipt_text(receipt: Receipt, width: int = 48) -> str:
    """Fixed-width receipt for thermal printers and terminals."""
    rule = "-" * width

    def pair(label: str, value: str) -> str:
        return f"{label}{value.rjust(width - len(label))}"

    out = [
        receipt.business_name.upper().center(width),
        receipt.business_address.center(width),
        receipt.business_phone.center(width),
        "OFFICIAL RECEIPT".center(width),
        rule,
        f"Billed To: {receipt.customer_name}",
        f"Customer ID: {receipt.customer_id}",
        f"Invoice: {receipt.bill_no}",
        f"Date: {receipt.date.strftime('%d %b %Y, %I:%M %p')}",
        rule,
        f"{'Item':<20}{'Qty':>5}{'Rate':>11}{'Amount':>12}",
    ]
    for line in receipt.lines:
        out.append(
            f"{line.name[:20]:<20}{line.quantity:>5}"
            f"{format_money(line.unit_price):>11}{format_money(line.subtotal):>12}"
        )
    out += [
        rule,
        pair("Subtotal", format_money(receipt.subtotal)),
        pair("Tax", format_money(receipt.tax)),
        pair("TOTAL DUE", format_money(receipt.grand_total)),
        rule,
        pair("Cash Received", format_money(receipt.cash_received)),
        pair("Change Returned", format_money(receipt.change)),
        rule,
        f"\"{receipt.closing_message}\"".center(width),
    ]
    return "\n".join(out)
