"""Proforma invoice PDF rendering with reportlab.

``build_document`` resolves a stored invoice into an ``InvoiceDocument``;
``render_document`` lays it out and returns the finished PDF as bytes.
"""
from __future__ import annotations

import io
import textwrap
from dataclasses import dataclass
from datetime import date
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..config import settings
from ..errors import DocumentRenderError
from ..models import BusinessSettings, Invoice
from .invoice_calculator import InvoiceTotals, LineItem, compute_totals, format_currency

DOCUMENT_TITLE = "PROFORMA INVOICE"
NOTES_WRAP_WIDTH = 70
ITEM_HEADER = ["#", "Item Description", "Qty", "Rate", "Amount"]
BRAND_COLOR = colors.HexColor("#2563EB")


@dataclass(frozen=True)
class Issuer:
    name: str
    company_id: str
    address: str
    phone: str


@dataclass(frozen=True)
class BillTo:
    name: str
    address: str
    phone: str


@dataclass(frozen=True)
class InvoiceDocument:
    invoice_number: str
    invoice_date: date
    due_date: date
    issuer: Issuer
    bill_to: BillTo
    items: tuple[LineItem, ...]
    totals: InvoiceTotals
    notes: str | None = None

    @property
    def filename(self) -> str:
        return f"Invoice_{self.invoice_number}.pdf"


def build_document(
    invoice: Invoice, business: BusinessSettings | None = None
) -> InvoiceDocument:
    items = tuple(
        LineItem(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for item in invoice.items
    )
    issuer = Issuer(
        name=(business.business_name if business else None) or settings.issuer_name,
        company_id=settings.issuer_company_id,
        address=(business.address if business else None) or settings.issuer_address,
        phone=(business.phone if business else None) or settings.issuer_phone,
    )
    client = invoice.client
    bill_to = BillTo(
        name=client.name,
        address=(client.address or "").strip() or settings.default_client_address,
        phone=client.phone or "",
    )
    return InvoiceDocument(
        invoice_number=invoice.invoice_number,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        issuer=issuer,
        bill_to=bill_to,
        items=items,
        totals=compute_totals(items, invoice.tax_rate, invoice.discount),
        notes=invoice.notes,
    )


def item_rows(document: InvoiceDocument) -> list[list[str]]:
    return [
        [
            str(index),
            item.description,
            str(item.quantity),
            format_currency(item.unit_price),
            format_currency(item.line_total),
        ]
        for index, item in enumerate(document.items, start=1)
    ]


def totals_rows(document: InvoiceDocument) -> list[tuple[str, str]]:
    totals = document.totals
    return [
        ("Subtotal:", format_currency(totals.subtotal)),
        (f"Tax ({totals.tax_rate.normalize():f}%):", format_currency(totals.tax_amount)),
        ("Discount:", format_currency(totals.discount)),
        ("Total:", format_currency(totals.total)),
    ]


def notes_lines(document: InvoiceDocument) -> list[str]:
    if not document.notes or not document.notes.strip():
        return []
    lines: list[str] = []
    for paragraph in document.notes.strip().splitlines():
        lines.extend(textwrap.wrap(paragraph, NOTES_WRAP_WIDTH) or [""])
    return lines


def footer_lines(document: InvoiceDocument) -> list[str]:
    return [
        "Thank you for your business!",
        f"For queries, contact {document.issuer.name}",
        f"Payment Terms: {settings.payment_terms}",
    ]


def bank_lines() -> list[str]:
    return [
        f"Account Name: {settings.bank_account_name}",
        f"Bank: {settings.bank_name}",
        f"Account No: {settings.bank_account_no}",
        f"Branch: {settings.bank_branch}",
        f"IFSC: {settings.bank_ifsc}",
    ]


def render_document(document: InvoiceDocument) -> bytes:
    try:
        buffer = io.BytesIO()
        pdf = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=14 * mm,
            rightMargin=14 * mm,
            topMargin=14 * mm,
            bottomMargin=14 * mm,
            title=document.filename,
        )
        pdf.build(_flowables(document))
    except Exception as exc:
        raise DocumentRenderError(
            f"Could not render invoice {document.invoice_number}"
        ) from exc
    return buffer.getvalue()


def _flowables(document: InvoiceDocument) -> list:
    styles = getSampleStyleSheet()
    normal = styles["Normal"]
    small = ParagraphStyle("Small", parent=normal, fontSize=9, leading=11)
    issuer_name = ParagraphStyle(
        "IssuerName", parent=normal, fontName="Helvetica-Bold", fontSize=22, leading=26
    )

    def para(text: str, style: ParagraphStyle = normal) -> Paragraph:
        return Paragraph(escape(text), style)

    issuer = document.issuer
    header = Table(
        [
            [
                [para(issuer.name, issuer_name), para(DOCUMENT_TITLE)],
                [
                    para(f"Company ID: {issuer.company_id}", small),
                    para(issuer.address, small),
                    para(f"Phone: {issuer.phone}", small),
                ],
            ]
        ],
        colWidths=[110 * mm, 72 * mm],
    )
    header.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))

    bill_to = document.bill_to
    meta = Table(
        [
            [
                [
                    para("Bill To:"),
                    para(bill_to.name),
                    para(bill_to.address),
                    para(f"Phone: {bill_to.phone}"),
                ],
                [
                    para(f"Invoice No: {document.invoice_number}"),
                    para(f"Date: {document.invoice_date:%d %b %Y}"),
                    para(f"Due: {document.due_date:%d %b %Y}"),
                ],
            ]
        ],
        colWidths=[110 * mm, 72 * mm],
    )
    meta.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))

    items = Table(
        [ITEM_HEADER] + item_rows(document),
        colWidths=[12 * mm, 80 * mm, 20 * mm, 35 * mm, 35 * mm],
        repeatRows=1,
    )
    items.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), BRAND_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )

    totals = Table(totals_rows(document), colWidths=[40 * mm, 40 * mm], hAlign="RIGHT")
    totals.setStyle(
        TableStyle(
            [
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                ("FONTNAME", (0, 0), (-1, -2), "Helvetica"),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, -1), (-1, -1), 12),
                ("LINEABOVE", (0, -1), (-1, -1), 1, BRAND_COLOR),
            ]
        )
    )

    elements: list = [header, Spacer(1, 8 * mm), meta, Spacer(1, 6 * mm), items]
    elements += [Spacer(1, 5 * mm), totals]

    notes = notes_lines(document)
    if notes:
        elements += [Spacer(1, 8 * mm), para("Notes:")]
        elements += [para(line) for line in notes]

    elements.append(Spacer(1, 10 * mm))
    elements += [para(line) for line in footer_lines(document)]
    elements += [Spacer(1, 5 * mm), para("Bank Details:", small)]
    elements += [para(line, small) for line in bank_lines()]
    return elements
