import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..errors import InvalidInput, InvalidTransition, NotFound
from ..models import Client, Invoice, InvoiceItem, InvoiceStatusEnum, Service
from ..models.base import utcnow
from ..schemas import InvoiceCreate, InvoiceItemIn, InvoicePreview
from .activity import log_activity
from .business import get_business_settings
from .invoice_calculator import (
    InvoiceTotals,
    LineItem,
    compute_totals,
    format_currency,
    money,
    parse_line_item,
)
from .invoice_numbers import generate_invoice_number
from .invoice_pdf import InvoiceDocument, build_document, render_document

logger = logging.getLogger(__name__)

# Forward-only lifecycle; nothing leaves ``paid``.
ALLOWED_TRANSITIONS: dict[InvoiceStatusEnum, set[InvoiceStatusEnum]] = {
    InvoiceStatusEnum.DRAFT: {
        InvoiceStatusEnum.SENT,
        InvoiceStatusEnum.PAID,
        InvoiceStatusEnum.OVERDUE,
    },
    InvoiceStatusEnum.SENT: {InvoiceStatusEnum.PAID, InvoiceStatusEnum.OVERDUE},
    InvoiceStatusEnum.OVERDUE: {InvoiceStatusEnum.PAID},
    InvoiceStatusEnum.PAID: set(),
}


def resolve_line_items(
    db: Session, raw_items: list[InvoiceItemIn]
) -> list[tuple[LineItem, int | None]]:
    """Validate submitted rows, filling blanks from the referenced service.

    Rows that end up without a description are dropped.
    """
    resolved: list[tuple[LineItem, int | None]] = []
    errors: list[str] = []
    for position, raw in enumerate(raw_items, start=1):
        values = raw.model_dump()
        if raw.service_id is not None:
            service = db.get(Service, raw.service_id)
            if not service:
                errors.append(f"Item {position} service not found.")
                continue
            if not (raw.description or "").strip():
                values["description"] = service.name
            if values.get("unit_price") in (None, ""):
                values["unit_price"] = service.base_price
        if not str(values.get("description") or "").strip():
            continue
        try:
            resolved.append((parse_line_item(values, position), raw.service_id))
        except InvalidInput as exc:
            errors.extend(exc.errors)
    if errors:
        raise InvalidInput(errors)
    return resolved


def preview_totals(db: Session, payload: InvoicePreview) -> InvoiceTotals:
    items = [item for item, _ in resolve_line_items(db, payload.items)]
    return compute_totals(items, payload.tax_rate, payload.discount)


def create_invoice(
    db: Session,
    payload: InvoiceCreate,
    clock: Callable[[], datetime] = utcnow,
) -> Invoice:
    client = db.get(Client, payload.client_id)
    if not client:
        raise InvalidInput("Client is required.")

    resolved = resolve_line_items(db, payload.items)
    totals = compute_totals(
        [item for item, _ in resolved], payload.tax_rate, payload.discount
    ).rounded()

    now = clock()
    today = now.date()
    due_date = payload.due_date or today + timedelta(days=settings.default_due_days)
    if due_date < today:
        raise InvalidInput("Due date cannot be before the invoice date.")

    try:
        invoice = Invoice(
            invoice_number=generate_invoice_number(db, now),
            client_id=client.id,
            invoice_date=today,
            due_date=due_date,
            status=InvoiceStatusEnum.DRAFT,
            subtotal=totals.subtotal,
            tax_rate=totals.tax_rate,
            tax_amount=totals.tax_amount,
            discount=totals.discount,
            total=totals.total,
            notes=payload.notes,
        )
        for position, (item, service_id) in enumerate(resolved, start=1):
            invoice.items.append(
                InvoiceItem(
                    position=position,
                    service_id=service_id,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=money(item.unit_price),
                    total=money(item.line_total),
                )
            )
        db.add(invoice)
        db.flush()
        log_activity(
            db,
            "invoice_created",
            f"Invoice {invoice.invoice_number} created for {format_currency(totals.total)}",
            client_id=client.id,
            invoice_id=invoice.id,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(invoice)
    logger.info("Invoice %s created for client %s", invoice.invoice_number, client.id)
    return invoice


def list_invoices(
    db: Session, q: str | None = None, status: InvoiceStatusEnum | None = None
) -> list[Invoice]:
    query = (
        select(Invoice)
        .join(Client, Invoice.client_id == Client.id)
        .options(selectinload(Invoice.items), selectinload(Invoice.client))
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
    )
    if status:
        query = query.where(Invoice.status == status)
    if q:
        like = f"%{q}%"
        query = query.where(or_(Invoice.invoice_number.ilike(like), Client.name.ilike(like)))
    return list(db.scalars(query))


def get_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = db.get(Invoice, invoice_id)
    if not invoice:
        raise NotFound("Invoice", invoice_id)
    return invoice


def update_status(
    db: Session,
    invoice_id: int,
    status: InvoiceStatusEnum,
    clock: Callable[[], datetime] = utcnow,
) -> Invoice:
    invoice = get_invoice(db, invoice_id)
    current = InvoiceStatusEnum(invoice.status)
    if status == current:
        return invoice
    if status not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(
            f"Cannot change invoice status from {current.value} to {status.value}."
        )

    invoice.status = status
    if status == InvoiceStatusEnum.PAID:
        invoice.paid_at = clock()
        log_activity(db, "invoice_paid", "Invoice marked as paid", invoice_id=invoice.id)
    db.commit()
    db.refresh(invoice)
    return invoice


def mark_overdue_invoices(db: Session, today: date | None = None) -> int:
    today = today or utcnow().date()
    invoices = db.scalars(
        select(Invoice).where(
            Invoice.status.in_([InvoiceStatusEnum.DRAFT, InvoiceStatusEnum.SENT]),
            Invoice.due_date < today,
        )
    ).all()
    for invoice in invoices:
        invoice.status = InvoiceStatusEnum.OVERDUE
    if invoices:
        db.commit()
        logger.info("Marked %s invoices overdue", len(invoices))
    return len(invoices)


def delete_invoice(db: Session, invoice_id: int) -> None:
    invoice = get_invoice(db, invoice_id)
    details = f"Invoice {invoice.invoice_number} for {invoice.client_name} deleted"
    db.delete(invoice)
    log_activity(db, "invoice_deleted", details, invoice_id=invoice_id)
    db.commit()


def invoice_document(db: Session, invoice_id: int) -> InvoiceDocument:
    invoice = get_invoice(db, invoice_id)
    return build_document(invoice, get_business_settings(db))


def render_invoice_pdf(db: Session, invoice_id: int) -> tuple[str, bytes]:
    document = invoice_document(db, invoice_id)
    return document.filename, render_document(document)
