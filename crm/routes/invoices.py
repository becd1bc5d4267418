import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import DocumentRenderError
from ..models import InvoiceStatusEnum
from ..schemas import (
    InvoiceCreate,
    InvoicePreview,
    InvoiceRead,
    InvoiceStatusUpdate,
    InvoiceTotalsRead,
)
from ..services import invoices as invoices_service
from ..services.invoice_calculator import InvoiceTotals, format_currency

router = APIRouter()
logger = logging.getLogger(__name__)


def _totals_read(totals: InvoiceTotals) -> InvoiceTotalsRead:
    rounded = totals.rounded()
    return InvoiceTotalsRead(
        subtotal=rounded.subtotal,
        tax_rate=rounded.tax_rate,
        tax_amount=rounded.tax_amount,
        discount=rounded.discount,
        total=rounded.total,
        formatted_total=format_currency(totals.total),
    )


@router.get("/invoices", response_model=list[InvoiceRead])
def invoices_list(
    q: str | None = None,
    status: InvoiceStatusEnum | None = None,
    db: Session = Depends(get_db),
) -> list[InvoiceRead]:
    return invoices_service.list_invoices(db, q, status)


@router.post("/invoices/preview", response_model=InvoiceTotalsRead)
def invoices_preview(
    payload: InvoicePreview, db: Session = Depends(get_db)
) -> InvoiceTotalsRead:
    return _totals_read(invoices_service.preview_totals(db, payload))


@router.post("/invoices", response_model=InvoiceRead, status_code=201)
def invoices_create(payload: InvoiceCreate, db: Session = Depends(get_db)) -> InvoiceRead:
    return invoices_service.create_invoice(db, payload)


@router.post("/invoices/mark-overdue")
def invoices_mark_overdue(db: Session = Depends(get_db)) -> dict:
    return {"updated": invoices_service.mark_overdue_invoices(db)}


@router.get("/invoices/{invoice_id}", response_model=InvoiceRead)
def invoices_detail(invoice_id: int, db: Session = Depends(get_db)) -> InvoiceRead:
    return invoices_service.get_invoice(db, invoice_id)


@router.post("/invoices/{invoice_id}/status", response_model=InvoiceRead)
def invoices_update_status(
    invoice_id: int, payload: InvoiceStatusUpdate, db: Session = Depends(get_db)
) -> InvoiceRead:
    return invoices_service.update_status(db, invoice_id, payload.status)


@router.delete("/invoices/{invoice_id}", status_code=204)
def invoices_delete(invoice_id: int, db: Session = Depends(get_db)) -> Response:
    invoices_service.delete_invoice(db, invoice_id)
    return Response(status_code=204)


@router.get("/invoices/{invoice_id}/pdf")
def invoices_pdf(invoice_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        filename, content = invoices_service.render_invoice_pdf(db, invoice_id)
    except DocumentRenderError:
        logger.exception("Invoice PDF generation failed for %s", invoice_id)
        raise HTTPException(
            status_code=500, detail="Failed to generate PDF. Please try again."
        ) from None
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
