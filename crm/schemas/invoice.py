from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models import InvoiceStatusEnum

# Numbers arrive as raw form values and are validated by the calculator.
RawNumber = str | int | float | Decimal | None


class InvoiceItemIn(BaseModel):
    description: str = ""
    quantity: RawNumber = 1
    unit_price: RawNumber = None
    service_id: int | None = None


class InvoicePreview(BaseModel):
    tax_rate: RawNumber = None
    discount: RawNumber = None
    items: list[InvoiceItemIn] = Field(default_factory=list)


class InvoiceCreate(InvoicePreview):
    client_id: int
    due_date: date | None = None
    notes: str | None = None


class InvoiceTotalsRead(BaseModel):
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount: Decimal
    total: Decimal
    formatted_total: str


class InvoiceItemRead(BaseModel):
    id: int
    service_id: int | None
    position: int
    description: str
    quantity: int
    unit_price: Decimal
    total: Decimal

    model_config = {"from_attributes": True}


class InvoiceRead(BaseModel):
    id: int
    invoice_number: str
    client_id: int
    client_name: str | None = None
    invoice_date: date
    due_date: date
    status: InvoiceStatusEnum
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount: Decimal
    total: Decimal
    notes: str | None
    paid_at: datetime | None
    created_at: datetime
    items: list[InvoiceItemRead]

    model_config = {"from_attributes": True}


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatusEnum
