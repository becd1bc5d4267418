from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ActivityRead(BaseModel):
    id: int
    action: str
    label: str
    details: str | None
    lead_id: int | None
    client_id: int | None
    invoice_id: int | None
    created_at: datetime


class DashboardStats(BaseModel):
    total_leads: int
    total_clients: int
    active_services: int
    pending_invoices: int
    revenue: Decimal
