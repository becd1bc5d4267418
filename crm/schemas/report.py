from decimal import Decimal

from pydantic import BaseModel


class MonthlyRevenue(BaseModel):
    month: str
    revenue: Decimal


class ReportSummary(BaseModel):
    leads_by_status: dict[str, int]
    invoices_by_status: dict[str, int]
    conversion_rate: Decimal
    total_revenue: Decimal
    pending_revenue: Decimal
    monthly_revenue: list[MonthlyRevenue]
