from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Client, Invoice, InvoiceStatusEnum, Lead, LeadStatusEnum, Service
from ..models.base import utcnow
from ..schemas import DashboardStats, ReportSummary
from ..schemas.report import MonthlyRevenue
from .invoice_calculator import ZERO, money

PENDING_STATUSES = (InvoiceStatusEnum.DRAFT, InvoiceStatusEnum.SENT)
MONTHS_IN_REPORT = 6


def _count(db: Session, query) -> int:
    return db.scalar(query) or 0


def _sum_totals(db: Session, *statuses: InvoiceStatusEnum) -> Decimal:
    value = db.scalar(
        select(func.coalesce(func.sum(Invoice.total), 0)).where(
            Invoice.status.in_(statuses)
        )
    )
    return money(value)


def dashboard_stats(db: Session) -> DashboardStats:
    return DashboardStats(
        total_leads=_count(db, select(func.count(Lead.id))),
        total_clients=_count(db, select(func.count(Client.id))),
        active_services=_count(
            db, select(func.count(Service.id)).where(Service.is_active.is_(True))
        ),
        pending_invoices=_count(
            db,
            select(func.count(Invoice.id)).where(Invoice.status.in_(PENDING_STATUSES)),
        ),
        revenue=_sum_totals(db, InvoiceStatusEnum.PAID),
    )


def _status_counts(db: Session, column, statuses) -> dict[str, int]:
    counts = {status.value: 0 for status in statuses}
    for status, count in db.execute(select(column, func.count()).group_by(column)).all():
        key = status.value if hasattr(status, "value") else str(status)
        counts[key] = count
    return counts


def conversion_rate(total_leads: int, converted_leads: int) -> Decimal:
    if not total_leads:
        return Decimal("0.0")
    rate = Decimal(converted_leads) * 100 / Decimal(total_leads)
    return rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def _month_starts(today: date, count: int) -> list[date]:
    months: list[date] = []
    year, month = today.year, today.month
    for _ in range(count):
        months.insert(0, date(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def monthly_revenue(
    db: Session, today: date | None = None, months: int = MONTHS_IN_REPORT
) -> list[MonthlyRevenue]:
    today = today or utcnow().date()
    starts = _month_starts(today, months)
    buckets = {(start.year, start.month): ZERO for start in starts}
    paid = db.execute(
        select(Invoice.invoice_date, Invoice.total).where(
            Invoice.status == InvoiceStatusEnum.PAID,
            Invoice.invoice_date >= starts[0],
        )
    ).all()
    for invoice_date, total in paid:
        key = (invoice_date.year, invoice_date.month)
        if key in buckets:
            buckets[key] += total
    return [
        MonthlyRevenue(month=f"{start:%b %Y}", revenue=money(buckets[(start.year, start.month)]))
        for start in starts
    ]


def report_summary(db: Session, today: date | None = None) -> ReportSummary:
    leads_by_status = _status_counts(db, Lead.status, LeadStatusEnum)
    total_leads = sum(leads_by_status.values())
    return ReportSummary(
        leads_by_status=leads_by_status,
        invoices_by_status=_status_counts(db, Invoice.status, InvoiceStatusEnum),
        conversion_rate=conversion_rate(
            total_leads, leads_by_status[LeadStatusEnum.CONVERTED.value]
        ),
        total_revenue=_sum_totals(db, InvoiceStatusEnum.PAID),
        pending_revenue=_sum_totals(db, *PENDING_STATUSES),
        monthly_revenue=monthly_revenue(db, today),
    )
