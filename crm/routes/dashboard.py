from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ActivityRead, DashboardStats, ReportSummary
from ..services import reports
from ..services.activity import action_label, recent_activity

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(db: Session = Depends(get_db)) -> DashboardStats:
    return reports.dashboard_stats(db)


@router.get("/activity", response_model=list[ActivityRead])
def activity(
    limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db)
) -> list[ActivityRead]:
    return [
        ActivityRead(
            id=entry.id,
            action=entry.action,
            label=action_label(entry.action),
            details=entry.details,
            lead_id=entry.lead_id,
            client_id=entry.client_id,
            invoice_id=entry.invoice_id,
            created_at=entry.created_at,
        )
        for entry in recent_activity(db, limit)
    ]


@router.get("/reports", response_model=ReportSummary)
def report_summary(db: Session = Depends(get_db)) -> ReportSummary:
    return reports.report_summary(db)
