from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import ActivityLog

ACTION_LABELS = {
    "google_sheets_sync": "Google Sheets Sync",
    "lead_created": "New Lead Created",
    "lead_converted": "Lead Converted to Client",
    "invoice_created": "Invoice Created",
    "invoice_paid": "Invoice Marked as Paid",
}


def log_activity(
    db: Session,
    action: str,
    details: str | None = None,
    *,
    lead_id: int | None = None,
    client_id: int | None = None,
    invoice_id: int | None = None,
) -> ActivityLog:
    entry = ActivityLog(
        action=action,
        details=details,
        lead_id=lead_id,
        client_id=client_id,
        invoice_id=invoice_id,
    )
    db.add(entry)
    return entry


def action_label(action: str) -> str:
    if action in ACTION_LABELS:
        return ACTION_LABELS[action]
    return " ".join(word[:1].upper() + word[1:] for word in action.split("_") if word)


def recent_activity(db: Session, limit: int = 10) -> list[ActivityLog]:
    return list(
        db.scalars(
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
    )
