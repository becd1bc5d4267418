"""Lead import from the WhatsApp intake spreadsheet.

The sheet is exposed as a JSON REST endpoint (one object per row). Rows are
upserted into ``leads`` keyed by phone number; status edits made in the CRM
are pushed back to the matching sheet row.
"""
from __future__ import annotations

import logging
from typing import Any

import requests
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import SheetSyncError
from ..models import Lead, LeadSourceEnum, LeadStatusEnum
from ..schemas import SheetSyncResult
from .activity import log_activity

logger = logging.getLogger(__name__)

SHEET_STATUS_MAP = {
    "new user": LeadStatusEnum.NEW,
    "complete": LeadStatusEnum.CONVERTED,
    "incomplete": LeadStatusEnum.QUALIFIED,
}

# Contacted and lost have no column value in the sheet.
LEAD_STATUS_TO_SHEET = {
    LeadStatusEnum.NEW: "New User",
    LeadStatusEnum.CONVERTED: "complete",
    LeadStatusEnum.QUALIFIED: "incomplete",
}


def fetch_sheet_rows(url: str | None = None) -> list[dict[str, Any]]:
    url = url or settings.sheet_api_url
    try:
        resp = requests.get(url, timeout=settings.sheet_timeout_seconds)
        resp.raise_for_status()
        rows = resp.json()
    except requests.RequestException as exc:
        raise SheetSyncError(f"Failed to fetch lead sheet: {exc}") from exc
    except ValueError as exc:
        raise SheetSyncError("Lead sheet returned invalid JSON") from exc
    if not isinstance(rows, list):
        raise SheetSyncError("Lead sheet returned an unexpected payload")
    return [row for row in rows if isinstance(row, dict)]


def map_sheet_status(raw: str | None) -> LeadStatusEnum:
    return SHEET_STATUS_MAP.get((raw or "").strip().lower(), LeadStatusEnum.NEW)


def sheet_status(status: LeadStatusEnum) -> str | None:
    return LEAD_STATUS_TO_SHEET.get(LeadStatusEnum(status))


def _cell(row: dict[str, Any], key: str) -> str:
    value = row.get(key)
    return str(value).strip() if value is not None else ""


def sheet_row_to_lead_fields(row: dict[str, Any]) -> dict[str, Any]:
    phone = _cell(row, "WhatsApp_ID")
    return {
        "name": _cell(row, "Business_Name") or phone,
        "phone": phone,
        "service_interested": _cell(row, "Current_Service") or None,
        "address": _cell(row, "Address") or None,
        "status": map_sheet_status(_cell(row, "Status")),
        "status_response": _cell(row, "Status_Response") or None,
    }


def sync_leads_from_sheet(
    db: Session, rows: list[dict[str, Any]] | None = None
) -> SheetSyncResult:
    if rows is None:
        rows = fetch_sheet_rows()
    if not rows:
        raise SheetSyncError("No leads found in WhatsApp")

    created = updated = skipped = 0
    existing = {
        lead.phone: lead
        for lead in db.scalars(select(Lead).where(Lead.phone.is_not(None)))
    }
    for index, row in enumerate(rows):
        fields = sheet_row_to_lead_fields(row)
        if not fields["phone"]:
            skipped += 1
            continue
        lead = existing.get(fields["phone"])
        if lead is None:
            lead = Lead(
                lead_source=LeadSourceEnum.GOOGLE_SHEET,
                google_sheet_row_id=f"row_{index + 2}",
                **fields,
            )
            db.add(lead)
            existing[lead.phone] = lead
            created += 1
        else:
            for key, value in fields.items():
                setattr(lead, key, value)
            updated += 1

    result = SheetSyncResult(created=created, updated=updated, skipped=skipped)
    log_activity(
        db,
        "google_sheets_sync",
        f"Synced {result.total} leads ({created} new, {updated} updated)",
    )
    db.commit()
    logger.info(
        "Lead sheet sync: %s created, %s updated, %s skipped", created, updated, skipped
    )
    return result


def push_lead_update(phone: str | None, updates: dict[str, Any]) -> bool:
    """Mirror a lead change to its sheet row. Never raises."""
    if not phone:
        return False
    url = f"{settings.sheet_api_url.rstrip('/')}/WhatsApp_ID/{phone}"
    try:
        resp = requests.patch(
            url, json={"data": updates}, timeout=settings.sheet_timeout_seconds
        )
        resp.raise_for_status()
    except requests.RequestException:
        logger.exception("Sheet update failed for %s", phone)
        return False
    return True
