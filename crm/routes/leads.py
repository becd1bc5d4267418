from typing import Literal

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import LeadStatusEnum
from ..schemas import (
    LeadConversion,
    LeadCreate,
    LeadRead,
    LeadStatusMessage,
    LeadStatusResponseUpdate,
    LeadUpdate,
    SheetSyncResult,
)
from ..services import leads as leads_service
from ..services import lead_messages
from ..services.sheet_sync import sync_leads_from_sheet

router = APIRouter()


@router.get("/leads", response_model=list[LeadRead])
def leads_list(
    q: str | None = None,
    status: LeadStatusEnum | None = None,
    db: Session = Depends(get_db),
) -> list[LeadRead]:
    return leads_service.list_leads(db, q, status)


@router.post("/leads", response_model=LeadRead, status_code=201)
def leads_create(payload: LeadCreate, db: Session = Depends(get_db)) -> LeadRead:
    return leads_service.create_lead(db, payload)


@router.post("/leads/sync", response_model=SheetSyncResult)
def leads_sync(db: Session = Depends(get_db)) -> SheetSyncResult:
    return sync_leads_from_sheet(db)


@router.get("/leads/{lead_id}", response_model=LeadRead)
def leads_detail(lead_id: int, db: Session = Depends(get_db)) -> LeadRead:
    return leads_service.get_lead(db, lead_id)


@router.patch("/leads/{lead_id}", response_model=LeadRead)
def leads_update(
    lead_id: int, payload: LeadUpdate, db: Session = Depends(get_db)
) -> LeadRead:
    return leads_service.update_lead(db, lead_id, payload)


@router.delete("/leads/{lead_id}", status_code=204)
def leads_delete(lead_id: int, db: Session = Depends(get_db)) -> Response:
    leads_service.delete_lead(db, lead_id)
    return Response(status_code=204)


@router.post("/leads/{lead_id}/convert", response_model=LeadConversion, status_code=201)
def leads_convert(lead_id: int, db: Session = Depends(get_db)) -> LeadConversion:
    client = leads_service.convert_lead_to_client(db, lead_id)
    return LeadConversion(lead_id=lead_id, client_id=client.id)


@router.get("/leads/{lead_id}/status-message", response_model=LeadStatusMessage)
def leads_status_message(
    lead_id: int,
    kind: Literal["approved", "rejected"] = "approved",
    db: Session = Depends(get_db),
) -> LeadStatusMessage:
    lead = leads_service.get_lead(db, lead_id)
    if kind == "approved":
        message = lead_messages.approved_message(lead)
    else:
        message = lead_messages.rejected_message(lead)
    return LeadStatusMessage(kind=kind, message=message)


@router.put("/leads/{lead_id}/status-response", response_model=LeadRead)
def leads_status_response(
    lead_id: int, payload: LeadStatusResponseUpdate, db: Session = Depends(get_db)
) -> LeadRead:
    return leads_service.save_status_response(db, lead_id, payload.status_response)
