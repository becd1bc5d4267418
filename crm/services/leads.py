import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import InvalidInput, InvalidTransition, NotFound
from ..models import Client, Lead, LeadSourceEnum, LeadStatusEnum
from ..schemas import LeadCreate, LeadUpdate
from .activity import log_activity
from .sheet_sync import push_lead_update, sheet_status

logger = logging.getLogger(__name__)


def list_leads(
    db: Session, q: str | None = None, status: LeadStatusEnum | None = None
) -> list[Lead]:
    query = select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc())
    if status:
        query = query.where(Lead.status == status)
    if q:
        like = f"%{q}%"
        query = query.where(
            or_(
                Lead.name.ilike(like),
                Lead.phone.ilike(like),
                Lead.service_interested.ilike(like),
            )
        )
    return list(db.scalars(query))


def get_lead(db: Session, lead_id: int) -> Lead:
    lead = db.get(Lead, lead_id)
    if not lead:
        raise NotFound("Lead", lead_id)
    return lead


def create_lead(db: Session, payload: LeadCreate) -> Lead:
    errors: list[str] = []
    name = payload.name.strip()
    phone = payload.phone.strip()
    if not name:
        errors.append("Name is required.")
    if not phone:
        errors.append("Phone is required.")
    if errors:
        raise InvalidInput(errors)

    lead = Lead(
        name=name,
        phone=phone,
        service_interested=payload.service_interested,
        address=payload.address,
        notes=payload.notes,
        follow_up_date=payload.follow_up_date,
        status=LeadStatusEnum.NEW,
        lead_source=LeadSourceEnum.MANUAL,
    )
    db.add(lead)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise InvalidInput("A lead with this phone number already exists.") from None
    log_activity(db, "lead_created", f"Lead {lead.name} created", lead_id=lead.id)
    db.commit()
    db.refresh(lead)
    return lead


def update_lead(db: Session, lead_id: int, payload: LeadUpdate) -> Lead:
    lead = get_lead(db, lead_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise InvalidInput("Name is required.")
        changes["name"] = name
    if changes.get("status", "") is None:
        changes.pop("status")
    previous_status = lead.status
    for key, value in changes.items():
        setattr(lead, key, value)
    db.commit()
    db.refresh(lead)

    if "status" in changes and changes["status"] != previous_status:
        status = sheet_status(changes["status"])
        if status is not None:
            push_lead_update(lead.phone, {"Status": status})
    return lead


def save_status_response(db: Session, lead_id: int, status_response: str) -> Lead:
    lead = get_lead(db, lead_id)
    lead.status_response = status_response
    db.commit()
    db.refresh(lead)
    push_lead_update(lead.phone, {"Status_Response": status_response})
    return lead


def delete_lead(db: Session, lead_id: int) -> None:
    lead = get_lead(db, lead_id)
    name = lead.name
    db.delete(lead)
    log_activity(db, "lead_deleted", f"Lead {name} deleted", lead_id=lead_id)
    db.commit()


def convert_lead_to_client(db: Session, lead_id: int) -> Client:
    lead = get_lead(db, lead_id)
    if lead.status == LeadStatusEnum.CONVERTED:
        raise InvalidTransition(f"Lead {lead.name} is already converted.")

    client = Client(
        lead_id=lead.id,
        name=lead.name or lead.phone,
        phone=lead.phone,
        address=lead.address,
        notes=f"Converted from lead. Service interested: {lead.service_interested or ''}",
    )
    db.add(client)
    lead.status = LeadStatusEnum.CONVERTED
    db.flush()
    log_activity(
        db,
        "lead_converted",
        f"Lead {lead.name} converted to client",
        lead_id=lead.id,
        client_id=client.id,
    )
    db.commit()
    db.refresh(client)
    logger.info("Lead %s converted to client %s", lead.id, client.id)

    push_lead_update(lead.phone, {"Status": sheet_status(LeadStatusEnum.CONVERTED)})
    return client
