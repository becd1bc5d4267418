from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import InvalidInput, NotFound
from ..models import Service
from ..schemas import ServiceCreate, ServiceUpdate
from .invoice_calculator import money, parse_amount


def list_services(db: Session, active_only: bool = False) -> list[Service]:
    query = select(Service).order_by(Service.name.asc())
    if active_only:
        query = query.where(Service.is_active.is_(True))
    return list(db.scalars(query))


def get_service(db: Session, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if not service:
        raise NotFound("Service", service_id)
    return service


def create_service(db: Session, payload: ServiceCreate) -> Service:
    name = payload.name.strip()
    if not name:
        raise InvalidInput("Name is required.")
    service = Service(
        name=name,
        description=payload.description,
        base_price=money(parse_amount(payload.base_price, "Base price")),
        is_active=payload.is_active,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


def update_service(db: Session, service_id: int, payload: ServiceUpdate) -> Service:
    service = get_service(db, service_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        name = (changes.pop("name") or "").strip()
        if not name:
            raise InvalidInput("Name is required.")
        service.name = name
    if "base_price" in changes:
        service.base_price = money(parse_amount(changes.pop("base_price"), "Base price"))
    if changes.get("is_active") is None:
        changes.pop("is_active", None)
    for key, value in changes.items():
        setattr(service, key, value)
    db.commit()
    db.refresh(service)
    return service


def toggle_service(db: Session, service_id: int) -> Service:
    service = get_service(db, service_id)
    service.is_active = not service.is_active
    db.commit()
    db.refresh(service)
    return service
