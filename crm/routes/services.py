from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ServiceCreate, ServiceRead, ServiceUpdate
from ..services import catalog

router = APIRouter()


@router.get("/services", response_model=list[ServiceRead])
def services_list(
    active_only: bool = False, db: Session = Depends(get_db)
) -> list[ServiceRead]:
    return catalog.list_services(db, active_only)


@router.post("/services", response_model=ServiceRead, status_code=201)
def services_create(payload: ServiceCreate, db: Session = Depends(get_db)) -> ServiceRead:
    return catalog.create_service(db, payload)


@router.patch("/services/{service_id}", response_model=ServiceRead)
def services_update(
    service_id: int, payload: ServiceUpdate, db: Session = Depends(get_db)
) -> ServiceRead:
    return catalog.update_service(db, service_id, payload)


@router.post("/services/{service_id}/toggle", response_model=ServiceRead)
def services_toggle(service_id: int, db: Session = Depends(get_db)) -> ServiceRead:
    return catalog.toggle_service(db, service_id)
