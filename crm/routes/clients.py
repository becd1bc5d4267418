from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import ClientCreate, ClientRead, ClientUpdate
from ..services import clients as clients_service

router = APIRouter()


@router.get("/clients", response_model=list[ClientRead])
def clients_list(q: str | None = None, db: Session = Depends(get_db)) -> list[ClientRead]:
    return clients_service.list_clients(db, q)


@router.post("/clients", response_model=ClientRead, status_code=201)
def clients_create(payload: ClientCreate, db: Session = Depends(get_db)) -> ClientRead:
    return clients_service.create_client(db, payload)


@router.get("/clients/{client_id}", response_model=ClientRead)
def clients_detail(client_id: int, db: Session = Depends(get_db)) -> ClientRead:
    return clients_service.get_client(db, client_id)


@router.patch("/clients/{client_id}", response_model=ClientRead)
def clients_update(
    client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)
) -> ClientRead:
    return clients_service.update_client(db, client_id, payload)


@router.delete("/clients/{client_id}", status_code=204)
def clients_delete(client_id: int, db: Session = Depends(get_db)) -> Response:
    clients_service.delete_client(db, client_id)
    return Response(status_code=204)
