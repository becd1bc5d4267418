from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..errors import InvalidInput, InvalidTransition, NotFound
from ..models import Client, Invoice
from ..schemas import ClientCreate, ClientUpdate
from .activity import log_activity


def list_clients(db: Session, q: str | None = None) -> list[Client]:
    query = select(Client).order_by(Client.created_at.desc(), Client.id.desc())
    if q:
        like = f"%{q}%"
        query = query.where(
            or_(Client.name.ilike(like), Client.phone.ilike(like), Client.email.ilike(like))
        )
    return list(db.scalars(query))


def get_client(db: Session, client_id: int) -> Client:
    client = db.get(Client, client_id)
    if not client:
        raise NotFound("Client", client_id)
    return client


def create_client(db: Session, payload: ClientCreate) -> Client:
    if not payload.name.strip():
        raise InvalidInput("Name is required.")
    client = Client(**payload.model_dump())
    client.name = client.name.strip()
    db.add(client)
    db.commit()
    db.refresh(client)
    return client


def update_client(db: Session, client_id: int, payload: ClientUpdate) -> Client:
    client = get_client(db, client_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and not (changes["name"] or "").strip():
        raise InvalidInput("Name is required.")
    for key, value in changes.items():
        setattr(client, key, value)
    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> None:
    client = get_client(db, client_id)
    invoice_count = db.scalar(
        select(func.count(Invoice.id)).where(Invoice.client_id == client.id)
    )
    if invoice_count:
        raise InvalidTransition("Cannot delete: client has invoices.")
    name = client.name
    db.delete(client)
    log_activity(db, "client_deleted", f"Client {name} deleted", client_id=client_id)
    db.commit()
