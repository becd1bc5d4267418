from datetime import datetime

from pydantic import BaseModel


class ClientCreate(BaseModel):
    name: str
    phone: str | None = None
    address: str | None = None
    email: str | None = None
    billing_details: str | None = None
    notes: str | None = None


class ClientUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    email: str | None = None
    billing_details: str | None = None
    notes: str | None = None


class ClientRead(BaseModel):
    id: int
    lead_id: int | None
    name: str
    phone: str | None
    address: str | None
    email: str | None
    billing_details: str | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
