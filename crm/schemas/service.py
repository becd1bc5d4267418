from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from .invoice import RawNumber


class ServiceCreate(BaseModel):
    name: str
    description: str | None = None
    base_price: RawNumber = None
    is_active: bool = True


class ServiceUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    base_price: RawNumber = None
    is_active: bool | None = None


class ServiceRead(BaseModel):
    id: int
    name: str
    description: str | None
    base_price: Decimal
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
