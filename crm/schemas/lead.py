from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel

from ..models import LeadSourceEnum, LeadStatusEnum


class LeadCreate(BaseModel):
    name: str
    phone: str
    service_interested: str | None = None
    address: str | None = None
    notes: str | None = None
    follow_up_date: date | None = None


class LeadUpdate(BaseModel):
    name: str | None = None
    service_interested: str | None = None
    address: str | None = None
    status: LeadStatusEnum | None = None
    notes: str | None = None
    follow_up_date: date | None = None
    license_name_1: str | None = None
    license_status_1: str | None = None
    license_link_1: str | None = None
    license_name_2: str | None = None
    license_status_2: str | None = None
    license_link_2: str | None = None
    license_name_3: str | None = None
    license_status_3: str | None = None
    license_link_3: str | None = None


class LeadRead(BaseModel):
    id: int
    name: str
    phone: str
    service_interested: str | None
    address: str | None
    status: LeadStatusEnum
    status_response: str | None
    lead_source: LeadSourceEnum
    notes: str | None
    follow_up_date: date | None
    google_sheet_row_id: str | None
    license_name_1: str | None
    license_status_1: str | None
    license_link_1: str | None
    license_name_2: str | None
    license_status_2: str | None
    license_link_2: str | None
    license_name_3: str | None
    license_status_3: str | None
    license_link_3: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LeadStatusResponseUpdate(BaseModel):
    status_response: str


class LeadStatusMessage(BaseModel):
    kind: Literal["approved", "rejected"]
    message: str


class LeadConversion(BaseModel):
    lead_id: int
    client_id: int


class SheetSyncResult(BaseModel):
    created: int
    updated: int
    skipped: int

    @property
    def total(self) -> int:
        return self.created + self.updated
