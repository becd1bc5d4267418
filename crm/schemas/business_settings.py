from datetime import datetime

from pydantic import BaseModel


class BusinessSettingsUpdate(BaseModel):
    business_name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None
    google_sheet_id: str | None = None


class BusinessSettingsRead(BusinessSettingsUpdate):
    id: int
    updated_at: datetime

    model_config = {"from_attributes": True}
