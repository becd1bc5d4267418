from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import BusinessSettingsRead, BusinessSettingsUpdate
from ..services import business

router = APIRouter()


@router.get("/settings", response_model=BusinessSettingsRead)
def settings_detail(db: Session = Depends(get_db)) -> BusinessSettingsRead:
    record = business.get_business_settings(db)
    if record is None:
        raise HTTPException(status_code=404, detail="Business settings not configured")
    return record


@router.put("/settings", response_model=BusinessSettingsRead)
def settings_update(
    payload: BusinessSettingsUpdate, db: Session = Depends(get_db)
) -> BusinessSettingsRead:
    return business.save_business_settings(db, payload)
