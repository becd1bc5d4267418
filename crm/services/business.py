from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import InvalidInput
from ..models import BusinessSettings
from ..schemas import BusinessSettingsUpdate


def get_business_settings(db: Session) -> BusinessSettings | None:
    return db.scalars(select(BusinessSettings).order_by(BusinessSettings.id).limit(1)).first()


def save_business_settings(db: Session, payload: BusinessSettingsUpdate) -> BusinessSettings:
    if not payload.business_name.strip():
        raise InvalidInput("Business name is required.")
    record = get_business_settings(db)
    if record is None:
        record = BusinessSettings(**payload.model_dump())
        db.add(record)
    else:
        for key, value in payload.model_dump().items():
            setattr(record, key, value)
    db.commit()
    db.refresh(record)
    return record
