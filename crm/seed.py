from __future__ import annotations

from sqlalchemy.orm import Session

from .config import settings
from .db import SessionLocal
from .models import BusinessSettings
from .services.business import get_business_settings


def seed_business_settings(session: Session) -> bool:
    if get_business_settings(session) is not None:
        return False
    session.add(
        BusinessSettings(
            business_name=settings.issuer_name,
            address=settings.issuer_address,
            phone=settings.issuer_phone,
        )
    )
    session.commit()
    return True


def main() -> None:
    with SessionLocal() as session:
        created = seed_business_settings(session)
    print(f"Seeded business settings: {int(created)}")


if __name__ == "__main__":
    main()
