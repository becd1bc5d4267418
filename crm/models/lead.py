from datetime import date, datetime
from enum import Enum

from sqlalchemy import Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, enum_column, utcnow


class LeadStatusEnum(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    LOST = "lost"


class LeadSourceEnum(str, Enum):
    GOOGLE_SHEET = "google_sheet"
    MANUAL = "manual"


class Lead(Base):
    __tablename__ = "leads"
    __table_args__ = (
        Index("ix_leads_status", "status"),
        Index("ix_leads_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    service_interested: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[LeadStatusEnum] = mapped_column(
        enum_column(LeadStatusEnum), nullable=False, default=LeadStatusEnum.NEW
    )
    status_response: Mapped[str | None] = mapped_column(Text)
    lead_source: Mapped[LeadSourceEnum] = mapped_column(
        enum_column(LeadSourceEnum), nullable=False, default=LeadSourceEnum.MANUAL
    )
    notes: Mapped[str | None] = mapped_column(Text)
    follow_up_date: Mapped[date | None] = mapped_column(Date)
    google_sheet_row_id: Mapped[str | None] = mapped_column(String(50))
    license_name_1: Mapped[str | None] = mapped_column(String(255))
    license_status_1: Mapped[str | None] = mapped_column(String(50))
    license_link_1: Mapped[str | None] = mapped_column(String(500))
    license_name_2: Mapped[str | None] = mapped_column(String(255))
    license_status_2: Mapped[str | None] = mapped_column(String(50))
    license_link_2: Mapped[str | None] = mapped_column(String(500))
    license_name_3: Mapped[str | None] = mapped_column(String(255))
    license_status_3: Mapped[str | None] = mapped_column(String(50))
    license_link_3: Mapped[str | None] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )

    def licenses(self) -> list[tuple[str | None, str | None, str | None]]:
        return [
            (self.license_name_1, self.license_status_1, self.license_link_1),
            (self.license_name_2, self.license_status_2, self.license_link_2),
            (self.license_name_3, self.license_status_3, self.license_link_3),
        ]
