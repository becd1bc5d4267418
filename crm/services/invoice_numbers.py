from datetime import datetime

from sqlalchemy import text
from sqlalchemy.orm import Session

from ..errors import InvalidInput
from ..models.base import utcnow

MAX_SEQUENCE = 999_999


def generate_invoice_number(db: Session, now: datetime | None = None) -> str:
    """Reserve the next invoice number for the current year.

    The sequence row is bumped inside the caller's transaction, so the number
    is only consumed if the invoice insert commits. Numbers look like
    ``INV-26000042``: two year digits followed by a six digit counter, so a
    year holds at most 999,999 invoices.
    """
    current_time = now or utcnow()
    year = current_time.year
    db.execute(
        text(
            "INSERT OR IGNORE INTO invoice_sequences (year, last_number, updated_at) "
            "VALUES (:year, 0, :updated_at)"
        ),
        {"year": year, "updated_at": current_time},
    )
    db.execute(
        text(
            "UPDATE invoice_sequences "
            "SET last_number = last_number + 1, updated_at = :updated_at "
            "WHERE year = :year"
        ),
        {"year": year, "updated_at": current_time},
    )
    next_number = db.execute(
        text("SELECT last_number FROM invoice_sequences WHERE year = :year"),
        {"year": year},
    ).scalar_one()
    if next_number > MAX_SEQUENCE:
        raise InvalidInput(f"Invoice numbers for {year} are exhausted.")

    return f"INV-{str(year)[2:]}{next_number:06d}"
