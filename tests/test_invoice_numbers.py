from datetime import datetime

import pytest

from crm.errors import InvalidInput
from crm.models import InvoiceSequence
from crm.services.invoice_numbers import generate_invoice_number


def test_numbers_increase_within_a_year(db_session):
    now = datetime(2026, 3, 1, 9, 30)
    first = generate_invoice_number(db_session, now)
    second = generate_invoice_number(db_session, now)
    db_session.commit()

    assert first == "INV-26000001"
    assert second == "INV-26000002"
    assert db_session.get(InvoiceSequence, 2026).last_number == 2


def test_new_year_starts_a_new_sequence(db_session):
    generate_invoice_number(db_session, datetime(2026, 12, 31, 23, 59))
    number = generate_invoice_number(db_session, datetime(2027, 1, 1, 0, 1))
    assert number == "INV-27000001"


def test_rolled_back_number_is_reused(db_session):
    now = datetime(2026, 5, 1)
    generate_invoice_number(db_session, now)
    db_session.rollback()
    assert generate_invoice_number(db_session, now) == "INV-26000001"


def test_sequence_refuses_to_widen_past_six_digits(db_session):
    db_session.add(InvoiceSequence(year=2026, last_number=999_998, updated_at=datetime(2026, 1, 1)))
    db_session.commit()

    assert generate_invoice_number(db_session, datetime(2026, 6, 1)) == "INV-26999999"
    with pytest.raises(InvalidInput):
        generate_invoice_number(db_session, datetime(2026, 6, 1))
