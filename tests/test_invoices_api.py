import re
from datetime import date, datetime
from decimal import Decimal

from crm.models import ActivityLog, Client, Invoice, InvoiceStatusEnum, Service
from crm.schemas import InvoiceCreate
from crm.services import invoice_pdf
from crm.services.invoice_calculator import format_currency
from crm.services.invoice_pdf import build_document, totals_rows
from crm.services.invoices import create_invoice, mark_overdue_invoices

SCENARIO_ITEMS = [
    {"description": "Pro License", "quantity": 2, "unit_price": "500.00"},
    {"description": "Setup Fee", "quantity": 1, "unit_price": "1500.00"},
]


def _status_value(value):
    return value.value if hasattr(value, "value") else str(value)


def _client(db_session, name="Acme Traders") -> Client:
    client = Client(name=name, phone="9000000001")
    db_session.add(client)
    db_session.commit()
    return client


def _create(client, client_id, **overrides):
    payload = {
        "client_id": client_id,
        "tax_rate": "18",
        "discount": "100",
        "items": SCENARIO_ITEMS,
    }
    payload.update(overrides)
    return client.post("/invoices", json=payload)


def test_preview_returns_totals_without_saving(client, db_session):
    response = client.post(
        "/invoices/preview",
        json={"tax_rate": 18, "discount": 100, "items": SCENARIO_ITEMS},
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["subtotal"]) == Decimal("2500.00")
    assert Decimal(data["tax_amount"]) == Decimal("450.00")
    assert Decimal(data["total"]) == Decimal("2850.00")
    assert data["formatted_total"] == "Rs. 2,850.00"
    assert db_session.query(Invoice).count() == 0


def test_create_invoice_persists_rounded_totals(client, db_session):
    acme = _client(db_session)

    response = _create(client, acme.id, notes="Thanks")

    assert response.status_code == 201
    data = response.json()
    assert re.fullmatch(r"INV-\d{8}", data["invoice_number"])
    assert data["status"] == "draft"
    assert data["client_name"] == "Acme Traders"
    assert Decimal(data["total"]) == Decimal("2850.00")
    assert [item["description"] for item in data["items"]] == ["Pro License", "Setup Fee"]
    assert [Decimal(item["total"]) for item in data["items"]] == [
        Decimal("1000.00"),
        Decimal("1500.00"),
    ]

    log = db_session.query(ActivityLog).filter_by(action="invoice_created").one()
    assert log.details == f"Invoice {data['invoice_number']} created for Rs. 2,850.00"


def test_invoice_numbers_are_unique(client, db_session):
    acme = _client(db_session)
    numbers = {_create(client, acme.id).json()["invoice_number"] for _ in range(3)}
    assert len(numbers) == 3


def test_bad_quantity_blocks_creation(client, db_session):
    acme = _client(db_session)

    response = _create(
        client,
        acme.id,
        items=[{"description": "Pro License", "quantity": "two", "unit_price": "-5"}],
    )

    assert response.status_code == 400
    assert response.json()["detail"] == [
        "Item 1 quantity must be a whole number.",
        "Item 1 unit price cannot be negative.",
    ]
    assert db_session.query(Invoice).count() == 0


def test_unknown_client_is_rejected(client):
    response = _create(client, 999)
    assert response.status_code == 400
    assert response.json()["detail"] == ["Client is required."]


def test_blank_rows_are_dropped_and_service_fills_defaults(client, db_session):
    acme = _client(db_session)
    setup = Service(name="Setup Fee", base_price=Decimal("1500.00"), is_active=True)
    db_session.add(setup)
    db_session.commit()

    response = _create(
        client,
        acme.id,
        tax_rate="0",
        discount="",
        items=[
            {"description": "", "quantity": 1, "unit_price": "10"},
            {"service_id": setup.id, "quantity": 2},
        ],
    )

    assert response.status_code == 201
    data = response.json()
    assert len(data["items"]) == 1
    item = data["items"][0]
    assert item["description"] == "Setup Fee"
    assert item["service_id"] == setup.id
    assert Decimal(item["unit_price"]) == Decimal("1500.00")
    assert Decimal(data["total"]) == Decimal("3000.00")


def test_status_moves_forward_only(client, db_session):
    acme = _client(db_session)
    invoice_id = _create(client, acme.id).json()["id"]

    sent = client.post(f"/invoices/{invoice_id}/status", json={"status": "sent"})
    paid = client.post(f"/invoices/{invoice_id}/status", json={"status": "paid"})
    back = client.post(f"/invoices/{invoice_id}/status", json={"status": "draft"})

    assert sent.status_code == 200
    assert paid.status_code == 200
    assert paid.json()["paid_at"] is not None
    assert back.status_code == 409
    assert "paid to draft" in back.json()["detail"]
    assert db_session.query(ActivityLog).filter_by(action="invoice_paid").count() == 1


def test_list_filters_by_status_and_search(client, db_session):
    acme = _client(db_session)
    other = _client(db_session, name="Globex")
    first = _create(client, acme.id).json()
    _create(client, other.id)
    client.post(f"/invoices/{first['id']}/status", json={"status": "sent"})

    by_status = client.get("/invoices", params={"status": "sent"}).json()
    by_name = client.get("/invoices", params={"q": "glob"}).json()

    assert [row["id"] for row in by_status] == [first["id"]]
    assert [row["client_name"] for row in by_name] == ["Globex"]


def test_delete_invoice_removes_items(client, db_session):
    acme = _client(db_session)
    invoice_id = _create(client, acme.id).json()["id"]

    response = client.delete(f"/invoices/{invoice_id}")

    assert response.status_code == 204
    assert client.get(f"/invoices/{invoice_id}").status_code == 404
    assert db_session.query(ActivityLog).filter_by(action="invoice_deleted").count() == 1


def test_pdf_download(client, db_session):
    acme = _client(db_session)
    created = _create(client, acme.id).json()

    response = client.get(f"/invoices/{created['id']}/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == f'attachment; filename="Invoice_{created["invoice_number"]}.pdf"'
    )
    assert response.content.startswith(b"%PDF")


def test_pdf_failure_leaves_invoice_intact(client, db_session, monkeypatch):
    acme = _client(db_session)
    created = _create(client, acme.id).json()

    original = invoice_pdf._flowables

    def broken(document):
        raise RuntimeError("out of memory")

    monkeypatch.setattr(invoice_pdf, "_flowables", broken)
    failed = client.get(f"/invoices/{created['id']}/pdf")

    assert failed.status_code == 500
    assert failed.json()["detail"] == "Failed to generate PDF. Please try again."
    assert client.get(f"/invoices/{created['id']}").status_code == 200

    monkeypatch.setattr(invoice_pdf, "_flowables", original)
    retried = client.get(f"/invoices/{created['id']}/pdf")
    assert retried.status_code == 200


def test_due_date_defaults_and_overdue_marking(db_session):
    acme = _client(db_session)
    clock = lambda: datetime(2026, 1, 10, 12, 0)  # noqa: E731
    invoice = create_invoice(
        db_session,
        InvoiceCreate(client_id=acme.id, items=SCENARIO_ITEMS),
        clock=clock,
    )
    assert invoice.invoice_date == date(2026, 1, 10)
    assert invoice.due_date == date(2026, 2, 9)

    assert mark_overdue_invoices(db_session, today=date(2026, 2, 9)) == 0
    assert mark_overdue_invoices(db_session, today=date(2026, 2, 10)) == 1
    db_session.refresh(invoice)
    assert _status_value(invoice.status) == InvoiceStatusEnum.OVERDUE.value


def test_past_due_date_is_rejected(client, db_session):
    acme = _client(db_session)
    response = _create(client, acme.id, due_date="2000-01-01")
    assert response.status_code == 400
    assert response.json()["detail"] == ["Due date cannot be before the invoice date."]


def test_stored_total_matches_pdf_total_for_long_decimals(client, db_session):
    acme = _client(db_session)
    cases = [
        ({"items": [{"description": "Audit", "quantity": 3, "unit_price": "333.333"}],
          "tax_rate": "0", "discount": "0"}, Decimal("999.99")),
        ({"items": [{"description": "Audit", "quantity": 1, "unit_price": "10"}],
          "tax_rate": "0", "discount": "0.005"}, Decimal("9.99")),
        ({"items": [{"description": "Audit", "quantity": 1, "unit_price": "1000"}],
          "tax_rate": "12.345", "discount": "0"}, Decimal("1123.50")),
    ]

    for overrides, expected in cases:
        data = _create(client, acme.id, **overrides).json()
        invoice = db_session.get(Invoice, data["id"])

        assert Decimal(data["total"]) == expected
        assert totals_rows(build_document(invoice))[-1][1] == format_currency(expected)
