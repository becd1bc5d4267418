import pytest

from crm.errors import SheetSyncError
from crm.models import ActivityLog, Client, Lead, LeadSourceEnum, LeadStatusEnum
from crm.services import sheet_sync
from crm.services.sheet_sync import map_sheet_status, sync_leads_from_sheet

SHEET_ROWS = [
    {
        "Business_Name": "Sharma Stores",
        "WhatsApp_ID": "919800000001",
        "Current_Service": "GST Registration",
        "Address": "Mysuru",
        "Status": "New User",
        "Status_Response": "",
    },
    {
        "Business_Name": "",
        "WhatsApp_ID": "919800000002",
        "Current_Service": "Trade Licence",
        "Status": "complete",
    },
    {"Business_Name": "No Phone", "WhatsApp_ID": ""},
]


def _status_value(value):
    return value.value if hasattr(value, "value") else str(value)


def test_sheet_status_mapping():
    assert map_sheet_status("New User") == LeadStatusEnum.NEW
    assert map_sheet_status("complete") == LeadStatusEnum.CONVERTED
    assert map_sheet_status(" Incomplete ") == LeadStatusEnum.QUALIFIED
    assert map_sheet_status("something else") == LeadStatusEnum.NEW
    assert map_sheet_status(None) == LeadStatusEnum.NEW


def test_sync_inserts_then_updates_by_phone(db_session):
    result = sync_leads_from_sheet(db_session, SHEET_ROWS)
    assert (result.created, result.updated, result.skipped) == (2, 0, 1)

    sharma = db_session.query(Lead).filter_by(phone="919800000001").one()
    assert sharma.name == "Sharma Stores"
    assert sharma.google_sheet_row_id == "row_2"
    assert _status_value(sharma.lead_source) == LeadSourceEnum.GOOGLE_SHEET.value
    nameless = db_session.query(Lead).filter_by(phone="919800000002").one()
    assert nameless.name == "919800000002"
    assert _status_value(nameless.status) == LeadStatusEnum.CONVERTED.value

    changed = [dict(SHEET_ROWS[0], Status="incomplete")]
    result = sync_leads_from_sheet(db_session, changed)
    assert (result.created, result.updated, result.skipped) == (0, 1, 0)
    db_session.refresh(sharma)
    assert _status_value(sharma.status) == LeadStatusEnum.QUALIFIED.value
    assert db_session.query(ActivityLog).filter_by(action="google_sheets_sync").count() == 2


def test_sync_with_empty_sheet_fails(db_session):
    with pytest.raises(SheetSyncError, match="No leads found in WhatsApp"):
        sync_leads_from_sheet(db_session, [])


def test_sync_endpoint_reads_sheet(client, sheet_calls):
    sheet_calls["rows"] = SHEET_ROWS

    response = client.post("/leads/sync")

    assert response.status_code == 200
    assert response.json() == {"created": 2, "updated": 0, "skipped": 1}
    assert len(client.get("/leads").json()) == 2


def test_sync_endpoint_reports_sheet_failure(client, monkeypatch):
    def unreachable(url, timeout=None):
        raise sheet_sync.requests.ConnectionError("connection refused")

    monkeypatch.setattr(sheet_sync.requests, "get", unreachable)

    response = client.post("/leads/sync")

    assert response.status_code == 502
    assert "Failed to fetch lead sheet" in response.json()["detail"]


def test_create_lead_rejects_duplicate_phone(client):
    first = client.post("/leads", json={"name": "Sharma Stores", "phone": "9800000001"})
    second = client.post("/leads", json={"name": "Other", "phone": "9800000001"})
    blank = client.post("/leads", json={"name": " ", "phone": ""})

    assert first.status_code == 201
    assert first.json()["lead_source"] == "manual"
    assert second.status_code == 400
    assert second.json()["detail"] == ["A lead with this phone number already exists."]
    assert blank.json()["detail"] == ["Name is required.", "Phone is required."]


def test_list_leads_filters(client):
    client.post("/leads", json={"name": "Sharma Stores", "phone": "1", "service_interested": "GST"})
    other = client.post("/leads", json={"name": "Rao Bakery", "phone": "2"}).json()
    client.patch(f"/leads/{other['id']}", json={"status": "lost"})

    assert [lead["name"] for lead in client.get("/leads", params={"q": "gst"}).json()] == [
        "Sharma Stores"
    ]
    assert [lead["id"] for lead in client.get("/leads", params={"status": "lost"}).json()] == [
        other["id"]
    ]


def test_convert_lead_creates_client(client, db_session, sheet_calls):
    lead = client.post(
        "/leads",
        json={"name": "Sharma Stores", "phone": "919800000001", "service_interested": "GST"},
    ).json()

    response = client.post(f"/leads/{lead['id']}/convert")

    assert response.status_code == 201
    client_id = response.json()["client_id"]
    converted = db_session.get(Client, client_id)
    assert converted.name == "Sharma Stores"
    assert converted.lead_id == lead["id"]
    assert converted.notes == "Converted from lead. Service interested: GST"
    assert client.get(f"/leads/{lead['id']}").json()["status"] == "converted"
    assert sheet_calls["patch"] == [
        (
            "https://sheetdb.io/api/v1/xwraoa0tt1kgq/WhatsApp_ID/919800000001",
            {"data": {"Status": "complete"}},
        )
    ]

    again = client.post(f"/leads/{lead['id']}/convert")
    assert again.status_code == 409


def test_sheet_push_failure_does_not_block_conversion(client, monkeypatch):
    def failing_patch(url, json=None, timeout=None):
        raise sheet_sync.requests.Timeout("timed out")

    monkeypatch.setattr(sheet_sync.requests, "patch", failing_patch)
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "5"}).json()

    assert client.post(f"/leads/{lead['id']}/convert").status_code == 201


def test_status_messages(client):
    lead = client.post("/leads", json={"name": "Sharma Stores", "phone": "7"}).json()
    client.patch(
        f"/leads/{lead['id']}",
        json={
            "license_name_1": "GST",
            "license_status_1": "Approved",
            "license_link_1": "https://example.com/gst.pdf",
            "license_name_2": "Trade Licence",
            "license_status_2": "Approved",
            "license_name_3": "FSSAI",
        },
    )

    approved = client.get(f"/leads/{lead['id']}/status-message").json()
    rejected = client.get(
        f"/leads/{lead['id']}/status-message", params={"kind": "rejected"}
    ).json()

    assert approved["kind"] == "approved"
    assert approved["message"] == (
        "🎉 Good News!\n"
        "\n"
        "✅ Licence : GST  :  Approved  (https://example.com/gst.pdf)\n"
        "✅ Licence : Trade Licence  :  Approved  (Download)\n"
        "\n"
        '🔘 TYPE " HI " TO START FROM START'
    )
    assert "FSSAI" not in approved["message"]
    assert rejected["message"].startswith(
        "❌ We regret to inform you that your GST has been REJECTED."
    )


def test_rejected_message_without_licence_uses_placeholder(client):
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "8"}).json()
    message = client.get(
        f"/leads/{lead['id']}/status-message", params={"kind": "rejected"}
    ).json()["message"]
    assert "your [Licence Name] has been REJECTED" in message


def test_status_response_is_pushed_to_sheet(client, sheet_calls):
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "9"}).json()

    response = client.put(
        f"/leads/{lead['id']}/status-response", json={"status_response": "Approved"}
    )

    assert response.status_code == 200
    assert response.json()["status_response"] == "Approved"
    assert sheet_calls["patch"][-1][1] == {"data": {"Status_Response": "Approved"}}


def test_delete_lead(client, db_session):
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "10"}).json()

    assert client.delete(f"/leads/{lead['id']}").status_code == 204
    assert client.get(f"/leads/{lead['id']}").status_code == 404
    assert db_session.query(ActivityLog).filter_by(action="lead_deleted").count() == 1


def test_update_lead_rejects_blank_name_and_ignores_null_status(client):
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "11"}).json()

    no_name = client.patch(f"/leads/{lead['id']}", json={"name": None})
    no_status = client.patch(f"/leads/{lead['id']}", json={"status": None, "notes": "Call"})

    assert no_name.status_code == 400
    assert no_name.json()["detail"] == ["Name is required."]
    assert no_status.status_code == 200
    assert no_status.json()["status"] == "new"
    assert no_status.json()["notes"] == "Call"
    assert client.get(f"/leads/{lead['id']}").json()["name"] == "Rao Bakery"


def test_status_change_is_mirrored_to_sheet(client, sheet_calls):
    lead = client.post("/leads", json={"name": "Rao Bakery", "phone": "12"}).json()

    client.patch(f"/leads/{lead['id']}", json={"status": "qualified"})
    client.patch(f"/leads/{lead['id']}", json={"status": "lost"})
    client.patch(f"/leads/{lead['id']}", json={"status": "new"})

    assert sheet_calls["patch"] == [
        (
            "https://sheetdb.io/api/v1/xwraoa0tt1kgq/WhatsApp_ID/12",
            {"data": {"Status": "incomplete"}},
        ),
        (
            "https://sheetdb.io/api/v1/xwraoa0tt1kgq/WhatsApp_ID/12",
            {"data": {"Status": "New User"}},
        ),
    ]
