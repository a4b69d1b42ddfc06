from conftest import shipment_json

BASE = "/outbound-shipments/"


def test_list_shipments_empty(client):
    resp = client.get(BASE)
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_shipment_applies_defaults(client):
    resp = client.post(BASE, json=shipment_json())
    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] > 0
    assert body["reprint_label"] is False
    assert body["resend_email_to_recipient"] is False
    assert body["schedule_pickup"] is False
    assert body["cost"] == 0
    assert body["airtable_record_id"] == ""
    for field in ("pickup_date", "shipped_time", "delivered_time", "eta"):
        assert body[field] is None


def test_create_without_formatted_address(client):
    payload = shipment_json()
    del payload["address_formatted"]

    resp = client.post(BASE, json=payload)

    assert resp.status_code == 201
    assert resp.json()["address_formatted"] == "1251 Park Ave\nSuite 200\nEmeryville, CA 94608\nUS"


def test_create_missing_required_field(client):
    payload = shipment_json()
    del payload["created_time"]

    resp = client.post(BASE, json=payload)

    assert resp.status_code == 422


def test_create_duplicate_tracking_number(client):
    assert client.post(BASE, json=shipment_json(tracking_number="DUP")).status_code == 201

    resp = client.post(BASE, json=shipment_json(tracking_number="DUP", name="Someone else"))

    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] is True
    assert body["code"] == "DUPLICATE_TRACKING_NUMBER"


def test_get_shipment(client):
    created = client.post(BASE, json=shipment_json()).json()

    resp = client.get(f"{BASE}{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["tracking_number"] == created["tracking_number"]

    resp = client.get(f"{BASE}tracking/{created['tracking_number']}")
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


def test_get_missing_shipment(client):
    resp = client.get(f"{BASE}999")
    assert resp.status_code == 404
    assert resp.json()["code"] == "SHIPMENT_NOT_FOUND"

    assert client.get(f"{BASE}tracking/unknown").status_code == 404


def test_list_filters(client):
    client.post(BASE, json=shipment_json(tracking_number="F-1", status="Shipped"))
    client.post(BASE, json=shipment_json(tracking_number="F-2", status="Delivered"))

    resp = client.get(BASE, params={"status": "Delivered"})

    assert resp.status_code == 200
    assert [s["tracking_number"] for s in resp.json()] == ["F-2"]


def test_list_rejects_bad_pagination(client):
    assert client.get(BASE, params={"limit": 0}).status_code == 422
    assert client.get(BASE, params={"skip": -1}).status_code == 422


def test_update_shipment(client):
    created = client.post(BASE, json=shipment_json()).json()

    resp = client.put(f"{BASE}{created['id']}", json={
        "status": "Delivered",
        "tracking_status": "DELIVERED",
        "delivered_time": "2021-05-10T18:30:00+00:00",
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["status"] == "Delivered"
    assert body["delivered_time"] is not None
    assert body["carrier"] == created["carrier"]


def test_update_null_required_field(client):
    created = client.post(BASE, json=shipment_json()).json()

    resp = client.put(f"{BASE}{created['id']}", json={"email": None})

    assert resp.status_code == 422
    assert resp.json()["code"] == "MISSING_REQUIRED_FIELD"


def test_update_missing_shipment(client):
    assert client.put(f"{BASE}12345", json={"status": "Lost"}).status_code == 404


def test_upsert_by_tracking_number(client):
    payload = shipment_json()
    tracking_number = payload.pop("tracking_number")

    first = client.put(f"{BASE}tracking/{tracking_number}", json=payload)
    assert first.status_code == 201

    payload["tracking_status"] = "TRANSIT"
    second = client.put(f"{BASE}tracking/{tracking_number}", json=payload)
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["tracking_status"] == "TRANSIT"
    assert len(client.get(BASE).json()) == 1


def test_request_id_echoed(client):
    resp = client.get(BASE, headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
