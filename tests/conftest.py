import os

# Point the service at an in-memory database before any module builds the engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from outbound_shipments.domain.models import Base
from outbound_shipments.infrastructure.db import engine, SessionLocal
from outbound_shipments.main import app

CREATED_TIME = datetime(2021, 5, 7, 1, 19, 9, tzinfo=timezone.utc)

REQUIRED_COLUMNS = {
    "name", "contents", "street_1", "street_2", "city", "state", "zipcode",
    "country", "address_formatted", "email", "phone", "status", "carrier",
    "tracking_number", "tracking_link", "oxide_tracking_link", "tracking_status",
    "label_link", "created_time", "shippo_id", "messages", "notes", "geocode_cache",
}
NULLABLE_COLUMNS = {"pickup_date", "shipped_time", "delivered_time", "eta"}
DEFAULTED_COLUMNS = {
    "reprint_label", "resend_email_to_recipient", "cost", "schedule_pickup",
    "airtable_record_id",
}

def shipment_fields(**overrides):
    """Every required column of a shipment, nothing with a default."""
    data = {
        "name": "Jess Frazelle",
        "contents": "Oxide sticker pack",
        "street_1": "1251 Park Ave",
        "street_2": "Suite 200",
        "city": "Emeryville",
        "state": "CA",
        "zipcode": "94608",
        "country": "US",
        "address_formatted": "1251 Park Ave\nSuite 200\nEmeryville, CA 94608\nUS",
        "email": "jess@example.com",
        "phone": "+15555550100",
        "status": "Label printed",
        "carrier": "USPS",
        "tracking_number": "9400111899223197428490",
        "tracking_link": "https://tools.usps.com/go/TrackConfirmAction?tLabels=9400111899223197428490",
        "oxide_tracking_link": "https://track.example.com/9400111899223197428490",
        "tracking_status": "PRE_TRANSIT",
        "label_link": "https://labels.example.com/9400111899223197428490.pdf",
        "created_time": CREATED_TIME,
        "shippo_id": "b7a3c1e2d4f5",
        "messages": "",
        "notes": "",
        "geocode_cache": "",
    }
    data.update(overrides)
    return data

def shipment_json(**overrides):
    data = shipment_fields(**overrides)
    if isinstance(data.get("created_time"), datetime):
        data["created_time"] = data["created_time"].isoformat()
    return data

@pytest.fixture
def db_session():
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)

@pytest.fixture
def client():
    Base.metadata.create_all(engine)
    try:
        yield TestClient(app)
    finally:
        Base.metadata.drop_all(engine)
