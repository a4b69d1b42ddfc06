from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

class ShipmentFields(BaseModel):
    """Writable columns, minus the tracking number used as the sync key."""
    name: str
    contents: str
    # Postal address
    street_1: str
    street_2: str
    city: str
    state: str
    zipcode: str
    country: str
    # Built from the address parts when omitted
    address_formatted: Optional[str] = None
    email: str
    phone: str
    status: str
    carrier: str
    tracking_link: str
    oxide_tracking_link: str
    tracking_status: str
    label_link: str
    reprint_label: bool = False
    resend_email_to_recipient: bool = False
    cost: float = 0
    schedule_pickup: bool = False
    pickup_date: Optional[date] = None
    created_time: datetime
    shipped_time: Optional[datetime] = None
    delivered_time: Optional[datetime] = None
    eta: Optional[datetime] = None
    shippo_id: str
    messages: str
    notes: str
    geocode_cache: str
    airtable_record_id: str = ""

class ShipmentCreate(ShipmentFields):
    tracking_number: str

class ShipmentUpdate(BaseModel):
    name: Optional[str] = None
    contents: Optional[str] = None
    street_1: Optional[str] = None
    street_2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None
    address_formatted: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_link: Optional[str] = None
    oxide_tracking_link: Optional[str] = None
    tracking_status: Optional[str] = None
    label_link: Optional[str] = None
    reprint_label: Optional[bool] = None
    resend_email_to_recipient: Optional[bool] = None
    cost: Optional[float] = None
    schedule_pickup: Optional[bool] = None
    pickup_date: Optional[date] = None
    created_time: Optional[datetime] = None
    shipped_time: Optional[datetime] = None
    delivered_time: Optional[datetime] = None
    eta: Optional[datetime] = None
    shippo_id: Optional[str] = None
    messages: Optional[str] = None
    notes: Optional[str] = None
    geocode_cache: Optional[str] = None
    airtable_record_id: Optional[str] = None

class ShipmentRead(BaseModel):
    id: int
    name: str
    contents: str
    street_1: str
    street_2: str
    city: str
    state: str
    zipcode: str
    country: str
    address_formatted: str
    email: str
    phone: str
    status: str
    carrier: str
    tracking_number: str
    tracking_link: str
    oxide_tracking_link: str
    tracking_status: str
    label_link: str
    reprint_label: bool
    resend_email_to_recipient: bool
    cost: float
    schedule_pickup: bool
    pickup_date: Optional[date] = None
    created_time: datetime
    shipped_time: Optional[datetime] = None
    delivered_time: Optional[datetime] = None
    eta: Optional[datetime] = None
    shippo_id: str
    messages: str
    notes: str
    geocode_cache: str
    airtable_record_id: str

    class Config:
        from_attributes = True
