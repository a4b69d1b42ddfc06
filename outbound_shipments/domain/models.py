from typing import Optional
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Boolean, Date, DateTime, REAL, UniqueConstraint, false, text
import datetime

class Base(DeclarativeBase):
    pass

class OutboundShipment(Base):
    __tablename__ = "outbound_shipments"
    __table_args__ = (
        UniqueConstraint("tracking_number", name="outbound_shipments_tracking_number_key"),
    )
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    contents: Mapped[str] = mapped_column(String, nullable=False)
    # Postal address
    street_1: Mapped[str] = mapped_column(String, nullable=False)
    street_2: Mapped[str] = mapped_column(String, nullable=False)
    city: Mapped[str] = mapped_column(String, nullable=False)
    state: Mapped[str] = mapped_column(String, nullable=False)
    zipcode: Mapped[str] = mapped_column(String, nullable=False)
    country: Mapped[str] = mapped_column(String, nullable=False)
    address_formatted: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    # Free text, no fixed set of states
    status: Mapped[str] = mapped_column(String, nullable=False)
    carrier: Mapped[str] = mapped_column(String, nullable=False)
    tracking_number: Mapped[str] = mapped_column(String, nullable=False)
    tracking_link: Mapped[str] = mapped_column(String, nullable=False)
    oxide_tracking_link: Mapped[str] = mapped_column(String, nullable=False)
    tracking_status: Mapped[str] = mapped_column(String, nullable=False)
    label_link: Mapped[str] = mapped_column(String, nullable=False)
    reprint_label: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    resend_email_to_recipient: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    cost: Mapped[float] = mapped_column(REAL, nullable=False, server_default=text("0"))
    schedule_pickup: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())
    pickup_date: Mapped[Optional[datetime.date]] = mapped_column(Date, nullable=True)
    # No default: the writer supplies the creation instant
    created_time: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    shipped_time: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    delivered_time: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    eta: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    shippo_id: Mapped[str] = mapped_column(String, nullable=False)
    messages: Mapped[str] = mapped_column(String, nullable=False)
    notes: Mapped[str] = mapped_column(String, nullable=False)
    # Opaque to this service
    geocode_cache: Mapped[str] = mapped_column(String, nullable=False)
    airtable_record_id: Mapped[str] = mapped_column(String, nullable=False, server_default="")
