import re
from typing import Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from shared.core import get_logger
from outbound_shipments.domain.models import OutboundShipment
from outbound_shipments.domain.exceptions import (
    ShipmentNotFound,
    ShipmentConstraintError,
    DuplicateTrackingNumber,
    MissingRequiredField,
)
from .addresses import ADDRESS_FIELDS, format_address
from .schemas import ShipmentCreate, ShipmentUpdate

logger = get_logger(__name__)

# SQLSTATE codes reported by Postgres
UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"

# Postgres: 'null value in column "name" ...', SQLite: 'outbound_shipments.name'
_COLUMN_PATTERNS = (
    re.compile(r'column "(\w+)"'),
    re.compile(r"outbound_shipments\.(\w+)"),
)
_CONSTRAINT_PATTERN = re.compile(r'constraint "(\w+)"')

def _first_line(orig) -> str:
    # Postgres appends DETAIL lines echoing the row values; only the first line names the column
    lines = str(orig).splitlines()
    return lines[0] if lines else ""

def _column_from_error(orig) -> Optional[str]:
    diag = getattr(orig, "diag", None)
    column = getattr(diag, "column_name", None)
    if column:
        return column
    message = _first_line(orig)
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1)
    return None

def _constraint_from_error(orig) -> str:
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint
    match = _CONSTRAINT_PATTERN.search(_first_line(orig))
    return match.group(1) if match else ""

def translate_integrity_error(exc: IntegrityError, tracking_number: Optional[str] = None) -> ShipmentConstraintError:
    """Map a driver-level constraint failure onto a shipment exception.

    Postgres errors are classified by SQLSTATE alone; the message text is
    only consulted for drivers that report no code, such as SQLite.
    """
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    message = str(orig)

    if pgcode is not None:
        if pgcode == UNIQUE_VIOLATION:
            if "tracking_number" in _constraint_from_error(orig):
                return DuplicateTrackingNumber(tracking_number)
            return ShipmentConstraintError(message)
        if pgcode == NOT_NULL_VIOLATION:
            return MissingRequiredField(_column_from_error(orig))
        return ShipmentConstraintError(message)

    lowered = _first_line(orig).lower()
    if "unique" in lowered:
        if "tracking_number" in lowered:
            return DuplicateTrackingNumber(tracking_number)
        return ShipmentConstraintError(message)
    if "not null" in lowered:
        return MissingRequiredField(_column_from_error(orig))
    return ShipmentConstraintError(message)


class ShipmentService:
    def __init__(self, db: Session):
        self.db = db

    def list(
        self,
        status: Optional[str] = None,
        carrier: Optional[str] = None,
        tracking_status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ):
        query = self.db.query(OutboundShipment)
        if status is not None:
            query = query.filter(OutboundShipment.status == status)
        if carrier is not None:
            query = query.filter(OutboundShipment.carrier == carrier)
        if tracking_status is not None:
            query = query.filter(OutboundShipment.tracking_status == tracking_status)
        return query.order_by(OutboundShipment.id).offset(skip).limit(limit).all()

    def get(self, shipment_id: int) -> OutboundShipment:
        shipment = self.db.query(OutboundShipment).filter(OutboundShipment.id == shipment_id).first()
        if not shipment:
            raise ShipmentNotFound("id", shipment_id)
        return shipment

    def get_by_tracking_number(self, tracking_number: str) -> OutboundShipment:
        shipment = self._find_by_tracking_number(tracking_number)
        if not shipment:
            raise ShipmentNotFound("tracking_number", tracking_number)
        return shipment

    def create(self, data: ShipmentCreate) -> OutboundShipment:
        payload = data.model_dump()
        if not payload.get("address_formatted"):
            payload["address_formatted"] = format_address(*(payload[f] for f in ADDRESS_FIELDS))

        obj = OutboundShipment(**payload)
        self.db.add(obj)
        self._commit(obj.tracking_number)
        self.db.refresh(obj)
        logger.info(
            f"Created outbound shipment {obj.id}",
            extra={'extra_fields': {'shipment_id': obj.id, 'tracking_number': obj.tracking_number}}
        )
        return obj

    def update(self, shipment_id: int, data: ShipmentUpdate) -> OutboundShipment:
        shipment = self.get(shipment_id)
        self._apply(shipment, data.model_dump(exclude_unset=True))
        self._commit(shipment.tracking_number)
        self.db.refresh(shipment)
        logger.info(
            f"Updated outbound shipment {shipment.id}",
            extra={'extra_fields': {'shipment_id': shipment.id, 'tracking_number': shipment.tracking_number}}
        )
        return shipment

    def upsert(self, data: ShipmentCreate) -> Tuple[OutboundShipment, bool]:
        """Insert, or update the row holding the same tracking number.

        Returns the row and whether it was newly created.
        """
        existing = self._find_by_tracking_number(data.tracking_number)
        if existing is None:
            return self.create(data), True

        update_data = data.model_dump(exclude_unset=True)
        # A blank formatted address is rebuilt from the parts, never stored
        if not update_data.get("address_formatted"):
            update_data.pop("address_formatted", None)
        self._apply(existing, update_data)
        self._commit(existing.tracking_number)
        self.db.refresh(existing)
        logger.info(
            f"Synced outbound shipment {existing.id}",
            extra={'extra_fields': {'shipment_id': existing.id, 'tracking_number': existing.tracking_number}}
        )
        return existing, False

    def _find_by_tracking_number(self, tracking_number: str) -> Optional[OutboundShipment]:
        return (
            self.db.query(OutboundShipment)
            .filter(OutboundShipment.tracking_number == tracking_number)
            .first()
        )

    def _apply(self, shipment: OutboundShipment, update_data: dict) -> None:
        for key, value in update_data.items():
            setattr(shipment, key, value)

        # Keep the formatted address in step with edited address parts
        if "address_formatted" not in update_data and any(f in update_data for f in ADDRESS_FIELDS):
            shipment.address_formatted = format_address(*(getattr(shipment, f) for f in ADDRESS_FIELDS))

    def _commit(self, tracking_number: Optional[str] = None) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            error = translate_integrity_error(exc, tracking_number)
            logger.warning(
                f"Outbound shipment write rejected: {error.message}",
                extra={'extra_fields': {'code': error.code, 'tracking_number': tracking_number}}
            )
            raise error from exc
