"""
Exceptions raised by the outbound shipments service
"""
from typing import Optional


class ShipmentError(Exception):
    """Base exception for all shipment errors"""
    def __init__(self, message: str, code: str = "SHIPMENT_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ShipmentNotFound(ShipmentError):
    """No row matches the requested id or tracking number"""
    def __init__(self, key: str, value):
        self.key = key
        self.value = value
        super().__init__(
            message=f"Shipment with {key} '{value}' not found",
            code="SHIPMENT_NOT_FOUND"
        )


class ShipmentConstraintError(ShipmentError):
    """The database rejected a write because of a table constraint"""
    def __init__(self, message: str, code: str = "CONSTRAINT_VIOLATION"):
        super().__init__(message=message, code=code)


class DuplicateTrackingNumber(ShipmentConstraintError):
    """Unique violation on tracking_number"""
    def __init__(self, tracking_number: Optional[str] = None):
        self.tracking_number = tracking_number
        if tracking_number:
            message = f"Tracking number '{tracking_number}' already exists"
        else:
            message = "Tracking number already exists"
        super().__init__(message=message, code="DUPLICATE_TRACKING_NUMBER")


class MissingRequiredField(ShipmentConstraintError):
    """Not-null violation on a required column"""
    def __init__(self, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"Required field '{field}' is missing"
        else:
            message = "A required field is missing"
        super().__init__(message=message, code="MISSING_REQUIRED_FIELD")
