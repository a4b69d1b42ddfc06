"""
Exception handlers for the shipments API
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from shared.core import get_logger
from outbound_shipments.domain.exceptions import (
    ShipmentError,
    ShipmentNotFound,
    DuplicateTrackingNumber,
    MissingRequiredField,
)

logger = get_logger(__name__)

STATUS_CODES = {
    ShipmentNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateTrackingNumber: status.HTTP_409_CONFLICT,
    MissingRequiredField: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


async def shipment_exception_handler(request: Request, exc: ShipmentError) -> JSONResponse:
    """Render shipment errors with a consistent response body."""
    status_code = STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error(f"Shipment error on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(
            f"Shipment request rejected: {exc.message}",
            extra={'extra_fields': {'code': exc.code, 'status_code': status_code, 'path': request.url.path}}
        )
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "code": exc.code,
            "message": exc.message,
            "status_code": status_code,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShipmentError, shipment_exception_handler)
