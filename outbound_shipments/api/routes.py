from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import Optional
from outbound_shipments.infrastructure.db import get_db
from outbound_shipments.application.service import ShipmentService
from outbound_shipments.application.schemas import (
    ShipmentCreate,
    ShipmentFields,
    ShipmentRead,
    ShipmentUpdate,
)

router = APIRouter(prefix="/outbound-shipments", tags=["outbound-shipments"])

@router.get("/", response_model=list[ShipmentRead])
def list_shipments(
    db: Session = Depends(get_db),
    status: Optional[str] = Query(None, description="Filter by workflow status"),
    carrier: Optional[str] = Query(None, description="Filter by carrier"),
    tracking_status: Optional[str] = Query(None, description="Filter by carrier-reported status"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of records to return"),
):
    """List outbound shipments with optional filtering and pagination"""
    return ShipmentService(db).list(
        status=status,
        carrier=carrier,
        tracking_status=tracking_status,
        skip=skip,
        limit=limit,
    )

@router.get("/tracking/{tracking_number}", response_model=ShipmentRead)
def get_shipment_by_tracking_number(tracking_number: str, db: Session = Depends(get_db)):
    return ShipmentService(db).get_by_tracking_number(tracking_number)

@router.get("/{shipment_id}", response_model=ShipmentRead)
def get_shipment(shipment_id: int, db: Session = Depends(get_db)):
    return ShipmentService(db).get(shipment_id)

@router.post("/", response_model=ShipmentRead, status_code=201)
def create_shipment(payload: ShipmentCreate, db: Session = Depends(get_db)):
    return ShipmentService(db).create(payload)

@router.put("/tracking/{tracking_number}", response_model=ShipmentRead)
def upsert_shipment(
    tracking_number: str,
    payload: ShipmentFields,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create or refresh the shipment holding this tracking number."""
    data = ShipmentCreate(**payload.model_dump(exclude_unset=True), tracking_number=tracking_number)
    shipment, created = ShipmentService(db).upsert(data)
    if created:
        response.status_code = 201
    return shipment

@router.put("/{shipment_id}", response_model=ShipmentRead)
def update_shipment(shipment_id: int, payload: ShipmentUpdate, db: Session = Depends(get_db)):
    return ShipmentService(db).update(shipment_id, payload)
