"""Bulk-load outbound shipments from a CSV export.

Headers are matched to table columns after normalisation, so a spreadsheet
export with "Tracking Number" or "Shippo ID" headers loads as-is. Rows are
upserted by tracking number; rows that fail validation or hit a table
constraint are skipped and logged, as are rows with a blank tracking number.

    python -m outbound_shipments.seed shipments.csv
"""
import argparse
import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional
from sqlalchemy.orm import Session
from shared.core import get_logger, setup_logging
from outbound_shipments.core_settings import get_settings
from outbound_shipments.domain.models import OutboundShipment
from outbound_shipments.domain.exceptions import ShipmentConstraintError
from outbound_shipments.application.schemas import ShipmentCreate
from outbound_shipments.application.service import ShipmentService

logger = get_logger(__name__)

# id is assigned by the database, never imported
IMPORTABLE_COLUMNS = {c.name for c in OutboundShipment.__table__.columns} - {"id"}
TEXT_COLUMNS = {
    c.name for c in OutboundShipment.__table__.columns
    if c.name in IMPORTABLE_COLUMNS and c.type.python_type is str
}

@dataclass
class ImportSummary:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.skipped

def normalize_header(header: str) -> str:
    # Excel prefixes UTF-8 exports with a byte order mark
    return "_".join(header.lstrip("\ufeff").strip().lower().replace("-", " ").split())

def coerce_row(raw: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Keep known columns; blank non-text cells fall back to column defaults."""
    row = {}
    for key, value in raw.items():
        if key is None:
            continue
        column = normalize_header(key)
        if column not in IMPORTABLE_COLUMNS:
            continue
        value = (value or "").strip()
        if not value and column not in TEXT_COLUMNS:
            continue
        row[column] = value
    return row

def import_rows(db: Session, rows: Iterable[Dict[str, Optional[str]]]) -> ImportSummary:
    service = ShipmentService(db)
    summary = ImportSummary()
    # Line 1 of the file is the header
    for line_no, raw in enumerate(rows, start=2):
        row = coerce_row(raw)
        # Without a tracking number there is nothing to match the row on
        if not row.get("tracking_number"):
            summary.skipped += 1
            logger.warning(f"Row {line_no} skipped: blank tracking number")
            continue
        try:
            data = ShipmentCreate(**row)
        except ValueError as e:
            summary.skipped += 1
            logger.warning(f"Row {line_no} skipped: invalid data: {e}")
            continue
        try:
            _, created = service.upsert(data)
        except ShipmentConstraintError as e:
            summary.skipped += 1
            logger.warning(f"Row {line_no} skipped: {e.message}")
            continue
        if created:
            summary.inserted += 1
        else:
            summary.updated += 1

    logger.info(
        f"Imported {summary.total} rows into outbound_shipments",
        extra={'extra_fields': {'inserted': summary.inserted, 'updated': summary.updated, 'skipped': summary.skipped}}
    )
    return summary

def import_csv(db: Session, path: Path) -> ImportSummary:
    with open(path, newline="", encoding="utf-8-sig") as f:
        return import_rows(db, csv.DictReader(f))

def main(argv=None) -> ImportSummary:
    parser = argparse.ArgumentParser(description="Load outbound shipments from a CSV file")
    parser.add_argument("csv_file", type=Path)
    args = parser.parse_args(argv)

    setup_logging(service_name="outbound-shipments-seed", level=get_settings().LOG_LEVEL)

    from outbound_shipments.infrastructure.db import SessionLocal
    db = SessionLocal()
    try:
        return import_csv(db, args.csv_file)
    finally:
        db.close()

if __name__ == "__main__":
    main()
