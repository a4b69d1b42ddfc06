import csv

from outbound_shipments.application.service import ShipmentService
from outbound_shipments.seed import coerce_row, import_csv, import_rows, normalize_header


def _row(**overrides):
    row = {
        "ID": "42",
        "Name": "Ada Lovelace",
        "Contents": "Sled",
        "Street 1": "1 Main St",
        "Street 2": "",
        "City": "Oakland",
        "State": "CA",
        "Zipcode": "94607",
        "Country": "US",
        "Address Formatted": "",
        "Email": "ada@example.com",
        "Phone": "555-0100",
        "Status": "Shipped",
        "Carrier": "FedEx",
        "Tracking Number": "794644790138",
        "Tracking Link": "https://fedex.example/794644790138",
        "Oxide Tracking Link": "https://track.example/794644790138",
        "Tracking Status": "TRANSIT",
        "Label Link": "https://labels.example/794644790138.pdf",
        "Reprint Label": "no",
        "Resend Email To Recipient": "",
        "Cost": "",
        "Schedule Pickup": "yes",
        "Pickup Date": "2021-05-08",
        "Created Time": "2021-05-07T01:19:09Z",
        "Shipped Time": "",
        "Delivered Time": "",
        "ETA": "",
        "Shippo ID": "shp_42",
        "Messages": "",
        "Notes": "fragile",
        "Geocode Cache": "",
        "Airtable Record ID": "recXYZ",
        "Spreadsheet Only Column": "ignored",
    }
    row.update(overrides)
    return row


def test_normalize_header():
    assert normalize_header(" Tracking Number ") == "tracking_number"
    assert normalize_header("Street-1") == "street_1"
    assert normalize_header("ETA") == "eta"


def test_coerce_row_drops_unknown_and_blank_typed_cells():
    row = coerce_row(_row())

    assert "id" not in row
    assert "spreadsheet_only_column" not in row
    assert "cost" not in row
    assert "shipped_time" not in row
    assert row["street_2"] == ""
    assert row["schedule_pickup"] == "yes"


def test_import_rows_inserts_then_updates(db_session):
    summary = import_rows(db_session, [_row()])
    assert (summary.inserted, summary.updated, summary.skipped) == (1, 0, 0)

    shipment = ShipmentService(db_session).get_by_tracking_number("794644790138")
    assert shipment.id != 42
    assert shipment.schedule_pickup is True
    assert shipment.reprint_label is False
    assert shipment.resend_email_to_recipient is False
    assert shipment.cost == 0
    assert shipment.shipped_time is None
    assert shipment.address_formatted == "1 Main St\nOakland, CA 94607\nUS"
    assert shipment.airtable_record_id == "recXYZ"

    summary = import_rows(db_session, [_row(**{"Tracking Status": "DELIVERED", "Cost": "18.20"})])
    assert (summary.inserted, summary.updated, summary.skipped) == (0, 1, 0)

    shipment = ShipmentService(db_session).get_by_tracking_number("794644790138")
    assert shipment.tracking_status == "DELIVERED"
    assert round(shipment.cost, 2) == 18.2


def test_import_rows_skips_invalid(db_session):
    rows = [
        _row(**{"Tracking Number": "T-good"}),
        _row(**{"Tracking Number": "T-bad-date", "Created Time": "yesterday"}),
        _row(**{"Tracking Number": "T-bad-flag", "Reprint Label": "maybe"}),
        _row(**{"Tracking Number": "T-no-time", "Created Time": ""}),
    ]

    summary = import_rows(db_session, rows)

    assert (summary.inserted, summary.updated, summary.skipped) == (1, 0, 3)
    assert summary.total == 4
    assert [s.tracking_number for s in ShipmentService(db_session).list()] == ["T-good"]


def test_import_csv(db_session, tmp_path):
    path = tmp_path / "shipments.csv"
    rows = [_row(**{"Tracking Number": "CSV-1"}), _row(**{"Tracking Number": "CSV-2", "Carrier": "UPS"})]
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)

    summary = import_csv(db_session, path)

    assert summary.inserted == 2
    assert [s.carrier for s in ShipmentService(db_session).list()] == ["FedEx", "UPS"]


def test_import_csv_with_byte_order_mark(db_session, tmp_path):
    path = tmp_path / "export.csv"
    row = _row(**{"Tracking Number": "BOM-1"})
    fieldnames = ["Tracking Number"] + [k for k in row if k != "Tracking Number"]
    with open(path, "w", newline="", encoding="utf-8-sig") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerow(row)
    assert path.read_bytes().startswith(b"\xef\xbb\xbf")

    summary = import_csv(db_session, path)

    assert (summary.inserted, summary.skipped) == (1, 0)
    assert ShipmentService(db_session).get_by_tracking_number("BOM-1").name == "Ada Lovelace"


def test_normalize_header_strips_byte_order_mark():
    assert normalize_header("\ufeffTracking Number") == "tracking_number"


def test_import_rows_skips_blank_tracking_number(db_session):
    rows = [
        _row(**{"Tracking Number": "", "Name": "First"}),
        _row(**{"Tracking Number": "   ", "Name": "Second"}),
        _row(**{"Tracking Number": "T-1"}),
    ]

    summary = import_rows(db_session, rows)

    assert (summary.inserted, summary.updated, summary.skipped) == (1, 0, 2)
    assert [s.tracking_number for s in ShipmentService(db_session).list()] == ["T-1"]
