from __future__ import annotations

import csv
import io
from typing import Iterable, List, TextIO, Tuple

from netrate.schemas.pricing import ExportRecord

# Header label and record attribute, in output order.
CSV_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Platform", "platform"),
    ("Season", "season"),
    ("DayType", "day_type"),
    ("DP", "dp"),
    ("Gross", "gross"),
    ("GuestPrice", "guest_price"),
    ("Net", "net"),
    ("Nights", "nights"),
    ("GrossTotal", "gross_total"),
    ("GuestTotal", "guest_total"),
    ("NetTotal", "net_total"),
)


def csv_header() -> List[str]:
    return [label for label, _ in CSV_COLUMNS]


def record_values(record: ExportRecord) -> List[object]:
    return [getattr(record, attribute) for _, attribute in CSV_COLUMNS]


def export_filename(platform: str) -> str:
    return f"dynamic-pricing-{platform}.csv"


def write_price_table_csv(records: Iterable[ExportRecord], stream: TextIO) -> int:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(csv_header())
    count = 0
    for record in records:
        writer.writerow(record_values(record))
        count += 1
    return count


def price_table_csv(records: Iterable[ExportRecord]) -> str:
    buffer = io.StringIO()
    write_price_table_csv(records, buffer)
    return buffer.getvalue()
