from __future__ import annotations

import io

from netrate.analytics.export import csv_header, export_filename, price_table_csv, write_price_table_csv
from netrate.analytics.totals import aggregate_totals, build_export_records, find_row
from netrate.schemas.pricing import PriceRow
from netrate.shared.money import format_money

NIGHTS = {"A": {"weekday": 10, "weekend": 4, "holiday": 1}, "B": {"weekday": 0, "weekend": 0, "holiday": 0}}


def _row(season: str, day_type: str, platform: str = "airbnb", gross: int = 100) -> PriceRow:
    return PriceRow(
        season=season, day_type=day_type, platform=platform, dp=80, gross=gross, guest_price=gross + 14, net=gross - 23
    )


ROWS = [
    _row("A", "weekday"),
    _row("A", "weekday", platform="booking", gross=500),
    _row("A", "weekend", gross=120),
    _row("A", "holiday", gross=140),
    _row("B", "weekday"),
]


def test_totals_weight_rows_by_nights() -> None:
    totals = aggregate_totals(ROWS, NIGHTS, "airbnb", ["A", "B", "C"])
    a = totals.by_season["A"]
    assert a.nights == 15
    assert a.gross == 100 * 10 + 120 * 4 + 140
    assert a.guest == 114 * 10 + 134 * 4 + 154
    assert a.net == 77 * 10 + 97 * 4 + 117
    assert totals.by_season["B"].nights == 0
    assert totals.by_season["C"].gross == 0
    assert totals.grand == a


def test_totals_for_platform_without_rows_are_zero() -> None:
    totals = aggregate_totals(ROWS, NIGHTS, "vrbo", ["A"])
    assert totals.grand.nights == 0
    assert totals.by_season["A"].net == 0


def test_find_row_returns_none_when_missing() -> None:
    assert find_row(ROWS, "airbnb", "A", "weekend").gross == 120
    assert find_row(ROWS, "airbnb", "Z", "weekend") is None


def test_csv_header_and_rows() -> None:
    records = build_export_records(ROWS, NIGHTS, "airbnb")
    text = price_table_csv(records)
    lines = text.splitlines()
    assert lines[0] == "Platform,Season,DayType,DP,Gross,GuestPrice,Net,Nights,GrossTotal,GuestTotal,NetTotal"
    assert lines[1] == "Airbnb,A,weekday,80,100,114,77,10,1000,1140,770"
    assert len(lines) == 5


def test_export_uses_the_platform_label() -> None:
    records = build_export_records(ROWS, NIGHTS, "booking")
    stream = io.StringIO()
    assert write_price_table_csv(records, stream) == 1
    assert stream.getvalue().splitlines()[1].startswith("Booking.com,A,weekday,80,500,")


def test_header_order_and_filename() -> None:
    assert csv_header()[3:7] == ["DP", "Gross", "GuestPrice", "Net"]
    assert export_filename("vrbo") == "dynamic-pricing-vrbo.csv"


def test_format_money() -> None:
    assert format_money("EUR", 1234.5) == "€1,234.50"
    assert format_money("usd", 0) == "$0.00"
    assert format_money("SEK", 1000) == "SEK 1,000.00"
    assert format_money("GBP", -12) == "-£12.00"
