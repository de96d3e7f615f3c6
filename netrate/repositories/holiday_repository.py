from __future__ import annotations

from datetime import date
from typing import List, Protocol, Sequence

from netrate.models.holidays import HolidayRecord


class HolidayRepository(Protocol):
    def list_holidays(self, year: int, countries: Sequence[str]) -> List[HolidayRecord]:
        ...


class SeedHolidayRepository:
    """Fixed demonstration holidays, filtered by year and country like a real source would be."""

    SEED = (
        ("01-01", "New Year's Day", "US", 0),
        ("01-01", "New Year's Day", "UK", 0),
        ("12-25", "Christmas Day", "US", 1),
        ("12-25", "Christmas Day", "UK", 1),
        ("12-26", "Boxing Day", "UK", 0),
    )

    def list_holidays(self, year: int, countries: Sequence[str]) -> List[HolidayRecord]:
        active = set(countries)
        records: List[HolidayRecord] = []
        for month_day, name, country, buffer_days in self.SEED:
            if country not in active:
                continue
            month, day = (int(part) for part in month_day.split("-"))
            holiday_date = date(year, month, day)
            records.append(
                HolidayRecord(
                    id=f"{holiday_date.isoformat()}_{country}",
                    name=name,
                    holiday_date=holiday_date,
                    country=country,
                    is_observed=False,
                    suggest_buffer_days=buffer_days,
                )
            )
        return records
