from __future__ import annotations

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Set

from netrate.models.holidays import HolidayRecord
from netrate.schemas.holidays import HolidayCalendar, HolidaySettings, MergedHoliday
from netrate.schemas.pricing import DayType

PRIORITY_NAME_FRAGMENTS = ("christmas", "new year", "easter", "independence", "labor")
SATURDAY = 5


def pick_holiday_name(names: List[str]) -> str:
    for name in names:
        lowered = name.lower()
        if any(fragment in lowered for fragment in PRIORITY_NAME_FRAGMENTS):
            return name
    return names[0]


def merge_and_dedupe(records: Iterable[HolidayRecord], apply_observed: bool = True) -> List[MergedHoliday]:
    """Collapse per-country records into one entry per date, sorted by date."""
    by_date: Dict[date, List[HolidayRecord]] = {}
    for record in records:
        if not apply_observed and record.is_observed:
            continue
        by_date.setdefault(record.holiday_date, []).append(record)

    merged: List[MergedHoliday] = []
    for holiday_date in sorted(by_date):
        group = by_date[holiday_date]
        countries = tuple(OrderedDict.fromkeys(record.country for record in group))
        merged.append(
            MergedHoliday(
                holiday_date=holiday_date,
                name=pick_holiday_name([record.name for record in group]),
                countries=countries,
                enabled=True,
                buffer=max(record.suggest_buffer_days for record in group),
            )
        )
    return merged


def build_holiday_calendar(
    records: Iterable[HolidayRecord],
    settings: HolidaySettings,
    buffer_overrides: Optional[Mapping[date, int]] = None,
    enabled_overrides: Optional[Mapping[date, bool]] = None,
) -> HolidayCalendar:
    buffer_overrides = buffer_overrides or {}
    enabled_overrides = enabled_overrides or {}
    rows = []
    for entry in merge_and_dedupe(records, settings.apply_to_observed):
        buffer = buffer_overrides.get(entry.holiday_date, entry.buffer)
        rows.append(
            entry.model_copy(
                update={
                    "buffer": max(0, min(buffer, settings.max_buffer_days)),
                    "enabled": enabled_overrides.get(entry.holiday_date, True),
                }
            )
        )
    return HolidayCalendar(settings=settings, merged=tuple(rows))


def expand_holiday_dates(calendar: Optional[HolidayCalendar]) -> Set[date]:
    """Every date treated as a holiday once buffers are applied around enabled entries."""
    dates: Set[date] = set()
    if calendar is None:
        return dates
    for entry in calendar.merged:
        if not entry.enabled:
            continue
        for offset in range(-entry.buffer, entry.buffer + 1):
            dates.add(entry.holiday_date + timedelta(days=offset))
    return dates


def classify_day(value: date, holiday_dates: Set[date]) -> DayType:
    # Holiday wins over weekend; the two multipliers never stack.
    if value in holiday_dates:
        return "holiday"
    if value.weekday() >= SATURDAY:
        return "weekend"
    return "weekday"
