from __future__ import annotations

from datetime import date
from typing import Annotated, Tuple

from pydantic import AfterValidator, Field

from netrate.shared.base import FrozenSchema


DEFAULT_COUNTRIES: Tuple[str, ...] = ("US", "UK", "DE", "NL", "SE")
MAX_BUFFER_DAYS_LIMIT = 3


def _current_year() -> int:
    return date.today().year


def _clamp_holiday_multiplier(value: float) -> float:
    return max(1.0, min(3.0, value))


def _clamp_max_buffer_days(value: int) -> int:
    return max(0, min(MAX_BUFFER_DAYS_LIMIT, value))


class HolidaySettings(FrozenSchema):
    multiplier: Annotated[float, AfterValidator(_clamp_holiday_multiplier)] = 1.4
    apply_to_observed: bool = True
    max_buffer_days: Annotated[int, AfterValidator(_clamp_max_buffer_days)] = 2
    active_countries: Tuple[str, ...] = DEFAULT_COUNTRIES
    year: int = Field(default_factory=_current_year)


class MergedHoliday(FrozenSchema):
    holiday_date: date = Field(alias="date")
    name: str
    countries: Tuple[str, ...] = ()
    enabled: bool = True
    buffer: int = Field(default=0, ge=0)


class HolidayCalendar(FrozenSchema):
    """Merged, deduplicated holiday dates plus the settings they were built with."""

    settings: HolidaySettings = Field(default_factory=HolidaySettings)
    merged: Tuple[MergedHoliday, ...] = ()
