from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from netrate.shared.base import to_camel


class HolidayRecord(BaseModel):
    """One raw holiday as delivered by a holiday data source, already filtered by country and year."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    holiday_date: date = Field(alias="date")
    country: str
    is_observed: bool = False
    suggest_buffer_days: int = Field(default=0, ge=0)
