from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from netrate.analytics.holidays import build_holiday_calendar
from netrate.repositories.holiday_repository import HolidayRepository
from netrate.schemas.holidays import HolidayCalendar, HolidaySettings

logger = logging.getLogger(__name__)


class HolidayService:
    def __init__(self, repository: HolidayRepository) -> None:
        self.repository = repository

    def build_calendar(
        self,
        settings: HolidaySettings,
        buffer_overrides: Optional[Mapping[date, int]] = None,
        enabled_overrides: Optional[Mapping[date, bool]] = None,
    ) -> HolidayCalendar:
        records = self.repository.list_holidays(settings.year, settings.active_countries)
        calendar = build_holiday_calendar(records, settings, buffer_overrides, enabled_overrides)
        logger.debug(
            "merged %s holiday records into %s dates for %s",
            len(records),
            len(calendar.merged),
            settings.year,
        )
        return calendar
