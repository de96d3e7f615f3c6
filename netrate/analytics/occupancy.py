from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence

from netrate.analytics.rounding import round_half_up
from netrate.schemas.pricing import (
    DEFAULT_OCCUPANCY_PCT,
    BookingSplit,
    DayType,
    OccupancySpec,
    PerMonthOccupancy,
    PerSeasonOccupancy,
    PerYearOccupancy,
)
from netrate.shared.calendar import days_of_month

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365


def booked_nights_by_season(
    occupancy: OccupancySpec,
    seasons: Sequence[str],
    season_days: Mapping[str, int],
    season_months: Mapping[str, Sequence[str]],
    year: int,
) -> Dict[str, int]:
    """Booked nights per season for the active occupancy mode.

    Every listed season gets at least one night, even one without days.
    """
    if isinstance(occupancy, PerYearOccupancy):
        return _per_year_nights(occupancy, seasons, season_days)
    if isinstance(occupancy, PerSeasonOccupancy):
        return _per_season_nights(occupancy, seasons, season_days)
    if isinstance(occupancy, PerMonthOccupancy):
        return _per_month_nights(occupancy, seasons, season_months, year)
    raise TypeError(f"Unsupported occupancy spec: {type(occupancy).__name__}")


def _per_year_nights(
    occupancy: PerYearOccupancy, seasons: Sequence[str], season_days: Mapping[str, int]
) -> Dict[str, int]:
    year_nights = round_half_up(DAYS_PER_YEAR * occupancy.per_year_pct / 100)
    total_days = sum(season_days.values())
    nights: Dict[str, int] = {}
    for season in seasons:
        weight = season_days.get(season, 0) / max(total_days, 1)
        nights[season] = max(1, round_half_up(year_nights * weight))
    logger.debug("per-year occupancy: %s year nights over %s days", year_nights, total_days)
    return nights


def _per_season_nights(
    occupancy: PerSeasonOccupancy, seasons: Sequence[str], season_days: Mapping[str, int]
) -> Dict[str, int]:
    nights: Dict[str, int] = {}
    for season in seasons:
        pct = occupancy.per_season_pct.get(season, DEFAULT_OCCUPANCY_PCT)
        nights[season] = max(1, round_half_up(season_days.get(season, 0) * pct / 100))
    return nights


def _per_month_nights(
    occupancy: PerMonthOccupancy,
    seasons: Sequence[str],
    season_months: Mapping[str, Sequence[str]],
    year: int,
) -> Dict[str, int]:
    nights: Dict[str, int] = {}
    for season in seasons:
        season_total = 0
        for month in season_months.get(season, ()):
            pct = occupancy.per_month_pct.get(month, DEFAULT_OCCUPANCY_PCT)
            season_total += round_half_up(days_of_month(year, month) * pct / 100)
        nights[season] = max(1, season_total)
    return nights


def split_nights_by_day_type(
    booked_nights: Mapping[str, int],
    seasons: Sequence[str],
    split: BookingSplit,
) -> Dict[str, Dict[DayType, int]]:
    """Split each season's nights into weekday, weekend and holiday buckets.

    Holiday takes whatever weekday and weekend leave, so the three buckets
    always add up to the season total whatever the split fractions sum to.
    """
    result: Dict[str, Dict[DayType, int]] = {}
    for season in seasons:
        total = booked_nights.get(season) or 1
        weekday = min(total, max(0, round_half_up(total * split.weekday)))
        weekend = min(total - weekday, max(0, round_half_up(total * split.weekend)))
        holiday = max(0, total - weekday - weekend)
        result[season] = {"weekday": weekday, "weekend": weekend, "holiday": holiday}
    return result
