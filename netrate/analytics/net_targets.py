from __future__ import annotations

import math
from typing import Dict, Mapping, Sequence

from netrate.analytics.rounding import round_half_up
from netrate.schemas.pricing import (
    DAY_TYPES,
    DayType,
    MonthNetGoal,
    NetGoalSpec,
    PerSeasonNetGoal,
    YearNetGoal,
)

MONTHS_PER_YEAR = 12


def annual_net_goal(goal: NetGoalSpec) -> float:
    if isinstance(goal, YearNetGoal):
        return goal.per_year_net
    if isinstance(goal, MonthNetGoal):
        return goal.per_month_net * MONTHS_PER_YEAR
    # An explicit per-season map has no annual figure to spread.
    return 0.0


def season_net_targets(
    goal: NetGoalSpec,
    seasons: Sequence[str],
    booked_nights: Mapping[str, int],
) -> Dict[str, float]:
    """Net income target per season.

    A non-empty per-season map is used as given. Anything else is annualised
    and shared out by each season's portion of the booked nights; an empty
    per-season map therefore yields zero targets everywhere.
    """
    if isinstance(goal, PerSeasonNetGoal) and goal.per_season_net:
        return dict(goal.per_season_net)

    total_booked = sum(booked_nights.values())
    base = annual_net_goal(goal)
    targets: Dict[str, float] = {}
    for season in seasons:
        weight = booked_nights.get(season, 0) / max(total_booked, 1)
        targets[season] = round_half_up(base * weight)
    return targets


def per_night_net_targets(
    seasons: Sequence[str],
    nights_by_season_day: Mapping[str, Mapping[str, int]],
    season_targets: Mapping[str, float],
) -> Dict[str, Dict[DayType, int]]:
    """Per-night net target for every (season, day type) bucket.

    Fractions are floored per night, so totals rebuilt from these figures
    land slightly under the season target.
    """
    out: Dict[str, Dict[DayType, int]] = {}
    for season in seasons:
        buckets = nights_by_season_day.get(season, {})
        season_net = season_targets.get(season) or 0
        total_nights = sum(buckets.values()) or 1
        out[season] = {}
        for day_type in DAY_TYPES:
            nights = buckets.get(day_type, 0)
            net_for_bucket = season_net * (nights / total_nights)
            out[season][day_type] = max(1, math.floor(net_for_bucket / nights)) if nights > 0 else 0
    return out
