from __future__ import annotations

import logging
from typing import List, Mapping, Optional, TextIO

from netrate.analytics.calendar_model import season_day_count
from netrate.analytics.export import write_price_table_csv
from netrate.analytics.fee_model import build_price_table, preview_prices, resolve_holiday_multiplier
from netrate.analytics.net_targets import per_night_net_targets, season_net_targets
from netrate.analytics.occupancy import booked_nights_by_season, split_nights_by_day_type
from netrate.analytics.overrides import apply_overrides
from netrate.analytics.totals import aggregate_totals, build_export_records, find_row, rows_for_platform
from netrate.core.config import Settings, get_settings
from netrate.core.errors import NotFoundError
from netrate.schemas.pricing import (
    DayType,
    DerivedState,
    Override,
    OverrideKey,
    PreviewPrices,
    PriceRow,
    PriceTableView,
    Scenario,
    platform_label,
)

logger = logging.getLogger(__name__)


class PricingService:
    """Derives nightly prices from a scenario snapshot.

    ``recompute`` is a pure function of the scenario: nothing is cached between
    calls and the same scenario always produces the same state.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def recompute(self, scenario: Scenario) -> DerivedState:
        year = scenario.calendar_year
        seasonality = scenario.seasonality
        seasons = seasonality.types

        season_days = season_day_count(seasonality.months, year, seasons)
        booked_nights = booked_nights_by_season(
            scenario.occupancy, seasons, season_days, seasonality.months, year
        )
        if abs(scenario.split.total - 1) > 1e-9:
            logger.info("booking split sums to %.2f; holiday nights take the remainder", scenario.split.total)
        nights_by_season_day = split_nights_by_day_type(booked_nights, seasons, scenario.split)
        season_targets = season_net_targets(scenario.net_goal, seasons, booked_nights)
        per_night_targets = per_night_net_targets(seasons, nights_by_season_day, season_targets)
        holiday_multiplier = resolve_holiday_multiplier(
            scenario.holidays, self.settings.default_holiday_multiplier
        )
        price_table = build_price_table(
            seasons,
            scenario.platforms,
            per_night_targets,
            seasonality.multipliers,
            holiday_multiplier,
            self.settings.divisor_floor,
        )
        logger.debug(
            "recomputed %s price rows for %s seasons in %s", len(price_table), len(seasons), year
        )
        return DerivedState(
            year=year,
            season_days=season_days,
            booked_nights=booked_nights,
            nights_by_season_day=nights_by_season_day,
            season_net_targets=season_targets,
            per_night_net_targets=per_night_targets,
            price_table=tuple(price_table),
        )

    def displayed_rows(
        self,
        scenario: Scenario,
        state: DerivedState,
        overrides: Optional[Mapping[OverrideKey, Override]] = None,
    ) -> List[PriceRow]:
        return apply_overrides(state.price_table, overrides or {}, scenario.platforms)

    def find_row(
        self,
        rows: List[PriceRow],
        platform: str,
        season: str,
        day_type: DayType,
    ) -> Optional[PriceRow]:
        row = find_row(rows, platform, season, day_type)
        if row is None:
            logger.info("no data yet for %s / %s / %s", platform, season, day_type)
        return row

    def price_view(
        self,
        scenario: Scenario,
        platform: str,
        overrides: Optional[Mapping[OverrideKey, Override]] = None,
        state: Optional[DerivedState] = None,
    ) -> PriceTableView:
        if platform not in scenario.platforms:
            raise NotFoundError(f"Platform not configured: {platform}")
        if state is None:
            state = self.recompute(scenario)
        rows = self.displayed_rows(scenario, state, overrides)
        return PriceTableView(
            platform=platform,
            platform_label=platform_label(platform),
            currency=scenario.currency,
            rows=rows_for_platform(rows, platform),
            totals=aggregate_totals(
                rows, state.nights_by_season_day, platform, scenario.seasonality.types
            ),
            records=build_export_records(rows, state.nights_by_season_day, platform),
        )

    def export_csv(self, view: PriceTableView, stream: TextIO) -> int:
        count = write_price_table_csv(view.records, stream)
        logger.info("exported %s rows for %s", count, view.platform_label)
        return count

    def preview(
        self,
        scenario: Scenario,
        platform: str,
        day_type: DayType,
        dp: Optional[float] = None,
    ) -> PreviewPrices:
        profile = scenario.platforms.get(platform)
        if profile is None:
            raise NotFoundError(f"Platform not configured: {platform}")
        daily_price = dp if dp is not None else self.settings.preview_daily_price
        return preview_prices(profile, scenario.seasonality.multipliers, day_type, daily_price)
