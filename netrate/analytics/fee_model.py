from __future__ import annotations

from typing import List, Mapping, NamedTuple, Optional, Sequence

from netrate.analytics.rounding import round_half_up, round_to_even, round_up
from netrate.core.config import get_settings
from netrate.schemas.holidays import HolidayCalendar
from netrate.schemas.pricing import (
    DAY_TYPES,
    DayType,
    Multipliers,
    PlatformFeeProfile,
    PreviewPrices,
    PriceRow,
)


def _divisor_floor(floor: Optional[float]) -> float:
    return get_settings().divisor_floor if floor is None else floor


class FeeRates(NamedTuple):
    guest: float
    host: float
    vat: float
    tax: float
    pad: float

    @classmethod
    def from_profile(cls, profile: PlatformFeeProfile) -> "FeeRates":
        return cls(
            guest=profile.guest_fee_pct / 100,
            host=profile.host_commission_pct / 100,
            vat=profile.vat_pct / 100,
            tax=profile.income_tax_pct / 100,
            pad=1 + profile.discount_padding_pct / 100,
        )

    @property
    def net_retention(self) -> float:
        return (1 - self.host) * (1 - self.vat) * (1 - self.tax)


def inverse_gross(target_net: float, rates: FeeRates, floor: Optional[float] = None) -> float:
    return target_net / max(rates.net_retention, _divisor_floor(floor))


def derive_daily_price(
    target_net: float, rates: FeeRates, multiplier: float, floor: Optional[float] = None
) -> float:
    """Unrounded base daily price that yields ``target_net`` after fees."""
    gross_raw = inverse_gross(target_net, rates, floor)
    return gross_raw / max(rates.pad * multiplier, _divisor_floor(floor))


def display_daily_price(dp_raw: float) -> int:
    return max(1, round_half_up(dp_raw))


def prices_from_gross(gross: int, rates: FeeRates) -> PreviewPrices:
    return PreviewPrices(
        gross=gross,
        guest_price=round_up(gross * (1 + rates.guest)),
        net=round_up(gross * rates.net_retention),
    )


def forward_prices(dp: float, rates: FeeRates, multiplier: float) -> PreviewPrices:
    return prices_from_gross(round_to_even(dp * rates.pad * multiplier), rates)


def resolve_holiday_multiplier(
    holidays: Optional[HolidayCalendar], default: Optional[float] = None
) -> float:
    if holidays is None:
        return get_settings().default_holiday_multiplier if default is None else default
    return holidays.settings.multiplier


def day_type_multiplier(day_type: DayType, multipliers: Multipliers, holiday_multiplier: float) -> float:
    if day_type == "weekday":
        return multipliers.weekday
    if day_type == "weekend":
        return multipliers.weekend
    return holiday_multiplier


def build_price_row(
    season: str,
    day_type: DayType,
    platform: str,
    target_net: float,
    profile: PlatformFeeProfile,
    multiplier: float,
    floor: Optional[float] = None,
) -> PriceRow:
    rates = FeeRates.from_profile(profile)
    dp_raw = derive_daily_price(target_net, rates, multiplier, floor)
    # Forward pricing starts from the unrounded DP; only the displayed DP is rounded.
    prices = forward_prices(dp_raw, rates, multiplier)
    return PriceRow(
        season=season,
        day_type=day_type,
        platform=platform,
        dp=display_daily_price(dp_raw),
        gross=prices.gross,
        guest_price=prices.guest_price,
        net=prices.net,
    )


def build_price_table(
    seasons: Sequence[str],
    platforms: Mapping[str, PlatformFeeProfile],
    per_night_targets: Mapping[str, Mapping[str, int]],
    multipliers: Multipliers,
    holiday_multiplier: float,
    floor: Optional[float] = None,
) -> List[PriceRow]:
    """One row per season, day type and platform, in that nesting order."""
    rows: List[PriceRow] = []
    for season in seasons:
        targets = per_night_targets.get(season, {})
        for day_type in DAY_TYPES:
            multiplier = day_type_multiplier(day_type, multipliers, holiday_multiplier)
            for platform, profile in platforms.items():
                rows.append(
                    build_price_row(
                        season,
                        day_type,
                        platform,
                        targets.get(day_type) or 0,
                        profile,
                        multiplier,
                        floor,
                    )
                )
    return rows


def preview_prices(
    profile: PlatformFeeProfile,
    multipliers: Multipliers,
    day_type: DayType,
    dp: float = 100.0,
) -> PreviewPrices:
    """Fee stack applied to a fixed DP, using the plain multiplier map for every day type."""
    multiplier = day_type_multiplier(day_type, multipliers, multipliers.holiday)
    return forward_prices(dp, FeeRates.from_profile(profile), multiplier)
