from __future__ import annotations

import math

import pytest

from netrate.analytics.fee_model import (
    FeeRates,
    build_price_row,
    build_price_table,
    derive_daily_price,
    forward_prices,
    inverse_gross,
    preview_prices,
    resolve_holiday_multiplier,
)
from netrate.analytics.rounding import round_half_up, round_to_even, round_up
from netrate.core.config import get_settings
from netrate.schemas.holidays import HolidayCalendar, HolidaySettings
from netrate.schemas.pricing import Multipliers, PlatformFeeProfile, default_platform_profiles

AIRBNB = default_platform_profiles()["airbnb"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(2.5, 4), (3.5, 4), (5, 6), (4.4, 4), (4.6, 6), (0, 0)],
)
def test_round_to_even(value: float, expected: int) -> None:
    assert round_to_even(value) == expected


def test_halves_round_up_not_to_even() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2
    assert round_up(2.0001) == 3
    assert round_up(2.0) == 2


def test_airbnb_retention() -> None:
    rates = FeeRates.from_profile(AIRBNB)
    assert rates.net_retention == pytest.approx(0.97 * 0.94 * 0.85)
    assert rates.pad == pytest.approx(1.2)


def test_forward_pricing_recovers_the_target() -> None:
    rates = FeeRates.from_profile(AIRBNB)
    dp_raw = derive_daily_price(1000, rates, 1.0)
    prices = forward_prices(dp_raw, rates, 1.0)
    assert prices.gross == 1290
    assert prices.net == 1000


@pytest.mark.parametrize("target", [1, 37, 166, 999, 2500])
@pytest.mark.parametrize("multiplier", [1.0, 1.2, 1.4])
def test_gross_is_even_and_prices_positive(target: int, multiplier: float) -> None:
    row = build_price_row("All", "weekday", "airbnb", target, AIRBNB, multiplier)
    assert row.gross % 2 == 0
    assert row.dp >= 1
    assert row.gross >= 1
    assert row.guest_price >= row.gross
    assert row.net >= 1


def test_reference_row_values() -> None:
    weekday = build_price_row("All", "weekday", "airbnb", 166, AIRBNB, 1.0)
    assert (weekday.dp, weekday.gross, weekday.guest_price, weekday.net) == (178, 214, 244, 166)

    weekend = build_price_row("All", "weekend", "airbnb", 166, AIRBNB, 1.2)
    assert (weekend.dp, weekend.gross) == (149, 214)

    holiday = build_price_row("All", "holiday", "airbnb", 166, AIRBNB, 1.4)
    assert (holiday.dp, holiday.gross) == (127, 214)


def test_zero_target_still_displays_a_daily_price_of_one() -> None:
    row = build_price_row("Empty", "holiday", "airbnb", 0, AIRBNB, 1.4)
    assert row.dp == 1
    assert (row.gross, row.guest_price, row.net) == (0, 0, 0)


def test_full_fee_profile_hits_the_divisor_floor() -> None:
    profile = PlatformFeeProfile(host_commission_pct=100)
    rates = FeeRates.from_profile(profile)
    assert rates.net_retention == 0
    assert inverse_gross(1, rates) == pytest.approx(10000)
    row = build_price_row("All", "weekday", "website", 1, profile, 1.0)
    assert math.isfinite(row.dp)
    assert row.net == 0


def test_zero_multiplier_hits_the_divisor_floor() -> None:
    rates = FeeRates.from_profile(AIRBNB)
    assert derive_daily_price(1, rates, 0.0) == pytest.approx(inverse_gross(1, rates) / 0.0001)


def test_price_table_order_is_season_day_type_platform() -> None:
    profiles = default_platform_profiles()
    targets = {"A": {"weekday": 100, "weekend": 90, "holiday": 80}, "B": {"weekday": 50}}
    rows = build_price_table(["A", "B"], profiles, targets, Multipliers(), 1.4)
    assert len(rows) == 2 * 3 * 5
    assert [(row.season, row.day_type, row.platform) for row in rows[:6]] == [
        ("A", "weekday", "airbnb"),
        ("A", "weekday", "booking"),
        ("A", "weekday", "vrbo"),
        ("A", "weekday", "website"),
        ("A", "weekday", "dtravel"),
        ("A", "weekend", "airbnb"),
    ]
    # Missing buckets price from a zero target.
    assert rows[-1].season == "B"
    assert rows[-1].gross == 0


def test_holiday_multiplier_comes_from_the_calendar_settings() -> None:
    assert resolve_holiday_multiplier(None) == 1.4
    assert resolve_holiday_multiplier(None, 1.6) == 1.6
    calendar = HolidayCalendar(settings=HolidaySettings(multiplier=2.0, year=2025))
    assert resolve_holiday_multiplier(calendar, 1.6) == 2.0


def test_preview_for_airbnb_weekday() -> None:
    prices = preview_prices(AIRBNB, Multipliers(), "weekday", 100)
    assert (prices.gross, prices.guest_price, prices.net) == (120, 137, 94)


def test_preview_uses_the_plain_holiday_multiplier() -> None:
    prices = preview_prices(AIRBNB, Multipliers(holiday=2.0), "holiday", 100)
    assert prices.gross == 240


@pytest.fixture()
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_default_floor_and_holiday_multiplier_follow_settings(fresh_settings: pytest.MonkeyPatch) -> None:
    fresh_settings.setenv("NETRATE_DIVISOR_FLOOR", "0.5")
    fresh_settings.setenv("NETRATE_DEFAULT_HOLIDAY_MULTIPLIER", "1.8")
    rates = FeeRates.from_profile(PlatformFeeProfile(host_commission_pct=100))
    assert inverse_gross(1, rates) == pytest.approx(2.0)
    assert inverse_gross(1, rates, floor=0.25) == pytest.approx(4.0)
    assert resolve_holiday_multiplier(None) == 1.8
