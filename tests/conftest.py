from __future__ import annotations

import pytest

from netrate.core.config import Settings
from netrate.schemas.pricing import (
    BookingSplit,
    Multipliers,
    PerYearOccupancy,
    Scenario,
    Seasonality,
    YearNetGoal,
    default_platform_profiles,
)
from netrate.services.pricing_service import PricingService

ALL_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@pytest.fixture()
def settings() -> Settings:
    return Settings()


@pytest.fixture()
def pricing_service(settings: Settings) -> PricingService:
    return PricingService(settings=settings)


@pytest.fixture()
def default_scenario() -> Scenario:
    return Scenario(currency="EUR", year=2025)


@pytest.fixture()
def single_season_scenario() -> Scenario:
    return Scenario(
        currency="EUR",
        year=2025,
        platforms={"airbnb": default_platform_profiles()["airbnb"]},
        seasonality=Seasonality(
            types=("All",),
            months={"All": ALL_MONTHS},
            multipliers=Multipliers(weekday=1.0, weekend=1.2, holiday=1.4),
        ),
        occupancy=PerYearOccupancy(per_year_pct=60),
        net_goal=YearNetGoal(per_year_net=36500),
        split=BookingSplit(weekday=0.7, weekend=0.25, holiday=0.05),
    )
