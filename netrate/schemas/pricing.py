from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import AfterValidator, Field

from netrate.core.config import get_settings
from netrate.schemas.holidays import HolidayCalendar
from netrate.shared.base import BaseSchema, FrozenSchema


PlatformKey = Literal["airbnb", "booking", "vrbo", "website", "dtravel"]
DayType = Literal["weekday", "weekend", "holiday"]

PLATFORM_KEYS: Tuple[PlatformKey, ...] = ("airbnb", "booking", "vrbo", "website", "dtravel")
DAY_TYPES: Tuple[DayType, ...] = ("weekday", "weekend", "holiday")

PLATFORM_LABELS: Dict[str, str] = {
    "airbnb": "Airbnb",
    "booking": "Booking.com",
    "vrbo": "VRBO",
    "website": "My Website",
    "dtravel": "DTravel",
}

DEFAULT_SEASONS: Tuple[str, ...] = ("Deep Low", "Low", "Early or Late", "Season", "Peak")
DEFAULT_SEASON_MONTHS: Dict[str, Tuple[str, ...]] = {
    "Deep Low": ("Jan", "Feb"),
    "Low": ("Mar", "Apr", "Dec"),
    "Early or Late": ("May", "Jun", "Nov"),
    "Season": ("Jul", "Sep", "Oct"),
    "Peak": ("Aug",),
}
DEFAULT_SEASON_OCCUPANCY: Dict[str, float] = {
    "Deep Low": 40,
    "Low": 55,
    "Early or Late": 60,
    "Season": 70,
    "Peak": 85,
}
DEFAULT_OCCUPANCY_PCT = 60.0


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _clamp_pct(value: float) -> float:
    return clamp(value, 0.0, 100.0)


def _clamp_fraction(value: float) -> float:
    return clamp(value, 0.0, 1.0)


Percent = Annotated[float, AfterValidator(_clamp_pct)]
Fraction = Annotated[float, AfterValidator(_clamp_fraction)]


def platform_label(platform: str) -> str:
    return PLATFORM_LABELS.get(platform, platform)


class FeeField(str, Enum):
    GUEST_FEE = "guest_fee_pct"
    HOST_COMMISSION = "host_commission_pct"
    VAT = "vat_pct"
    INCOME_TAX = "income_tax_pct"
    DISCOUNT_PADDING = "discount_padding_pct"


FEE_FIELD_LABELS: Dict[FeeField, str] = {
    FeeField.GUEST_FEE: "Guest Service Fee %",
    FeeField.HOST_COMMISSION: "Host Commission %",
    FeeField.VAT: "VAT %",
    FeeField.INCOME_TAX: "Income Tax %",
    FeeField.DISCOUNT_PADDING: "Padding for Discounts %",
}


class PlatformFeeProfile(FrozenSchema):
    guest_fee_pct: Percent = 0.0
    host_commission_pct: Percent = 0.0
    vat_pct: Percent = 0.0
    income_tax_pct: Percent = 0.0
    discount_padding_pct: Percent = 0.0


def default_platform_profiles() -> Dict[PlatformKey, PlatformFeeProfile]:
    return {
        "airbnb": PlatformFeeProfile(
            guest_fee_pct=14, host_commission_pct=3, vat_pct=6, income_tax_pct=15, discount_padding_pct=20
        ),
        "booking": PlatformFeeProfile(
            guest_fee_pct=0, host_commission_pct=16.4, vat_pct=6, income_tax_pct=15, discount_padding_pct=20
        ),
        "vrbo": PlatformFeeProfile(
            guest_fee_pct=12, host_commission_pct=8, vat_pct=6, income_tax_pct=15, discount_padding_pct=20
        ),
        "website": PlatformFeeProfile(
            guest_fee_pct=10, host_commission_pct=3, vat_pct=6, income_tax_pct=15, discount_padding_pct=20
        ),
        "dtravel": PlatformFeeProfile(
            guest_fee_pct=0, host_commission_pct=5.9, vat_pct=6, income_tax_pct=15, discount_padding_pct=20
        ),
    }


class Multipliers(FrozenSchema):
    weekday: float = Field(default=1.0, ge=0.0)
    weekend: float = Field(default=1.2, ge=0.0)
    holiday: float = Field(default=1.4, ge=0.0)


class Seasonality(FrozenSchema):
    types: Tuple[str, ...] = DEFAULT_SEASONS
    months: Dict[str, Tuple[str, ...]] = Field(default_factory=lambda: dict(DEFAULT_SEASON_MONTHS))
    multipliers: Multipliers = Field(default_factory=Multipliers)


class PerYearOccupancy(FrozenSchema):
    mode: Literal["perYear"] = "perYear"
    per_year_pct: Percent = DEFAULT_OCCUPANCY_PCT


class PerSeasonOccupancy(FrozenSchema):
    mode: Literal["perSeason"] = "perSeason"
    per_season_pct: Dict[str, Percent] = Field(default_factory=lambda: dict(DEFAULT_SEASON_OCCUPANCY))


class PerMonthOccupancy(FrozenSchema):
    mode: Literal["perMonth"] = "perMonth"
    per_month_pct: Dict[str, Percent] = Field(default_factory=dict)


OccupancySpec = Annotated[
    Union[PerYearOccupancy, PerSeasonOccupancy, PerMonthOccupancy],
    Field(discriminator="mode"),
]


class YearNetGoal(FrozenSchema):
    mode: Literal["year"] = "year"
    per_year_net: float = 40000.0


class MonthNetGoal(FrozenSchema):
    mode: Literal["month"] = "month"
    per_month_net: float = 3500.0


class PerSeasonNetGoal(FrozenSchema):
    mode: Literal["perSeason"] = "perSeason"
    per_season_net: Dict[str, float] = Field(default_factory=dict)


NetGoalSpec = Annotated[
    Union[YearNetGoal, MonthNetGoal, PerSeasonNetGoal],
    Field(discriminator="mode"),
]


class BookingSplit(FrozenSchema):
    weekday: Fraction = 0.7
    weekend: Fraction = 0.25
    holiday: Fraction = 0.05

    @property
    def total(self) -> float:
        return self.weekday + self.weekend + self.holiday


def _default_currency() -> str:
    return get_settings().default_currency


def _current_year() -> int:
    return date.today().year


class Scenario(FrozenSchema):
    """Every input the engine reads, captured as one snapshot."""

    currency: str = Field(default_factory=_default_currency)
    platforms: Dict[PlatformKey, PlatformFeeProfile] = Field(default_factory=default_platform_profiles)
    seasonality: Seasonality = Field(default_factory=Seasonality)
    occupancy: OccupancySpec = Field(default_factory=PerSeasonOccupancy)
    net_goal: NetGoalSpec = Field(default_factory=YearNetGoal)
    split: BookingSplit = Field(default_factory=BookingSplit)
    holidays: Optional[HolidayCalendar] = None
    year: int = Field(default_factory=_current_year)

    @property
    def calendar_year(self) -> int:
        if self.holidays is not None:
            return self.holidays.settings.year
        return self.year


class PriceRow(FrozenSchema):
    season: str
    day_type: DayType
    platform: PlatformKey
    dp: int
    gross: int
    guest_price: int
    net: int


class PreviewPrices(FrozenSchema):
    gross: int
    guest_price: int
    net: int


class Override(FrozenSchema):
    gross_value: float = Field(ge=0.0)
    locked: bool = True


class OverrideEntry(FrozenSchema):
    platform: PlatformKey
    season: str
    day_type: DayType
    gross_value: float
    locked: bool = True


OverrideKey = Tuple[str, str, str]


def override_key(platform: str, season: str, day_type: str) -> OverrideKey:
    return (platform, season, day_type)


class DerivedState(FrozenSchema):
    year: int
    season_days: Dict[str, int]
    booked_nights: Dict[str, int]
    nights_by_season_day: Dict[str, Dict[DayType, int]]
    season_net_targets: Dict[str, float]
    per_night_net_targets: Dict[str, Dict[DayType, int]]
    price_table: Tuple[PriceRow, ...]


class TotalsBucket(BaseSchema):
    nights: int = 0
    gross: int = 0
    guest: int = 0
    net: int = 0


class PlatformTotals(BaseSchema):
    platform: PlatformKey
    by_season: Dict[str, TotalsBucket]
    grand: TotalsBucket


class ExportRecord(FrozenSchema):
    platform: str
    season: str
    day_type: DayType
    dp: int
    gross: int
    guest_price: int
    net: int
    nights: int
    gross_total: int
    guest_total: int
    net_total: int


class PriceTableView(BaseSchema):
    platform: PlatformKey
    platform_label: str
    currency: str
    rows: List[PriceRow]
    totals: PlatformTotals
    records: List[ExportRecord]
