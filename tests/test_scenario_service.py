from __future__ import annotations

import json
from pathlib import Path

import pytest

from netrate.core.errors import BadRequestError, NotFoundError
from netrate.schemas.holidays import HolidayCalendar, HolidaySettings
from netrate.schemas.pricing import (
    FeeField,
    MonthNetGoal,
    PerMonthOccupancy,
    PerYearOccupancy,
    Scenario,
)
from netrate.services.scenario_service import ScenarioService


@pytest.fixture()
def service() -> ScenarioService:
    return ScenarioService()


def test_parse_accepts_camel_case_payload(service: ScenarioService) -> None:
    scenario = service.parse(
        {
            "currency": "USD",
            "year": 2025,
            "occupancy": {"mode": "perYear", "perYearPct": 70},
            "netGoal": {"mode": "month", "perMonthNet": 2000},
            "platforms": {"airbnb": {"guestFeePct": 150, "hostCommissionPct": -2}},
        }
    )
    assert scenario.currency == "USD"
    assert scenario.occupancy == PerYearOccupancy(per_year_pct=70)
    assert scenario.net_goal == MonthNetGoal(per_month_net=2000)
    assert scenario.platforms["airbnb"].guest_fee_pct == 100
    assert scenario.platforms["airbnb"].host_commission_pct == 0
    assert list(scenario.platforms) == ["airbnb"]


def test_parse_clamps_split_fractions(service: ScenarioService) -> None:
    scenario = service.parse({"split": {"weekday": 1.7, "weekend": -0.2, "holiday": 0.05}})
    assert (scenario.split.weekday, scenario.split.weekend) == (1.0, 0.0)


def test_parse_reports_validation_errors(service: ScenarioService) -> None:
    with pytest.raises(BadRequestError) as exc_info:
        service.parse({"occupancy": {"mode": "perDecade"}})
    assert exc_info.value.code == "bad_request"
    assert exc_info.value.details["errors"]


def test_load_reads_a_dumped_scenario(service: ScenarioService, tmp_path: Path, single_season_scenario: Scenario) -> None:
    path = tmp_path / "scenario.json"
    path.write_text(single_season_scenario.model_dump_json(by_alias=True), encoding="utf-8")
    assert service.load(path) == single_season_scenario


def test_load_rejects_missing_and_malformed_files(service: ScenarioService, tmp_path: Path) -> None:
    with pytest.raises(BadRequestError):
        service.load(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(BadRequestError, match="not valid JSON"):
        service.load(broken)

    listing = tmp_path / "list.json"
    listing.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(BadRequestError, match="JSON object"):
        service.load(listing)


def test_fee_field_edits_are_clamped_to_one_decimal(service: ScenarioService, default_scenario: Scenario) -> None:
    updated = service.update_fee_field(default_scenario, "airbnb", FeeField.GUEST_FEE, "12.34")
    assert updated.platforms["airbnb"].guest_fee_pct == 12.3
    assert default_scenario.platforms["airbnb"].guest_fee_pct == 14

    assert service.update_fee_field(default_scenario, "vrbo", FeeField.VAT, 150).platforms["vrbo"].vat_pct == 100
    assert (
        service.update_fee_field(default_scenario, "vrbo", FeeField.DISCOUNT_PADDING, -3)
        .platforms["vrbo"]
        .discount_padding_pct
        == 0
    )


def test_non_numeric_fee_input_is_ignored(service: ScenarioService, default_scenario: Scenario) -> None:
    assert service.update_fee_field(default_scenario, "airbnb", FeeField.INCOME_TAX, "abc") is default_scenario
    assert service.update_fee_field(default_scenario, "airbnb", FeeField.INCOME_TAX, "") is default_scenario


def test_fee_edit_for_unknown_platform(service: ScenarioService, single_season_scenario: Scenario) -> None:
    with pytest.raises(NotFoundError):
        service.update_fee_field(single_season_scenario, "booking", FeeField.HOST_COMMISSION, 10)


def test_multiplier_and_split_edits_are_clamped(service: ScenarioService, default_scenario: Scenario) -> None:
    assert service.set_multiplier(default_scenario, "weekend", 5).seasonality.multipliers.weekend == 3.0
    assert service.set_multiplier(default_scenario, "holiday", "0.1").seasonality.multipliers.holiday == 0.5
    assert service.set_multiplier(default_scenario, "weekday", None) is default_scenario
    assert service.set_split_fraction(default_scenario, "holiday", 1.5).split.holiday == 1.0
    assert service.set_split_fraction(default_scenario, "weekday", "") is default_scenario


def test_season_months_are_parsed_from_text(service: ScenarioService, default_scenario: Scenario) -> None:
    updated = service.set_season_months(default_scenario, "Peak", " Jul, Aug,, ")
    assert updated.seasonality.months["Peak"] == ("Jul", "Aug")
    with pytest.raises(NotFoundError):
        service.set_season_months(default_scenario, "Monsoon", "Jun")


def test_mode_and_holiday_edits_replace_whole_sections(service: ScenarioService, default_scenario: Scenario) -> None:
    occupancy = PerMonthOccupancy(per_month_pct={"Jan": 10})
    assert service.set_occupancy(default_scenario, occupancy).occupancy == occupancy
    assert service.set_net_goal(default_scenario, MonthNetGoal()).net_goal.per_month_net == 3500

    calendar = HolidayCalendar(settings=HolidaySettings(year=2027))
    updated = service.set_holidays(default_scenario, calendar)
    assert updated.calendar_year == 2027
    assert default_scenario.calendar_year == 2025
