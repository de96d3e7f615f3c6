from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from netrate.core.errors import BadRequestError, NotFoundError
from netrate.schemas.holidays import HolidayCalendar
from netrate.schemas.pricing import (
    BookingSplit,
    FEE_FIELD_LABELS,
    DayType,
    FeeField,
    NetGoalSpec,
    OccupancySpec,
    Scenario,
    clamp,
)
from netrate.shared.inputs import clamp_percent_input, parse_month_list, parse_number

logger = logging.getLogger(__name__)

MULTIPLIER_RANGE = (0.5, 3.0)
SPLIT_RANGE = (0.0, 1.0)


class ScenarioService:
    """Builds and edits immutable scenario snapshots at the input boundary.

    Every edit returns a new ``Scenario``; input that is not a number leaves the
    scenario untouched and out-of-range numbers are clamped.
    """

    def parse(self, payload: Dict[str, Any]) -> Scenario:
        try:
            return Scenario.model_validate(payload)
        except ValidationError as exc:
            raise BadRequestError(
                "Invalid scenario",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc

    def load(self, path: Union[str, Path]) -> Scenario:
        try:
            with open(path, "r", encoding="utf-8") as scenario_file:
                payload = json.load(scenario_file)
        except OSError as exc:
            raise BadRequestError(f"Cannot read scenario file: {path}") from exc
        except json.JSONDecodeError as exc:
            raise BadRequestError(f"Scenario file is not valid JSON: {exc.msg}") from exc
        if not isinstance(payload, dict):
            raise BadRequestError("Scenario file must contain a JSON object")
        return self.parse(payload)

    def update_fee_field(self, scenario: Scenario, platform: str, field: FeeField, raw_value: object) -> Scenario:
        profile = scenario.platforms.get(platform)
        if profile is None:
            raise NotFoundError(f"Unknown platform: {platform}")
        value = parse_number(raw_value)
        if value is None:
            return scenario
        platforms = dict(scenario.platforms)
        platforms[platform] = profile.model_copy(update={field.value: clamp_percent_input(value)})
        logger.debug(
            "%s for %s set to %s", FEE_FIELD_LABELS[field], platform, getattr(platforms[platform], field.value)
        )
        return scenario.model_copy(update={"platforms": platforms})

    def set_multiplier(self, scenario: Scenario, day_type: DayType, raw_value: object) -> Scenario:
        value = parse_number(raw_value)
        if value is None:
            return scenario
        seasonality = scenario.seasonality
        multipliers = seasonality.multipliers.model_copy(update={day_type: clamp(value, *MULTIPLIER_RANGE)})
        return scenario.model_copy(
            update={"seasonality": seasonality.model_copy(update={"multipliers": multipliers})}
        )

    def set_season_months(self, scenario: Scenario, season: str, text: str) -> Scenario:
        seasonality = scenario.seasonality
        if season not in seasonality.types:
            raise NotFoundError(f"Unknown season: {season}")
        months = dict(seasonality.months)
        months[season] = parse_month_list(text)
        return scenario.model_copy(update={"seasonality": seasonality.model_copy(update={"months": months})})

    def set_split_fraction(self, scenario: Scenario, day_type: DayType, raw_value: object) -> Scenario:
        value = parse_number(raw_value)
        if value is None:
            return scenario
        split: BookingSplit = scenario.split.model_copy(update={day_type: clamp(value, *SPLIT_RANGE)})
        return scenario.model_copy(update={"split": split})

    def set_occupancy(self, scenario: Scenario, occupancy: OccupancySpec) -> Scenario:
        return scenario.model_copy(update={"occupancy": occupancy})

    def set_net_goal(self, scenario: Scenario, goal: NetGoalSpec) -> Scenario:
        return scenario.model_copy(update={"net_goal": goal})

    def set_holidays(self, scenario: Scenario, calendar: HolidayCalendar) -> Scenario:
        return scenario.model_copy(update={"holidays": calendar})
