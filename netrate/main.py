from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from netrate.analytics.export import export_filename
from netrate.core.config import get_settings
from netrate.core.errors import AppError, BadRequestError, app_error_envelope, validation_error_envelope
from netrate.core.logging import configure_logging
from netrate.repositories.holiday_repository import SeedHolidayRepository
from netrate.schemas.holidays import DEFAULT_COUNTRIES, HolidayCalendar, HolidaySettings
from netrate.schemas.pricing import (
    DAY_TYPES,
    PLATFORM_KEYS,
    OverrideEntry,
    PlatformTotals,
    PriceTableView,
    Scenario,
)
from netrate.services.holiday_service import HolidayService
from netrate.services.override_service import OverrideService
from netrate.services.pricing_service import PricingService
from netrate.services.scenario_service import ScenarioService
from netrate.shared.money import format_money
from netrate.shared.response import ResponseEnvelope, build_meta

logger = logging.getLogger(__name__)

_override_entries = TypeAdapter(List[OverrideEntry])


def load_overrides(path: Optional[str]) -> OverrideService:
    if not path:
        return OverrideService()
    try:
        with open(path, "r", encoding="utf-8") as overrides_file:
            payload = json.load(overrides_file)
    except (OSError, json.JSONDecodeError) as exc:
        raise BadRequestError(f"Cannot read overrides file: {path}") from exc
    return OverrideService.from_entries(_override_entries.validate_python(payload))


def load_scenario(path: Optional[str]) -> Scenario:
    if not path:
        return Scenario()
    return ScenarioService().load(path)


def render_summary(view: PriceTableView) -> str:
    lines = [f"Totals for {view.platform_label} ({view.currency})"]
    for season, bucket in view.totals.by_season.items():
        lines.append(
            f"{season}: {bucket.nights} nights, gross {format_money(view.currency, bucket.gross)}, "
            f"guest {format_money(view.currency, bucket.guest)}, net {format_money(view.currency, bucket.net)}"
        )
    grand = view.totals.grand
    lines.append(
        f"Year: {grand.nights} nights, gross {format_money(view.currency, grand.gross)}, "
        f"guest {format_money(view.currency, grand.guest)}, net {format_money(view.currency, grand.net)}"
    )
    return "\n".join(lines)


def run_price_table(args: argparse.Namespace) -> None:
    scenario = load_scenario(args.scenario)
    overrides = load_overrides(args.overrides)
    service = PricingService()
    view = service.price_view(scenario, args.platform, overrides.snapshot())
    if args.output:
        output_path = Path(args.output)
        if output_path.is_dir():
            output_path = output_path / export_filename(args.platform)
        with open(output_path, "w", encoding="utf-8", newline="") as csv_file:
            service.export_csv(view, csv_file)
        logger.info("wrote %s", output_path)
        return
    service.export_csv(view, sys.stdout)


def run_summary(args: argparse.Namespace) -> None:
    scenario = load_scenario(args.scenario)
    overrides = load_overrides(args.overrides)
    view = PricingService().price_view(scenario, args.platform, overrides.snapshot())
    if not args.json:
        print(render_summary(view))
        return
    envelope = ResponseEnvelope[PlatformTotals](
        data=view.totals,
        meta=build_meta(scenario.calendar_year, currency=scenario.currency, platform=args.platform),
    )
    print(envelope.model_dump_json(by_alias=True, indent=2))


def run_preview(args: argparse.Namespace) -> None:
    scenario = load_scenario(args.scenario)
    prices = PricingService().preview(scenario, args.platform, args.day_type, args.dp)
    print(prices.model_dump_json(by_alias=True))


def run_holidays(args: argparse.Namespace) -> None:
    settings = HolidaySettings(
        year=args.year,
        active_countries=tuple(args.countries),
        max_buffer_days=args.max_buffer_days,
        apply_to_observed=not args.skip_observed,
    )
    calendar = HolidayService(SeedHolidayRepository()).build_calendar(settings)
    envelope = ResponseEnvelope[HolidayCalendar](data=calendar, meta=build_meta(args.year, source="seed_holidays"))
    print(envelope.model_dump_json(by_alias=True, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netrate", description="Turn a net income goal into platform nightly prices."
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    table = subparsers.add_parser("price-table", help="Export the price table for one platform as CSV.")
    table.add_argument("scenario", nargs="?", help="Scenario JSON file (defaults when omitted)")
    table.add_argument("--platform", choices=PLATFORM_KEYS, default="airbnb")
    table.add_argument("--overrides", help="JSON list of gross overrides")
    table.add_argument("--output", help="CSV file path or an existing directory")
    table.set_defaults(handler=run_price_table)

    summary = subparsers.add_parser("summary", help="Per-season and year totals for one platform.")
    summary.add_argument("scenario", nargs="?", help="Scenario JSON file (defaults when omitted)")
    summary.add_argument("--platform", choices=PLATFORM_KEYS, default="airbnb")
    summary.add_argument("--overrides", help="JSON list of gross overrides")
    summary.add_argument("--json", action="store_true", help="Print a JSON envelope instead of text")
    summary.set_defaults(handler=run_summary)

    preview = subparsers.add_parser("preview", help="Fee stack applied to a fixed daily price.")
    preview.add_argument("scenario", nargs="?", help="Scenario JSON file (defaults when omitted)")
    preview.add_argument("--platform", choices=PLATFORM_KEYS, default="airbnb")
    preview.add_argument("--day-type", choices=DAY_TYPES, default="weekday")
    preview.add_argument("--dp", type=float, default=None, help="Daily price (default from settings)")
    preview.set_defaults(handler=run_preview)

    holidays = subparsers.add_parser("holidays", help="Merged holiday calendar from the seed data.")
    holidays.add_argument("--year", type=int, required=True)
    holidays.add_argument("--countries", nargs="+", default=list(DEFAULT_COUNTRIES))
    holidays.add_argument("--max-buffer-days", type=int, default=get_settings().default_max_buffer_days)
    holidays.add_argument("--skip-observed", action="store_true", help="Ignore observed-day records")
    holidays.set_defaults(handler=run_holidays)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)
    logger.debug("%s %s (%s)", settings.app_name, args.command, settings.environment)
    try:
        args.handler(args)
    except AppError as exc:
        print(app_error_envelope(exc).model_dump_json(), file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(validation_error_envelope(exc).model_dump_json(), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
