from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from netrate.schemas.pricing import (
    DayType,
    ExportRecord,
    PlatformTotals,
    PriceRow,
    TotalsBucket,
    platform_label,
)

NightsBySeasonDay = Mapping[str, Mapping[str, int]]


def _nights(nights_by_season_day: NightsBySeasonDay, season: str, day_type: str) -> int:
    return nights_by_season_day.get(season, {}).get(day_type, 0)


def rows_for_platform(rows: Iterable[PriceRow], platform: str) -> List[PriceRow]:
    return [row for row in rows if row.platform == platform]


def find_row(
    rows: Iterable[PriceRow], platform: str, season: str, day_type: DayType
) -> Optional[PriceRow]:
    for row in rows:
        if row.platform == platform and row.season == season and row.day_type == day_type:
            return row
    return None


def aggregate_totals(
    rows: Iterable[PriceRow],
    nights_by_season_day: NightsBySeasonDay,
    platform: str,
    seasons: Sequence[str],
) -> PlatformTotals:
    """Per-season and whole-year totals for one platform, weighting each row by its nights."""
    by_season: Dict[str, TotalsBucket] = {season: TotalsBucket() for season in seasons}
    grand = TotalsBucket()
    for row in rows_for_platform(rows, platform):
        nights = _nights(nights_by_season_day, row.season, row.day_type)
        bucket = by_season.setdefault(row.season, TotalsBucket())
        for target in (bucket, grand):
            target.nights += nights
            target.gross += row.gross * nights
            target.guest += row.guest_price * nights
            target.net += row.net * nights
    return PlatformTotals(platform=platform, by_season=by_season, grand=grand)


def build_export_records(
    rows: Iterable[PriceRow],
    nights_by_season_day: NightsBySeasonDay,
    platform: str,
) -> List[ExportRecord]:
    label = platform_label(platform)
    records: List[ExportRecord] = []
    for row in rows_for_platform(rows, platform):
        nights = _nights(nights_by_season_day, row.season, row.day_type)
        records.append(
            ExportRecord(
                platform=label,
                season=row.season,
                day_type=row.day_type,
                dp=row.dp,
                gross=row.gross,
                guest_price=row.guest_price,
                net=row.net,
                nights=nights,
                gross_total=row.gross * nights,
                guest_total=row.guest_price * nights,
                net_total=row.net * nights,
            )
        )
    return records
