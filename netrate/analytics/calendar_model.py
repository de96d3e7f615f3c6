from __future__ import annotations

from typing import Dict, Iterable, Mapping

from netrate.shared.calendar import days_per_month


def season_day_count(
    season_months: Mapping[str, Iterable[str]],
    year: int,
    seasons: Iterable[str] | None = None,
) -> Dict[str, int]:
    """Calendar days covered by each season's months in ``year``.

    Unknown month tokens add nothing and an empty season counts 0 days. When
    ``seasons`` is given the result follows that order and includes seasons
    absent from the mapping.
    """
    lengths = days_per_month(year)
    names = list(seasons) if seasons is not None else list(season_months.keys())
    return {
        season: sum(lengths.get(token, 0) for token in season_months.get(season, ()))
        for season in names
    }
