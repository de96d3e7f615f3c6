from __future__ import annotations

from typing import Iterable, List, Mapping

from netrate.analytics.fee_model import FeeRates, prices_from_gross
from netrate.analytics.rounding import round_to_even
from netrate.schemas.pricing import Override, OverrideKey, PlatformFeeProfile, PriceRow, override_key


def apply_override(row: PriceRow, override: Override, profile: PlatformFeeProfile) -> PriceRow:
    prices = prices_from_gross(round_to_even(override.gross_value), FeeRates.from_profile(profile))
    return row.model_copy(
        update={"gross": prices.gross, "guest_price": prices.guest_price, "net": prices.net}
    )


def apply_overrides(
    rows: Iterable[PriceRow],
    overrides: Mapping[OverrideKey, Override],
    platforms: Mapping[str, PlatformFeeProfile],
) -> List[PriceRow]:
    """Swap in locked gross overrides; DP and every other cell stay as derived."""
    result: List[PriceRow] = []
    for row in rows:
        override = overrides.get(override_key(row.platform, row.season, row.day_type))
        profile = platforms.get(row.platform)
        if override is None or not override.locked or profile is None:
            result.append(row)
            continue
        result.append(apply_override(row, override, profile))
    return result
