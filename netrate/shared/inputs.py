from __future__ import annotations

import math
from typing import Optional, Tuple

from netrate.analytics.rounding import round_half_up
from netrate.schemas.pricing import clamp


def parse_number(value: object) -> Optional[float]:
    """Finite float from user input, or ``None`` when the input is not a usable number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def clamp_percent_input(value: float) -> float:
    # Percent fields hold one decimal place.
    return round_half_up(clamp(value, 0.0, 100.0) * 10) / 10


def parse_month_list(text: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in text.split(",") if part.strip())
