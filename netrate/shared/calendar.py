from __future__ import annotations

from typing import Dict, Tuple

MONTH_TOKENS: Tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Per-month occupancy treats an unrecognised token as a 30-day month.
UNKNOWN_MONTH_DAYS = 30


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_per_month(year: int) -> Dict[str, int]:
    february = 29 if is_leap_year(year) else 28
    lengths = (31, february, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
    return dict(zip(MONTH_TOKENS, lengths))


def days_of_month(year: int, token: str) -> int:
    return days_per_month(year).get(token, UNKNOWN_MONTH_DAYS)
