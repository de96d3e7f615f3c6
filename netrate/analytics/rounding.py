from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    # Halves always move towards +inf, never to the nearest even integer.
    return math.floor(value + 0.5)


def round_to_even(value: float) -> int:
    rounded = round_half_up(value)
    return rounded if rounded % 2 == 0 else rounded + 1


def round_up(value: float) -> int:
    return math.ceil(value)
