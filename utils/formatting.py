"""
utils/formatting.py
===================
Display formatting for results: localized integers and rubles (ru-RU
conventions) and fixed-precision decimals.
"""
from __future__ import annotations

import math
from typing import Optional

from config import CURRENCY_SYMBOL

NBSP = "\u00a0"
MIN_GROUPING = 10000   # ru-RU leaves four-digit numbers ungrouped


def round_half_up(x: Optional[float]) -> int:
    """Nearest integer, halves rounded towards +∞; None/NaN → 0."""
    if x is None or not math.isfinite(x):
        return 0
    return int(math.floor(x + 0.5))


def fmt_int(x: Optional[float]) -> str:
    """1425 → '1425', 27039.4 → '27 039' (no-break space grouping)."""
    n = round_half_up(x)
    if abs(n) < MIN_GROUPING:
        return str(n)
    return f"{n:,}".replace(",", NBSP)


def fmt_rub(x: Optional[float]) -> str:
    """Whole rubles with the currency sign: '12 345 678 ₽'."""
    return f"{fmt_int(x)}{NBSP}{CURRENCY_SYMBOL}"


def fmt_fixed(x: Optional[float], digits: int = 2) -> str:
    if x is None or not math.isfinite(x):
        x = 0.0
    return f"{x:.{digits}f}"
