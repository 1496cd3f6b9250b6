"""Display formatting for derived metrics.

Pure presentation: every function takes an unrounded value and returns a
string. ``None``, NaN and infinities render as ``"N/A"``; rounding happens
here and nowhere upstream.
"""

from __future__ import annotations

import math
from typing import Optional

NA = "N/A"
CURRENCY_SYMBOL = "€"

_COMPACT_STEPS = ((1, ""), (1_000, "k"), (1_000_000, "M"), (1_000_000_000, "B"))


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return not math.isfinite(float(value))
    except (TypeError, ValueError):
        return True


def format_number(value: Optional[float], decimals: int = 0) -> str:
    """Thousands-separated number, e.g. ``1,234,567``."""
    if _is_missing(value):
        return NA
    return f"{float(value):,.{decimals}f}"


def format_compact(value: Optional[float], decimals: int = 1) -> str:
    """Short form with a k/M/B suffix, e.g. ``18.5M``; sign is kept."""
    if _is_missing(value):
        return NA
    value = float(value)
    magnitude = abs(value)
    step = 0
    while step + 1 < len(_COMPACT_STEPS) and magnitude >= _COMPACT_STEPS[step + 1][0]:
        step += 1
    # Rounding may carry into the next unit: 999_960 is 1.0M, not 1000.0k
    while step + 1 < len(_COMPACT_STEPS):
        places = decimals if step else 0
        if round(magnitude / _COMPACT_STEPS[step][0], places) < 1000:
            break
        step += 1
    threshold, suffix = _COMPACT_STEPS[step]
    return f"{value / threshold:.{decimals if step else 0}f}{suffix}"


def format_currency(value: Optional[float], compact: bool = False, decimals: int = 0) -> str:
    """Euro amount, e.g. ``€2,109,000`` or ``-€1.2M`` when *compact*."""
    if _is_missing(value):
        return NA
    value = float(value)
    sign = "-" if value < 0 else ""
    body = format_compact(abs(value)) if compact else format_number(abs(value), decimals)
    return f"{sign}{CURRENCY_SYMBOL}{body}"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    """*value* is already in percent, e.g. 42.345 → ``42.3%``."""
    if _is_missing(value):
        return NA
    return f"{float(value):.{decimals}f}%"


def format_unit(value: Optional[float], unit: str, decimals: int = 0) -> str:
    if _is_missing(value):
        return NA
    text = format_number(value, decimals)
    return f"{text} {unit}" if unit else text


def format_years(value: Optional[float]) -> str:
    if _is_missing(value):
        return NA
    return f"{float(value):.1f} yrs"


_FORMATTERS = {
    "number":   lambda v, unit: format_unit(v, unit),
    "currency": lambda v, unit: format_currency(v),
    "percent":  lambda v, unit: format_percent(v),
    "compact":  lambda v, unit: f"{format_compact(v)} {unit}".rstrip() if not _is_missing(v) else NA,
    "years":    lambda v, unit: format_years(v),
}


def format_metric(value: Optional[float], kind: str = "number", unit: str = "") -> str:
    """
    Format *value* by display kind (number, currency, percent, compact, years).

    Raises:
        ValueError: If *kind* is unknown.
    """
    try:
        formatter = _FORMATTERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown format kind '{kind}'. Available kinds: {list(_FORMATTERS)}"
        )
    return formatter(value, unit)
