# ═══════════════════════════════════════════════════════════════════════════════
# CampusLens Platform — Intervention Composition Engine
# © 2026 Aparajita Parihar. All rights reserved.
#
# Combines independently-enabled interventions into aggregate effects:
#   • additive_reduction      total-use reduction (Σ factor × funding, clamped)
#   • multiplicative_shares   category split (Π of per-intervention multipliers,
#                             floored, renormalised to 100)
#   • boosted_share           baseline → ceiling interpolation gated by governors
#   • floored_offset          baseline minus offsets, never below a floor
#
# Pure functions only — no Streamlit, no I/O. Inputs outside their declared
# range are clamped here as well as at the slider boundary.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import math
from typing import Iterable, Mapping

from config.constants import FUNDING_MAX, FUNDING_MIN, MAX_REDUCTION_FRACTION


def clamp(value: float, lower: float, upper: float, default: float | None = None) -> float:
    """Clamp *value* into [lower, upper]; NaN/None map to *default* (or *lower*)."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return lower if default is None else default
    return max(lower, min(upper, float(value)))


def clamp_funding(level: float) -> float:
    """Funding / adoption level clamped to [0, 100] percent."""
    return clamp(level, FUNDING_MIN, FUNDING_MAX)


def funding_fraction(level: float) -> float:
    """Funding level as a 0–1 fraction."""
    return clamp_funding(level) / 100.0


def safe_divide(numerator: float, denominator: float, default: float | None = 0.0) -> float | None:
    """Divide, returning *default* for a zero denominator or a non-finite result."""
    if not denominator:
        return default
    result = numerator / denominator
    if not math.isfinite(result):
        return default
    return result


# ─────────────────────────────────────────────────────────────────────────────
# ADDITIVE REDUCTION
# ─────────────────────────────────────────────────────────────────────────────

def additive_reduction(
    factors: Iterable[float],
    fraction: float,
    cap: float = MAX_REDUCTION_FRACTION,
) -> float:
    """Aggregate reduction fraction Σ(factor × fraction), clamped to [0, cap].

    Factors are relative to the pre-intervention baseline, so they add rather
    than compound. An empty *factors* iterable yields exactly 0.0.
    """
    fraction = clamp(fraction, 0.0, 1.0)
    total = sum(f * fraction for f in factors)
    return clamp(total, 0.0, cap)


# ─────────────────────────────────────────────────────────────────────────────
# MULTIPLICATIVE SHARES
# ─────────────────────────────────────────────────────────────────────────────

def normalise_shares(values: Mapping[str, float]) -> dict[str, float]:
    """Rescale *values* so they sum to 100. A zero total splits evenly."""
    if not values:
        return {}
    total = sum(values.values())
    if total <= 0:
        even = 100.0 / len(values)
        return {k: even for k in values}
    return {k: v / total * 100.0 for k, v in values.items()}


def multiplicative_shares(
    base_shares: Mapping[str, float],
    effects: Iterable[Mapping[str, float]],
    fraction: float,
    floor_ratio: float = 0.0,
) -> dict[str, float]:
    """Apply per-intervention share multipliers and renormalise to 100.

    Each mapping in *effects* gives, per category, the share multiplier the
    intervention reaches at full funding (1.0 = no effect). At partial
    funding the multiplier is ``1 − (1 − effect) × fraction``. Categories an
    intervention does not name are untouched by it. With ``floor_ratio`` set,
    no category falls below that fraction of its base share before
    renormalisation.
    """
    fraction = clamp(fraction, 0.0, 1.0)
    adjusted = dict(base_shares)
    for effect in effects:
        for category, factor in effect.items():
            if category in adjusted:
                adjusted[category] *= 1.0 - (1.0 - factor) * fraction
    if floor_ratio:
        adjusted = {
            k: max(v, base_shares[k] * floor_ratio) for k, v in adjusted.items()
        }
    return normalise_shares(adjusted)


# ─────────────────────────────────────────────────────────────────────────────
# BOOSTED SHARES
# ─────────────────────────────────────────────────────────────────────────────

def governing_boost(weights: Mapping[str, float], enabled: Iterable[str]) -> float:
    """Sum of governor weights for enabled interventions, capped at 1."""
    enabled = set(enabled)
    return min(1.0, sum(w for iv_id, w in weights.items() if iv_id in enabled))


def boosted_share(base: float, ceiling: float, fraction: float, boost: float) -> float:
    """Linear interpolation from *base* towards *ceiling*."""
    fraction = clamp(fraction, 0.0, 1.0)
    boost = clamp(boost, 0.0, 1.0)
    return base + (ceiling - base) * fraction * boost


# ─────────────────────────────────────────────────────────────────────────────
# OFFSETS
# ─────────────────────────────────────────────────────────────────────────────

def floored_offset(baseline: float, offsets: Iterable[float], floor_ratio: float) -> float:
    """``baseline − Σ offsets``, never below ``baseline × floor_ratio``."""
    return max(baseline - sum(offsets), baseline * floor_ratio)
