# © 2026 Aparajita Parihar. All rights reserved.
# CampusLens Platform — Tests for the intervention composition engine

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from core import composition as comp
from config.constants import MAX_REDUCTION_FRACTION


# ─────────────────────────────────────────────────────────────────────────────
# 1. Clamping & guarded division
# ─────────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("value,expected", [(-5, 0.0), (0, 0.0), (42.5, 42.5), (100, 100.0), (250, 100.0)])
def test_clamp_funding(value, expected):
    assert comp.clamp_funding(value) == expected


def test_clamp_nan_uses_default():
    assert comp.clamp(float("nan"), 0.0, 10.0, default=5.0) == 5.0
    assert comp.clamp(None, 2.0, 10.0) == 2.0


def test_funding_fraction():
    assert comp.funding_fraction(50) == pytest.approx(0.5)
    assert comp.funding_fraction(150) == 1.0


@pytest.mark.parametrize("num,den,default,expected", [
    (10, 2, 0.0, 5.0),
    (10, 0, 0.0, 0.0),
    (10, 0, None, None),
    (float("inf"), 1, 0.0, 0.0),
])
def test_safe_divide(num, den, default, expected):
    assert comp.safe_divide(num, den, default) == expected


# ─────────────────────────────────────────────────────────────────────────────
# 2. Additive reduction
# ─────────────────────────────────────────────────────────────────────────────
def test_additive_reduction_empty_is_zero():
    assert comp.additive_reduction([], 1.0) == 0.0


def test_additive_reduction_sums_factors():
    assert comp.additive_reduction([0.15, 0.12, 0.08], 0.5) == pytest.approx(0.175)


def test_additive_reduction_is_clamped():
    """Factors that sum past 100% stop at the cap instead of going negative."""
    assert comp.additive_reduction([0.6, 0.6], 1.0) == MAX_REDUCTION_FRACTION
    assert comp.additive_reduction([0.6, 0.6], 1.0, cap=0.8) == 0.8


def test_additive_reduction_clamps_fraction():
    assert comp.additive_reduction([0.2], 3.0) == pytest.approx(0.2)
    assert comp.additive_reduction([0.2], -1.0) == 0.0


# ─────────────────────────────────────────────────────────────────────────────
# 3. Shares
# ─────────────────────────────────────────────────────────────────────────────
def test_normalise_shares_sums_to_100():
    shares = comp.normalise_shares({"a": 1, "b": 3})
    assert shares == {"a": pytest.approx(25.0), "b": pytest.approx(75.0)}


def test_normalise_shares_zero_total_splits_evenly():
    assert comp.normalise_shares({"a": 0, "b": 0}) == {"a": 50.0, "b": 50.0}
    assert comp.normalise_shares({}) == {}


def test_multiplicative_shares_no_funding_keeps_base():
    base = {"labs": 35.0, "admin": 65.0}
    shares = comp.multiplicative_shares(base, [{"labs": 0.5}], 0.0)
    assert shares["labs"] == pytest.approx(35.0)


def test_multiplicative_shares_shift_toward_untouched_categories():
    base = {"labs": 50.0, "admin": 50.0}
    shares = comp.multiplicative_shares(base, [{"labs": 0.5}], 1.0)
    # labs 25, admin 50 → renormalised
    assert shares["labs"] == pytest.approx(100 / 3)
    assert sum(shares.values()) == pytest.approx(100.0)


def test_multiplicative_shares_floor():
    base = {"organic": 50.0, "paper": 50.0}
    shares = comp.multiplicative_shares(base, [{"organic": 0.0}], 1.0, floor_ratio=0.3)
    assert shares["organic"] == pytest.approx(15 / 65 * 100)


def test_multiplicative_shares_ignore_unknown_categories():
    base = {"a": 60.0, "b": 40.0}
    shares = comp.multiplicative_shares(base, [{"zzz": 0.1}], 1.0)
    assert shares == {"a": pytest.approx(60.0), "b": pytest.approx(40.0)}


# ─────────────────────────────────────────────────────────────────────────────
# 4. Boosted shares & offsets
# ─────────────────────────────────────────────────────────────────────────────
def test_governing_boost_sums_enabled_weights():
    weights = {"greywater": 0.5, "rainwater": 1 / 3, "efficiency": 1 / 6}
    assert comp.governing_boost(weights, ["greywater"]) == pytest.approx(0.5)
    assert comp.governing_boost(weights, weights) == pytest.approx(1.0)
    assert comp.governing_boost(weights, []) == 0.0


def test_governing_boost_capped_at_one():
    assert comp.governing_boost({"a": 0.8, "b": 0.8}, ["a", "b"]) == 1.0


@pytest.mark.parametrize("fraction,boost,expected", [
    (0.0, 1.0, 15.0),
    (1.0, 1.0, 65.0),
    (0.5, 1.0, 40.0),
    (1.0, 0.0, 15.0),
    (1.0, 0.5, 40.0),
])
def test_boosted_share(fraction, boost, expected):
    assert comp.boosted_share(15.0, 65.0, fraction, boost) == pytest.approx(expected)


def test_floored_offset():
    assert comp.floored_offset(100.0, [30.0, 20.0], 0.2) == pytest.approx(50.0)
    assert comp.floored_offset(100.0, [90.0, 20.0], 0.2) == pytest.approx(20.0)
    assert not math.isnan(comp.floored_offset(0.0, [], 0.2))
