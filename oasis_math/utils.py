################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Scalar helpers and tolerance access shared by all math types."""

from __future__ import annotations

import math

from oasis_math.config.math_params import DEFAULT_EPSILON
from oasis_math.config.math_settings import get_epsilon
from oasis_math.config.math_settings import set_epsilon


__all__ = [
    "DEFAULT_EPSILON",
    "NORMALIZE_MIN_LENGTH",
    "deg_to_rad",
    "euclidean_modulo",
    "get_epsilon",
    "ieee_div",
    "ieee_sqrt",
    "inverse_lerp",
    "lerp",
    "rad_to_deg",
    "round_half_up",
    "safe_acos",
    "set_epsilon",
]


# Vectors and quaternions at or below this length normalize to zero
NORMALIZE_MIN_LENGTH: float = 1e-5


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180.0


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180.0 / math.pi


def lerp(a: float, b: float, t: float) -> float:
    """
    Linearly interpolate between two scalars

    t is not clamped, so values outside [0, 1] extrapolate.
    """
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, v: float) -> float:
    """
    Return the t for which lerp(a, b, t) == v

    When a and b are within epsilon of each other the interpolation is
    undefined and a is returned.
    """
    d: float = b - a
    if abs(d) < get_epsilon():
        return a
    return (v - a) / d


def euclidean_modulo(n: float, m: float) -> float:
    """Return n modulo m with the sign of m."""
    return _fmod(_fmod(n, m) + m, m)


def _fmod(n: float, m: float) -> float:
    if m == 0.0:
        return math.nan
    return math.fmod(n, m)


def ieee_div(n: float, d: float) -> float:
    """
    Divide following IEEE-754 rules

    A zero denominator yields a signed infinity, or NaN for 0 / 0, instead
    of raising ZeroDivisionError.
    """
    if d != 0.0:
        return n / d
    if n == 0.0 or math.isnan(n):
        return math.nan
    # Sign of the result follows the sign of both operands, including -0.0
    return math.copysign(math.inf, n) * math.copysign(1.0, d)


def ieee_sqrt(x: float) -> float:
    """Square root that returns NaN for negative input."""
    if x < 0.0:
        return math.nan
    return math.sqrt(x)


def safe_acos(x: float) -> float:
    """Arc cosine with the argument clamped to [-1, 1]."""
    if math.isnan(x):
        return math.nan
    return math.acos(min(1.0, max(-1.0, x)))


def round_half_up(x: float) -> float:
    """Round to the nearest integer, with halves rounding toward +inf."""
    return float(math.floor(x + 0.5)) if math.isfinite(x) else float(x)
