################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for vec2 operations."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_math.math_types import NumberArray
from oasis_math.vec2_impl import Vec2Api
from oasis_math.vec2_impl import get_api


vec2: Vec2Api = get_api("float64")
vec2n: Vec2Api = get_api("zero_array")


def test_create_defaults_to_zero() -> None:
    """Checks create fills missing components with zero."""
    v: NDArray[np.float64] = vec2.create()
    assert v.dtype == np.float64
    assert list(v) == [0.0, 0.0]
    assert list(vec2.create(1.0)) == [1.0, 0.0]
    assert vec2.from_values(1.0, 2.0)[1] == 2.0


def test_dst_is_returned_and_matches_allocating_path() -> None:
    """Checks writing into dst gives the same values as allocating."""
    a: NDArray[np.float64] = vec2.create(1.0, 2.0)
    b: NDArray[np.float64] = vec2.create(3.0, -4.0)
    dst: NDArray[np.float64] = vec2.create()

    result: NDArray[np.float64] = vec2.add(a, b, dst)
    assert result is dst
    assert np.array_equal(result, vec2.add(a, b))

    result = vec2.lerp(a, b, 0.25, dst)
    assert result is dst
    assert np.array_equal(result, vec2.lerp(a, b, 0.25))


def test_arithmetic() -> None:
    """Checks component-wise arithmetic."""
    a: NumberArray = vec2n.create(1.0, 2.0)
    b: NumberArray = vec2n.create(3.0, 5.0)
    assert vec2n.add(a, b) == [4.0, 7.0]
    assert vec2n.sub(a, b) == [-2.0, -3.0]
    assert vec2n.multiply(a, b) == [3.0, 10.0]
    assert vec2n.divide(b, a) == [3.0, 2.5]
    assert vec2n.scale(a, 2.0) == [2.0, 4.0]
    assert vec2n.div_scalar(b, 2.0) == [1.5, 2.5]
    assert vec2n.add_scaled(a, b, 2.0) == [7.0, 12.0]
    assert vec2n.negate(a) == [-1.0, -2.0]
    assert vec2n.max(a, vec2n.create(0.0, 3.0)) == [1.0, 3.0]
    assert vec2n.min(a, vec2n.create(0.0, 3.0)) == [0.0, 2.0]


def test_division_by_zero_follows_ieee() -> None:
    """Checks dividing by zero gives infinities on list storage."""
    v: NumberArray = vec2n.create(1.0, 0.0)
    inv: NumberArray = vec2n.inverse(v)
    assert inv[0] == 1.0
    assert inv[1] == math.inf
    quotient: NumberArray = vec2n.div_scalar(v, 0.0)
    assert quotient[0] == math.inf
    assert math.isnan(quotient[1])


def test_rounding() -> None:
    """Checks ceil, floor and round including halves."""
    v: NumberArray = vec2n.create(1.5, -1.5)
    assert vec2n.ceil(v) == [2.0, -1.0]
    assert vec2n.floor(v) == [1.0, -2.0]
    assert vec2n.round(v) == [2.0, -1.0]
    assert vec2n.clamp(vec2n.create(-1.0, 3.0)) == [0.0, 1.0]
    assert vec2n.clamp(vec2n.create(-1.0, 3.0), -0.5, 2.0) == [-0.5, 2.0]


def test_length_and_distance() -> None:
    """Checks lengths and distances."""
    v: NumberArray = vec2n.create(3.0, 4.0)
    assert vec2n.length(v) == 5.0
    assert vec2n.len_sq(v) == 25.0
    assert vec2n.dist(v, vec2n.create(0.0, 0.0)) == 5.0
    assert vec2n.dist_sq(v, vec2n.create(3.0, 0.0)) == 16.0
    assert vec2n.dot(v, vec2n.create(1.0, 1.0)) == 7.0


def test_normalize() -> None:
    """Checks normalize produces unit vectors and zero for tiny input."""
    n: NumberArray = vec2n.normalize(vec2n.create(3.0, 4.0))
    assert n == pytest.approx([0.6, 0.8])
    assert vec2n.normalize(vec2n.create(0.0, 0.0)) == [0.0, 0.0]
    assert vec2n.normalize(vec2n.create(1e-6, 0.0)) == [0.0, 0.0]


def test_normalize_in_place() -> None:
    """Checks normalize handles dst aliasing its input."""
    v: NDArray[np.float64] = vec2.create(0.0, 2.0)
    assert vec2.normalize(v, v) is v
    assert list(v) == [0.0, 1.0]


def test_cross_returns_three_slots() -> None:
    """Checks the 2D cross product lands on the z axis."""
    result: NDArray[np.float64] = vec2.cross(
        vec2.create(1.0, 0.0), vec2.create(0.0, 1.0)
    )
    assert len(result) == 3
    assert list(result) == [0.0, 0.0, 1.0]


def test_angle() -> None:
    """Checks the angle between vectors."""
    assert vec2.angle(vec2.create(1.0, 0.0), vec2.create(0.0, 2.0)) == pytest.approx(
        math.pi / 2.0
    )
    assert vec2.angle(vec2.create(1.0, 1.0), vec2.create(2.0, 2.0)) == pytest.approx(
        0.0, abs=1e-7
    )
    assert vec2.angle(vec2.create(0.0, 0.0), vec2.create(1.0, 0.0)) == pytest.approx(
        math.pi / 2.0
    )


def test_equality() -> None:
    """Checks exact and approximate comparisons."""
    a: NDArray[np.float64] = vec2.create(1.0, 2.0)
    b: NDArray[np.float64] = vec2.create(1.0 + 1e-7, 2.0)
    assert vec2.equals_approximately(a, b)
    assert not vec2.equals(a, b)
    assert vec2.equals(a, vec2.clone(a))
    assert not vec2.equals_approximately(a, vec2.create(1.0 + 1e-5, 2.0))
    assert isinstance(vec2.equals(a, b), bool)


def test_lerp_v_and_midpoint() -> None:
    """Checks per-component interpolation and midpoints."""
    a: NumberArray = vec2n.create(0.0, 10.0)
    b: NumberArray = vec2n.create(10.0, 20.0)
    assert vec2n.lerp_v(a, b, vec2n.create(0.5, 2.0)) == [5.0, 30.0]
    assert vec2n.midpoint(a, b) == [5.0, 15.0]


def test_transform_mat3_and_mat4() -> None:
    """Checks transforms apply translation."""
    v: NumberArray = vec2n.create(1.0, 2.0)
    m3: NumberArray = [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 5.0, 6.0, 1.0, 0.0]
    assert vec2n.transform_mat3(v, m3) == [6.0, 8.0]

    m4: NumberArray = [0.0] * 16
    m4[0] = 2.0
    m4[5] = 3.0
    m4[10] = 1.0
    m4[12] = 1.0
    m4[13] = -1.0
    m4[15] = 1.0
    assert vec2n.transform_mat4(v, m4) == [3.0, 5.0]


def test_rotate_about_origin_point() -> None:
    """Checks rotation around a point other than the origin."""
    result: NumberArray = vec2n.rotate(
        vec2n.create(2.0, 1.0), vec2n.create(1.0, 1.0), math.pi / 2.0
    )
    assert result == pytest.approx([1.0, 2.0])


def test_set_length_and_truncate() -> None:
    """Checks length adjustments."""
    v: NumberArray = vec2n.create(3.0, 4.0)
    assert vec2n.set_length(v, 10.0) == pytest.approx([6.0, 8.0])
    assert vec2n.truncate(v, 2.5) == pytest.approx([1.5, 2.0])
    assert vec2n.truncate(v, 6.0) == [3.0, 4.0]


def test_random_has_requested_length() -> None:
    """Checks random vectors have the requested scale."""
    v: NDArray[np.float64] = vec2.random(2.0)
    assert vec2.length(v) == pytest.approx(2.0)
    assert vec2.zero(v) is v
    assert list(v) == [0.0, 0.0]


def test_float32_storage() -> None:
    """Checks the float32 API allocates float32 arrays."""
    vec2f: Vec2Api = get_api("float32")
    v: NDArray[np.float32] = vec2f.add(vec2f.create(1.0, 2.0), vec2f.create(3.0, 4.0))
    assert v.dtype == np.float32
    assert np.allclose(v, [4.0, 6.0])
